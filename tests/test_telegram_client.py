#!/usr/bin/env python
# tests/test_telegram_client.py

import os
import sys
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

import requests

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from energy_migration.adapters.telegram.client import ParseMode, TelegramClient
from energy_migration.adapters.telegram.messages import (
    format_energy_alert,
    format_utc_timestamp,
    format_welcome_message,
)


def _response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


class TestTelegramClient(unittest.TestCase):
    """Test cases for the Bot API HTTP client."""

    def setUp(self):
        self.session = MagicMock()
        self.session.post.return_value = _response({"ok": True, "result": {}})
        self.client = TelegramClient("TOKEN", api_base="https://api.example.org/", timeout=7, session=self.session)

    def test_send_message_html(self):
        self.assertTrue(self.client.send_message(111, "<b>hi</b>"))

        self.session.post.assert_called_once_with(
            "https://api.example.org/botTOKEN/sendMessage",
            json={"chat_id": 111, "text": "<b>hi</b>", "parse_mode": "HTML"},
            timeout=7
        )

    def test_plain_mode_omits_parse_mode(self):
        self.client.send_message(111, "hi", ParseMode.PLAIN)
        payload = self.session.post.call_args.kwargs["json"]
        self.assertNotIn("parse_mode", payload)

    def test_markdown_mode(self):
        self.client.send_message(111, "*hi*", ParseMode.MARKDOWN)
        self.assertEqual(self.session.post.call_args.kwargs["json"]["parse_mode"], "Markdown")

    def test_rejected_message_returns_false(self):
        self.session.post.return_value = _response({"ok": False, "description": "chat not found"})
        self.assertFalse(self.client.send_message(111, "hi"))

    def test_network_errors_return_false(self):
        for error in (requests.exceptions.Timeout("slow"), requests.exceptions.ConnectionError("down")):
            with self.subTest(error=type(error).__name__):
                self.session.post.side_effect = error
                self.assertFalse(self.client.send_message(111, "hi"))

    def test_invalid_json_returns_false(self):
        self.session.post.return_value.json.side_effect = ValueError("not json")
        self.assertFalse(self.client.send_message(111, "hi"))

    def test_missing_token_skips_request(self):
        client = TelegramClient("", session=self.session)
        self.assertFalse(client.send_message(111, "hi"))
        self.assertIsNone(client.get_updates())
        self.session.post.assert_not_called()
        self.session.get.assert_not_called()

    def test_send_energy_alert_uses_html(self):
        now = datetime(2026, 10, 19, 15, 4, tzinfo=timezone.utc)
        self.assertTrue(self.client.send_energy_alert(111, "Kettle", 1250.5, 1000, now=now))

        payload = self.session.post.call_args.kwargs["json"]
        self.assertEqual(payload["parse_mode"], "HTML")
        self.assertEqual(payload["text"], format_energy_alert("Kettle", 1250.5, 1000, now=now))

    def test_get_updates_with_offset(self):
        self.session.get.return_value = _response({"ok": True, "result": [{"update_id": 43}]})

        updates = self.client.get_updates(offset=43, timeout=30)

        self.assertEqual(updates, [{"update_id": 43}])
        self.session.get.assert_called_once_with(
            "https://api.example.org/botTOKEN/getUpdates",
            params={"timeout": 30, "offset": 43},
            timeout=37
        )

    def test_get_updates_without_offset(self):
        self.session.get.return_value = _response({"ok": True, "result": []})
        self.assertEqual(self.client.get_updates(), [])
        self.assertNotIn("offset", self.session.get.call_args.kwargs["params"])

    def test_get_updates_errors_return_none(self):
        self.session.get.return_value = _response({"ok": False, "description": "Conflict"})
        self.assertIsNone(self.client.get_updates())

        self.session.get.side_effect = requests.exceptions.ConnectionError("down")
        self.assertIsNone(self.client.get_updates())


class TestMessages(unittest.TestCase):

    def test_alert_content(self):
        now = datetime(2026, 10, 19, 15, 4, tzinfo=timezone.utc)
        message = format_energy_alert("Kitchen kettle", 1250.5, 1000, now=now)

        self.assertIn("Energy Limit Exceeded", message)
        self.assertIn("Device: <b>Kitchen kettle</b>", message)
        self.assertIn("Current: <b>1250.50 kWh</b>", message)
        self.assertIn("Limit: <b>1000.00 kWh</b>", message)
        self.assertIn("Over by: <b>250.50 kWh</b>", message)
        self.assertIn("Time: Oct 19, 2026, 3:04 PM UTC", message)

    def test_device_name_is_escaped(self):
        message = format_energy_alert("<Lab & co>", 2, 1)
        self.assertIn("&lt;Lab &amp; co&gt;", message)

    def test_timestamp_format(self):
        self.assertEqual(
            format_utc_timestamp(datetime(2026, 1, 5, 0, 7, tzinfo=timezone.utc)),
            "Jan 5, 2026, 12:07 AM"
        )

    def test_welcome_greeting(self):
        self.assertTrue(format_welcome_message("Bob").startswith("Hi Bob!"))
        self.assertTrue(format_welcome_message(None).startswith("Hi there!"))


if __name__ == '__main__':
    unittest.main()
