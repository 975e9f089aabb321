from .evaluator import EnergyAlertEvaluator, latest_reading

__all__ = ["EnergyAlertEvaluator", "latest_reading"]
