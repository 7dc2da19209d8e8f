"""销售预测。"""
from auditoria.forecast.models import (
    DayPrediction,
    ForecastRequest,
    ForecastResponse,
    ForecastSummary,
    KeyMetric,
    Prediction,
)
from auditoria.forecast.service import ForecastService

__all__ = [
    "DayPrediction",
    "ForecastRequest",
    "ForecastResponse",
    "ForecastSummary",
    "KeyMetric",
    "Prediction",
    "ForecastService",
]
