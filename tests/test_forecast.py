"""销售预测测试。"""
import pytest

from auditoria.api.client import ApiClient
from auditoria.errors import DecodeError, Unauthenticated
from auditoria.forecast.service import ForecastService

FORECAST = {
    "status": "success",
    "message": "Predicción generada",
    "summary": {
        "period": "2024-06-01 a 2024-06-07",
        "trend": "upward",
        "avg_daily_sales": 120.5,
        "total_predicted_sales": 843.5,
        "best_day": {"date": "2024-06-07", "predicted_sales": 150.0, "day_of_week": "Friday"},
        "worst_day": {"date": "2024-06-02", "predicted_sales": 90.0, "day_of_week": "Sunday"},
        "key_metrics": [{"name": "growth", "value": 4.2, "unit": "%", "description": "Crecimiento semanal"}],
    },
    "predictions": [
        {"date": "2024-06-01", "day_of_week": "Saturday", "predicted_sales": 110},
        {"date": "2024-06-02", "day_of_week": "Sunday", "predicted_sales": 90.0},
    ],
}


def test_forecast_defaults_and_decode(client: ApiClient, http) -> None:
    client.session.login("t")
    http.add("POST", "/api/ai/forecast/", json_body=FORECAST)
    forecast = ForecastService(client).fetch(112)
    assert http.calls[0].json == {"fileId": 112, "level": "weekly", "n_days": 7}
    assert forecast.summary.best_day.day_of_week == "Friday"
    assert forecast.summary.key_metrics[0].unit == "%"
    assert forecast.predictions[0].predicted_sales == 110.0


def test_forecast_custom_days(client: ApiClient, http) -> None:
    client.session.login("t")
    http.add("POST", "/api/ai/forecast/", json_body=FORECAST)
    ForecastService(client).fetch(112, n_days=30, level="daily")
    assert http.calls[0].json == {"fileId": 112, "level": "daily", "n_days": 30}


def test_forecast_missing_summary(client: ApiClient, http) -> None:
    client.session.login("t")
    http.add("POST", "/api/ai/forecast/", json_body={"status": "error", "message": "sin datos"})
    with pytest.raises(DecodeError):
        ForecastService(client).fetch(1)


def test_forecast_requires_login(client: ApiClient, http) -> None:
    with pytest.raises(Unauthenticated):
        ForecastService(client).fetch(1)
    assert http.calls == []
