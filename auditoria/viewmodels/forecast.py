"""销售预测视图模型。"""
from typing import Optional

from PyQt6.QtCore import QObject

from auditoria.config import FORECAST_DAYS
from auditoria.forecast.models import ForecastResponse
from auditoria.forecast.service import ForecastService
from auditoria.viewmodels.base import ViewModel
from auditoria.viewmodels.worker import Runner


class ForecastViewModel(ViewModel):
    def __init__(self, service: ForecastService, runner: Optional[Runner] = None, parent: Optional[QObject] = None):
        super().__init__(service.client, runner, parent)
        self.service = service
        self.forecast: Optional[ForecastResponse] = None

    def fetch(self, file_id: int, n_days: int = FORECAST_DAYS) -> None:
        self.run(lambda: self.service.fetch(file_id, n_days), self._apply)

    def _apply(self, forecast: ForecastResponse) -> None:
        self.forecast = forecast

    def reset(self) -> None:
        self.forecast = None
