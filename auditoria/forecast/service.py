"""销售预测接口。"""
import logging
from typing import Optional

from auditoria.api.client import ApiClient, decode
from auditoria.config import FORECAST_DAYS, FORECAST_LEVEL
from auditoria.forecast.models import ForecastRequest, ForecastResponse

logger = logging.getLogger(__name__)

FORECAST_PATH = "/api/ai/forecast/"


class ForecastService:
    def __init__(self, client: ApiClient):
        self.client = client

    def fetch(self, file_id: int, n_days: int = FORECAST_DAYS, level: Optional[str] = FORECAST_LEVEL) -> ForecastResponse:
        """请求某个销售数据文件未来 n_days 天的预测。"""
        body = ForecastRequest(file_id=file_id, level=level, n_days=n_days).model_dump(by_alias=True)
        forecast = decode(ForecastResponse, self.client.post_json(FORECAST_PATH, body))
        logger.info("[AuditorIA-预测] 文件 %s: %d 条预测", file_id, len(forecast.predictions))
        return forecast
