"""销售预测请求与响应模型（字段名与后端一致）。"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from auditoria.config import FORECAST_DAYS, FORECAST_LEVEL


class ForecastRequest(BaseModel):
    file_id: int = Field(..., alias="fileId")
    level: Optional[str] = FORECAST_LEVEL
    n_days: int = Field(FORECAST_DAYS, gt=0)

    model_config = ConfigDict(populate_by_name=True)


class DayPrediction(BaseModel):
    date: str
    predicted_sales: float
    day_of_week: str


class KeyMetric(BaseModel):
    name: str
    value: float
    unit: str
    description: str


class Prediction(BaseModel):
    date: str
    day_of_week: str
    predicted_sales: float


class ForecastSummary(BaseModel):
    period: str
    trend: str
    avg_daily_sales: float
    total_predicted_sales: float
    best_day: DayPrediction
    worst_day: DayPrediction
    key_metrics: List[KeyMetric] = Field(default_factory=list)


class ForecastResponse(BaseModel):
    status: str
    message: str
    summary: ForecastSummary
    predictions: List[Prediction]

    model_config = ConfigDict(extra="ignore")
