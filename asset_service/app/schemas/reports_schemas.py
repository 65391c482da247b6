from pydantic import BaseModel
from typing import List


class StatusCount(BaseModel):
    name: str
    value: int


class CategoryCount(BaseModel):
    name: str
    count: int


class DashboardSummary(BaseModel):
    total_assets: int
    utilization_rate: float
    upcoming_expiries: int
    total_value: float
    assets_by_status: List[StatusCount]
    assets_by_category: List[CategoryCount]
