from datetime import date as Date

from pydantic import BaseModel


class OverallStats(BaseModel):
    total_runs: int
    total_distance: float
    total_time: int  # minutes
    avg_pace: float
    best_pace: float
    longest_run: float
    longest_duration: int


class DailyPoint(BaseModel):
    date: Date
    runs: int
    distance: float


class MonthlyPoint(BaseModel):
    month: str  # 'YYYY-MM'
    runs: int
    distance: float
    duration: int


class StatsRead(BaseModel):
    overall: OverallStats
    goals: dict[str, int]
    recent: list[DailyPoint]
    monthly: list[MonthlyPoint]
