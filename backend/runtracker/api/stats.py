from fastapi import APIRouter, Depends

from runtracker.auth import get_current_user_id
from runtracker.core.config import settings
from runtracker.schemas.stats import StatsRead
from runtracker.services.stats import build_stats
from runtracker.storage.base import Storage
from runtracker.storage.factory import get_storage

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsRead)
def get_stats(
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    """
    Totals, bests, goal status counts, the last week by day and the last
    year by month.
    """
    return build_stats(
        storage.list_activities(user_id),
        storage.list_goals(user_id),
        recent_days=settings.recent_days,
        monthly_window=settings.monthly_window_months,
    )
