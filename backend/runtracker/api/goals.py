from fastapi import APIRouter, Depends, HTTPException

from runtracker.auth import get_current_user_id
from runtracker.schemas.goal import GoalCreate, GoalRead, GoalUpdate, RecalculationResult
from runtracker.services.progress import recalculate_and_persist
from runtracker.storage.base import Storage
from runtracker.storage.factory import get_storage


router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=list[GoalRead])
def list_goals(
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    return storage.list_goals(user_id)


@router.post("", response_model=GoalRead, status_code=201)
def create_goal(
    payload: GoalCreate,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    # Starts at 0 / active; progress catches up on the next recalculation
    return storage.insert_goal(user_id, payload.model_dump())


# Declared before /{goal_id} so "recalculate" is never read as an id
@router.post("/recalculate", response_model=RecalculationResult)
def recalculate_goals(
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    """Recompute progress for every goal that is not paused."""
    summary = recalculate_and_persist(storage, user_id)
    return RecalculationResult(
        message="Goal progress recalculated",
        processed=summary.processed,
        updated=summary.updated,
        skipped_paused=summary.skipped_paused,
        completed=summary.completed,
    )


@router.get("/{goal_id}", response_model=GoalRead)
def get_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    goal = storage.get_goal(user_id, goal_id)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.put("/{goal_id}", response_model=GoalRead)
def update_goal(
    goal_id: str,
    payload: GoalUpdate,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    existing = storage.get_goal(user_id, goal_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Goal not found")

    update_data = {
        k: v for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None
    }
    if not update_data:
        return existing

    start = update_data.get("start_date", existing.start_date)
    deadline = update_data.get("deadline", existing.deadline)
    if start > deadline:
        raise HTTPException(status_code=422, detail="start_date must be on or before deadline")

    goal = storage.update_goal(user_id, goal_id, update_data)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.delete("/{goal_id}")
def delete_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_goal(user_id, goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"message": "Goal deleted", "id": goal_id}
