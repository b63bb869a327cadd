from fastapi import APIRouter, Depends, HTTPException, Query

from runtracker.auth import get_current_user_id
from runtracker.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from runtracker.schemas.activity import ActivityCreate, ActivityRead, ActivityUpdate
from runtracker.services.progress import recalculate_safely
from runtracker.storage.base import Storage
from runtracker.storage.factory import get_storage

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("", response_model=list[ActivityRead])
def list_activities(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    """
    List activities, most recent first.

    The activity log pages through with:
      GET /activities?limit=50&offset=50
    """
    return storage.list_activities(user_id, limit=limit, offset=offset)


@router.post("", response_model=ActivityRead, status_code=201)
def create_activity(
    payload: ActivityCreate,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    activity = storage.insert_activity(user_id, payload.model_dump())

    # Goals follow the new activity set; a failure here is logged only
    recalculate_safely(storage, user_id)
    return activity


@router.get("/{activity_id}", response_model=ActivityRead)
def get_activity(
    activity_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    activity = storage.get_activity(user_id, activity_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")
    return activity


@router.put("/{activity_id}", response_model=ActivityRead)
def update_activity(
    activity_id: str,
    payload: ActivityUpdate,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    existing = storage.get_activity(user_id, activity_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Activity not found")

    # Only supplied fields overwrite; explicit nulls count as "not supplied"
    update_data = {
        k: v for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None
    }
    if not update_data:
        return existing

    activity = storage.update_activity(user_id, activity_id, update_data)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")

    recalculate_safely(storage, user_id)
    return activity


@router.delete("/{activity_id}")
def delete_activity(
    activity_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_activity(user_id, activity_id):
        raise HTTPException(status_code=404, detail="Activity not found")

    recalculate_safely(storage, user_id)
    return {"message": "Activity deleted", "id": activity_id}
