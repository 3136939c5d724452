"""
Training log endpoints.

CRUD for training logs.  A log can be created or replaced together with
its sparring sessions.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user_id
from app.db.session import get_db
from app.schemas.training_log import TrainingLogCreate, TrainingLogResponse, TrainingLogUpdate
from app.services.training_log_service import TrainingLogService

router = APIRouter()


@router.post("", summary="Create a training log.", response_model=TrainingLogResponse,
             status_code=status.HTTP_201_CREATED, )
def create_training_log(data: TrainingLogCreate, db: Session = Depends(get_db),
                        user_id: str = Depends(get_current_user_id), ):
    service = TrainingLogService(db)
    return service.create(user_id, data)


@router.get("", summary="List training logs, most recent first.", response_model=list[TrainingLogResponse], )
def list_training_logs(skip: int = Query(0, ge=0, description="Records to skip"),
                       limit: int = Query(100, ge=1, le=500, description="Max records to return"),
                       db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id), ):
    service = TrainingLogService(db)
    return service.list_recent(user_id, skip, limit)


@router.get("/{log_id}", summary="Get a training log.", response_model=TrainingLogResponse, )
def get_training_log(log_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id), ):
    service = TrainingLogService(db)
    return service.get_by_id(user_id, log_id)


@router.patch("/{log_id}", summary="Update a training log.", response_model=TrainingLogResponse, )
def update_training_log(log_id: int, data: TrainingLogUpdate, db: Session = Depends(get_db),
                        user_id: str = Depends(get_current_user_id), ):
    """Only provided fields are changed.  A ``sessions`` list replaces all sessions of the log."""
    service = TrainingLogService(db)
    return service.update(user_id, log_id, data)


@router.delete("/{log_id}", summary="Delete a training log and its sessions.",
               status_code=status.HTTP_204_NO_CONTENT, )
def delete_training_log(log_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id), ):
    service = TrainingLogService(db)
    service.delete(user_id, log_id)
