"""
Sparring session endpoints.

Sessions hang off a training log; their submission, sweep and position
events are appended and removed one at a time by list index.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.api.dependencies import get_current_user_id
from app.db.session import get_db
from app.schemas.events import PositionScore, SubmissionEvent, SweepEvent
from app.schemas.training_log import SessionCreate, SessionResponse, SessionUpdate
from app.services.sparring_session_service import SparringSessionService

router = APIRouter()


# ======================================================================
# Sessions
# ======================================================================

@router.get("/logs/{log_id}/sessions", summary="List sessions of a training log.",
            response_model=list[SessionResponse], )
def list_sessions(log_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.list_for_log(user_id, log_id)


@router.post("/logs/{log_id}/sessions", summary="Add a session to a training log.", response_model=SessionResponse,
             status_code=status.HTTP_201_CREATED, )
def add_session(log_id: int, data: SessionCreate, db: Session = Depends(get_db),
                user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.add_session(user_id, log_id, data)


@router.get("/sessions/{session_id}", summary="Get a sparring session.", response_model=SessionResponse, )
def get_session(session_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.get_session(user_id, session_id)


@router.patch("/sessions/{session_id}", summary="Update session details.", response_model=SessionResponse, )
def update_session(session_id: int, data: SessionUpdate, db: Session = Depends(get_db),
                   user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.update_session(user_id, session_id, data)


@router.delete("/sessions/{session_id}", summary="Delete a session and renumber the rest.",
               status_code=status.HTTP_204_NO_CONTENT, )
def delete_session(session_id: int, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    service.delete_session(user_id, session_id)


# ======================================================================
# Events
# ======================================================================

@router.post("/sessions/{session_id}/submissions", summary="Record a submission.", response_model=SessionResponse,
             status_code=status.HTTP_201_CREATED, )
def add_submission(session_id: int, event: SubmissionEvent, db: Session = Depends(get_db),
                   user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.add_submission(user_id, session_id, event)


@router.delete("/sessions/{session_id}/submissions/{index}", summary="Remove a submission by index.",
               response_model=SessionResponse, )
def remove_submission(session_id: int, index: int, db: Session = Depends(get_db),
                      user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.remove_submission(user_id, session_id, index)


@router.post("/sessions/{session_id}/sweeps", summary="Record a sweep.", response_model=SessionResponse,
             status_code=status.HTTP_201_CREATED, )
def add_sweep(session_id: int, event: SweepEvent, db: Session = Depends(get_db),
              user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.add_sweep(user_id, session_id, event)


@router.delete("/sessions/{session_id}/sweeps/{index}", summary="Remove a sweep by index.",
               response_model=SessionResponse, )
def remove_sweep(session_id: int, index: int, db: Session = Depends(get_db),
                 user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.remove_sweep(user_id, session_id, index)


@router.post("/sessions/{session_id}/positions", summary="Record a scoring position.",
             response_model=SessionResponse, status_code=status.HTTP_201_CREATED, )
def add_position(session_id: int, event: PositionScore, db: Session = Depends(get_db),
                 user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.add_position(user_id, session_id, event)


@router.delete("/sessions/{session_id}/positions/{index}", summary="Remove a scoring position by index.",
               response_model=SessionResponse, )
def remove_position(session_id: int, index: int, db: Session = Depends(get_db),
                    user_id: str = Depends(get_current_user_id), ):
    service = SparringSessionService(db)
    return service.remove_position(user_id, session_id, index)
