"""
Catalog endpoints.

Read-only vocabularies for the session pickers: scoring positions with
their point values, guards and submission techniques.
"""

from fastapi import APIRouter

from app.scoring.catalog import BOTTOM_GUARDS, POINT_POSITIONS, SUBMISSIONS, TOP_POSITIONS, technique_names

router = APIRouter()


@router.get("/positions", summary="Scoring positions and their point values.")
def list_positions():
    return [{"key": kind.value, **info.model_dump()} for kind, info in POINT_POSITIONS.items()]


@router.get("/guards", summary="Guards to sweep from and positions to be swept from.")
def list_guards():
    return {"bottom": list(BOTTOM_GUARDS), "top": list(TOP_POSITIONS)}


@router.get("/submissions", summary="Submission techniques grouped by family.")
def list_submissions():
    return {
        family: [{"id": technique_id, "name": name} for technique_id, name in entries]
        for family, entries in SUBMISSIONS.items()
    }


@router.get("/techniques", summary="All submission technique names, in family order.", response_model=list[str], )
def list_techniques():
    return technique_names()
