"""
Built-in BJJ vocabularies.

- :data:`POINT_POSITIONS`: IBJJF point values per :class:`PositionKind`.
- :data:`BOTTOM_GUARDS`: guards you can sweep *from*.
- :data:`TOP_POSITIONS`: positions an opponent can sweep you from.
- :data:`SUBMISSIONS`: submission techniques grouped by family.

The guard and technique lists feed the pickers; they are not a closed
set.  Sweeps and submissions with labels outside the catalog are valid.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from app.schemas.events import PositionKind


class PositionInfo(BaseModel):
    """Display name, point value and category of a scoring position."""

    model_config = ConfigDict(frozen=True)

    name: str
    points: int
    category: str


# ======================================================================
# IBJJF point table
# ======================================================================

POINT_POSITIONS: dict[PositionKind, PositionInfo] = {
    # 4 points - dominant positions
    PositionKind.MOUNT: PositionInfo(name="Mount", points=4, category="dominant"),
    PositionKind.BACK_CONTROL: PositionInfo(name="Back Control", points=4, category="dominant"),
    # 3 points - guard pass
    PositionKind.GUARD_PASS: PositionInfo(name="Guard Pass", points=3, category="pass"),
    # 2 points - control and transitions
    PositionKind.KNEE_ON_BELLY: PositionInfo(name="Knee on Belly", points=2, category="control"),
    PositionKind.TAKEDOWN: PositionInfo(name="Takedown", points=2, category="takedown"),
    # reference only, scored through sweep events
    PositionKind.SWEEP: PositionInfo(name="Sweep", points=2, category="sweep"),
}


def get_position(kind: PositionKind) -> PositionInfo:
    """Look up a scoring position.  Every :class:`PositionKind` is present."""
    return POINT_POSITIONS[kind]


# ======================================================================
# Guards
# ======================================================================

BOTTOM_GUARDS: tuple[str, ...] = (
    "Closed Guard",
    "Open Guard",
    "Half Guard",
    "Deep Half Guard",
    "X Guard",
    "Single Leg X",
    "De La Riva",
    "Reverse De La Riva",
    "Spider Guard",
    "Lasso Guard",
    "Butterfly Guard",
    "50/50",
    "K Guard",
    "Worm Guard",
    "Lapel Guard",
    "Rubber Guard",
    "Other Guard",
)

TOP_POSITIONS: tuple[str, ...] = (
    "In Their Closed Guard",
    "In Their Open Guard",
    "In Their Half Guard",
    "In Their Deep Half",
    "Side Control",
    "Mount",
    "Back Control",
    "Knee on Belly",
    "Turtle Position",
    "Standing",
    "Other Position",
)


# ======================================================================
# Submissions
# ======================================================================

SUBMISSIONS: dict[str, list[tuple[str, str]]] = {
    "Chokes": [
        ("rnc", "Rear Naked Choke"),
        ("triangle", "Triangle Choke"),
        ("guillotine", "Guillotine"),
        ("arm_triangle", "Arm Triangle"),
        ("bow_arrow", "Bow and Arrow"),
        ("cross_collar", "Cross Collar Choke"),
        ("ezekiel", "Ezekiel Choke"),
        ("north_south", "North South Choke"),
        ("darce", "D'Arce Choke"),
        ("anaconda", "Anaconda Choke"),
        ("baseball", "Baseball Bat Choke"),
        ("loop", "Loop Choke"),
    ],
    "Arm Locks": [
        ("armbar", "Armbar"),
        ("kimura", "Kimura"),
        ("americana", "Americana"),
        ("omoplata", "Omoplata"),
        ("wristlock", "Wristlock"),
    ],
    "Leg Locks": [
        ("heel_hook", "Heel Hook"),
        ("kneebar", "Kneebar"),
        ("toe_hold", "Toe Hold"),
        ("straight_ankle", "Straight Ankle Lock"),
        ("calf_slicer", "Calf Slicer"),
        ("estima", "Estima Lock"),
    ],
    "Other": [
        ("neck_crank", "Neck Crank"),
        ("twister", "Twister"),
        ("gogoplata", "Gogoplata"),
    ],
}


def technique_names() -> list[str]:
    """All catalog technique names, in family order."""
    return [name for entries in SUBMISSIONS.values() for _, name in entries]
