from debatedraw.models.draw import DrawRoom, PersistableDraw, composition_key
from debatedraw.models.draw_options import DrawMethod, DrawOptions
from debatedraw.models.history import PairingMemo, PositionHistory, PositionHistoryBook
from debatedraw.models.team import ExperienceLevel, Judge, Team

__all__ = [
    "DrawRoom",
    "PersistableDraw",
    "composition_key",
    "DrawMethod",
    "DrawOptions",
    "PairingMemo",
    "PositionHistory",
    "PositionHistoryBook",
    "ExperienceLevel",
    "Judge",
    "Team",
]
