"""Tournament controllers."""

from courtpairing.controllers.tournament.result_recorder import (
    ResultRecorder,
    points_for_result,
)
from courtpairing.controllers.tournament.round_manager import RoundManager
from courtpairing.controllers.tournament.standings_calculator import (
    Standing,
    StandingsCalculator,
)

__all__ = [
    "ResultRecorder",
    "RoundManager",
    "Standing",
    "StandingsCalculator",
    "points_for_result",
]
