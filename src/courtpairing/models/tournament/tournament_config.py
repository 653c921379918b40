"""TournamentConfig data class."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from typing import Any, Dict

from courtpairing.constants import (
    DEFAULT_GROUP_COUNT,
    DEFAULT_GROUPED_THRESHOLD,
    DEFAULT_MAX_SCORE,
    DEFAULT_SCORING_RULE,
    DEFAULT_TOURNAMENT_NAME,
)


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    surface_count : int
        Number of surfaces (courts) available to each round.
    max_score : int
        Highest score a team may report for one match.
    scoring_rule : str
        ``"games"``: every player gains their team's score. ``"match_points"``:
        every winning player gains a fixed bonus, losers gain nothing.
    grouped_threshold : int
        Cohorts of exactly this size are scheduled in grouped mode.
    group_count : int
        Number of fixed groups in grouped mode.
    flatten_groups_when_oversubscribed : bool
        In grouped mode, plan from the whole cohort when the surfaces offer
        more places than the two playing groups can fill.
    shuffle_playing_order : bool
        Shuffle the playing participants before pairing.
    """

    name: str = DEFAULT_TOURNAMENT_NAME
    surface_count: int = 1
    max_score: int = DEFAULT_MAX_SCORE
    scoring_rule: str = DEFAULT_SCORING_RULE
    grouped_threshold: int = DEFAULT_GROUPED_THRESHOLD
    group_count: int = DEFAULT_GROUP_COUNT
    flatten_groups_when_oversubscribed: bool = False
    shuffle_playing_order: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "surface_count": self.surface_count,
            "max_score": self.max_score,
            "scoring_rule": self.scoring_rule,
            "grouped_threshold": self.grouped_threshold,
            "group_count": self.group_count,
            "flatten_groups_when_oversubscribed": (
                self.flatten_groups_when_oversubscribed
            ),
            "shuffle_playing_order": self.shuffle_playing_order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", DEFAULT_TOURNAMENT_NAME),
            surface_count=data["surface_count"],
            max_score=data.get("max_score", DEFAULT_MAX_SCORE),
            scoring_rule=data.get("scoring_rule", DEFAULT_SCORING_RULE),
            grouped_threshold=data.get("grouped_threshold", DEFAULT_GROUPED_THRESHOLD),
            group_count=data.get("group_count", DEFAULT_GROUP_COUNT),
            flatten_groups_when_oversubscribed=data.get(
                "flatten_groups_when_oversubscribed", False
            ),
            shuffle_playing_order=data.get("shuffle_playing_order", True),
        )
