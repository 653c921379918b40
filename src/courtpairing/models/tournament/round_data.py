"""Data model for tournament round."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from courtpairing.type_hints import ParticipantId

from .match import Match


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    A round's matches and pairs are fixed once generated; only the results
    inside its matches change.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    matches : list of Match
        Matches in surface order.
    """

    round_number: int
    matches: List[Match] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        """True when every match has a recorded result."""
        return bool(self.matches) and all(m.has_result for m in self.matches)

    @property
    def pending_matches(self) -> List[Match]:
        return [m for m in self.matches if not m.has_result]

    def get_match(self, match_id: int) -> Optional[Match]:
        """Look up a match by its identifier within this round."""
        for match in self.matches:
            if match.match_id == match_id:
                return match
        return None

    def playing_ids(self) -> Set[ParticipantId]:
        """Ids of everyone placed in a match this round."""
        ids: Set[ParticipantId] = set()
        for match in self.matches:
            ids.update(match.participant_ids)
        return ids

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        return cls(
            round_number=int(data["round_number"]),
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
        )
