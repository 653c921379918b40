"""Match result data class."""

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
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class MatchResult:
    """Represents the reported score of a single match.

    Attributes
    ----------
    score_a : int
        Games won by team A.
    score_b : int
        Games won by team B.
    """

    score_a: int
    score_b: int

    @property
    def winner(self) -> str:
        """Return ``"a"`` or ``"b"``; ties are rejected before a result exists."""
        return "a" if self.score_a > self.score_b else "b"

    def as_tuple(self) -> Tuple[int, int]:
        return self.score_a, self.score_b

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {"score_a": self.score_a, "score_b": self.score_b}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        return cls(score_a=int(data["score_a"]), score_b=int(data["score_b"]))
