"""A tournament participant."""

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

from courtpairing.type_hints import ParticipantId


@dataclass
class Participant:
    """Represents one entrant of a doubles tournament.

    The identifier is assigned at tournament creation and never reused. It is
    the only thing a :class:`~courtpairing.models.tournament.match.Pair`
    stores about a participant; names and points are always read from the
    tournament's participant list.

    Attributes
    ----------
    id : int
        Stable identifier, unique within the tournament.
    name : str
        Display name (non-empty).
    points : int
        Cumulative points. Only the result recorder changes this.
    """

    id: ParticipantId
    name: str
    points: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {"id": self.id, "name": self.name, "points": self.points}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        return cls(
            id=int(data["id"]),
            name=data["name"],
            points=data.get("points", 0),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.points} pts)"
