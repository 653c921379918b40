"""Pairs and matches of a doubles round."""

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
from typing import Any, Dict, Optional, Tuple

from courtpairing.type_hints import PairIds, ParticipantId, PartnershipKey

from .match_result import MatchResult


@dataclass(frozen=True)
class Pair:
    """Two teammates, held by participant id only.

    Attributes
    ----------
    pair_id : int
        Identifier unique within the round the pair was created in.
    first_id : int
    second_id : int
    """

    pair_id: int
    first_id: ParticipantId
    second_id: ParticipantId

    def __post_init__(self) -> None:
        if self.first_id == self.second_id:
            raise ValueError(
                f"A pair needs two distinct participants, got {self.first_id} twice"
            )

    @property
    def member_ids(self) -> PairIds:
        return self.first_id, self.second_id

    @property
    def key(self) -> PartnershipKey:
        """Unordered partnership key used by the partnership ledger."""
        return frozenset(self.member_ids)

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self.member_ids

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.pair_id, "players": list(self.member_ids)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pair":
        first, second = data["players"]
        return cls(pair_id=int(data["id"]), first_id=int(first), second_id=int(second))


@dataclass
class Match:
    """One game between two pairs on one surface.

    Surface, pairs and identifier are fixed at creation; only ``result``
    changes, and only through the result recorder.

    Attributes
    ----------
    match_id : int
        Identifier unique within the round (1-based, in court order).
    surface : int
        Surface number, ``1..surface_count``.
    team_a : Pair
    team_b : Pair
    result : MatchResult or None
        None until a score is reported.
    """

    match_id: int
    surface: int
    team_a: Pair
    team_b: Pair
    result: Optional[MatchResult] = None

    @property
    def has_result(self) -> bool:
        return self.result is not None

    @property
    def pairs(self) -> Tuple[Pair, Pair]:
        return self.team_a, self.team_b

    @property
    def participant_ids(self) -> Tuple[ParticipantId, ...]:
        return self.team_a.member_ids + self.team_b.member_ids

    def involves(self, participant_id: ParticipantId) -> bool:
        """Check if a participant plays in this match on either side."""
        return participant_id in self.team_a or participant_id in self.team_b

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.match_id,
            "surface": self.surface,
            "team_a": self.team_a.to_dict(),
            "team_b": self.team_b.to_dict(),
            "result": self.result.to_dict() if self.result else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        result = data.get("result")
        return cls(
            match_id=int(data["id"]),
            surface=int(data["surface"]),
            team_a=Pair.from_dict(data["team_a"]),
            team_b=Pair.from_dict(data["team_b"]),
            result=MatchResult.from_dict(result) if result else None,
        )
