"""Standings derived from participant points and round history."""

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
from typing import Any, Dict, Iterable, List, Sequence

from courtpairing.constants import DEFAULT_SCORING_RULE
from courtpairing.models.participant import Participant
from courtpairing.models.tournament.round_data import RoundData
from courtpairing.type_hints import ParticipantId

from .result_recorder import points_for_result


@dataclass(frozen=True)
class Standing:
    """One row of the standings table."""

    position: int
    participant: Participant
    points: int
    matches_played: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "id": self.participant.id,
            "name": self.participant.name,
            "points": self.points,
            "matches_played": self.matches_played,
        }


class StandingsCalculator:
    """Computes standings and per-participant statistics.

    Points are read from the participants; the round history only provides
    the count of matches played (matches with a result).
    """

    def matches_played(
        self, participant_id: ParticipantId, rounds: Iterable[RoundData]
    ) -> int:
        """Count scored matches in which the participant played."""
        return sum(
            1
            for round_data in rounds
            for match in round_data.matches
            if match.has_result and match.involves(participant_id)
        )

    def matches_played_by_id(
        self, rounds: Iterable[RoundData]
    ) -> Dict[ParticipantId, int]:
        counts: Dict[ParticipantId, int] = {}
        for round_data in rounds:
            for match in round_data.matches:
                if not match.has_result:
                    continue
                for pid in match.participant_ids:
                    counts[pid] = counts.get(pid, 0) + 1
        return counts

    def standings(
        self, participants: Sequence[Participant], rounds: Iterable[RoundData]
    ) -> List[Standing]:
        """Participants by points, highest first.

        The sort is stable, so participants level on points keep their
        creation order.
        """
        played = self.matches_played_by_id(rounds)
        ordered = sorted(participants, key=lambda p: p.points, reverse=True)
        return [
            Standing(
                position=index + 1,
                participant=participant,
                points=participant.points,
                matches_played=played.get(participant.id, 0),
            )
            for index, participant in enumerate(ordered)
        ]

    def recount_points(
        self,
        participants: Sequence[Participant],
        rounds: Iterable[RoundData],
        scoring_rule: str = DEFAULT_SCORING_RULE,
    ) -> Dict[ParticipantId, int]:
        """Points every participant would have from the recorded results alone.

        Used to audit the running totals, never to replace them.
        """
        totals = {p.id: 0 for p in participants}
        for round_data in rounds:
            for match in round_data.matches:
                if match.result is None:
                    continue
                points_a, points_b = points_for_result(match.result, scoring_rule)
                for pid in match.team_a.member_ids:
                    totals[pid] = totals.get(pid, 0) + points_a
                for pid in match.team_b.member_ids:
                    totals[pid] = totals.get(pid, 0) + points_b
        return totals
