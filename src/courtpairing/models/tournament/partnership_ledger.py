"""Partnership counts derived from round history."""

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

from collections import Counter
from typing import Iterable, List, Optional, Set

from courtpairing.type_hints import PairIds, ParticipantId, PartnershipKey

from .round_data import RoundData


class PartnershipLedger:
    """
    Counts how often two participants have been teammates.

    The ledger is never stored: build it from the rounds each time pairing
    needs it, so it cannot drift from the round history.

    Attributes
    ----------
    counts : Counter of frozenset of int
        Number of rounds that placed the two ids of the key in one pair.
    """

    def __init__(self, counts: Optional[Counter] = None) -> None:
        self.counts: Counter = counts if counts is not None else Counter()

    @classmethod
    def from_rounds(cls, rounds: Iterable[RoundData]) -> "PartnershipLedger":
        """Build the ledger from every pair of every match in ``rounds``."""
        counts: Counter = Counter()
        for round_data in rounds:
            for match in round_data.matches:
                for pair in match.pairs:
                    counts[pair.key] += 1
        return cls(counts)

    @staticmethod
    def key(first_id: ParticipantId, second_id: ParticipantId) -> PartnershipKey:
        return frozenset((first_id, second_id))

    def count(self, first_id: ParticipantId, second_id: ParticipantId) -> int:
        """How many times the two participants were teammates."""
        return self.counts.get(self.key(first_id, second_id), 0)

    def have_partnered(self, first_id: ParticipantId, second_id: ParticipantId) -> bool:
        """Check if two participants have previously played together."""
        return self.count(first_id, second_id) > 0

    def partners_of(self, participant_id: ParticipantId) -> Set[ParticipantId]:
        """Everyone who has shared a pair with ``participant_id``."""
        partners = set()
        for key in self.counts:
            if participant_id in key:
                partners.update(key - {participant_id})
        return partners

    def repeat_partnerships(self) -> List[PairIds]:
        """Partnerships that occurred more than once, as sorted id tuples."""
        return sorted(
            tuple(sorted(key)) for key, count in self.counts.items() if count > 1
        )

    def __len__(self) -> int:
        return len(self.counts)


def build_ledger(rounds: Iterable[RoundData]) -> PartnershipLedger:
    """Derive the partnership ledger from round history."""
    return PartnershipLedger.from_rounds(rounds)
