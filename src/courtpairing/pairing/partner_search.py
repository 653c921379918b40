"""Partner search: split a pool of participants into doubles teams."""

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

from typing import List, Optional, Sequence, Set

from courtpairing.models.tournament.partnership_ledger import PartnershipLedger
from courtpairing.type_hints import PairList, ParticipantId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def _check_pool(pool: Sequence[ParticipantId]) -> None:
    if len(pool) % 2:
        raise ValueError(
            f"Cannot split {len(pool)} participants into pairs; "
            "exclude one participant before pairing"
        )
    if len(set(pool)) != len(pool):
        raise ValueError(f"Participant pool contains duplicate ids: {list(pool)}")


def sequential_pairings(pool: Sequence[ParticipantId]) -> PairList:
    """Pair neighbours in pool order: 0 with 1, 2 with 3, and so on."""
    _check_pool(pool)
    return [(pool[i], pool[i + 1]) for i in range(0, len(pool), 2)]


def _search_fresh_pairings(
    pool: Sequence[ParticipantId], ledger: PartnershipLedger
) -> Optional[PairList]:
    """
    Depth-first search for a pairing without any repeat partnership.

    The first unpaired participant (in pool order) is tried with every later
    unpaired participant in pool order, so the pairing returned is the
    leftmost one the search meets, not an optimum.

    Remaining sets are bitmasks over pool positions. A set that has been
    proven unpairable is remembered, which keeps the search practical for
    the largest cohorts without changing which pairing is found first.
    """
    size = len(pool)
    blocked = [
        [ledger.have_partnered(pool[i], pool[j]) for j in range(size)]
        for i in range(size)
    ]
    dead_ends: Set[int] = set()
    chosen: PairList = []

    def backtrack(remaining: int) -> bool:
        if remaining == 0:
            return True
        if remaining in dead_ends:
            return False

        first = (remaining & -remaining).bit_length() - 1
        rest = remaining & ~(1 << first)
        for partner in range(first + 1, size):
            if not rest >> partner & 1 or blocked[first][partner]:
                continue
            chosen.append((pool[first], pool[partner]))
            if backtrack(rest & ~(1 << partner)):
                return True
            chosen.pop()

        dead_ends.add(remaining)
        return False

    if backtrack((1 << size) - 1):
        return chosen
    return None


def create_partner_pairings(
    pool: Sequence[ParticipantId], ledger: Optional[PartnershipLedger] = None
) -> PairList:
    """Split ``pool`` into teammate pairs, avoiding earlier partnerships.

    Parameters
    ----------
    pool : sequence of int
        Participant ids to pair; must be of even length without duplicates.
        The order of the pool is the candidate order of the search.
    ledger : PartnershipLedger, optional
        Earlier partnerships. Without one every pairing is fresh.

    Returns
    -------
    list of tuple of int
        Every id of ``pool`` exactly once. When no pairing free of repeats
        exists, neighbours in pool order are paired instead.

    Raises
    ------
    ValueError
        If the pool has odd length or repeats an id.
    """
    _check_pool(pool)
    if not pool:
        return []

    ledger = ledger if ledger is not None else PartnershipLedger()
    pairings = _search_fresh_pairings(pool, ledger)
    if pairings is not None:
        logger.debug(f"Found fresh pairing for {len(pool)} participants")
        return pairings

    logger.warning(
        f"No pairing without repeat partners exists for {len(pool)} participants; "
        "falling back to sequential pairing"
    )
    return sequential_pairings(pool)
