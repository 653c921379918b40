"""Allocation of participants to surfaces for one round.

Two planners decide who plays: a flat planner that rotates a window over the
whole cohort, and a grouped planner for large cohorts that are split once
into fixed groups, two of which play each round. ``build_matches`` then turns
teammate pairs into surface assignments.
"""

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

import random
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, Generic, List, Sequence, Tuple, TypeVar

from courtpairing.constants import DEFAULT_GROUP_COUNT, PLAYERS_PER_SURFACE
from courtpairing.models.tournament.match import Match, Pair
from courtpairing.type_hints import PairList, ParticipantId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


@dataclass
class Allocation(Generic[T]):
    """Who plays and who waits in a round."""

    playing: List[T] = field(default_factory=list)
    waiting: List[T] = field(default_factory=list)


def surface_capacity(surface_count: int) -> int:
    """Number of participants the surfaces hold at once."""
    return surface_count * PLAYERS_PER_SURFACE


def plan_flat(
    participants: Sequence[T], surface_count: int, round_number: int
) -> Allocation[T]:
    """Choose the players of a round from the whole cohort.

    When the cohort fits on the surfaces everyone plays. Otherwise a window
    of ``capacity`` participants is taken from the cohort rotated by
    ``((round_number - 1) * capacity) % len(participants)``, wrapping around
    the end, so that everyone cycles through waiting over the rounds.
    """
    if surface_count < 1:
        raise ValueError(f"Surface count must be at least 1, got {surface_count}")
    if round_number < 1:
        raise ValueError(f"Round numbers start at 1, got {round_number}")

    pool = list(participants)
    capacity = surface_capacity(surface_count)
    if len(pool) <= capacity:
        return Allocation(playing=pool, waiting=[])

    offset = ((round_number - 1) * capacity) % len(pool)
    rotated = pool[offset:] + pool[:offset]
    return Allocation(playing=rotated[:capacity], waiting=rotated[capacity:])


# ========== Grouped mode ==========


def partition_groups(
    participant_ids: Sequence[ParticipantId],
    rng: random.Random,
    group_count: int = DEFAULT_GROUP_COUNT,
) -> List[List[ParticipantId]]:
    """Split the cohort once, by a single shuffle, into ``group_count`` groups.

    Groups are equal sized when the cohort divides evenly; otherwise the last
    group takes the remainder.
    """
    if group_count < 2:
        raise ValueError(f"Grouped mode needs at least 2 groups, got {group_count}")

    shuffled = list(participant_ids)
    rng.shuffle(shuffled)
    size = len(shuffled) // group_count
    groups = [shuffled[i * size : (i + 1) * size] for i in range(group_count - 1)]
    groups.append(shuffled[(group_count - 1) * size :])

    logger.info(
        "Partitioned %s participants into groups of %s",
        len(shuffled),
        [len(g) for g in groups],
    )
    return groups


def groups_for_round(
    round_number: int, group_count: int = DEFAULT_GROUP_COUNT
) -> Tuple[int, int]:
    """Indices of the two groups that play ``round_number``.

    With three groups the rotation is A+B, A+C, B+C, repeating.
    """
    schedule = list(combinations(range(group_count), 2))
    return schedule[(round_number - 1) % len(schedule)]


def plan_grouped(
    participants: Sequence[T],
    groups: Sequence[Sequence[ParticipantId]],
    surface_count: int,
    round_number: int,
    flatten_when_oversubscribed: bool = False,
) -> Allocation[T]:
    """Choose the players of a round from the two groups on rotation.

    The union of the selected groups is planned like a flat cohort. If the
    surfaces hold more than that union, the union plays in full and the extra
    surfaces stay idle, unless ``flatten_when_oversubscribed`` is set, in
    which case the whole cohort is planned in flat mode instead.
    """
    by_id: Dict[ParticipantId, T] = {p.id: p for p in participants}
    first, second = groups_for_round(round_number, len(groups))
    candidates = [by_id[pid] for pid in list(groups[first]) + list(groups[second])]

    if surface_capacity(surface_count) > len(candidates):
        if flatten_when_oversubscribed:
            logger.warning(
                f"Round {round_number}: {surface_count} surfaces exceed groups "
                f"{first + 1} and {second + 1}; planning the whole cohort instead"
            )
            return plan_flat(participants, surface_count, round_number)
        logger.warning(
            f"Round {round_number}: {surface_count} surfaces exceed the "
            f"{len(candidates)} participants of the playing groups; "
            "some surfaces stay idle"
        )

    allocation = plan_flat(candidates, surface_count, round_number)
    playing_ids = {p.id for p in allocation.playing}
    waiting = [p for p in participants if p.id not in playing_ids]
    return Allocation(playing=allocation.playing, waiting=waiting)


# ========== Match construction ==========


def build_matches(pairings: PairList, surface_count: int) -> List[Match]:
    """Group consecutive pairs into matches and assign surfaces round-robin.

    Pairs 1 and 2 form match 1, pairs 3 and 4 match 2, and so on. Match ``i``
    (0-based) is played on surface ``(i % surface_count) + 1``. A trailing
    pair without an opponent is not placed.
    """
    pairs = [
        Pair(pair_id=index + 1, first_id=first, second_id=second)
        for index, (first, second) in enumerate(pairings)
    ]
    if len(pairs) % 2:
        logger.warning(f"Pair {pairs[-1].pair_id} has no opponent and is not placed")

    matches = []
    for index in range(len(pairs) // 2):
        matches.append(
            Match(
                match_id=index + 1,
                surface=(index % surface_count) + 1,
                team_a=pairs[2 * index],
                team_b=pairs[2 * index + 1],
            )
        )
    return matches
