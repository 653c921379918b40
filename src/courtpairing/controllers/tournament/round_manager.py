"""Round management for tournaments.

This module handles round generation: partnership history, allocation of
participants to surfaces, partner search and match construction.
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
from typing import List, Optional, Sequence

from courtpairing.constants import PLAYERS_PER_SURFACE
from courtpairing.exceptions import RoundNotFoundException
from courtpairing.models.participant import Participant
from courtpairing.models.tournament.partnership_ledger import build_ledger
from courtpairing.models.tournament.round_data import RoundData
from courtpairing.models.tournament.tournament_config import TournamentConfig
from courtpairing.pairing.allocation import (
    Allocation,
    build_matches,
    plan_flat,
    plan_grouped,
)
from courtpairing.pairing.partner_search import create_partner_pairings
from courtpairing.type_hints import ParticipantId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and round generation for tournaments.

    This class is responsible for:
    - Generating rounds from the participant list and round history
    - Tracking round history (rounds are append-only)
    - Answering questions about rounds (waiting participants, completion)

    The random source is injected so callers that need reproducible rounds
    can pass a seeded ``random.Random``.
    """

    def __init__(
        self,
        rounds: Optional[List[RoundData]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.rounds: List[RoundData] = rounds if rounds is not None else []
        self.rng = rng if rng is not None else random.Random()

    @property
    def current_round_number(self) -> int:
        """Number of the latest generated round, or 0 before any round exists."""
        return len(self.rounds)

    def get_round(self, round_number: int) -> Optional[RoundData]:
        """Get data for a specific round.

        Args:
            round_number: The round number (1-indexed)

        Returns:
            RoundData for the specified round, or None if invalid round number
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        return None

    def require_round(self, round_number: int) -> RoundData:
        """Like :meth:`get_round`, but a missing round is an error.

        Raises:
            RoundNotFoundException: If the round has not been generated
        """
        round_data = self.get_round(round_number)
        if round_data is None:
            raise RoundNotFoundException(
                f"Round {round_number} does not exist "
                f"({len(self.rounds)} round(s) generated)"
            )
        return round_data

    # ========== Generation ==========

    def generate_round(
        self,
        participants: Sequence[Participant],
        config: TournamentConfig,
        round_number: int,
        groups: Optional[Sequence[Sequence[ParticipantId]]] = None,
    ) -> RoundData:
        """Build round ``round_number`` without storing it.

        Args:
            participants: The whole cohort, in creation order
            config: Tournament configuration (surface count, grouping options)
            round_number: Number of the round to build (1-indexed)
            groups: Fixed group partition for grouped mode, or None for flat mode

        Returns:
            A new RoundData whose matches have no results
        """
        if round_number < 1:
            raise ValueError(f"Round numbers start at 1, got {round_number}")

        ledger = build_ledger(r for r in self.rounds if r.round_number < round_number)
        allocation = self._allocate(participants, config, round_number, groups)
        playing = self._fit_to_surfaces(allocation.playing, round_number)

        pool = [p.id for p in playing]
        if config.shuffle_playing_order:
            self.rng.shuffle(pool)

        pairings = create_partner_pairings(pool, ledger)
        matches = build_matches(pairings, config.surface_count)

        logger.debug(
            f"Round {round_number}: {len(matches)} matches, "
            f"{len(participants) - len(pool)} waiting"
        )
        return RoundData(round_number=round_number, matches=matches)

    def create_next_round(
        self,
        participants: Sequence[Participant],
        config: TournamentConfig,
        groups: Optional[Sequence[Sequence[ParticipantId]]] = None,
    ) -> RoundData:
        """Generate the round after the latest one and append it."""
        round_number = self.current_round_number + 1
        round_data = self.generate_round(participants, config, round_number, groups)
        self.rounds.append(round_data)
        logger.info(
            f"Created round {round_number} with {len(round_data.matches)} matches"
        )
        return round_data

    def _allocate(
        self,
        participants: Sequence[Participant],
        config: TournamentConfig,
        round_number: int,
        groups: Optional[Sequence[Sequence[ParticipantId]]],
    ) -> Allocation[Participant]:
        if groups:
            return plan_grouped(
                participants,
                groups,
                config.surface_count,
                round_number,
                config.flatten_groups_when_oversubscribed,
            )
        return plan_flat(participants, config.surface_count, round_number)

    def _fit_to_surfaces(
        self, playing: List[Participant], round_number: int
    ) -> List[Participant]:
        """Trim the playing list to whole matches of four.

        Only needed when the surface count was not chosen from the admissible
        counts. The participants left out rotate with the round number.
        """
        usable = len(playing) // PLAYERS_PER_SURFACE * PLAYERS_PER_SURFACE
        if usable == len(playing):
            return playing

        logger.warning(
            f"Round {round_number}: {len(playing)} participants do not fill whole "
            f"matches; {len(playing) - usable} will wait"
        )
        if usable == 0:
            return []
        return plan_flat(playing, usable // PLAYERS_PER_SURFACE, round_number).playing

    # ========== Queries ==========

    def waiting_ids(
        self, round_number: int, participants: Sequence[Participant]
    ) -> List[ParticipantId]:
        """Ids of participants not placed in any match of the round."""
        playing = self.require_round(round_number).playing_ids()
        return [p.id for p in participants if p.id not in playing]
