"""Main Tournament class - orchestrates all tournament operations.

This is the primary interface for hosts, coordinating the round manager, the
result recorder and the standings calculator behind a small API. The host
loads a snapshot, calls one operation, and saves the snapshot again; the
tournament never touches storage itself.
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

import json
import random
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from courtpairing.constants import (
    DEFAULT_MAX_SCORE,
    DEFAULT_SCORING_RULE,
    SCORING_RULES,
)
from courtpairing.controllers.tournament import (
    ResultRecorder,
    RoundManager,
    Standing,
    StandingsCalculator,
)
from courtpairing.exceptions import (
    NoActiveTournamentException,
    ParticipantNotFoundException,
    SnapshotException,
    TournamentSetupException,
    ValidationReason,
)
from courtpairing.models.participant import Participant
from courtpairing.models.tournament import (
    Match,
    PartnershipLedger,
    RoundData,
    TournamentConfig,
    build_ledger,
)
from courtpairing.pairing.allocation import partition_groups
from courtpairing.type_hints import ParticipantId
from courtpairing.utils import setup_logger
from courtpairing.utils.validation import (
    validate_setup_strict,
    validate_surface_count_strict,
)

logger = setup_logger(__name__)

# A match with both teams resolved to the live participant records
Team = Tuple[Participant, Participant]
MatchView = Tuple[Match, Team, Team]


class Tournament:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized managers:
    - RoundManager: generates rounds and keeps the round history
    - ResultRecorder: validates scores and keeps participant points in step
    - StandingsCalculator: orders participants and counts matches played

    The Tournament owns the participant list and the rounds. Matches refer to
    participants by id only, so names and points are always read from here.
    ``active_round`` is a display cursor and never affects the data.
    """

    def __init__(
        self,
        config: TournamentConfig,
        participants: Optional[List[Participant]] = None,
        rounds: Optional[List[RoundData]] = None,
        groups: Optional[List[List[ParticipantId]]] = None,
        active_round: int = 0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.participants: List[Participant] = participants or []
        self.groups: List[List[ParticipantId]] = groups or []
        self.active_round = active_round

        # Specialized managers
        self.round_manager = RoundManager(rounds=rounds, rng=rng)
        self.result_recorder = ResultRecorder(
            max_score=config.max_score, scoring_rule=config.scoring_rule
        )
        self.standings_calculator = StandingsCalculator()

    @classmethod
    def create(
        cls,
        name: str,
        participant_names: Iterable[str],
        surface_count: int,
        max_score: int = DEFAULT_MAX_SCORE,
        scoring_rule: str = DEFAULT_SCORING_RULE,
        flatten_groups_when_oversubscribed: bool = False,
        shuffle_playing_order: bool = True,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "Tournament":
        """Create a tournament and generate its first round.

        Args:
            name: Tournament name (non-empty)
            participant_names: One name per participant; blank entries are ignored
            surface_count: Number of surfaces (courts), at least 1. Counts
                outside :func:`~courtpairing.utils.validation.valid_surface_counts`
                are accepted, but every round is cut to whole matches of four:
                6 participants on 2 surfaces play one match and 2 wait even
                though the surfaces could hold all 6.
            max_score: Highest score a team may report
            scoring_rule: ``"games"`` or ``"match_points"``
            flatten_groups_when_oversubscribed: See :class:`TournamentConfig`
            shuffle_playing_order: Shuffle players before pairing each round
            seed: Seed for the random source, for reproducible tournaments
            rng: Random source to use instead of one built from ``seed``

        Returns:
            The new tournament, positioned on round 1

        Raises:
            TournamentSetupException: If the name, participant list, surface
                count or scoring settings are invalid
        """
        names = validate_setup_strict(name, participant_names).sanitized_value
        cls._check_surface_count(surface_count)
        if scoring_rule not in SCORING_RULES:
            raise TournamentSetupException(
                f"Unknown scoring rule {scoring_rule!r}; use one of {SCORING_RULES}"
            )
        if isinstance(max_score, bool) or not isinstance(max_score, int) or max_score < 1:
            raise TournamentSetupException(
                f"Maximum score must be a positive integer, got {max_score!r}"
            )

        config = TournamentConfig(
            name=name.strip(),
            surface_count=surface_count,
            max_score=max_score,
            scoring_rule=scoring_rule,
            flatten_groups_when_oversubscribed=flatten_groups_when_oversubscribed,
            shuffle_playing_order=shuffle_playing_order,
        )
        participants = [
            Participant(id=index + 1, name=participant_name)
            for index, participant_name in enumerate(names)
        ]
        tournament = cls(
            config,
            participants,
            rng=rng if rng is not None else random.Random(seed),
        )

        if tournament.is_grouped:
            tournament.groups = partition_groups(
                [p.id for p in participants],
                tournament.round_manager.rng,
                config.group_count,
            )

        logger.info(
            f"Created tournament '{config.name}': {len(participants)} participants, "
            f"{surface_count} surface(s), "
            f"{'grouped' if tournament.is_grouped else 'flat'} mode"
        )
        tournament.advance_round()
        return tournament

    @staticmethod
    def _check_surface_count(surface_count: Any) -> None:
        if (
            isinstance(surface_count, bool)
            or not isinstance(surface_count, int)
            or surface_count < 1
        ):
            raise TournamentSetupException(
                f"Surface count must be a positive integer, got {surface_count!r}",
                ValidationReason.SURFACE_COUNT,
            )

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def surface_count(self) -> int:
        """Get number of surfaces."""
        return self.config.surface_count

    @property
    def rounds(self) -> List[RoundData]:
        """Generated rounds, oldest first."""
        return self.round_manager.rounds

    @property
    def is_empty(self) -> bool:
        """True before creation and after :meth:`reset`."""
        return not self.participants

    @property
    def is_grouped(self) -> bool:
        """Large cohorts are scheduled from fixed groups."""
        return len(self.participants) == self.config.grouped_threshold

    @property
    def current_round(self) -> Optional[RoundData]:
        """The round under the cursor, or None before any round exists."""
        return self.round_manager.get_round(self.active_round)

    def _require_active(self) -> None:
        if self.is_empty:
            raise NoActiveTournamentException(
                "No tournament in progress; create one first"
            )

    # ========== Participants ==========

    @property
    def participants_by_id(self) -> Dict[ParticipantId, Participant]:
        return {p.id: p for p in self.participants}

    def participant(self, participant_id: ParticipantId) -> Participant:
        """Look up a participant by id.

        Raises:
            ParticipantNotFoundException: If no participant has that id
        """
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        raise ParticipantNotFoundException(f"No participant with id {participant_id}")

    def matches_played(self, participant_id: ParticipantId) -> int:
        """Count scored matches the participant has played in."""
        self.participant(participant_id)
        return self.standings_calculator.matches_played(participant_id, self.rounds)

    # ========== Round Management ==========

    def partnership_ledger(self, before_round: Optional[int] = None) -> PartnershipLedger:
        """Partnership counts from all rounds, or from the rounds before one."""
        rounds = self.rounds
        if before_round is not None:
            rounds = [r for r in rounds if r.round_number < before_round]
        return build_ledger(rounds)

    def generate_round(self, round_number: int) -> RoundData:
        """Build round ``round_number`` from the current state without storing it."""
        self._require_active()
        return self.round_manager.generate_round(
            self.participants, self.config, round_number, self.groups or None
        )

    def advance_round(self) -> RoundData:
        """Move the cursor forward, generating the next round if needed.

        Generation does not wait for every result of the current round;
        gating on complete results is left to the host
        (see :meth:`is_round_complete`).
        """
        self._require_active()
        next_round = self.active_round + 1
        round_data = self.round_manager.get_round(next_round)
        if round_data is None:
            round_data = self.round_manager.create_next_round(
                self.participants, self.config, self.groups or None
            )
        self.active_round = round_data.round_number
        return round_data

    def go_to_previous_round(self) -> int:
        """Move the cursor back one round (not below round 1)."""
        if self.active_round > 1:
            self.active_round -= 1
        return self.active_round

    def go_to_round(self, round_number: int) -> RoundData:
        """Move the cursor to an already generated round.

        Raises:
            RoundNotFoundException: If the round has not been generated
        """
        round_data = self.round_manager.require_round(round_number)
        self.active_round = round_number
        return round_data

    def is_round_complete(self, round_number: int) -> bool:
        return self.round_manager.require_round(round_number).is_completed

    def waiting_participants(self, round_number: int) -> List[Participant]:
        """Participants sitting out the round, in creation order."""
        by_id = self.participants_by_id
        return [
            by_id[pid]
            for pid in self.round_manager.waiting_ids(round_number, self.participants)
        ]

    def get_matches_for_display(self, round_number: int) -> List[MatchView]:
        """Matches of a round with both teams resolved to live participants."""
        by_id = self.participants_by_id
        views = []
        for match in self.round_manager.require_round(round_number).matches:
            team_a = (by_id[match.team_a.first_id], by_id[match.team_a.second_id])
            team_b = (by_id[match.team_b.first_id], by_id[match.team_b.second_id])
            views.append((match, team_a, team_b))
        return views

    def set_surface_count(self, surface_count: int, strict: bool = False) -> None:
        """Change the surface count for rounds generated from now on.

        Existing rounds keep their surfaces. With ``strict`` the count must be
        one of the admissible counts for the cohort (see
        :func:`~courtpairing.utils.validation.valid_surface_counts`).

        Raises:
            TournamentSetupException: If the count is not a positive integer,
                or not admissible when ``strict`` is set
        """
        self._require_active()
        self._check_surface_count(surface_count)
        if strict:
            validate_surface_count_strict(
                surface_count,
                len(self.participants),
                grouped=self.is_grouped,
                group_count=self.config.group_count,
            )
        logger.info(
            f"Surface count changed from {self.config.surface_count} to "
            f"{surface_count} from round "
            f"{self.round_manager.current_round_number + 1}"
        )
        self.config.surface_count = surface_count

    # ========== Result Management ==========

    def report_result(
        self,
        round_number: int,
        match_id: int,
        score: Sequence[int],
        is_edit: bool = False,
    ) -> RoundData:
        """Record or edit the score of one match.

        Raises:
            InvalidResultException: If the score is rejected (see ``reason``)
            RoundNotFoundException: If the round does not exist
            MatchNotFoundException: If the round has no such match
            DuplicateResultException: If the match is scored and
                ``is_edit`` is False
        """
        self._require_active()
        round_data = self.round_manager.require_round(round_number)
        return self.result_recorder.record_result(
            round_data, match_id, score, self.participants_by_id, is_edit=is_edit
        )

    def undo_result(self, round_number: int, match_id: int) -> RoundData:
        """Clear the score of one match and take its points back."""
        self._require_active()
        round_data = self.round_manager.require_round(round_number)
        return self.result_recorder.undo_result(
            round_data, match_id, self.participants_by_id
        )

    # ========== Standings ==========

    def standings(self) -> List[Standing]:
        """Get current standings, highest points first."""
        return self.standings_calculator.standings(self.participants, self.rounds)

    # ========== Reset ==========

    def reset(self) -> None:
        """Discard all tournament state."""
        logger.info(f"Resetting tournament '{self.config.name}'")
        self.config = TournamentConfig()
        self.participants = []
        self.groups = []
        self.active_round = 0
        self.round_manager = RoundManager(rng=self.round_manager.rng)
        self.result_recorder = ResultRecorder(
            max_score=self.config.max_score, scoring_rule=self.config.scoring_rule
        )

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to a snapshot dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        return {
            "name": self.config.name,
            "surface_count": self.config.surface_count,
            "config": self.config.to_dict(),
            "participants": [p.to_dict() for p in self.participants],
            "rounds": [r.to_dict() for r in self.rounds],
            "active_round": self.active_round,
            "groups": [list(group) for group in self.groups],
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], rng: Optional[random.Random] = None
    ) -> "Tournament":
        """Rebuild a tournament from a snapshot produced by :meth:`to_dict`.

        Args:
            data: Snapshot dictionary
            rng: Random source for rounds generated after loading

        Raises:
            SnapshotException: If the snapshot is incomplete or inconsistent
        """
        try:
            config_data = dict(data.get("config", {}))
            if "name" in data:
                config_data.setdefault("name", data["name"])
            if "surface_count" not in config_data:
                config_data["surface_count"] = data["surface_count"]
            config = TournamentConfig.from_dict(config_data)
            participants = [Participant.from_dict(p) for p in data["participants"]]
            rounds = [RoundData.from_dict(r) for r in data.get("rounds", [])]
            groups = [[int(pid) for pid in g] for g in data.get("groups", [])]
            active_round = int(data.get("active_round", len(rounds)))
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotException(f"Invalid tournament snapshot: {e}") from e

        for index, round_data in enumerate(rounds):
            if round_data.round_number != index + 1:
                raise SnapshotException(
                    f"Round numbers must run 1..{len(rounds)} without gaps, "
                    f"found {round_data.round_number} at position {index + 1}"
                )
        if not 0 <= active_round <= len(rounds) or (rounds and active_round == 0):
            raise SnapshotException(
                f"Active round {active_round} outside 1..{len(rounds)}"
            )

        known = {p.id for p in participants}
        stray = {pid for group in groups for pid in group} - known
        if stray:
            raise SnapshotException(
                f"Groups refer to unknown participants {sorted(stray)}"
            )
        if len(participants) == config.grouped_threshold and not groups:
            raise SnapshotException(
                f"Snapshot of {len(participants)} participants has no group "
                "partition; grouped rounds cannot be resumed"
            )
        for round_data in rounds:
            unknown = round_data.playing_ids() - known
            if unknown:
                raise SnapshotException(
                    f"Round {round_data.round_number} refers to unknown "
                    f"participants {sorted(unknown)}"
                )

        tournament = cls(
            config,
            participants,
            rounds=rounds,
            groups=groups,
            active_round=active_round,
            rng=rng,
        )
        logger.info(f"Loaded tournament: {tournament.name}")
        return tournament

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(
        cls, text: str, rng: Optional[random.Random] = None
    ) -> "Tournament":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SnapshotException(f"Snapshot is not valid JSON: {e}") from e
        return cls.from_dict(data, rng=rng)
