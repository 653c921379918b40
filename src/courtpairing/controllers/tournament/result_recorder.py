"""Result recording and validation for tournaments.

This module handles recording match results with proper validation and keeps
participant points equal to exactly one application of every recorded result.
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

from typing import Dict, Sequence, Tuple

from courtpairing.constants import (
    DEFAULT_MAX_SCORE,
    DEFAULT_SCORING_RULE,
    MATCH_LOSS_POINTS,
    MATCH_WIN_POINTS,
    SCORING_GAMES,
    SCORING_MATCH_POINTS,
)
from courtpairing.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    MatchNotFoundException,
    ParticipantNotFoundException,
    ValidationReason,
)
from courtpairing.models.participant import Participant
from courtpairing.models.tournament.match import Match
from courtpairing.models.tournament.match_result import MatchResult
from courtpairing.models.tournament.round_data import RoundData
from courtpairing.type_hints import ParticipantId
from courtpairing.utils import setup_logger
from courtpairing.utils.validation import validate_score_strict

logger = setup_logger(__name__)


def points_for_result(
    result: MatchResult, scoring_rule: str = DEFAULT_SCORING_RULE
) -> Tuple[int, int]:
    """Points each member of team A and of team B gains from ``result``."""
    if scoring_rule == SCORING_GAMES:
        return result.score_a, result.score_b
    if scoring_rule == SCORING_MATCH_POINTS:
        if result.winner == "a":
            return MATCH_WIN_POINTS, MATCH_LOSS_POINTS
        return MATCH_LOSS_POINTS, MATCH_WIN_POINTS
    raise ValueError(f"Unknown scoring rule: {scoring_rule!r}")


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating reported scores (range, no ties)
    - Adding each team's points to its members
    - Correcting points when a result is edited (reverse the old result,
      then apply the new one)
    - Refusing results for matches that do not exist
    """

    def __init__(
        self,
        max_score: int = DEFAULT_MAX_SCORE,
        scoring_rule: str = DEFAULT_SCORING_RULE,
    ) -> None:
        self.max_score = max_score
        self.scoring_rule = scoring_rule

    def record_result(
        self,
        round_data: RoundData,
        match_id: int,
        score: Sequence[int],
        participants: Dict[ParticipantId, Participant],
        is_edit: bool = False,
    ) -> RoundData:
        """Record (or edit) the score of one match.

        Args:
            round_data: The round containing the match
            match_id: Identifier of the match within the round
            score: (team A score, team B score)
            participants: All participants by id; their points are updated
            is_edit: Replace an existing result instead of adding a first one

        Returns:
            The same round, with the match result set

        Raises:
            ScoreRangeException: If a score is outside ``0..max_score``
            TiedScoreException: If both scores are equal
            InvalidResultException: If a score is not an integer or
                ``score`` is not a pair
            MatchNotFoundException: If the round has no such match
            DuplicateResultException: If the match already has a result and
                ``is_edit`` is False
            ParticipantNotFoundException: If a match member is unknown
        """
        if not isinstance(score, (tuple, list)) or len(score) != 2:
            raise InvalidResultException(
                f"A score is one value per team, got {score!r}",
                ValidationReason.SCORE_SHAPE,
            )
        score_a, score_b = score
        validate_score_strict(score_a, score_b, self.max_score)

        match = self._require_match(round_data, match_id)
        previous = match.result
        if previous is not None and not is_edit:
            raise DuplicateResultException(
                f"Round {round_data.round_number} match {match_id} already has "
                f"result {previous.score_a}-{previous.score_b}; report it as an edit"
            )
        self._require_members(match, participants)

        new_result = MatchResult(score_a=score_a, score_b=score_b)
        if previous is not None:
            self._apply_points(match, previous, participants, sign=-1)
        self._apply_points(match, new_result, participants, sign=1)
        match.result = new_result

        if previous is not None:
            logger.info(
                f"Round {round_data.round_number} match {match_id}: edited "
                f"{previous.score_a}-{previous.score_b} -> {score_a}-{score_b}"
            )
        else:
            logger.info(
                f"Round {round_data.round_number} match {match_id}: "
                f"recorded {score_a}-{score_b}"
            )
        return round_data

    def undo_result(
        self,
        round_data: RoundData,
        match_id: int,
        participants: Dict[ParticipantId, Participant],
    ) -> RoundData:
        """Remove a recorded result and take its points back.

        Returns:
            The same round, with the match result cleared

        Raises:
            MatchNotFoundException: If the round has no such match
        """
        match = self._require_match(round_data, match_id)
        if match.result is None:
            logger.warning(
                f"Round {round_data.round_number} match {match_id} has no result to undo"
            )
            return round_data

        self._require_members(match, participants)
        self._apply_points(match, match.result, participants, sign=-1)
        match.result = None
        logger.info(f"Round {round_data.round_number} match {match_id}: result undone")
        return round_data

    def _require_match(self, round_data: RoundData, match_id: int) -> Match:
        match = round_data.get_match(match_id)
        if match is None:
            raise MatchNotFoundException(
                f"Round {round_data.round_number} has no match {match_id}"
            )
        return match

    def _require_members(
        self, match: Match, participants: Dict[ParticipantId, Participant]
    ) -> None:
        missing = [pid for pid in match.participant_ids if pid not in participants]
        if missing:
            raise ParticipantNotFoundException(
                f"Match {match.match_id} refers to unknown participants {missing}"
            )

    def _apply_points(
        self,
        match: Match,
        result: MatchResult,
        participants: Dict[ParticipantId, Participant],
        sign: int,
    ) -> None:
        points_a, points_b = points_for_result(result, self.scoring_rule)
        for pid in match.team_a.member_ids:
            participants[pid].points += sign * points_a
        for pid in match.team_b.member_ids:
            participants[pid].points += sign * points_b
        logger.debug(
            f"Match {match.match_id}: {'+' if sign > 0 else '-'}{points_a} to "
            f"{match.team_a.member_ids}, {'+' if sign > 0 else '-'}{points_b} to "
            f"{match.team_b.member_ids}"
        )
