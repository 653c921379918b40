"""Validation utilities for Court Pairing.

This module provides reusable validation functions with consistent error handling.
Each ``validate_*`` function returns a :class:`ValidationResult`; the ``*_strict``
variants raise the matching exception instead.
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

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from courtpairing.constants import (
    DEFAULT_GROUP_COUNT,
    DEFAULT_MAX_SCORE,
    MAX_PARTICIPANTS,
    MAX_WAITING_PARTICIPANTS,
    MIN_PARTICIPANTS,
    MIN_SCORE,
    PLAYERS_PER_SURFACE,
)
from courtpairing.exceptions import (
    InvalidResultException,
    ScoreRangeException,
    TiedScoreException,
    TournamentSetupException,
    ValidationReason,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        reason: Machine readable failure reason if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        reason: Optional[ValidationReason] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.reason = reason
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _invalid(message: str, reason: ValidationReason) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message, reason=reason)


# ========== Tournament Setup Validation ==========


def validate_tournament_name(name: Optional[str]) -> ValidationResult:
    """Validate a tournament name (must contain non-whitespace text)."""
    if not name or not name.strip():
        return _invalid("Tournament name is required", ValidationReason.EMPTY_NAME)
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


def validate_participant_names(
    names: Iterable[str],
    min_count: int = MIN_PARTICIPANTS,
    max_count: int = MAX_PARTICIPANTS,
) -> ValidationResult:
    """Validate the entry list of a tournament.

    Names are trimmed and blank entries dropped, the way a one-name-per-line
    entry form is read. The remaining count must lie in ``min_count..max_count``
    and names must be unique.

    Example:
        >>> result = validate_participant_names(["Ann", " Bo ", "", "Cy", "Di"])
        >>> result.sanitized_value
        ['Ann', 'Bo', 'Cy', 'Di']
    """
    cleaned = [name.strip() for name in names if name and name.strip()]

    if not min_count <= len(cleaned) <= max_count:
        return _invalid(
            f"Please enter between {min_count} and {max_count} participants "
            f"(got {len(cleaned)})",
            ValidationReason.PARTICIPANT_COUNT,
        )

    seen = set()
    for name in cleaned:
        key = name.casefold()
        if key in seen:
            return _invalid(
                f"Duplicate participant name: {name}",
                ValidationReason.DUPLICATE_PARTICIPANT_NAME,
            )
        seen.add(key)

    return ValidationResult(is_valid=True, sanitized_value=cleaned)


# ========== Surface Validation ==========


@dataclass(frozen=True)
class SurfaceOption:
    """One admissible surface count and what it means for a round."""

    surfaces: int
    waiting: int
    matches: int


def _group_union_size(participant_count: int, group_count: int) -> int:
    return (participant_count // group_count) * 2


def valid_surface_counts(
    participant_count: int,
    grouped: bool = False,
    group_count: int = DEFAULT_GROUP_COUNT,
) -> List[int]:
    """Return the surface counts a host should offer for a cohort.

    Flat mode admits ``c`` when ``0 <= participant_count - 4c <= 6``. Grouped
    mode admits ``c`` when ``4c <= participant_count`` and at most six members
    of the two playing groups are left idle.
    """
    if participant_count < PLAYERS_PER_SURFACE:
        return []

    upper = participant_count // PLAYERS_PER_SURFACE
    if not grouped:
        return [
            c
            for c in range(1, upper + 1)
            if 0
            <= participant_count - c * PLAYERS_PER_SURFACE
            <= MAX_WAITING_PARTICIPANTS
        ]

    union = _group_union_size(participant_count, group_count)
    return [
        c
        for c in range(1, upper + 1)
        if max(0, union - c * PLAYERS_PER_SURFACE) <= MAX_WAITING_PARTICIPANTS
    ]


def surface_options(
    participant_count: int,
    grouped: bool = False,
    group_count: int = DEFAULT_GROUP_COUNT,
) -> List[SurfaceOption]:
    """Describe every admissible surface count for ``participant_count``."""
    options = []
    candidates = (
        _group_union_size(participant_count, group_count)
        if grouped
        else participant_count
    )
    for surfaces in valid_surface_counts(participant_count, grouped, group_count):
        playing = min(candidates, surfaces * PLAYERS_PER_SURFACE)
        options.append(
            SurfaceOption(
                surfaces=surfaces,
                waiting=participant_count - playing,
                matches=playing // PLAYERS_PER_SURFACE,
            )
        )
    return options


def validate_surface_count(
    surface_count: Any,
    participant_count: int,
    grouped: bool = False,
    group_count: int = DEFAULT_GROUP_COUNT,
) -> ValidationResult:
    """Validate a surface count against the cohort it has to serve."""
    if isinstance(surface_count, bool) or not isinstance(surface_count, int):
        return _invalid(
            f"Surface count must be an integer, got {surface_count!r}",
            ValidationReason.SURFACE_COUNT,
        )

    allowed = valid_surface_counts(participant_count, grouped, group_count)
    if surface_count not in allowed:
        return _invalid(
            f"{surface_count} surface(s) cannot serve {participant_count} "
            f"participants; choose one of {allowed}",
            ValidationReason.SURFACE_COUNT,
        )
    return ValidationResult(is_valid=True, sanitized_value=surface_count)


# ========== Score Validation ==========


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_score(
    score_a: Any, score_b: Any, max_score: int = DEFAULT_MAX_SCORE
) -> ValidationResult:
    """Validate a reported match score.

    Checks, in order: both values are integers, both lie in
    ``0..max_score``, and they differ (ties are not permitted).
    """
    if not (_is_integer(score_a) and _is_integer(score_b)):
        return _invalid(
            f"Scores must be whole numbers, got {score_a!r} and {score_b!r}",
            ValidationReason.SCORE_NOT_INTEGER,
        )

    if not (MIN_SCORE <= score_a <= max_score and MIN_SCORE <= score_b <= max_score):
        return _invalid(
            f"Scores must be between {MIN_SCORE} and {max_score}",
            ValidationReason.SCORE_RANGE,
        )

    if score_a == score_b:
        return _invalid("No ties allowed", ValidationReason.TIED_SCORE)

    return ValidationResult(is_valid=True, sanitized_value=(score_a, score_b))


# ========== Strict Variants ==========


def validate_setup_strict(
    name: Optional[str], participant_names: Iterable[str]
) -> ValidationResult:
    """Validate tournament name and entry list, raising on failure.

    Raises:
        TournamentSetupException: If either value is invalid
    """
    result = validate_tournament_name(name)
    if not result:
        raise TournamentSetupException(result.error_message, result.reason)
    names = validate_participant_names(participant_names)
    if not names:
        raise TournamentSetupException(names.error_message, names.reason)
    return names


def validate_surface_count_strict(
    surface_count: Any,
    participant_count: int,
    grouped: bool = False,
    group_count: int = DEFAULT_GROUP_COUNT,
) -> int:
    """Validate a surface count and raise if invalid.

    Raises:
        TournamentSetupException: If the surface count is not admissible
    """
    result = validate_surface_count(
        surface_count, participant_count, grouped, group_count
    )
    if not result:
        raise TournamentSetupException(result.error_message, result.reason)
    return result.sanitized_value


def validate_score_strict(
    score_a: Any, score_b: Any, max_score: int = DEFAULT_MAX_SCORE
) -> None:
    """Validate a score and raise the exception matching the failure.

    Raises:
        ScoreRangeException: If a score is outside ``0..max_score``
        TiedScoreException: If both scores are equal
        InvalidResultException: If a score is not an integer
    """
    result = validate_score(score_a, score_b, max_score)
    if result:
        return
    if result.reason is ValidationReason.SCORE_RANGE:
        raise ScoreRangeException(result.error_message)
    if result.reason is ValidationReason.TIED_SCORE:
        raise TiedScoreException(result.error_message)
    raise InvalidResultException(result.error_message, result.reason)
