"""Exceptions for use in Court Pairing"""

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

from enum import Enum
from typing import Optional


class ValidationReason(Enum):
    """Machine readable reason attached to every validation failure."""

    EMPTY_NAME = "empty_name"
    PARTICIPANT_COUNT = "participant_count"
    DUPLICATE_PARTICIPANT_NAME = "duplicate_participant_name"
    SURFACE_COUNT = "surface_count"
    SCORE_SHAPE = "score_shape"
    SCORE_NOT_INTEGER = "score_not_integer"
    SCORE_RANGE = "score_range"
    TIED_SCORE = "tied_score"


# ========== Base Application Exception ==========


class CourtPairingException(Exception):
    """Base exception for all Court Pairing errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Validation Exceptions ==========


class ValidationException(CourtPairingException):
    """Raised when caller supplied data is rejected.

    Attributes
    ----------
    reason : ValidationReason or None
        Distinguishes e.g. a range violation from a tie violation.
    """

    def __init__(self, message: str, reason: Optional[ValidationReason] = None):
        super().__init__(message)
        self.reason = reason


class TournamentSetupException(ValidationException):
    """Raised when a tournament cannot be created from the given input."""

    pass


class InvalidResultException(ValidationException):
    """Raised when a result is invalid (e.g., score out of range)."""

    pass


class ScoreRangeException(InvalidResultException):
    """Raised when a score is outside the configured bounds."""

    def __init__(self, message: str):
        super().__init__(message, ValidationReason.SCORE_RANGE)


class TiedScoreException(InvalidResultException):
    """Raised when both teams are given the same score."""

    def __init__(self, message: str):
        super().__init__(message, ValidationReason.TIED_SCORE)


# ========== Tournament State Exceptions ==========


class TournamentStateException(CourtPairingException):
    """Raised when tournament is in an invalid state for the requested operation.

    These indicate an integration error (a stale or invented reference) and
    are never recovered from inside the core.
    """

    pass


class NoActiveTournamentException(TournamentStateException):
    """Raised when an operation needs a tournament that has not been created."""

    pass


class RoundNotFoundException(TournamentStateException):
    """Raised when a requested round does not exist."""

    pass


class MatchNotFoundException(TournamentStateException):
    """Raised when a requested match does not exist in its round."""

    pass


class ParticipantNotFoundException(TournamentStateException):
    """Raised when a requested participant cannot be found."""

    pass


class DuplicateResultException(TournamentStateException):
    """Raised when a scored match is reported again without the edit flag."""

    pass


# ========== Snapshot Exceptions ==========


class SnapshotException(CourtPairingException):
    """Raised when a persisted tournament snapshot cannot be restored."""

    pass
