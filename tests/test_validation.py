import pytest

from courtpairing.exceptions import (
    InvalidResultException,
    ScoreRangeException,
    TiedScoreException,
    TournamentSetupException,
    ValidationReason,
)
from courtpairing.utils.validation import (
    SurfaceOption,
    surface_options,
    valid_surface_counts,
    validate_participant_names,
    validate_score,
    validate_score_strict,
    validate_setup_strict,
    validate_surface_count,
    validate_tournament_name,
)


def test_tournament_name_required():
    assert validate_tournament_name("  Club Night ").sanitized_value == "Club Night"
    for name in ["", "   ", None]:
        result = validate_tournament_name(name)
        assert not result
        assert result.reason is ValidationReason.EMPTY_NAME


class TestParticipantNames:
    def test_blank_entries_dropped(self):
        result = validate_participant_names(["Ann", " Bo ", "", "  ", "Cy", "Di"])
        assert result
        assert result.sanitized_value == ["Ann", "Bo", "Cy", "Di"]

    @pytest.mark.parametrize("count", [0, 3, 25])
    def test_count_out_of_range(self, count):
        result = validate_participant_names([f"P{i}" for i in range(count)])
        assert result.reason is ValidationReason.PARTICIPANT_COUNT

    def test_limits_are_inclusive(self):
        assert validate_participant_names([f"P{i}" for i in range(4)])
        assert validate_participant_names([f"P{i}" for i in range(24)])

    def test_duplicates_ignore_case(self):
        result = validate_participant_names(["Ann", "Bo", "Cy", "ann"])
        assert result.reason is ValidationReason.DUPLICATE_PARTICIPANT_NAME


class TestSurfaceCounts:
    @pytest.mark.parametrize(
        "participants, expected",
        [(3, []), (4, [1]), (8, [1, 2]), (10, [1, 2]), (11, [2]), (24, [5, 6])],
    )
    def test_flat(self, participants, expected):
        assert valid_surface_counts(participants) == expected

    def test_grouped(self):
        assert valid_surface_counts(24, grouped=True) == [3, 4, 5, 6]

    def test_options_describe_each_count(self):
        assert surface_options(10) == [
            SurfaceOption(surfaces=1, waiting=6, matches=1),
            SurfaceOption(surfaces=2, waiting=2, matches=2),
        ]
        assert surface_options(24, grouped=True)[-1] == SurfaceOption(
            surfaces=6, waiting=8, matches=4
        )

    @pytest.mark.parametrize("value", [3, 0, True, "2", 2.0])
    def test_invalid_surface_count(self, value):
        result = validate_surface_count(value, 10)
        assert result.reason is ValidationReason.SURFACE_COUNT

    def test_valid_surface_count(self):
        assert validate_surface_count(2, 10).sanitized_value == 2


class TestScores:
    @pytest.mark.parametrize("score", [(3, 1), (0, 7), (7, 6)])
    def test_valid(self, score):
        assert validate_score(*score).sanitized_value == score

    @pytest.mark.parametrize(
        "score, reason",
        [
            ((2, 2), ValidationReason.TIED_SCORE),
            ((8, 0), ValidationReason.SCORE_RANGE),
            ((9, 9), ValidationReason.SCORE_RANGE),
            ((-1, 2), ValidationReason.SCORE_RANGE),
            ((1.0, 2), ValidationReason.SCORE_NOT_INTEGER),
            ((None, 2), ValidationReason.SCORE_NOT_INTEGER),
        ],
    )
    def test_invalid(self, score, reason):
        assert validate_score(*score).reason is reason

    def test_strict_raises_specific_exceptions(self):
        with pytest.raises(TiedScoreException):
            validate_score_strict(4, 4)
        with pytest.raises(ScoreRangeException):
            validate_score_strict(4, 8)
        with pytest.raises(InvalidResultException):
            validate_score_strict("4", 1)
        validate_score_strict(4, 1)


def test_setup_strict():
    names = validate_setup_strict("Open", ["A", "B", "C", "D"])
    assert names.sanitized_value == ["A", "B", "C", "D"]

    with pytest.raises(TournamentSetupException) as excinfo:
        validate_setup_strict("", ["A", "B", "C", "D"])
    assert excinfo.value.reason is ValidationReason.EMPTY_NAME
