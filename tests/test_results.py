import pytest

from courtpairing.controllers.tournament import (
    ResultRecorder,
    StandingsCalculator,
    points_for_result,
)
from courtpairing.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    MatchNotFoundException,
    ScoreRangeException,
    TiedScoreException,
    ValidationReason,
)
from courtpairing.models.participant import Participant
from courtpairing.models.tournament import Match, MatchResult, Pair, RoundData


@pytest.fixture
def participants():
    return {i: Participant(id=i, name=f"P{i}") for i in range(1, 5)}


@pytest.fixture
def round_data():
    return RoundData(
        round_number=1,
        matches=[Match(match_id=1, surface=1, team_a=Pair(1, 1, 2), team_b=Pair(2, 3, 4))],
    )


def _points(participants):
    return [participants[i].points for i in sorted(participants)]


class TestRecordResult:
    def test_points_added_to_both_teams(self, round_data, participants):
        ResultRecorder().record_result(round_data, 1, (3, 1), participants)

        assert _points(participants) == [3, 3, 1, 1]
        assert round_data.matches[0].result == MatchResult(3, 1)
        assert round_data.is_completed

    def test_edit_reverses_previous_result(self, round_data, participants):
        recorder = ResultRecorder()
        recorder.record_result(round_data, 1, (3, 1), participants)
        recorder.record_result(round_data, 1, (1, 3), participants, is_edit=True)

        assert _points(participants) == [1, 1, 3, 3]
        assert round_data.matches[0].result == MatchResult(1, 3)

    def test_repeated_edits_do_not_accumulate(self, round_data, participants):
        recorder = ResultRecorder()
        recorder.record_result(round_data, 1, (7, 0), participants)
        for score in [(0, 7), (5, 6), (2, 4)]:
            recorder.record_result(round_data, 1, score, participants, is_edit=True)

        assert _points(participants) == [2, 2, 4, 4]

    def test_edit_of_unscored_match_records_it(self, round_data, participants):
        ResultRecorder().record_result(
            round_data, 1, (4, 2), participants, is_edit=True
        )
        assert _points(participants) == [4, 4, 2, 2]

    def test_tie_rejected_without_changes(self, round_data, participants):
        with pytest.raises(TiedScoreException) as excinfo:
            ResultRecorder().record_result(round_data, 1, (2, 2), participants)

        assert excinfo.value.reason is ValidationReason.TIED_SCORE
        assert _points(participants) == [0, 0, 0, 0]
        assert round_data.matches[0].result is None

    @pytest.mark.parametrize("score", [(8, 1), (-1, 3), (3, 99)])
    def test_out_of_range_rejected(self, round_data, participants, score):
        with pytest.raises(ScoreRangeException) as excinfo:
            ResultRecorder().record_result(round_data, 1, score, participants)

        assert excinfo.value.reason is ValidationReason.SCORE_RANGE
        assert _points(participants) == [0, 0, 0, 0]

    def test_custom_max_score(self, round_data, participants):
        recorder = ResultRecorder(max_score=6)
        with pytest.raises(ScoreRangeException):
            recorder.record_result(round_data, 1, (7, 5), participants)
        recorder.record_result(round_data, 1, (6, 4), participants)
        assert _points(participants) == [6, 6, 4, 4]

    @pytest.mark.parametrize("score", [(2.5, 1), ("3", 1), (True, 0)])
    def test_non_integer_rejected(self, round_data, participants, score):
        with pytest.raises(InvalidResultException) as excinfo:
            ResultRecorder().record_result(round_data, 1, score, participants)
        assert excinfo.value.reason is ValidationReason.SCORE_NOT_INTEGER

    def test_invalid_edit_keeps_previous_result(self, round_data, participants):
        recorder = ResultRecorder()
        recorder.record_result(round_data, 1, (3, 1), participants)
        with pytest.raises(TiedScoreException):
            recorder.record_result(round_data, 1, (4, 4), participants, is_edit=True)

        assert _points(participants) == [3, 3, 1, 1]
        assert round_data.matches[0].result == MatchResult(3, 1)

    def test_second_report_needs_edit_flag(self, round_data, participants):
        recorder = ResultRecorder()
        recorder.record_result(round_data, 1, (3, 1), participants)
        with pytest.raises(DuplicateResultException):
            recorder.record_result(round_data, 1, (5, 1), participants)
        assert _points(participants) == [3, 3, 1, 1]

    @pytest.mark.parametrize("score", [(3,), (3, 1, 0), None, 31, {3, 1}])
    def test_score_must_be_a_pair(self, round_data, participants, score):
        with pytest.raises(InvalidResultException) as excinfo:
            ResultRecorder().record_result(round_data, 1, score, participants)

        assert excinfo.value.reason is ValidationReason.SCORE_SHAPE
        assert _points(participants) == [0, 0, 0, 0]
        assert round_data.matches[0].result is None

    def test_unknown_match(self, round_data, participants):
        with pytest.raises(MatchNotFoundException):
            ResultRecorder().record_result(round_data, 2, (3, 1), participants)


class TestMatchPoints:
    def test_winner_gets_fixed_points(self, round_data, participants):
        recorder = ResultRecorder(scoring_rule="match_points")
        recorder.record_result(round_data, 1, (5, 3), participants)
        assert _points(participants) == [2, 2, 0, 0]

        recorder.record_result(round_data, 1, (3, 5), participants, is_edit=True)
        assert _points(participants) == [0, 0, 2, 2]

    def test_points_for_result(self):
        assert points_for_result(MatchResult(6, 2)) == (6, 2)
        assert points_for_result(MatchResult(1, 7), "match_points") == (0, 2)
        with pytest.raises(ValueError):
            points_for_result(MatchResult(1, 7), "elo")


class TestUndoResult:
    def test_undo_takes_points_back(self, round_data, participants):
        recorder = ResultRecorder()
        recorder.record_result(round_data, 1, (3, 1), participants)
        recorder.undo_result(round_data, 1, participants)

        assert _points(participants) == [0, 0, 0, 0]
        assert round_data.matches[0].result is None
        assert not round_data.is_completed

    def test_undo_of_unscored_match_is_harmless(self, round_data, participants):
        ResultRecorder().undo_result(round_data, 1, participants)
        assert _points(participants) == [0, 0, 0, 0]


class TestStandings:
    def test_sorted_by_points_with_stable_ties(self):
        players = [
            Participant(1, "Ann", 5),
            Participant(2, "Bo", 9),
            Participant(3, "Cy", 5),
            Participant(4, "Di", 0),
        ]
        rows = StandingsCalculator().standings(players, [])

        assert [row.participant.name for row in rows] == ["Bo", "Ann", "Cy", "Di"]
        assert [row.position for row in rows] == [1, 2, 3, 4]
        assert rows[0].to_dict() == {
            "position": 1,
            "id": 2,
            "name": "Bo",
            "points": 9,
            "matches_played": 0,
        }

    def test_matches_played_counts_scored_matches_only(self, round_data, participants):
        calculator = StandingsCalculator()
        assert calculator.matches_played(1, [round_data]) == 0

        ResultRecorder().record_result(round_data, 1, (3, 1), participants)
        assert calculator.matches_played(1, [round_data]) == 1
        assert calculator.matches_played(5, [round_data]) == 0

    def test_recount_matches_running_totals(self, round_data, participants):
        recorder = ResultRecorder()
        recorder.record_result(round_data, 1, (3, 1), participants)
        recorder.record_result(round_data, 1, (2, 6), participants, is_edit=True)

        totals = StandingsCalculator().recount_points(
            list(participants.values()), [round_data]
        )
        assert totals == {p.id: p.points for p in participants.values()}
