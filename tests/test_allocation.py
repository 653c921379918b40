import random

import pytest

from courtpairing.models.participant import Participant
from courtpairing.pairing import (
    build_matches,
    groups_for_round,
    partition_groups,
    plan_flat,
    plan_grouped,
)


def _participants(count):
    return [Participant(id=i, name=f"P{i}") for i in range(1, count + 1)]


def _ids(participants):
    return [p.id for p in participants]


class TestFlatPlanning:
    def test_everyone_plays_when_cohort_fits(self):
        allocation = plan_flat(list(range(1, 9)), surface_count=2, round_number=1)
        assert allocation.playing == list(range(1, 9))
        assert allocation.waiting == []

    def test_surplus_surfaces_leave_nobody_waiting(self):
        allocation = plan_flat(list(range(1, 7)), surface_count=3, round_number=4)
        assert allocation.playing == list(range(1, 7))
        assert allocation.waiting == []

    def test_waiting_rotates_with_round_number(self):
        cohort = list(range(1, 11))
        waiting = [plan_flat(cohort, 2, r).waiting for r in range(1, 6)]
        assert waiting == [[9, 10], [7, 8], [5, 6], [3, 4], [1, 2]]

    def test_rotation_wraps_around_the_cohort(self):
        allocation = plan_flat(list(range(1, 11)), surface_count=2, round_number=2)
        assert allocation.playing == [9, 10, 1, 2, 3, 4, 5, 6]

    def test_playing_and_waiting_cover_the_cohort(self):
        cohort = list(range(1, 24))
        for round_number in range(1, 8):
            allocation = plan_flat(cohort, 5, round_number)
            assert len(allocation.playing) == 20
            assert sorted(allocation.playing + allocation.waiting) == cohort

    @pytest.mark.parametrize("surfaces, round_number", [(0, 1), (2, 0)])
    def test_invalid_arguments(self, surfaces, round_number):
        with pytest.raises(ValueError):
            plan_flat([1, 2, 3, 4], surfaces, round_number)


class TestGroups:
    def test_partition_into_equal_groups(self):
        groups = partition_groups(list(range(1, 25)), random.Random(3))
        assert [len(g) for g in groups] == [8, 8, 8]
        assert sorted(pid for g in groups for pid in g) == list(range(1, 25))

    def test_last_group_takes_remainder(self):
        groups = partition_groups(list(range(1, 11)), random.Random(3))
        assert [len(g) for g in groups] == [3, 3, 4]

    def test_partition_needs_two_groups(self):
        with pytest.raises(ValueError):
            partition_groups([1, 2, 3, 4], random.Random(), group_count=1)

    def test_group_rotation(self):
        assert [groups_for_round(r) for r in range(1, 7)] == [
            (0, 1),
            (0, 2),
            (1, 2),
            (0, 1),
            (0, 2),
            (1, 2),
        ]


class TestGroupedPlanning:
    groups = [list(range(1, 9)), list(range(9, 17)), list(range(17, 25))]

    @pytest.mark.parametrize(
        "round_number, expected",
        [
            (1, set(range(1, 17))),
            (2, set(range(1, 9)) | set(range(17, 25))),
            (3, set(range(9, 25))),
        ],
    )
    def test_two_groups_play_each_round(self, round_number, expected):
        cohort = _participants(24)
        allocation = plan_grouped(cohort, self.groups, 4, round_number)
        assert set(_ids(allocation.playing)) == expected
        assert len(allocation.waiting) == 8

    def test_fewer_surfaces_than_groups_need(self):
        cohort = _participants(24)
        allocation = plan_grouped(cohort, self.groups, 3, 1)
        assert _ids(allocation.playing) == list(range(1, 13))
        assert _ids(allocation.waiting) == list(range(13, 25))

    def test_oversubscribed_surfaces_stay_idle(self):
        cohort = _participants(24)
        allocation = plan_grouped(cohort, self.groups, 5, 1)
        assert _ids(allocation.playing) == list(range(1, 17))
        assert _ids(allocation.waiting) == list(range(17, 25))

    def test_oversubscribed_surfaces_flatten_to_whole_cohort(self):
        cohort = _participants(24)
        allocation = plan_grouped(
            cohort, self.groups, 5, 1, flatten_when_oversubscribed=True
        )
        assert _ids(allocation.playing) == list(range(1, 21))
        assert _ids(allocation.waiting) == list(range(21, 25))


class TestBuildMatches:
    def test_surfaces_assigned_round_robin(self):
        pairings = [(1, 2), (3, 4), (5, 6), (7, 8), (9, 10), (11, 12)]
        matches = build_matches(pairings, surface_count=2)

        assert [m.match_id for m in matches] == [1, 2, 3]
        assert [m.surface for m in matches] == [1, 2, 1]
        assert [m.team_a.pair_id for m in matches] == [1, 3, 5]
        assert matches[1].team_a.member_ids == (5, 6)
        assert matches[1].team_b.member_ids == (7, 8)
        assert all(m.result is None for m in matches)

    def test_trailing_pair_is_not_placed(self):
        matches = build_matches([(1, 2), (3, 4), (5, 6)], surface_count=2)
        assert len(matches) == 1
        assert 5 not in matches[0].participant_ids
