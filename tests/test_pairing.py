import random

import pytest

from courtpairing.models.tournament import Match, Pair, PartnershipLedger, RoundData
from courtpairing.pairing import create_partner_pairings, sequential_pairings


def _ledger(*pairs):
    return PartnershipLedger.from_rounds(
        [
            RoundData(
                round_number=1,
                matches=[
                    Match(
                        match_id=index + 1,
                        surface=1,
                        team_a=Pair(1, first[0], first[1]),
                        team_b=Pair(2, second[0], second[1]),
                    )
                    for index, (first, second) in enumerate(zip(pairs[::2], pairs[1::2]))
                ],
            )
        ]
    )


def _flatten(pairings):
    return [pid for pair in pairings for pid in pair]


def test_first_round_pairs_neighbours_in_pool_order():
    assert create_partner_pairings([1, 2, 3, 4]) == [(1, 2), (3, 4)]
    assert create_partner_pairings([4, 3, 2, 1]) == [(4, 3), (2, 1)]


def test_search_skips_previous_partners():
    ledger = _ledger((1, 2), (3, 4))
    assert create_partner_pairings([1, 2, 3, 4], ledger) == [(1, 3), (2, 4)]


def test_falls_back_to_sequential_when_every_pairing_repeats():
    # Participant 1 has already partnered everyone else in the pool
    ledger = _ledger((1, 2), (3, 4), (1, 3), (2, 4), (1, 4), (2, 3))
    assert create_partner_pairings([1, 2, 3, 4], ledger) == [(1, 2), (3, 4)]


def test_every_participant_paired_exactly_once():
    pool = list(range(1, 25))
    random.Random(7).shuffle(pool)
    ledger = _ledger(*[(i, i + 1) for i in range(1, 24, 2)])

    pairings = create_partner_pairings(pool, ledger)

    assert sorted(_flatten(pairings)) == list(range(1, 25))
    assert all(not ledger.have_partnered(a, b) for a, b in pairings)


def test_fresh_pairings_across_rounds_for_eight_participants():
    pool = list(range(1, 9))
    history = []
    for _ in range(4):
        ledger = _ledger(*history)
        pairings = create_partner_pairings(pool, ledger)
        assert all(not ledger.have_partnered(a, b) for a, b in pairings)
        history.extend(pairings)

    assert not _ledger(*history).repeat_partnerships()


def test_empty_pool():
    assert create_partner_pairings([]) == []


def test_odd_pool_rejected():
    with pytest.raises(ValueError):
        create_partner_pairings([1, 2, 3])


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        sequential_pairings([1, 1, 2, 3])


class TestPartnershipLedger:
    def test_counts_are_symmetric(self):
        ledger = _ledger((1, 2), (3, 4))
        assert ledger.count(1, 2) == 1
        assert ledger.count(2, 1) == 1
        assert ledger.have_partnered(4, 3)
        assert not ledger.have_partnered(1, 3)
        assert len(ledger) == 2

    def test_repeat_partnerships(self):
        ledger = _ledger((1, 2), (3, 4), (2, 1), (3, 5))
        assert ledger.count(1, 2) == 2
        assert ledger.repeat_partnerships() == [(1, 2)]

    def test_partners_of(self):
        ledger = _ledger((1, 2), (3, 4), (1, 3), (2, 4))
        assert ledger.partners_of(1) == {2, 3}
        assert ledger.partners_of(5) == set()

    def test_empty_ledger(self):
        ledger = PartnershipLedger()
        assert ledger.count(1, 2) == 0
        assert ledger.repeat_partnerships() == []
