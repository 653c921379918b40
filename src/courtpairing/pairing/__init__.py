"""Pairing and allocation algorithms."""

from courtpairing.pairing.allocation import (
    Allocation,
    build_matches,
    groups_for_round,
    partition_groups,
    plan_flat,
    plan_grouped,
)
from courtpairing.pairing.partner_search import (
    create_partner_pairings,
    sequential_pairings,
)

__all__ = [
    "Allocation",
    "build_matches",
    "create_partner_pairings",
    "groups_for_round",
    "partition_groups",
    "plan_flat",
    "plan_grouped",
    "sequential_pairings",
]
