"""Tournament data models."""

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

from courtpairing.models.tournament.match import Match, Pair
from courtpairing.models.tournament.match_result import MatchResult
from courtpairing.models.tournament.partnership_ledger import (
    PartnershipLedger,
    build_ledger,
)
from courtpairing.models.tournament.round_data import RoundData
from courtpairing.models.tournament.tournament_config import TournamentConfig

__all__ = [
    "Match",
    "MatchResult",
    "Pair",
    "PartnershipLedger",
    "RoundData",
    "TournamentConfig",
    "build_ledger",
]
