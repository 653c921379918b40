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

# Doubles: two teams of two per match
PLAYERS_PER_PAIR = 2
PAIRS_PER_MATCH = 2
PLAYERS_PER_SURFACE = PLAYERS_PER_PAIR * PAIRS_PER_MATCH

# Cohort limits (inclusive)
MIN_PARTICIPANTS = 4
MAX_PARTICIPANTS = 24

# At most this many participants may sit out a round
MAX_WAITING_PARTICIPANTS = 6

# Score bounds for a single match (games won by a team)
MIN_SCORE = 0
DEFAULT_MAX_SCORE = 7

# Scoring rules
SCORING_GAMES = "games"  # each player gains the games their team won
SCORING_MATCH_POINTS = "match_points"  # fixed points for a win or a loss
DEFAULT_SCORING_RULE = SCORING_GAMES
SCORING_RULES = (SCORING_GAMES, SCORING_MATCH_POINTS)

# Per-player points under the match_points rule
MATCH_WIN_POINTS = 2
MATCH_LOSS_POINTS = 0

# Grouped (large cohort) mode
DEFAULT_GROUPED_THRESHOLD = 24
DEFAULT_GROUP_COUNT = 3

DEFAULT_TOURNAMENT_NAME = "Untitled Tournament"
