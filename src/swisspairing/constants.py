# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
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

# Match outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5

# Result values (closed set, as stored on a match row)
RESULT_WIN_P1 = "WIN_P1"
RESULT_WIN_P2 = "WIN_P2"
RESULT_DRAW = "DRAW"
RESULT_BYE = "BYE"

# Round status values
ROUND_PENDING = "pending"
ROUND_STARTED = "started"
ROUND_COMPLETED = "completed"

# Bye policy
DEFAULT_MAX_BYES = 2
BYE_POLICY_RAISE = "raise"
BYE_POLICY_ALLOW_EXTRA = "allow_extra_bye"
BYE_POLICIES = (BYE_POLICY_RAISE, BYE_POLICY_ALLOW_EXTRA)

# Tiebreakers
RESISTANCE_FLOOR = 0.25

# Node budget for the completion search run when greedy matching leaves
# players unplaced
DEFAULT_BACKTRACK_LIMIT = 100_000

# Swiss round recommendations: (max players, rounds)
SUGGESTED_ROUNDS_TABLE = (
    (8, 3),
    (16, 4),
    (32, 5),
    (64, 6),
    (128, 7),
    (226, 8),
)
SUGGESTED_ROUNDS_MAX = 9
