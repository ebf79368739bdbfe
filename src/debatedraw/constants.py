# Debate Draw
# Copyright (C) 2025  Debate Draw developers
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

# British Parliamentary positions, in speaking order
POSITION_OG = "OG"  # Opening Government
POSITION_OO = "OO"  # Opening Opposition
POSITION_CG = "CG"  # Closing Government
POSITION_CO = "CO"  # Closing Opposition
POSITIONS = (POSITION_OG, POSITION_OO, POSITION_CG, POSITION_CO)
TEAMS_PER_ROOM = len(POSITIONS)

POSITION_NAMES = {
    POSITION_OG: "Opening Government",
    POSITION_OO: "Opening Opposition",
    POSITION_CG: "Closing Government",
    POSITION_CO: "Closing Opposition",
}

# Storage columns for each position. OG is the government bench the ballots
# and standings are computed against, do not reorder.
POSITION_COLUMNS = {
    POSITION_OG: "gov_team_id",
    POSITION_OO: "opp_team_id",
    POSITION_CG: "cg_team_id",
    POSITION_CO: "co_team_id",
}
DRAW_STATUS_PENDING = "pending"

# Draw generation methods
METHOD_RANDOM = "random"
METHOD_POWER_PAIRING = "power_pairing"
METHOD_SWISS = "swiss"
METHOD_BALANCED = "balanced"
DEFAULT_METHOD = METHOD_RANDOM

# Compatibility cost weights (lower total is better)
INSTITUTION_CLASH_PENALTY = 100
REPEAT_PAIRING_PENALTY = 50

# Position cost model
DEFAULT_POSITION_COST_EXPONENT = 4.0
DEFAULT_RENYI_ORDER = 1.0  # 1 is Shannon entropy

# Swing teams
SWING_ID_PREFIX = "swing-"
SWING_INSTITUTION = "Swing"
SWING_NAME_PREFIX = "Swing Team"
SWING_SPEAKERS = ("Swing Speaker 1", "Swing Speaker 2")
UNKNOWN_TOURNAMENT_ID = "unknown"

# Room labels and ids
ROOM_ID_PREFIX = "room-"
DEFAULT_ROOM_LABEL = "Room {number}"

# British Parliamentary format limits
MIN_TEAMS_FOR_TOURNAMENT = 4
MAX_TEAMS_FOR_TOURNAMENT = 400
MIN_JUDGES_PER_ROOM = 1
MAX_ROUNDS_PER_DAY = 5
SPEAKERS_PER_TEAM = 2

# Setup finding levels
FINDING_SUCCESS = "success"
FINDING_WARNING = "warning"
FINDING_ERROR = "error"
