"""Debate Draw: British Parliamentary draw generation for debate tournaments."""

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

from debatedraw.draw import DrawGenerator, to_database_rows
from debatedraw.exceptions import DebateDrawException, InsufficientInputError
from debatedraw.models import (
    DrawOptions,
    DrawRoom,
    ExperienceLevel,
    Judge,
    PairingMemo,
    PersistableDraw,
    PositionHistory,
    PositionHistoryBook,
    Team,
)

__version__ = "0.1.0"

__all__ = [
    "DrawGenerator",
    "to_database_rows",
    "DebateDrawException",
    "InsufficientInputError",
    "DrawOptions",
    "DrawRoom",
    "ExperienceLevel",
    "Judge",
    "PairingMemo",
    "PersistableDraw",
    "PositionHistory",
    "PositionHistoryBook",
    "Team",
]
