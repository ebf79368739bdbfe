"""Exceptions for use in Debate Draw"""

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


# ========== Base Application Exception ==========


class DebateDrawException(Exception):
    """Base exception for all Debate Draw errors.

    All custom exceptions in the package inherit from this class, so callers
    can catch every engine error with a single except clause.
    """

    pass


# ========== Draw Exceptions ==========


class DrawException(DebateDrawException):
    """Base exception for draw generation errors."""

    pass


class InsufficientInputError(DrawException, ValueError):
    """Raised when there are no rooms, no teams, or (without swing teams)
    not enough real teams to fill every room.

    Nothing is returned when this is raised; a partial draw must never be
    persisted.
    """

    pass


class SwingTeamPersistenceError(DrawException):
    """Raised when a synthetic swing team reaches a persistence mapping
    that was asked to reject them."""

    pass


# ========== Model Exceptions ==========


class ModelException(DebateDrawException):
    """Base exception for malformed model data."""

    pass


class InvalidTeamDataException(ModelException):
    """Raised when team data is invalid or incomplete."""

    pass


class InvalidJudgeDataException(ModelException):
    """Raised when judge data is invalid or incomplete."""

    pass


class InvalidDrawDataException(ModelException):
    """Raised when a serialized draw room cannot be read back."""

    pass


# ========== History Exceptions ==========


class HistoryException(DebateDrawException):
    """Raised when position history or pairing memo data is malformed."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(DebateDrawException):
    """Base exception for validation errors."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(DebateDrawException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when draw options are invalid."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(DebateDrawException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass
