"""Validation utilities for Debate Draw.

This module provides reusable validation functions with consistent error
handling, and the British Parliamentary setup checks shown to organisers
before a draw is generated.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from debatedraw.constants import (
    FINDING_ERROR,
    FINDING_SUCCESS,
    FINDING_WARNING,
    MAX_ROUNDS_PER_DAY,
    MAX_TEAMS_FOR_TOURNAMENT,
    MIN_JUDGES_PER_ROOM,
    MIN_TEAMS_FOR_TOURNAMENT,
    SPEAKERS_PER_TEAM,
    TEAMS_PER_ROOM,
)
from debatedraw.exceptions import ValidationException
from debatedraw.models.team import Team


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Generic Validation ==========


def validate_non_empty(
    value: Optional[str], field_name: str = "Field"
) -> ValidationResult:
    """Validate that a field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if not value or not str(value).strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be empty",
        )
    return ValidationResult(is_valid=True, sanitized_value=str(value).strip())


# ========== Team Validation ==========


def validate_team(team: Team) -> ValidationResult:
    """Validate a registered team before it enters the draw.

    Args:
        team: Team to validate

    Returns:
        ValidationResult; the sanitized value is the team name
    """
    for value, field_name in ((team.id, "Team id"), (team.name, "Team name")):
        result = validate_non_empty(value, field_name)
        if not result:
            return result

    speakers = [s for s in team.speakers if s and s.strip()]
    if len(speakers) < SPEAKERS_PER_TEAM:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Team {team.name!r} needs at least {SPEAKERS_PER_TEAM} speakers, "
                f"has {len(speakers)}"
            ),
        )
    return ValidationResult(is_valid=True, sanitized_value=team.name.strip())


def validate_team_strict(team: Team) -> None:
    """Validate a team and raise exception if invalid.

    Raises:
        ValidationException: If the team is invalid
    """
    result = validate_team(team)
    if not result.is_valid:
        raise ValidationException(result.error_message)


# ========== Setup Validation ==========


@dataclass
class SetupFinding:
    """One line of feedback about a tournament setup."""

    level: str
    message: str
    details: List[str] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.level == FINDING_ERROR


def validate_setup(
    team_count: int,
    judge_count: int,
    room_count: Optional[int] = None,
    round_count: Optional[int] = None,
) -> List[SetupFinding]:
    """Check a British Parliamentary setup against the format constraints.

    Args:
        team_count: Registered teams
        judge_count: Available judges
        room_count: Rooms to draw; defaults to ``team_count // 4``
        round_count: Rounds planned for the day, if known

    Returns:
        Findings in check order; any ``error`` finding blocks the draw
    """
    findings = []

    if team_count < MIN_TEAMS_FOR_TOURNAMENT:
        findings.append(
            SetupFinding(
                FINDING_ERROR,
                "Insufficient teams for British Parliamentary",
                [
                    f"Minimum {MIN_TEAMS_FOR_TOURNAMENT} teams required, "
                    f"you have {team_count}"
                ],
            )
        )
    elif team_count > MAX_TEAMS_FOR_TOURNAMENT:
        findings.append(
            SetupFinding(
                FINDING_ERROR,
                "Too many teams for British Parliamentary",
                [
                    f"Maximum {MAX_TEAMS_FOR_TOURNAMENT} teams allowed, "
                    f"you have {team_count}"
                ],
            )
        )
    else:
        findings.append(
            SetupFinding(
                FINDING_SUCCESS,
                "Team count is valid",
                [f"{team_count} teams within acceptable range"],
            )
        )

    rooms = room_count if room_count is not None else team_count // TEAMS_PER_ROOM
    judges_required = rooms * MIN_JUDGES_PER_ROOM
    if judge_count < judges_required:
        findings.append(
            SetupFinding(
                FINDING_ERROR,
                "Insufficient judges",
                [
                    f"Need {judges_required} judges minimum "
                    f"({MIN_JUDGES_PER_ROOM} per room)",
                    f"You have {judge_count} judges",
                    f"{rooms} rooms required",
                ],
            )
        )
    else:
        findings.append(
            SetupFinding(
                FINDING_SUCCESS,
                "Judge count is appropriate",
                [f"{judge_count} judges for {rooms} rooms"],
            )
        )

    if round_count is not None:
        if round_count > MAX_ROUNDS_PER_DAY:
            findings.append(
                SetupFinding(
                    FINDING_WARNING,
                    "High number of rounds",
                    [
                        f"{round_count} rounds exceeds recommended "
                        f"{MAX_ROUNDS_PER_DAY} per day",
                        "Consider spreading across multiple days",
                    ],
                )
            )
        else:
            findings.append(
                SetupFinding(
                    FINDING_SUCCESS,
                    "Round count is reasonable",
                    [f"{round_count} rounds within daily limit"],
                )
            )

    slots = rooms * TEAMS_PER_ROOM
    if team_count % TEAMS_PER_ROOM != 0 or (room_count is not None and slots != team_count):
        if team_count < slots:
            detail = f"{slots - team_count} swing team(s) will be used"
        else:
            detail = f"{team_count - slots} team(s) will sit out"
        findings.append(
            SetupFinding(
                FINDING_WARNING,
                "Team count not optimal for format",
                [detail, f"Consider adjusting team count to a multiple of {TEAMS_PER_ROOM}"],
            )
        )

    return findings


def validate_team_pool(teams: Sequence[Team]) -> List[SetupFinding]:
    """Per-team checks plus duplicate ids across the pool."""
    findings = []
    seen = set()
    for team in teams:
        if team.id in seen:
            findings.append(
                SetupFinding(FINDING_ERROR, "Duplicate team id", [team.id])
            )
        seen.add(team.id)
        result = validate_team(team)
        if not result:
            findings.append(
                SetupFinding(FINDING_ERROR, "Invalid team", [result.error_message])
            )
    return findings


def rooms_needed(team_count: int) -> int:
    """Rooms needed to seat every team, swing teams filling the last room."""
    return max(1, math.ceil(team_count / TEAMS_PER_ROOM))
