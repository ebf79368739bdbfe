"""JSON files read and written by the command line."""

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

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from debatedraw.exceptions import FileLoadException, FileSaveException
from debatedraw.models import DrawOptions, Judge, PairingMemo, PositionHistoryBook, Team
from debatedraw.utils import setup_logger
from debatedraw.utils.validation import rooms_needed

logger = setup_logger(__name__)


@dataclass
class DrawInput:
    """Everything needed to generate one round's draw."""

    teams: List[Team]
    judges: List[Judge] = field(default_factory=list)
    rooms: List[str] = field(default_factory=list)
    options: DrawOptions = field(default_factory=DrawOptions)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FileLoadException(f"Could not read {path}: {e}") from e


def _records(data: Dict[str, Any], key: str, path: Path) -> List[Dict[str, Any]]:
    """The list of objects under ``key``, empty when the key is absent."""
    records = data.get(key) or []
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise FileLoadException(f"{path}: '{key}' must be a list of objects")
    return records


def load_draw_input(path: Path) -> DrawInput:
    """Read teams, judges, rooms and options from a JSON file.

    When ``rooms`` is missing, enough rooms for every team are labelled
    ``Room 1``, ``Room 2``, ...
    """
    data = _read_json(path)
    if not isinstance(data, dict) or not isinstance(data.get("teams"), list):
        raise FileLoadException(f"{path} must be an object with a 'teams' list")

    teams = [Team.from_dict(t) for t in _records(data, "teams", path)]
    judges = [Judge.from_dict(j) for j in _records(data, "judges", path)]
    rooms = data.get("rooms") or []
    if not isinstance(rooms, list):
        raise FileLoadException(f"{path}: 'rooms' must be a list of labels")
    rooms = [str(r) for r in rooms]
    if not rooms and teams:
        rooms = [f"Room {i + 1}" for i in range(rooms_needed(len(teams)))]
    options = DrawOptions.from_dict(data.get("options") or {})

    logger.info(
        "Loaded %s teams, %s judges and %s rooms from %s",
        len(teams),
        len(judges),
        len(rooms),
        path,
    )
    return DrawInput(teams=teams, judges=judges, rooms=rooms, options=options)


def load_history(path: Path) -> Tuple[PositionHistoryBook, PairingMemo]:
    """Read the position history book and pairing memo, empty if absent."""
    if not path.exists():
        logger.info("No history at %s, starting fresh", path)
        return PositionHistoryBook(), PairingMemo()
    data = _read_json(path)
    if not isinstance(data, dict):
        raise FileLoadException(
            f"{path} must be an object with 'positions' and 'pairings'"
        )
    return (
        PositionHistoryBook.from_dict(data.get("positions", {})),
        PairingMemo.from_dict(data.get("pairings", {})),
    )


def save_history(path: Path, book: PositionHistoryBook, memo: PairingMemo) -> None:
    payload: Dict[str, Any] = {"positions": book.to_dict(), "pairings": memo.to_dict()}
    try:
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as e:
        raise FileSaveException(f"Could not write {path}: {e}") from e


def write_json(path: Path, payload: Any) -> None:
    try:
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as e:
        raise FileSaveException(f"Could not write {path}: {e}") from e
