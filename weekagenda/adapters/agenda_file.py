"""
Read raw agenda records from JSON or YAML files.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List

import pendulum
import yaml

from ..domain.exceptions import AgendaFileError

logger = logging.getLogger(__name__)

DATE_FIELDS = ("start_date", "end_date")


def _parse_datetime(value: Any, timezone: str) -> Any:
    """
    Turn a date string into a pendulum DateTime.

    Values that cannot be parsed are returned unchanged; the appointment
    built from them is then flagged invalid and skipped.
    """
    if isinstance(value, datetime):
        return pendulum.instance(value, tz=timezone)

    if isinstance(value, date):
        return pendulum.datetime(value.year, value.month, value.day, tz=timezone)

    if isinstance(value, str):
        try:
            return pendulum.parse(value, tz=timezone)
        except ValueError as exc:
            logger.warning("Could not parse date %r: %s", value, exc)

    return value


def _read_raw(path: Path) -> Any:
    suffix = path.suffix.lower()

    with open(path, "r", encoding="utf-8") as f:
        if suffix == ".json":
            try:
                return json.load(f)
            except json.JSONDecodeError as exc:
                raise AgendaFileError(f"Invalid JSON in {path}: {exc}") from exc

        if suffix in (".yaml", ".yml"):
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise AgendaFileError(f"Invalid YAML in {path}: {exc}") from exc

    raise AgendaFileError(f"Unsupported agenda file type: {path.suffix or path.name}")


def load_agenda(path: Path, timezone: str = "UTC") -> List[Dict[str, Any]]:
    """
    Load agenda records from a JSON or YAML file.

    Args:
        path: File holding a list of ``{start_date, end_date, title}`` mappings
        timezone: Timezone assumed for dates without an offset

    Returns:
        List of records with parsed start and end dates

    Raises:
        AgendaFileError: If the file is missing, unsupported or not a list
    """
    if not path.exists():
        raise AgendaFileError(f"Agenda file not found: {path}")

    data = _read_raw(path)

    if data is None:
        return []

    if not isinstance(data, list):
        raise AgendaFileError("Agenda file must contain a list of appointments at the root level.")

    records: List[Dict[str, Any]] = []

    for entry in data:
        if not isinstance(entry, dict):
            logger.warning("Ignoring agenda entry that is not a mapping: %r", entry)
            continue

        record = dict(entry)
        for key in DATE_FIELDS:
            record[key] = _parse_datetime(record.get(key), timezone)
        records.append(record)

    logger.debug("Loaded %d agenda record(s) from %s", len(records), path)
    return records
