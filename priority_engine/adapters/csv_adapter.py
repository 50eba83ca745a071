"""CSV adapter for calendar events."""

from __future__ import annotations

import csv
import logging

from priority_engine.adapters.fields import build_event
from priority_engine.schema import Event

logger = logging.getLogger(__name__)


def _parse_row(row: dict, row_number: int) -> Event:
    if None in row:
        raise ValueError(f"Row {row_number}: more values than header columns")
    return build_event(row, f"Row {row_number}")


def parse(file_path: str) -> list[Event]:
    """Parse CSV file with a header row into a list of events."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        events: list[Event] = []
        for row_number, row in enumerate(reader, start=2):
            events.append(_parse_row(row, row_number))

    logger.debug("Parsed %d event(s) from %s", len(events), file_path)
    return events
