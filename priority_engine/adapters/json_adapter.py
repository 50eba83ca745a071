"""JSON adapter for calendar events."""

from __future__ import annotations

import json
import logging

from priority_engine.adapters.fields import build_event
from priority_engine.schema import Event

logger = logging.getLogger(__name__)


def _parse_item(item: dict, index: int) -> Event:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")
    return build_event(item, f"Item {index}")


def parse(file_path: str) -> list[Event]:
    """Parse JSON file holding a list of event objects."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    events = [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
    logger.debug("Parsed %d event(s) from %s", len(events), file_path)
    return events
