"""JSON serialization helpers for seasonscout.

Detection results carry an optional air date, and CLI output echoes the input
path next to each result. Neither ``datetime.date`` nor ``pathlib.Path`` is
serialisable by the standard encoder, so the CLI ``--json`` mode goes through
:class:`DateTimeEncoder`.
"""

import json
from datetime import date
from pathlib import PurePath
from typing import Any, Self


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder emitting ISO 8601 strings for dates and plain strings for paths."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        # datetime is a date subclass, so both end up as ISO 8601
        if isinstance(obj, date):
            return obj.isoformat()
        if isinstance(obj, PurePath):
            return str(obj)
        return super().default(obj)


def dumps_result(source: str, payload: dict[str, Any]) -> str:
    """Serialise one detection *payload* for *source* as a single JSON line."""
    return json.dumps({"source": source, **payload}, cls=DateTimeEncoder)
