"""Exceptions raised by the episode detection engine.

Normal filename text never raises: unparseable input simply yields an empty
:class:`~seasonscout.models.core.MatchResult`. The only condition signalled to
callers is input long enough to risk pathological regex backtracking, so that
batch callers can skip the file and move on.
"""


class ParserError(Exception):
    """Base class for all seasonscout parser errors."""

    pass


class InputTooLongError(ParserError):
    """Raised when a name exceeds the configured maximum input length."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(
            f"Input of {length} characters exceeds the limit of {limit} characters"
        )
