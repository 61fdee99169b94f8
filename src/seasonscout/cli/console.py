"""Console utilities for CLI commands.

* A ``ConsoleManager`` context manager yielding a pre-configured
  :class:`rich.console.Console`.
* Opt-out via the ``--no-rich`` flag (sets env var ``SEASONSCOUT_NO_RICH``) or
  the environment variable being set externally, for piping detection output
  into other tools.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any, Dict

from rich.console import Console
from rich.traceback import install as install_rich_traceback

__all__ = [
    "NO_RICH_ENV_VAR",
    "ConsoleManager",
    "rich_enabled",
]

NO_RICH_ENV_VAR = "SEASONSCOUT_NO_RICH"


def rich_enabled() -> bool:
    """Whether styled output is allowed by the environment."""
    return os.getenv(NO_RICH_ENV_VAR, "0").lower() not in {"1", "true", "yes"}


class ConsoleManager(AbstractContextManager):
    """Context manager that yields a configured Rich :class:`Console`.

    Parameters
    ----------
    record:
        Forwarded to :class:`rich.console.Console` so tests can read the
        output back with ``console.export_text``.
    force_use:
        When *True* / *False* this overrides autodetection and forces rich
        enabled/disabled. When *None*, autodetect via ``SEASONSCOUT_NO_RICH``.
    console_kwargs:
        Additional keyword arguments forwarded verbatim to the Console.
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self._record = record
        self._force_use = force_use
        self._console_kwargs: Dict[str, Any] = console_kwargs
        self.console: Console | None = None

    def __enter__(self) -> Console:
        use_rich = self._force_use if self._force_use is not None else rich_enabled()

        if use_rich:
            self.console = Console(record=self._record, **self._console_kwargs)
        else:
            # no colour codes and no terminal features in plain mode
            self.console = Console(
                record=self._record,
                color_system=None,
                force_terminal=False,
                **self._console_kwargs,
            )

        install_rich_traceback(show_locals=use_rich, console=self.console)
        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is not None:
            if exc_type is not None:
                self.console.print_exception()
            self.console.file.flush()
        # exceptions propagate
        return False
