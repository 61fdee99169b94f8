"""Config utility for persistent SeasonScout settings.

Settings live in ~/.config/seasonscout/config.toml (respecting
XDG_CONFIG_HOME). The file is read with tomli and written with tomli-w.

The detection engine itself never reads settings; the CLI resolves them here
and passes plain values (bad words, input length limit) into the engine.

Known keys:
- ``parser.max_input_length``: longest path accepted by ``detect``.
- ``parser.bad_words``: extra release-group noise words to strip.
"""

from pathlib import Path
from typing import TypeVar, Any, List, Optional, cast
import os
import contextlib

import tomli
import tomli_w

from seasonscout.core.detector import MAX_INPUT_LENGTH

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "seasonscout"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "SEASONSCOUT_"
_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""
    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _write_config_file(data: dict[str, Any]) -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="parser.bad_words" will attempt
    ``data["parser"]["bad_words"]`` returning None if any level is missing.
    """
    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "parser.bad_words" -> "SEASONSCOUT_PARSER_BAD_WORDS".
    """
    return prefix + dotted_key.replace(".", "_").upper()


def _split_words(value: str) -> List[str]:
    return [word.strip() for word in value.split(",") if word.strip()]


def _coerce(value: Any, default: T) -> T:
    """Coerce a raw env/config *value* to the type of *default*.

    Values that cannot be coerced fall back to *default*.
    """
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(value))
        return default
    if isinstance(default, list):
        if isinstance(value, list):
            return cast(T, [str(item) for item in value])
        if isinstance(value, str):
            return cast(T, _split_words(value))
        return default
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"parser.max_input_length"``.
        default: Value to fall back to when no overrides found. Its type
            drives coercion of env/config values (lists come from
            comma-separated env values).
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """
    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    return default


def get_max_input_length(cli_value: Optional[int] = None) -> int:
    """Return the configured maximum input length for detection."""
    return resolve_setting(
        "parser.max_input_length", default=MAX_INPUT_LENGTH, cli_value=cli_value
    )


def get_bad_words() -> List[str]:
    """Return the configured release noise words (empty when unset)."""
    return resolve_setting("parser.bad_words", default=cast(List[str], []))


def add_bad_word(word: str) -> List[str]:
    """Persist *word* in the config file's ``parser.bad_words`` list.

    Args:
        word: The noise word to add; surrounding whitespace is ignored.

    Returns:
        The stored list after the update.

    Raises:
        ValueError: If *word* is blank.
    """
    word = word.strip()
    if not word:
        raise ValueError("Bad word must not be blank")
    data = _read_config_file()
    parser = data.setdefault("parser", {})
    words = [str(item) for item in parser.get("bad_words", [])]
    if word.lower() not in (existing.lower() for existing in words):
        words.append(word)
    parser["bad_words"] = words
    _write_config_file(data)
    return words
