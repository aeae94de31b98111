# pyright: reportAny=false, reportExplicitAny=false, reportUnknownVariableType=false
"""Reading config sources: TOML files and ``DIFFERING_*`` environment variables.

Sources are plain nested dictionaries; :func:`deep_merge` layers them in
precedence order before the result is validated by the pydantic models.
"""

import json
import os
import tomllib
from collections.abc import Mapping
from copy import deepcopy
from pathlib import Path
from typing import Any

from differing.exceptions import ConfigLoadError

ENV_PREFIX = "DIFFERING_"

# Separates the section from the key in environment variable names
_ENV_SEPARATOR = "__"

_BOOLEANS = {"true": True, "false": False}


def read_toml_file(path: Path) -> dict[str, Any]:
    """Parse one TOML config file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigLoadError: If the file is not valid TOML. The message carries
            the line and column reported by the parser.
    """
    raw = path.read_bytes()
    try:
        return tomllib.loads(raw.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigLoadError(
            f"Failed to parse TOML file: {e}",
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` layered on top.

    Tables merge key by key; any other value in ``override`` replaces the one
    in ``base`` wholesale. The inputs are left untouched.
    """
    merged = deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Collect ``<prefix>SECTION__KEY`` variables into a nested dictionary.

    ``DIFFERING_SERVER__PORT=9000`` becomes ``{"server": {"port": 9000}}``.
    Names without a section separator, such as ``DIFFERING_DEBUG``, are
    process switches and are skipped.
    """
    values: dict[str, Any] = {}
    for name, raw in (os.environ if environ is None else environ).items():
        if not name.startswith(prefix):
            continue
        dotted = name.removeprefix(prefix)
        if _ENV_SEPARATOR not in dotted:
            continue
        key_path = dotted.lower().replace(_ENV_SEPARATOR, ".")
        set_nested_key(values, key_path, parse_string_value(raw))
    return values


def parse_string_value(value: str) -> Any:
    """Infer the type of an environment variable value.

    Booleans (``true``/``false``, any case) come first, then integers,
    floats containing a dot, and JSON arrays or objects. Anything else stays a
    string, so ``"0.0.0.0"`` remains a host name.

    Examples:
        >>> parse_string_value("3844")
        3844
        >>> parse_string_value("0.0.0.0")
        '0.0.0.0'
    """
    if value.lower() in _BOOLEANS:
        return _BOOLEANS[value.lower()]

    for convert in (int, float):
        if convert is float and "." not in value:
            break
        try:
            return convert(value)
        except ValueError:
            continue

    bracketed = value[:1] + value[-1:]
    if bracketed in ("[]", "{}"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def set_nested_key(d: dict[str, Any], key_path: str, value: Any) -> None:
    """Assign ``value`` at a dotted ``key_path``, creating tables on the way.

    A scalar sitting where a table is needed is replaced by the table.
    """
    *parents, leaf = key_path.split(".")
    table = d
    for part in parents:
        child = table.get(part)
        if not isinstance(child, dict):
            child = table[part] = {}
        table = child
    table[leaf] = value
