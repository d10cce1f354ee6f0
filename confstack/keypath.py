# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Dotted key paths and environment variable names.

A key path such as ``"http.port"`` addresses a value inside nested dicts.
This module reads and writes values by key path and translates key paths
to and from environment variable names (``"http.port"`` <->
``"MYAPP_HTTP_PORT"``).

Key Transcoding
---------------
By default only the FIRST separator is translated, in both directions:

    >>> to_env_key("a.b.c", "app", "_")
    'APP_A_B.C'
    >>> from_env_key("APP_A_B_C", "app", "_")
    'a.b_c'

Keys nested deeper than two levels therefore do not round-trip. Pass
``replace_all=True`` to translate every separator instead:

    >>> to_env_key("a.b.c", "app", "_", replace_all=True)
    'APP_A_B_C'
    >>> from_env_key("APP_A_B_C", "app", "_", replace_all=True)
    'a.b.c'

Functions
---------
get_path, has_path, set_path : nested dict access by key path
to_env_key, from_env_key : key path <-> environment variable name
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

__all__ = [
    "MISSING",
    "KeyPath",
    "split_path",
    "get_path",
    "has_path",
    "set_path",
    "to_env_key",
    "from_env_key",
]

KeyPath = str | Sequence[str | int]


class _Missing:
    """Type of the MISSING sentinel."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def split_path(path: KeyPath) -> tuple[str | int, ...]:
    """Split a key path into its segments.

    Args:
        path: Dotted string (``"http.port"``) or a sequence of segments
            (``["http", "port"]``). The empty string has no segments.

    Returns:
        Tuple of segments.
    """
    if isinstance(path, str):
        return tuple(path.split(".")) if path else ()
    return tuple(path)


def _as_index(segment: str | int) -> int | None:
    if isinstance(segment, int):
        return segment
    if segment.isdigit():
        return int(segment)
    return None


def get_path(data: Mapping[str, Any], path: KeyPath) -> Any:
    """Return the value at ``path`` or MISSING.

    Mappings are traversed by key, lists and tuples by integer segment
    (``"servers.0.host"``). A missing key, an out-of-range index or a
    scalar in the middle of the path all yield MISSING; nothing raises.

    Args:
        data: Nested mapping to read from.
        path: Key path to look up.

    Returns:
        The addressed value, or MISSING if the path does not exist.
    """
    current: Any = data
    for segment in split_path(path):
        if isinstance(current, Mapping):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, (list, tuple)):
            index = _as_index(segment)
            if index is None or not 0 <= index < len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def has_path(data: Mapping[str, Any], path: KeyPath) -> bool:
    """Return True if ``path`` exists in ``data``.

    Presence is about the path, not the value: ``None``, ``False``, ``0``
    and ``""`` leaves are all present.
    """
    return get_path(data, path) is not MISSING


def set_path(
    data: MutableMapping[str, Any], path: KeyPath, value: Any
) -> MutableMapping[str, Any]:
    """Write ``value`` at ``path``, creating intermediate dicts.

    Any non-dict value found on the way is REPLACED by an empty dict, so
    ``set_path({"a": 1}, "a.b", 2)`` yields ``{"a": {"b": 2}}``.

    Args:
        data: Mapping to modify in place.
        path: Key path to write. An empty path leaves ``data`` untouched.
        value: Value to store.

    Returns:
        ``data``, for chaining.
    """
    segments = [str(s) for s in split_path(path)]
    if not segments:
        return data

    current = data
    for segment in segments[:-1]:
        child = current.get(segment)
        if not isinstance(child, MutableMapping):
            child = {}
            current[segment] = child
        current = child
    current[segments[-1]] = value
    return data


def to_env_key(
    path: str, prefix: str, replacer: str, *, replace_all: bool = False
) -> str:
    """Derive the environment variable name for a key path.

    Args:
        path: Dotted key path, e.g. ``"http.host"``.
        prefix: Environment variable prefix, e.g. ``"myapp"``.
        replacer: Separator placed between prefix and key parts.
        replace_all: Translate every dot instead of only the first.

    Returns:
        Upper-cased variable name, e.g. ``"MYAPP_HTTP_HOST"``.
    """
    count = -1 if replace_all else 1
    key = path.upper().replace(".", replacer, count)
    return f"{prefix.upper()}{replacer}{key}"


def from_env_key(
    env_name: str, prefix: str, replacer: str, *, replace_all: bool = False
) -> str:
    """Derive the key path for an environment variable name.

    The name is lower-cased, the first ``prefix + replacer`` occurrence is
    removed, then the first remaining ``replacer`` becomes a dot.

    Args:
        env_name: Environment variable name, e.g. ``"MYAPP_HTTP_HOST"``.
        prefix: Environment variable prefix (any case).
        replacer: Separator used between prefix and key parts.
        replace_all: Turn every remaining separator into a dot.

    Returns:
        Dotted key path, e.g. ``"http.host"``.
    """
    count = -1 if replace_all else 1
    key = env_name.lower().replace(f"{prefix.lower()}{replacer}", "", 1)
    return key.replace(replacer, ".", count)
