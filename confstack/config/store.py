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

"""Layered config store for confstack.

This module implements a three-layer configuration store. Each layer is a
plain nested dict populated independently by the caller; the first read
merges them into a single read-only snapshot.

Configuration Layers
--------------------
1. **Defaults** (set_default)
   - Values set in code, lowest precedence

2. **File** (load_file / Config.from_file)
   - One JSON or TOML file (other formats via add_parser)
   - Path resolved against the current working directory at call time
   - A missing or unreadable file is logged and treated as empty

3. **Environment** (bind_env / auto_env / read_env_file)
   - Environment variables named ``<PREFIX><replacer><KEY>``
   - Highest precedence

Merge Behavior
--------------
Deep merge with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from the later layer override)
  - **Lists**: Concatenated (earlier items first)
  - **Scalars**: Overwritten (strings, numbers, booleans, None)

Freezing
--------
The first get(), has(), data or as_dict() call merges the layers exactly
once. The snapshot is rebuilt from scratch (dicts become MappingProxyType,
lists become tuples), so it shares no mutable state with the layers and
cannot be modified through get(). After that, writing to a layer raises
FrozenConfigError.

Error Handling
--------------
- FileAccessError: logged by load_file, never raised to the caller
- UnrecognizedFormatError: no parser registered for the format
- ParseError: malformed file content
- FrozenConfigError: layer written after the first read
- All errors are chained with "from err" for better debugging

Examples
--------
Basic usage:

    >>> from confstack import Config
    >>> config = Config.from_file("config.json", env_prefix="MYAPP")
    >>> config = config.set_default("http.port", 5000).auto_env()
    >>> config.get("http.port")
    4000

Injecting a fake environment:

    >>> config = Config("MYAPP", environ={"MYAPP_HTTP_HOST": "localhost"})
    >>> config.bind_env("http.host").get("http.host")
    'localhost'
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any

from dotenv import dotenv_values

from confstack.exceptions import (
    FileAccessError,
    FrozenConfigError,
    ParseError,
    UnrecognizedFormatError,
)
from confstack.keypath import (
    MISSING,
    KeyPath,
    from_env_key,
    get_path,
    has_path,
    set_path,
    to_env_key,
)
from confstack.logging import Logger, get_global_logger
from confstack.parsers import DEFAULT_PARSERS, Parser

# -------------------------------
# Tree helpers
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> base items followed by overlay items
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        elif k in result and isinstance(result[k], list) and isinstance(v, list):
            result[k] = result[k] + v
        else:
            result[k] = v
    return result


def _freeze_tree(value: Any) -> Any:
    """Rebuild ``value`` with read-only containers."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze_tree(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_tree(v) for v in value)
    return value


def _thaw_tree(value: Any) -> Any:
    """Rebuild ``value`` with plain dicts and lists."""
    if isinstance(value, Mapping):
        return {k: _thaw_tree(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_thaw_tree(v) for v in value]
    return value


def _read_file(path: Path) -> bytes:
    """
    Read a config file.

    Raises:
      FileAccessError - when the file does not exist or cannot be read
    """
    if not path.exists():
        raise FileAccessError(f"Config file does not exist {path}", path=path)
    try:
        return path.read_bytes()
    except OSError as err:
        raise FileAccessError(
            f"Config file could not be read {path}: {err}", path=path
        ) from err


# -------------------------------
# Public API
# -------------------------------


class Config:
    """Layered configuration store.

    Attributes:
        env_prefix: Prefix of environment variables bound by this store.
        env_key_replacer: Separator between prefix and key parts in
            environment variable names.
        nested_env_keys: If True, every dot in a key maps to a replacer in
            environment variable names (and back). If False, only the
            first one does.
        environ: Environment mapping read by bind_env and auto_env.
        defaults: Default layer.
        file_data: File layer.
        env_data: Environment layer.
        parsers: Format identifier -> parser registry.

    Example:
        Layer all three sources:
            ```python
            config = Config("MYAPP")
            config.set_default("http.host", "127.0.0.1")
            config.set_default("http.port", 5000)
            config.load_file("config.toml", "toml")
            config.auto_env()

            port = config.get("http.port")
            ```
    """

    def __init__(
        self,
        env_prefix: str = "",
        env_key_replacer: str = "_",
        *,
        environ: Mapping[str, str] | None = None,
        nested_env_keys: bool = False,
        logger: Logger | None = None,
    ) -> None:
        """Initialize an empty, unfrozen store.

        Args:
            env_prefix: Environment variable prefix (matched
                case-insensitively by auto_env).
            env_key_replacer: Separator used in environment variable names.
            environ: Environment to read from. Defaults to ``os.environ``.
            nested_env_keys: Translate every key separator, not just the
                first, when mapping keys to environment variable names.
            logger: Logger for this store. Defaults to the global logger.
        """
        self.env_prefix = env_prefix or ""
        self.env_key_replacer = env_key_replacer or "_"
        self.nested_env_keys = nested_env_keys
        self.environ: Mapping[str, str] = os.environ if environ is None else environ
        self.defaults: dict[str, Any] = {}
        self.file_data: dict[str, Any] = {}
        self.env_data: dict[str, Any] = {}
        self.parsers: dict[str, Parser] = dict(DEFAULT_PARSERS)
        self._logger = logger
        self._merged: Mapping[str, Any] | None = None

    @classmethod
    def from_file(cls, path: str | Path, format: str = "json", **kwargs: Any) -> Config:
        """Create a store and load ``path`` into its file layer.

        Args:
            path: Config file path, relative to the current directory.
            format: Format identifier of the parser to use.
            **kwargs: Passed to the Config constructor.

        Returns:
            The new store.

        Raises:
            UnrecognizedFormatError: If ``format`` has no parser.
            ParseError: If the file content is malformed.
        """
        return cls(**kwargs).load_file(path, format)

    def __repr__(self) -> str:
        state = "frozen" if self.frozen else "unfrozen"
        return f"<Config env_prefix={self.env_prefix!r} {state}>"

    @property
    def logger(self) -> Logger:
        return self._logger if self._logger is not None else get_global_logger()

    @property
    def frozen(self) -> bool:
        return self._merged is not None

    def _ensure_writable(self, operation: str) -> None:
        if self.frozen:
            raise FrozenConfigError(
                f"Cannot {operation}: config was already read and is frozen"
            )

    # ----- layer writers -----

    def set_default(self, path: KeyPath, value: Any) -> Config:
        """Set the default value for a key.

        Raises:
            FrozenConfigError: If the store is frozen.
        """
        self._ensure_writable("set default")
        set_path(self.defaults, path, value)
        return self

    def bind_env(self, path: str) -> Config:
        """Bind one key to its environment variable.

        The variable name is derived with to_env_key(). An unset variable is
        bound as None, which masks any default or file value for the key.

        Raises:
            FrozenConfigError: If the store is frozen.
        """
        self._ensure_writable("bind env")
        env_key = to_env_key(
            path,
            self.env_prefix,
            self.env_key_replacer,
            replace_all=self.nested_env_keys,
        )
        value = self.environ.get(env_key)
        if value is None:
            self.logger.verbose("ENV", f"{env_key} is not set, {path} bound to None")
        else:
            self.logger.verbose("ENV", f"Bound {path} to {env_key}")
        set_path(self.env_data, path, value)
        return self

    def auto_env(self) -> Config:
        """Bind every environment variable that starts with the prefix.

        The prefix is matched case-insensitively. The environment layer is
        REPLACED, so values from earlier bind_env() calls are dropped.

        Raises:
            FrozenConfigError: If the store is frozen.
        """
        self._ensure_writable("bind env")
        prefix = self.env_prefix.lower()
        env_data: dict[str, Any] = {}
        for name, value in self.environ.items():
            if not name.lower().startswith(prefix):
                continue
            key = from_env_key(
                name,
                self.env_prefix,
                self.env_key_replacer,
                replace_all=self.nested_env_keys,
            )
            self.logger.debug("ENV", f"{name} -> {key}")
            set_path(env_data, key, value)
        self.env_data = env_data
        self.logger.verbose(
            "ENV", f"Bound {len(env_data)} top-level key(s) from environment"
        )
        return self

    def read_env_file(self, path: str | Path = ".env") -> Config:
        """Add variables from a dotenv file to this store's environment.

        Variables already present in the environment win, matching
        ``load_dotenv(override=False)``. Variables declared without a
        value are skipped. Call this before bind_env() or auto_env().

        Args:
            path: Dotenv file path, relative to the current directory.

        Raises:
            FrozenConfigError: If the store is frozen.
        """
        self._ensure_writable("read env file")
        resolved = Path.cwd() / path
        if not resolved.is_file():
            self.logger.warning("ENV", f"Env file does not exist {resolved}")
            return self
        values = {k: v for k, v in dotenv_values(resolved).items() if v is not None}
        self.environ = {**values, **self.environ}
        self.logger.verbose("ENV", f"Loaded {len(values)} variable(s) from {resolved}")
        return self

    def add_parser(self, format: str, parser: Parser) -> Config:
        """Register a parser for a format identifier.

        Replaces any parser already registered under ``format``, including
        the built-in json and toml ones.
        """
        self.parsers[format] = parser
        return self

    def load_file(self, path: str | Path, format: str = "json") -> Config:
        """Load a config file into the file layer.

        Loading is best-effort: if the file is missing or unreadable the
        error is logged, the file layer is left empty and the store falls
        back to defaults and environment.

        Args:
            path: Config file path, relative to the current directory.
            format: Format identifier of the parser to use.

        Raises:
            FrozenConfigError: If the store is frozen.
            UnrecognizedFormatError: If the file exists and ``format`` has
                no parser.
            ParseError: If the file content is malformed or its top level
                is not a mapping.
        """
        self._ensure_writable("load file")
        resolved = Path.cwd() / path
        try:
            raw = _read_file(resolved)
        except FileAccessError as err:
            self.logger.warning("CONFIG", str(err))
            self.file_data = {}
            return self

        parser = self.parsers.get(format)
        if parser is None:
            raise UnrecognizedFormatError(format)

        try:
            data = parser(raw)
        except ParseError as err:
            if err.path is not None:
                raise
            raise ParseError(str(err), format=format, path=resolved) from err

        if not isinstance(data, Mapping):
            raise ParseError(
                "top-level value must be a mapping", format=format, path=resolved
            )

        self.file_data = _thaw_tree(data)
        self.logger.verbose("CONFIG", f"Loaded {format} config: {resolved}")
        return self

    # ----- readers -----

    def freeze(self) -> Mapping[str, Any]:
        """Merge the layers into the read-only snapshot.

        Only the first call merges. Precedence is
        defaults < file < environment.

        Returns:
            The snapshot.
        """
        if self._merged is not None:
            return self._merged
        merged: dict[str, Any] = {}
        for layer in (self.defaults, self.file_data, self.env_data):
            merged = _deep_merge_dicts(merged, layer)
        self._merged = _freeze_tree(merged)
        self.logger.verbose(
            "CONFIG",
            f"Final config has {len(merged)} top-level keys: "
            f"{', '.join(map(str, merged))}",
        )
        return self._merged

    @property
    def data(self) -> Mapping[str, Any]:
        """The merged, read-only snapshot."""
        return self.freeze()

    def get(self, path: KeyPath, default: Any = None) -> Any:
        """Look up a key in the merged config.

        Args:
            path: Key path, e.g. ``"http.port"``.
            default: Returned when the key is absent. Use has() to tell an
                absent key from a present ``None``.

        Returns:
            The value; nested dicts come back as read-only mappings and
            lists as tuples.
        """
        value = get_path(self.data, path)
        return default if value is MISSING else value

    def has(self, path: KeyPath) -> bool:
        """Return True if the key is present in the merged config."""
        return has_path(self.data, path)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, list, tuple)):
            return False
        return self.has(path)

    def as_dict(self) -> dict[str, Any]:
        """Return a mutable deep copy of the merged config."""
        return _thaw_tree(self.data)
