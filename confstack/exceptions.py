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

"""Exception hierarchy for confstack.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- ConfigError: Misuse of a Config store (unknown format, write after freeze)
- ParseError: Malformed file content for the chosen format
- FileAccessError: Config file missing or unreadable

All exceptions inherit from ConfstackError, allowing users to catch all
confstack errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from confstack import Config
        from confstack.exceptions import ParseError, UnrecognizedFormatError

        try:
            config = Config.from_file("config.toml", "toml")
        except UnrecognizedFormatError as e:
            print(f"No parser: {e}")
        except ParseError as e:
            print(f"Bad config file: {e}")
        ```

Note:
    FileAccessError is normally never seen by callers. Config.load_file()
    logs it and carries on with an empty file layer.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ConfstackError",
    "ConfigError",
    "UnrecognizedFormatError",
    "FrozenConfigError",
    "ParseError",
    "FileAccessError",
]


class ConfstackError(Exception):
    """Base exception for all confstack errors.

    All confstack-specific exceptions inherit from this class, allowing
    users to catch all confstack errors with a single except clause.
    """

    pass


class ConfigError(ConfstackError):
    """Raised when a Config store is used incorrectly."""

    pass


class UnrecognizedFormatError(ConfigError):
    """Raised when no parser is registered for the requested format.

    Attributes:
        format: The format identifier that was requested.
    """

    def __init__(self, format: str) -> None:
        self.format = format
        super().__init__(f"Unrecognised parser {format!r}")


class FrozenConfigError(ConfigError):
    """Raised when a source layer is written after the store was frozen.

    Once the first read has merged the layers, further writes could never
    reach the snapshot, so they are rejected instead of silently ignored.
    """

    pass


class ParseError(ConfstackError):
    """Raised when file content cannot be parsed.

    Attributes:
        format: Format identifier of the failing parser.
        path: File being parsed, when known.
    """

    def __init__(
        self, message: str, *, format: str | None = None, path: Path | None = None
    ) -> None:
        self.format = format
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class FileAccessError(ConfstackError, OSError):
    """Raised when a config file does not exist or cannot be read.

    Attributes:
        path: The resolved file path.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        self.path = path
        super().__init__(message)
