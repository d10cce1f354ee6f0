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

"""Config file parsers for confstack.

A parser is any callable that turns the raw bytes of a config file into a
nested mapping. Parsers are looked up by format identifier in each Config's
registry; the identifiers in DEFAULT_PARSERS are registered for every new
Config.

Built-in parsers:

- json: strict JSON (standard library)
- toml: TOML (standard library tomllib)
- yaml: YAML via PyYAML safe_load. Shipped but NOT registered by default.

All built-ins raise ParseError, chained to the underlying error, on
malformed input or invalid UTF-8.

Example:
    Enable YAML files:
        ```python
        from confstack import Config
        from confstack.parsers import parse_yaml

        config = Config("MYAPP").add_parser("yaml", parse_yaml)
        config.load_file("config.yaml", "yaml")
        ```

    Register a custom parser:
        ```python
        def parse_ini(raw: bytes) -> dict:
            ...

        config.add_parser("ini", parse_ini)
        ```
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import json
import tomllib
from typing import Any

import yaml

from confstack.exceptions import ParseError

__all__ = [
    "Parser",
    "DEFAULT_PARSERS",
    "parse_json",
    "parse_toml",
    "parse_yaml",
]

Parser = Callable[[bytes], Mapping[str, Any]]


def _decode(raw: bytes, format: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as err:
        raise ParseError(f"invalid UTF-8: {err}", format=format) from err


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard constant {name}")


def parse_json(raw: bytes) -> dict[str, Any]:
    """Parse JSON config content.

    NaN, Infinity and -Infinity are rejected.

    Raises:
        ParseError: On malformed JSON.
    """
    text = _decode(raw, "json")
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as err:
        raise ParseError(f"invalid JSON: {err}", format="json") from err


def parse_toml(raw: bytes) -> dict[str, Any]:
    """Parse TOML config content.

    Raises:
        ParseError: On malformed TOML.
    """
    try:
        return tomllib.loads(_decode(raw, "toml"))
    except tomllib.TOMLDecodeError as err:
        raise ParseError(f"invalid TOML: {err}", format="toml") from err


def parse_yaml(raw: bytes) -> dict[str, Any]:
    """Parse YAML config content.

    An empty document yields an empty dict.

    Raises:
        ParseError: On malformed YAML.
    """
    try:
        data = yaml.safe_load(_decode(raw, "yaml"))
    except yaml.YAMLError as err:
        raise ParseError(f"invalid YAML: {err}", format="yaml") from err
    return {} if data is None else data


DEFAULT_PARSERS: dict[str, Parser] = {
    "json": parse_json,
    "toml": parse_toml,
}
