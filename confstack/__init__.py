"""
confstack - layered configuration for Python applications

confstack merges default values, one JSON or TOML config file and
environment variable overrides into a single read-only configuration,
addressed with dotted key paths such as "http.port".

confstack provides:
  - Fixed precedence: defaults < file < environment
  - Deep merging of nested sections
  - Pluggable file parsers (JSON and TOML built in, YAML opt-in)
  - Explicit (bind_env) and prefix-based (auto_env) environment binding
  - dotenv file support
  - A frozen snapshot after the first read

Quick Start
-----------

    from confstack import Config

    config = (
        Config.from_file("config.toml", "toml", env_prefix="MYAPP")
        .set_default("http.host", "127.0.0.1")
        .set_default("http.port", 5000)
        .auto_env()
    )
    config.get("http.port")

Package Structure
-----------------
config : package
    The layered Config store.
keypath : module
    Dotted key path access and environment variable name transcoding.
parsers : module
    Built-in file parsers.
exceptions : module
    Exception hierarchy.
logging : module
    Pluggable logger used by the store.

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Layered configuration from defaults, files and environment"

from confstack.config import Config
from confstack.exceptions import (
    ConfigError,
    ConfstackError,
    FileAccessError,
    FrozenConfigError,
    ParseError,
    UnrecognizedFormatError,
)
from confstack.keypath import (
    MISSING,
    from_env_key,
    get_path,
    has_path,
    set_path,
    to_env_key,
)
from confstack.parsers import parse_json, parse_toml, parse_yaml

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "Config",
    "MISSING",
    "get_path",
    "has_path",
    "set_path",
    "to_env_key",
    "from_env_key",
    "parse_json",
    "parse_toml",
    "parse_yaml",
    "ConfstackError",
    "ConfigError",
    "UnrecognizedFormatError",
    "FrozenConfigError",
    "ParseError",
    "FileAccessError",
]
