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

"""Layered configuration store for confstack.

Config merges three layers with a fixed precedence:

  - Defaults set in code (set_default)
  - One config file (load_file / Config.from_file)
  - Environment variables (bind_env / auto_env)

The loader performs deep merging where dicts are merged recursively and
lists/scalars are replaced (last wins). The merge happens once, on the
first read, and produces a read-only snapshot.

Public API:

- Config: The layered store

Example:
    Basic usage:

        from confstack.config import Config

        config = Config.from_file("config.json", env_prefix="MYAPP")
        config.set_default("http.port", 5000)
        print(config.get("http.port"))

"""

from .store import Config

__all__ = ["Config"]
