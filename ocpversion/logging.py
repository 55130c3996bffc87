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

"""Progress and diagnostic output for ocpversion.

The resolution engine never prints. It reports through a ``Logger`` that
the CLI installs once per run with ``set_global_logger``; until then every
message is dropped, so importing the library is quiet.

Levels:

- step: per-host progress ("[2/3] Resolving versions...")
- warning: findings that do not stop resolution
- verbose: which rule or backend produced a value (``-v``)
- debug: raw query output and merged config dumps (``-d``)

Example:
    ```python
    from ocpversion.logging import get_global_logger

    log = get_global_logger()
    log.verbose("RESOLVE", "protect_installed kept 3.6.1")
    log.warning("DERIVE", "openshift_image_tag is ignored on native hosts")
    ```
"""

from __future__ import annotations

from typing import Protocol


class Logger(Protocol):
    """What the engine needs from an output sink.

    ``prefix`` is a short upper-case topic such as "CONFIG", "QUERY" or
    "IMAGE", printed in brackets ahead of the message.
    """

    def step(self, step: int, total: int, message: str) -> None: ...

    def verbose(self, prefix: str, message: str) -> None: ...

    def debug(self, prefix: str, message: str) -> None: ...

    def warning(self, prefix: str, message: str) -> None: ...


class DefaultLogger:
    """Prints to stdout in the same bracketed format the CLI uses.

    Debug output implies verbose output.
    """

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        self._verbose = verbose or debug
        self._debug = debug

    def step(self, step: int, total: int, message: str) -> None:
        print(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            print(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            print(f"[{prefix}] {message}")

    def warning(self, prefix: str, message: str) -> None:
        print(f"[{prefix}] WARNING: {message}")


class SilentLogger:
    """Drops everything. Installed until the CLI configures output."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass

    def warning(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Return a stdout logger for the ``-v``/``-d`` flags."""
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger the engine reports through (silent by default)."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Install ``logger`` for every subsequent resolution in this process."""
    global _global_logger
    _global_logger = logger
