# log_utils.py -- Logging utilities for patchseries
# Copyright (C) 2025 The patchseries developers
#
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later
# patchseries is dual-licensed under the Apache License, Version 2.0 and the GNU
# General Public License as published by the Free Software Foundation; version 2.0
# or (at your option) any later version. You can redistribute it and/or
# modify it under the terms of either of these two licenses.
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# You should have received a copy of the licenses; if not, see
# <http://www.gnu.org/licenses/> for a copy of the GNU General Public License
# and <http://www.apache.org/licenses/LICENSE-2.0> for a copy of the Apache
# License, Version 2.0.
#

"""Logging utilities for patchseries.

patchseries is mostly used as a library, so by default nothing is printed:
a no-op handler is attached to the "patchseries" logger at import time.
Command line front ends call default_logging_config() to get output.

Modules log through the standard logging module; getLogger is exported here
for convenience.
"""

import logging
import os
import sys

getLogger = logging.getLogger

TRACE_ENVIRONMENT_VARIABLE = "PATCHSERIES_TRACE"

_TRACE_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


class _NullHandler(logging.Handler):
    """No-op logging handler to avoid unexpected logging warnings."""

    def emit(self, record: logging.LogRecord) -> None:
        pass


_NULL_HANDLER = _NullHandler()
_PATCHSERIES_LOGGER = getLogger("patchseries")
_PATCHSERIES_LOGGER.addHandler(_NULL_HANDLER)


def _get_trace_target() -> str | None:
    """Get the trace target from the PATCHSERIES_TRACE environment variable.

    Returns:
        - None if tracing is disabled
        - "-" for stderr output (values "1", "2", "true")
        - an absolute file or directory path
    """
    trace_value = os.environ.get(TRACE_ENVIRONMENT_VARIABLE, "")

    if not trace_value or trace_value.lower() in ("0", "false"):
        return None

    if trace_value.lower() in ("1", "2", "true"):
        return "-"

    if os.path.isabs(trace_value):
        return trace_value

    return None


def _configure_logging_from_trace() -> bool:
    """Configure logging based on PATCHSERIES_TRACE.

    Returns True if trace logging was set up, False otherwise.
    """
    trace_target = _get_trace_target()
    if trace_target is None:
        return False

    if trace_target == "-":
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format=_TRACE_FORMAT)
        return True

    if os.path.isdir(trace_target):
        filename = os.path.join(trace_target, f"trace.{os.getpid()}")
    else:
        filename = trace_target

    try:
        logging.basicConfig(
            level=logging.DEBUG, filename=filename, filemode="a", format=_TRACE_FORMAT
        )
    except OSError as e:
        sys.stderr.write(
            f"Warning: Failed to open {TRACE_ENVIRONMENT_VARIABLE} file {filename}: {e}\n"
        )
        return False
    return True


def default_logging_config() -> None:
    """Set up the default patchseries loggers.

    Trace output goes wherever PATCHSERIES_TRACE points; without it, messages
    of level INFO and up are written to stderr.
    """
    remove_null_handler()

    if not _configure_logging_from_trace():
        logging.basicConfig(
            level=logging.INFO,
            stream=sys.stderr,
            format="%(message)s",
        )


def remove_null_handler() -> None:
    """Remove the null handler from the patchseries loggers.

    If a caller wants to set up logging using something other than
    default_logging_config, calling this function first is a minor optimization
    to avoid the overhead of using the _NullHandler.
    """
    _PATCHSERIES_LOGGER.removeHandler(_NULL_HANDLER)
