# config.py -- Environment based configuration for patchseries
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

"""Reading of patchseries settings from the environment.

Recognized variables:

 * PATCHSERIES_DIFF_POLICY: "strict" (default) or "permissive"
 * PATCHSERIES_HTTP_TIMEOUT: timeout in seconds for HTTP requests
 * PATCHSERIES_SSL_VERIFY: whether to verify TLS certificates (default: true)

Tracing is configured separately through PATCHSERIES_TRACE, see
patchseries.log_utils.
"""

__all__ = [
    "Settings",
    "parse_boolean",
]

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .patch import DEFAULT_DIFF_POLICY, DIFF_POLICIES

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def parse_boolean(value: str) -> bool:
    """Parse a boolean the way git does for config values.

    Raises:
      ValueError: if value is not a recognized boolean
    """
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"not a valid boolean string: {value!r}")


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        diff_policy: Diff policy used when none is given explicitly
        http_timeout: Timeout for HTTP requests in seconds, None for no timeout
        ssl_verify: Whether TLS certificates are verified when fetching
    """

    diff_policy: str = DEFAULT_DIFF_POLICY
    http_timeout: float | None = None
    ssl_verify: bool = True

    @classmethod
    def from_environ(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Invalid values are logged and replaced by their defaults.

        Args:
            env: Environment variables dict (defaults to os.environ)

        Returns:
            A Settings instance
        """
        if env is None:
            env = os.environ

        diff_policy = DEFAULT_DIFF_POLICY
        value = env.get("PATCHSERIES_DIFF_POLICY", "").strip().lower()
        if value:
            if value in DIFF_POLICIES:
                diff_policy = value
            else:
                logger.warning(
                    "Ignoring unknown PATCHSERIES_DIFF_POLICY value %r", value
                )

        http_timeout = None
        value = env.get("PATCHSERIES_HTTP_TIMEOUT", "").strip()
        if value:
            try:
                http_timeout = float(value)
            except ValueError:
                logger.warning(
                    "Ignoring invalid PATCHSERIES_HTTP_TIMEOUT value %r", value
                )

        ssl_verify = True
        value = env.get("PATCHSERIES_SSL_VERIFY", "").strip()
        if value:
            try:
                ssl_verify = parse_boolean(value)
            except ValueError:
                logger.warning(
                    "Ignoring invalid PATCHSERIES_SSL_VERIFY value %r", value
                )

        return cls(
            diff_policy=diff_policy, http_timeout=http_timeout, ssl_verify=ssl_verify
        )
