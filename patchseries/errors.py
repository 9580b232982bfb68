# errors.py -- errors for patchseries
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

"""Exception classes raised while loading patch series.

The parser itself never raises for malformed input; these errors come from
the layers that fetch or read the text it is given.
"""

__all__ = [
    "FetchError",
    "HTTPUnauthorized",
    "PatchNotFound",
    "PatchSeriesError",
]


class PatchSeriesError(Exception):
    """Base class for errors loading a patch series."""


class FetchError(PatchSeriesError):
    """Raised when a patch series could not be retrieved over HTTP."""

    def __init__(self, url: str, message: str, status: int | None = None) -> None:
        """Initialize a FetchError.

        Args:
            url: URL that was requested
            message: Description of the failure
            status: HTTP status code, if a response was received
        """
        PatchSeriesError.__init__(self, message)
        self.url = url
        self.status = status


class HTTPUnauthorized(FetchError):
    """Raised when authentication fails."""

    def __init__(self, www_authenticate: str | None, url: str) -> None:
        """Initialize HTTPUnauthorized exception.

        Args:
            www_authenticate: WWW-Authenticate header value
            url: URL that requires authentication
        """
        FetchError.__init__(self, url, "No valid credentials provided", status=401)
        self.www_authenticate = www_authenticate


class PatchNotFound(FetchError):
    """Raised when the requested patch series does not exist."""

    def __init__(self, url: str) -> None:
        FetchError.__init__(self, url, f"Patch series not found: {url}", status=404)
