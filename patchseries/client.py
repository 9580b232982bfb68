# client.py -- Fetching patch series over HTTP
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

"""Retrieval of patch series from HTTP(S) servers.

Forges commonly serve ``git format-patch`` output for a commit or pull
request, e.g. by appending ``.patch`` to its URL.
"""

__all__ = [
    "check_for_proxy_bypass",
    "default_urllib3_manager",
    "default_user_agent_string",
    "fetch_patch",
]

import ipaddress
import logging
import os
from email.message import Message
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import patchseries

from .config import Settings
from .errors import FetchError, HTTPUnauthorized, PatchNotFound

if TYPE_CHECKING:
    import urllib3

logger = logging.getLogger(__name__)


def default_user_agent_string() -> str:
    """Return the default user agent string for patchseries."""
    return "patchseries/{}".format(".".join([str(x) for x in patchseries.__version__]))


def check_for_proxy_bypass(base_url: str | None) -> bool:
    """Check if the proxy should be bypassed for the given URL.

    Follows curl's handling of the no_proxy environment variable: entries are
    host names (matching the host and its subdomains), IP addresses or IP
    networks, and "*" bypasses the proxy for every host.
    """
    if not base_url:
        return False
    no_proxy_str = os.environ.get("no_proxy")
    if not no_proxy_str:
        return False

    hostname = urlparse(base_url).hostname
    if not hostname:
        return False

    try:
        hostname_ip = ipaddress.ip_address(hostname)
    except ValueError:
        hostname_ip = None

    for entry in no_proxy_str.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if entry == "*":
            return True
        if hostname_ip is not None:
            try:
                if hostname_ip in ipaddress.ip_network(entry, strict=False):
                    return True
            except ValueError:
                pass
            continue
        entry = entry.lstrip(".")
        if hostname == entry or hostname.endswith("." + entry):
            return True
    return False


def default_urllib3_manager(
    settings: Settings | None = None,
    pool_manager_cls: type | None = None,
    proxy_manager_cls: type | None = None,
    base_url: str | None = None,
) -> "urllib3.ProxyManager | urllib3.PoolManager":
    """Return urllib3 connection pool manager.

    Honour proxy configuration from the environment.

    Args:
      settings: Settings to use, defaults to Settings.from_environ()
      pool_manager_cls: Pool manager class to use
      proxy_manager_cls: Proxy manager class to use
      base_url: Base URL for proxy bypass checks

    Returns:
      Either proxy_manager_cls (defaults to `urllib3.ProxyManager`) instance for
      proxy configurations, pool_manager_cls
      (defaults to `urllib3.PoolManager`) instance otherwise
    """
    import urllib3

    if settings is None:
        settings = Settings.from_environ()

    proxy_server: str | None = None
    for proxyname in ("https_proxy", "http_proxy", "all_proxy"):
        proxy_server = os.environ.get(proxyname)
        if proxy_server:
            break

    if proxy_server and check_for_proxy_bypass(base_url):
        proxy_server = None

    headers = {"User-agent": default_user_agent_string()}

    kwargs: dict[str, Any] = {
        "cert_reqs": "CERT_REQUIRED" if settings.ssl_verify else "CERT_NONE",
    }
    if settings.http_timeout is not None:
        kwargs["timeout"] = settings.http_timeout

    manager: urllib3.ProxyManager | urllib3.PoolManager
    if proxy_server:
        if proxy_manager_cls is None:
            proxy_manager_cls = urllib3.ProxyManager
        proxy_server_url = urlparse(proxy_server)
        if proxy_server_url.username is not None:
            proxy_headers = urllib3.make_headers(
                proxy_basic_auth=f"{proxy_server_url.username}:{proxy_server_url.password or ''}"
            )
        else:
            proxy_headers = {}
        manager = proxy_manager_cls(
            proxy_server, proxy_headers=proxy_headers, headers=headers, **kwargs
        )
    else:
        if pool_manager_cls is None:
            pool_manager_cls = urllib3.PoolManager
        manager = pool_manager_cls(headers=headers, **kwargs)

    return manager


def _response_charset(content_type: str | None) -> str:
    if not content_type:
        return "utf-8"
    msg = Message()
    msg["Content-Type"] = content_type
    return msg.get_content_charset() or "utf-8"


def fetch_patch(
    url: str,
    pool_manager: "urllib3.PoolManager | None" = None,
    settings: Settings | None = None,
) -> str:
    """Download a patch series.

    Args:
      url: http:// or https:// URL of the patch series
      pool_manager: urllib3 pool manager to use, created if not given
      settings: Settings used when creating a pool manager
    Returns: Decoded text of the patch series
    Raises:
      HTTPUnauthorized: if the server requires authentication
      PatchNotFound: if the server returned 404
      FetchError: for any other transport failure or unexpected status
    """
    import urllib3.exceptions

    if pool_manager is None:
        pool_manager = default_urllib3_manager(settings, base_url=url)

    logger.debug("Fetching patch series from %s", url)
    try:
        resp = pool_manager.request("GET", url, headers={"Accept": "text/plain"})
    except urllib3.exceptions.HTTPError as e:
        raise FetchError(url, str(e)) from e

    if resp.status == 401:
        raise HTTPUnauthorized(resp.headers.get("WWW-Authenticate"), url)
    if resp.status == 404:
        raise PatchNotFound(url)
    if resp.status != 200:
        raise FetchError(
            url, f"unexpected http resp {resp.status} for {url}", status=resp.status
        )

    charset = _response_charset(resp.headers.get("Content-Type"))
    try:
        text = resp.data.decode(charset, errors="replace")
    except LookupError:
        text = resp.data.decode("utf-8", errors="replace")
    logger.info("Fetched %d bytes from %s", len(resp.data), url)
    return text
