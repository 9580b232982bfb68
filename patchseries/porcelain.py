# porcelain.py -- Porcelain-like layer on top of patchseries
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

"""Simple wrapper that provides porcelain-like functions on top of patchseries.

Currently implemented:
 * load_patch_text
 * parse
 * split

These functions accept a source, which may be a path, "-" or None for stdin,
or an http(s) URL.
"""

__all__ = [
    "is_url",
    "load_patch_text",
    "parse",
    "split",
]

import logging
import os
import sys
from typing import TYPE_CHECKING

from .client import fetch_patch
from .config import Settings
from .mbox import write_split
from .patch import CommitRecord, parse_patch

if TYPE_CHECKING:
    import urllib3

logger = logging.getLogger(__name__)

Source = str | os.PathLike[str] | None


def is_url(source: Source) -> bool:
    """Check whether a source refers to an http(s) URL."""
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def load_patch_text(
    source: Source = None,
    encoding: str | None = None,
    pool_manager: "urllib3.PoolManager | None" = None,
    settings: Settings | None = None,
) -> str:
    """Read the text of a patch series.

    Args:
      source: Path, URL, or None/"-" to read from stdin
      encoding: Encoding of the file or stdin contents (default: utf-8)
      pool_manager: urllib3 pool manager used for URLs
      settings: Settings used for URLs
    Returns: Text of the patch series, with LF line endings
    """
    if is_url(source):
        assert isinstance(source, str)
        text = fetch_patch(source, pool_manager=pool_manager, settings=settings)
    elif source is None or source == "-":
        data = sys.stdin.buffer.read()
        text = data.decode(encoding or "utf-8", errors="replace")
    else:
        with open(source, "rb") as f:
            data = f.read()
        logger.debug("Read %d bytes from %s", len(data), source)
        text = data.decode(encoding or "utf-8", errors="replace")
    return text.replace("\r\n", "\n")


def parse(
    source: Source = None,
    diff_policy: str | None = None,
    encoding: str | None = None,
    pool_manager: "urllib3.PoolManager | None" = None,
    settings: Settings | None = None,
) -> list[CommitRecord]:
    """Load and parse a patch series.

    Args:
      source: Path, URL, or None/"-" to read from stdin
      diff_policy: Diff policy to use; defaults to the configured policy
      encoding: Encoding of the file or stdin contents (default: utf-8)
      pool_manager: urllib3 pool manager used for URLs
      settings: Settings to use, defaults to Settings.from_environ()
    Returns: List of CommitRecord objects
    """
    if settings is None:
        settings = Settings.from_environ()
    if diff_policy is None:
        diff_policy = settings.diff_policy
    text = load_patch_text(
        source, encoding=encoding, pool_manager=pool_manager, settings=settings
    )
    commits = parse_patch(text, diff_policy)
    logger.debug("Parsed %d commits using %s policy", len(commits), diff_policy)
    return commits


def split(
    source: Source = None,
    output_dir: str | os.PathLike[str] = ".",
    start_number: int = 1,
    precision: int = 4,
    encoding: str | None = None,
    pool_manager: "urllib3.PoolManager | None" = None,
) -> list[str]:
    """Split a patch series into one file per commit.

    This is similar to git mailsplit.

    Args:
      source: Path, URL, or None/"-" to read from stdin
      output_dir: Directory where individual commits will be written
      start_number: Starting number for output files (default: 1)
      precision: Number of digits for output filenames (default: 4)
      encoding: Encoding of the file or stdin contents (default: utf-8)
      pool_manager: urllib3 pool manager used for URLs
    Returns: List of output file paths that were created
    """
    text = load_patch_text(source, encoding=encoding, pool_manager=pool_manager)
    return write_split(
        text, output_dir, start_number=start_number, precision=precision
    )
