# mbox.py -- Splitting patch series into individual commits
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

"""Splitting of patch series into one file per commit.

This is similar to git mailsplit, but splits on the ``From <sha>`` lines
written by git format-patch rather than on arbitrary mbox separators.
"""

import logging
import os
from pathlib import Path

from .patch import HEADER_RE

logger = logging.getLogger(__name__)


def split_series(text: str) -> list[str]:
    """Split a patch series into the raw text of each commit.

    Anything before the first ``From <sha>`` line is dropped.

    Args:
        text: Contents of the patch series

    Returns:
        List of newline-terminated commit blocks
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()

    blocks: list[list[str]] = []
    for line in lines:
        if HEADER_RE.match(line):
            blocks.append([line])
        elif blocks:
            blocks[-1].append(line)

    return ["\n".join(block) + "\n" for block in blocks]


def write_split(
    text: str,
    output_dir: str | os.PathLike[str],
    start_number: int = 1,
    precision: int = 4,
) -> list[str]:
    """Write each commit of a patch series to its own file.

    Args:
        text: Contents of the patch series
        output_dir: Directory where individual commits will be written
        start_number: Starting number for output files (default: 1)
        precision: Number of digits for output filenames (default: 4)

    Returns:
        List of output file paths that were created

    Raises:
        ValueError: If output_dir doesn't exist or isn't a directory
    """
    output_path = Path(output_dir)

    if not output_path.exists():
        raise ValueError(f"Output directory does not exist: {output_dir}")
    if not output_path.is_dir():
        raise ValueError(f"Output path is not a directory: {output_dir}")

    output_files = []
    for number, block in enumerate(split_series(text), start=start_number):
        output_file_path = output_path / f"{number:0{precision}d}"
        with open(output_file_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(block)
        logger.debug("Wrote %s", output_file_path)
        output_files.append(str(output_file_path))

    return output_files
