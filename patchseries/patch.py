# patch.py -- Parsing of git format-patch series
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

"""Parsing of git format-patch style patch series.

A patch series is the mailbox-like output of ``git format-patch``: one or
more commits, each starting with a ``From <sha> <date>`` line followed by
``From:``, ``Date:`` and ``Subject:`` headers, the rest of the commit message,
a ``---`` separator and the diff.
"""

__all__ = [
    "DEFAULT_DIFF_POLICY",
    "DIFF_POLICIES",
    "DIFF_POLICY_PERMISSIVE",
    "DIFF_POLICY_STRICT",
    "HEADER_RE",
    "CommitRecord",
    "UnknownDiffPolicy",
    "iter_commits",
    "parse_patch",
    "read_patch",
]

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import BinaryIO, TextIO

logger = logging.getLogger(__name__)

# Capture starts right after the "---" separator; the diffstat is kept.
DIFF_POLICY_PERMISSIVE = "permissive"

# Capture starts at the first "diff --git " line and stops at "-- ".
DIFF_POLICY_STRICT = "strict"

DIFF_POLICIES = (DIFF_POLICY_STRICT, DIFF_POLICY_PERMISSIVE)

DEFAULT_DIFF_POLICY = DIFF_POLICY_STRICT

HEADER_RE = re.compile(r"^From\s+([0-9a-f]{40})\s")

_AUTHOR_PREFIX = "From: "
_DATE_PREFIX = "Date: "
_SUBJECT_PREFIX = "Subject: "
_PATCH_TAG = "[PATCH] "
_DIFF_START = "diff --git "


class UnknownDiffPolicy(ValueError):
    """Raised when an unsupported diff policy is requested."""

    def __init__(self, policy: str) -> None:
        """Initialize exception.

        Args:
            policy: Name of the requested policy
        """
        self.policy = policy
        super().__init__(
            f"Unknown diff policy '{policy}'. "
            f"Expected one of: {', '.join(DIFF_POLICIES)}"
        )


@dataclass(frozen=True)
class CommitRecord:
    """A single commit extracted from a patch series.

    Attributes:
        sha: 40 character lowercase hex commit id
        author_name: Author name from the From: header
        author_email: Author email from the From: header
        date: Raw value of the Date: header
        message: Subject and body of the commit message
        diff: Unified diff for the commit, empty if there is none
    """

    sha: str
    author_name: str = ""
    author_email: str = ""
    date: str = ""
    message: str = ""
    diff: str = ""

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0]

    @property
    def author(self) -> str:
        """Author identity in ``Name <email>`` form."""
        if self.author_email:
            return f"{self.author_name} <{self.author_email}>"
        return self.author_name

    def to_dict(self) -> dict[str, str]:
        """Convert to a dict suitable for JSON serialization."""
        return {
            "sha": self.sha,
            "authorName": self.author_name,
            "authorEmail": self.author_email,
            "date": self.date,
            "message": self.message,
            "diff": self.diff,
        }


@dataclass
class _CommitAccumulator:
    """Scratch state for the commit currently being scanned."""

    sha: str = ""
    author_name: str = ""
    author_email: str = ""
    date: str = ""
    message_lines: list[str] = field(default_factory=list)
    diff_lines: list[str] = field(default_factory=list)
    in_message: bool = False
    in_diff: bool = False
    # Strict policy only: seen "diff --git " / seen the "-- " signature.
    diff_started: bool = False
    diff_ended: bool = False

    def set_author(self, value: str) -> None:
        author = value.strip()
        m = re.search(r"<(.*)>", author)
        if m:
            self.author_email = m.group(1)
            self.author_name = author[: author.index("<")].strip()
        else:
            self.author_name = author

    def add_diff_line(self, line: str, diff_policy: str) -> None:
        if diff_policy == DIFF_POLICY_PERMISSIVE:
            self.diff_lines.append(line)
            return
        if self.diff_ended:
            return
        if not self.diff_started:
            if not line.startswith(_DIFF_START):
                return
            self.diff_started = True
        elif line.strip() == "--":
            self.diff_ended = True
            return
        self.diff_lines.append(line)

    def finalize(self, diff_policy: str) -> CommitRecord:
        diff = "\n".join(self.diff_lines)
        if diff_policy == DIFF_POLICY_PERMISSIVE:
            diff = diff.strip()
        elif self.diff_lines:
            diff += "\n"
        return CommitRecord(
            sha=self.sha,
            author_name=self.author_name,
            author_email=self.author_email,
            date=self.date,
            message="\n".join(self.message_lines).strip(),
            diff=diff,
        )


def _check_diff_policy(diff_policy: str) -> None:
    if diff_policy not in DIFF_POLICIES:
        raise UnknownDiffPolicy(diff_policy)


def iter_commits(
    lines: Iterable[str], diff_policy: str = DEFAULT_DIFF_POLICY
) -> Iterator[CommitRecord]:
    """Iterate over the commits in a patch series.

    Args:
      lines: Lines of the series, without line terminators
      diff_policy: Either DIFF_POLICY_STRICT or DIFF_POLICY_PERMISSIVE
    Returns: Iterator over CommitRecord objects, in input order
    Raises:
      UnknownDiffPolicy: if diff_policy is not a known policy
    """
    _check_diff_policy(diff_policy)
    return _iter_commits(lines, diff_policy)


def _iter_commits(lines: Iterable[str], diff_policy: str) -> Iterator[CommitRecord]:
    current = _CommitAccumulator()

    for line in lines:
        m = HEADER_RE.match(line)
        if m:
            if current.sha:
                logger.debug("Parsed commit %s", current.sha)
                yield current.finalize(diff_policy)
            current = _CommitAccumulator(sha=m.group(1))
            continue

        if line.startswith(_AUTHOR_PREFIX):
            current.set_author(line[len(_AUTHOR_PREFIX) :])
            continue

        if line.startswith(_DATE_PREFIX):
            current.date = line[len(_DATE_PREFIX) :].strip()
            continue

        if line.startswith(_SUBJECT_PREFIX):
            subject = line[len(_SUBJECT_PREFIX) :].strip()
            if subject.startswith(_PATCH_TAG):
                subject = subject[len(_PATCH_TAG) :]
            current.message_lines.append(subject)
            current.in_message = True
            continue

        if current.in_message:
            if line.strip() == "---":
                current.in_message = False
                current.in_diff = True
            else:
                current.message_lines.append(line)
        elif current.in_diff:
            current.add_diff_line(line, diff_policy)

    if current.sha:
        logger.debug("Parsed commit %s", current.sha)
        yield current.finalize(diff_policy)


def parse_patch(text: str, diff_policy: str = DEFAULT_DIFF_POLICY) -> list[CommitRecord]:
    """Parse a patch series into commit records.

    Text that precedes the first ``From <sha>`` line is ignored, and malformed
    input results in fewer (possibly zero) records rather than an error.

    Args:
      text: Contents of the patch series
      diff_policy: Either DIFF_POLICY_STRICT or DIFF_POLICY_PERMISSIVE
    Returns: List of CommitRecord objects, in input order
    Raises:
      UnknownDiffPolicy: if diff_policy is not a known policy
    """
    lines = text.split("\n")
    # A terminating newline does not start another line.
    if lines[-1] == "":
        lines.pop()
    return list(iter_commits(lines, diff_policy))


def read_patch(
    f: TextIO | BinaryIO,
    encoding: str | None = None,
    diff_policy: str = DEFAULT_DIFF_POLICY,
) -> list[CommitRecord]:
    """Read and parse a patch series from a file-like object.

    Args:
      f: File-like object to read, opened in text or binary mode
      encoding: Encoding used to decode binary contents
      diff_policy: Either DIFF_POLICY_STRICT or DIFF_POLICY_PERMISSIVE
    Returns: List of CommitRecord objects, in input order
    """
    contents = f.read()
    if isinstance(contents, bytes):
        encoding = encoding or getattr(f, "encoding", None) or "utf-8"
        contents = contents.decode(encoding, errors="replace")
    return parse_patch(contents.replace("\r\n", "\n"), diff_policy)
