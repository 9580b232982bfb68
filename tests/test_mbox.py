# test_mbox.py -- tests for mbox.py
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

"""Tests for mbox.py."""

import os
import tempfile

from patchseries.mbox import split_series, write_split
from patchseries.patch import DIFF_POLICY_PERMISSIVE, parse_patch

from . import TestCase
from .test_patch import MULTI_HUNK, SINGLE_COMMIT, TWO_COMMITS


class SplitSeriesTests(TestCase):
    def test_two_commits(self) -> None:
        blocks = split_series(TWO_COMMITS)
        self.assertEqual(2, len(blocks))
        self.assertTrue(
            blocks[0].startswith(
                "From f9ec51d9919f16c09476f51eaa19b818564904b2 Mon Sep 17 00:00:00 2001\n"
            )
        )
        self.assertTrue(blocks[0].endswith("Line foo\n"))
        self.assertTrue(
            blocks[1].startswith(
                "From 4e9c51d9919f16c09476f51eaa19b818564904b1 Mon Sep 17 00:00:00 2001\n"
            )
        )
        self.assertTrue(blocks[1].endswith("Line bar\n"))

    def test_blocks_reparse(self) -> None:
        series = TWO_COMMITS + "\n" + MULTI_HUNK + "\n" + SINGLE_COMMIT
        for policy in ("strict", DIFF_POLICY_PERMISSIVE):
            commits = parse_patch(series, policy)
            blocks = split_series(series)
            self.assertEqual(len(commits), len(blocks))
            for commit, block in zip(commits, blocks):
                self.assertEqual([commit], parse_patch(block, policy))

    def test_preamble_dropped(self) -> None:
        blocks = split_series("Preamble text\n\n" + SINGLE_COMMIT)
        self.assertEqual([SINGLE_COMMIT + "\n"], blocks)

    def test_no_headers(self) -> None:
        self.assertEqual([], split_series("just text\n"))
        self.assertEqual([], split_series(""))


class WriteSplitTests(TestCase):
    def test_write(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output_files = write_split(TWO_COMMITS, tmpdir)
            self.assertEqual(
                [os.path.join(tmpdir, "0001"), os.path.join(tmpdir, "0002")],
                output_files,
            )
            with open(output_files[1], encoding="utf-8") as f:
                content = f.read()
            self.assertEqual(split_series(TWO_COMMITS)[1], content)

    def test_start_number_and_precision(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output_files = write_split(
                TWO_COMMITS, tmpdir, start_number=5, precision=2
            )
            self.assertEqual(
                [os.path.join(tmpdir, "05"), os.path.join(tmpdir, "06")],
                output_files,
            )

    def test_missing_output_dir(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            missing = os.path.join(tmpdir, "missing")
            with self.assertRaises(ValueError) as cm:
                write_split(TWO_COMMITS, missing)
            self.assertIn("does not exist", str(cm.exception))

    def test_output_not_a_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "file")
            with open(path, "w") as f:
                f.write("x")
            self.assertRaises(ValueError, write_split, TWO_COMMITS, path)
