# test_log_utils.py -- Tests for log_utils.py
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

"""Tests for patchseries.log_utils."""

import logging
import os
import tempfile

from patchseries.log_utils import (
    _NULL_HANDLER,
    _PATCHSERIES_LOGGER,
    _configure_logging_from_trace,
    _get_trace_target,
    default_logging_config,
    getLogger,
    remove_null_handler,
)

from . import TestCase


class LogUtilsTests(TestCase):
    """Tests for log_utils."""

    def setUp(self) -> None:
        super().setUp()
        self.original_handlers = list(_PATCHSERIES_LOGGER.handlers)
        root_logger = logging.getLogger()
        self.original_root_handlers = list(root_logger.handlers)
        self.original_root_level = root_logger.level
        root_logger.handlers = []

    def tearDown(self) -> None:
        _PATCHSERIES_LOGGER.handlers = self.original_handlers
        root_logger = logging.getLogger()
        for handler in root_logger.handlers:
            if handler not in self.original_root_handlers:
                handler.close()
        root_logger.handlers = self.original_root_handlers
        root_logger.setLevel(self.original_root_level)
        super().tearDown()

    def test_get_logger(self) -> None:
        logger = getLogger("patchseries.test")
        self.assertIsInstance(logger, logging.Logger)
        self.assertEqual(logger.name, "patchseries.test")

    def test_null_handler_installed(self) -> None:
        self.assertIn(_NULL_HANDLER, self.original_handlers)

    def test_remove_null_handler(self) -> None:
        if _NULL_HANDLER not in _PATCHSERIES_LOGGER.handlers:
            _PATCHSERIES_LOGGER.addHandler(_NULL_HANDLER)
        remove_null_handler()
        self.assertNotIn(_NULL_HANDLER, _PATCHSERIES_LOGGER.handlers)

    def test_default_logging_config(self) -> None:
        default_logging_config()
        self.assertNotIn(_NULL_HANDLER, _PATCHSERIES_LOGGER.handlers)
        root_logger = logging.getLogger()
        self.assertTrue(root_logger.handlers)
        self.assertEqual(logging.INFO, root_logger.level)

    def test_trace_target_disabled(self) -> None:
        for value in (None, "", "0", "false", "FALSE", "relative/path"):
            self.overrideEnv("PATCHSERIES_TRACE", value)
            self.assertIsNone(_get_trace_target())
            self.assertFalse(_configure_logging_from_trace())

    def test_trace_target_stderr(self) -> None:
        for value in ("1", "2", "true", "TRUE"):
            self.overrideEnv("PATCHSERIES_TRACE", value)
            self.assertEqual("-", _get_trace_target())

    def test_trace_stderr_configures_debug(self) -> None:
        self.overrideEnv("PATCHSERIES_TRACE", "1")
        default_logging_config()
        self.assertEqual(logging.DEBUG, logging.getLogger().level)

    def test_trace_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            trace_file = os.path.join(tmpdir, "trace.log")
            self.overrideEnv("PATCHSERIES_TRACE", trace_file)
            self.assertEqual(trace_file, _get_trace_target())
            self.assertTrue(_configure_logging_from_trace())
            getLogger("patchseries.test").debug("traced message")
            for handler in logging.getLogger().handlers:
                handler.flush()
            with open(trace_file) as f:
                self.assertIn("traced message", f.read())
            for handler in logging.getLogger().handlers:
                handler.close()
            logging.getLogger().handlers = []

    def test_trace_to_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self.overrideEnv("PATCHSERIES_TRACE", tmpdir)
            self.assertTrue(_configure_logging_from_trace())
            for handler in logging.getLogger().handlers:
                handler.close()
            logging.getLogger().handlers = []
            self.assertEqual([f"trace.{os.getpid()}"], os.listdir(tmpdir))
