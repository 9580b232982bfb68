#
# patchseries - Command-line interface to patchseries
# Copyright (C) 2025 The patchseries developers
# vim: expandtab
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

"""Command-line interface to patchseries.

Parses git format-patch output from a file, stdin or an http(s) URL and
prints the commits it contains.
"""

__all__ = [
    "Command",
    "main",
    "signal_int",
]

import argparse
import json
import logging
import signal
import sys
import types
from collections.abc import Sequence
from typing import TextIO

from . import porcelain
from .config import Settings
from .errors import PatchSeriesError
from .log_utils import default_logging_config
from .patch import DIFF_POLICIES, CommitRecord, UnknownDiffPolicy

logger = logging.getLogger(__name__)


def signal_int(signal: int, frame: types.FrameType | None) -> None:
    """Handle interrupt signal by exiting.

    Args:
        signal: Signal number
        frame: Current stack frame
    """
    sys.exit(1)


def _add_source_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "source",
        nargs="?",
        help="Patch file, http(s) URL, or '-'. If not specified, reads from stdin.",
    )


def _add_policy_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--policy",
        choices=DIFF_POLICIES,
        default=None,
        help="Where diff capture starts and stops (default: $PATCHSERIES_DIFF_POLICY or strict)",
    )


def _add_encoding_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--encoding",
        dest="encoding",
        help="Character encoding of the input (default: utf-8)",
    )


class Command:
    """A patchseries subcommand."""

    def run(self, args: Sequence[str]) -> int | None:
        """Run the command."""
        raise NotImplementedError(self.run)


class cmd_parse(Command):
    """Print the commits of a patch series as JSON."""

    def run(self, args: Sequence[str]) -> None:
        """Execute the parse command.

        Args:
            args: Command line arguments
        """
        parser = argparse.ArgumentParser(prog="patchseries parse")
        _add_source_argument(parser)
        _add_policy_argument(parser)
        _add_encoding_argument(parser)
        parser.add_argument(
            "--indent",
            type=int,
            default=2,
            help="Indentation of the JSON output (default: 2)",
        )
        parsed_args = parser.parse_args(args)

        commits = porcelain.parse(
            parsed_args.source,
            diff_policy=parsed_args.policy,
            encoding=parsed_args.encoding,
        )
        json.dump(
            [commit.to_dict() for commit in commits],
            sys.stdout,
            indent=parsed_args.indent,
        )
        sys.stdout.write("\n")


class cmd_log(Command):
    """Show a one-line summary of each commit in a patch series."""

    def run(self, args: Sequence[str]) -> None:
        """Execute the log command.

        Args:
            args: Command line arguments
        """
        parser = argparse.ArgumentParser(prog="patchseries log")
        _add_source_argument(parser)
        _add_policy_argument(parser)
        _add_encoding_argument(parser)
        parsed_args = parser.parse_args(args)

        commits = porcelain.parse(
            parsed_args.source,
            diff_policy=parsed_args.policy,
            encoding=parsed_args.encoding,
        )
        for commit in commits:
            sys.stdout.write(f"{commit.sha[:7]} {commit.author} {commit.subject}\n")


def _write_commit(outstream: TextIO, commit: CommitRecord) -> None:
    write = outstream.write
    write(f"commit {commit.sha}\n")
    write(f"Author: {commit.author}\n")
    if commit.date:
        write(f"Date:   {commit.date}\n")
    write("\n")
    for line in commit.message.split("\n"):
        write(f"    {line}".rstrip() + "\n")
    if commit.diff:
        write("\n")
        write(commit.diff)
        if not commit.diff.endswith("\n"):
            write("\n")


class cmd_show(Command):
    """Show a single commit of a patch series."""

    def run(self, args: Sequence[str]) -> int | None:
        """Execute the show command.

        Args:
            args: Command line arguments
        """
        parser = argparse.ArgumentParser(prog="patchseries show")
        parser.add_argument("rev", help="Commit sha or unique sha prefix")
        _add_source_argument(parser)
        _add_policy_argument(parser)
        _add_encoding_argument(parser)
        parsed_args = parser.parse_args(args)

        commits = porcelain.parse(
            parsed_args.source,
            diff_policy=parsed_args.policy,
            encoding=parsed_args.encoding,
        )
        rev = parsed_args.rev.lower()
        matches = [commit for commit in commits if commit.sha.startswith(rev)]
        if not matches:
            logger.error("No commit matching %s", parsed_args.rev)
            return 1
        if len(matches) > 1:
            logger.error("Ambiguous commit prefix %s", parsed_args.rev)
            return 1
        _write_commit(sys.stdout, matches[0])
        return None


class cmd_split(Command):
    """Split a patch series into one file per commit."""

    def run(self, args: Sequence[str]) -> None:
        """Execute the split command.

        Args:
            args: Command line arguments
        """
        parser = argparse.ArgumentParser(prog="patchseries split")
        _add_source_argument(parser)
        _add_encoding_argument(parser)
        parser.add_argument(
            "-o",
            "--output-directory",
            dest="output_dir",
            required=True,
            help="Directory in which to place the individual commits",
        )
        parser.add_argument(
            "-d",
            dest="precision",
            type=int,
            default=4,
            help="Number of digits for generated filenames (default: 4)",
        )
        parser.add_argument(
            "-f",
            dest="start_number",
            type=int,
            default=1,
            help="Number of the first generated file (default: 1)",
        )
        parsed_args = parser.parse_args(args)

        output_files = porcelain.split(
            parsed_args.source,
            parsed_args.output_dir,
            start_number=parsed_args.start_number,
            precision=parsed_args.precision,
            encoding=parsed_args.encoding,
        )
        logger.info(
            "Split %d commits into %s", len(output_files), parsed_args.output_dir
        )


class cmd_config(Command):
    """Show the settings in effect."""

    def run(self, args: Sequence[str]) -> None:
        """Execute the config command.

        Args:
            args: Command line arguments
        """
        parser = argparse.ArgumentParser(prog="patchseries config")
        parser.parse_args(args)

        settings = Settings.from_environ()
        sys.stdout.write(f"diff_policy={settings.diff_policy}\n")
        timeout = "" if settings.http_timeout is None else str(settings.http_timeout)
        sys.stdout.write(f"http_timeout={timeout}\n")
        sys.stdout.write(f"ssl_verify={str(settings.ssl_verify).lower()}\n")


commands: dict[str, type[Command]] = {
    "config": cmd_config,
    "log": cmd_log,
    "parse": cmd_parse,
    "show": cmd_show,
    "split": cmd_split,
}


def main(argv: Sequence[str] | None = None) -> int | None:
    """Main entry point for the patchseries CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code or None
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="patchseries",
        description="Parse git format-patch output into commits",
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", help="Show help")

    global_args, remaining = parser.parse_known_args(argv)

    if global_args.help or not remaining:
        parser = argparse.ArgumentParser(
            prog="patchseries",
            description="Parse git format-patch output into commits",
        )
        parser.add_argument(
            "command",
            nargs="?",
            help=f"Command to run. Available: {', '.join(sorted(commands.keys()))}",
        )
        parser.print_help()
        return 1

    default_logging_config()

    cmd = remaining[0]
    cmd_args = remaining[1:]

    try:
        cmd_kls = commands[cmd]
    except KeyError:
        logging.fatal("No such subcommand: %s", cmd)
        return 1

    try:
        return cmd_kls().run(cmd_args)
    except (PatchSeriesError, UnknownDiffPolicy) as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("%s: %s", e.filename or cmd, e.strerror or e)
        return 1


def _main() -> None:
    signal.signal(signal.SIGINT, signal_int)

    sys.exit(main())


if __name__ == "__main__":
    _main()
