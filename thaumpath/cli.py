"""Interactive research solver: load aspects, then answer path queries."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, Union

from thaumpath.aspects import Aspect
from thaumpath.clients.ftp_client import FtpSnapshotClient
from thaumpath.clients.http_client import HttpSnapshotClient
from thaumpath.config import (
    DEFAULT_LENGTH_SLACK,
    DEFAULT_MAX_EXPANSIONS,
    ENDPOINT_COUNT,
    MAX_PATH_LENGTH,
)
from thaumpath.errors import MalformedInventory, SnapshotError
from thaumpath.logging_config import configure_logging
from thaumpath.prompts import (
    ReadFn,
    WriteFn,
    prompt_until_valid,
    validate_aspect_name,
    validate_aspect_or_command,
    validate_distance,
)
from thaumpath.report import SearchReport, render_report, summarize
from thaumpath.snapshot import (
    FileSnapshotSource,
    SnapshotSource,
    load_inventory,
)
from thaumpath.solver import Solver
from thaumpath.utils.env import env_int, env_value, load_dotenv

logger = logging.getLogger(__name__)

QUIT_COMMANDS = frozenset({"quit", "exit"})
REFRESH_COMMAND = "refresh"


class ResearchApp:
    """Hold one solver and run the question-and-answer loop against it."""

    def __init__(
        self,
        source: SnapshotSource,
        *,
        slack: int = DEFAULT_LENGTH_SLACK,
        max_expansions: int = DEFAULT_MAX_EXPANSIONS,
        read: ReadFn = input,
        write: WriteFn = print,
    ) -> None:
        if slack < 1:
            raise ValueError("slack must be at least 1.")
        self._source = source
        self._slack = slack
        self._max_expansions = max_expansions
        self._read = read
        self._write = write
        self._solver: Optional[Solver[Aspect]] = None

    @property
    def solver(self) -> Solver[Aspect]:
        if self._solver is None:
            raise RuntimeError("Research data has not been loaded yet.")
        return self._solver

    def load(self) -> None:
        """Fetch the snapshot and build a fresh solver around it."""
        inventory = load_inventory(self._source)
        self._solver = Solver(inventory, max_expansions=self._max_expansions)
        logger.info("Solver ready with %r", inventory)

    def refresh(self) -> bool:
        """Reload the snapshot, keeping the current solver on failure."""
        try:
            self.load()
        except (SnapshotError, MalformedInventory) as error:
            logger.warning("Refresh failed: %s", error)
            self._write(f"Could not refresh research data: {error}")
            return False
        self._write("Research data refreshed.")
        return True

    def query(
        self, start: Aspect, end: Aspect, distance: int
    ) -> Optional[SearchReport]:
        """Search from ``distance`` intermediate aspects upwards.

        The window slides to longer paths until one holds a path, the search
        limit is hit, or the length cap is reached. A report that found
        nothing means the limit stopped the search.
        """
        target = distance + ENDPOINT_COUNT
        while target <= MAX_PATH_LENGTH:
            slack = min(self._slack, MAX_PATH_LENGTH - target + 1)
            results = self.solver.find_paths(start, end, target, slack)
            report = summarize(results, target)
            if report.found or report.incomplete:
                return report

            last = target + slack - 1
            self._write(
                f"There is no such path of length {_lengths(target, last)} "
                f"between aspects {start.label} and {end.label}."
            )
            target = last + 1
            if target <= MAX_PATH_LENGTH:
                self._write(
                    f"Trying to find a path with length of {target}."
                )
        return None

    def run_once(self) -> bool:
        """Answer one query; ``False`` once the user asks to quit."""
        first: Union[Aspect, str] = prompt_until_valid(
            "Enter the first aspect: ",
            validate_aspect_or_command,
            read=self._read,
            write=self._write,
        )
        if isinstance(first, str):
            if first in QUIT_COMMANDS:
                return False
            if first == REFRESH_COMMAND:
                self.refresh()
            return True

        second = prompt_until_valid(
            "Enter the second aspect: ",
            validate_aspect_name,
            read=self._read,
            write=self._write,
        )
        distance = prompt_until_valid(
            "Enter the desired distance: ",
            validate_distance,
            read=self._read,
            write=self._write,
        )

        self._write("\n")
        report = self.query(first, second, distance)
        if report is None:
            self._write(
                f"No path between {first.label} and {second.label} of at "
                f"most {MAX_PATH_LENGTH} aspects."
            )
        elif not report.found:
            last = report.target_length + len(report.results) - 1
            self._write(
                "Search limit reached before any path of length "
                f"{_lengths(report.target_length, last)} between aspects "
                f"{first.label} and {second.label} was found; raise "
                "--max-expansions to search further."
            )
        else:
            for line in render_report(first, second, report):
                self._write(line)
        self._write("\n")
        return True

    def run(self) -> int:
        """Loop until the user quits or input ends."""
        if self._solver is None:
            self.load()
        try:
            while self.run_once():
                pass
        except (EOFError, KeyboardInterrupt):
            self._write("")
        return 0


def _lengths(first: int, last: int) -> str:
    return str(first) if last == first else f"{first}-{last}"


def build_source(
    args: argparse.Namespace, parser: argparse.ArgumentParser
) -> SnapshotSource:
    """Pick the snapshot source from the parsed options."""
    if args.snapshot_file:
        return FileSnapshotSource(args.snapshot_file)
    if args.snapshot_url:
        return HttpSnapshotClient(args.snapshot_url)

    missing: List[str] = [
        flag
        for flag, value in (
            ("--username", args.username),
            ("--ftp-address", args.ftp_address),
            ("--ftp-username", args.ftp_username),
            ("--ftp-password", args.ftp_password),
        )
        if not value
    ]
    if missing:
        parser.error(
            "the following arguments are required without "
            f"--snapshot-file or --snapshot-url: {', '.join(missing)}"
        )
    return FtpSnapshotClient(
        args.ftp_address,
        args.ftp_username,
        args.ftp_password,
        args.username,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(
        prog="thaumpath",
        description=(
            "Thaumcraft research solver using weighted paths with your "
            "actual aspect inventory."
        ),
        epilog=(
            "Every option can also be set through a THAUMPATH_<OPTION> "
            "environment variable or a .env file."
        ),
    )
    argument_parser.add_argument(
        "-u",
        "--username",
        default=env_value("username"),
        help="Minecraft username whose research data is loaded.",
    )
    argument_parser.add_argument(
        "-a",
        "--ftp-address",
        default=env_value("ftp_address"),
        help="Minecraft server FTP address (host[:port]).",
    )
    argument_parser.add_argument(
        "-f",
        "--ftp-username",
        default=env_value("ftp_username"),
        help="Minecraft server FTP username.",
    )
    argument_parser.add_argument(
        "-p",
        "--ftp-password",
        default=env_value("ftp_password"),
        help="Minecraft server FTP password.",
    )
    argument_parser.add_argument(
        "--snapshot-url",
        default=env_value("snapshot_url"),
        help="Download the research file over HTTP(S) instead of FTP.",
    )
    argument_parser.add_argument(
        "--snapshot-file",
        default=env_value("snapshot_file"),
        help="Read a local copy of the research file instead of FTP.",
    )
    argument_parser.add_argument(
        "--slack",
        type=int,
        default=env_int("slack", DEFAULT_LENGTH_SLACK),
        help="How many path lengths to compare per query (default: 3).",
    )
    argument_parser.add_argument(
        "--max-expansions",
        type=int,
        default=env_int("max_expansions", DEFAULT_MAX_EXPANSIONS),
        help="Per-length search budget; 0 disables the limit.",
    )
    return argument_parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    configure_logging()
    argument_parser = build_arg_parser()
    parsed_args = argument_parser.parse_args(argv)

    if parsed_args.slack < 1:
        argument_parser.error("--slack must be at least 1")
    if parsed_args.max_expansions < 0:
        argument_parser.error("--max-expansions must not be negative")

    try:
        source = build_source(parsed_args, argument_parser)
        app = ResearchApp(
            source,
            slack=parsed_args.slack,
            max_expansions=parsed_args.max_expansions,
        )
        app.load()
    except (SnapshotError, MalformedInventory) as error:
        logger.exception("Start-up failed")
        print(f"error: {error}", file=sys.stderr)
        return 1

    return app.run()


if __name__ == "__main__":
    sys.exit(main())
