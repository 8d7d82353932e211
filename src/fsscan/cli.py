"""CLI entry point for fss — I/O boundary only."""

from __future__ import annotations

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import Callable, Final, TextIO

from fsscan import FssError
from fsscan.filter import EntryFilter, ExcludeFilter
from fsscan.formatter.lines import format_event
from fsscan.formatter.report import format_report, format_summary, search_header
from fsscan.fs import FileSystem
from fsscan.options import PathStyle, SearchMode, WalkOptions
from fsscan.walker import WalkEvent, Walker, WalkState

# (argparse dest, flag shown in messages, mode)
_SEARCH_FLAGS: Final[tuple[tuple[str, str, SearchMode], ...]] = (
    ("search_exact", "--search", SearchMode.EXACT_NAME),
    ("search_noext", "--search-noext", SearchMode.EXACT_STEM),
    ("search_contains", "--contains", SearchMode.SUBSTRING),
)

# Lone surrogates from undecodable file names are written as backslash escapes.
OUTPUT_ERRORS: Final[str] = "backslashreplace"


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``fss`` command.
    """
    parser = argparse.ArgumentParser(
        prog="fss",
        description="Scan through the filesystem starting from PATH.",
        epilog='Example: fss ".." --recursive --files',
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        metavar="PATH",
        help="Directory to scan (default: current directory)",
    )

    parser.add_argument(
        "-r",
        "--recursive",
        nargs="?",
        const="0",
        default=None,
        metavar="N",
        help="Recursively go through directories, at most N levels (0 or no value: unlimited)",
    )
    parser.add_argument(
        "-p",
        "--permissions",
        action="store_true",
        dest="show_permissions",
        help="Show permissions of each entry",
    )
    parser.add_argument(
        "-t",
        "--modification-time",
        action="store_true",
        dest="show_mtime",
        help="Show last modification time of each entry",
    )
    parser.add_argument(
        "-a",
        "--abs",
        action="store_true",
        dest="absolute",
        help="Show absolute canonical paths without indentation",
    )

    # visibility
    parser.add_argument(
        "-f",
        "--files",
        action="store_true",
        dest="show_files",
        help="Show regular files (normally only counted)",
    )
    parser.add_argument(
        "-l",
        "--symlinks",
        action="store_true",
        dest="show_symlinks",
        help="Show symlinks (normally only counted)",
    )
    parser.add_argument(
        "-s",
        "--special",
        action="store_true",
        dest="show_special",
        help="Show special files such as sockets, pipes, etc. (normally only counted)",
    )

    # search
    parser.add_argument(
        "-S",
        "--search",
        default=None,
        dest="search_exact",
        metavar="PATTERN",
        help="Only log entries whose name matches PATTERN exactly",
    )
    parser.add_argument(
        "--search-noext",
        default=None,
        dest="search_noext",
        metavar="PATTERN",
        help="Only log entries whose name without extension matches PATTERN exactly",
    )
    parser.add_argument(
        "--contains",
        default=None,
        dest="search_contains",
        metavar="PATTERN",
        help="Only log entries whose name contains PATTERN",
    )

    parser.add_argument(
        "-d",
        "--dir-size",
        "--recursive-dir-size",
        action="store_true",
        dest="dir_size",
        help="Compute and show the recursive size of each directory",
    )
    parser.add_argument(
        "-e",
        "--show-err",
        action="store_true",
        dest="show_errors",
        help="Show errors met while reading entries",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        dest="patterns",
        metavar="PATTERN",
        help="Skip entries matching a gitignore-style pattern (can be specified multiple times)",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Also skip entries ignored by PATH/.gitignore",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        dest="strict_kinds",
        help="Abort when an entry's type can not be determined",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        dest="output_file",
        help="Write output to a file instead of stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr",
    )
    return parser


def run_fss(argv: list[str] | None = None) -> str:
    """Run fss with provided CLI args and return the rendered report.

    This function is intentionally side-effect free and is the primary
    test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.

    Returns:
        str: Final rendered output.

    Raises:
        FssError: On any user-facing validation error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _resolve_root(directory: str) -> Path:
    """Validate the start directory argument.

    Args:
        directory: Directory argument from CLI.

    Returns:
        Path: Root path, as given.

    Raises:
        FssError: If the argument is empty, missing, or not a directory.
    """
    if not directory:
        raise FssError("Path can not be empty")
    root = Path(directory)
    if not root.exists():
        raise FssError(f"'{directory}' does not exist")
    if not root.is_dir():
        raise FssError(f"'{directory}' is not a directory")
    return root


def _parse_depth(value: str | None) -> int:
    """Translate the ``-r`` value into a depth limit.

    Args:
        value: Raw value following ``-r``, or ``None`` when absent.

    Returns:
        int: Depth limit, ``0`` meaning unlimited.

    Raises:
        FssError: If the value is not a non-negative whole number.
    """
    if value is None:
        return 0
    try:
        depth = int(value)
    except ValueError:
        depth = -1
    if depth < 0:
        raise FssError(
            f"Invalid value for recursion depth '{value}', "
            "please provide a positive whole number"
        )
    return depth


def _resolve_search(args: argparse.Namespace) -> tuple[SearchMode, str]:
    """Pick the single active search mode.

    Args:
        args: Parsed CLI namespace.

    Returns:
        tuple[SearchMode, str]: Mode and pattern; ``(NONE, "")`` if unset.

    Raises:
        FssError: If more than one search flag is given or the pattern
            is empty.
    """
    given = [
        (flag, mode, getattr(args, dest))
        for dest, flag, mode in _SEARCH_FLAGS
        if getattr(args, dest) is not None
    ]
    if not given:
        return SearchMode.NONE, ""
    if len(given) > 1:
        raise FssError(
            f"Can only set one search mode at a time ({given[0][0]} and {given[1][0]})"
        )
    flag, mode, pattern = given[0]
    if not pattern:
        raise FssError(f"No search pattern provided after '{flag}'")
    return mode, pattern


def _build_options(args: argparse.Namespace) -> WalkOptions:
    """Resolve parsed arguments into walk options.

    Raises:
        FssError: On an invalid depth or search configuration.
    """
    search_mode, pattern = _resolve_search(args)
    return WalkOptions(
        recursive=args.recursive is not None,
        max_depth=_parse_depth(args.recursive),
        show_files=args.show_files,
        show_symlinks=args.show_symlinks,
        show_special=args.show_special,
        show_permissions=args.show_permissions,
        show_mtime=args.show_mtime,
        path_style=PathStyle.ABSOLUTE if args.absolute else PathStyle.INDENTED,
        dir_size=args.dir_size,
        show_errors=args.show_errors,
        search_mode=search_mode,
        pattern=pattern,
        strict_kinds=args.strict_kinds,
    )


def _build_filter(args: argparse.Namespace, root: Path) -> ExcludeFilter | None:
    """Build the exclusion filter from ``-x`` and ``--gitignore``.

    Args:
        args: Parsed CLI namespace.
        root: Scan root.

    Returns:
        ExcludeFilter | None: Filter, or ``None`` when nothing is excluded.
    """
    patterns: list[str] = list(args.patterns)
    if args.gitignore:
        from fsscan.gitignore import load_gitignore_patterns

        patterns.extend(load_gitignore_patterns(root))
    return ExcludeFilter(root, patterns) if patterns else None


def _prepare(
    args: argparse.Namespace,
) -> tuple[WalkOptions, Path, ExcludeFilter | None]:
    """Validate arguments before anything is scanned or written.

    Args:
        args: Parsed CLI namespace.

    Returns:
        tuple: Walk options, scan root and optional exclusion filter.

    Raises:
        FssError: On an invalid depth, search configuration or root.
    """
    options = _build_options(args)
    root = _resolve_root(args.directory)
    return options, root, _build_filter(args, root)


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the core scan/format pipeline for parsed arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        str: Rendered output.

    Raises:
        FssError: On any user-facing validation error, or an
            unclassifiable entry with ``--strict``.
    """
    options, root, entry_filter = _prepare(args)

    events: list[WalkEvent] = []
    walker = Walker(options, sink=events.append, entry_filter=entry_filter)
    state = walker.run(root)
    return format_report(events, state, options)


def stream_fss(
    options: WalkOptions,
    root: Path,
    write: Callable[[str], None],
    entry_filter: EntryFilter | None = None,
    fs: FileSystem | None = None,
) -> WalkState:
    """Scan ``root`` and hand every output line to ``write`` as it is produced.

    No event is kept once its line is written. The search header comes
    first and the summary lines follow the last entry line, so the
    written lines equal ``run_fss`` output for the same arguments.

    Args:
        options: Walk options.
        root: Scan root.
        write: Callable receiving one line at a time, without newline.
        entry_filter: Optional exclusion filter.
        fs: Filesystem adapter. Defaults to ``OsFileSystem()``.

    Returns:
        WalkState: Totals of the run.

    Raises:
        FssError: On an unclassifiable entry with ``--strict``.
    """
    if options.searching:
        write(search_header(options))

    def emit(event: WalkEvent) -> None:
        write(format_event(event, options))

    walker = Walker(options, fs=fs, sink=emit, entry_filter=entry_filter)
    state = walker.run(root)
    for line in format_summary(state, options):
        write(line)
    return state


def _line_writer(stream: TextIO) -> Callable[[str], None]:
    def write(line: str) -> None:
        stream.write(line + "\n")

    return write


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once, validates them, then streams output to
    stdout or the ``-o`` file line by line. Exits with code 1 on
    user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )

    try:
        options, root, entry_filter = _prepare(args)
        if args.output_file:
            try:
                with open(
                    args.output_file,
                    "w",
                    encoding="utf-8",
                    errors=OUTPUT_ERRORS,
                    newline="",
                ) as out:
                    stream_fss(options, root, _line_writer(out), entry_filter)
            except OSError as exc:
                sys.stderr.write(
                    f"fss: cannot write to '{args.output_file}': {exc}\n"
                )
                sys.exit(1)
        else:
            if isinstance(sys.stdout, io.TextIOWrapper):
                sys.stdout.reconfigure(errors=OUTPUT_ERRORS)
            stream_fss(options, root, _line_writer(sys.stdout), entry_filter)
    except FssError as exc:
        sys.stderr.write(f"fss: {exc}\n")
        sys.exit(1)
