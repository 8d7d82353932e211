"""Full report assembly: search header, event lines and summary blocks."""

from __future__ import annotations

from fsscan.formatter.lines import format_event
from fsscan.options import WalkOptions
from fsscan.walker import DirectorySummary, WalkEvent, WalkState


def summary_fields(summary: DirectorySummary) -> str:
    """Build the bracketed count fields of a summary line.

    The unknown-entries field only appears when there are any.

    Args:
        summary: Counters to render.

    Returns:
        str: e.g. ``<2 files><0 symlinks><0 special files><1 subdirectories><3 total entries>``.
    """
    fields = [
        f"<{summary.file_count} files>",
        f"<{summary.symlink_count} symlinks>",
        f"<{summary.special_count} special files>",
        f"<{summary.subdir_count} subdirectories>",
    ]
    if summary.unknown_count:
        fields.append(f"<{summary.unknown_count} unknown entries>")
    fields.append(f"<{summary.total_entries} total entries>")
    return "".join(fields)


def search_header(options: WalkOptions) -> str:
    return f'Searching for "{options.pattern}" ({options.search_mode.value})'


def format_summary(state: WalkState, options: WalkOptions) -> list[str]:
    """Return the end-of-run summary lines.

    Nothing is reported when the root directory could not be listed,
    so an inaccessible root doesn't read like an empty one.

    Args:
        state: Accumulators of the finished run.
        options: Options the run used.

    Returns:
        list[str]: Lines, starting with a blank separator line.
    """
    if state.root_failed:
        return []

    if options.searching:
        return [
            "",
            f"Matched: {summary_fields(state.search.matched)}",
            f"Traversed: {summary_fields(state.search.traversed)}",
        ]

    lines = ["", f"Root level: {summary_fields(state.root_totals)}"]
    if options.recursive:
        lines.append(f"All levels: {summary_fields(state.grand_totals)}")
    return lines


def format_report(
    events: list[WalkEvent], state: WalkState, options: WalkOptions
) -> str:
    """Render a finished run as text.

    Args:
        events: Walker events in emission order.
        state: Accumulators of the run.
        options: Options the run used.

    Returns:
        str: Report without trailing newline.
    """
    lines: list[str] = []
    if options.searching:
        lines.append(search_header(options))
    lines.extend(format_event(event, options) for event in events)
    lines.extend(format_summary(state, options))
    return "\n".join(lines)
