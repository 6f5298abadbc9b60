"""
CLI (Command Line Interface).

    courseadder check [lines.txt]
    courseadder save lines.txt
    courseadder show
    courseadder match "CSE221: Sec-09B" --html page.html
    courseadder run --html page.html [--lines lines.txt] [--out page.out.html]

Input lines come from a text file (one target per line, blank lines ignored)
or from the saved lines (see storage.py). The widget page is either a saved
HTML file (--html) or fetched live (--url).

Note:
- This CLI is intentionally simple and prints plain text
"""

from __future__ import annotations

import argparse
from pathlib import Path

import requests

from courseadder.driver import DEFAULT_PAUSE_SECONDS, DEFAULT_SETTLE_SECONDS, run_add_sequence, summarize
from courseadder.match import matching_rule, rank_candidates
from courseadder.model import ADDED, ERROR, NOT_FOUND, SKIPPED
from courseadder.parse import parse_target, parse_targets, split_lines
from courseadder.storage import load_saved_lines, save_lines
from courseadder.widget import DualListbox, fetch_widget_html, load_widget


def _count_text(n: int) -> str:
    return f"{n} {'line' if n == 1 else 'lines'}"


def _read_lines(path: str | None) -> list[str] | None:
    """
    Lines from a text file, or the saved lines if no file is given.

    Returns None (after printing a message) if the file cannot be read.
    """
    if not path:
        return load_saved_lines()
    try:
        return split_lines(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read lines file {path}: {e}")
        return None


def _open_widget(args: argparse.Namespace) -> DualListbox | None:
    """
    Load the widget page from --html or --url. Never raises.
    """
    try:
        if args.html:
            return load_widget(args.html)
        return DualListbox(fetch_widget_html(args.url))
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read widget page {args.html}: {e}")
    except requests.RequestException as e:
        print(f"Cannot fetch widget page {args.url}: {e}")
    return None


def _cmd_check(args: argparse.Namespace) -> int:
    """
    Show how each line is understood, without touching any widget.
    """
    lines = _read_lines(args.file)
    if lines is None:
        return 1

    for line, target in parse_targets(lines):
        if target is None:
            print(f"SKIP  {line}")
        else:
            print(f"OK    {line}  ->  course={target.course} section={target.section or '*'}")

    print(_count_text(len(lines)))
    return 0


def _cmd_save(args: argparse.Namespace) -> int:
    lines = _read_lines(args.file)
    if lines is None:
        return 1

    stored = save_lines(lines)
    print(f"Saved {_count_text(len(stored))}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    lines = load_saved_lines()
    if not lines:
        print("No saved lines.")
        return 0

    for line in lines:
        print(line)
    print(_count_text(len(lines)))
    return 0


def _cmd_match(args: argparse.Namespace) -> int:
    """
    Explain how one line would be matched against the current page.
    """
    target = parse_target(args.line)
    if target is None:
        print(f"Cannot parse: {args.line!r}")
        return 1

    widget = _open_widget(args)
    if widget is None:
        return 1

    ranked = rank_candidates(target, widget.search(target.course))
    print(f"Target: course={target.course} section={target.section or '*'}")
    if not ranked:
        print("No rows for this course.")
        return 0

    chosen = None
    for s, acceptable, cand in ranked:
        rule = matching_rule(cand.label, target.section) if target.section else None
        mark = "  "
        if acceptable and chosen is None:
            chosen = cand
            mark = "=>"
        status = "ok" if acceptable else "--"
        print(f"{mark} {s:>3} {status} {cand.label}" + (f"  [{rule}]" if rule else ""))

    if chosen is None:
        print("Not found.")
    return 0


def _cmd_run(args: argparse.Namespace) -> int:
    lines = _read_lines(args.lines)
    if lines is None:
        return 1
    if not lines:
        print("No lines to run.")
        return 1

    widget = _open_widget(args)
    if widget is None:
        return 1

    results = run_add_sequence(
        lines,
        source=widget,
        sink=widget,
        settle_seconds=args.settle,
        pause_seconds=args.pause,
    )

    counts = summarize(results)
    print(
        f"Done: added={counts[ADDED]} not_found={counts[NOT_FOUND]} "
        f"skipped={counts[SKIPPED]} errors={counts[ERROR]}"
    )

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(widget.to_html(), encoding="utf-8")
        print(f"Updated page written to: {out}")

    return 0


def _add_page_source(p: argparse.ArgumentParser) -> None:
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--html", type=str, help="Saved registration page (HTML file)")
    src.add_argument("--url", type=str, help="Registration page URL")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="courseadder", description="Course Adder CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Show how input lines are parsed")
    p_check.add_argument("file", type=str, nargs="?", help="Lines file (default: saved lines)")

    p_save = sub.add_parser("save", help="Save input lines from a file")
    p_save.add_argument("file", type=str, help="Lines file (e.g. lines.txt)")

    sub.add_parser("show", help="Show saved input lines")

    p_match = sub.add_parser("match", help="Rank the page rows for one input line")
    p_match.add_argument("line", type=str, help='Input line (e.g. "CSE221: Sec-09B")')
    _add_page_source(p_match)

    p_run = sub.add_parser("run", help="Add all input lines on the page")
    _add_page_source(p_run)
    p_run.add_argument("--lines", type=str, default=None, help="Lines file (default: saved lines)")
    p_run.add_argument("--out", type=str, default=None, help="Write the updated page here")
    p_run.add_argument("--settle", type=float, default=DEFAULT_SETTLE_SECONDS, help="Seconds to wait after adding")
    p_run.add_argument("--pause", type=float, default=DEFAULT_PAUSE_SECONDS, help="Seconds to wait between lines")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        raise SystemExit(_cmd_check(args))
    if args.command == "save":
        raise SystemExit(_cmd_save(args))
    if args.command == "show":
        raise SystemExit(_cmd_show(args))
    if args.command == "match":
        raise SystemExit(_cmd_match(args))
    if args.command == "run":
        raise SystemExit(_cmd_run(args))

    raise SystemExit(2)
