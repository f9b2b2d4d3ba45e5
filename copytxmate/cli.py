from __future__ import annotations

import argparse
import sys
import threading

from copytxmate.clipboard.backend import ClipboardBackend, ClipboardError, PyperclipBackend
from copytxmate.clipboard.watcher import ClipboardState, ClipboardWatcher
from copytxmate.config import WatcherConfig
from copytxmate.formatting.formatter import format_text
from copytxmate.formatting.samples import render_samples, run_samples
from copytxmate.logging_setup import configure_console_logging

_PREVIEW_CHARS = 200


def _preview(text: str) -> str:
    return text[:_PREVIEW_CHARS] + ("..." if len(text) > _PREVIEW_CHARS else "")


def _make_backend() -> ClipboardBackend:
    return PyperclipBackend()


def _cmd_format(args: argparse.Namespace) -> int:
    text = args.text if args.text is not None else sys.stdin.read()
    sys.stdout.write(format_text(text) + "\n")
    return 0


def _cmd_clip(_args: argparse.Namespace) -> int:
    backend = _make_backend()
    try:
        text = backend.read_text()
    except ClipboardError as e:
        print(f"clipboard unavailable: {e}", file=sys.stderr)
        return 1
    if not text:
        print("Clipboard is empty", file=sys.stderr)
        return 1

    formatted = format_text(text)
    try:
        backend.write_text(formatted)
    except ClipboardError as e:
        print(f"clipboard unavailable: {e}", file=sys.stderr)
        return 1

    print("== Clipboard input ==")
    print(_preview(text))
    print("== Clipboard set text ==")
    print(_preview(formatted))
    return 0


def _cmd_samples(_args: argparse.Namespace) -> int:
    print(render_samples(run_samples()))
    return 0


def _cmd_watch(args: argparse.Namespace, *, stop_event: threading.Event | None = None) -> int:
    base = WatcherConfig.from_env()
    config = WatcherConfig(
        poll_interval_seconds=args.interval if args.interval is not None else base.poll_interval_seconds,
        auto_format=base.auto_format if args.auto_format is None else args.auto_format,
    )
    watcher = ClipboardWatcher(_make_backend(), config=config)

    def _on_change(st: ClipboardState) -> None:
        if st.formatted_text:
            print(st.formatted_text, flush=True)

    watcher.subscribe(_on_change)
    watcher.start()
    stop = stop_event or threading.Event()
    try:
        while not stop.wait(0.2):
            pass
    finally:
        watcher.stop()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="copytxmate",
        description="Reformat mixed Chinese/Latin text: spacing, punctuation width, CJK/Latin spacing.",
    )
    parser.add_argument("--log-level", default="warning", help="Console log level (default: warning)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_format = sub.add_parser("format", help="Format TEXT (or stdin) and print the result")
    p_format.add_argument("text", nargs="?", default=None)
    p_format.set_defaults(func=_cmd_format)

    p_clip = sub.add_parser("clip", help="Format the clipboard text once and write it back")
    p_clip.set_defaults(func=_cmd_clip)

    p_samples = sub.add_parser("samples", help="Show the built-in sample cases")
    p_samples.set_defaults(func=_cmd_samples)

    p_watch = sub.add_parser("watch", help="Watch the clipboard until Ctrl+C")
    p_watch.add_argument("--interval", type=float, default=None, help="Poll interval in seconds (default: 0.5)")
    p_watch.add_argument(
        "--auto-format",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write formatted text back to the clipboard",
    )
    p_watch.set_defaults(func=_cmd_watch)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    configure_console_logging(args.log_level)
    try:
        return int(args.func(args))
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
