"""Command line interface.

    fraghtml render post.json       # JSON element tree (or post object) -> HTML
    fraghtml reformat body.html     # parse and re-serialize HTML
    fraghtml tree body.html         # html5lib-tests style dump of the parse

FILE may be "-" to read stdin. ``--audit`` logs every attribute seen during
the run, and those not on the known-good list, when the command finishes.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

from .config import configure_logging, get_logger
from .convert import POST_AST_KEYS, render, render_post
from .errors import FragmentError, InputEncodingError, TreeFormatError
from .fragment import parse
from .ledger import DiagnosticsLedger
from .serialize import serialize, to_test_format

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="fraghtml", description="Canonical HTML fragments from rich-text trees")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity: -v info, -vv debug (overrides FRAGHTML_LOG_LEVEL)",
    )
    parser.add_argument(
        "--audit",
        action="store_true",
        help="Log the attributes seen during the run, flagging those not on the known-good list",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    render_cmd = commands.add_parser("render", help="Render a JSON element tree or post object to HTML")
    render_cmd.add_argument("file", help="JSON file, or - for stdin")

    reformat_cmd = commands.add_parser("reformat", help="Parse HTML and print its canonical serialization")
    reformat_cmd.add_argument("file", help="HTML file, or - for stdin")

    tree_cmd = commands.add_parser("tree", help="Print the parsed tree in html5lib test format")
    tree_cmd.add_argument("file", help="HTML file, or - for stdin")

    return parser.parse_args(argv)


def _read_bytes(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        msg = f"cannot read {path}: {exc}"
        raise InputEncodingError(msg) from exc


def _load_json(path: str) -> Any:
    try:
        return json.loads(_read_bytes(path))
    except UnicodeDecodeError as exc:
        msg = f"{path} is not valid UTF-8: {exc}"
        raise InputEncodingError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"invalid JSON: {exc}"
        raise TreeFormatError(msg) from exc


def run(args: argparse.Namespace, ledger: DiagnosticsLedger) -> str:
    if args.command == "render":
        document = _load_json(args.file)
        if isinstance(document, dict) and any(key in document for key in POST_AST_KEYS):
            return render_post(document, ledger=ledger)
        return render(document, ledger=ledger)
    tree = parse(_read_bytes(args.file))
    if args.command == "tree":
        return to_test_format(tree)
    return serialize(tree)


def log_audit(ledger: DiagnosticsLedger) -> None:
    for tag, name in ledger.all_seen():
        logger.warning("attribute seen: <%s %s>", tag, name)
    for tag, name in ledger.unknown_seen():
        logger.warning("attribute not on known-good list: <%s %s>", tag, name)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        configure_logging(logging.DEBUG if args.verbose > 1 else logging.INFO)
    else:
        configure_logging()

    ledger = DiagnosticsLedger()
    try:
        output = run(args, ledger)
    except FragmentError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        if args.audit:
            log_audit(ledger)

    sys.stdout.write(output)
    if output and not output.endswith("\n"):
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
