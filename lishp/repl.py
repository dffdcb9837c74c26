"""Command line entry point: one-shot `-c` mode and the interactive loop."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import Callable

from lishp import __version__
from lishp.config import DEFAULT_PROMPT, get_log_level
from lishp.errors import LishpError
from lishp.interpreter import Interpreter
from lishp.types.expression import EMPTY

logger = logging.getLogger(__name__)

CONTINUATION_PROMPT = "... "


def run_command(itp: Interpreter, line: str) -> None:
    """Evaluate one line and print its value, or the error on stderr."""
    try:
        result = itp.eval(line)
        text = "" if result == EMPTY else itp.show(result)
    except LishpError as e:
        sys.stderr.write(f"Error: {e}\n")
        return
    print(text)


def _prompt(itp: Interpreter) -> str:
    try:
        return itp.prompt()
    except LishpError as e:
        logger.warning("lishp_prompt failed: %s", e)
        return DEFAULT_PROMPT


def read_command(itp: Interpreter, input_fn: Callable[[str], str] = input) -> str:
    """Read lines until they form a complete expression. Raises EOFError on Ctrl-D."""
    line = input_fn(_prompt(itp))
    while not itp.can_parse(line):
        line += "\n" + input_fn(CONTINUATION_PROMPT)
    return line


def run_interactive(itp: Interpreter, input_fn: Callable[[str], str] = input) -> None:
    # Ctrl-C must not kill the shell; children still get the default handler
    signal.signal(signal.SIGINT, lambda signum, frame: None)
    while True:
        try:
            line = read_command(itp, input_fn)
        except EOFError:
            print()
            break
        if not line.strip():
            continue
        run_command(itp, line)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="lishp", description="A Lisp-flavoured command shell")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="logging level (default: $LISHP_LOG_LEVEL or WARNING)")
    parser.add_argument("--no-rc", action="store_true", help="do not load the rc file")
    parser.add_argument("-c", dest="command", nargs=argparse.REMAINDER, help="run one command and exit")
    args = parser.parse_args(argv)

    level = get_log_level(args.log_level)
    logging.basicConfig(level=level, format="[%(asctime)s] %(levelname)s: %(message)s")

    itp = Interpreter(rc_file=None if args.no_rc else "auto")

    if args.command is not None:
        run_command(itp, " ".join(args.command))
        return 0

    run_interactive(itp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
