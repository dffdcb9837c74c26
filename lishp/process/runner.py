"""External command execution.

Commands run as child processes through `subprocess`. A command that is the
whole input line inherits the shell's stdout and its exit status becomes `$?`;
a command used as a sub-expression has its stdout captured and handed back as
a list of lines, and leaves `$?` alone.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional

from lishp import EvaluatorFn
from lishp.config import get_search_path
from lishp.errors import LishpCommandNotFound, LishpTypeError
from lishp.types.expression import Atom, EMPTY, Expression, List
from lishp.types.state import State

logger = logging.getLogger(__name__)

# Status reported when the executable exists but cannot be started
EXEC_FAILURE_STATUS = 126


@dataclass(frozen=True)
class ProcessResult:
    output: Optional[str]
    status: int


def search_path(name: str) -> Optional[str]:
    """Resolve a command name to an executable path, or None.

    A name naming an existing regular file (absolute, or relative to the
    working directory) is used as is; otherwise the PATH directories are
    scanned in order for an entry spelled exactly `name`.
    """
    if not name:
        return None
    if os.path.isfile(name):
        return os.path.abspath(name)

    for directory in get_search_path():
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.name == name:
                        logger.debug("resolved %s -> %s", name, entry.path)
                        return entry.path
        except OSError as e:
            logger.debug("skipping search path entry %s: %s", directory, e)
    return None


def split_lines(output: str) -> list[str]:
    """Split captured output on newlines; a trailing newline adds no empty line."""
    if not output:
        return []
    lines = output.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def run_process(path: str, argv: list[str], capture: bool) -> ProcessResult:
    """Run `path` with `argv` (argv[0] is the name the user typed) and wait for it."""
    logger.info("exec %s %s", path, argv[1:])
    if not capture:
        sys.stdout.flush()
    try:
        completed = subprocess.run(
            argv,
            executable=path,
            stdout=subprocess.PIPE if capture else None,
        )
    except OSError as e:
        sys.stderr.write(f"error: {e}\n")
        return ProcessResult("" if capture else None, EXEC_FAILURE_STATUS)
    except ValueError as e:
        # e.g. an argument containing a NUL character
        raise LishpTypeError(f"{argv[0]}: {e}")

    status = completed.returncode
    if status < 0:
        status = 128 - status
    logger.debug("%s exited with status %d", argv[0], status)

    output = None
    if capture:
        output = completed.stdout.decode("utf-8", errors="replace")
    return ProcessResult(output, status)


def run_command(
    name: str,
    args: list[Expression],
    state: State,
    evaluate_fn: EvaluatorFn,
    is_top_level: bool = False,
) -> Expression:
    """Resolve `name`, evaluate the arguments to text and run the command.

    Returns the empty atom at top level, otherwise the captured output as a
    List of one Atom per line.
    """
    path = search_path(name)
    if path is None:
        raise LishpCommandNotFound(f"command not found: {name}")

    argv = [name]
    argv.extend(evaluate_fn(arg, state).ident() for arg in args)

    result = run_process(path, argv, capture=not is_top_level)
    if is_top_level:
        state.last_ret_code = result.status
        return EMPTY
    return List(Atom(line) for line in split_lines(result.output or ""))
