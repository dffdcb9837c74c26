from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Protocol

from lishp.config import get_prelude_path, get_rc_path
from lishp.errors import LishpError

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def load_prelude(itp: _HasEvalPrelude, path: Path | None = None) -> None:
    """Evaluate the core prelude. A missing or failing prelude is fatal."""
    path = path or get_prelude_path()
    logger.debug("loading prelude %s", path)
    itp.eval_prelude(path.read_text(encoding='utf-8'))


def load_rc_file(itp: _HasEvalPrelude, path: Path | None = None) -> bool:
    """Evaluate the user's rc file if there is one.

    Errors are reported on stderr and stop loading the file, but never stop the
    shell from starting. Returns True when the whole file was evaluated.
    """
    path = path or get_rc_path()
    if not path.is_file():
        logger.debug("no rc file at %s", path)
        return False
    logger.debug("loading rc file %s", path)
    try:
        itp.eval_prelude(path.read_text(encoding='utf-8'))
    except (LishpError, OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"Error: {path}: {e}\n")
        return False
    return True
