from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Iterable, List


# Resolve installation dir (lishp package directory)
_LISHP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE = _LISHP_DIR / 'prelude' / 'core.lisp'
_DEFAULT_RC_NAME = '.lishprc'

EXIT_STATUS_VAR = '$?'
PROMPT_VAR = 'lishp_prompt'
DEFAULT_PROMPT = '> '
# Lists whose flattened text is longer than this print one item per line
LIST_WRAP_WIDTH = 100


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_search_path() -> List[Path]:
    # Read on every call so that (export PATH ...) is honoured immediately
    return paths_from_env('PATH', [])


def get_home_dir() -> Path:
    home = os.environ.get('HOME')
    return Path(home) if home else Path.home()


def get_prelude_path() -> Path:
    return paths_from_env('LISHP_PRELUDE_PATH', [_DEFAULT_PRELUDE])[0]


def get_rc_path() -> Path:
    return paths_from_env('LISHP_RC', [get_home_dir() / _DEFAULT_RC_NAME])[0]


def get_log_level(name: str | None = None) -> int:
    name = (name or os.environ.get('LISHP_LOG_LEVEL', 'WARNING')).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
