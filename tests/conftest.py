import os
import stat

import pytest

from lishp.interpreter import Interpreter

# Small /bin/sh programs put on PATH for the process tests.
SCRIPTS = {
    "greet": 'echo hello\necho world\n',
    "crlf": "printf 'one\\r\\ntwo\\r\\n'\n",
    "silent": "exit 0\n",
    "fail": "exit 3\n",
    "args": 'for a in "$@"; do echo "$a"; done\n',
    "showvar": 'echo "$LISHP_TEST_VAR"\n',
    "killself": "kill -9 $$\n",
}


@pytest.fixture
def itp():
    """A bare interpreter: no prelude, no rc file."""
    return Interpreter(prelude=None, rc_file=None)


@pytest.fixture
def prelude_itp():
    return Interpreter(rc_file=None)


@pytest.fixture
def bin_dir(tmp_path, monkeypatch):
    d = tmp_path / "bin"
    d.mkdir()
    for name, body in SCRIPTS.items():
        script = d / name
        script.write_text("#!/bin/sh\n" + body)
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    # Present on PATH, but not executable
    (d / "noexec").write_text("#!/bin/sh\necho never\n")
    (d / "noexec").chmod(0o644)

    monkeypatch.setenv("PATH", f"{d}{os.pathsep}{os.environ.get('PATH', '')}")
    return d
