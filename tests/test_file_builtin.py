import pytest

from lishp.errors import LishpIOError
from lishp.types.expression import Atom


def test_write_then_read(itp, tmp_path):
    path = tmp_path / "out.txt"
    assert itp.eval(f'(write "hello world" {path})') == Atom("")
    assert path.read_text() == "hello world"
    assert itp.eval(f"(read {path})") == Atom("hello world")


def test_write_replaces_content(itp, tmp_path):
    path = tmp_path / "out.txt"
    path.write_text("old content")
    itp.eval(f"(write new {path})")
    assert path.read_text() == "new"


def test_append_creates_and_extends(itp, tmp_path):
    path = tmp_path / "log.txt"
    itp.eval(f'(append "one\\n" {path})')
    itp.eval(f'(append "two\\n" {path})')
    assert path.read_text() == "one\ntwo\n"


def test_write_evaluates_its_arguments(itp, tmp_path):
    path = tmp_path / "sum.txt"
    itp.eval(f"(def target {path})")
    itp.eval("(write (+ 40 2) target)")
    assert path.read_text() == "42"


def test_read_missing_file(itp, tmp_path):
    with pytest.raises(LishpIOError, match="^read: "):
        itp.eval(f"(read {tmp_path / 'missing.txt'})")


def test_write_to_a_directory(itp, tmp_path):
    with pytest.raises(LishpIOError, match="^write: "):
        itp.eval(f"(write x {tmp_path})")


@pytest.mark.parametrize(
    "source,op",
    [
        (r'(read "a\x00b")', "read"),
        (r'(write x "a\x00b")', "write"),
        (r'(append x "a\x00b")', "append"),
    ],
)
def test_path_with_nul(itp, source, op):
    with pytest.raises(LishpIOError, match=f"^{op}: "):
        itp.eval(source)
