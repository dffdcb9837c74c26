import pytest

from lishp.errors import LishpArityError, LishpTypeError
from lishp.reader.parser import lex
from lishp.types.expression import Atom, Call, List


def test_def_stores_the_raw_expression(itp):
    assert itp.eval("(def x (+ 1 2))") == Atom("defined x")
    assert itp.state.defs["x"] == Call([Atom("+"), Atom("1"), Atom("2")])
    assert itp.eval("(list x)") == List([Atom("3")])


def test_def_value_is_substituted_once(itp):
    itp.eval("(def a b)")
    itp.eval("(def b c)")
    assert itp.eval("(list a)") == List([Atom("b")])


def test_def_needs_a_symbol(itp):
    with pytest.raises(LishpTypeError):
        itp.eval("(def (x) 1)")


def test_defun_and_call(itp):
    assert itp.eval("(defun inc (x) (+ x 1))") == Atom("defined inc")
    assert itp.eval("(inc 41)") == Atom("42")


def test_defun_renames_parameters(itp):
    itp.eval("(defun f (x y) (+ x y))")
    fn = itp.state.funcs["f"]
    assert fn.params == ["#x#0#", "#y#1#"]
    assert fn.body == Call([Atom("+"), Atom("#x#0#"), Atom("#y#1#")])


def test_hygiene_between_functions(itp):
    itp.eval("(defun f (x) (+ x 1))")
    itp.eval("(defun g (x) (f x))")
    assert itp.eval("(g 5)") == Atom("6")


def test_argument_named_like_a_parameter_is_not_captured(itp):
    itp.eval("(defun pair (x y) (list x y))")
    assert itp.eval("(pair y x)") == List([Atom("y"), Atom("x")])


def test_function_arity_mismatch(itp):
    itp.eval("(defun f (x) x)")
    with pytest.raises(LishpArityError, match="f expects 1 argument"):
        itp.eval("(f 1 2)")


def test_tail_recursion_runs_in_constant_stack(itp):
    itp.eval("(defun countdown (n) (if (= n 0) done (countdown (- n 1))))")
    assert itp.eval("(countdown 5000)") == Atom("done")


def test_accumulating_tail_recursion(itp):
    itp.eval("(defun fact (n acc) (if (= n 0) acc (fact (- n 1) (* n acc))))")
    assert itp.eval("(fact 10 1)") == Atom("3628800")


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(let ((x 2)) (+ x 1))", "3"),
        ("(let ((x 2) (y 3)) (* x y))", "6"),
        ("(let (x 2 y 3) (- x y))", "-1"),
        ("(let ((x (+ 1 1))) (let ((y x)) (+ y x)))", "4"),
    ],
)
def test_let(itp, source, expected):
    assert itp.eval(source) == Atom(expected)


def test_let_values_see_the_surrounding_state_only(itp):
    itp.eval("(def y outer)")
    assert itp.eval("(let ((y inner) (z y)) (list y z))") == List([Atom("inner"), Atom("outer")])


def test_let_in_tail_position(itp):
    itp.eval("(defun loop (n) (let ((m (- n 1))) (if (= m 0) end (loop m))))")
    assert itp.eval("(loop 3000)") == Atom("end")


def test_let_rejects_malformed_bindings(itp):
    with pytest.raises(LishpTypeError):
        itp.eval("(let (x) x)")


@pytest.mark.parametrize(
    "definition",
    ["(alias ll (ls -l))", "(alias ll ls -l)", '(alias ll "ls -l")', "(alias ll '(ls -l))"],
)
def test_alias_forms_are_equivalent(itp, definition):
    assert itp.eval(definition) == Atom("created alias")
    assert lex("(ll /tmp)", itp.state.aliases) == lex("(ls -l /tmp)")


def test_alias_applies_to_later_lines(itp):
    itp.eval("(alias plus +)")
    assert itp.eval("(plus 1 2)") == Atom("3")
    assert itp.eval("plus 2 2") == Atom("4")


def test_alias_needs_a_replacement(itp):
    with pytest.raises(LishpArityError):
        itp.eval("(alias ll)")
