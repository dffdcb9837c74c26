import pytest
from hypothesis import given, strategies as st

from lishp.errors import LishpIncompleteInput, LishpSyntaxError
from lishp.reader.parser import (
    EOF, LPAREN, QUOTE, RPAREN,
    can_parse, lex, parse, parse_line, parse_program,
)
from lishp.types.expression import Atom, Call, List


def ident(text):
    return ("ident", text)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("", [EOF]),
        ("ls -l", [LPAREN, ident("ls"), ident("-l"), RPAREN, EOF]),
        ("(ls -l)", [LPAREN, ident("ls"), ident("-l"), RPAREN, EOF]),
        ("(a) (b)", [LPAREN, LPAREN, ident("a"), RPAREN, LPAREN, ident("b"), RPAREN, RPAREN, EOF]),
        ('echo "a b"', [LPAREN, ident("echo"), ident("a b"), RPAREN, EOF]),
        ('echo ""', [LPAREN, ident("echo"), ident(""), RPAREN, EOF]),
        ('echo "(;)"', [LPAREN, ident("echo"), ident("(;)"), RPAREN, EOF]),
        ("echo ; a comment\n", [LPAREN, ident("echo"), RPAREN, EOF]),
        ("'(a b)", [LPAREN, QUOTE, LPAREN, ident("a"), ident("b"), RPAREN, RPAREN, EOF]),
        ("a'b", [LPAREN, ident("a"), QUOTE, ident("b"), RPAREN, EOF]),
        ('echo "abc', [LPAREN, ident("echo"), ident("abc"), RPAREN, EOF]),
    ],
)
def test_lexer_basic(source, expected):
    assert lex(source) == expected


@pytest.mark.parametrize(
    "source,text",
    [
        (r'"a\nb"', "a\nb"),
        (r"\x41\x62", "Ab"),
        (r'"say \"hi\""', 'say "hi"'),
        (r"a\ b", "a b"),
        (r"\(", "("),
        (r"\\", "\\"),
    ],
)
def test_lexer_escapes(source, text):
    assert lex(source) == [LPAREN, ident(text), RPAREN, EOF]


def test_lexer_bad_hex_escape():
    with pytest.raises(LishpSyntaxError):
        lex(r"\xZZ")


def test_lexer_trailing_backslash_is_incomplete():
    with pytest.raises(LishpIncompleteInput):
        lex("echo \\")


def test_alias_expands_in_head_position():
    aliases = {"ll": ("ls", "-l")}
    assert lex("(ll /tmp)", aliases) == lex("(ls -l /tmp)")
    assert lex("ll /tmp", aliases) == lex("(ls -l /tmp)")


def test_alias_ignored_outside_head_position():
    aliases = {"ll": ("ls", "-l")}
    assert lex("(echo ll)", aliases) == lex("(echo ll)")


def test_alias_group_with_spaces_is_rescanned():
    assert lex("(ll)", {"ll": ("ls -l",)}) == lex("(ls -l)")


def test_alias_expansion_is_not_recursive():
    assert lex("(a)", {"a": ("a", "x")}) == [LPAREN, ident("a"), ident("x"), RPAREN, EOF]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("", Atom("")),
        ("ls -l", Call([Atom("ls"), Atom("-l")])),
        ("(a (b c))", Call([Atom("a"), Call([Atom("b"), Atom("c")])])),
        ("(list '(a b))", Call([Atom("list"), List([Atom("a"), Atom("b")])])),
        ("(list 'x)", Call([Atom("list"), Atom("x")])),
        ("(list '())", Call([Atom("list"), List()])),
        ("()", Call()),
    ],
)
def test_parse_line(source, expected):
    assert parse_line(source) == expected


def test_parse_rejects_leftover_tokens():
    tokens = [LPAREN, ident("a"), RPAREN, ident("b"), EOF]
    with pytest.raises(LishpSyntaxError, match="Unexpected token: b"):
        parse(tokens)


def test_parse_stray_rparen():
    with pytest.raises(LishpSyntaxError, match=r"Unexpected token: \)"):
        parse_line(")")


def test_parse_incomplete():
    with pytest.raises(LishpIncompleteInput):
        parse_line("(a (b c)")


@pytest.mark.parametrize(
    "source,ok",
    [
        ("(a b)", True),
        ("(a b", False),
        ("(a\n (b", False),
        ("echo \\", False),
        (")", True),
        (r"\xZZ", True),
        ("", True),
    ],
)
def test_can_parse(source, ok):
    assert can_parse(source) is ok


def test_parse_program_reads_every_form():
    forms = list(parse_program("(a 1)\n; comment\n(b '(2 3))"))
    assert forms == [
        Call([Atom("a"), Atom("1")]),
        Call([Atom("b"), List([Atom("2"), Atom("3")])]),
    ]


def test_parse_program_sees_aliases_added_while_reading():
    aliases = {}
    forms = parse_program("(first) (ll x)", aliases)
    assert next(forms) == Call([Atom("first")])
    aliases["ll"] = ("ls", "-l")
    assert next(forms) == Call([Atom("ls"), Atom("-l"), Atom("x")])


# Printable atom text: anything but the characters the reader treats specially
_atom_text = st.text(
    alphabet=st.characters(exclude_characters="()'\";\\", exclude_categories=("Cs",)),
    max_size=12,
)
_atoms = _atom_text.map(Atom)
_flat_lists = st.lists(_atoms, max_size=15).map(List)


@given(st.one_of(_atoms, _flat_lists))
def test_print_then_read_round_trip(value):
    (read_back,) = parse_program("'" + str(value))
    assert read_back == value


def test_deep_nesting_is_a_syntax_error():
    source = "(" * 3000 + ")" * 3000
    with pytest.raises(LishpSyntaxError, match="nesting too deep"):
        parse_line(source)
    with pytest.raises(LishpSyntaxError, match="nesting too deep"):
        list(parse_program(source))
    # Reported at evaluation, not treated as incomplete input
    assert can_parse(source) is True
