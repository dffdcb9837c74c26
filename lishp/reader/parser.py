"""
  lishp Reader: Lexer, alias expansion and Parser

- Character-at-a-time lexer with four modes: normal, "quoted", \\escape, ;comment
- Tokens are (token_type, token_value) tuples:

    - ("lparen", "(")
    - ("rparen", ")")
    - ("quote", "'")
    - ("ident", text)     bare words and "quoted strings" alike
    - ("eof", None)

- Head-position aliases are expanded on the token stream, one step, no rescan
- A line that is not already one (...) group is wrapped in one, so `ls -l`
  reads exactly like `(ls -l)`
- Parser emits Call / List / Atom:

    - (a b c)   -> Call
    - '(a b c)  -> List
    - word      -> Atom
"""

from __future__ import annotations

from string import hexdigits
from typing import Iterable, Iterator, Mapping, Optional

from lishp.errors import LishpIncompleteInput, LishpSyntaxError
from lishp.types.expression import Atom, Call, Expression, List

Token = tuple[str, Optional[str]]

LPAREN: Token = ("lparen", "(")
RPAREN: Token = ("rparen", ")")
QUOTE: Token = ("quote", "'")
EOF: Token = ("eof", None)

AliasTable = Mapping[str, Iterable[str]]


def _escape(chars: Iterator[str]) -> str:
    """Decode the character(s) following a backslash."""
    c = next(chars, None)
    if c is None:
        raise LishpIncompleteInput("Unexpected end of input after '\\'")
    if c == "n":
        return "\n"
    if c == "x":
        digits = next(chars, "") + next(chars, "")
        if len(digits) != 2 or not all(d in hexdigits for d in digits):
            raise LishpSyntaxError(f"Invalid escape: \\x{digits}")
        return chr(int(digits, 16))
    return c


def _scan(source: str) -> Iterator[Token]:
    """Token generator without wrapping or alias expansion."""
    buf: list[str] = []
    in_quote = False
    in_comment = False
    chars = iter(source)

    for c in chars:
        if in_comment:
            if c == "\n":
                in_comment = False
            continue

        if c == '"':
            # A closing quote always produces a token, even for ""
            if buf or in_quote:
                yield "ident", "".join(buf)
                buf.clear()
            in_quote = not in_quote
            continue

        if c == "\\":
            buf.append(_escape(chars))
            continue

        if in_quote:
            buf.append(c)
            continue

        if c.isspace() or c in "();'":
            if buf:
                yield "ident", "".join(buf)
                buf.clear()
            if c == ";":
                in_comment = True
            elif c == "'":
                yield QUOTE
            elif c == "(":
                yield LPAREN
            elif c == ")":
                yield RPAREN
            continue

        buf.append(c)

    # Unterminated quotes keep what they collected
    if buf or in_quote:
        yield "ident", "".join(buf)


def _is_wrapped(tokens: list[Token]) -> bool:
    """True if the whole token list is exactly one (...) group."""
    if not tokens or tokens[0] != LPAREN:
        return False
    depth = 0
    for i, tok in enumerate(tokens):
        if tok == LPAREN:
            depth += 1
        elif tok == RPAREN:
            depth -= 1
            if depth == 0:
                return i == len(tokens) - 1
    return False


def expand_aliases(tokens: Iterable[Token], aliases: AliasTable) -> Iterator[Token]:
    """Replace head-position identifiers that name an alias by the alias' tokens.

    The table is consulted as each token is produced, so a lazily consumed
    stream sees aliases registered while it is being read.
    """
    prev_type: Optional[str] = None
    for tok in tokens:
        tok_type, tok_val = tok
        if tok_type == "ident" and prev_type == "lparen" and tok_val in aliases:
            for group in aliases[tok_val]:
                yield from _scan(group)
        else:
            yield tok
        prev_type = tok_type


def lex(source: str, aliases: AliasTable | None = None) -> list[Token]:
    """Tokenize one command line: wrap it, expand aliases, append eof."""
    tokens = list(_scan(source))
    if tokens and not _is_wrapped(tokens):
        tokens = [LPAREN, *tokens, RPAREN]
    tokens = list(expand_aliases(tokens, aliases if aliases is not None else {}))
    tokens.append(EOF)
    return tokens


def lex_program(source: str, aliases: AliasTable | None = None) -> Iterator[Token]:
    """Lazily tokenize a multi-form source such as the prelude; no wrapping."""
    yield from expand_aliases(_scan(source), aliases if aliases is not None else {})
    yield EOF


def _as_data(expr: Expression) -> Expression:
    if isinstance(expr, Call):
        return List(_as_data(e) for e in expr.items)
    return expr


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> Token:
        if not self.buffer:
            self.buffer.append(next(self.tokens, EOF))
        return self.buffer[0]

    def advance(self) -> Token:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, EOF)

    def at_end(self) -> bool:
        return self.peek()[0] == "eof"

    def parse_expr(self) -> Expression:
        tok_type, tok_val = self.advance()

        if tok_type == "eof":
            raise LishpIncompleteInput("Unexpected end of input")

        if tok_type == "ident":
            return Atom(tok_val)

        # Quoting turns pending syntax into data, nested forms included
        if tok_type == "quote":
            return _as_data(self.parse_expr())

        if tok_type == "lparen":
            items: list[Expression] = []
            while True:
                next_type, _ = self.peek()
                if next_type == "rparen":
                    self.advance()
                    break
                if next_type == "eof":
                    raise LishpIncompleteInput("Unmatched '('")
                items.append(self.parse_expr())
            return Call(items)

        raise LishpSyntaxError(f"Unexpected token: {tok_val}")

    def parse_all(self) -> Iterator[Expression]:
        while not self.at_end():
            try:
                expr = self.parse_expr()
            except RecursionError:
                raise LishpSyntaxError("nesting too deep") from None
            yield expr


def parse(tokens: Iterable[Token]) -> Expression:
    """Parse exactly one expression; bare eof reads as the empty atom."""
    stream = TokenStream(tokens)
    if stream.at_end():
        return Atom("")
    try:
        expr = stream.parse_expr()
    except RecursionError:
        raise LishpSyntaxError("nesting too deep") from None
    if not stream.at_end():
        raise LishpSyntaxError(f"Unexpected token: {stream.peek()[1]}")
    return expr


def parse_line(source: str, aliases: AliasTable | None = None) -> Expression:
    return parse(lex(source, aliases))


def parse_program(source: str, aliases: AliasTable | None = None) -> Iterator[Expression]:
    return TokenStream(lex_program(source, aliases)).parse_all()


def can_parse(source: str, aliases: AliasTable | None = None) -> bool:
    """Validity probe for line editors: False only when more input is needed."""
    try:
        parse_line(source, aliases)
    except LishpIncompleteInput:
        return False
    except LishpSyntaxError:
        return True
    return True
