"""
Content Expressions

A small matcher for the content expressions used in node schema fragments:

    "inline+"            one or more nodes of the inline group
    "paragraph block*"   a paragraph followed by any number of blocks
    "(a | b)+"           alternation and grouping

Names resolve to a node type of that name or to every member of a group of
that name.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from wysiwym.editor.model import EditorSchemaError

_TOKEN_RE = re.compile(r"\s*(\w+|[()|*+?])")


@dataclass(frozen=True)
class _Expr:
    op: str
    name: str | None = None
    items: tuple[_Expr, ...] = ()


def _tokenize(text: str) -> list[str]:
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if not m:
            raise EditorSchemaError(f"Invalid content expression: {text!r}")
        tokens.append(m.group(1))
        pos = m.end()
    return tokens


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.tokens = _tokenize(text)
        self.pos = 0

    def _peek(self) -> str | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def parse(self) -> _Expr:
        expr = self._choice()
        if self._peek() is not None:
            raise EditorSchemaError(f"Unexpected {self._peek()!r} in content expression {self.text!r}")
        return expr

    def _choice(self) -> _Expr:
        options = [self._seq()]
        while self._peek() == "|":
            self.pos += 1
            options.append(self._seq())
        return options[0] if len(options) == 1 else _Expr("choice", items=tuple(options))

    def _seq(self) -> _Expr:
        items = []
        while self._peek() not in (None, ")", "|"):
            items.append(self._term())
        return _Expr("seq", items=tuple(items))

    def _term(self) -> _Expr:
        tok = self._peek()
        if tok == "(":
            self.pos += 1
            atom = self._choice()
            if self._peek() != ")":
                raise EditorSchemaError(f"Missing ')' in content expression {self.text!r}")
            self.pos += 1
        elif tok is not None and (tok[0].isalnum() or tok[0] == "_"):
            self.pos += 1
            atom = _Expr("name", name=tok)
        else:
            raise EditorSchemaError(f"Unexpected {tok!r} in content expression {self.text!r}")

        quant = self._peek()
        if quant in ("*", "+", "?"):
            self.pos += 1
            return _Expr({"*": "star", "+": "plus", "?": "opt"}[quant], items=(atom,))
        return atom


class ContentExpr:
    """A parsed content expression."""

    def __init__(self, text: str):
        self.text = text
        self._expr = _Parser(text).parse()

    def __repr__(self) -> str:
        return f"ContentExpr({self.text!r})"

    def names(self) -> set[str]:
        out: set[str] = set()
        stack = [self._expr]
        while stack:
            expr = stack.pop()
            if expr.op == "name":
                out.add(expr.name)
            stack.extend(expr.items)
        return out

    def matches(self, type_names: list[str], resolve: Callable[[str], Iterable[str]]) -> bool:
        """Return True if the whole sequence of child type names matches."""
        ends = self._match(self._expr, type_names, 0, resolve)
        return len(type_names) in ends

    def _match(self, expr: _Expr, seq: list[str], pos: int, resolve) -> set[int]:
        if expr.op == "name":
            if pos < len(seq) and seq[pos] in resolve(expr.name):
                return {pos + 1}
            return set()
        if expr.op == "seq":
            positions = {pos}
            for item in expr.items:
                positions = {end for p in positions for end in self._match(item, seq, p, resolve)}
                if not positions:
                    break
            return positions
        if expr.op == "choice":
            return {end for item in expr.items for end in self._match(item, seq, pos, resolve)}
        if expr.op == "opt":
            return {pos} | self._match(expr.items[0], seq, pos, resolve)

        # star / plus
        start = {pos} if expr.op == "star" else self._match(expr.items[0], seq, pos, resolve)
        result = set(start)
        frontier = set(start)
        while frontier:
            reached = {end for p in frontier for end in self._match(expr.items[0], seq, p, resolve)}
            frontier = reached - result
            result |= frontier
        return result
