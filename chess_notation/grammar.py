"""A small PEG engine used by the SAN, PGN and FEN grammars.

Grammars are built from immutable expression objects:

```
Literal("O-O")            exact text
Pattern(r"[a-h]", "file") regular expression anchored at the current offset
Sequence(a, b, ...)       all in order
Choice(a, b, ...)         ordered choice, first success wins, no re-try
Repeat(a, min, max)       bounded greedy repetition
Optional(a)               Repeat(a, 0, 1)
Lookahead(a, negate)      predicate, consumes nothing
Rule("name", a, atomic)   named rule, produces a Node in the parse tree
```

Non-atomic rules skip whitespace between the elements of a sequence and
between repetitions. Atomic rules (tokens) match their body verbatim and
report failures under their own name instead of the names of their parts.

A successful match returns a tree of :class:`Node`. A failed match raises
:class:`~chess_notation.exceptions.NotationSyntaxError` (or
:class:`~chess_notation.exceptions.IncompleteInputError` when the input ran
out) carrying the furthest offset reached and what was expected there.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator

from chess_notation.exceptions import IncompleteInputError, NotationSyntaxError

WHITESPACE = " \t\r\n"

Match = tuple[int, list["Node"]]


@dataclass(frozen=True, slots=True)
class Node:
    """A matched rule: its name, the text span it covered and its sub-rules."""

    rule: str
    text: str
    start: int
    end: int
    children: tuple[Node, ...] = ()

    def child(self, rule: str) -> Node | None:
        """Return the first direct child produced by ``rule``."""
        for node in self.children:
            if node.rule == rule:
                return node
        return None

    def children_named(self, rule: str) -> list[Node]:
        """Return every direct child produced by ``rule``, in order."""
        return [node for node in self.children if node.rule == rule]

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants depth-first."""
        yield self
        for node in self.children:
            yield from node.walk()


@dataclass(slots=True)
class _State:
    """Per-call bookkeeping. Created fresh for every parse."""

    text: str
    furthest: int = -1
    expected: set[str] = field(default_factory=set)
    quiet: int = 0
    # Terminals that ran out of input, recorded even inside quiet rules
    starved: set[str] = field(default_factory=set)
    lookahead: int = 0

    def starve(self, label: str) -> None:
        if not self.lookahead:
            self.starved.add(label)

    def fail(self, pos: int, label: str) -> None:
        if self.quiet:
            return
        if pos > self.furthest:
            self.furthest = pos
            self.expected = {label}
        elif pos == self.furthest:
            self.expected.add(label)


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in WHITESPACE:
        pos += 1
    return pos


class Expression:
    """Base class of all grammar expressions."""

    def match(self, state: _State, pos: int, atomic: bool) -> Match | None:
        raise NotImplementedError


class Literal(Expression):
    def __init__(self, literal: str) -> None:
        self.literal = literal

    def match(self, state: _State, pos: int, atomic: bool) -> Match | None:
        text = state.text
        if text.startswith(self.literal, pos):
            return pos + len(self.literal), []
        if len(text) - pos < len(self.literal) and self.literal.startswith(text[pos:]):
            state.starve(repr(self.literal))
        state.fail(pos, repr(self.literal))
        return None

    def __repr__(self) -> str:
        return f"Literal({self.literal!r})"


class Pattern(Expression):
    def __init__(self, pattern: str, label: str) -> None:
        self.regex = re.compile(pattern)
        self.label = label

    def match(self, state: _State, pos: int, atomic: bool) -> Match | None:
        found = self.regex.match(state.text, pos)
        if found is not None:
            return found.end(), []
        if pos >= len(state.text):
            state.starve(self.label)
        state.fail(pos, self.label)
        return None

    def __repr__(self) -> str:
        return f"Pattern({self.regex.pattern!r})"


class Sequence(Expression):
    def __init__(self, *items: Expression) -> None:
        self.items = items

    def match(self, state: _State, pos: int, atomic: bool) -> Match | None:
        nodes: list[Node] = []
        for index, item in enumerate(self.items):
            if index and not atomic:
                pos = _skip_whitespace(state.text, pos)
            result = item.match(state, pos, atomic)
            if result is None:
                return None
            pos, found = result
            nodes.extend(found)
        return pos, nodes


class Choice(Expression):
    """Ordered choice: alternatives are tried in order and the first match is final."""

    def __init__(self, *alternatives: Expression) -> None:
        self.alternatives = alternatives

    def match(self, state: _State, pos: int, atomic: bool) -> Match | None:
        for alternative in self.alternatives:
            result = alternative.match(state, pos, atomic)
            if result is not None:
                return result
        return None


class Repeat(Expression):
    def __init__(self, item: Expression, minimum: int = 0, maximum: int | None = None) -> None:
        self.item = item
        self.minimum = minimum
        self.maximum = maximum

    def match(self, state: _State, pos: int, atomic: bool) -> Match | None:
        nodes: list[Node] = []
        count = 0
        while self.maximum is None or count < self.maximum:
            start = _skip_whitespace(state.text, pos) if count and not atomic else pos
            result = self.item.match(state, start, atomic)
            if result is None or result[0] == start:
                break
            pos, found = result
            nodes.extend(found)
            count += 1
        if count < self.minimum:
            return None
        return pos, nodes


def Optional(item: Expression) -> Repeat:  # noqa: N802
    return Repeat(item, 0, 1)


class Lookahead(Expression):
    """Succeed without consuming when ``item`` matches (or, negated, does not)."""

    def __init__(self, item: Expression, negate: bool = False, label: str = "") -> None:
        self.item = item
        self.negate = negate
        self.label = label

    def match(self, state: _State, pos: int, atomic: bool) -> Match | None:
        state.quiet += 1
        state.lookahead += 1
        try:
            matched = self.item.match(state, pos, atomic) is not None
        finally:
            state.quiet -= 1
            state.lookahead -= 1
        if matched != self.negate:
            return pos, []
        if self.label:
            state.fail(pos, self.label)
        return None


class Rule(Expression):
    """A named production. Only rules create nodes in the parse tree."""

    def __init__(
        self,
        name: str,
        body: Expression,
        atomic: bool = False,
        quiet: bool | None = None,
    ) -> None:
        self.name = name
        self.body = body
        self.atomic = atomic
        self.quiet = atomic if quiet is None else quiet

    def match(self, state: _State, pos: int, atomic: bool) -> Match | None:
        inner_atomic = atomic or self.atomic
        if self.quiet:
            state.quiet += 1
        try:
            result = self.body.match(state, pos, inner_atomic)
        finally:
            if self.quiet:
                state.quiet -= 1
        if result is None:
            state.fail(pos, self.name)
            return None
        end, children = result
        return end, [Node(self.name, state.text[pos:end], pos, end, tuple(children))]

    def __repr__(self) -> str:
        return f"Rule({self.name!r})"


def parse(rule: Rule, text: str) -> Node:
    """Match ``rule`` against the whole of ``text``.

    Leading and trailing whitespace is ignored. Anything left over after the
    rule matched is reported as a syntax error at the first unconsumed offset.

    Raises:
        TypeError: If ``text`` is not a string.
        IncompleteInputError: If the input ended before a required token, or
            in the middle of one.
        NotationSyntaxError: If no alternative matched at some offset.
    """
    if not isinstance(text, str):
        raise TypeError(f"Notation text must be str, got {type(text).__name__}")

    state = _State(text)
    start = _skip_whitespace(text, 0)
    result = rule.match(state, start, False)
    if result is not None:
        end = _skip_whitespace(text, result[0])
        if end == len(text):
            return result[1][0]
        state.fail(end, "end of input")

    offset = max(state.furthest, 0)
    expected = tuple(sorted(state.expected))
    if offset >= len(text):
        raise IncompleteInputError(text, offset, expected)
    if result is None and state.starved:
        # A token was cut short by the end of the input
        raise IncompleteInputError(text, len(text), tuple(sorted(state.starved)))
    raise NotationSyntaxError(text, offset, expected)
