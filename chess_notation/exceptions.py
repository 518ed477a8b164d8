class NotationError(ValueError):
    """Base exception for everything raised while parsing chess notation."""

    pass


class NotationSyntaxError(NotationError):
    """No grammar alternative matched at some offset of the input.

    Attributes:
        text: The input that failed to parse.
        offset: Furthest offset the grammar reached before failing.
        expected: Sorted names of the rules and literals attempted there.
    """

    def __init__(self, text: str, offset: int, expected: tuple[str, ...]) -> None:
        self.text = text
        self.offset = offset
        self.expected = expected
        super().__init__(self._describe())

    @property
    def line(self) -> int:
        return self.text.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        return self.offset - (self.text.rfind("\n", 0, self.offset) + 1) + 1

    def _describe(self) -> str:
        found = self.text[self.offset : self.offset + 10]
        expected = ", ".join(self.expected) or "nothing"
        return (
            f"Syntax error at line {self.line}, column {self.column} "
            f"(offset {self.offset}): expected {expected}, found {found!r}"
        )


class IncompleteInputError(NotationSyntaxError):
    """Input ended before a required token (e.g. a game without a result)."""

    def _describe(self) -> str:
        expected = ", ".join(self.expected) or "more input"
        return f"Unexpected end of input at offset {self.offset}: expected {expected}"


class StructuralError(NotationError):
    """Grammar matched but a structural invariant of the result does not hold.

    Attributes:
        rule: Name of the grammar rule whose match is at fault.
        reason: Human readable description of the violated invariant.
    """

    def __init__(self, rule: str, reason: str) -> None:
        self.rule = rule
        self.reason = reason
        super().__init__(f"Invalid {rule}: {reason}")
