"""
Turns one content line into a Step.

Markers that cannot start their token (`@` or `#` without a name, `~`
without a bracket) stay literal text. Once a marker's `{` is consumed the
bracket must be a valid amount.
"""

from typing import List, Optional, Tuple

from ..models.recipe import Cookware, Ingredient, Segment, Span, Step, Text, Timer
from .amount import parse_bracket
from .grammar import (
    COMMENT_MARKER,
    COOKWARE_MARKER,
    DESCRIPTION,
    INGREDIENT_MARKER,
    NAME,
    TIMER_MARKER,
    Scanner,
)


class LineAssembler:
    def __init__(self, scanner: Scanner, line: int):
        self.scanner = scanner
        self.line = line
        self.segments: List[Segment] = []
        self._literal: List[str] = []
        self._literal_start = scanner.pos

    def assemble(self) -> Step:
        scanner = self.scanner
        while not scanner.at_end():
            if scanner.startswith(COMMENT_MARKER):
                break
            start = scanner.pos
            token = self._token()
            if token is None:
                if not self._literal:
                    self._literal_start = start
                self._literal.append(scanner.peek())
                scanner.pos += 1
            else:
                self._flush(start)
                self.segments.append(token)
        self._flush(scanner.pos, last=True)
        return Step(line=self.line, segments=tuple(self.segments))

    def _flush(self, end: int, last: bool = False) -> None:
        if not self._literal:
            return
        value = "".join(self._literal)
        self._literal = []
        if last:
            # spaces before a trailing comment
            stripped = value.rstrip(" ")
            end -= len(value) - len(stripped)
            value = stripped
        if value:
            self.segments.append(Text(value=value, span=Span(start=self._literal_start, end=end)))

    def _token(self) -> Optional[Segment]:
        char = self.scanner.peek()
        if char == INGREDIENT_MARKER:
            return self._ingredient()
        if char == COOKWARE_MARKER:
            return self._cookware()
        if char == TIMER_MARKER:
            return self._timer()
        return None

    def _named(self) -> Optional[Tuple[str, Optional[str], bool]]:
        """
        Read `name (words)*` after a marker.

        Returns (name, description, has_bracket) with the scanner left on the
        bracket, or None with the scanner untouched when no name follows.
        """
        scanner = self.scanner
        start = scanner.pos
        scanner.pos += 1
        name = scanner.match(NAME)
        if not name:
            scanner.pos = start
            return None
        description = scanner.match(DESCRIPTION)
        if description is None:
            return name.group(), None, False
        return name.group(), " ".join(description.group(1).split()) or None, True

    def _ingredient(self) -> Optional[Ingredient]:
        scanner = self.scanner
        start = scanner.pos
        named = self._named()
        if named is None:
            return None
        name, description, has_bracket = named
        amount = parse_bracket(scanner) if has_bracket else None

        note = None
        if scanner.peek() == "(":
            closing = scanner.find(")")
            comment = scanner.find(COMMENT_MARKER)
            if closing != -1 and (comment == -1 or closing < comment):
                note = scanner.text[scanner.pos + 1:closing]
                scanner.pos = closing + 1

        return Ingredient(
            name=name,
            description=description,
            amount=amount,
            note=note,
            span=Span(start=start, end=scanner.pos),
        )

    def _cookware(self) -> Optional[Cookware]:
        scanner = self.scanner
        start = scanner.pos
        named = self._named()
        if named is None:
            return None
        name, description, has_bracket = named
        amount = parse_bracket(scanner) if has_bracket else None
        return Cookware(
            name=name,
            description=description,
            amount=amount,
            has_bracket=has_bracket,
            span=Span(start=start, end=scanner.pos),
        )

    def _timer(self) -> Optional[Timer]:
        scanner = self.scanner
        start = scanner.pos
        scanner.pos += 1
        scanner.skip_spaces()
        if scanner.peek() != "{":
            scanner.pos = start
            return None
        amount = parse_bracket(scanner, required=True)
        return Timer(amount=amount, span=Span(start=start, end=scanner.pos))


def assemble_line(text: str, start: int, end: int, line: int) -> Step:
    """Build the Step for `text[start:end]`, a line without leading or trailing spaces."""
    return LineAssembler(Scanner(text, start, end), line).assemble()
