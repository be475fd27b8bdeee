"""
Token-level scanner for the CookLang surface syntax.

Only the literal space character is insignificant between tokens and it is
skipped solely where a rule calls `skip_spaces`. Tabs and every other
character are ordinary text.
"""

import re
from typing import Iterable, Iterator, NoReturn, Optional, Tuple

from ..core.errors import CookLangSyntaxError

NAME = re.compile(r"[A-Za-z0-9]+")
DIGITS = re.compile(r"[0-9]+")
# Words kept as an ingredient/cookware description only when a bracket
# follows the last one, optionally after spaces.
DESCRIPTION = re.compile(r"((?: +[A-Za-z0-9]+)*) *(?=\{)")
LINE_BREAK = re.compile(r"\r?\n")

INGREDIENT_MARKER = "@"
COOKWARE_MARKER = "#"
TIMER_MARKER = "~"
METADATA_MARKER = ">>"
COMMENT_MARKER = "//"


def iter_lines(text: str) -> Iterator[Tuple[int, int, int]]:
    """Yield (line number, start, end) for every physical line of `text`."""
    start = 0
    number = 1
    for match in LINE_BREAK.finditer(text):
        yield number, start, match.start()
        start = match.end()
        number += 1
    if start < len(text):
        yield number, start, len(text)


class Scanner:
    """
    Cursor over `text[start:end]`.

    Offsets stay absolute so errors and spans refer to the whole document.
    """

    def __init__(self, text: str, start: int = 0, end: Optional[int] = None):
        self.text = text
        self.pos = start
        self.end = len(text) if end is None else end

    def at_end(self) -> bool:
        return self.pos >= self.end

    def peek(self, size: int = 1) -> str:
        return self.text[self.pos:min(self.pos + size, self.end)]

    def startswith(self, literal: str) -> bool:
        return self.text.startswith(literal, self.pos, self.end)

    def skip_spaces(self) -> None:
        while self.pos < self.end and self.text[self.pos] == " ":
            self.pos += 1

    def eat(self, literal: str) -> bool:
        if self.startswith(literal):
            self.pos += len(literal)
            return True
        return False

    def expect(self, literal: str) -> None:
        if not self.eat(literal):
            self.fail(f"unexpected {self.describe()}", expected=[repr(literal)])

    def match(self, pattern: re.Pattern) -> Optional[re.Match]:
        m = pattern.match(self.text, self.pos, self.end)
        if m:
            self.pos = m.end()
        return m

    def find(self, literal: str) -> int:
        """Absolute index of `literal` before the end bound, or -1."""
        return self.text.find(literal, self.pos, self.end)

    def describe(self) -> str:
        if self.at_end():
            return "end of line"
        return repr(self.text[self.pos])

    def fail(
        self,
        reason: str,
        expected: Optional[Iterable[str]] = None,
        error: type = CookLangSyntaxError,
        offset: Optional[int] = None,
    ) -> NoReturn:
        raise error(reason, self.text, self.pos if offset is None else offset, expected)
