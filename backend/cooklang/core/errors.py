"""
Exceptions raised by the CookLang parser.

Every failure is a `CookLangSyntaxError` (or a subclass) carrying the
character offset plus the 1-based line and column it was detected at.
"""

from typing import Iterable, Optional, Tuple


def locate(text: str, offset: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of `offset` in `text`."""
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


class CookLangSyntaxError(Exception):
    """Raised when the input does not match the CookLang grammar"""
    def __init__(
        self,
        reason: str,
        text: str,
        offset: int,
        expected: Optional[Iterable[str]] = None,
    ):
        self.reason = reason
        self.offset = offset
        self.line, self.column = locate(text, offset)
        self.expected = tuple(expected or ())
        message = f"line {self.line}, column {self.column}: {reason}"
        if self.expected:
            message += f" (expected {' or '.join(self.expected)})"
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "message": str(self),
            "line": self.line,
            "column": self.column,
            "offset": self.offset,
            "expected": list(self.expected),
        }


class MalformedAmountError(CookLangSyntaxError):
    """Raised when bracket contents tokenize but violate amount rules"""


class EmptyTimerAmountError(CookLangSyntaxError):
    """Raised when a timer bracket holds no amount"""
    def __init__(self, text: str, offset: int):
        super().__init__("timer requires an amount", text, offset, expected=["number"])


class DuplicateMetadataKeyError(CookLangSyntaxError):
    """Raised when a metadata key repeats and duplicates are rejected"""
    def __init__(self, key: str, text: str, offset: int):
        self.key = key
        super().__init__(f"duplicate metadata key '{key}'", text, offset)
