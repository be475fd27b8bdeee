"""
CookLang document parser.

A document is read line by line. Each physical line is one of: blank,
comment-only, metadata (`>>`) or content, in any order. `parse` fails on the
first error; `parse_tolerant` parses every line on its own, skips the lines
that fail and reports their errors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..core.errors import CookLangSyntaxError
from ..models.recipe import Recipe, Step
from .grammar import COMMENT_MARKER, METADATA_MARKER, iter_lines
from .line_assembler import assemble_line
from .metadata import DuplicateKeyPolicy, MetadataCollector, parse_property


class LineKind(str, Enum):
    BLANK = "blank"
    COMMENT = "comment"
    METADATA = "metadata"
    CONTENT = "content"


def classify_line(text: str, start: int, end: int) -> Tuple[LineKind, int, int]:
    """Return the line's kind and its bounds without surrounding spaces."""
    while start < end and text[start] == " ":
        start += 1
    while end > start and text[end - 1] == " ":
        end -= 1
    if start == end:
        return LineKind.BLANK, start, end
    if text.startswith(COMMENT_MARKER, start, end):
        return LineKind.COMMENT, start, end
    if text.startswith(METADATA_MARKER, start, end):
        return LineKind.METADATA, start, end
    return LineKind.CONTENT, start, end


@dataclass(frozen=True)
class ParseReport:
    recipe: Recipe
    errors: List[CookLangSyntaxError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class RecipeParser:
    def __init__(self, duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST):
        self.duplicate_keys = DuplicateKeyPolicy(duplicate_keys)

    def parse(self, text: str) -> Recipe:
        """Parse `text` into a Recipe, raising CookLangSyntaxError on the first error."""
        return self._parse(text, None)

    def parse_tolerant(self, text: str) -> ParseReport:
        """Parse what can be parsed; failing lines are left out of the recipe."""
        errors: List[CookLangSyntaxError] = []
        recipe = self._parse(text, errors)
        return ParseReport(recipe=recipe, errors=errors)

    def _parse(self, text: str, errors: Optional[List[CookLangSyntaxError]]) -> Recipe:
        steps: List[Step] = []
        collector = MetadataCollector(self.duplicate_keys)

        for number, start, end in iter_lines(text):
            kind, start, end = classify_line(text, start, end)
            try:
                if kind == LineKind.METADATA:
                    collector.add(parse_property(text, start, end, number), text, start)
                elif kind == LineKind.CONTENT:
                    step = assemble_line(text, start, end, number)
                    if step.segments:
                        steps.append(step)
            except CookLangSyntaxError as exc:
                if errors is None:
                    raise
                errors.append(exc)

        return Recipe(
            source=text,
            steps=tuple(steps),
            metadata=collector.metadata,
            properties=tuple(collector.properties),
        )


_default_parser = RecipeParser()


def parse(text: str) -> Recipe:
    return _default_parser.parse(text)


def parse_tolerant(text: str) -> ParseReport:
    return _default_parser.parse_tolerant(text)
