"""
Metadata extractor for `>> key: value` lines.
"""

import re
from enum import Enum
from typing import Dict, List

from ..core.errors import DuplicateMetadataKeyError
from ..models.recipe import Property, Value
from .amount import parse_amount_text
from .grammar import COMMENT_MARKER, METADATA_MARKER, Scanner

KEY = re.compile(r"[A-Za-z0-9]+(?: +[A-Za-z0-9]+)*")


class DuplicateKeyPolicy(str, Enum):
    LAST = "last"
    FIRST = "first"
    ERROR = "error"


def parse_property(text: str, start: int, end: int, line: int) -> Property:
    """Parse the metadata line `text[start:end]`, which begins with `>>`."""
    scanner = Scanner(text, start, end)
    scanner.expect(METADATA_MARKER)
    scanner.skip_spaces()
    key = scanner.match(KEY)
    if not key:
        scanner.fail(f"unexpected {scanner.describe()}", ["metadata key"])
    scanner.skip_spaces()
    scanner.expect(":")

    value_end = scanner.find(COMMENT_MARKER)
    if value_end == -1:
        value_end = end
    raw = text[scanner.pos:value_end].strip(" ")
    if not raw:
        scanner.skip_spaces()
        scanner.fail("metadata value is empty", ["metadata value"])

    amount = parse_amount_text(text, scanner.pos, value_end)
    value: Value = raw if amount is None else amount
    return Property(key=key.group(), value=value, line=line)


class MetadataCollector:
    """Folds properties into the recipe's key/value mapping."""

    def __init__(self, policy: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST):
        self.policy = DuplicateKeyPolicy(policy)
        self.properties: List[Property] = []
        self.metadata: Dict[str, Value] = {}

    def add(self, prop: Property, text: str, offset: int) -> None:
        duplicate = prop.key in self.metadata
        if duplicate and self.policy == DuplicateKeyPolicy.ERROR:
            raise DuplicateMetadataKeyError(prop.key, text, offset)
        self.properties.append(prop)
        if duplicate and self.policy == DuplicateKeyPolicy.FIRST:
            return
        self.metadata[prop.key] = prop.value
