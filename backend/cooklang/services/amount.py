"""
Amount resolver for the `{quantity|quantity*%unit}` mini-language.

    amount   := number ("|" number)* "*"? ("%" unit)?
    number   := digits ("/" digits)*

Alternatives are collected into a flat tuple. Spaces are allowed between
any two tokens.
"""

from typing import Optional

from ..core.errors import CookLangSyntaxError, EmptyTimerAmountError, MalformedAmountError
from ..models.recipe import Amount, Quantity
from .grammar import DIGITS, NAME, Scanner


def parse_number(scanner: Scanner) -> Quantity:
    scanner.skip_spaces()
    if scanner.startswith("/"):
        scanner.fail("fraction denominator without a numerator", ["number"], MalformedAmountError)
    if scanner.startswith("*"):
        scanner.fail("scaling marker without a quantity", ["number"], MalformedAmountError)
    if scanner.startswith("%"):
        scanner.fail("unit without a quantity", ["number"], MalformedAmountError)
    m = scanner.match(DIGITS)
    if not m:
        scanner.fail(f"unexpected {scanner.describe()}", ["number"])
    components = [int(m.group())]

    while True:
        mark = scanner.pos
        scanner.skip_spaces()
        if not scanner.eat("/"):
            scanner.pos = mark
            break
        scanner.skip_spaces()
        denominator = scanner.match(DIGITS)
        if not denominator:
            scanner.fail("'/' must be followed by a denominator", ["number"], MalformedAmountError)
        if int(denominator.group()) == 0:
            scanner.fail(
                "zero denominator", error=MalformedAmountError, offset=denominator.start()
            )
        components.append(int(denominator.group()))

    return Quantity(components=tuple(components))


def parse_amount(scanner: Scanner) -> Amount:
    alternatives = [parse_number(scanner)]
    scanner.skip_spaces()
    while scanner.eat("|"):
        alternatives.append(parse_number(scanner))
        scanner.skip_spaces()

    scalable = scanner.eat("*")
    scanner.skip_spaces()

    unit = None
    if scanner.eat("%"):
        scanner.skip_spaces()
        m = scanner.match(NAME)
        if not m:
            scanner.fail("'%' must be followed by a unit", ["unit"], MalformedAmountError)
        unit = m.group()

    return Amount(alternatives=tuple(alternatives), scalable=scalable, unit=unit)


def parse_bracket(scanner: Scanner, required: bool = False) -> Optional[Amount]:
    """
    Parse `{...}` at the scanner position.

    Returns None for `{}`. With `required` an empty bracket is an
    EmptyTimerAmountError.
    """
    opening = scanner.pos
    scanner.expect("{")
    scanner.skip_spaces()
    if scanner.eat("}"):
        if required:
            raise EmptyTimerAmountError(scanner.text, opening)
        return None

    amount = parse_amount(scanner)
    scanner.skip_spaces()
    if scanner.startswith("*") or scanner.startswith("%"):
        scanner.fail("misplaced scaling marker or unit", error=MalformedAmountError)
    scanner.expect("}")
    return amount


def parse_amount_text(text: str, start: int, end: int) -> Optional[Amount]:
    """
    Parse `text[start:end]` as a bare amount, as written in metadata values.

    Returns None when the region is anything other than a complete amount.
    """
    scanner = Scanner(text, start, end)
    scanner.skip_spaces()
    if not DIGITS.match(text, scanner.pos, end):
        return None
    try:
        amount = parse_amount(scanner)
    except CookLangSyntaxError:
        return None
    scanner.skip_spaces()
    if not scanner.at_end():
        return None
    return amount
