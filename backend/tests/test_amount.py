from fractions import Fraction

import pytest

from backend.cooklang.core.errors import (
    CookLangSyntaxError,
    EmptyTimerAmountError,
    MalformedAmountError,
)
from backend.cooklang.models.recipe import Amount, Quantity
from backend.cooklang.services.amount import parse_amount_text, parse_bracket
from backend.cooklang.services.grammar import Scanner


def bracket(text, required=False):
    scanner = Scanner(text)
    amount = parse_bracket(scanner, required=required)
    assert scanner.at_end()
    return amount


def test_single_number():
    amount = bracket("{3}")
    assert amount.alternatives == (Quantity(components=(3,)),)
    assert amount.unit is None
    assert not amount.is_alternative


def test_chained_fraction_components_are_kept_in_order():
    for components in [(1,), (1, 2), (3, 4, 5), (10, 2, 5, 1)]:
        text = "{" + "/".join(str(c) for c in components) + "}"
        assert bracket(text).quantity.components == components


def test_chained_fraction_value():
    assert bracket("{1/2/3}").quantity.value == Fraction(1, 6)


def test_alternatives_are_flat():
    amount = bracket("{1|2|3|4}")
    assert [q.components for q in amount.alternatives] == [(1,), (2,), (3,), (4,)]
    assert amount.is_alternative


def test_scaling_and_unit():
    amount = bracket("{1/2|3/4*%cup}")
    assert amount.scalable
    assert amount.unit == "cup"
    assert amount.values == [Fraction(1, 2), Fraction(3, 4)]


def test_spaces_between_tokens():
    amount = bracket("{ 1 / 2 | 3 * % cup }")
    assert [q.components for q in amount.alternatives] == [(1, 2), (3,)]
    assert amount.scalable
    assert amount.unit == "cup"


def test_empty_bracket():
    assert bracket("{}") is None
    assert bracket("{   }") is None


def test_empty_bracket_required():
    with pytest.raises(EmptyTimerAmountError):
        bracket("{}", required=True)


@pytest.mark.parametrize(
    "text",
    ["{/2}", "{%g}", "{*}", "{1/}", "{1/0}", "{2%}", "{2*%g*}"],
)
def test_malformed_amounts(text):
    with pytest.raises(MalformedAmountError):
        bracket(text)


@pytest.mark.parametrize("text", ["{abc}", "{2|}", "{2 g}", "{2"])
def test_syntax_errors(text):
    with pytest.raises(CookLangSyntaxError):
        bracket(text)


def test_tab_is_not_skipped():
    with pytest.raises(CookLangSyntaxError):
        bracket("{\t2}")


def test_parse_amount_text():
    text = "  2|4%people "
    amount = parse_amount_text(text, 0, len(text))
    assert [q.components for q in amount.alternatives] == [(2,), (4,)]
    assert amount.unit == "people"

    for value in ["soup", "1.5 hours", "/2", "2 cups of rice"]:
        assert parse_amount_text(value, 0, len(value)) is None


def test_amount_addition():
    total = Amount(alternatives=(Quantity(components=(1, 2)),), unit="cup") + Amount(
        alternatives=(Quantity(components=(1, 4)),), unit="cup"
    )
    assert total.quantity.components == (3, 4)
    assert total.unit == "cup"


def test_amount_addition_needs_same_unit():
    with pytest.raises(ValueError):
        Amount(alternatives=(Quantity(components=(1,)),), unit="g") + Amount(
            alternatives=(Quantity(components=(1,)),), unit="kg"
        )


def test_quantity_from_fraction():
    assert Quantity.from_fraction(Fraction(6, 3)).components == (2,)
    assert Quantity.from_fraction(Fraction(3, 6)).components == (1, 2)
