"""
Shopping-list style totals of the ingredients mentioned in a recipe.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel

from ..models.recipe import Amount, Recipe


class IngredientTotal(BaseModel):
    name: str
    amount: Optional[Amount] = None
    mentions: int = 0


def aggregate_ingredients(recipe: Recipe) -> List[IngredientTotal]:
    """
    Sum the amounts of every ingredient, in order of first mention.

    Mentions of the same ingredient are added when their amounts can be
    added (same unit, scaling and number of alternatives); otherwise they
    get a separate entry. Mentions without an amount are only counted.
    """
    totals: Dict[Tuple, IngredientTotal] = {}
    for ingredient in recipe.ingredients:
        amount = ingredient.amount
        if amount is None:
            key = (ingredient.display_name, None, False, 0)
        else:
            key = (ingredient.display_name, amount.unit, amount.scalable, len(amount.alternatives))

        total = totals.get(key)
        if total is None:
            totals[key] = IngredientTotal(name=ingredient.display_name, amount=amount, mentions=1)
            continue
        total.mentions += 1
        if amount is not None:
            total.amount = total.amount + amount

    return list(totals.values())
