"""
Render parsed recipes back to minimal CookLang text.

Parsing the output of `render_recipe` gives an equivalent recipe: same
steps and metadata, comments and insignificant spaces dropped.
"""

from typing import List

from ..models.recipe import Amount, Cookware, Ingredient, Property, Recipe, Segment, Step, Text, Timer
from .grammar import DESCRIPTION, METADATA_MARKER, NAME


def render_amount(amount: Amount) -> str:
    out = "|".join(str(q) for q in amount.alternatives)
    if amount.scalable:
        out += "*"
    if amount.unit:
        out += "%" + amount.unit
    return out


def _absorbs(following: str) -> bool:
    # Text that would extend a bare `@name` if glued to it.
    return bool(NAME.match(following) or DESCRIPTION.match(following))


def render_ingredient(ingredient: Ingredient, following: str = "") -> str:
    out = "@" + ingredient.name
    if ingredient.description:
        out += " " + ingredient.description
    if ingredient.amount is not None:
        out += "{" + render_amount(ingredient.amount) + "}"
    elif ingredient.description or _absorbs(following):
        out += "{}"
    if ingredient.note is not None:
        out += "(" + ingredient.note + ")"
    return out


def render_cookware(cookware: Cookware) -> str:
    out = "#" + cookware.name
    if cookware.description:
        out += " " + cookware.description
    if cookware.amount is not None:
        out += "{" + render_amount(cookware.amount) + "}"
    elif cookware.has_bracket or cookware.description:
        out += "{}"
    return out


def render_segment(segment: Segment, following: str = "") -> str:
    if isinstance(segment, Text):
        return segment.value
    if isinstance(segment, Ingredient):
        return render_ingredient(segment, following)
    if isinstance(segment, Cookware):
        return render_cookware(segment)
    if isinstance(segment, Timer):
        return "~{" + render_amount(segment.amount) + "}"
    raise TypeError(f"Unknown segment type: {type(segment).__name__}")


def render_step(step: Step) -> str:
    parts: List[str] = []
    segments = step.segments
    for index, segment in enumerate(segments):
        following = ""
        if index + 1 < len(segments) and isinstance(segments[index + 1], Text):
            following = segments[index + 1].value
        parts.append(render_segment(segment, following))
    return "".join(parts)


def render_property(prop: Property) -> str:
    value = render_amount(prop.value) if isinstance(prop.value, Amount) else prop.value
    return f"{METADATA_MARKER} {prop.key}: {value}"


def render_recipe(recipe: Recipe) -> str:
    lines = [render_property(p) for p in recipe.properties]
    if lines and recipe.steps:
        lines.append("")
    lines.extend(render_step(step) for step in recipe.steps)
    return "\n".join(lines) + "\n" if lines else ""
