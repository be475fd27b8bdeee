from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
import logging
from typing import List, Optional

from ..core.config import Settings, get_settings
from ..core.errors import CookLangSyntaxError
from ..models.recipe import Recipe
from ..services.ingredients import IngredientTotal, aggregate_ingredients
from ..services.recipe_parser import RecipeParser
from ..services.renderer import render_recipe

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1")


class ParseRequest(BaseModel):
    text: str
    tolerant: Optional[bool] = None


class ParseResponse(BaseModel):
    recipe: Recipe
    ingredients: List[IngredientTotal]
    errors: List[dict] = []


class RenderResponse(BaseModel):
    text: str


def _check_size(text: str, settings: Settings) -> None:
    if len(text) > settings.max_input_chars:
        log.warning(f"Rejected recipe of {len(text)} characters (limit {settings.max_input_chars})")
        raise HTTPException(
            status_code=413,
            detail=f"Recipe text exceeds {settings.max_input_chars} characters",
        )


def _parse_strict(parser: RecipeParser, text: str) -> Recipe:
    try:
        return parser.parse(text)
    except CookLangSyntaxError as exc:
        log.warning(f"Rejected recipe: {exc}")
        raise HTTPException(status_code=422, detail=exc.to_dict())


@router.post("/parse", response_model=ParseResponse)
def parse_recipe(request: ParseRequest, settings: Settings = Depends(get_settings)):
    """Parse CookLang text into a structured recipe"""
    _check_size(request.text, settings)
    parser = RecipeParser(settings.duplicate_metadata_keys)
    tolerant = settings.tolerant if request.tolerant is None else request.tolerant

    errors = []
    if tolerant:
        report = parser.parse_tolerant(request.text)
        recipe = report.recipe
        errors = [e.to_dict() for e in report.errors]
        if errors:
            log.info(f"Skipped {len(errors)} invalid lines")
    else:
        recipe = _parse_strict(parser, request.text)

    log.info(f"Parsed recipe: {len(recipe.steps)} steps, {len(recipe.metadata)} metadata entries")
    return ParseResponse(recipe=recipe, ingredients=aggregate_ingredients(recipe), errors=errors)


@router.post("/render", response_model=RenderResponse)
def render_recipe_text(request: ParseRequest, settings: Settings = Depends(get_settings)):
    """Parse CookLang text and return it in canonical form"""
    _check_size(request.text, settings)
    parser = RecipeParser(settings.duplicate_metadata_keys)
    recipe = _parse_strict(parser, request.text)
    return RenderResponse(text=render_recipe(recipe))
