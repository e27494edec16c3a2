"""Recipe builder: per-serving nutrition and Ayurvedic analysis."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from uuid import uuid4

from errors import RecipeValidationError
from models import Difficulty, Dosha, DoshaEffect, Food, NutritionTotals, Rasa, Recipe, RecipeDraft, RecipeIngredient
from services.numbers import round_half_up


def calculate_nutrition(
    ingredients: Sequence[RecipeIngredient],
    servings: int,
    foods: Mapping[str, Food],
) -> NutritionTotals:
    """
    Nutrition per serving.

    Args:
        ingredients: Recipe ingredients; quantity is in the food's serving units
        servings: Number of servings the recipe yields
        foods: Food id -> Food

    Returns:
        Rounded per-serving totals
    """
    totals = {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0, "fiber": 0.0}
    for ing in ingredients:
        food = foods.get(ing.food_id)
        if food is None:
            continue
        ratio = ing.quantity / food.serving_size
        for k in totals:
            totals[k] += getattr(food, k) * ratio

    per = servings or 1
    return NutritionTotals(**{k: round_half_up(v / per) for k, v in totals.items()})


def analyze_ayurvedic_properties(
    ingredients: Sequence[RecipeIngredient],
    foods: Mapping[str, Food],
) -> dict:
    rasa_counts = {r: 0 for r in Rasa}
    dosha_counts = {d: {e: 0 for e in DoshaEffect} for d in Dosha}

    for ing in ingredients:
        food = foods.get(ing.food_id)
        if food is None:
            continue
        props = food.ayurvedic_properties
        for r in props.rasa:
            rasa_counts[r] += 1
        for d in Dosha:
            dosha_counts[d][props.dosha_effect.for_dosha(d)] += 1

    present = [r for r in Rasa if rasa_counts[r] > 0]
    dominant_rasas = sorted(present, key=lambda r: rasa_counts[r], reverse=True)[:3]

    suitable_for = [
        d for d in Dosha
        if dosha_counts[d][DoshaEffect.decrease] > dosha_counts[d][DoshaEffect.increase]
    ]

    if suitable_for:
        balance = f"Balances {', '.join(d.value for d in suitable_for)} dosha"
    else:
        balance = "Neutral dosha effect"

    return {
        "dominant_rasas": dominant_rasas,
        "suitable_for": suitable_for,
        "benefits": [
            f"Contains {len(dominant_rasas)} of the 6 tastes",
            balance,
            "Made with fresh, natural ingredients",
        ],
    }


def validate_recipe(draft: RecipeDraft, foods: Mapping[str, Food]) -> None:
    if not draft.name.strip():
        raise RecipeValidationError("Please enter a recipe name", fields=["name"])
    if not draft.ingredients:
        raise RecipeValidationError("Please add at least one ingredient", fields=["ingredients"])

    seen: set[str] = set()
    for ing in draft.ingredients:
        if ing.food_id not in foods:
            raise RecipeValidationError(f"Unknown food id: {ing.food_id}", fields=["ingredients"])
        if ing.food_id in seen:
            raise RecipeValidationError("This ingredient is already added", fields=["ingredients"])
        seen.add(ing.food_id)

    if not [s for s in draft.instructions if s.strip()]:
        raise RecipeValidationError("Please add cooking instructions", fields=["instructions"])


def build_recipe(draft: RecipeDraft, foods: Mapping[str, Food]) -> Recipe:
    validate_recipe(draft, foods)
    servings = draft.servings or 4
    analysis = analyze_ayurvedic_properties(draft.ingredients, foods)

    return Recipe(
        id=f"recipe_{uuid4().hex[:12]}",
        name=draft.name.strip(),
        ingredients=list(draft.ingredients),
        instructions=[s.strip() for s in draft.instructions if s.strip()],
        cooking_tips=[s.strip() for s in draft.cooking_tips if s.strip()],
        prep_time=draft.prep_time if draft.prep_time is not None else 15,
        cook_time=draft.cook_time if draft.cook_time is not None else 30,
        servings=servings,
        difficulty=draft.difficulty or Difficulty.medium,
        ayurvedic_benefits=analysis["benefits"],
        suitable_for=analysis["suitable_for"],
        season=list(draft.season),
        nutritional_info=calculate_nutrition(draft.ingredients, servings, foods),
    )
