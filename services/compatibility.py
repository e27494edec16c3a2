"""Food / patient compatibility scoring engine.

Starts every food at 50 and applies Ayurvedic and medical rules in a fixed
order. Dietary and allergy exclusions pin the final score to 0, but the
remaining rules still run so the explanation stays complete.
"""

from __future__ import annotations

from collections.abc import Iterable

from models import (
    ActivityLevel,
    BowelState,
    CompatibilityResult,
    DietaryHabit,
    Digestibility,
    Dosha,
    DoshaEffect,
    Food,
    Patient,
    Vikriti,
)
from services.numbers import clamp, round_half_up

BASE_SCORE = 50
DEFAULT_SEASON = "summer"
NON_VEGETARIAN_CATEGORY = "Non-Vegetarian"

# Prakriti rule text per dosha: (balances reason, aggravates reason, moderation advice)
PRAKRITI_TEXT: dict[Dosha, tuple[str, str, str]] = {
    Dosha.vata: (
        "Balances Vata dosha",
        "May increase Vata",
        "Consume in moderation with warming spices",
    ),
    Dosha.pitta: (
        "Balances Pitta dosha",
        "May increase Pitta",
        "Consume in smaller quantities, avoid during hot weather",
    ),
    Dosha.kapha: (
        "Balances Kapha dosha",
        "May increase Kapha",
        "Use warming spices and consume in smaller portions",
    ),
}


def _contains_allergen(food: Food, allergies: Iterable[str]) -> bool:
    name = food.name.lower()
    category = food.category.lower()
    for allergy in allergies:
        a = (allergy or "").strip().lower()
        if a and (a in name or a in category):
            return True
    return False


def compute_compatibility(food: Food, patient: Patient) -> CompatibilityResult:
    """
    Score how well a food suits a patient.

    Args:
        food: Catalogue food
        patient: Patient profile

    Returns:
        CompatibilityResult with a 0-100 score plus the reasons and
        recommendations of every rule that fired, in rule order
    """
    score = BASE_SCORE
    reasons: list[str] = []
    recommendations: list[str] = []
    excluded = False

    props = food.ayurvedic_properties
    effects = props.dosha_effect

    # Native constitution; dual / tridosha prakriti has no single dosha to check
    dosha = patient.prakriti.single_dosha
    if dosha is not None:
        balances, aggravates, moderation = PRAKRITI_TEXT[dosha]
        effect = effects.for_dosha(dosha)
        if effect == DoshaEffect.decrease:
            score += 20
            reasons.append(balances)
        elif effect == DoshaEffect.increase:
            score -= 15
            reasons.append(aggravates)
            recommendations.append(moderation)

    # Current imbalance
    if patient.vikriti != Vikriti.balanced:
        imbalance = patient.vikriti.value
        effect = effects.for_dosha(Dosha(imbalance))
        if effect == DoshaEffect.decrease:
            score += 15
            reasons.append(f"Helps balance current {imbalance} imbalance")
        elif effect == DoshaEffect.increase:
            score -= 20
            reasons.append(f"May worsen current {imbalance} imbalance")
            recommendations.append("Avoid or consume very sparingly")

    # Digestive state
    if patient.bowel_movements == BowelState.constipated and props.digestibility == Digestibility.difficult:
        score -= 10
        reasons.append("May be hard to digest with current digestive state")
    elif patient.bowel_movements == BowelState.loose and props.digestibility == Digestibility.easy:
        score += 10
        reasons.append("Easy to digest, suitable for current digestive state")

    # Activity level
    if patient.activity_level == ActivityLevel.sedentary and food.calories > 300:
        score -= 5
        reasons.append("High calorie content may not suit sedentary lifestyle")
    elif patient.activity_level == ActivityLevel.very_active and food.calories < 100:
        score -= 5
        reasons.append("May need higher calorie foods for active lifestyle")

    # Hard exclusions
    if patient.dietary_habits == DietaryHabit.vegetarian and food.category == NON_VEGETARIAN_CATEGORY:
        excluded = True
        reasons.append("Not suitable for vegetarian diet")

    if _contains_allergen(food, patient.allergies):
        excluded = True
        reasons.append("Contains known allergen")

    # Medical conditions
    if "Diabetes Type 2" in patient.medical_conditions and food.carbs > 30:
        score -= 10
        reasons.append("High carbohydrate content - monitor blood sugar")
        recommendations.append("Consume in small portions and monitor glucose levels")

    if "Hypertension" in patient.medical_conditions and "salt" in food.name.lower():
        score -= 15
        reasons.append("High sodium may affect blood pressure")
        recommendations.append("Use minimal quantities or avoid")

    # Season
    season = patient.season or DEFAULT_SEASON
    if props.season and season in props.season:
        score += 10
        reasons.append(f"Suitable for {season} season")

    final_score = 0 if excluded else round_half_up(clamp(score, 0, 100))

    return CompatibilityResult(
        food_id=food.id,
        patient_id=patient.id,
        score=final_score,
        reasons=reasons,
        recommendations=recommendations,
    )


def rank_foods(
    foods: Iterable[Food],
    patient: Patient,
    query: str = "",
    *,
    limit: int | None = 12,
) -> list[tuple[Food, CompatibilityResult]]:
    """Score foods matching ``query`` (name or category) and order best first."""
    q = (query or "").strip().lower()
    scored = [
        (food, compute_compatibility(food, patient))
        for food in foods
        if not q or q in food.name.lower() or q in food.category.lower()
    ]
    scored.sort(key=lambda pair: pair[1].score, reverse=True)
    return scored[:limit] if limit is not None else scored


def score_level(score: int) -> str:
    """Display band for a compatibility score."""
    if score >= 80:
        return 'excellent'
    elif score >= 60:
        return 'good'
    elif score >= 40:
        return 'moderate'
    else:
        return 'poor'
