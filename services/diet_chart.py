"""AI diet chart generation.

The LLM only contributes a free-text plan summary; meal slots are filled from
the food catalogue. Any provider failure (or an empty reply) degrades to the
deterministic fallback chart, so generation always succeeds for the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from errors import ExternalServiceFailure
from models import DietChart, DietChartRequest, DietMeals, Food, MealPlan, NutritionTotals, Patient
from services.food_catalog import FOOD_DATABASE
from services.llm import answer

logger = logging.getLogger(__name__)

DESCRIPTION_CHARS = 200

# (slot, start, end) into the food list
MEAL_SLOTS = (
    ("breakfast", 0, 3),
    ("mid_morning", 3, 5),
    ("lunch", 5, 10),
    ("evening", 10, 12),
    ("dinner", 12, 15),
)

AI_INSTRUCTIONS = {
    "breakfast": "Start your day with warm, nourishing foods that kindle digestive fire.",
    "mid_morning": "Light snack to maintain energy levels.",
    "lunch": "Largest meal of the day when digestive fire is strongest.",
    "evening": "Light refreshment to bridge lunch and dinner.",
    "dinner": "Light, easily digestible foods for better sleep.",
}

FALLBACK_INSTRUCTIONS = {
    "breakfast": "Begin with warm, cooked foods to support digestion.",
    "mid_morning": "Fresh fruits or herbal tea.",
    "lunch": "Complete meal with all six tastes.",
    "evening": "Light snack with herbal tea.",
    "dinner": "Light, warm, and easily digestible.",
}

AI_TOTALS = NutritionTotals(calories=2000, protein=80, carbs=250, fat=70, fiber=35)
FALLBACK_TOTALS = NutritionTotals(calories=1800, protein=70, carbs=220, fat=60, fiber=30)

AI_GUIDELINES = [
    "Eat in a calm, peaceful environment",
    "Chew food thoroughly",
    "Avoid drinking cold water with meals",
    "Follow regular meal timings",
    "Practice gratitude before eating",
]

FALLBACK_GUIDELINES = [
    "Maintain regular meal times",
    "Eat according to your hunger",
    "Include all six tastes in your meals",
    "Prefer warm, cooked foods",
    "Practice mindful eating",
]


def _join(items: list[str]) -> str:
    return ", ".join(items)


def build_prompt(request: DietChartRequest) -> str:
    p: Patient = request.patient
    return f"""
As an expert Ayurvedic dietitian, create a comprehensive {request.duration}-day diet plan for:

PATIENT PROFILE:
- Age: {p.age}, Gender: {p.gender.value}
- Weight: {p.weight}kg, Height: {p.height}cm
- Activity Level: {p.activity_level.value}
- Prakriti (Constitution): {p.prakriti.value}
- Vikriti (Current Imbalance): {p.vikriti.value}
- Dietary Habits: {p.dietary_habits.value}
- Meal Frequency: {p.meal_frequency} meals/day
- Water Intake: {p.water_intake}L/day
- Bowel Movements: {p.bowel_movements.value}
- Sleep: {p.sleep_hours} hours/night
- Medical Conditions: {_join(p.medical_conditions)}
- Allergies: {_join(p.allergies)}

PREFERENCES: {_join(request.preferences)}
RESTRICTIONS: {_join(request.restrictions)}
GOALS: {_join(request.goals)}

Please provide:
1. Daily meal plan (Breakfast, Mid-Morning, Lunch, Evening, Dinner)
2. Specific food recommendations with Ayurvedic properties
3. Cooking methods and spice recommendations
4. Timing guidelines according to Ayurvedic principles
5. Lifestyle recommendations
6. Foods to avoid based on constitution and current imbalances

Format the response as a structured daily meal plan with explanations for each recommendation based on Ayurvedic principles.
"""


def _chart_id(now: datetime) -> str:
    # millisecond prefix keeps ids time-ordered; the suffix keeps them unique
    return f"diet_{int(now.timestamp() * 1000)}_{uuid4().hex[:8]}"


def _meals(foods: list[Food], instructions: dict[str, str]) -> DietMeals:
    return DietMeals(**{
        slot: MealPlan(foods=foods[start:end], recipes=[], instructions=instructions[slot])
        for slot, start, end in MEAL_SLOTS
    })


def parse_ai_response(text: str, request: DietChartRequest, *, now: datetime | None = None) -> DietChart:
    """Wrap the model's free text into a chart skeleton.

    Raises ExternalServiceFailure if the reply is blank.
    """
    text = (text or "").strip()
    if not text:
        raise ExternalServiceFailure("LLM returned an empty diet plan")
    now = now or datetime.now()
    return DietChart(
        id=_chart_id(now),
        patient_id=request.patient.id,
        doctor_id=request.patient.doctor_id,
        title=f"AI Generated Diet Plan - {request.duration} Days",
        description=text[:DESCRIPTION_CHARS] + "...",
        duration=request.duration,
        meals=_meals(FOOD_DATABASE[:20], AI_INSTRUCTIONS),
        total_nutrition=AI_TOTALS.model_copy(),
        ayurvedic_guidelines=list(AI_GUIDELINES),
        restrictions=list(request.restrictions),
        generated_by="ai",
        created_at=now,
        updated_at=now,
    )


def fallback_diet_chart(request: DietChartRequest, *, now: datetime | None = None) -> DietChart:
    """Static template chart; apart from the id suffix it depends only on the request and ``now``."""
    now = now or datetime.now()
    return DietChart(
        id=_chart_id(now),
        patient_id=request.patient.id,
        doctor_id=request.patient.doctor_id,
        title=f"Personalized Diet Plan - {request.duration} Days",
        description="A balanced Ayurvedic diet plan tailored to your constitution and health goals.",
        duration=request.duration,
        meals=_meals(FOOD_DATABASE[:15], FALLBACK_INSTRUCTIONS),
        total_nutrition=FALLBACK_TOTALS.model_copy(),
        ayurvedic_guidelines=list(FALLBACK_GUIDELINES),
        restrictions=list(request.restrictions),
        generated_by="fallback",
        created_at=now,
        updated_at=now,
    )


def generate_diet_chart(
    request: DietChartRequest,
    *,
    ask: Callable[[str], str] = answer,
    now: datetime | None = None,
) -> DietChart:
    prompt = build_prompt(request)
    try:
        return parse_ai_response(ask(prompt), request, now=now)
    except ExternalServiceFailure as exc:
        logger.warning("Diet chart for patient %s falling back to template: %s", request.patient.id, exc)
        return fallback_diet_chart(request, now=now)
