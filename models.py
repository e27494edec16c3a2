"""Pydantic models shared by the services and the HTTP layer."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Dosha(str, Enum):
    vata = "vata"
    pitta = "pitta"
    kapha = "kapha"


class Constitution(str, Enum):
    vata = "vata"
    pitta = "pitta"
    kapha = "kapha"
    vata_pitta = "vata_pitta"
    pitta_kapha = "pitta_kapha"
    vata_kapha = "vata_kapha"
    tridosha = "tridosha"

    @property
    def single_dosha(self) -> Optional[Dosha]:
        try:
            return Dosha(self.value)
        except ValueError:
            return None


class Vikriti(str, Enum):
    vata = "vata"
    pitta = "pitta"
    kapha = "kapha"
    balanced = "balanced"


class DoshaEffect(str, Enum):
    increase = "increase"
    decrease = "decrease"
    neutral = "neutral"


class Rasa(str, Enum):
    sweet = "sweet"
    sour = "sour"
    salty = "salty"
    pungent = "pungent"
    bitter = "bitter"
    astringent = "astringent"


class Virya(str, Enum):
    hot = "hot"
    cold = "cold"


class Digestibility(str, Enum):
    easy = "easy"
    moderate = "moderate"
    difficult = "difficult"


class QuestionCategory(str, Enum):
    physical = "physical"
    mental = "mental"
    behavioral = "behavioral"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"


class DietaryHabit(str, Enum):
    vegetarian = "vegetarian"
    non_vegetarian = "non_vegetarian"
    vegan = "vegan"
    jain = "jain"


class BowelState(str, Enum):
    regular = "regular"
    irregular = "irregular"
    constipated = "constipated"
    loose = "loose"


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class Role(str, Enum):
    patient = "patient"
    doctor = "doctor"


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


# ---------------------------------------------------------------------------
# Foods
# ---------------------------------------------------------------------------


class DoshaEffects(BaseModel):
    model_config = ConfigDict(frozen=True)

    vata: DoshaEffect = DoshaEffect.neutral
    pitta: DoshaEffect = DoshaEffect.neutral
    kapha: DoshaEffect = DoshaEffect.neutral

    def for_dosha(self, dosha: Dosha) -> DoshaEffect:
        return getattr(self, dosha.value)


class AyurvedicProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    rasa: List[Rasa] = []
    virya: Virya
    digestibility: Digestibility
    season: Optional[List[str]] = None
    dosha_effect: DoshaEffects


class Food(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    serving_size: float = Field(100.0, gt=0, description="Grams per serving")
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    fiber: float = Field(0.0, ge=0)
    ayurvedic_properties: AyurvedicProperties


# ---------------------------------------------------------------------------
# Patients
# ---------------------------------------------------------------------------


class Patient(BaseModel):
    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    age: int = Field(0, ge=0)
    gender: Gender = Gender.male
    weight: float = Field(0.0, ge=0, description="kg")
    height: float = Field(0.0, ge=0, description="cm")
    activity_level: ActivityLevel = ActivityLevel.moderate
    dietary_habits: DietaryHabit = DietaryHabit.vegetarian
    sleep_hours: float = 7
    water_intake: float = Field(2.5, description="Litres per day")
    bowel_movements: BowelState = BowelState.regular
    meal_frequency: int = 3
    prakriti: Constitution = Constitution.vata
    vikriti: Vikriti = Vikriti.balanced
    season: Optional[str] = None
    medical_conditions: List[str] = []
    allergies: List[str] = []
    doctor_id: str = "default_doctor"
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None


class PatientUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    gender: Optional[Gender] = None
    weight: Optional[float] = Field(None, ge=0)
    height: Optional[float] = Field(None, ge=0)
    activity_level: Optional[ActivityLevel] = None
    dietary_habits: Optional[DietaryHabit] = None
    sleep_hours: Optional[float] = None
    water_intake: Optional[float] = None
    bowel_movements: Optional[BowelState] = None
    meal_frequency: Optional[int] = None
    prakriti: Optional[Constitution] = None
    vikriti: Optional[Vikriti] = None
    season: Optional[str] = None
    medical_conditions: Optional[List[str]] = None
    allergies: Optional[List[str]] = None


class RegistrationForm(BaseModel):
    """Multi-step registration form; step checks live in services.registration."""

    name: str = ""
    age: int = 25
    gender: Gender = Gender.male
    email: str = ""
    phone: str = ""
    address: str = ""
    emergency_contact: str = ""
    emergency_phone: str = ""
    weight: float = 60
    height: float = 165
    blood_group: str = ""
    current_problems: List[str] = []
    medical_history: List[str] = []
    current_medications: List[str] = []
    allergies: List[str] = []
    dietary_habits: DietaryHabit = DietaryHabit.vegetarian
    activity_level: ActivityLevel = ActivityLevel.moderate
    sleep_hours: float = 7
    water_intake: float = 2.5
    stress_level: int = Field(3, ge=1, le=5)
    bowel_movements: BowelState = BowelState.regular
    digestive_issues: List[str] = []
    meal_frequency: int = 3
    health_goals: List[str] = []
    food_preferences: List[str] = []
    avoid_foods: List[str] = []


class CompatibilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    food_id: str
    patient_id: str
    score: int = Field(..., ge=0, le=100)
    reasons: List[str] = []
    recommendations: List[str] = []


# ---------------------------------------------------------------------------
# Constitution quiz
# ---------------------------------------------------------------------------


class QuestionOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    dosha: Dosha
    weight: int = Field(..., ge=1)


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: QuestionCategory
    question: str
    options: List[QuestionOption]


AnswerSet = Dict[str, int]


class ConstitutionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    vata: int
    pitta: int
    kapha: int
    dominant: Constitution
    description: str
    recommendations: List[str]


class AssessmentRequest(BaseModel):
    answers: AnswerSet
    patient_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Diet charts
# ---------------------------------------------------------------------------


class NutritionTotals(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0


class MealPlan(BaseModel):
    foods: List[Food] = []
    recipes: List[str] = Field(default_factory=list, description="Recipe ids")
    instructions: str = ""


class DietMeals(BaseModel):
    breakfast: MealPlan
    mid_morning: MealPlan
    lunch: MealPlan
    evening: MealPlan
    dinner: MealPlan


class DietChart(BaseModel):
    id: str
    patient_id: str
    doctor_id: str
    title: str
    description: str
    duration: int
    meals: DietMeals
    total_nutrition: NutritionTotals
    ayurvedic_guidelines: List[str]
    restrictions: List[str] = []
    generated_by: Literal["ai", "fallback"]
    created_at: datetime
    updated_at: datetime


class DietChartOptions(BaseModel):
    preferences: List[str] = []
    restrictions: List[str] = []
    goals: List[str] = []
    duration: int = Field(7, ge=1, le=90)


class DietChartRequest(DietChartOptions):
    patient: Patient


# ---------------------------------------------------------------------------
# Symptom tracking
# ---------------------------------------------------------------------------


class SymptomItem(BaseModel):
    name: str
    severity: int = Field(3, ge=1, le=5)
    notes: Optional[str] = None


class SymptomEntryDraft(BaseModel):
    symptoms: List[SymptomItem] = []
    energy: Optional[int] = Field(None, ge=1, le=5)
    digestion: Optional[int] = Field(None, ge=1, le=5)
    sleep: Optional[int] = Field(None, ge=1, le=5)
    mood: Optional[int] = Field(None, ge=1, le=5)
    bowel_movement: Optional[str] = None
    appetite: Optional[int] = Field(None, ge=1, le=5)
    water_intake: Optional[float] = Field(None, ge=0)
    exercise_minutes: Optional[int] = Field(None, ge=0)
    stress_level: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


class SymptomEntry(BaseModel):
    id: str
    patient_id: str
    date: datetime
    symptoms: List[SymptomItem] = []
    energy: int = Field(3, ge=1, le=5)
    digestion: int = Field(3, ge=1, le=5)
    sleep: int = Field(3, ge=1, le=5)
    mood: int = Field(3, ge=1, le=5)
    bowel_movement: str = "normal"
    appetite: int = Field(3, ge=1, le=5)
    water_intake: float = 2.5
    exercise_minutes: int = 30
    stress_level: int = Field(3, ge=1, le=5)
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------


class RecipeIngredient(BaseModel):
    food_id: str
    quantity: float = Field(1, gt=0)
    unit: str = "grams"


class RecipeDraft(BaseModel):
    name: str = ""
    ingredients: List[RecipeIngredient] = []
    instructions: List[str] = []
    cooking_tips: List[str] = []
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    difficulty: Optional[Difficulty] = None
    season: List[str] = []


class Recipe(BaseModel):
    id: str
    name: str
    ingredients: List[RecipeIngredient]
    instructions: List[str]
    cooking_tips: List[str] = []
    prep_time: int = 15
    cook_time: int = 30
    servings: int = 4
    difficulty: Difficulty = Difficulty.medium
    ayurvedic_benefits: List[str] = []
    suitable_for: List[Dosha] = []
    season: List[str] = []
    nutritional_info: NutritionTotals
