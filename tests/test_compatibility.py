from models import (
    ActivityLevel,
    AyurvedicProperties,
    BowelState,
    Constitution,
    DietaryHabit,
    Digestibility,
    DoshaEffect,
    DoshaEffects,
    Food,
    Rasa,
    Vikriti,
    Virya,
)
from services.compatibility import compute_compatibility, rank_foods, score_level
from services.food_catalog import FOOD_DATABASE, get_food


def _rice():
    return Food(
        id="rice",
        name="Rice",
        category="Grains",
        calories=200,
        carbs=45,
        ayurvedic_properties=AyurvedicProperties(
            rasa=[Rasa.sweet],
            virya=Virya.cold,
            digestibility=Digestibility.easy,
            dosha_effect=DoshaEffects(
                vata=DoshaEffect.decrease,
                pitta=DoshaEffect.neutral,
                kapha=DoshaEffect.increase,
            ),
        ),
    )


def test_rice_for_vata_patient_with_loose_stools(make_patient):
    patient = make_patient(
        prakriti=Constitution.vata,
        vikriti=Vikriti.balanced,
        bowel_movements=BowelState.loose,
        activity_level=ActivityLevel.moderate,
        dietary_habits=DietaryHabit.vegetarian,
    )
    result = compute_compatibility(_rice(), patient)
    assert result.score == 80
    assert result.reasons == [
        "Balances Vata dosha",
        "Easy to digest, suitable for current digestive state",
    ]
    assert result.recommendations == []
    assert result.food_id == "rice"
    assert result.patient_id == patient.id


def test_aggravating_prakriti_adds_moderation_advice(make_patient):
    patient = make_patient(prakriti=Constitution.kapha)
    result = compute_compatibility(_rice(), patient)
    assert result.score == 35
    assert "May increase Kapha" in result.reasons
    assert result.recommendations == ["Use warming spices and consume in smaller portions"]


def test_dual_prakriti_skips_constitution_rule(make_patient):
    patient = make_patient(prakriti=Constitution.vata_pitta)
    assert compute_compatibility(_rice(), patient).score == 50


def test_vegetarian_never_gets_meat(make_patient):
    patient = make_patient(dietary_habits=DietaryHabit.vegetarian)
    chicken = get_food("24")
    result = compute_compatibility(chicken, patient)
    assert result.score == 0
    assert "Not suitable for vegetarian diet" in result.reasons


def test_rules_after_an_exclusion_still_report(make_patient):
    patient = make_patient(dietary_habits=DietaryHabit.vegetarian, season="winter")
    result = compute_compatibility(get_food("24"), patient)
    assert result.score == 0
    assert result.reasons == [
        "Balances Vata dosha",
        "Not suitable for vegetarian diet",
        "Suitable for winter season",
    ]


def test_non_vegetarian_may_eat_meat(make_patient):
    patient = make_patient(dietary_habits=DietaryHabit.non_vegetarian)
    assert compute_compatibility(get_food("24"), patient).score > 0


def test_allergy_match_scores_zero(make_patient):
    patient = make_patient(allergies=["almond"])
    result = compute_compatibility(get_food("12"), patient)
    assert result.score == 0
    assert "Contains known allergen" in result.reasons


def test_allergy_matches_category(make_patient):
    patient = make_patient(allergies=["Dairy"])
    assert compute_compatibility(get_food("19"), patient).score == 0


def test_blank_allergy_is_ignored(make_patient):
    patient = make_patient(allergies=["  ", ""])
    assert compute_compatibility(_rice(), patient).score == 70


def test_balanced_vikriti_has_no_effect(make_patient):
    patient = make_patient(vikriti=Vikriti.balanced)
    result = compute_compatibility(get_food("11"), patient)
    assert not any("imbalance" in r for r in result.reasons)


def test_vikriti_imbalance(make_patient):
    patient = make_patient(prakriti=Constitution.vata, vikriti=Vikriti.pitta)
    mango = get_food("11")
    # 50 + 20 (vata) - 20 (pitta imbalance) + 10 (summer)
    result = compute_compatibility(mango, patient)
    assert result.score == 60
    assert "May worsen current pitta imbalance" in result.reasons
    assert "Avoid or consume very sparingly" in result.recommendations


def test_constipation_and_heavy_food(make_patient):
    patient = make_patient(prakriti=Constitution.pitta, bowel_movements=BowelState.constipated)
    chickpeas = get_food("18")
    # 50 + 20 (pitta decrease) - 10 (difficult digestion)
    assert compute_compatibility(chickpeas, patient).score == 60


def test_activity_level_calorie_rules(make_patient):
    sedentary = make_patient(prakriti=Constitution.pitta, activity_level=ActivityLevel.sedentary,
                             dietary_habits=DietaryHabit.non_vegetarian)
    mutton = get_food("27")
    result = compute_compatibility(mutton, sedentary)
    assert "High calorie content may not suit sedentary lifestyle" in result.reasons

    very_active = make_patient(activity_level=ActivityLevel.very_active)
    cucumber = get_food("7")
    result = compute_compatibility(cucumber, very_active)
    assert "May need higher calorie foods for active lifestyle" in result.reasons


def test_diabetes_penalises_high_carbs(make_patient):
    patient = make_patient(
        bowel_movements=BowelState.loose,
        medical_conditions=["Diabetes Type 2"],
    )
    result = compute_compatibility(_rice(), patient)
    assert result.score == 70
    assert "Consume in small portions and monitor glucose levels" in result.recommendations


def test_hypertension_penalises_salt(make_patient):
    patient = make_patient(medical_conditions=["Hypertension"])
    result = compute_compatibility(get_food("20"), patient)
    # 50 + 20 (vata decrease) - 15 (salt)
    assert result.score == 55
    assert "High sodium may affect blood pressure" in result.reasons


def test_season_defaults_to_summer(make_patient):
    patient = make_patient()
    result = compute_compatibility(get_food("7"), patient)
    assert result.score == 60
    assert "Suitable for summer season" in result.reasons

    winter = make_patient(season="winter")
    assert "Suitable for summer season" not in compute_compatibility(get_food("7"), winter).reasons


def test_scores_stay_in_bounds(make_patient):
    patients = [
        make_patient(),
        make_patient(prakriti=Constitution.pitta, vikriti=Vikriti.pitta,
                     bowel_movements=BowelState.constipated, activity_level=ActivityLevel.sedentary,
                     medical_conditions=["Diabetes Type 2", "Hypertension"]),
        make_patient(prakriti=Constitution.kapha, vikriti=Vikriti.kapha,
                     dietary_habits=DietaryHabit.non_vegetarian, season="winter"),
        make_patient(prakriti=Constitution.vata, vikriti=Vikriti.vata,
                     bowel_movements=BowelState.loose, season="summer"),
    ]
    for patient in patients:
        for food in FOOD_DATABASE:
            assert 0 <= compute_compatibility(food, patient).score <= 100


def test_scoring_is_idempotent(make_patient):
    patient = make_patient(vikriti=Vikriti.kapha, medical_conditions=["Hypertension"])
    for food in FOOD_DATABASE:
        assert compute_compatibility(food, patient) == compute_compatibility(food, patient)


def test_rank_foods_orders_best_first(make_patient):
    patient = make_patient()
    ranked = rank_foods(FOOD_DATABASE, patient, limit=None)
    scores = [res.score for _, res in ranked]
    assert scores == sorted(scores, reverse=True)
    assert len(ranked) == len(FOOD_DATABASE)
    # meat sinks to the bottom for a vegetarian
    assert all(food.category == "Non-Vegetarian" for food, _ in ranked[-4:])


def test_rank_foods_query_and_limit(make_patient):
    ranked = rank_foods(FOOD_DATABASE, make_patient(), "spices", limit=2)
    assert len(ranked) == 2
    assert all(food.category == "Spices" for food, _ in ranked)


def test_score_level_bands():
    assert score_level(100) == "excellent"
    assert score_level(80) == "excellent"
    assert score_level(79) == "good"
    assert score_level(60) == "good"
    assert score_level(40) == "moderate"
    assert score_level(39) == "poor"
    assert score_level(0) == "poor"
