"""BMI, BMR and TDEE calculations for the patient profile."""

from models import ActivityLevel, Gender, Patient


def calculate_bmi(weight, height):
    """
    Calculate Body Mass Index.

    Args:
        weight: Weight in kg
        height: Height in cm

    Returns:
        BMI rounded to one decimal, or None without a usable height
    """
    if not height or height <= 0:
        return None
    height_m = height / 100
    return round(weight / (height_m * height_m), 1)

def bmi_category(bmi):
    if bmi is None:
        return None
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"

def calculate_bmr(weight, height, age, gender):
    """
    Calculate Basal Metabolic Rate using Mifflin-St Jeor Equation.

    Args:
        weight: Weight in kg
        height: Height in cm
        age: Age in years
        gender: Gender enum or 'male' / 'female' / 'other'

    Returns:
        BMR in calories/day
    """
    if str(getattr(gender, "value", gender)).lower() == "male":
        return (10 * weight) + (6.25 * height) - (5 * age) + 5
    else:
        return (10 * weight) + (6.25 * height) - (5 * age) - 161

ACTIVITY_FACTORS = {
    ActivityLevel.sedentary: 1.2,
    ActivityLevel.light: 1.375,
    ActivityLevel.moderate: 1.55,
    ActivityLevel.active: 1.725,
    ActivityLevel.very_active: 1.9,
}

def calculate_tdee(bmr, activity_level):
    """Total Daily Energy Expenditure for an activity level."""
    return bmr * ACTIVITY_FACTORS.get(ActivityLevel(activity_level), 1.2)

def patient_metrics(patient: Patient):
    """Profile card figures for a patient."""
    bmi = calculate_bmi(patient.weight, patient.height)
    metrics = {
        'bmi': bmi,
        'bmi_category': bmi_category(bmi),
        'bmr': None,
        'tdee': None,
    }
    if patient.weight > 0 and patient.height > 0 and patient.age > 0:
        bmr = calculate_bmr(patient.weight, patient.height, patient.age, patient.gender or Gender.other)
        metrics['bmr'] = round(bmr)
        metrics['tdee'] = round(calculate_tdee(bmr, patient.activity_level))
    return metrics
