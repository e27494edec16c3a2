"""Patient registration and profile edits."""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from errors import RegistrationError
from models import Constitution, Patient, PatientUpdate, RegistrationForm, Vikriti

TOTAL_STEPS = 6
DEFAULT_DOCTOR_ID = "default_doctor"

COMMON_HEALTH_PROBLEMS = [
    'Diabetes', 'Hypertension', 'Obesity', 'Digestive Issues', 'Anxiety', 'Depression',
    'Insomnia', 'Arthritis', 'Migraine', 'Asthma', 'Skin Problems', 'Fatigue',
    'Back Pain', 'Heart Disease', 'Thyroid Issues', 'PCOS', 'Menstrual Issues',
]


def validate_step(step: int, form: RegistrationForm) -> list[str]:
    """Missing required fields for one form step (empty when the step is complete)."""
    missing: list[str] = []
    if step == 1:
        for field in ("name", "email", "phone"):
            if not getattr(form, field).strip():
                missing.append(field)
        if form.age <= 0:
            missing.append("age")
    elif step == 2:
        if form.weight <= 0:
            missing.append("weight")
        if form.height <= 0:
            missing.append("height")
    return missing


def register_patient(form: RegistrationForm, *, owner_id: int | None = None, now: datetime | None = None) -> Patient:
    missing: list[str] = []
    for step in range(1, TOTAL_STEPS + 1):
        missing.extend(validate_step(step, form))
    if missing:
        raise RegistrationError("Please fill in all required fields", fields=missing)

    # Constitution starts at the default until the Prakriti quiz is taken
    return Patient(
        id=f"pat_{uuid4().hex[:12]}",
        name=form.name.strip(),
        email=form.email.strip().lower(),
        phone=form.phone.strip(),
        age=form.age,
        gender=form.gender,
        weight=form.weight,
        height=form.height,
        activity_level=form.activity_level,
        dietary_habits=form.dietary_habits,
        sleep_hours=form.sleep_hours,
        water_intake=form.water_intake,
        bowel_movements=form.bowel_movements,
        meal_frequency=form.meal_frequency,
        prakriti=Constitution.vata,
        vikriti=Vikriti.balanced,
        medical_conditions=list(form.current_problems),
        allergies=list(form.allergies),
        doctor_id=DEFAULT_DOCTOR_ID,
        user_id=owner_id,
        created_at=now or datetime.now(),
    )


def apply_update(patient: Patient, changes: PatientUpdate) -> Patient:
    """Return a copy of ``patient`` with the explicitly set fields replaced."""
    updates = changes.model_dump(exclude_unset=True)
    for field in ("name", "email", "phone"):
        if field in updates and updates[field] is not None and not updates[field].strip():
            raise RegistrationError(f"{field} cannot be blank", fields=[field])
    for field in ("weight", "height", "age"):
        if field in updates and updates[field] is not None and updates[field] <= 0:
            raise RegistrationError(f"{field} must be positive", fields=[field])
    # None clears only the optional season; required fields keep their value
    updates = {k: v for k, v in updates.items() if v is not None or k == "season"}
    return patient.model_copy(update=updates)
