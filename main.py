"""Main FastAPI application for the AyurDiet platform.

 - Register / login (patient or doctor) with session cookies
 - Prakriti quiz -> constitution, optionally stored on the patient
 - Food catalogue + per-patient compatibility ranking
 - AI diet charts (Groq / OpenRouter, deterministic fallback) + PDF export
 - Recipe builder and daily symptom tracker (SQLite)
"""

import logging

from fastapi import FastAPI, Form, Request
from fastapi.responses import JSONResponse, Response
import uvicorn

import config

from passlib.context import CryptContext
from starlette.middleware.sessions import SessionMiddleware

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=['bcrypt'], deprecated='auto')

from database import (
    init_database,
    create_user,
    get_user_by_email,
    get_user_by_id,
    save_patient,
    get_patient,
    update_patient,
    get_patients_for_user,
    save_symptom_entry,
    get_symptom_entries,
    save_recipe,
    get_recipes,
    save_diet_chart,
    get_diet_chart,
    get_diet_charts,
)
from errors import AyurDietError, IncompleteAnswerSet
from models import (
    AssessmentRequest,
    DietChartOptions,
    DietChartRequest,
    PatientUpdate,
    RecipeDraft,
    RegistrationForm,
    Role,
    SymptomEntryDraft,
)
from services.body_metrics import patient_metrics
from services.compatibility import rank_foods, score_level
from services.diet_chart import generate_diet_chart
from services.food_catalog import FOOD_DATABASE, foods_by_id, get_food, search_foods
from services.prakriti import QUESTIONS, score_constitution
from services.recipes import build_recipe
from services.registration import apply_update, register_patient
from services.reporting import build_diet_chart_pdf, pdf_filename
from services.symptoms import chart_series, new_entry, radar

# Initialize FastAPI app
app = FastAPI(title="AyurDiet", version="1.0.0")
# Session cookie signing key. Keep stable across restarts or users will be logged out.
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET,
    same_site="lax",
)


def _uid(request: Request) -> int | None:
    return request.session.get("uid")

def _require_user(request: Request) -> dict | None:
    uid = _uid(request)
    if not uid:
        return None
    return get_user_by_id(uid)

def _hash_password(pw: str) -> str:
    return pwd_context.hash(pw)

def _verify_password(pw: str, pw_hash: str) -> bool:
    try:
        return pwd_context.verify(pw, pw_hash)
    except ValueError:
        return False

def _not_authenticated():
    return JSONResponse({'error': 'not_authenticated'}, status_code=401)

def _not_found():
    return JSONResponse({'error': 'not_found'}, status_code=404)

def _forbidden():
    return JSONResponse({'error': 'forbidden'}, status_code=403)

def _can_access(user: dict, patient) -> bool:
    """Doctors see every patient; patients only their own records."""
    if user.get("role") == Role.doctor.value:
        return True
    return patient.user_id is not None and patient.user_id == user["id"]

def _load_patient(request: Request, patient_id: str):
    """Return (patient, None) or (None, error response)."""
    user = _require_user(request)
    if not user:
        return None, _not_authenticated()
    patient = get_patient(patient_id)
    if not patient:
        return None, _not_found()
    if not _can_access(user, patient):
        return None, _forbidden()
    return patient, None


@app.exception_handler(AyurDietError)
async def ayurdiet_error_handler(request: Request, exc: AyurDietError):
    body = {"error": exc.code, "detail": exc.message}
    if exc.fields:
        body["fields"] = exc.fields
    if isinstance(exc, IncompleteAnswerSet):
        body["missing"] = exc.missing
    return JSONResponse(body, status_code=422)


# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    init_database()
    logger.info("Database initialized at %s", config.DATABASE_PATH)


# Auth
@app.post("/register")
async def register_post(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    name: str = Form(""),
    role: Role = Form(Role.patient),
):
    if get_user_by_email(email):
        return JSONResponse({'error': 'email_taken', 'detail': 'Email already registered. Please sign in.'}, status_code=409)
    if len(password) < 6:
        return JSONResponse({'error': 'weak_password', 'detail': 'Password must be at least 6 characters.'}, status_code=422)
    uid = int(create_user(email, _hash_password(password), name=name, role=role.value))
    request.session["uid"] = uid
    logger.info("Registered user %s as %s", uid, role.value)
    return {"ok": True, "user_id": uid, "role": role.value}

@app.post("/login")
async def login_post(request: Request, email: str = Form(...), password: str = Form(...)):
    user = get_user_by_email(email)
    if not user or not _verify_password(password, user["password_hash"]):
        return JSONResponse({'error': 'invalid_credentials', 'detail': 'Invalid email or password.'}, status_code=401)
    uid = int(user["id"])
    request.session["uid"] = uid
    patients = [p.id for p in get_patients_for_user(uid)]
    return {"ok": True, "user_id": uid, "role": user["role"], "patients": patients}

@app.get("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"ok": True}


# Prakriti quiz
@app.get("/api/prakriti/questions")
async def prakriti_questions():
    return {"questions": [q.model_dump() for q in QUESTIONS]}

@app.post("/api/prakriti/assessment")
async def prakriti_assessment(request: Request, body: AssessmentRequest):
    """Score the quiz; with patient_id the result becomes the patient's prakriti."""
    patient = None
    if body.patient_id:
        patient, err = _load_patient(request, body.patient_id)
        if err:
            return err

    result = score_constitution(QUESTIONS, body.answers)

    if patient is not None:
        update_patient(patient.model_copy(update={"prakriti": result.dominant}))
    return {"result": result.model_dump(), "patient_id": body.patient_id}


# Food catalogue
@app.get("/api/foods")
async def list_foods(q: str = ""):
    foods = search_foods(q)
    return {"foods": [f.model_dump() for f in foods], "count": len(foods)}

@app.get("/api/foods/{food_id}")
async def food_detail(food_id: str):
    food = get_food(food_id)
    if not food:
        return _not_found()
    return food.model_dump()


# Patients
@app.post("/api/patients")
async def create_patient(request: Request, form: RegistrationForm):
    user = _require_user(request)
    if not user:
        return _not_authenticated()
    # Doctors register patients on their behalf; patients register themselves.
    owner_id = user["id"] if user["role"] == Role.patient.value else None
    patient = register_patient(form, owner_id=owner_id)
    save_patient(patient)
    logger.info("Registered patient %s", patient.id)
    return JSONResponse(patient.model_dump(mode="json"), status_code=201)

@app.get("/api/patients/{patient_id}")
async def patient_detail(request: Request, patient_id: str):
    patient, err = _load_patient(request, patient_id)
    if err:
        return err
    return {
        "patient": patient.model_dump(mode="json"),
        "metrics": patient_metrics(patient),
        "diet_charts": get_diet_charts(patient.id),
    }

@app.patch("/api/patients/{patient_id}")
async def patient_update(request: Request, patient_id: str, changes: PatientUpdate):
    patient, err = _load_patient(request, patient_id)
    if err:
        return err
    updated = apply_update(patient, changes)
    update_patient(updated)
    return updated.model_dump(mode="json")


@app.get("/api/patients/{patient_id}/compatibility")
async def patient_compatibility(request: Request, patient_id: str, q: str = "", limit: int | None = None):
    """Catalogue foods ranked for this patient, best first."""
    patient, err = _load_patient(request, patient_id)
    if err:
        return err
    ranked = rank_foods(FOOD_DATABASE, patient, q, limit=limit or config.COMPATIBILITY_PAGE_SIZE)
    return {
        "patient_id": patient.id,
        "results": [
            {
                "food": food.model_dump(),
                "score": res.score,
                "level": score_level(res.score),
                "reasons": res.reasons,
                "recommendations": res.recommendations,
            }
            for food, res in ranked
        ],
    }


# Diet charts
@app.post("/api/patients/{patient_id}/diet-charts")
def create_diet_chart(request: Request, patient_id: str, options: DietChartOptions | None = None):
    # Blocking LLM call; plain def runs in the threadpool.
    patient, err = _load_patient(request, patient_id)
    if err:
        return err
    options = options or DietChartOptions()
    chart = generate_diet_chart(DietChartRequest(patient=patient, **options.model_dump()))
    save_diet_chart(chart)
    logger.info("Diet chart %s (%s) saved for patient %s", chart.id, chart.generated_by, patient.id)
    return JSONResponse(chart.model_dump(mode="json"), status_code=201)

def _load_chart(request: Request, chart_id: str):
    user = _require_user(request)
    if not user:
        return None, _not_authenticated()
    chart = get_diet_chart(chart_id)
    if not chart:
        return None, _not_found()
    patient = get_patient(chart.patient_id)
    if patient is None or not _can_access(user, patient):
        return None, _forbidden()
    return chart, None

# Registered before the JSON route so "{id}.pdf" is not swallowed by "{id}".
@app.get("/api/diet-charts/{chart_id}.pdf")
async def diet_chart_pdf(request: Request, chart_id: str):
    chart, err = _load_chart(request, chart_id)
    if err:
        return err
    pdf_bytes = build_diet_chart_pdf(chart)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={pdf_filename(chart)}"},
    )

@app.get("/api/diet-charts/{chart_id}")
async def diet_chart_detail(request: Request, chart_id: str):
    chart, err = _load_chart(request, chart_id)
    if err:
        return err
    return chart.model_dump(mode="json")


# Recipes
@app.post("/api/recipes")
async def create_recipe(request: Request, draft: RecipeDraft):
    user = _require_user(request)
    if not user:
        return _not_authenticated()
    recipe = build_recipe(draft, foods_by_id())
    save_recipe(recipe, user["id"])
    return JSONResponse(recipe.model_dump(mode="json"), status_code=201)

@app.get("/api/recipes")
async def list_recipes(request: Request):
    user = _require_user(request)
    if not user:
        return _not_authenticated()
    return {"recipes": [r.model_dump(mode="json") for r in get_recipes(user["id"])]}


# Symptom tracker
@app.post("/api/patients/{patient_id}/symptoms")
async def log_symptoms(request: Request, patient_id: str, draft: SymptomEntryDraft):
    patient, err = _load_patient(request, patient_id)
    if err:
        return err
    entry = new_entry(patient.id, draft)
    save_symptom_entry(entry)
    return JSONResponse(entry.model_dump(mode="json"), status_code=201)

@app.get("/api/patients/{patient_id}/symptoms")
async def symptom_history(request: Request, patient_id: str):
    patient, err = _load_patient(request, patient_id)
    if err:
        return err
    entries = get_symptom_entries(patient.id)
    return {
        "entries": [e.model_dump(mode="json") for e in entries],
        "chart": chart_series(entries),
        "radar": radar(entries),
    }


# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "AyurDiet"}

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=False)
