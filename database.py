import sqlite3
from contextlib import contextmanager

import config
from models import DietChart, Patient, Recipe, SymptomEntry

# Read at call time; tests point this at a temporary file.
DATABASE_PATH = config.DATABASE_PATH

def init_database():
    """Initialize the database with required tables."""
    conn = sqlite3.connect(DATABASE_PATH)
    cursor = conn.cursor()

    # Users table (email/password auth)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            name TEXT DEFAULT '',
            role TEXT NOT NULL DEFAULT 'patient',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # Patients: indexed columns + the full profile as JSON
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS patients (
            id TEXT PRIMARY KEY,
            user_id INTEGER,
            doctor_id TEXT,
            data TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (user_id) REFERENCES users(id)
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS symptom_entries (
            id TEXT PRIMARY KEY,
            patient_id TEXT NOT NULL,
            date TEXT NOT NULL,
            data TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (patient_id) REFERENCES patients(id)
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS recipes (
            id TEXT PRIMARY KEY,
            user_id INTEGER,
            name TEXT,
            data TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (user_id) REFERENCES users(id)
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS diet_charts (
            id TEXT PRIMARY KEY,
            patient_id TEXT NOT NULL,
            generated_by TEXT,
            data TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (patient_id) REFERENCES patients(id)
        )
    """)

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_symptoms_patient ON symptom_entries(patient_id, date)")

    conn.commit()
    conn.close()

@contextmanager
def get_db():
    """Context manager for database connections."""
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def create_user(email: str, password_hash: str, name: str = "", role: str = "patient") -> int:
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO users (email, password_hash, name, role) VALUES (?, ?, ?, ?)",
            (email.lower().strip(), password_hash, name, role),
        )
        conn.commit()
        return cur.lastrowid

def get_user_by_email(email: str):
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute("SELECT * FROM users WHERE email = ?", (email.lower().strip(),))
        row = cur.fetchone()
        return dict(row) if row else None

def get_user_by_id(user_id: int):
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute("SELECT * FROM users WHERE id = ?", (user_id,))
        row = cur.fetchone()
        return dict(row) if row else None


def save_patient(patient: Patient) -> str:
    """Insert a new patient profile."""
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO patients (id, user_id, doctor_id, data) VALUES (?, ?, ?, ?)",
            (patient.id, patient.user_id, patient.doctor_id, patient.model_dump_json()),
        )
        conn.commit()
        return patient.id

def update_patient(patient: Patient) -> None:
    """Replace the stored profile (explicit edits only)."""
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute(
            "UPDATE patients SET doctor_id = ?, data = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            (patient.doctor_id, patient.model_dump_json(), patient.id),
        )
        conn.commit()

def get_patient(patient_id: str) -> Patient | None:
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute("SELECT data FROM patients WHERE id = ?", (patient_id,))
        row = cur.fetchone()
        return Patient.model_validate_json(row["data"]) if row else None

def get_patients_for_user(user_id: int) -> list[Patient]:
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute("SELECT data FROM patients WHERE user_id = ? ORDER BY created_at DESC", (user_id,))
        return [Patient.model_validate_json(r["data"]) for r in cur.fetchall()]


def save_symptom_entry(entry: SymptomEntry) -> str:
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO symptom_entries (id, patient_id, date, data) VALUES (?, ?, ?, ?)",
            (entry.id, entry.patient_id, entry.date.isoformat(), entry.model_dump_json()),
        )
        conn.commit()
        return entry.id

def get_symptom_entries(patient_id: str, limit: int = 50) -> list[SymptomEntry]:
    """Entries for a patient, newest first."""
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute(
            "SELECT data FROM symptom_entries WHERE patient_id = ? ORDER BY date DESC, created_at DESC LIMIT ?",
            (patient_id, limit),
        )
        return [SymptomEntry.model_validate_json(r["data"]) for r in cur.fetchall()]


def save_recipe(recipe: Recipe, user_id: int | None = None) -> str:
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO recipes (id, user_id, name, data) VALUES (?, ?, ?, ?)",
            (recipe.id, user_id, recipe.name, recipe.model_dump_json()),
        )
        conn.commit()
        return recipe.id

def get_recipes(user_id: int | None = None, limit: int = 50) -> list[Recipe]:
    with get_db() as conn:
        cur = conn.cursor()
        if user_id is not None:
            cur.execute(
                "SELECT data FROM recipes WHERE user_id = ? ORDER BY created_at DESC LIMIT ?",
                (user_id, limit),
            )
        else:
            cur.execute("SELECT data FROM recipes ORDER BY created_at DESC LIMIT ?", (limit,))
        return [Recipe.model_validate_json(r["data"]) for r in cur.fetchall()]


def save_diet_chart(chart: DietChart) -> str:
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO diet_charts (id, patient_id, generated_by, data) VALUES (?, ?, ?, ?)",
            (chart.id, chart.patient_id, chart.generated_by, chart.model_dump_json()),
        )
        conn.commit()
        return chart.id

def get_diet_chart(chart_id: str) -> DietChart | None:
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute("SELECT data FROM diet_charts WHERE id = ?", (chart_id,))
        row = cur.fetchone()
        return DietChart.model_validate_json(row["data"]) if row else None

def get_diet_charts(patient_id: str) -> list[dict]:
    """Chart headers for a patient, newest first."""
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute(
            "SELECT id, generated_by, created_at, json_extract(data, '$.title') AS title "
            "FROM diet_charts WHERE patient_id = ? ORDER BY created_at DESC",
            (patient_id,),
        )
        return [dict(r) for r in cur.fetchall()]
