"""Symptom tracker: daily wellness entries and trend series."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import uuid4

from errors import SymptomValidationError
from models import SymptomEntry, SymptomEntryDraft, SymptomItem

COMMON_SYMPTOMS = [
    'Headache', 'Fatigue', 'Bloating', 'Acidity', 'Joint Pain', 'Anxiety',
    'Insomnia', 'Constipation', 'Skin Issues', 'Mood Swings', 'Brain Fog', 'Nausea',
]

TREND_WINDOW = 7
FULL_MARK = 5


def _calm(stress_level: int) -> int:
    # stress is plotted inverted so that higher is better on every axis
    return 6 - stress_level


def new_entry(patient_id: str, draft: SymptomEntryDraft, *, now: datetime | None = None) -> SymptomEntry:
    """Build a complete entry from a partially filled form."""
    symptoms: list[SymptomItem] = []
    for s in draft.symptoms:
        name = (s.name or "").strip()
        if not name:
            raise SymptomValidationError("Symptom name is required", fields=["symptoms"])
        symptoms.append(s.model_copy(update={"name": name}))

    now = now or datetime.now()
    values = draft.model_dump(exclude_none=True, exclude={"symptoms"})
    return SymptomEntry(
        id=uuid4().hex,
        patient_id=patient_id,
        date=now,
        symptoms=symptoms,
        **values,
    )


def chart_series(entries: Sequence[SymptomEntry]) -> list[dict]:
    """Up to the last seven entries, oldest first.

    ``entries`` is newest first, as returned by storage.
    """
    recent = list(entries[:TREND_WINDOW])
    recent.reverse()
    return [
        {
            "date": e.date.date().isoformat(),
            "energy": e.energy,
            "digestion": e.digestion,
            "sleep": e.sleep,
            "mood": e.mood,
            "stress": _calm(e.stress_level),
        }
        for e in recent
    ]


def radar(entries: Sequence[SymptomEntry]) -> list[dict]:
    if not entries:
        return []
    latest = entries[0]
    axes = [
        ("Energy", latest.energy),
        ("Digestion", latest.digestion),
        ("Sleep", latest.sleep),
        ("Mood", latest.mood),
        ("Appetite", latest.appetite),
        ("Calm", _calm(latest.stress_level)),
    ]
    return [{"subject": s, "value": v, "full_mark": FULL_MARK} for s, v in axes]
