from datetime import datetime

import pytest

import database
from models import DietChartRequest
from services.diet_chart import fallback_diet_chart

NOW = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture
def db(tmp_path, monkeypatch):
    monkeypatch.setattr(database, "DATABASE_PATH", str(tmp_path / "charts.db"))
    database.init_database()


def test_same_moment_charts_for_two_patients(db, make_patient):
    chart_a = fallback_diet_chart(DietChartRequest(patient=make_patient(id="pat_a")), now=NOW)
    chart_b = fallback_diet_chart(DietChartRequest(patient=make_patient(id="pat_b")), now=NOW)
    database.save_diet_chart(chart_a)
    database.save_diet_chart(chart_b)

    assert [c["id"] for c in database.get_diet_charts("pat_a")] == [chart_a.id]
    assert [c["id"] for c in database.get_diet_charts("pat_b")] == [chart_b.id]
    assert database.get_diet_chart(chart_a.id).patient_id == "pat_a"
