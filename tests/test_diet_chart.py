from datetime import datetime

import pytest
from reportlab.pdfbase.pdfmetrics import stringWidth

from errors import ExternalServiceFailure
from models import DietChartRequest, DietaryHabit
from services import llm
from services.diet_chart import (
    build_prompt,
    fallback_diet_chart,
    generate_diet_chart,
    parse_ai_response,
)
from services.food_catalog import FOOD_DATABASE
from services.reporting import BODY_FONT, _wrap, build_diet_chart_pdf, pdf_filename

NOW = datetime(2024, 3, 1, 9, 30, 0)


@pytest.fixture
def request_for(make_patient):
    def _make(**overrides):
        patient = make_patient(
            medical_conditions=["Hypertension"],
            allergies=["peanut"],
            dietary_habits=DietaryHabit.vegetarian,
        )
        fields = {"patient": patient, "duration": 14,
                  "preferences": ["warm meals"], "restrictions": ["no onion"], "goals": ["weight loss"]}
        fields.update(overrides)
        return DietChartRequest(**fields)
    return _make


def test_prompt_describes_patient(request_for):
    prompt = build_prompt(request_for())
    assert "14-day diet plan" in prompt
    assert "Prakriti (Constitution): vata" in prompt
    assert "Medical Conditions: Hypertension" in prompt
    assert "Allergies: peanut" in prompt
    assert "RESTRICTIONS: no onion" in prompt
    assert "GOALS: weight loss" in prompt


def test_ai_reply_becomes_chart(request_for):
    text = "Favour warm cooked grains and mung dal. " * 20
    chart = generate_diet_chart(request_for(), ask=lambda prompt: text, now=NOW)
    assert chart.generated_by == "ai"
    assert chart.title == "AI Generated Diet Plan - 14 Days"
    assert chart.description == text.strip()[:200] + "..."
    assert chart.meals.breakfast.foods == FOOD_DATABASE[0:3]
    assert chart.meals.lunch.foods == FOOD_DATABASE[5:10]
    assert chart.meals.dinner.foods == FOOD_DATABASE[12:15]
    assert chart.total_nutrition.calories == 2000
    assert chart.restrictions == ["no onion"]


def test_provider_failure_falls_back(request_for):
    def broken(prompt):
        raise ExternalServiceFailure("timeout")

    chart = generate_diet_chart(request_for(), ask=broken, now=NOW)
    assert chart.generated_by == "fallback"
    assert chart.title == "Personalized Diet Plan - 14 Days"
    assert chart.total_nutrition.calories == 1800


def test_blank_reply_falls_back(request_for):
    chart = generate_diet_chart(request_for(), ask=lambda prompt: "   \n", now=NOW)
    assert chart.generated_by == "fallback"


def test_parse_rejects_blank_text(request_for):
    with pytest.raises(ExternalServiceFailure):
        parse_ai_response("", request_for(), now=NOW)


def test_fallback_is_deterministic(request_for):
    req = request_for()
    first = fallback_diet_chart(req, now=NOW)
    second = fallback_diet_chart(req, now=NOW)
    assert first.model_dump(exclude={"id"}) == second.model_dump(exclude={"id"})
    assert first.id.startswith(f"diet_{int(NOW.timestamp() * 1000)}_")
    assert first.id != second.id
    assert first.meals.breakfast.foods == FOOD_DATABASE[0:3]
    assert first.meals.mid_morning.instructions == "Fresh fruits or herbal tea."
    assert first.created_at == first.updated_at == NOW


def test_fallback_slots_are_vegetarian(request_for):
    chart = fallback_diet_chart(request_for(), now=NOW)
    for slot in ("breakfast", "mid_morning", "lunch", "evening", "dinner"):
        for food in getattr(chart.meals, slot).foods:
            assert food.category != "Non-Vegetarian"


def test_unconfigured_providers_raise(monkeypatch):
    monkeypatch.setattr(llm.config, "GROQ_API_KEY", "")
    monkeypatch.setattr(llm.config, "OPENROUTER_API_KEY", "")
    with pytest.raises(ExternalServiceFailure):
        llm.answer("hello")


def test_groq_reply_is_used(monkeypatch):
    class FakeResponse:
        def raise_for_status(self):
            pass

        def json(self):
            return {"choices": [{"message": {"content": "  Eat kitchari.  "}}]}

    calls = []

    def fake_post(url, **kwargs):
        calls.append(url)
        return FakeResponse()

    monkeypatch.setattr(llm.config, "GROQ_API_KEY", "test-key")
    monkeypatch.setattr(llm.requests, "post", fake_post)
    assert llm.answer("plan") == "Eat kitchari."
    assert calls == [llm.GROQ_URL]


@pytest.mark.parametrize("body", [
    {"choices": [None]},
    {"choices": []},
    {"choices": "oops"},
    {"choices": [{"message": None}]},
    {"choices": [{"message": {"content": 42}}]},
    ["not", "a", "dict"],
    None,
])
def test_malformed_provider_body_falls_back(monkeypatch, request_for, body):
    class FakeResponse:
        def raise_for_status(self):
            pass

        def json(self):
            return body

    monkeypatch.setattr(llm.config, "GROQ_API_KEY", "test-key")
    monkeypatch.setattr(llm.config, "OPENROUTER_API_KEY", "test-key")
    monkeypatch.setattr(llm.requests, "post", lambda url, **kwargs: FakeResponse())

    chart = generate_diet_chart(request_for(), now=NOW)
    assert chart.generated_by == "fallback"


def test_wrapped_lines_fit_page_width():
    text = "Favour warm, freshly cooked meals with mild spices and avoid iced drinks. " * 8
    lines = _wrap(text, 300)
    assert len(lines) > 1
    assert all(stringWidth(line, *BODY_FONT) <= 300 for line in lines)
    assert " ".join(lines) == text.strip()
    assert _wrap("   ", 300) == []


def test_pdf_export(request_for):
    chart = fallback_diet_chart(request_for(), now=NOW)
    pdf = build_diet_chart_pdf(chart)
    assert pdf.startswith(b"%PDF")
    assert pdf_filename(chart) == "Personalized_Diet_Plan_-_14_Days.pdf"
