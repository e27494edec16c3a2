"""PDF export of a diet chart.

Uses reportlab (pure python). Generates bytes.
"""

from __future__ import annotations

from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from models import DietChart

MEAL_TIMES = {
    "breakfast": "7:00 AM - 8:00 AM",
    "mid_morning": "10:00 AM - 11:00 AM",
    "lunch": "12:30 PM - 1:30 PM",
    "evening": "4:00 PM - 5:00 PM",
    "dinner": "7:00 PM - 8:00 PM",
}

MEAL_TITLES = {
    "breakfast": "Breakfast",
    "mid_morning": "Mid-Morning",
    "lunch": "Lunch",
    "evening": "Evening",
    "dinner": "Dinner",
}

BODY_FONT = ("Helvetica", 10)


def _wrap(text: str, width: float) -> list[str]:
    """Split text into lines that fit ``width`` points in the body font."""
    if not (text or "").strip():
        return []
    return simpleSplit(text.strip(), BODY_FONT[0], BODY_FONT[1], width)


def pdf_filename(chart: DietChart) -> str:
    return "_".join(chart.title.split()) + ".pdf"


def build_diet_chart_pdf(chart: DietChart) -> bytes:
    """Render a diet chart to a printable A4 PDF."""
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    w, h = A4
    left = 0.8 * inch
    text_width = w - 2 * left
    y = h - 0.8 * inch

    def newline(step: float, font: tuple[str, int] = BODY_FONT):
        nonlocal y
        y -= step
        if y < 1.0 * inch:
            c.showPage()
            y = h - 0.8 * inch
            c.setFont(*font)

    c.setFont("Helvetica-Bold", 16)
    c.drawString(left, y, chart.title)

    c.setFont("Helvetica", 10)
    newline(0.3 * inch)
    c.drawString(left, y, f"Duration: {chart.duration} days   Created: {chart.created_at:%Y-%m-%d}")
    for line in _wrap(chart.description, text_width):
        newline(0.18 * inch)
        c.drawString(left, y, line)

    newline(0.35 * inch)
    c.setFont("Helvetica-Bold", 12)
    c.drawString(left, y, "Nutritional Overview")
    c.setFont("Helvetica", 10)
    t = chart.total_nutrition
    newline(0.22 * inch)
    c.drawString(
        left, y,
        f"Calories: {t.calories:g} kcal   Protein: {t.protein:g}g   Carbs: {t.carbs:g}g   "
        f"Fat: {t.fat:g}g   Fiber: {t.fiber:g}g",
    )

    for slot, title in MEAL_TITLES.items():
        meal = getattr(chart.meals, slot)
        newline(0.35 * inch)
        c.setFont("Helvetica-Bold", 12)
        c.drawString(left, y, f"{title}  ({MEAL_TIMES[slot]})")
        c.setFont("Helvetica", 10)
        for food in meal.foods:
            newline(0.18 * inch)
            c.drawString(left + 0.2 * inch, y, f"• {food.name} ({food.category}, {food.calories:g} kcal)")
        for line in _wrap(meal.instructions, text_width - 0.2 * inch):
            newline(0.18 * inch)
            c.drawString(left + 0.2 * inch, y, line)

    newline(0.35 * inch)
    c.setFont("Helvetica-Bold", 12)
    c.drawString(left, y, "Ayurvedic Guidelines")
    c.setFont("Helvetica", 10)
    for g in chart.ayurvedic_guidelines:
        newline(0.18 * inch)
        c.drawString(left + 0.2 * inch, y, f"• {g}")

    if chart.restrictions:
        newline(0.35 * inch)
        c.setFont("Helvetica-Bold", 12)
        c.drawString(left, y, "Restrictions")
        c.setFont("Helvetica", 10)
        for r in chart.restrictions:
            newline(0.18 * inch)
            c.drawString(left + 0.2 * inch, y, f"• {r}")

    c.showPage()
    c.save()
    return buf.getvalue()
