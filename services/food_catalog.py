"""Static Ayurvedic food catalogue.

Macros are per serving (``serving_size`` grams). The first twenty entries are
vegetarian staples; the diet chart templates draw their meal slots from the
head of this list.
"""

from __future__ import annotations

from models import AyurvedicProperties, Digestibility, DoshaEffect, DoshaEffects, Food, Rasa, Virya

_D = DoshaEffect.decrease
_I = DoshaEffect.increase
_N = DoshaEffect.neutral


def _food(fid, name, category, serving, cal, protein, carbs, fat, fiber,
          rasa, virya, digestibility, vata, pitta, kapha, season=None) -> Food:
    return Food(
        id=fid,
        name=name,
        category=category,
        serving_size=serving,
        calories=cal,
        protein=protein,
        carbs=carbs,
        fat=fat,
        fiber=fiber,
        ayurvedic_properties=AyurvedicProperties(
            rasa=[Rasa(r) for r in rasa],
            virya=Virya(virya),
            digestibility=Digestibility(digestibility),
            season=season,
            dosha_effect=DoshaEffects(vata=vata, pitta=pitta, kapha=kapha),
        ),
    )


FOOD_DATABASE: list[Food] = [
    _food("1", "Basmati Rice", "Grains", 150, 195, 4.1, 42, 0.5, 0.6,
          ["sweet"], "cold", "easy", _D, _D, _I),
    _food("2", "Mung Dal", "Legumes", 100, 105, 7.0, 19, 0.4, 7.6,
          ["sweet", "astringent"], "cold", "easy", _N, _D, _D),
    _food("3", "Ghee", "Dairy", 10, 90, 0.0, 0, 10.0, 0.0,
          ["sweet"], "cold", "moderate", _D, _D, _I, ["winter", "autumn"]),
    _food("4", "Whole Wheat Chapati", "Grains", 40, 120, 3.6, 20, 3.0, 2.8,
          ["sweet"], "cold", "moderate", _D, _D, _I),
    _food("5", "Spinach", "Vegetables", 100, 23, 2.9, 3.6, 0.4, 2.2,
          ["bitter", "astringent"], "cold", "easy", _I, _I, _D, ["spring", "winter"]),
    _food("6", "Carrot", "Vegetables", 100, 41, 0.9, 9.6, 0.2, 2.8,
          ["sweet", "bitter"], "hot", "easy", _D, _N, _D, ["winter"]),
    _food("7", "Cucumber", "Vegetables", 100, 16, 0.7, 3.6, 0.1, 0.5,
          ["sweet", "astringent"], "cold", "easy", _N, _D, _I, ["summer"]),
    _food("8", "Bottle Gourd", "Vegetables", 100, 15, 0.6, 3.4, 0.0, 0.5,
          ["sweet"], "cold", "easy", _N, _D, _N, ["summer", "monsoon"]),
    _food("9", "Banana", "Fruits", 120, 107, 1.3, 27, 0.4, 3.1,
          ["sweet", "astringent"], "cold", "moderate", _D, _N, _I, ["summer"]),
    _food("10", "Pomegranate", "Fruits", 100, 83, 1.7, 19, 1.2, 4.0,
          ["sweet", "sour", "astringent"], "cold", "easy", _N, _D, _D, ["autumn", "winter"]),
    _food("11", "Mango", "Fruits", 150, 99, 1.4, 25, 0.6, 2.6,
          ["sweet", "sour"], "hot", "moderate", _D, _I, _I, ["summer"]),
    _food("12", "Almonds", "Nuts & Seeds", 28, 164, 6.0, 6, 14.0, 3.5,
          ["sweet"], "hot", "difficult", _D, _I, _I, ["winter"]),
    _food("13", "Fresh Ginger", "Spices", 5, 4, 0.1, 0.9, 0.0, 0.1,
          ["pungent", "sweet"], "hot", "easy", _D, _I, _D, ["winter", "monsoon"]),
    _food("14", "Cumin Seeds", "Spices", 2, 8, 0.4, 0.9, 0.4, 0.2,
          ["pungent", "bitter"], "cold", "easy", _D, _D, _D),
    _food("15", "Buttermilk", "Dairy", 200, 80, 6.6, 9.6, 1.8, 0.0,
          ["sour", "astringent"], "hot", "easy", _D, _N, _D, ["summer"]),
    _food("16", "Turmeric", "Spices", 3, 9, 0.3, 2.0, 0.1, 0.7,
          ["bitter", "pungent", "astringent"], "hot", "easy", _N, _N, _D),
    _food("17", "Rolled Oats", "Grains", 40, 150, 5.3, 27, 2.6, 4.0,
          ["sweet"], "cold", "moderate", _D, _D, _I, ["winter"]),
    _food("18", "Chickpeas", "Legumes", 100, 164, 8.9, 27, 2.6, 7.6,
          ["sweet", "astringent"], "cold", "difficult", _I, _D, _D),
    _food("19", "Paneer", "Dairy", 100, 265, 18.3, 3.6, 20.8, 0.0,
          ["sweet"], "cold", "difficult", _D, _D, _I),
    _food("20", "Rock Salt", "Spices", 1, 0, 0.0, 0, 0.0, 0.0,
          ["salty"], "cold", "easy", _D, _N, _N),
    _food("21", "Sesame Oil", "Oils", 14, 120, 0.0, 0, 14.0, 0.0,
          ["sweet", "bitter"], "hot", "moderate", _D, _I, _N, ["winter"]),
    _food("22", "Honey", "Sweeteners", 21, 64, 0.1, 17, 0.0, 0.0,
          ["sweet", "astringent"], "hot", "easy", _N, _I, _D, ["spring"]),
    _food("23", "Quinoa", "Grains", 185, 222, 8.1, 39, 3.6, 5.2,
          ["sweet", "astringent"], "hot", "easy", _D, _N, _D),
    _food("24", "Chicken Breast", "Non-Vegetarian", 100, 165, 31.0, 0, 3.6, 0.0,
          ["sweet"], "hot", "moderate", _D, _I, _N, ["winter"]),
    _food("25", "Rohu Fish", "Non-Vegetarian", 100, 97, 16.6, 0, 1.4, 0.0,
          ["sweet", "salty"], "hot", "moderate", _D, _I, _I),
    _food("26", "Boiled Egg", "Non-Vegetarian", 50, 78, 6.3, 0.6, 5.3, 0.0,
          ["sweet"], "hot", "moderate", _D, _I, _I),
    _food("27", "Mutton Curry", "Non-Vegetarian", 200, 420, 32.0, 8, 28.0, 1.2,
          ["sweet", "salty"], "hot", "difficult", _D, _I, _I, ["winter"]),
]

_BY_ID = {f.id: f for f in FOOD_DATABASE}


def get_food(food_id: str) -> Food | None:
    return _BY_ID.get(str(food_id))


def search_foods(term: str, foods: list[Food] | None = None) -> list[Food]:
    """Foods whose name or category contains ``term`` (case-insensitive)."""
    foods = FOOD_DATABASE if foods is None else foods
    q = (term or "").strip().lower()
    if not q:
        return list(foods)
    return [f for f in foods if q in f.name.lower() or q in f.category.lower()]


def foods_by_id(foods: list[Food] | None = None) -> dict[str, Food]:
    if foods is None:
        return dict(_BY_ID)
    return {f.id: f for f in foods}
