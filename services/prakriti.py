"""Prakriti (constitution) assessment.

Ten weighted questions; each option leans towards one dosha. The respondent's
weights are summed per dosha, turned into percentage shares and classified
into a single, dual or tridosha constitution.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from errors import IncompleteAnswerSet, InvalidAnswer
from models import Constitution, ConstitutionResult, Dosha, Question, QuestionCategory, QuestionOption
from services.numbers import round_half_up

# A single dosha wins outright above this share.
SINGLE_DOSHA_THRESHOLD = 50
# Below this gap between the top two shares the constitution is dual.
DUAL_DOSHA_GAP = 15


def _q(qid: str, category: QuestionCategory, text: str, weight: int, vata: str, pitta: str, kapha: str) -> Question:
    return Question(
        id=qid,
        category=category,
        question=text,
        options=[
            QuestionOption(text=vata, dosha=Dosha.vata, weight=weight),
            QuestionOption(text=pitta, dosha=Dosha.pitta, weight=weight),
            QuestionOption(text=kapha, dosha=Dosha.kapha, weight=weight),
        ],
    )


QUESTIONS: tuple[Question, ...] = (
    _q("1", QuestionCategory.physical, "What is your natural body build?", 3,
       "Thin, light frame, prominent joints",
       "Medium build, well-proportioned, muscular",
       "Large frame, heavy build, broad shoulders"),
    _q("2", QuestionCategory.physical, "How is your skin texture?", 2,
       "Dry, rough, thin, cool to touch",
       "Warm, oily, soft, with freckles/moles",
       "Thick, moist, cool, smooth"),
    _q("3", QuestionCategory.physical, "What is your hair like?", 2,
       "Dry, brittle, thin, coarse",
       "Fine, soft, oily, early graying/balding",
       "Thick, lustrous, wavy, oily"),
    _q("4", QuestionCategory.physical, "How is your appetite?", 2,
       "Variable, sometimes forget to eat",
       "Strong, regular, get irritable when hungry",
       "Steady, can skip meals easily"),
    _q("5", QuestionCategory.physical, "How is your digestion?", 3,
       "Irregular, gas, bloating, constipation",
       "Strong, quick, heartburn, loose stools",
       "Slow, heavy feeling, mucus formation"),
    _q("6", QuestionCategory.mental, "How is your mental activity?", 3,
       "Quick, restless, many ideas",
       "Sharp, focused, goal-oriented",
       "Calm, steady, methodical"),
    _q("7", QuestionCategory.mental, "How do you handle stress?", 2,
       "Become anxious, worried, overwhelmed",
       "Become irritable, angry, critical",
       "Remain calm, withdraw, become stubborn"),
    _q("8", QuestionCategory.behavioral, "What is your sleep pattern?", 2,
       "Light sleeper, difficulty falling asleep",
       "Moderate sleep, wake up refreshed",
       "Deep sleeper, difficulty waking up"),
    _q("9", QuestionCategory.behavioral, "How do you prefer to exercise?", 2,
       "Light, gentle, yoga, walking",
       "Moderate to intense, competitive sports",
       "Slow, steady, swimming, weight training"),
    _q("10", QuestionCategory.behavioral, "What is your speaking style?", 2,
       "Fast, talkative, enthusiastic",
       "Clear, precise, articulate",
       "Slow, melodious, thoughtful"),
)


# Keyed by (top, runner-up); any other close pairing is tridosha.
DUAL_CONSTITUTIONS: dict[tuple[Dosha, Dosha], Constitution] = {
    (Dosha.vata, Dosha.pitta): Constitution.vata_pitta,
    (Dosha.pitta, Dosha.kapha): Constitution.pitta_kapha,
    (Dosha.vata, Dosha.kapha): Constitution.vata_kapha,
}

_MIXED_PROFILE = (
    "You have a balanced or dual constitution, which requires a more individualized approach.",
    [
        "Follow seasonal eating patterns",
        "Listen to your body and adjust diet accordingly",
        "Maintain balance in all aspects of life",
        "Consult with an Ayurvedic practitioner for personalized guidance",
    ],
)

PROFILES: dict[Constitution, tuple[str, list[str]]] = {
    Constitution.vata: (
        "You have a Vata-dominant constitution. Vata governs movement, circulation, and the nervous system.",
        [
            "Eat warm, cooked, nourishing foods",
            "Maintain regular routines and meal times",
            "Practice calming activities like yoga and meditation",
            "Get adequate rest and avoid overstimulation",
            "Use warming spices like ginger, cinnamon, and cardamom",
        ],
    ),
    Constitution.pitta: (
        "You have a Pitta-dominant constitution. Pitta governs digestion, metabolism, and transformation.",
        [
            "Eat cooling, sweet, and bitter foods",
            "Avoid excessive heat and spicy foods",
            "Practice moderation in all activities",
            "Stay cool and avoid direct sunlight during peak hours",
            "Use cooling spices like coriander, fennel, and mint",
        ],
    ),
    Constitution.kapha: (
        "You have a Kapha-dominant constitution. Kapha governs structure, immunity, and lubrication.",
        [
            "Eat light, warm, and spicy foods",
            "Engage in regular vigorous exercise",
            "Avoid heavy, oily, and cold foods",
            "Maintain an active lifestyle",
            "Use warming spices like black pepper, turmeric, and ginger",
        ],
    ),
    Constitution.vata_pitta: _MIXED_PROFILE,
    Constitution.pitta_kapha: _MIXED_PROFILE,
    Constitution.vata_kapha: _MIXED_PROFILE,
    Constitution.tridosha: _MIXED_PROFILE,
}


def _selected_options(questions: Sequence[Question], answers: Mapping[str, int]) -> list[QuestionOption]:
    known = {q.id for q in questions}
    unknown = [qid for qid in answers if qid not in known]
    if unknown:
        raise InvalidAnswer(f"Unknown question id(s): {', '.join(unknown)}", fields=unknown)

    missing = [q.id for q in questions if q.id not in answers]
    if missing:
        raise IncompleteAnswerSet(missing)

    selected = []
    for q in questions:
        idx = answers[q.id]
        if not 0 <= idx < len(q.options):
            raise InvalidAnswer(
                f"Answer {idx} for question {q.id} is out of range (0-{len(q.options) - 1})",
                fields=[q.id],
            )
        selected.append(q.options[idx])
    return selected


def dosha_totals(questions: Sequence[Question], answers: Mapping[str, int]) -> dict[Dosha, int]:
    """Sum the chosen options' weights per dosha."""
    totals = {d: 0 for d in Dosha}
    for option in _selected_options(questions, answers):
        totals[option.dosha] += option.weight
    return totals


def classify(shares: Mapping[Dosha, float]) -> Constitution:
    """
    Classify percentage shares into a constitution.

    Args:
        shares: Percentage share per dosha (summing to 100)

    Returns:
        Single dosha when the top share is above 50 or clearly ahead of the
        runner-up, otherwise the dual constitution of the (top, runner-up)
        pair, or tridosha when that ordering has no dual label.
    """
    # sorted() is stable, so ties keep vata, pitta, kapha order
    ranked = sorted(Dosha, key=lambda d: shares[d], reverse=True)
    top, second = ranked[0], ranked[1]

    if shares[top] > SINGLE_DOSHA_THRESHOLD:
        return Constitution(top.value)
    if shares[top] - shares[second] < DUAL_DOSHA_GAP:
        return DUAL_CONSTITUTIONS.get((top, second), Constitution.tridosha)
    return Constitution(top.value)


def score_constitution(
    questions: Sequence[Question],
    answers: Mapping[str, int],
) -> ConstitutionResult:
    """
    Score a completed Prakriti questionnaire.

    Args:
        questions: Questionnaire, usually QUESTIONS
        answers: Question id -> chosen option index, one per question

    Returns:
        ConstitutionResult with rounded percentages and the canned profile

    Raises:
        IncompleteAnswerSet: a question has no answer
        InvalidAnswer: unknown question id or option index out of range
    """
    totals = dosha_totals(questions, answers)
    grand_total = sum(totals.values())
    if grand_total <= 0:
        raise InvalidAnswer("Answers carry no weight")

    shares = {d: 100 * totals[d] / grand_total for d in Dosha}
    dominant = classify(shares)
    description, recommendations = PROFILES[dominant]

    return ConstitutionResult(
        vata=round_half_up(shares[Dosha.vata]),
        pitta=round_half_up(shares[Dosha.pitta]),
        kapha=round_half_up(shares[Dosha.kapha]),
        dominant=dominant,
        description=description,
        recommendations=list(recommendations),
    )
