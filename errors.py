"""Domain errors.

Every error carries a short machine ``code``; main.py turns them into
``{"error": code, "detail": message}`` JSON responses.
"""

from __future__ import annotations


class AyurDietError(Exception):
    code = "invalid_request"

    def __init__(self, message: str, *, fields: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])


class IncompleteAnswerSet(AyurDietError):
    """Constitution scoring was requested before every question had an answer."""

    code = "incomplete_answers"

    def __init__(self, missing: list[str]):
        super().__init__(
            f"{len(missing)} question(s) unanswered: {', '.join(missing)}",
            fields=missing,
        )
        self.missing = list(missing)


class InvalidAnswer(AyurDietError):
    code = "invalid_answer"


class ExternalServiceFailure(AyurDietError):
    """The LLM collaborator failed, timed out, or is not configured."""

    code = "external_service"


class RecipeValidationError(AyurDietError):
    code = "invalid_recipe"


class SymptomValidationError(AyurDietError):
    code = "invalid_symptom_entry"


class RegistrationError(AyurDietError):
    code = "invalid_registration"
