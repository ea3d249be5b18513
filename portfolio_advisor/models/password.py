"""
Password analyzer input and output models.

``IdentityHints`` carries the optional personal fragments (names, email)
that a password should not contain.  ``PasswordAssessment`` is the result
handed back to the caller; its ``feedback`` and ``is_strong`` fields are
fixed functions of ``score`` and the validator refuses any other pairing.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

MIN_SCORE = 0
MAX_SCORE = 5
STRONG_SCORE = 4

FEEDBACK_LABELS: tuple[str, ...] = (
    "Very Weak",    # 0
    "Weak",         # 1
    "Fair",         # 2
    "Good",         # 3
    "Strong",       # 4
    "Very Strong",  # 5
)


class IdentityHints(BaseModel):
    """Personal information used only for leakage detection.

    ``email_local_part`` wins over ``email`` when both are given; otherwise
    the local part is taken from ``email``.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    email_local_part: Optional[str] = None

    def fragments(self) -> list[str]:
        """Lower-cased, non-empty fragments to search for."""
        local = self.email_local_part
        if local is None and self.email:
            local = self.email.split("@", 1)[0]
        candidates = (self.first_name, self.last_name, local)
        return [c.strip().lower() for c in candidates if c and c.strip()]


class PasswordAssessment(BaseModel):
    """Strength verdict for one candidate password.

    Attributes:
        score: Integer 0–5.
        feedback: Label from ``FEEDBACK_LABELS`` for ``score``.
        suggestions: Ordered remediation hints (advisory only).
        is_strong: ``score >= 4``.
    """

    model_config = ConfigDict(frozen=True)

    score: int
    feedback: str
    suggestions: list[str] = []
    is_strong: bool

    @model_validator(mode="after")
    def validate_verdict_consistency(self) -> "PasswordAssessment":
        if not MIN_SCORE <= self.score <= MAX_SCORE:
            raise ValueError(f"score must be in [{MIN_SCORE}, {MAX_SCORE}], got {self.score}.")
        if self.feedback != FEEDBACK_LABELS[self.score]:
            raise ValueError(
                f"feedback '{self.feedback}' does not match score {self.score} "
                f"('{FEEDBACK_LABELS[self.score]}')."
            )
        if self.is_strong != (self.score >= STRONG_SCORE):
            raise ValueError(f"is_strong must be {self.score >= STRONG_SCORE} for score {self.score}.")
        return self
