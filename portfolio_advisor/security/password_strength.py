"""
Password strength analysis: feature extraction, scoring, feedback and
remediation hints for a candidate password.

Features
--------
length               : at least 8 characters
has_uppercase        : [A-Z]
has_lowercase        : [a-z]
has_numbers          : [0-9]
has_symbols          : anything that is not an ASCII letter or digit
has_common_patterns  : 123, abc, qwe, asd, zxc, password, admin, login
has_repeated_chars   : the same character three or more times in a row
has_sequential_chars : an ascending three-character run (012…890, abc…xyz)
has_personal_info    : a supplied name / email local part appears in it

Pattern checks are case-insensitive.  ``123`` and ``abc`` are both common
patterns and sequential runs.  Both flags are raised (and both hints given),
but the sequential penalty is only taken for a run that is not also a
common pattern, so ``password123`` loses two points, not three.

Score (clamped to 0–5)
----------------------
    +1 per composition feature (length, upper, lower, digit, symbol)
    +1 at 12+ characters, +1 more at 16+ characters
    −2 common pattern, −1 repeated run, −1 sequential run, −2 personal info

Feedback: 0 Very Weak, 1 Weak, 2 Fair, 3 Good, 4 Strong, 5 Very Strong.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from portfolio_advisor.models.password import (
    FEEDBACK_LABELS,
    MAX_SCORE,
    MIN_SCORE,
    STRONG_SCORE,
    IdentityHints,
    PasswordAssessment,
)
from portfolio_advisor.models.product import UserProfile

MIN_LENGTH = 8
LONG_LENGTH = 12
VERY_LONG_LENGTH = 16

COMMON_PATTERN_PENALTY = 2
REPEATED_CHARS_PENALTY = 1
SEQUENTIAL_CHARS_PENALTY = 1
PERSONAL_INFO_PENALTY = 2

COMMON_PATTERNS: tuple[str, ...] = (
    "123", "abc", "qwe", "asd", "zxc", "password", "admin", "login",
)

_DIGITS = "0123456789"
_LETTERS = "abcdefghijklmnopqrstuvwxyz"

SEQUENTIAL_RUNS: tuple[str, ...] = tuple(
    [_DIGITS[i:i + 3] for i in range(len(_DIGITS) - 2)]
    + ["890"]
    + [_LETTERS[i:i + 3] for i in range(len(_LETTERS) - 2)]
)

_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SYMBOL_RE = re.compile(r"[^A-Za-z0-9]")
_REPEAT_RE = re.compile(r"(.)\1{2,}", re.DOTALL)
_COMMON_RE = re.compile("|".join(COMMON_PATTERNS), re.IGNORECASE)
_SEQUENTIAL_RE = re.compile("|".join(SEQUENTIAL_RUNS), re.IGNORECASE)
# Runs not already covered by the common-pattern penalty.
_UNCOMMON_SEQUENTIAL_RE = re.compile(
    "|".join(run for run in SEQUENTIAL_RUNS if run not in COMMON_PATTERNS),
    re.IGNORECASE,
)

IdentityLike = Union[IdentityHints, UserProfile, Mapping[str, Any]]


@dataclass(frozen=True)
class PasswordAnalysis:
    """Boolean features extracted from one password, plus its length.

    ``uncommon_sequence`` is set when a sequential run other than ``123`` or
    ``abc`` is present; only then does the sequential penalty apply.
    """

    length:               bool
    has_uppercase:        bool
    has_lowercase:        bool
    has_numbers:          bool
    has_symbols:          bool
    has_common_patterns:  bool
    has_repeated_chars:   bool
    has_sequential_chars: bool
    has_personal_info:    bool
    char_count:           int
    uncommon_sequence:    bool


def analyze_password(password: str, identity: Optional[IdentityLike] = None) -> PasswordAnalysis:
    """Extract every strength feature from ``password``."""
    fragments = _identity_fragments(identity)
    lowered = password.lower()

    return PasswordAnalysis(
        length=len(password) >= MIN_LENGTH,
        has_uppercase=bool(_UPPER_RE.search(password)),
        has_lowercase=bool(_LOWER_RE.search(password)),
        has_numbers=bool(_DIGIT_RE.search(password)),
        has_symbols=bool(_SYMBOL_RE.search(password)),
        has_common_patterns=bool(_COMMON_RE.search(password)),
        has_repeated_chars=bool(_REPEAT_RE.search(password)),
        has_sequential_chars=bool(_SEQUENTIAL_RE.search(password)),
        has_personal_info=any(fragment in lowered for fragment in fragments),
        char_count=len(password),
        uncommon_sequence=bool(_UNCOMMON_SEQUENTIAL_RE.search(password)),
    )


def calculate_score(analysis: PasswordAnalysis) -> int:
    score = sum((
        analysis.length,
        analysis.has_uppercase,
        analysis.has_lowercase,
        analysis.has_numbers,
        analysis.has_symbols,
    ))

    if analysis.length:
        if analysis.char_count >= LONG_LENGTH:
            score += 1
        if analysis.char_count >= VERY_LONG_LENGTH:
            score += 1

    if analysis.has_common_patterns:
        score -= COMMON_PATTERN_PENALTY
    if analysis.has_repeated_chars:
        score -= REPEATED_CHARS_PENALTY
    if analysis.has_sequential_chars and analysis.uncommon_sequence:
        score -= SEQUENTIAL_CHARS_PENALTY
    if analysis.has_personal_info:
        score -= PERSONAL_INFO_PENALTY

    return max(MIN_SCORE, min(MAX_SCORE, score))


def feedback_for_score(score: int) -> str:
    """Map a 0–5 score onto its feedback label (out-of-range values are clamped)."""
    return FEEDBACK_LABELS[max(MIN_SCORE, min(MAX_SCORE, score))]


def build_suggestions(analysis: PasswordAnalysis, score: int) -> list[str]:
    """Ordered remediation hints; ends with a confirmation when the password is strong."""
    suggestions: list[str] = []

    if not analysis.length:
        suggestions.append(f"Use at least {MIN_LENGTH} characters")
    elif score < STRONG_SCORE:
        suggestions.append(f"Consider using {LONG_LENGTH}+ characters for better security")

    if not analysis.has_uppercase:
        suggestions.append("Add uppercase letters (A-Z)")
    if not analysis.has_lowercase:
        suggestions.append("Add lowercase letters (a-z)")
    if not analysis.has_numbers:
        suggestions.append("Include numbers (0-9)")
    if not analysis.has_symbols:
        suggestions.append("Add special characters (!@#$%^&*)")

    if analysis.has_common_patterns:
        suggestions.append("Avoid common patterns like '123', 'abc', or 'password'")
    if analysis.has_repeated_chars:
        suggestions.append("Avoid repeating characters (e.g., 'aaa', '111')")
    if analysis.has_sequential_chars:
        suggestions.append("Avoid sequential characters (e.g., 'bcd', '456')")
    if analysis.has_personal_info:
        suggestions.append("Don't use personal information like your name or email")

    if score >= STRONG_SCORE:
        suggestions.append("Great! Your password is strong and secure")

    return suggestions


def analyze_strength(
    password: str,
    identity: Optional[IdentityLike] = None,
) -> PasswordAssessment:
    """Score ``password`` and explain how to improve it.

    Args:
        password: Candidate password.  Never logged or stored.
        identity: Optional names / email to check for leakage.  Accepts an
            ``IdentityHints``, a ``UserProfile`` or a plain mapping.

    Returns:
        PasswordAssessment with score, feedback, suggestions and is_strong.
    """
    analysis = analyze_password(password, identity)
    score = calculate_score(analysis)
    return PasswordAssessment(
        score=score,
        feedback=feedback_for_score(score),
        suggestions=build_suggestions(analysis, score),
        is_strong=score >= STRONG_SCORE,
    )


# ── Helpers ───────────────────────────────────────────────────────────────────

def _identity_fragments(identity: Optional[IdentityLike]) -> list[str]:
    if identity is None:
        return []
    if isinstance(identity, UserProfile):
        identity = IdentityHints(
            first_name=identity.first_name,
            last_name=identity.last_name,
            email=identity.email,
        )
    elif not isinstance(identity, IdentityHints):
        identity = IdentityHints.model_validate(identity)
    return identity.fragments()
