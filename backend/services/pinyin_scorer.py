# Comment: Pinyin transcript scoring.
#          Handles: normalise -> edit distance -> tone digits -> weighted blend -> feedback tier.

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, List

from rapidfuzz.distance import Levenshtein


logger = logging.getLogger(__name__)

NON_WORD_RE = re.compile(r"[^\w\s]")
WHITESPACE_RE = re.compile(r"\s+")
TONE_DIGIT_RE = re.compile(r"[1-5]")

PRONUNCIATION_WEIGHT = 0.7
TONE_WEIGHT = 0.3
TONE_PERFECT = 100
TONE_PARTIAL_FLOOR = 40
TONE_DEFAULT = 60

GREAT_THRESHOLD = 90
NICE_THRESHOLD = 75

FEEDBACK_GREAT = "Great pronunciation!"
FEEDBACK_NICE = "Nice work. Focus on smoother tone transitions."
FEEDBACK_PRACTICE = "Keep practicing the tones and syllable order."

FIELD_MESSAGES = {
    "expected": "Expected pronunciation is required",
    "transcript": "Transcript is required",
}


@dataclass(frozen=True)
class FieldError:
    field: str
    reason: str
    message: str

    def to_response(self) -> dict:
        return {
            "type": "field",
            "location": "body",
            "path": self.field,
            "reason": self.reason,
            "msg": self.message,
        }


class ScoreValidationError(ValueError):
    """Raised when the expected text or the transcript cannot be scored."""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        fields = ", ".join(f"{err.field} ({err.reason})" for err in self.errors)
        super().__init__(f"Validation failed: {fields}")


@dataclass(frozen=True)
class ScoreResult:
    overall: int
    pronunciation: int
    tone: int
    feedback: str

    def to_response(self) -> dict:
        return {
            "success": True,
            "scores": {
                "overall": self.overall,
                "pronunciation": self.pronunciation,
                "tone": self.tone,
            },
            "feedback": self.feedback,
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_pinyin(value: str | None) -> str:
    """Lowercase, drop punctuation and collapse whitespace.

    Unicode word characters are kept, so tone-marked vowels such as 'ǎ'
    and Han characters survive; standalone combining marks do not.
    """
    if not value:
        return ""
    lowered = value.lower()
    stripped = NON_WORD_RE.sub("", lowered)
    return WHITESPACE_RE.sub(" ", stripped).strip()


def extract_tones(value: str | None) -> str:
    if not value:
        return ""
    return "".join(TONE_DIGIT_RE.findall(value))


def levenshtein(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions and substitutions."""
    return Levenshtein.distance(a, b, weights=(1, 1, 1))


def similarity_score(expected: str, transcript: str) -> int:
    max_len = max(len(expected), len(transcript)) or 1
    distance = levenshtein(expected, transcript)
    # Levenshtein never exceeds max_len, the floor only guards the formula.
    return max(0, _round_half_up((1 - distance / max_len) * 100))


def tone_score(expected_tones: str, transcript_tones: str) -> int:
    if not expected_tones or not transcript_tones:
        return TONE_DEFAULT
    if expected_tones == transcript_tones:
        return TONE_PERFECT

    max_len = max(len(expected_tones), len(transcript_tones))
    distance = levenshtein(expected_tones, transcript_tones)
    return max(TONE_PARTIAL_FLOOR, _round_half_up((1 - distance / max_len) * 100))


def blend_scores(pronunciation: int, tone: int) -> int:
    return _round_half_up(pronunciation * PRONUNCIATION_WEIGHT + tone * TONE_WEIGHT)


def feedback_for(overall: int) -> str:
    if overall >= GREAT_THRESHOLD:
        return FEEDBACK_GREAT
    if overall >= NICE_THRESHOLD:
        return FEEDBACK_NICE
    return FEEDBACK_PRACTICE


def validate_inputs(expected: Any, transcript: Any) -> List[FieldError]:
    errors: List[FieldError] = []
    for field, value in (("expected", expected), ("transcript", transcript)):
        if value is None:
            reason = "missing"
        elif not isinstance(value, str):
            reason = "not_a_string"
        elif value == "":
            reason = "empty"
        else:
            continue
        errors.append(FieldError(field=field, reason=reason, message=FIELD_MESSAGES[field]))
    return errors


def score_pronunciation(expected: Any, transcript: Any) -> ScoreResult:
    errors = validate_inputs(expected, transcript)
    if errors:
        logger.info("Rejected score request: %s", ", ".join(err.field for err in errors))
        raise ScoreValidationError(errors)

    pronunciation = similarity_score(
        normalize_pinyin(expected),
        normalize_pinyin(transcript),
    )

    # Tones come from the raw inputs so normalisation rules stay independent.
    tone = tone_score(extract_tones(expected), extract_tones(transcript))

    overall = blend_scores(pronunciation, tone)
    result = ScoreResult(
        overall=overall,
        pronunciation=pronunciation,
        tone=tone,
        feedback=feedback_for(overall),
    )
    logger.debug(
        "Scored transcript: overall=%s pronunciation=%s tone=%s",
        result.overall,
        result.pronunciation,
        result.tone,
    )
    return result
