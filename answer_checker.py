"""Similarity check for spoken / typed answers in Q&A practice.

Unlike the dictation diff this is a single character-level score: the
answer passes when its normalized Levenshtein similarity reaches a threshold.
"""
import re

from rapidfuzz.distance import Levenshtein

from schemas import AnswerCheckResult

DEFAULT_THRESHOLD = 0.8


def normalize_text(text: str) -> str:
    text = re.sub(r"[^\w\s]", "", text.lower())
    return re.sub(r"\s+", " ", text).strip()


def calculate_similarity(a: str, b: str) -> float:
    """1 - distance / longest length, on normalized text. Range 0..1."""
    a, b = normalize_text(a), normalize_text(b)
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    dist = Levenshtein.distance(a, b)
    return 1.0 - dist / max(len(a), len(b))


def _feedback(similarity: float, threshold: float) -> str:
    if similarity == 1:
        return "Correct! Perfect answer!"
    if similarity >= 0.95:
        return "Correct! Almost perfect!"
    if similarity >= threshold:
        return "Correct! Good job, but watch for small errors."
    if similarity >= 0.6:
        return "Close! Try again. Check your pronunciation and word order."
    if similarity >= 0.3:
        return "Not quite. Listen to the question again and try once more."
    return "Try again. Listen carefully to the correct answer."


def check_answer(user_answer: str, correct_answer: str, threshold: float = DEFAULT_THRESHOLD) -> AnswerCheckResult:
    if not 0 <= threshold <= 1:
        raise ValueError(f"threshold must be between 0 and 1, got {threshold}")

    similarity = calculate_similarity(user_answer, correct_answer)
    return AnswerCheckResult(
        is_correct=similarity >= threshold,
        similarity=similarity,
        feedback=_feedback(similarity, threshold),
    )
