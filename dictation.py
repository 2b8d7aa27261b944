"""Word-level dictation comparison.

The learner's transcription is tokenized, aligned against the reference
sentence with a longest-common-subsequence table, and the table is walked
back into a diff of correct / wrong / missing / extra words.
"""
import logging
import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from schemas import (
    Correct,
    DictationOptions,
    DictationResult,
    DictationSummary,
    DiffSegment,
    Extra,
    Missing,
    Wrong,
)

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
# display form keeps apostrophes (contractions), matching form drops them too
_DISPLAY_PUNCTUATION = re.compile(r"[^\w\s']")
_MATCH_PUNCTUATION = re.compile(r"[^\w\s]")

MATCH = "match"
INSERT = "insert"   # reference word the learner did not type
DELETE = "delete"   # learner word that is not in the reference

Operation = Tuple[str, Optional[int], Optional[int]]


@dataclass(frozen=True)
class Token:
    """A word as shown to the learner (text) and as compared (key)."""
    text: str
    key: str


def tokenize(text: str, preserve_punctuation: bool = False) -> List[str]:
    """Split text into words, collapsing whitespace.

    Unless preserve_punctuation is set, every character that is not a word
    character, whitespace or an apostrophe is removed first.
    """
    if not text or not text.strip():
        return []

    normalized = _WHITESPACE.sub(" ", text.strip())
    if not preserve_punctuation:
        normalized = _DISPLAY_PUNCTUATION.sub("", normalized)

    return [w for w in normalized.split(" ") if w]


def comparison_key(word: str, options: DictationOptions) -> str:
    key = word if options.strict_punctuation else _MATCH_PUNCTUATION.sub("", word)
    return key if options.strict_case else key.lower()


def make_tokens(text: str, options: DictationOptions) -> List[Token]:
    return [
        Token(text=word, key=comparison_key(word, options))
        for word in tokenize(text, options.strict_punctuation)
    ]


def compute_lcs(a: Sequence[str], b: Sequence[str]) -> List[List[int]]:
    """LCS length table; dp[i][j] covers a[:i] and b[:j]."""
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])
    return dp


def backtrack(
    user_tokens: Sequence[str], expected_tokens: Sequence[str], dp: List[List[int]]
) -> List[Operation]:
    """Walk the LCS table from the bottom-right corner back to the origin.

    Returns (op, user_index, expected_index) tuples in reading order. On ties
    an INSERT is taken before a DELETE, so a differing word pair comes out as
    DELETE followed by INSERT and is later reported as a single wrong word.
    """
    ops: List[Operation] = []
    i, j = len(user_tokens), len(expected_tokens)

    while i > 0 or j > 0:
        if i > 0 and j > 0 and user_tokens[i - 1] == expected_tokens[j - 1]:
            ops.append((MATCH, i - 1, j - 1))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            ops.append((INSERT, None, j - 1))
            j -= 1
        else:
            ops.append((DELETE, i - 1, None))
            i -= 1

    ops.reverse()
    return ops


def build_diff(
    user_tokens: Sequence[str],
    expected_tokens: Sequence[str],
    original_user_tokens: Sequence[str],
    original_expected_tokens: Sequence[str],
    dp: List[List[int]],
) -> List[DiffSegment]:
    """Turn the LCS table into diff segments carrying the display text.

    user_tokens / expected_tokens are the comparison keys the table was built
    from; the original_* sequences hold the words as typed.
    """
    ops = backtrack(user_tokens, expected_tokens, dp)
    diff: List[DiffSegment] = []

    k = 0
    while k < len(ops):
        op, ui, ei = ops[k]
        if op == MATCH:
            diff.append(Correct(text=original_user_tokens[ui]))
            k += 1
        elif op == DELETE:
            if k + 1 < len(ops) and ops[k + 1][0] == INSERT:
                diff.append(
                    Wrong(
                        text=original_user_tokens[ui],
                        expected=original_expected_tokens[ops[k + 1][2]],
                    )
                )
                k += 2
            else:
                diff.append(Extra(text=original_user_tokens[ui]))
                k += 1
        else:
            diff.append(Missing(text=original_expected_tokens[ei]))
            k += 1

    return diff


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def compare_dictation(
    user_input: str, expected: str, options: Optional[DictationOptions] = None
) -> DictationResult:
    """Compare a learner's transcription with the reference sentence.

    Accuracy is the share of reference words typed correctly, so extra words
    only matter through the alignment they cause. Never raises for string input.
    """
    options = options or DictationOptions()
    user = make_tokens(user_input, options)
    reference = make_tokens(expected, options)

    if not reference:
        return DictationResult(is_correct=True, accuracy=100, diff=[])

    if not user:
        return DictationResult(
            is_correct=False,
            accuracy=0,
            diff=[Missing(text=t.text) for t in reference],
        )

    user_keys = [t.key for t in user]
    expected_keys = [t.key for t in reference]
    dp = compute_lcs(user_keys, expected_keys)
    diff = build_diff(
        user_keys,
        expected_keys,
        [t.text for t in user],
        [t.text for t in reference],
        dp,
    )

    correct = sum(1 for seg in diff if isinstance(seg, Correct))
    accuracy = _round_half_up(100 * correct / len(reference), 2)
    is_correct = all(isinstance(seg, Correct) for seg in diff)

    logger.debug(
        "Compared %d typed / %d expected words: %d correct, accuracy %.2f",
        len(user), len(reference), correct, accuracy,
    )
    return DictationResult(is_correct=is_correct, accuracy=accuracy, diff=diff)


def make_hint(expected: str, max_words: int = 2) -> str:
    words = expected.split()
    if not words:
        return ""
    return " ".join(words[:max_words]) + "..."


def summarize_session(results: Iterable[DictationResult]) -> DictationSummary:
    """Totals for a practice session; accuracy is the rounded mean."""
    results = list(results)
    total = len(results)
    correct = sum(1 for r in results if r.is_correct)
    accuracy = int(_round_half_up(sum(r.accuracy for r in results) / total)) if total else 0
    return DictationSummary(total_items=total, correct_count=correct, total_accuracy=accuracy)
