"""
Tests for the spoken-answer similarity checker.
"""

import pytest

from answer_checker import calculate_similarity, check_answer, normalize_text


def test_normalize_text():
    assert normalize_text("Hello World") == "hello world"
    assert normalize_text("Hello, World!") == "hello world"
    assert normalize_text("It's a test.") == "its a test"
    assert normalize_text("  hello    world  ") == "hello world"
    assert normalize_text("") == ""


def test_similarity_identical():
    assert calculate_similarity("hello", "hello") == 1
    assert calculate_similarity("hello", "HELLO") == 1


def test_similarity_completely_different():
    assert calculate_similarity("abc", "xyz") == 0


def test_similarity_partial():
    similarity = calculate_similarity("hello", "hallo")

    assert similarity == pytest.approx(0.8)


def test_similarity_empty_strings():
    assert calculate_similarity("", "") == 1
    assert calculate_similarity("hello", "") == 0
    assert calculate_similarity("", "hello") == 0
    assert calculate_similarity("?!", "") == 1


def test_check_answer_exact():
    result = check_answer("Yes, I am a student.", "yes I am a student")

    assert result.is_correct
    assert result.similarity == 1
    assert result.feedback == "Correct! Perfect answer!"


def test_check_answer_contractions():
    result = check_answer("I'm happy", "Im happy")

    assert result.is_correct


def test_check_answer_almost_perfect():
    result = check_answer("the quick brown fox jump", "the quick brown fox jumps")

    assert result.is_correct
    assert result.similarity == pytest.approx(0.96)
    assert result.feedback == "Correct! Almost perfect!"


def test_check_answer_above_threshold():
    result = check_answer("The cat is back", "The cat is black")

    assert result.is_correct
    assert result.similarity >= 0.8
    assert result.feedback == "Correct! Good job, but watch for small errors."


def test_check_answer_custom_threshold():
    result = check_answer("hallo", "hello", threshold=0.9)

    assert not result.is_correct
    assert result.feedback.startswith("Close!")


def test_check_answer_not_quite():
    result = check_answer("abxy", "abcd")

    assert not result.is_correct
    assert result.similarity == pytest.approx(0.5)
    assert result.feedback.startswith("Not quite.")


def test_check_answer_low_similarity():
    result = check_answer("abc", "xyz")

    assert not result.is_correct
    assert result.feedback == "Try again. Listen carefully to the correct answer."


@pytest.mark.parametrize("threshold", [-0.1, 1.5])
def test_check_answer_rejects_bad_threshold(threshold):
    with pytest.raises(ValueError):
        check_answer("a", "a", threshold=threshold)
