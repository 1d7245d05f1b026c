import pytest

from saarthi.services.quiz_service import EmptySubmissionError, percentage, score_answers


def test_three_of_five():
    result = score_answers([("a", "a"), ("b", "b"), ("c", "c"), ("x", "d"), ("y", "e")])

    assert result.correct_answers == 3
    assert result.total_questions == 5
    assert result.score == 60


def test_one_of_three_rounds_down():
    result = score_answers([("a", "a"), ("x", "b"), ("y", "c")])
    assert result.score == 33


def test_two_of_three_rounds_up():
    assert percentage(2, 3) == 67


def test_exact_half_rounds_up():
    # 1/8 = 12.5%
    assert percentage(1, 8) == 13
    # 5/8 = 62.5%
    assert percentage(5, 8) == 63


def test_comparison_is_exact():
    result = score_answers([("Paris", "paris"), (" 4", "4"), ("B", "B")])

    assert [a.is_correct for a in result.user_answers] == [False, False, True]
    assert result.correct_answers == 1


def test_questions_are_numbered_from_one():
    result = score_answers([("a", "a"), ("b", "c")])

    assert [a.question_number for a in result.user_answers] == [1, 2]
    assert result.user_answers[1].as_dict() == {
        "question_number": 2,
        "user_answer": "b",
        "correct_answer": "c",
        "is_correct": False,
    }


def test_score_matches_correct_count():
    pairs = [("a", "a")] * 7 + [("a", "b")] * 4
    result = score_answers(pairs)

    assert result.correct_answers == sum(a.is_correct for a in result.user_answers)
    assert result.score == percentage(7, 11)


def test_empty_submission_is_rejected():
    with pytest.raises(EmptySubmissionError):
        score_answers([])


def test_skipped_question_is_wrong():
    result = score_answers([("a", "a"), (None, "b")])

    assert result.correct_answers == 1
    assert result.score == 50
    assert result.user_answers[1].user_answer is None
    assert result.user_answers[1].is_correct is False
