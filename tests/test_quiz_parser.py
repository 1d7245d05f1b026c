import pytest

from saarthi.ai.parsers import QuizParseError, parse_quiz_json


def test_strict_json_is_returned_as_is():
    assert parse_quiz_json('{"questions": [{"question": "2+2?", "answer": "4"}]}') == {
        "questions": [{"question": "2+2?", "answer": "4"}]
    }


def test_strict_parse_accepts_non_object_json():
    assert parse_quiz_json("[1, 2, 3]") == [1, 2, 3]


def test_json_wrapped_in_prose_is_salvaged():
    text = 'Here is your quiz:\n{"questions": [{"question": "Capital of India?"}]}\nGood luck!'
    assert parse_quiz_json(text) == {"questions": [{"question": "Capital of India?"}]}


def test_json_inside_markdown_fence_is_salvaged():
    text = '```json\n{"questions": []}\n```'
    assert parse_quiz_json(text) == {"questions": []}


def test_text_without_braces_fails():
    with pytest.raises(QuizParseError):
        parse_quiz_json("Sorry, I cannot make a quiz about that.")


def test_unparseable_span_fails():
    with pytest.raises(QuizParseError):
        parse_quiz_json("Quiz: {questions: [oops]}")


def test_greedy_span_swallows_braces_in_trailing_prose():
    text = 'Quiz: {"questions": []} and a note {see above}'
    with pytest.raises(QuizParseError):
        parse_quiz_json(text)


def test_parse_error_is_a_value_error():
    assert issubclass(QuizParseError, ValueError)
