from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from saarthi.ai.parsers import QuizParseError
from saarthi.repositories import QuizResultRepository, UserRepository
from saarthi.schemas.auth import UserRegister
from saarthi.schemas.quiz import QuizGenerateRequest, QuizSubmitRequest
from saarthi.services.quiz_service import (
    EmptySubmissionError,
    QuizPersistenceError,
    QuizService,
)


@pytest.fixture
async def user(db_session):
    return await UserRepository(db_session).create_user(
        UserRegister(username="meera", email="meera@school.edu", password="Quizzes2024")
    )


def submission(**overrides):
    data = {
        "topic": "Photosynthesis",
        "difficulty": "Easy",
        "type": "MCQ",
        "count": 2,
        "answers": [
            {"userAnswer": "Chlorophyll", "correctAnswer": "Chlorophyll"},
            {"userAnswer": "Oxygen", "correctAnswer": "Carbon dioxide"},
        ],
        "timeTaken": 42,
    }
    data.update(overrides)
    return QuizSubmitRequest.model_validate(data)


async def test_submit_stores_a_result(db_session, user):
    service = QuizService(db_session)

    response = await service.submit_quiz(user.id, submission())

    assert response.success is True
    assert response.score == 50
    assert response.correct_answers == 1
    assert response.total_questions == 2

    stored = await QuizResultRepository(db_session).get_recent_for_user(user.id)
    assert len(stored) == 1
    assert stored[0].difficulty == "easy"
    assert stored[0].question_type == "mcq"
    assert stored[0].time_taken == 42
    assert stored[0].user_answers[0] == {
        "question_number": 1,
        "user_answer": "Chlorophyll",
        "correct_answer": "Chlorophyll",
        "is_correct": True,
    }


async def test_identical_submissions_create_separate_results(db_session, user):
    service = QuizService(db_session)

    await service.submit_quiz(user.id, submission())
    await service.submit_quiz(user.id, submission())

    history = await service.get_history(user.id)
    assert len(history) == 2
    assert history[0].id != history[1].id
    assert history[0].completed_at >= history[1].completed_at


async def test_total_comes_from_answers_not_declared_count(db_session, user):
    service = QuizService(db_session)

    response = await service.submit_quiz(user.id, submission(count=10))

    assert response.total_questions == 2


async def test_empty_submission_stores_nothing(db_session, user):
    service = QuizService(db_session)

    with pytest.raises(EmptySubmissionError):
        await service.submit_quiz(user.id, submission(answers=[]))

    assert await QuizResultRepository(db_session).get_recent_for_user(user.id) == []


async def test_storage_failure_rolls_back(db_session, user, monkeypatch):
    service = QuizService(db_session)

    async def broken_create(**kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(service.result_repo, "create", broken_create)

    with pytest.raises(QuizPersistenceError):
        await service.submit_quiz(user.id, submission())


async def test_history_order_is_stable_for_equal_timestamps(db_session, user):
    repo = QuizResultRepository(db_session)
    stamp = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
    for topic in ("Algebra", "Geometry", "Optics"):
        await repo.create(
            user_id=user.id,
            topic=topic,
            difficulty="easy",
            question_type="mcq",
            total_questions=1,
            correct_answers=1,
            score=100,
            user_answers=[],
            completed_at=stamp,
        )

    first = await repo.get_recent_for_user(user.id)
    second = await repo.get_recent_for_user(user.id)

    assert [r.id for r in first] == sorted((r.id for r in first), reverse=True)
    assert [r.id for r in first] == [r.id for r in second]


async def test_history_is_limited_and_per_user(db_session, user):
    other = await UserRepository(db_session).create_user(
        UserRegister(username="kabir", email="kabir@school.edu", password="Quizzes2024")
    )
    service = QuizService(db_session)

    for _ in range(3):
        await service.submit_quiz(user.id, submission())
    await service.submit_quiz(other.id, submission())

    assert len(await service.get_history(user.id, limit=2)) == 2
    assert len(await service.get_history(other.id)) == 1


async def test_generate_quiz_salvages_wrapped_json(db_session, generator, backend):
    backend.script = ['Sure! {"questions": [{"question": "H2O is?", "answer": "Water"}]}']
    service = QuizService(db_session, generator)

    response = await service.generate_quiz(
        QuizGenerateRequest(topic="Chemistry", difficulty="HARD", type="subjective", count=1)
    )

    assert response.quiz == {"questions": [{"question": "H2O is?", "answer": "Water"}]}
    assert response.difficulty.value == "hard"
    prompt, image = backend.calls[0]
    assert "Chemistry" in prompt
    assert image is None


async def test_generate_quiz_raises_when_nothing_parses(db_session, generator, backend):
    backend.script = ["I can't help with that."]
    service = QuizService(db_session, generator)

    with pytest.raises(QuizParseError):
        await service.generate_quiz(QuizGenerateRequest(topic="Chemistry"))
