import pytest

from saarthi.api.deps import get_archive_storage
from saarthi.api.errors import HIGH_TRAFFIC_MESSAGE
from saarthi.core.config import settings
from saarthi.main import app as fastapi_app
from saarthi.storage import reset_storage

from conftest import OverloadedError, PNG_BYTES


# ============================================================
# Study tools
# ============================================================

@pytest.mark.parametrize(
    "path, payload",
    [
        ("/api/v1/syllabus", {"std": "8th", "subject": "Science"}),
        ("/api/v1/essay-writer", {"topic": "Monsoon", "type": "descriptive", "length": 300}),
        ("/api/v1/code-explainer", {"code": "print('hi')", "language": "python"}),
        ("/api/v1/study-planner", {"subjects": "Maths, Physics", "hours": "3", "days": "5", "goals": "Boards"}),
        ("/api/v1/flashcard-generator", {"topic": "Cells", "subject": "Biology", "count": 5}),
        ("/api/v1/ask", {"question": "Why is the sky blue?"}),
    ],
)
async def test_text_tools_return_result(client, auth_headers, backend, path, payload):
    backend.script = ["## Generated"]

    response = await client.post(path, json=payload, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"result": "## Generated"}


async def test_numbers_are_accepted_as_text(client, auth_headers, backend):
    backend.script = ["## Plan"]

    plan = await client.post(
        "/api/v1/study-planner",
        json={"subjects": "Maths", "hours": 3, "days": 5},
        headers=auth_headers,
    )
    syllabus = await client.post(
        "/api/v1/syllabus", json={"std": 8, "subject": "Science"}, headers=auth_headers
    )

    assert plan.status_code == 200
    assert syllabus.status_code == 200
    plan_prompt, _ = backend.calls[0]
    assert "hours per day: 3\n" in plan_prompt
    assert "days per week: 5\n" in plan_prompt
    syllabus_prompt, _ = backend.calls[1]
    assert "for 8 grade Science" in syllabus_prompt


async def test_missing_input_is_a_400_with_error(client, auth_headers, backend):
    response = await client.post("/api/v1/syllabus", json={"std": "8th"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "subject: Field required"}
    assert backend.calls == []


async def test_overload_maps_to_503(client, auth_headers, backend, sleeper):
    backend.script = [OverloadedError()]

    response = await client.post(
        "/api/v1/syllabus", json={"std": "8th", "subject": "Science"}, headers=auth_headers
    )

    assert response.status_code == 503
    assert response.json() == {"error": HIGH_TRAFFIC_MESSAGE}
    assert len(backend.calls) == 3
    assert sleeper.delays == [2.0, 4.0]


async def test_other_failure_maps_to_500_with_apology(client, auth_headers, backend):
    backend.script = [RuntimeError("API key not valid")]

    response = await client.post(
        "/api/v1/essay-writer", json={"topic": "Monsoon"}, headers=auth_headers
    )

    assert response.status_code == 500
    assert "trouble generating the essay" in response.json()["error"]
    assert "API key" not in response.json()["error"]
    assert len(backend.calls) == 1


async def test_chat_uses_message_key(client, auth_headers, backend):
    backend.script = ["Hello, learner!"]

    response = await client.post("/api/v1/chat", json={"message": "hi"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Hello, learner!"}


async def test_chat_failure_uses_message_key(client, auth_headers, backend):
    backend.script = [OverloadedError()]

    response = await client.post("/api/v1/chat", json={"message": "hi"}, headers=auth_headers)

    assert response.status_code == 503
    assert response.json() == {"message": HIGH_TRAFFIC_MESSAGE}


async def test_features_require_login(client):
    response = await client.post("/api/v1/ask", json={"question": "What is gravity?"})
    assert response.status_code in (401, 403)


# ============================================================
# Image problems
# ============================================================

async def test_form_without_file(client, auth_headers):
    response = await client.post("/api/v1/form", data={"note": "forgot"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "No image file uploaded"}


async def test_form_rejects_non_images(client, auth_headers, backend):
    response = await client.post(
        "/api/v1/form",
        files={"image": ("notes.png", b"just some text, not a picture", "image/png")},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert backend.calls == []


async def test_form_rejects_oversized_images(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "MAX_IMAGE_SIZE_MB", 1)
    too_big = PNG_BYTES + b"\x00" * (1024 * 1024)

    response = await client.post(
        "/api/v1/form",
        files={"image": ("big.png", too_big, "image/png")},
        headers=auth_headers,
    )

    assert response.status_code == 413


async def test_form_sends_detected_type(client, auth_headers, backend):
    backend.script = ["x = 4"]

    response = await client.post(
        "/api/v1/form",
        # client claims JPEG; the bytes say PNG
        files={"image": ("problem.jpg", PNG_BYTES, "image/jpeg")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"result": "x = 4"}
    _, image = backend.calls[0]
    assert image.mime_type == "image/png"
    assert image.data == PNG_BYTES


async def test_form_archive_copy_is_removed_locally(client, auth_headers, backend, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "ARCHIVE_UPLOADS", True)
    backend.script = [RuntimeError("boom")]

    response = await client.post(
        "/api/v1/form",
        files={"image": ("problem.png", PNG_BYTES, "image/png")},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.json()["error"].startswith("An error occurred while processing your image")
    leftovers = [p for p in (tmp_path / "uploads").rglob("*") if p.is_file()]
    assert leftovers == []


async def test_form_ignores_unusable_storage_when_not_archiving(client, auth_headers, backend, monkeypatch):
    fastapi_app.dependency_overrides.pop(get_archive_storage)
    reset_storage()
    monkeypatch.setattr(settings, "ARCHIVE_UPLOADS", False)
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "cloudinary")
    monkeypatch.setattr(settings, "CLOUDINARY_CLOUD_NAME", None)
    backend.script = ["x = 4"]

    response = await client.post(
        "/api/v1/form",
        files={"image": ("problem.png", PNG_BYTES, "image/png")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"result": "x = 4"}


def test_archive_storage_is_skipped_when_archiving_is_off(monkeypatch):
    monkeypatch.setattr(settings, "ARCHIVE_UPLOADS", False)
    assert get_archive_storage() is None


def test_archive_storage_degrades_when_backend_cannot_be_built(monkeypatch):
    reset_storage()
    monkeypatch.setattr(settings, "ARCHIVE_UPLOADS", True)
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "cloudinary")
    monkeypatch.setattr(settings, "CLOUDINARY_CLOUD_NAME", None)

    assert get_archive_storage() is None


# ============================================================
# Quizzes
# ============================================================

async def test_quiz_generator(client, auth_headers, backend):
    backend.script = ['Here is the quiz: {"questions": [{"question": "2+2?", "options": ["3", "4"], "correctAnswer": "4"}]}']

    response = await client.post(
        "/api/v1/quiz-generator",
        json={"topic": "Arithmetic", "difficulty": "easy", "type": "mcq", "count": 1},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["quiz"]["questions"][0]["correctAnswer"] == "4"
    assert body["topic"] == "Arithmetic"
    assert body["difficulty"] == "easy"
    assert body["type"] == "mcq"
    assert body["count"] == 1


async def test_quiz_generator_unparseable_output(client, auth_headers, backend):
    backend.script = ["I'm not able to produce a quiz."]

    response = await client.post(
        "/api/v1/quiz-generator", json={"topic": "Arithmetic"}, headers=auth_headers
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to generate structured quiz. Please try again with a different topic."
    }


async def test_quiz_generator_overloaded(client, auth_headers, backend):
    backend.script = [OverloadedError()]

    response = await client.post(
        "/api/v1/quiz-generator", json={"topic": "Arithmetic"}, headers=auth_headers
    )

    assert response.status_code == 503


SUBMISSION = {
    "topic": "Arithmetic",
    "difficulty": "easy",
    "type": "mcq",
    "count": 3,
    "answers": [
        {"userAnswer": "4", "correctAnswer": "4"},
        {"userAnswer": "6", "correctAnswer": "6"},
        {"userAnswer": "8", "correctAnswer": "9"},
    ],
    "timeTaken": 30,
}


async def test_submit_quiz(client, auth_headers):
    response = await client.post("/api/v1/submit-quiz", json=SUBMISSION, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["score"] == 67
    assert body["correctAnswers"] == 2
    assert body["totalQuestions"] == 3
    assert body["userAnswers"][2] == {
        "questionNumber": 3,
        "userAnswer": "8",
        "correctAnswer": "9",
        "isCorrect": False,
    }


async def test_unanswered_question_scores_as_wrong(client, auth_headers):
    answers = [{"userAnswer": "4", "correctAnswer": "4"}, {"userAnswer": None, "correctAnswer": "6"}]

    response = await client.post(
        "/api/v1/submit-quiz", json={**SUBMISSION, "answers": answers}, headers=auth_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["score"] == 50
    assert body["userAnswers"][1]["userAnswer"] is None
    assert body["userAnswers"][1]["isCorrect"] is False


async def test_submit_without_answers(client, auth_headers):
    response = await client.post(
        "/api/v1/submit-quiz", json={**SUBMISSION, "answers": []}, headers=auth_headers
    )
    assert response.status_code == 400

    history = await client.get("/api/v1/quiz-history", headers=auth_headers)
    assert history.json() == {"quizResults": []}


async def test_history_newest_first(client, auth_headers):
    await client.post("/api/v1/submit-quiz", json=SUBMISSION, headers=auth_headers)
    await client.post(
        "/api/v1/submit-quiz", json={**SUBMISSION, "topic": "Fractions"}, headers=auth_headers
    )

    response = await client.get("/api/v1/quiz-history", headers=auth_headers)

    assert response.status_code == 200
    results = response.json()["quizResults"]
    assert [r["topic"] for r in results] == ["Fractions", "Arithmetic"]
    assert results[0]["questionType"] == "mcq"
    assert results[0]["timeTaken"] == 30


async def test_history_limit_bounds(client, auth_headers):
    response = await client.get("/api/v1/quiz-history?limit=51", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"].startswith("query.limit")


# ============================================================
# Health
# ============================================================

async def test_root(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


async def test_health_never_shows_the_key(client, monkeypatch):
    async def db_ok():
        return True

    monkeypatch.setattr("saarthi.main.check_db_connection", db_ok)
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "secret-key-value")

    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["gemini_api_key_defined"] is True
    assert "secret-key-value" not in response.text
