"""HTTP tests for the submission and admin grading routes."""

import pytest


@pytest.fixture
def ids(catalog):
    return {
        "essay_set": catalog.essay_set.id,
        "mixed_set": catalog.mixed_set.id,
        "q_single": catalog.q_single.id,
        "q_essay": catalog.q_essay.id,
        "q_multi": catalog.q_multi.id,
    }


@pytest.fixture
async def learner_client(api, catalog):
    return await api(catalog.learner)


@pytest.fixture
async def other_client(api, catalog):
    return await api(catalog.other)


@pytest.fixture
async def admin_client(api, catalog):
    return await api(catalog.admin)


async def _start(client, set_id):
    response = await client.post("/api/submissions/start", json={"setId": set_id})
    assert response.status_code == 201
    return response.json()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, api):
        client = await api()
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSubmissionRoutes:
    @pytest.mark.asyncio
    async def test_start_returns_id_and_attempt(self, learner_client, ids):
        first = await _start(learner_client, ids["essay_set"])
        second = await _start(learner_client, ids["essay_set"])

        assert first["attempt"] == 1
        assert second["attempt"] == 2
        assert second["id"] != first["id"]

    @pytest.mark.asyncio
    async def test_start_unknown_set(self, learner_client):
        response = await learner_client.post("/api/submissions/start", json={"setId": 9999})

        assert response.status_code == 404
        assert response.json() == {"error": "Test set not found"}

    @pytest.mark.asyncio
    async def test_requires_login(self, api, ids):
        client = await api()

        response = await client.post("/api/submissions/start", json={"setId": ids["essay_set"]})

        assert response.status_code == 401
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_unknown_session_cookie(self, api, ids):
        client = await api()
        client.cookies.set("session_id", "not-a-session")

        response = await client.post("/api/submissions/start", json={"setId": ids["essay_set"]})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_save_answer_returns_camel_case_score(self, learner_client, ids):
        started = await _start(learner_client, ids["mixed_set"])

        response = await learner_client.post(
            f"/api/submissions/{started['id']}/answers",
            json={"questionId": ids["q_multi"], "answer": ["C", "A"], "timeSpentSec": 30, "attempts": 1},
        )

        assert response.status_code == 200
        assert response.json() == {"isCorrect": True, "score": 2}

    @pytest.mark.asyncio
    async def test_save_free_response_returns_nulls(self, learner_client, ids):
        started = await _start(learner_client, ids["essay_set"])

        response = await learner_client.post(
            f"/api/submissions/{started['id']}/answers",
            json={"questionId": ids["q_essay"], "answer": "My essay..."},
        )

        assert response.status_code == 200
        assert response.json() == {"isCorrect": None, "score": None}

    @pytest.mark.asyncio
    async def test_save_answer_validation_error(self, learner_client, ids):
        started = await _start(learner_client, ids["essay_set"])

        missing_answer = await learner_client.post(
            f"/api/submissions/{started['id']}/answers", json={"questionId": ids["q_single"]}
        )
        bad_question = await learner_client.post(
            f"/api/submissions/{started['id']}/answers", json={"questionId": "abc", "answer": "B"}
        )

        assert missing_answer.status_code == 400
        assert "answer" in missing_answer.json()["error"]
        assert bad_question.status_code == 400

    @pytest.mark.asyncio
    async def test_save_answer_other_users_submission(self, learner_client, other_client, ids):
        started = await _start(learner_client, ids["essay_set"])

        response = await other_client.post(
            f"/api/submissions/{started['id']}/answers",
            json={"questionId": ids["q_single"], "answer": "B"},
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}

    @pytest.mark.asyncio
    async def test_save_answer_unknown_submission(self, learner_client, ids):
        response = await learner_client.post(
            "/api/submissions/424242/answers", json={"questionId": ids["q_single"], "answer": "B"}
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Submission not found"}

    @pytest.mark.asyncio
    async def test_save_answer_after_submit(self, learner_client, ids):
        started = await _start(learner_client, ids["essay_set"])
        submitted = await learner_client.post(f"/api/submissions/{started['id']}/submit")
        assert submitted.status_code == 200

        response = await learner_client.post(
            f"/api/submissions/{started['id']}/answers",
            json={"questionId": ids["q_single"], "answer": "B"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Submission not in progress"}

    @pytest.mark.asyncio
    async def test_submit_summary(self, learner_client, ids):
        started = await _start(learner_client, ids["essay_set"])
        await learner_client.post(
            f"/api/submissions/{started['id']}/answers", json={"questionId": ids["q_single"], "answer": "B"}
        )

        response = await learner_client.post(f"/api/submissions/{started['id']}/submit")

        assert response.status_code == 200
        body = response.json()
        assert body["score"] == 1
        assert body["totalQuestions"] == 2
        assert body["correctAnswers"] == 1
        assert isinstance(body["resultId"], int)
        assert body["timeSpentSec"] >= 0

    @pytest.mark.asyncio
    async def test_submit_other_users_submission(self, learner_client, other_client, ids):
        started = await _start(learner_client, ids["essay_set"])

        response = await other_client.post(f"/api/submissions/{started['id']}/submit")

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_submission_detail(self, learner_client, other_client, ids):
        started = await _start(learner_client, ids["essay_set"])
        await learner_client.post(
            f"/api/submissions/{started['id']}/answers", json={"questionId": ids["q_single"], "answer": "B"}
        )

        response = await learner_client.get(f"/api/submissions/{started['id']}")
        forbidden = await other_client.get(f"/api/submissions/{started['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["submission"]["status"] == "in_progress"
        assert body["submission"]["attempt"] == 1
        assert body["answers"] == [
            {"questionId": ids["q_single"], "answerData": "B", "isCorrect": True, "score": 1}
        ]
        assert forbidden.status_code == 403

    @pytest.mark.asyncio
    async def test_my_results(self, learner_client, other_client, ids):
        started = await _start(learner_client, ids["essay_set"])
        await learner_client.post(f"/api/submissions/{started['id']}/submit")
        other = await _start(other_client, ids["essay_set"])
        await other_client.post(f"/api/submissions/{other['id']}/submit")

        response = await learner_client.get("/api/results/me")

        assert response.status_code == 200
        results = response.json()
        assert [r["submissionId"] for r in results] == [started["id"]]
        assert results[0]["totalQuestions"] == 2


class TestAdminRoutes:
    @pytest.mark.asyncio
    async def test_learner_is_forbidden(self, learner_client):
        response = await learner_client.get("/api/admin/submissions")

        assert response.status_code == 403
        assert response.json() == {"error": "Admin only"}

    @pytest.mark.asyncio
    async def test_anonymous_is_unauthenticated(self, api):
        client = await api()

        response = await client.get("/api/admin/submissions")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_empty_filters_list_submitted(self, learner_client, admin_client, ids):
        started = await _start(learner_client, ids["essay_set"])
        await learner_client.post(
            f"/api/submissions/{started['id']}/answers",
            json={"questionId": ids["q_essay"], "answer": "My essay..."},
        )
        await learner_client.post(f"/api/submissions/{started['id']}/submit")

        response = await admin_client.get("/api/admin/submissions?status=&skill=")

        assert response.status_code == 200
        assert [(p["id"], p["items"]) for p in response.json()] == [(started["id"], 1)]

    @pytest.mark.asyncio
    async def test_invalid_status_filter(self, admin_client):
        response = await admin_client.get("/api/admin/submissions", params={"status": "archived"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_grade_objective_question_rejected(self, learner_client, admin_client, ids):
        started = await _start(learner_client, ids["essay_set"])
        await learner_client.post(
            f"/api/submissions/{started['id']}/answers", json={"questionId": ids["q_single"], "answer": "B"}
        )
        await learner_client.post(f"/api/submissions/{started['id']}/submit")

        response = await admin_client.post(
            "/api/admin/grade",
            json={"submissionId": started["id"], "questionId": ids["q_single"], "manualScore": 0},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_grade_negative_score_rejected(self, admin_client, ids):
        response = await admin_client.post(
            "/api/admin/grade",
            json={"submissionId": 1, "questionId": ids["q_essay"], "manualScore": -1},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_complete_in_progress_rejected(self, learner_client, admin_client, ids):
        started = await _start(learner_client, ids["essay_set"])

        response = await admin_client.post(f"/api/admin/submissions/{started['id']}/complete")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_full_grading_flow(self, learner_client, admin_client, ids):
        """Learner answers and submits, admin grades the essay and completes."""
        started = await _start(learner_client, ids["essay_set"])
        submission_id = started["id"]

        q1 = await learner_client.post(
            f"/api/submissions/{submission_id}/answers", json={"questionId": ids["q_single"], "answer": "B"}
        )
        q2 = await learner_client.post(
            f"/api/submissions/{submission_id}/answers",
            json={"questionId": ids["q_essay"], "answer": "My essay..."},
        )
        assert q1.json() == {"isCorrect": True, "score": 1}
        assert q2.json() == {"isCorrect": None, "score": None}

        submitted = await learner_client.post(f"/api/submissions/{submission_id}/submit")
        assert submitted.json()["score"] == 1

        pending = await admin_client.get("/api/admin/submissions", params={"skill": "writing"})
        assert pending.status_code == 200
        assert [(p["id"], p["items"]) for p in pending.json()] == [(submission_id, 1)]

        answers = await admin_client.get(f"/api/admin/submissions/{submission_id}/answers")
        assert answers.status_code == 200
        assert [a["questionId"] for a in answers.json()] == [ids["q_essay"]]
        assert answers.json()[0]["answerData"] == "My essay..."

        graded = await admin_client.post(
            "/api/admin/grade",
            json={
                "submissionId": submission_id,
                "questionId": ids["q_essay"],
                "manualScore": 4,
                "comment": "Well organised",
                "scores": {"task": 2, "language": 2},
            },
        )
        assert graded.status_code == 200
        assert graded.json() == {"message": "graded"}

        completed = await admin_client.post(f"/api/admin/submissions/{submission_id}/complete")
        assert completed.status_code == 200
        assert completed.json() == {"message": "completed", "totalScore": 5}

        detail = await learner_client.get(f"/api/submissions/{submission_id}")
        submission = detail.json()["submission"]
        assert submission["status"] == "graded"
        assert submission["totalScore"] == 5
        assert submission["manualScore"] == 4

        results = await learner_client.get("/api/results/me")
        assert [r["score"] for r in results.json()] == [5]

        # graded submissions stay graded
        resubmit = await learner_client.post(f"/api/submissions/{submission_id}/submit")
        assert resubmit.status_code == 400
        assert (await admin_client.get("/api/admin/submissions")).json() == []
