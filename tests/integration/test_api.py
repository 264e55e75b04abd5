"""HTTP-level tests for the FastAPI application with in-memory adapters."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from easyread.application.api import STATUS_BY_KIND, create_app
from easyread.application.controller import AdaptationController
from easyread.domain.entities import (
    AdaptationJob,
    AuthenticatedUser,
    GlossaryJob,
    JobStatus,
    ReadingProfile,
    SentenceLevel,
    TermCandidate,
    VocabularyLevel,
)
from easyread.domain.errors import ErrorKind, OracleMalformedResponseError, OracleUnavailableError, ProfileInvalidError
from easyread.infrastructure.echo_rewrite_oracle import EchoRewriteOracle
from easyread.infrastructure.local_job_repository import LocalJobRepository
from easyread.infrastructure.local_reading_profile_provider import LocalReadingProfileProvider
from easyread.infrastructure.static_token_verifier import StaticTokenVerifier

OWNER = {"Authorization": "Bearer owner-token"}
OTHER = {"Authorization": "Bearer other-token"}
PASSIVE = {"Authorization": "Bearer passive-token"}
NEWCOMER = {"Authorization": "Bearer newcomer-token"}

ARTICLE = {
    "title": "읽기 쉬운 기사",
    "paragraphs": [
        {"id": 1, "text": "이것은 긴 문장입니다. 짧다."},
        {"id": 2, "text": "그리고 두 번째 문단은 조금 더 복잡한 구조를 가지고 있습니다!"},
    ],
}


@pytest.fixture
def job_repository():
    return LocalJobRepository()


@pytest.fixture
def glossary_repository():
    return LocalJobRepository(GlossaryJob)


@pytest.fixture
def profile_provider():
    return LocalReadingProfileProvider({
        "owner": ReadingProfile(
            sentence=SentenceLevel.SPLIT,
            vocabulary=VocabularyLevel.SUBSTITUTE,
            known_topics=["IT"],
        ),
        "other": ReadingProfile(sentence=SentenceLevel.RESTRUCTURE),
        "passive": ReadingProfile(),
    })


@pytest.fixture
def rewrite_oracle():
    return EchoRewriteOracle()


@pytest.fixture
def controller(profile_provider, rewrite_oracle, job_repository, glossary_repository):
    return AdaptationController(
        profile_provider=profile_provider,
        rewrite_oracle=rewrite_oracle,
        job_repository=job_repository,
        token_verifier=StaticTokenVerifier({
            "owner-token": AuthenticatedUser(uid="owner", email="owner@example.com"),
            "other-token": AuthenticatedUser(uid="other"),
            "passive-token": AuthenticatedUser(uid="passive"),
            "newcomer-token": AuthenticatedUser(uid="newcomer", name="New Reader"),
        }),
        glossary_repository=glossary_repository,
    )


@pytest.fixture
def client(controller):
    return TestClient(create_app(controller, resume_pending_reports=False))


class TestCors:

    def test_bare_options_is_empty_204(self, client):
        response = client.options("/simplify")

        assert response.status_code == 204
        assert response.content == b""

    def test_preflight_is_204_with_cors_headers(self, client):
        response = client.options("/report", headers={
            "Origin": "https://reader.example.com",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "authorization",
        })

        assert response.status_code == 204
        assert response.content == b""
        assert "access-control-allow-origin" in response.headers
        assert "GET" in response.headers["access-control-allow-methods"]

    def test_simple_request_gets_cors_header(self, client):
        response = client.get("/health", headers={"Origin": "https://reader.example.com"})

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers


class TestSimplify:

    def test_requires_token(self, client):
        response = client.post("/simplify", json=ARTICLE)

        assert response.status_code == 401
        assert response.json()["status"] == "error"

    def test_rejects_unknown_token(self, client):
        response = client.post("/simplify", json=ARTICLE, headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    @pytest.mark.parametrize("body", [
        {"title": "제목"},
        {"title": "", "paragraphs": ARTICLE["paragraphs"]},
        {"title": "제목", "paragraphs": []},
        {"title": "제목", "paragraphs": [{"id": "x", "text": "a"}]},
        {"title": "제목", "paragraphs": [{"id": 1, "text": "a"}, {"id": 1, "text": "b"}]},
    ])
    def test_malformed_body(self, client, body):
        response = client.post("/simplify", json=body, headers=OWNER)

        assert response.status_code == 400
        assert response.json()["status"] == "error"

    def test_profile_not_found(self, client, job_repository):
        response = client.post("/simplify", json=ARTICLE, headers=NEWCOMER)

        assert response.status_code == 404
        assert job_repository.get_all_jobs() == {}

    def test_guideline_rejection(self, client, job_repository):
        response = client.post("/simplify", json=ARTICLE, headers=PASSIVE)

        assert response.status_code == 400
        assert response.json()["status"] == "rejected"
        assert job_repository.get_all_jobs() == {}

    def test_oracle_failure_creates_no_job(self, client, rewrite_oracle, job_repository):
        rewrite_oracle.rewrite = AsyncMock(side_effect=OracleUnavailableError("AI 모델 호출에 실패했습니다.", details="down"))

        response = client.post("/simplify", json=ARTICLE, headers=OWNER)

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "AI 모델 호출에 실패했습니다.", "details": "down"}
        assert job_repository.get_all_jobs() == {}

    def test_submit_then_poll_completed_report(self, client):
        response = client.post("/simplify", json=ARTICLE, headers=OWNER)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "processing"
        assert body["data"] == {"title": ARTICLE["title"], "simplified_paragraphs": ARTICLE["paragraphs"]}

        # TestClient runs background tasks before returning the response
        report = client.get("/report", params={"jobId": body["jobId"]}, headers=OWNER)

        assert report.status_code == 200
        payload = report.json()
        assert payload["status"] == "completed"
        analysis = payload["analysis"]
        assert analysis["quantitative_analysis"]["improvements"]["readability_improvement"] == 0
        assert analysis["summary"]["readability_improvement_percent"] == "0.0"
        original = analysis["quantitative_analysis"]["original"]
        assert set(original) == {
            "charCount", "wordCount", "sentenceCount", "syllableCount",
            "stopwordCount", "avgSentenceLength", "avgWordSyllableLength", "readabilityScore",
        }
        assert original == analysis["quantitative_analysis"]["simplified"]


class TestReport:

    @pytest.fixture
    def stored_job(self, job_repository):
        async def _store(**fields):
            job = AdaptationJob(
                job_id="job-1",
                owner_id="owner",
                title="제목",
                original_text="원문.",
                simplified_text="쉬운 글.",
                **fields,
            )
            await job_repository.create_job(job)
            return job
        return _store

    def test_requires_job_id(self, client):
        response = client.get("/report", headers=OWNER)

        assert response.status_code == 400

    def test_unknown_job(self, client):
        response = client.get("/report", params={"jobId": "fabricated"}, headers=OWNER)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_processing(self, client, stored_job):
        await stored_job()

        response = client.get("/report", params={"jobId": "job-1"}, headers=OWNER)

        assert response.status_code == 202
        assert response.json()["status"] == "processing"

    @pytest.mark.asyncio
    async def test_failed(self, client, stored_job):
        await stored_job(status=JobStatus.FAILED, error="분석 실패")

        response = client.get("/report", params={"jobId": "job-1"}, headers=OWNER)

        assert response.status_code == 500
        assert response.json()["status"] == "failed"
        assert response.json()["details"] == "분석 실패"

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(self, client, stored_job):
        await stored_job(status=JobStatus.FAILED, error="분석 실패")

        response = client.get("/report", params={"jobId": "job-1"}, headers=OTHER)

        assert response.status_code == 403
        assert "details" not in response.json()


class TestProfileEndpoints:

    def test_get_found(self, client):
        response = client.get("/profile", headers=OWNER)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "found"
        assert body["profile"]["readingProfile"] == {"sentence": 1, "vocabulary": 1}
        assert body["profile"]["knownTopics"] == ["IT"]

    def test_get_not_found(self, client):
        response = client.get("/profile", headers=NEWCOMER)

        assert response.status_code == 200
        assert response.json() == {"status": "not_found"}

    def test_create_profile(self, client):
        response = client.post("/profile", headers=NEWCOMER, json={
            "readingProfile": {"sentence": 2, "vocabulary": 3},
            "knownTopics": ["과학"],
        })

        assert response.status_code == 201
        profile = response.json()["profile"]
        assert profile["readingProfile"] == {"sentence": 2, "vocabulary": 3}
        assert profile["displayName"] == "New Reader"
        assert profile["getRecommendations"] is True

        assert client.get("/profile", headers=NEWCOMER).json()["status"] == "found"

    def test_create_profile_invalid_level(self, client):
        response = client.post("/profile", headers=NEWCOMER, json={
            "readingProfile": {"sentence": 5, "vocabulary": 0},
            "knownTopics": [],
        })

        assert response.status_code == 400

    def test_update_recommendations(self, client):
        response = client.post("/profile/recommendations", headers=OWNER, json={"getRecommendations": False})

        assert response.status_code == 200
        assert response.json()["settings"] == {"getRecommendations": False}
        assert client.get("/profile", headers=OWNER).json()["profile"]["getRecommendations"] is False

    def test_update_recommendations_requires_boolean(self, client):
        response = client.post("/profile/recommendations", headers=OWNER, json={"getRecommendations": "yes"})

        assert response.status_code == 400

    def test_update_recommendations_without_profile(self, client):
        response = client.post("/profile/recommendations", headers=NEWCOMER, json={"getRecommendations": True})

        assert response.status_code == 404


def test_summarize(client):
    response = client.post("/summarize", headers=OWNER, json={"paragraphs": ARTICLE["paragraphs"]})

    assert response.status_code == 200
    assert response.json()["status"] == "success"
    assert response.json()["summary"].startswith("이것은 긴 문장입니다.")


def test_summarize_requires_token(client):
    response = client.post("/summarize", json={"paragraphs": ARTICLE["paragraphs"]})

    assert response.status_code == 401


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_invalid_stored_profile_is_server_error(client, profile_provider):
    profile_provider.get_profile = MagicMock(side_effect=ProfileInvalidError(
        "Stored profile for user owner is invalid", details="7 is not a valid SentenceLevel"
    ))

    response = client.get("/profile", headers=OWNER)

    assert response.status_code == 500
    assert response.json() == {
        "status": "error",
        "message": "Stored profile for user owner is invalid",
        "details": "7 is not a valid SentenceLevel",
    }


class TestQuestions:

    QUESTIONS_BODY = {"url": "https://news.example.com/1", **ARTICLE}

    def test_generate(self, client):
        response = client.post("/questions", json=self.QUESTIONS_BODY, headers=OWNER)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Successfully generated preliminary questions."
        assert [q["type"] for q in body["questions"]] == [
            "topic_and_scope",
            "terminology",
            "style_and_structure",
        ]
        assert len(body["original_text_hash"]) == 64

    def test_same_text_same_hash(self, client):
        first = client.post("/questions", json=self.QUESTIONS_BODY, headers=OWNER).json()
        second = client.post("/questions", json=self.QUESTIONS_BODY, headers=OTHER).json()

        assert first["original_text_hash"] == second["original_text_hash"]

    @pytest.mark.parametrize("missing", ["url", "title", "paragraphs"])
    def test_missing_field(self, client, missing):
        body = {k: v for k, v in self.QUESTIONS_BODY.items() if k != missing}

        response = client.post("/questions", json=body, headers=OWNER)

        assert response.status_code == 400

    def test_requires_token(self, client):
        response = client.post("/questions", json=self.QUESTIONS_BODY)

        assert response.status_code == 401

    def test_malformed_oracle_output(self, client, rewrite_oracle):
        rewrite_oracle.generate_questions = AsyncMock(
            side_effect=OracleMalformedResponseError("AI 모델이 유효한 사전 질문을 생성하지 못했습니다.")
        )

        response = client.post("/questions", json=self.QUESTIONS_BODY, headers=OWNER)

        assert response.status_code == 500
        assert response.json()["status"] == "error"


class TestGlossary:

    BODY = {"paragraphs": [{"text": "GPU는 병렬 연산에 쓰인다."}, {"text": "AI 모델 학습이 빨라졌다."}]}

    def test_create_then_poll(self, client, rewrite_oracle):
        rewrite_oracle.extract_terms = AsyncMock(return_value=[TermCandidate(word="GPU", tag="IT")])

        created = client.post("/dictionary", json=self.BODY, headers=OWNER)

        assert created.status_code == 202
        assert created.json()["status"] == "processing"
        job_id = created.json()["jobId"]

        # TestClient runs background tasks before returning the response
        response = client.get("/dictionary", params={"jobId": job_id}, headers=OWNER)

        assert response.status_code == 200
        assert response.json() == {
            "status": "completed",
            "data": [{
                "term": "GPU",
                "tag": "IT",
                "shortDefinition": "GPU",
                "longDefinition": "GPU는 병렬 연산에 쓰인다.",
                "imageUrl": "",
            }],
            "error": None,
        }

    def test_no_terms_completes_empty(self, client):
        job_id = client.post("/dictionary", json=self.BODY, headers=OWNER).json()["jobId"]

        response = client.get("/dictionary", params={"jobId": job_id}, headers=OWNER)

        assert response.json() == {"status": "completed", "data": [], "error": None}

    @pytest.mark.asyncio
    async def test_processing(self, client, glossary_repository):
        await glossary_repository.create_job(GlossaryJob(job_id="g-1", owner_id="owner", text="본문."))

        response = client.get("/dictionary", params={"jobId": "g-1"}, headers=OWNER)

        assert response.status_code == 200
        assert response.json() == {"status": "processing", "data": None, "error": None}

    def test_oracle_failure_marks_job_failed(self, client, rewrite_oracle):
        rewrite_oracle.extract_terms = AsyncMock(side_effect=OracleUnavailableError("AI 모델 호출에 실패했습니다."))
        job_id = client.post("/dictionary", json=self.BODY, headers=OWNER).json()["jobId"]

        response = client.get("/dictionary", params={"jobId": job_id}, headers=OWNER)

        assert response.json() == {"status": "failed", "data": None, "error": "AI 모델 호출에 실패했습니다."}

    def test_unknown_job(self, client):
        response = client.get("/dictionary", params={"jobId": "fabricated"}, headers=OWNER)

        assert response.status_code == 404

    def test_other_user_is_forbidden(self, client):
        job_id = client.post("/dictionary", json=self.BODY, headers=OWNER).json()["jobId"]

        response = client.get("/dictionary", params={"jobId": job_id}, headers=OTHER)

        assert response.status_code == 403
        assert response.json()["message"] == "접근 권한이 없습니다."

    @pytest.mark.parametrize("body", [
        {"paragraphs": []},
        {"paragraphs": [{"text": 3}]},
        {},
    ])
    def test_malformed_body(self, client, body):
        response = client.post("/dictionary", json=body, headers=OWNER)

        assert response.status_code == 400

    def test_blank_text(self, client, glossary_repository):
        response = client.post("/dictionary", json={"paragraphs": [{"text": "  "}]}, headers=OWNER)

        assert response.status_code == 400
        assert response.json()["message"] == "분석할 텍스트가 비어 있습니다."
        assert glossary_repository.get_all_jobs() == {}


def test_every_error_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)
    assert STATUS_BY_KIND[ErrorKind.JOB_ALREADY_FINALIZED] == 409
    assert STATUS_BY_KIND[ErrorKind.PROFILE_INVALID] == 500
