import base64
import dataclasses
import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from app.api.deps import get_job_engine, get_resume_analyzer, get_settings  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.main import app  # noqa: E402
from app.services.job_synthesis import JobSynthesisEngine  # noqa: E402
from app.services.resume_analyzer import ResumeAnalyzer  # noqa: E402


class FakeAIClient:
    model = "fake-model"

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error

    async def generate(self, prompt):
        if self.error is not None:
            raise self.error
        return self.response


ANALYSIS = {
    "summary": "Pragmatic backend engineer.",
    "keywords": ["Python", "PostgreSQL"],
    "strengths": ["Owns delivery"],
    "nextSteps": ["Apply to fintech roles"],
    "jobQueries": [{"title": "Backend Engineer", "query": "backend engineer python"}],
}


def _resume_body(text="Jane Doe\nPython engineer", file_type="text/plain", **extra):
    body = {
        "fileName": "resume.txt",
        "fileType": file_type,
        "base64Data": base64.b64encode(text.encode("utf-8")).decode("ascii"),
    }
    body.update(extra)
    return body


class ApiTestCase(unittest.TestCase):
    ai_client = None

    def setUp(self):
        app.dependency_overrides[get_resume_analyzer] = lambda: ResumeAnalyzer(self.ai_client)
        app.dependency_overrides[get_job_engine] = lambda: JobSynthesisEngine(self.ai_client)
        app.dependency_overrides[get_settings] = lambda: settings
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()


class HealthApiTests(ApiTestCase):
    def test_health_reports_model_state(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "modelReady": False})


class JobSearchApiTests(ApiTestCase):
    def test_empty_queries_are_rejected(self):
        response = self.client.post("/api/jobs/search", json={"queries": []})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Provide at least one job query.")

    def test_incomplete_queries_are_rejected(self):
        response = self.client.post("/api/jobs/search", json={"queries": [{"title": "SRE"}, "x"]})
        self.assertEqual(response.status_code, 400)

    def test_malformed_body_is_a_400(self):
        response = self.client.post("/api/jobs/search", json={"queries": "backend"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid request payload.")

    def test_fallback_jobs_without_model(self):
        response = self.client.post(
            "/api/jobs/search",
            json={"queries": [{"title": "Backend Engineer", "query": "backend engineer node"}], "location": "Berlin"},
        )
        self.assertEqual(response.status_code, 200)
        jobs = response.json()["jobs"]
        self.assertGreaterEqual(len(jobs), 5)
        for job in jobs:
            self.assertTrue(job["url"].startswith("https://"))
            self.assertEqual(job["location"], "Berlin")
            self.assertNotIn("postedAt", job)
            self.assertNotIn("salary", job)


class AIJobSearchApiTests(ApiTestCase):
    ai_client = FakeAIClient(
        json.dumps({"jobs": [{"title": "SRE", "link": "https://boards.greenhouse.io/acme/jobs/123", "postedAt": "2d"}]})
    )

    def test_ai_postings_are_normalised(self):
        response = self.client.post(
            "/api/jobs/search",
            json={"queries": [{"title": "SRE", "query": "site reliability"}], "remote": True},
        )
        self.assertEqual(response.status_code, 200)
        job = response.json()["jobs"][0]
        self.assertEqual(job["company"], "Acme")
        self.assertEqual(job["location"], "Remote")
        self.assertEqual(job["postedAt"], "2d")


class AnalyzeResumeApiTests(ApiTestCase):
    ai_client = FakeAIClient(json.dumps(ANALYSIS))

    def test_analysis_success(self):
        response = self.client.post("/api/analyze-resume", json=_resume_body(customPrompt="fintech"))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["resumeTextSnippet"], "Jane Doe\nPython engineer")
        self.assertEqual(body["analysis"]["nextSteps"], ["Apply to fintech roles"])
        self.assertEqual(
            body["analysis"]["jobQueries"],
            [{"title": "Backend Engineer", "query": "backend engineer python"}],
        )

    def test_missing_fields(self):
        response = self.client.post("/api/analyze-resume", json={"fileName": "resume.txt"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Missing resume payload.")

    def test_blank_resume_text(self):
        response = self.client.post("/api/analyze-resume", json=_resume_body(text="   \n  "))
        self.assertEqual(response.status_code, 400)

    def test_unsupported_type_is_reported(self):
        response = self.client.post("/api/analyze-resume", json=_resume_body(file_type="image/png"))
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["message"], "Failed to analyze resume.")
        self.assertIn("Unsupported file type", body["details"])

    def test_oversized_payload(self):
        app.dependency_overrides[get_settings] = lambda: dataclasses.replace(settings, max_upload_bytes=16)
        response = self.client.post("/api/analyze-resume", json=_resume_body(text="x" * 200))
        self.assertEqual(response.status_code, 413)


class FailingAnalyzeResumeApiTests(ApiTestCase):
    ai_client = FakeAIClient("no json at all")

    def test_malformed_ai_response_is_a_500(self):
        response = self.client.post("/api/analyze-resume", json=_resume_body())
        self.assertEqual(response.status_code, 500)
        self.assertIn("JSON", response.json()["details"])


class UnconfiguredAnalyzeResumeApiTests(ApiTestCase):
    def test_missing_model_is_a_500(self):
        response = self.client.post("/api/analyze-resume", json=_resume_body())
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["message"], "Failed to analyze resume.")


if __name__ == "__main__":
    unittest.main()
