import os
import unittest
from unittest.mock import MagicMock

# Keep API tests deterministic: no provider credentials, no network.
os.environ.setdefault("AI_PROVIDER", "gemini")

from fastapi.testclient import TestClient

from resume_ai.ai.factory import LazyAIClient
from resume_ai.api.deps import get_analysis_client, get_orchestrator
from resume_ai.core.errors import ParseError
from resume_ai.core.rate_limit import limiter
from resume_ai.main import app
from resume_ai.services.resume_orchestrator import ResumeOrchestrator
from resume_ai.validation import ValidationLimits


class ResumeApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)
        cls.resume_text = (
            "Pham Minh D - Senior Backend Engineer\n"
            "- Built Python microservices for payments used by 1.2M users.\n"
            "- Reduced API latency by 38% with caching and query tuning.\n"
        )

    def setUp(self):
        limiter.reset()
        self.parser = MagicMock()
        self.parser.max_allowed_bytes.return_value = 10 * 1024 * 1024
        self.ai_client = MagicMock()
        orchestrator = ResumeOrchestrator(
            parser=self.parser,
            ai_client=self.ai_client,
            limits=ValidationLimits(),
            redact_upstream_errors=False,
        )
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_health(self):
        for path in ("/health", "/resume/health"):
            with self.subTest(path=path):
                response = self.client.get(path)
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.json()["status"], "healthy")

    def test_route_dependency_uses_lazy_analysis_client(self):
        client = get_analysis_client()
        self.assertIsInstance(client, LazyAIClient)
        self.assertIs(get_analysis_client(), client)

    def test_upload_zero_byte_file_is_rejected(self):
        response = self.client.post(
            "/resume/upload",
            files={"file": ("empty.pdf", b"", "application/pdf")},
        )
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error"], "File không được để trống")
        self.assertFalse(body["success"])
        self.parser.extract_text.assert_not_called()

    def test_upload_unsupported_extension(self):
        response = self.client.post(
            "/resume/upload",
            files={"file": ("cv.txt", b"plain text resume", "text/plain")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errorKind"], "UnsupportedFormat")

    def test_upload_success_contract(self):
        self.parser.extract_text.return_value = self.resume_text
        response = self.client.post(
            "/resume/upload",
            files={"file": ("CV_Final.PDF", b"%PDF-1.7 content", "application/pdf")},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Trích xuất text thành công")
        self.assertEqual(body["extractedText"], self.resume_text)
        self.assertEqual(body["filename"], "CV_Final.PDF")
        self.assertNotIn("error", body)
        passed_file = self.parser.extract_text.call_args.args[0]
        self.assertEqual(passed_file.content, b"%PDF-1.7 content")
        self.assertEqual(passed_file.size, len(b"%PDF-1.7 content"))

    def test_upload_parser_failure_is_500(self):
        self.parser.extract_text.side_effect = ParseError("Unable to extract text from this PDF file.")
        response = self.client.post(
            "/resume/upload",
            files={"file": ("cv.pdf", b"%PDF-broken", "application/pdf")},
        )
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["error"], "Lỗi xử lý file: Unable to extract text from this PDF file.")
        self.assertEqual(body["errorKind"], "UpstreamFailure")
        self.assertEqual(self.parser.extract_text.call_count, 1)

    def test_upload_without_file_field_is_invalid_request(self):
        response = self.client.post("/resume/upload", data={"other": "value"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errorKind"], "InvalidRequest")

    def test_analyze_text_without_job_description(self):
        text = "Experienced QA engineer with Selenium, Cypress, and CI pipelines."
        self.assertGreaterEqual(len(text.strip()), 50)
        self.ai_client.analyze.return_value = {"score": 81, "strengths": ["Automation"]}
        response = self.client.post("/resume/analyze-text", json={"text": text})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Phân tích CV thành công")
        self.assertEqual(body["data"], {"score": 81, "strengths": ["Automation"]})
        self.ai_client.analyze.assert_called_once_with(text, None)

    def test_analyze_text_null_sentinel_job_description(self):
        self.ai_client.analyze.return_value = {"score": 60}
        response = self.client.post(
            "/resume/analyze-text",
            json={"text": self.resume_text, "jobDescription": "null"},
        )
        self.assertEqual(response.status_code, 200)
        self.ai_client.analyze.assert_called_once_with(self.resume_text, None)

    def test_analyze_text_json_null_job_description(self):
        self.ai_client.analyze.return_value = {"score": 60}
        response = self.client.post(
            "/resume/analyze-text",
            json={"text": self.resume_text, "jobDescription": None},
        )
        self.assertEqual(response.status_code, 200)
        self.ai_client.analyze.assert_called_once_with(self.resume_text, None)

    def test_analyze_text_rejects_long_job_description(self):
        response = self.client.post(
            "/resume/analyze-text",
            json={"text": self.resume_text, "jobDescription": "j" * 20001},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errorKind"], "TooLong")
        self.ai_client.analyze.assert_not_called()

    def test_analyze_text_missing_text_is_empty_input(self):
        response = self.client.post("/resume/analyze-text", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Text CV không được để trống")

    def test_analyze_text_wrong_type_is_invalid_request(self):
        response = self.client.post("/resume/analyze-text", json={"text": ["not", "a", "string"]})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errorKind"], "InvalidRequest")
        self.ai_client.analyze.assert_not_called()

    def test_generate_questions_contract(self):
        self.ai_client.generate_questions.return_value = [
            {"id": 1, "question": "Walk me through the payments architecture.", "expectedDuration": 120},
            {"id": 2, "question": "How did you measure the latency gain?", "expectedDuration": 90},
        ]
        response = self.client.post(
            "/resume/generate-interview-questions",
            json={"resumeText": self.resume_text, "jobDescription": "Senior backend role"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Tạo câu hỏi phỏng vấn thành công")
        self.assertEqual([q["id"] for q in body["data"]], [1, 2])
        self.ai_client.generate_questions.assert_called_once_with(self.resume_text, "Senior backend role")

    def test_generate_questions_too_short_never_calls_provider(self):
        response = self.client.post(
            "/resume/generate-interview-questions",
            json={"resumeText": "q" * 49, "jobDescription": ""},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errorKind"], "TooShort")
        self.ai_client.generate_questions.assert_not_called()

    def test_rate_limit_returns_envelope(self):
        statuses = [
            self.client.post("/resume/analyze-text", json={"text": "short"}).status_code
            for _ in range(31)
        ]
        self.assertEqual(statuses[:30], [400] * 30)
        self.assertEqual(statuses[30], 429)
        body = self.client.post("/resume/analyze-text", json={"text": "short"}).json()
        self.assertFalse(body["success"])
        self.assertIn("quá nhiều yêu cầu", body["error"])


if __name__ == "__main__":
    unittest.main()
