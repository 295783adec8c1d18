import unittest
from dataclasses import replace
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from openai import OpenAIError

from resume_ai.ai.base import coerce_analysis, coerce_questions, parse_json_payload
from resume_ai.ai.config import AIConfig
from resume_ai.ai.factory import LazyAIClient
from resume_ai.ai.prompts import build_analysis_messages, build_question_messages
from resume_ai.ai.providers.gemini_provider import GeminiProvider
from resume_ai.ai.providers.openai_provider import OpenAIProvider
from resume_ai.core.errors import ProviderError

RESUME = "Dang Van H, DevOps engineer: Kubernetes, Terraform, GitLab CI, on-call lead for 2 years."


def _config(provider: str = "openai") -> AIConfig:
    return AIConfig(
        provider=provider,
        model="test-model",
        timeout_s=5.0,
        max_retries=0,
        question_count=3,
        question_seconds=120,
    )


def _openai_client(content: str | None) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )
    return client


class PayloadParsingTests(unittest.TestCase):
    def test_plain_and_fenced_json(self):
        self.assertEqual(parse_json_payload('{"a": 1}'), {"a": 1})
        self.assertEqual(parse_json_payload('```json\n{"a": 2}\n```'), {"a": 2})

    def test_empty_and_invalid_json_raise_provider_error(self):
        with self.assertRaises(ProviderError) as ctx:
            parse_json_payload("   ")
        self.assertEqual(ctx.exception.code, "empty_response")
        with self.assertRaises(ProviderError) as ctx:
            parse_json_payload("not json at all")
        self.assertEqual(ctx.exception.code, "invalid_json")

    def test_questions_keep_order_and_fill_defaults(self):
        payload = {
            "questions": [
                {"id": 2, "question": "Second?", "expectedDuration": 60},
                "Plain string question?",
                {"text": "Alt key question?", "allocatedSeconds": "45"},
            ]
        }
        questions = coerce_questions(payload, default_seconds=120)
        self.assertEqual([q.question for q in questions], ["Second?", "Plain string question?", "Alt key question?"])
        self.assertEqual([q.id for q in questions], [2, 2, 3])
        self.assertEqual([q.expected_duration for q in questions], [60, 120, 45])

    def test_bare_list_is_accepted(self):
        questions = coerce_questions([{"question": "Only one?"}], default_seconds=90)
        self.assertEqual(len(questions), 1)
        self.assertEqual(questions[0].expected_duration, 90)

    def test_question_without_text_is_rejected(self):
        with self.assertRaises(ProviderError):
            coerce_questions({"questions": [{"id": 1, "question": "  "}]}, default_seconds=120)

    def test_missing_question_list_is_rejected(self):
        with self.assertRaises(ProviderError):
            coerce_questions({"items": []}, default_seconds=120)

    def test_analysis_keeps_unknown_fields(self):
        analysis = coerce_analysis({"score": 77, "summary": "ok", "overall_verdict": "hire"})
        self.assertEqual(analysis.score, 77)
        self.assertEqual(analysis.model_dump()["overall_verdict"], "hire")

    def test_analysis_score_out_of_range_is_rejected(self):
        with self.assertRaises(ProviderError):
            coerce_analysis({"score": 140})


class PromptTests(unittest.TestCase):
    def test_job_description_is_included_only_when_present(self):
        without_jd = build_analysis_messages(RESUME, None)
        with_jd = build_analysis_messages(RESUME, "SRE role")
        self.assertNotIn("MÔ TẢ CÔNG VIỆC", without_jd[1].content)
        self.assertIn("SRE role", with_jd[1].content)
        self.assertEqual(with_jd[0].role, "system")

    def test_question_prompt_mentions_count_and_duration(self):
        messages = build_question_messages(RESUME, None, question_count=7, question_seconds=90)
        self.assertIn("7", messages[0].content)
        self.assertIn("90", messages[0].content)


class OpenAIProviderTests(unittest.TestCase):
    def test_analyze_uses_json_mode(self):
        client = _openai_client('{"score": 64, "strengths": ["Terraform"]}')
        provider = OpenAIProvider(_config(), client=client)
        analysis = provider.analyze(RESUME, "Platform engineer")
        self.assertEqual(analysis.score, 64)
        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})
        self.assertIn("Platform engineer", kwargs["messages"][1]["content"])

    def test_generate_questions(self):
        client = _openai_client('{"questions": [{"id": 1, "question": "Why Terraform?", "expectedDuration": 100}]}')
        provider = OpenAIProvider(_config(), client=client)
        questions = provider.generate_questions(RESUME)
        self.assertEqual(questions[0].question, "Why Terraform?")
        self.assertEqual(questions[0].expected_duration, 100)

    def test_sdk_error_becomes_provider_error(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = OpenAIError("rate limited")
        provider = OpenAIProvider(_config(), client=client)
        with self.assertRaises(ProviderError) as ctx:
            provider.analyze(RESUME)
        self.assertIn("rate limited", str(ctx.exception))

    def test_empty_content_becomes_provider_error(self):
        provider = OpenAIProvider(_config(), client=_openai_client(None))
        with self.assertRaises(ProviderError):
            provider.analyze(RESUME)


class GeminiProviderTests(unittest.TestCase):
    def test_analyze_sends_system_instruction_and_json_mime_type(self):
        client = MagicMock()
        client.models.generate_content.return_value = SimpleNamespace(text='{"score": 88, "summary": "Strong"}')
        provider = GeminiProvider(_config("gemini"), client=client)
        analysis = provider.analyze(RESUME, None)
        self.assertEqual(analysis.summary, "Strong")
        kwargs = client.models.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertEqual(kwargs["config"].response_mime_type, "application/json")
        self.assertTrue(kwargs["config"].system_instruction)
        self.assertEqual(len(kwargs["contents"]), 1)
        self.assertEqual(kwargs["contents"][0].role, "user")

    def test_client_gets_timeout_and_retry_attempts(self):
        config = replace(_config("gemini"), timeout_s=12.5, max_retries=5)
        with patch("resume_ai.ai.providers.gemini_provider.genai.Client") as client_cls:
            GeminiProvider(config, api_key="test-key")
        kwargs = client_cls.call_args.kwargs
        self.assertEqual(kwargs["api_key"], "test-key")
        self.assertEqual(kwargs["http_options"].timeout, 12500)
        self.assertEqual(kwargs["http_options"].retry_options.attempts, 6)

    def test_zero_retries_means_a_single_attempt(self):
        with patch("resume_ai.ai.providers.gemini_provider.genai.Client") as client_cls:
            GeminiProvider(_config("gemini"), api_key="test-key")
        self.assertEqual(client_cls.call_args.kwargs["http_options"].retry_options.attempts, 1)

    def test_missing_api_key_is_provider_error(self):
        with patch.dict("os.environ", {"GEMINI_API_KEY": ""}):
            with self.assertRaises(ProviderError) as ctx:
                GeminiProvider(_config("gemini"))
        self.assertEqual(ctx.exception.code, "provider_not_configured")

    def test_blank_reply_becomes_provider_error(self):
        client = MagicMock()
        client.models.generate_content.return_value = SimpleNamespace(text=None)
        provider = GeminiProvider(_config("gemini"), client=client)
        with self.assertRaises(ProviderError):
            provider.generate_questions(RESUME)


class LazyAIClientTests(unittest.TestCase):
    def test_delegates_to_configured_provider(self):
        provider = MagicMock()
        provider.analyze.return_value = {"score": 1}
        with patch("resume_ai.ai.factory.get_ai_client", return_value=provider):
            client = LazyAIClient()
            self.assertEqual(client.analyze(RESUME, "JD"), {"score": 1})
            client.generate_questions(RESUME)
        provider.analyze.assert_called_once_with(RESUME, "JD")
        provider.generate_questions.assert_called_once_with(RESUME, None)

    def test_missing_credentials_surface_on_first_call(self):
        error = ProviderError("GEMINI_API_KEY is missing", code="provider_not_configured")
        with patch("resume_ai.ai.factory.get_ai_client", side_effect=error):
            with self.assertRaises(ProviderError):
                LazyAIClient().analyze(RESUME)


if __name__ == "__main__":
    unittest.main()
