"""Unit tests for answer generation and its timeout/fallback chain."""

import pytest

from docrag.errors import MalformedResponse, ProviderTimeout, ProviderUnavailable
from docrag.llm.generator import APOLOGY_MESSAGE, RetryPolicy
from docrag.llm.prompts import CONTEXT_OPTIONS, GENERAL_OPTIONS, clean_list_response
from docrag.models.enums import GenerationStatus
from docrag.models.generation import GenerationResult


def sent_prompts(mock_client):
    return [c.args[1] for c in mock_client.generate.call_args_list]


class TestComplete:
    def test_success_is_stripped(self, generator, mock_client):
        mock_client.generate.return_value = "  Paris.  \n"
        result = generator.complete("prompt", {})
        assert result.ok
        assert result.text == "Paris."

    def test_timeout(self, generator, mock_client):
        mock_client.generate.side_effect = ProviderTimeout("generate timed out after 1.0s")
        assert generator.complete("prompt", {}).status == GenerationStatus.TIMED_OUT

    @pytest.mark.parametrize("error", [ProviderUnavailable("down"), MalformedResponse("bad")])
    def test_other_errors_fail(self, generator, mock_client, error):
        mock_client.generate.side_effect = error
        result = generator.complete("prompt", {})
        assert result.status == GenerationStatus.FAILED
        assert result.reason

    def test_blank_response_fails(self, generator, mock_client):
        mock_client.generate.return_value = "   "
        assert generator.complete("prompt", {}).status == GenerationStatus.FAILED

    def test_passes_model_and_timeout(self, generator, mock_client):
        mock_client.generate.return_value = "ok"
        generator.complete("prompt", {"num_predict": 5})
        mock_client.generate.assert_called_once_with("test-model", "prompt", {"num_predict": 5}, timeout=1.0)


class TestGenerate:
    def test_contextual_prompt(self, generator, mock_client):
        mock_client.generate.return_value = "Berlin."
        answer = generator.generate("Where is the office?", ["The office is in Berlin."])
        assert answer == "Berlin."
        prompt, options = mock_client.generate.call_args.args[1:3]
        assert "Context: The office is in Berlin." in prompt
        assert "Where is the office?" in prompt
        assert options == CONTEXT_OPTIONS
        assert options["stop"] == ["\n"]

    def test_general_prompt_without_context(self, generator, mock_client):
        mock_client.generate.return_value = "Lima."
        assert generator.generate("What is the capital of Peru?") == "Lima."
        prompt, options = mock_client.generate.call_args.args[1:3]
        assert "Context:" not in prompt
        assert options == GENERAL_OPTIONS
        assert options["num_predict"] == 200

    def test_context_is_truncated_to_budget(self, generator, mock_client):
        mock_client.generate.return_value = "ok"
        generator.generate("q", ["a" * 600, "b" * 600])
        prompt = sent_prompts(mock_client)[0]
        assert "a" * 600 in prompt
        assert "b" * 200 not in prompt

    def test_timeout_retries_with_best_chunk(self, generator, mock_client):
        mock_client.generate.side_effect = [ProviderTimeout("slow"), "Berlin."]
        answer = generator.generate("Where?", ["best chunk text", "second chunk text"])
        assert answer == "Berlin."
        first, second = sent_prompts(mock_client)
        assert "second chunk text" in first
        assert "best chunk text" in second
        assert "second chunk text" not in second

    def test_repeated_timeout_returns_apology(self, generator, mock_client):
        mock_client.generate.side_effect = ProviderTimeout("slow")
        answer = generator.generate("Where?", ["one", "two", "three"])
        assert answer == APOLOGY_MESSAGE
        assert mock_client.generate.call_count == 2

    def test_timeout_with_single_chunk_does_not_retry(self, generator, mock_client):
        mock_client.generate.side_effect = ProviderTimeout("slow")
        assert generator.generate("Where?", ["only chunk"]) == APOLOGY_MESSAGE
        assert mock_client.generate.call_count == 1

    def test_timeout_without_context_does_not_retry(self, generator, mock_client):
        mock_client.generate.side_effect = ProviderTimeout("slow")
        assert generator.generate("Where?") == APOLOGY_MESSAGE
        assert mock_client.generate.call_count == 1

    def test_non_timeout_error_does_not_retry(self, generator, mock_client):
        mock_client.generate.side_effect = ProviderUnavailable("down")
        assert generator.generate("Where?", ["one", "two"]) == APOLOGY_MESSAGE
        assert mock_client.generate.call_count == 1

    def test_never_raises_on_malformed_response(self, generator, mock_client):
        mock_client.generate.side_effect = MalformedResponse("missing response", detail="{}")
        assert generator.generate("Where?", ["one"]) == APOLOGY_MESSAGE


class TestRetryPolicy:
    def test_retries_timeout_once_with_multiple_chunks(self):
        policy = RetryPolicy()
        timed_out = GenerationResult.timed_out()
        assert policy.should_retry(timed_out, attempt=0, num_chunks=2)
        assert not policy.should_retry(timed_out, attempt=1, num_chunks=2)

    def test_never_retries_failures_or_single_chunk(self):
        policy = RetryPolicy()
        assert not policy.should_retry(GenerationResult.failed("down"), attempt=0, num_chunks=3)
        assert not policy.should_retry(GenerationResult.timed_out(), attempt=0, num_chunks=1)

    def test_zero_retries(self):
        assert not RetryPolicy(max_retries=0).should_retry(GenerationResult.timed_out(), 0, 5)


class TestExtractSkills:
    def test_returns_cleaned_list(self, generator, mock_client):
        mock_client.generate.return_value = "- Go\n\n* Rust\n1. Python\n"
        assert generator.extract_skills("Skills: Go, Rust, Python.") == "Go\nRust\nPython"
        assert "Skills: Go, Rust, Python." in sent_prompts(mock_client)[0]

    def test_returns_none_on_failure(self, generator, mock_client):
        mock_client.generate.side_effect = ProviderUnavailable("down")
        assert generator.extract_skills("Skills: Go.") is None

    def test_returns_none_when_only_bullets(self, generator, mock_client):
        mock_client.generate.return_value = "-\n*\n"
        assert generator.extract_skills("Skills: Go.") is None


class TestCleanListResponse:
    def test_strips_bullets_and_blank_lines(self):
        raw = "Languages:\n  - Go\n  • Rust\n\n2) Python\n+ Docker"
        assert clean_list_response(raw) == "Languages:\nGo\nRust\nPython\nDocker"

    def test_keeps_plain_lines(self):
        assert clean_list_response("Go\nRust") == "Go\nRust"
