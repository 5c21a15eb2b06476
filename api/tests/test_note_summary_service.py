"""
Tests for the Gemini note summarizer. The HTTP session is mocked.
"""
import json
from unittest.mock import MagicMock

import pytest
import requests

from studydeck.core.exceptions import GenerationError
from studydeck.models.enums import NoteComplexity
from studydeck.services.note_summary_service import GeminiNoteSummarizer, parse_note_summary


def gemini_response(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def http_session():
    session = MagicMock(spec=requests.Session)
    session.post.return_value.raise_for_status.return_value = None
    return session


@pytest.fixture
def summarizer(http_session):
    return GeminiNoteSummarizer(api_key="test-key", model_name="gemini-test", http_session=http_session)


SUMMARY_JSON = json.dumps({
    "summary": "Newton's laws describe motion.",
    "keyPoints": ["F = ma", "Every action has an equal and opposite reaction", ""],
    "complexity": "Basic",
    "tags": ["physics", "mechanics", "physics"],
})


class TestSummarizeText:
    def test_parses_summary(self, summarizer, http_session):
        http_session.post.return_value.json.return_value = gemini_response(f"```json\n{SUMMARY_JSON}\n```")

        result = summarizer.summarize_text("Newton's three laws ...")

        assert result.summary == "Newton's laws describe motion."
        assert result.key_points == ["F = ma", "Every action has an equal and opposite reaction"]
        assert result.complexity == NoteComplexity.BASIC
        assert result.tags == ["physics", "mechanics"]
        prompt = http_session.post.call_args.kwargs["json"]["contents"][0]["parts"][0]["text"]
        assert "Newton's three laws" in prompt

    def test_transport_error(self, summarizer, http_session):
        http_session.post.side_effect = requests.exceptions.Timeout("read timed out")

        with pytest.raises(GenerationError):
            summarizer.summarize_text("text")

    @pytest.mark.parametrize("text", ["[]", '{"keyPoints": []}', '{"summary": "   "}', "not json"])
    def test_malformed_answers(self, summarizer, http_session, text):
        http_session.post.return_value.json.return_value = gemini_response(text)

        with pytest.raises(GenerationError):
            summarizer.summarize_text("text")


class TestParseNoteSummary:
    def test_unknown_complexity_is_dropped(self):
        result = parse_note_summary({"summary": "S", "complexity": "expert"})

        assert result.complexity is None
        assert result.key_points == []
        assert result.tags == []
