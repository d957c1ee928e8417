import asyncio

import pytest
from google.api_core import exceptions as google_exceptions

from ai import predictor
from utils.errors import PredictionError, QuotaExceededError, RateLimitError


class _Response:
    def __init__(self, text):
        self.text = text


class _FakeModel:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.prompts = []

    async def generate_content_async(self, prompt, generation_config=None):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return _Response(self.text)


class TestExtractPredictions:
    def test_plain_json(self):
        assert predictor.extract_predictions('{"summary": "ok", "burnRate": {"monthly": 5}}') == {
            "summary": "ok",
            "burnRate": {"monthly": 5},
        }

    def test_json_inside_markdown_fence(self):
        content = 'Here you go:\n```json\n{"riskAssessment": {"level": "low", "risks": []}}\n```'
        assert predictor.extract_predictions(content) == {
            "riskAssessment": {"level": "low", "risks": []},
        }

    def test_no_json_becomes_summary(self):
        assert predictor.extract_predictions("  Revenue looks stable.  ") == {"summary": "Revenue looks stable."}

    def test_malformed_json_becomes_summary(self):
        content = "{not really json}"
        assert predictor.extract_predictions(content) == {"summary": content}

    def test_empty_reply(self):
        assert predictor.extract_predictions(None) == {"summary": ""}


class TestRequestPredictions:
    def test_success(self, monkeypatch):
        model = _FakeModel(text='{"summary": "Growing"}')
        monkeypatch.setattr(predictor, "_model", model)

        assert asyncio.run(predictor.request_predictions({"totalIncome": 100})) == {"summary": "Growing"}
        assert '"totalIncome": 100' in model.prompts[0]

    def test_429_is_rate_limit(self, monkeypatch):
        monkeypatch.setattr(predictor, "_model", _FakeModel(error=google_exceptions.TooManyRequests("slow down")))
        with pytest.raises(RateLimitError, match="Rate limits exceeded, please try again later."):
            asyncio.run(predictor.request_predictions({}))

    def test_402_is_quota(self, monkeypatch):
        error = google_exceptions.from_http_status(402, "billing")
        monkeypatch.setattr(predictor, "_model", _FakeModel(error=error))
        with pytest.raises(QuotaExceededError, match="Payment required, please add funds."):
            asyncio.run(predictor.request_predictions({}))

    def test_other_status_is_generic(self, monkeypatch):
        monkeypatch.setattr(predictor, "_model", _FakeModel(error=google_exceptions.InternalServerError("boom")))
        with pytest.raises(PredictionError) as info:
            asyncio.run(predictor.request_predictions({}))
        assert type(info.value) is PredictionError
        assert info.value.status == 500
        assert str(info.value) == "Failed to generate predictions"

    def test_unexpected_error_is_generic(self, monkeypatch):
        monkeypatch.setattr(predictor, "_model", _FakeModel(error=RuntimeError("socket closed")))
        with pytest.raises(PredictionError) as info:
            asyncio.run(predictor.request_predictions({}))
        assert info.value.status is None


def test_request_uses_the_async_client():
    # _FakeModel has no synchronous generate_content, so the tests above only
    # pass through generate_content_async
    assert asyncio.iscoroutinefunction(predictor.request_predictions)
    assert not hasattr(_FakeModel(), "generate_content")
