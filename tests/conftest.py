import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from campaign_modeling.benchmarks import default_repository
from campaign_modeling.errors import NarrativeServiceError
from campaign_modeling.models import CampaignBrief, NarrativeContent
from campaign_modeling.narrative import NarrativeService


@pytest.fixture()
def repository():
    return default_repository()


@pytest.fixture()
def make_brief():
    """Build a CampaignBrief with sensible defaults, overridable by keyword."""
    def _make(**overrides):
        data = {
            "industry": "e-commerce",
            "budget": 80000,
            "platforms": ["meta", "google_ads"],
            "goals": ["Sales"],
            "seasons": [],
            "profitMargin": 30,
        }
        data.update(overrides)
        return CampaignBrief(**data)
    return _make


class StubNarrativeService(NarrativeService):
    """Returns canned content and records the calls it receives."""

    name = "stub"

    def __init__(self, content=None, summary="Competitors lean on search.", messages=None):
        self.content = content or NarrativeContent(
            confidence=0.8,
            narrative="Stub narrative",
            recommendations=["Test more creatives"],
            explainability={"Budget allocation": "From the industry split."},
        )
        self.summary = summary
        self.messages = messages or {}
        self.payloads = []
        self.competitor_calls = []

    def generate_content(self, payload):
        self.payloads.append(payload)
        return self.content

    def summarize_competitor(self, industry, totals):
        self.competitor_calls.append((industry, totals))
        return self.summary

    def rephrase_warnings(self, warnings):
        return dict(self.messages)


class FailingNarrativeService(NarrativeService):
    name = "failing"

    def generate_content(self, payload):
        raise NarrativeServiceError("service unavailable")

    def summarize_competitor(self, industry, totals):
        raise NarrativeServiceError("service unavailable")

    def rephrase_warnings(self, warnings):
        raise NarrativeServiceError("service unavailable")


@pytest.fixture()
def stub_service():
    return StubNarrativeService()


@pytest.fixture()
def failing_service():
    return FailingNarrativeService()


@pytest.fixture()
def fake_genai_client():
    """Minimal stand-in for genai.Client: client.models.generate_content(...)."""
    def _make(text=None, parsed=None, error=None):
        calls = []

        def generate_content(model, contents, config):
            calls.append({"model": model, "contents": contents, "config": config})
            if error is not None:
                raise error
            return SimpleNamespace(text=text, parsed=parsed)

        client = SimpleNamespace(models=SimpleNamespace(generate_content=generate_content))
        client.calls = calls
        return client
    return _make


@pytest.fixture()
def fake_openai_client():
    """Minimal stand-in for OpenAI: client.chat.completions.create(...)."""
    def _make(content=None, error=None):
        calls = []

        def create(model, messages, temperature):
            calls.append({"model": model, "messages": messages, "temperature": temperature})
            if error is not None:
                raise error
            message = SimpleNamespace(content=content)
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

        client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
        client.calls = calls
        return client
    return _make


@pytest.fixture()
def write_json(tmp_path: Path):
    """Write a JSON document under tmp_path and return its path as a string."""
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data) if not isinstance(data, str) else data)
        return str(path)
    return _write


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path):
    """Keep developer config and API keys out of the tests."""
    for var in ("CAMPAIGN_BENCHMARKS_PATH", "CAMPAIGN_ENGINE_SETTINGS", "CAMPAIGN_NARRATIVE_PROVIDER",
                "CAMPAIGN_TOTALS_MODE", "GEMINI_MODEL", "OPENAI_MODEL", "GEMINI_API_KEY", "OPENAI_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("CAMPAIGN_BENCHMARKS_PATH", str(tmp_path / "missing_benchmarks.json"))
    monkeypatch.setenv("CAMPAIGN_ENGINE_SETTINGS", str(tmp_path / "missing_settings.json"))
