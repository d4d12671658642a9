import json

import pytest

from campaign_modeling import narrative
from campaign_modeling.errors import NarrativeServiceError
from campaign_modeling.insights import generate_advanced_insights
from campaign_modeling.models import KpiSet, UIWarning
from campaign_modeling.narrative import (
    EXPLAIN_ALLOCATION, EXPLAIN_CAC, EXPLAIN_ROAS, GeminiNarrativeService, NarrativeResponse,
    OpenAINarrativeService, build_narrative_service, build_report_prompt, fallback_content,
    preflight_messages, to_content
)
from campaign_modeling.settings import EngineSettings

RESPONSE = {
    "confidence": 0.82,
    "narrative": "Spend most of the budget on Meta and Google.",
    "recommendations": ["Launch two weeks before Ramadan"],
    "explainability": [{"topic": "Budget allocation", "explanation": "Industry split."}],
    "generated_advanced_insights": {"arpu": "ARPU is healthy.", "cac": "", "break_even_roas": "",
                                    "seasonal_lift": "Ramadan helps."},
    "generated_anomalies": [{"kpi": "ctr", "issue": "high", "severity": "HIGH", "message": "CTR looks high"}],
    "generated_ui_warnings": [{"code": "BUDGET_TOO_LOW", "message": "Please add budget."}],
}


def test_to_content_sanitizes_response():
    content = to_content(NarrativeResponse(**{**RESPONSE, "confidence": 1.7}))
    assert content.confidence == 1.0
    assert content.explainability == {"Budget allocation": "Industry split."}
    assert content.generated_anomalies[0].severity == "high"
    assert content.generated_anomalies[0].expected is None
    assert content.generated_advanced_insights.arpu == "ARPU is healthy."
    assert content.generated_advanced_insights.cac is None
    assert content.checks.roas_budget_identity_ok


def test_to_content_unknown_severity_becomes_low():
    data = {**RESPONSE, "generated_anomalies": [{"kpi": "cpm", "issue": "x", "severity": "critical", "message": "m"}]}
    assert to_content(NarrativeResponse(**data)).generated_anomalies[0].severity == "low"


def test_report_prompt_carries_payload():
    prompt = build_report_prompt({"results": {"totals": {"roas": 4.2}}})
    assert '"roas": 4.2' in prompt
    assert EXPLAIN_CAC in prompt


def test_gemini_uses_parsed_response(fake_genai_client):
    client = fake_genai_client(parsed=NarrativeResponse(**RESPONSE))
    service = GeminiNarrativeService(model_name="gemini-test", client=client)
    content = service.generate_content({"inputs": {}})

    assert content.narrative == RESPONSE["narrative"]
    call = client.calls[0]
    assert call["model"] == "gemini-test"
    assert call["config"].response_mime_type == "application/json"


def test_gemini_parses_fenced_text(fake_genai_client):
    client = fake_genai_client(text="```json\n" + json.dumps(RESPONSE) + "\n```")
    content = GeminiNarrativeService(client=client).generate_content({})
    assert content.confidence == pytest.approx(0.82)


def test_gemini_bad_json_raises(fake_genai_client):
    service = GeminiNarrativeService(client=fake_genai_client(text="not json at all"))
    with pytest.raises(NarrativeServiceError):
        service.generate_content({})


def test_gemini_request_error_is_wrapped(fake_genai_client):
    service = GeminiNarrativeService(client=fake_genai_client(error=RuntimeError("quota")))
    with pytest.raises(NarrativeServiceError, match="quota"):
        service.summarize_competitor("retail", KpiSet())


def test_gemini_competitor_summary(fake_genai_client):
    client = fake_genai_client(text="  Competitors push hard on Snapchat.  ")
    summary = GeminiNarrativeService(client=client).summarize_competitor("retail", KpiSet(roas=3.0))
    assert summary == "Competitors push hard on Snapchat."
    assert "retail" in client.calls[0]["contents"]


def test_gemini_empty_summary_raises(fake_genai_client):
    with pytest.raises(NarrativeServiceError):
        GeminiNarrativeService(client=fake_genai_client(text="")).summarize_competitor("retail", KpiSet())


def test_openai_generate_content(fake_openai_client):
    client = fake_openai_client(content="```\n" + json.dumps(RESPONSE) + "\n```")
    service = OpenAINarrativeService(model="gpt-test", temperature=0.2, client=client)
    content = service.generate_content({"inputs": {}})

    assert content.recommendations == RESPONSE["recommendations"]
    assert client.calls[0]["model"] == "gpt-test"
    assert client.calls[0]["temperature"] == 0.2


def test_non_list_anomalies_and_warnings_become_empty(fake_openai_client):
    body = {"confidence": 0.8, "narrative": "ok", "generated_anomalies": "none", "generated_ui_warnings": None}
    service = OpenAINarrativeService(client=fake_openai_client(content=json.dumps(body)))
    content = service.generate_content({})

    assert content.narrative == "ok"
    assert content.generated_anomalies == []
    assert content.generated_ui_warnings == []


def test_openai_bad_json_raises(fake_openai_client):
    service = OpenAINarrativeService(client=fake_openai_client(content="Sure! Here you go."))
    with pytest.raises(NarrativeServiceError):
        service.generate_content({})


def test_openai_request_error_is_wrapped(fake_openai_client):
    service = OpenAINarrativeService(client=fake_openai_client(error=ConnectionError("offline")))
    with pytest.raises(NarrativeServiceError):
        service.summarize_competitor("retail", KpiSet())


def test_openai_rephrase_warnings(fake_openai_client):
    client = fake_openai_client(content=json.dumps({"messages": [{"code": "BUDGET_TOO_LOW", "message": "Add budget"}]}))
    warnings = [UIWarning(code="BUDGET_TOO_LOW", severity="high")]
    assert OpenAINarrativeService(client=client).rephrase_warnings(warnings) == {"BUDGET_TOO_LOW": "Add budget"}


def test_build_service_without_keys():
    assert build_narrative_service(EngineSettings(narrative_provider="gemini")) is None
    assert build_narrative_service(EngineSettings(narrative_provider="openai")) is None
    assert build_narrative_service(EngineSettings(narrative_provider="none")) is None


def test_build_service_with_keys(monkeypatch, fake_genai_client):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    service = build_narrative_service(EngineSettings(narrative_provider="openai", openai_model="gpt-x"))
    assert isinstance(service, OpenAINarrativeService)
    assert service.model == "gpt-x"

    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(narrative.genai, "Client", lambda: fake_genai_client(text="ok"))
    service = build_narrative_service(EngineSettings(narrative_provider="gemini"))
    assert isinstance(service, GeminiNarrativeService)


def test_build_service_swallows_init_errors(monkeypatch):
    def broken_client():
        raise RuntimeError("bad credentials")

    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(narrative.genai, "Client", broken_client)
    assert build_narrative_service(EngineSettings(narrative_provider="gemini")) is None


def test_fallback_content(repository, make_brief):
    brief = make_brief(budget=80000, industry="e-commerce", funnelStage="conversion")
    totals = KpiSet(roas=3.25)
    insights = generate_advanced_insights(totals, brief, [], repository)
    content = fallback_content(brief, totals, insights)

    assert content.confidence == 0.5
    assert "80,000" in content.narrative
    assert "e-commerce" in content.narrative
    assert "3.25x" in content.narrative
    assert len(content.recommendations) == 2
    assert set(content.explainability) == {EXPLAIN_ALLOCATION, EXPLAIN_ROAS, EXPLAIN_CAC}
    assert content.generated_advanced_insights.cac == insights.cac.insight
    assert content.generated_anomalies == []
    assert content.generated_ui_warnings == []
    assert content.checks.awareness_finance_zero_ok is False


def test_preflight_messages(stub_service, failing_service):
    warnings = [UIWarning(code="BUDGET_TOO_LOW", severity="high", message="default text"),
                UIWarning(code="SEASON_CONFLICT", severity="medium", message="other text")]
    stub_service.messages = {"BUDGET_TOO_LOW": "Friendly text"}

    rephrased = preflight_messages(warnings, stub_service)
    assert [w.message for w in rephrased] == ["Friendly text", "other text"]
    assert preflight_messages(warnings, failing_service) == warnings
    assert preflight_messages(warnings, None) == warnings
