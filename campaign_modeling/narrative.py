"""
Narrative collaborator: LLM-written summary, recommendations and warning texts.

Providers:
  - GeminiNarrativeService (google-genai, structured JSON output)
  - OpenAINarrativeService (chat completions, JSON parsed into the same schema)

Env:
  export GEMINI_API_KEY="your_key"   # or OPENAI_API_KEY with provider "openai"

Every provider error is raised as NarrativeServiceError; callers fall back to the
deterministic texts built by fallback_content() / FALLBACK_COMPETITOR_SUMMARY.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from google import genai
from google.genai import types
from openai import OpenAI

from .errors import NarrativeServiceError
from .models import (
    AdvancedInsights, CampaignBrief, GeneratedInsights, GeneratedWarning, KpiSet,
    NarrativeChecks, NarrativeContent, UIWarning, ValidationFlag
)
from .settings import EngineSettings

logger = logging.getLogger(__name__)

FALLBACK_COMPETITOR_SUMMARY = (
    "Competitors typically spread their budget across the best-performing platforms "
    "in this industry to reach the highest possible return."
)
EXPLAIN_ALLOCATION = "Budget allocation"
EXPLAIN_ROAS = "ROAS estimate"
EXPLAIN_CAC = "Customer acquisition cost (CAC)"


# --------- Schema for structured output ---------
class ExplainabilityEntry(BaseModel):
    topic: str = Field(..., description="What is being explained, e.g. 'Budget allocation'")
    explanation: str = Field(..., description="One or two sentences")


class InsightTexts(BaseModel):
    arpu: str = ""
    cac: str = ""
    break_even_roas: str = ""
    seasonal_lift: str = ""


class GeneratedAnomaly(BaseModel):
    kpi: str
    issue: str
    severity: str = Field(default="low", description="low, medium or high")
    message: str
    expected: str = ""
    actual: str = ""


class NarrativeResponse(BaseModel):
    confidence: float = Field(..., description="Confidence in the projections, 0..1")
    narrative: str = Field(..., description="Executive summary of the campaign plan")
    recommendations: List[str] = Field(default_factory=list)
    explainability: List[ExplainabilityEntry] = Field(default_factory=list)
    generated_advanced_insights: Optional[InsightTexts] = None
    generated_anomalies: List[GeneratedAnomaly] = Field(default_factory=list)
    generated_ui_warnings: List[GeneratedWarning] = Field(default_factory=list)
    checks: Optional[NarrativeChecks] = None

    @field_validator("generated_anomalies", "generated_ui_warnings", mode="before")
    @classmethod
    def _lists_only(cls, value):
        # providers sometimes answer "none" or null instead of an empty list
        return value if isinstance(value, list) else []


class WarningMessages(BaseModel):
    messages: List[GeneratedWarning]


# --------- Prompts ---------
def build_report_prompt(payload: Dict[str, Any]) -> str:
    return f"""
You are a senior performance-marketing strategist for the Saudi market.
Write a campaign report from the projected data below. Do not change any number.

Return JSON with:
- confidence: 0..1, how reliable the projections look
- narrative: a short executive summary (budget, platforms, expected ROAS and CAC)
- recommendations: 3-5 concrete actions
- explainability: entries for "{EXPLAIN_ALLOCATION}", "{EXPLAIN_ROAS}" and "{EXPLAIN_CAC}"
- generated_advanced_insights: one sentence each for arpu, cac, break_even_roas, seasonal_lift
- generated_anomalies: extra anomalies you notice (kpi, issue, severity, message, expected, actual)
- generated_ui_warnings: a user-friendly message for each ui warning code
- checks: roas_budget_identity_ok, arpu_revenue_identity_ok, awareness_finance_zero_ok

DATA:
{json.dumps(payload, indent=2, default=str)}
""".strip()


def build_competitor_prompt(industry: str, totals: KpiSet) -> str:
    return (
        f"You are a marketing analyst. Based on these KPIs of a typical competitor in '{industry}', "
        f"write a one or two sentence summary of their likely strategy. Be direct and concise.\n"
        f"- ROAS: {totals.roas:.2f}x\n"
        f"- CPC: {totals.cpc:.2f}\n"
        f"- CAC: {totals.cac:.2f}"
    )


def build_warning_prompt(warnings: List[UIWarning]) -> str:
    items = [{"code": w.code, "severity": w.severity, "context": w.context} for w in warnings]
    return f"Write one short, user-friendly message per warning code for these campaign input warnings: {json.dumps(items, default=str)}"


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith('```json'):
        text = text[7:]
    elif text.startswith('```'):
        text = text[3:]
    if text.endswith('```'):
        text = text[:-3]
    return text.strip()


def to_content(response: NarrativeResponse) -> NarrativeContent:
    """Convert a provider response into NarrativeContent, clamping/sanitizing fields."""
    anomalies = []
    for a in response.generated_anomalies:
        severity = a.severity.lower() if a.severity and a.severity.lower() in ("low", "medium", "high") else "low"
        anomalies.append(ValidationFlag(kpi=a.kpi, issue=a.issue, severity=severity, message=a.message,
                                        expected=a.expected or None, actual=a.actual or None))
    insights = None
    if response.generated_advanced_insights is not None:
        texts = response.generated_advanced_insights
        insights = GeneratedInsights(arpu=texts.arpu or None, cac=texts.cac or None,
                                     break_even_roas=texts.break_even_roas or None,
                                     seasonal_lift=texts.seasonal_lift or None)
    return NarrativeContent(
        confidence=max(0.0, min(1.0, response.confidence or 0.0)),
        narrative=response.narrative,
        recommendations=list(response.recommendations),
        explainability={e.topic: e.explanation for e in response.explainability},
        generated_advanced_insights=insights,
        generated_anomalies=anomalies,
        generated_ui_warnings=list(response.generated_ui_warnings),
        checks=response.checks or NarrativeChecks(),
    )


# --------- Services ---------
class NarrativeService:
    """Interface of the narrative collaborator."""

    name = "base"

    def generate_content(self, payload: Dict[str, Any]) -> NarrativeContent:
        raise NotImplementedError

    def summarize_competitor(self, industry: str, totals: KpiSet) -> str:
        raise NotImplementedError

    def rephrase_warnings(self, warnings: List[UIWarning]) -> Dict[str, str]:
        raise NotImplementedError


class GeminiNarrativeService(NarrativeService):
    name = "gemini"

    def __init__(self, model_name: str = "gemini-2.5-flash", temperature: float = 0.6, client=None):
        self.model_name = model_name
        self.temperature = temperature
        try:
            self.client = client or genai.Client()
        except Exception as e:
            raise NarrativeServiceError(f"Failed to initialize Gemini client: {e}") from e

    def _config(self, schema=None) -> types.GenerateContentConfig:
        if schema is None:
            return types.GenerateContentConfig(temperature=self.temperature, top_p=0.9, top_k=40)
        return types.GenerateContentConfig(
            temperature=self.temperature,
            top_p=0.9,
            top_k=40,
            response_mime_type="application/json",
            response_schema=schema,  # Pydantic schema -> constrained JSON
        )

    def _generate(self, prompt: str, schema=None):
        try:
            return self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self._config(schema),
            )
        except Exception as e:
            raise NarrativeServiceError(f"Gemini request failed: {e}") from e

    def _parse(self, response, schema):
        parsed = getattr(response, 'parsed', None)
        if isinstance(parsed, schema):
            return parsed
        text = getattr(response, 'text', None)
        if not text:
            raise NarrativeServiceError("Gemini did not return parsed JSON.")
        try:
            return schema(**json.loads(_strip_fences(text)))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            raise NarrativeServiceError(f"Failed to parse Gemini response: {e}. Response: {text[:500]}") from e

    def generate_content(self, payload: Dict[str, Any]) -> NarrativeContent:
        response = self._generate(build_report_prompt(payload), NarrativeResponse)
        return to_content(self._parse(response, NarrativeResponse))

    def summarize_competitor(self, industry: str, totals: KpiSet) -> str:
        response = self._generate(build_competitor_prompt(industry, totals))
        text = (getattr(response, 'text', None) or "").strip()
        if not text:
            raise NarrativeServiceError("Gemini returned an empty competitor summary")
        return text

    def rephrase_warnings(self, warnings: List[UIWarning]) -> Dict[str, str]:
        response = self._generate(build_warning_prompt(warnings), WarningMessages)
        parsed = self._parse(response, WarningMessages)
        return {m.code: m.message for m in parsed.messages}


class OpenAINarrativeService(NarrativeService):
    name = "openai"

    def __init__(self, api_key: Optional[str] = None, model: str = "gpt-4o-mini", temperature: float = 0.6,
                 client=None):
        self.model = model
        self.temperature = temperature
        self.client = client or OpenAI(api_key=api_key)

    def _complete(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
            return (response.choices[0].message.content or "").strip()
        except Exception as e:
            raise NarrativeServiceError(f"OpenAI request failed: {e}") from e

    def _complete_json(self, prompt: str, schema):
        schema_text = json.dumps(schema.model_json_schema())
        response_text = self._complete(f"{prompt}\n\nRespond with JSON only, matching this schema:\n{schema_text}")
        try:
            return schema(**json.loads(_strip_fences(response_text)))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            raise NarrativeServiceError(f"Error parsing OpenAI response: {e}. Raw response: {response_text[:500]}") from e

    def generate_content(self, payload: Dict[str, Any]) -> NarrativeContent:
        return to_content(self._complete_json(build_report_prompt(payload), NarrativeResponse))

    def summarize_competitor(self, industry: str, totals: KpiSet) -> str:
        text = self._complete(build_competitor_prompt(industry, totals))
        if not text:
            raise NarrativeServiceError("OpenAI returned an empty competitor summary")
        return text

    def rephrase_warnings(self, warnings: List[UIWarning]) -> Dict[str, str]:
        parsed = self._complete_json(build_warning_prompt(warnings), WarningMessages)
        return {m.code: m.message for m in parsed.messages}


def build_narrative_service(settings: EngineSettings) -> Optional[NarrativeService]:
    """Pick a provider from settings; None when no provider is usable (fallback texts only)."""
    provider = settings.narrative_provider
    try:
        if provider == "gemini":
            if not os.getenv("GEMINI_API_KEY"):
                logger.info("GEMINI_API_KEY not set, narrative will use fallback text")
                return None
            return GeminiNarrativeService(model_name=settings.gemini_model, temperature=settings.temperature)
        if provider == "openai":
            api_key = os.getenv("OPENAI_API_KEY")
            if not api_key:
                logger.info("OPENAI_API_KEY not set, narrative will use fallback text")
                return None
            return OpenAINarrativeService(api_key=api_key, model=settings.openai_model,
                                          temperature=settings.temperature)
    except Exception as e:
        logger.warning("Could not initialize %s narrative service: %s", provider, e)
    return None


# --------- Deterministic fallbacks ---------
def fallback_content(brief: CampaignBrief, totals: KpiSet, insights: AdvancedInsights) -> NarrativeContent:
    """Report texts built only from computed numbers, used when the service fails.

    Guardrail anomalies and preflight warning messages are left as they are.
    """
    return NarrativeContent(
        confidence=0.5,
        narrative=(
            f"Proposed advertising plan for a budget of {brief.budget:,.0f} in {brief.industry}. "
            f"Expected return on ad spend (ROAS) is about {totals.roas:.2f}x. "
            f"This summary was generated without the AI service."
        ),
        recommendations=[
            "Focus spend on the best-performing platforms for your industry.",
            "Make sure the ad creative matches your audience's expectations for the selected season.",
        ],
        explainability={
            EXPLAIN_ALLOCATION: "Allocated from typical platform performance data for your industry.",
            EXPLAIN_ROAS: "Calculated from Saudi market performance averages.",
            EXPLAIN_CAC: "Estimated from the average conversion cost in your industry.",
        },
        generated_advanced_insights=GeneratedInsights(
            arpu=insights.arpu.insight,
            cac=insights.cac.insight,
            break_even_roas=insights.break_even_roas.insight,
            seasonal_lift=insights.seasonal_lift.insight,
        ),
        checks=NarrativeChecks(
            roas_budget_identity_ok=True,
            arpu_revenue_identity_ok=True,
            awareness_finance_zero_ok=brief.funnel_stage != "conversion",
        ),
    )


def preflight_messages(warnings: List[UIWarning], service: Optional[NarrativeService]) -> List[UIWarning]:
    """Optionally let the narrative service rephrase preflight warning messages."""
    if service is None or not warnings:
        return warnings
    try:
        messages = service.rephrase_warnings(warnings)
    except NarrativeServiceError as e:
        logger.warning("Warning rephrasing failed, keeping default messages: %s", e)
        return warnings
    return [w.model_copy(update={"message": messages.get(w.code) or w.message}) for w in warnings]
