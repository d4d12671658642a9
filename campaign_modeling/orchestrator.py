"""
Campaign orchestrator: runs the full modeling pipeline for one brief.

    resolve seasons -> platform compatibility -> preflight warnings
    -> allocate (+ tactical reallocation) -> project per platform -> aggregate
    -> guardrails -> advanced insights -> competitor mirror
    -> narrative + competitor summary (concurrent) -> report

The numeric pipeline is synchronous. Only the two narrative calls are awaited, and
each one has a deterministic fallback. Any other failure is returned as
{"errors": [message]}; run_campaign() never raises to its caller.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from .benchmarks import BenchmarkRepository, default_repository
from .budget_allocator import BudgetAllocator, validate_budget_allocation
from .competitor import mirror_competitor
from .guardrails import GuardrailReconciler
from .insights import generate_advanced_insights
from .kpi_projector import KPIProjector, collect_kpis, failed_platforms
from .models import AdvancedInsights, CampaignBrief, KpiSet, NarrativeContent
from .modifiers import ModifierComposer
from .narrative import FALLBACK_COMPETITOR_SUMMARY, NarrativeService, fallback_content
from .reallocation import TacticalReallocator
from .rules import check_platform_compatibility, generate_preflight_warnings, resolve_seasons
from .settings import EngineSettings

logger = logging.getLogger(__name__)

GENERIC_WARNING_MESSAGE = "General warning, please review this input."


def _dump(value: Any) -> Any:
    """Serialize models (and nested dicts/lists of models) with camelCase aliases."""
    if hasattr(value, "model_dump"):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


class CampaignOrchestrator:
    """Wires the engine components around one shared, read-only benchmark repository."""

    def __init__(self, repository: Optional[BenchmarkRepository] = None,
                 settings: Optional[EngineSettings] = None,
                 narrative_service: Optional[NarrativeService] = None):
        self.repository = repository or default_repository()
        self.settings = settings or EngineSettings()
        self.narrative_service = narrative_service

        composer = ModifierComposer(self.settings.cap_pairs(), self.settings.composition_method)
        self.projector = KPIProjector(self.repository, composer)
        self.allocator = BudgetAllocator(
            self.repository, TacticalReallocator(self.repository, self.settings.low_share_threshold)
        )
        self.reconciler = GuardrailReconciler(
            self.repository,
            totals_mode=self.settings.totals_mode,
            apply_corrections=self.settings.apply_corrections,
        )

    # -----------------------------
    # External calls with fallbacks
    # -----------------------------
    async def _narrative(self, payload: Dict[str, Any], brief: CampaignBrief, totals: KpiSet,
                         insights: AdvancedInsights) -> NarrativeContent:
        if self.narrative_service is not None:
            try:
                return await asyncio.to_thread(self.narrative_service.generate_content, payload)
            except Exception as e:
                logger.warning("Narrative generation failed, using fallback: %s", e)
        return fallback_content(brief, totals, insights)

    async def _competitor_summary(self, industry: str, mirror: Optional[Dict[str, Any]]) -> Optional[str]:
        if mirror is None:
            return None
        if self.narrative_service is not None:
            try:
                return await asyncio.to_thread(
                    self.narrative_service.summarize_competitor, industry, mirror["kpis"]["totals"]
                )
            except Exception as e:
                logger.warning("Competitor summary failed, using fallback: %s", e)
        return FALLBACK_COMPETITOR_SUMMARY

    # -----------------------------
    # Pipeline
    # -----------------------------
    async def run(self, brief: Union[CampaignBrief, Dict[str, Any]]) -> Dict[str, Any]:
        try:
            if not isinstance(brief, CampaignBrief):
                brief = CampaignBrief(**brief)
            return await self._run(brief)
        except ValidationError as e:
            logger.error("Invalid campaign brief: %s", e)
            return {"errors": [f"Invalid campaign brief: {e}"]}
        except Exception as e:
            logger.exception("Fatal error in campaign run")
            return {"errors": [str(e) or e.__class__.__name__]}

    async def _run(self, brief: CampaignBrief) -> Dict[str, Any]:
        trace_id = uuid.uuid4().hex
        logger.info("Campaign run %s: industry=%s budget=%.2f", trace_id, brief.industry, brief.budget)

        # Step 1: validation and season resolution
        seasons = resolve_seasons(brief.seasons, self.settings.max_seasons, self.repository)
        compatibility = check_platform_compatibility(brief.industry, brief.platforms, self.repository)
        ui_warnings = generate_preflight_warnings(brief, compatibility, seasons, self.repository)

        # Step 2: budget allocation
        allocation = self.allocator.allocate(brief)
        budget_allocation = allocation.budget_allocation
        allocation_check = validate_budget_allocation(budget_allocation, brief, self.repository)

        # Step 3: per-platform projection
        results = self.projector.project_allocation(budget_allocation, brief, seasons.active)
        per_platform = collect_kpis(results)

        # Step 4: totals and guardrails
        kpis, anomalies, corrections = self.reconciler.reconcile(brief, per_platform)
        totals = kpis["totals"]

        # Step 5: advanced insights and competitor mirror
        insights = generate_advanced_insights(totals, brief, seasons.active, self.repository)
        mirror = mirror_competitor(brief, self.projector, seasons.active, self.settings.totals_mode)

        # Step 6: external content, issued concurrently
        payload = {
            "inputs": _dump(brief),
            "results": _dump(kpis),
            "advancedInsights": _dump(insights),
            "anomalies": _dump(anomalies),
            "corrections": _dump(corrections),
            "reallocationDetails": allocation.reallocation_details,
            "uiWarnings": _dump(ui_warnings),
            "competitorMirror": {"budgetAllocation": mirror["budgetAllocation"]} if mirror else None,
        }
        content, competitor_summary = await asyncio.gather(
            self._narrative(payload, brief, totals, insights),
            self._competitor_summary(brief.industry, mirror),
        )

        # Step 7: assembly
        generated_messages = {w.code: w.message for w in content.generated_ui_warnings}
        final_warnings = [
            w.model_copy(update={"message": generated_messages.get(w.code) or w.message or GENERIC_WARNING_MESSAGE})
            for w in ui_warnings
        ]

        generated = content.generated_advanced_insights
        if generated is not None:
            insights = insights.model_copy(deep=True)
            if generated.arpu:
                insights.arpu.insight = generated.arpu
            if generated.cac:
                insights.cac.insight = generated.cac
            if generated.break_even_roas:
                insights.break_even_roas.insight = generated.break_even_roas
            if generated.seasonal_lift:
                insights.seasonal_lift.insight = generated.seasonal_lift

        failed = failed_platforms(results)
        report = {
            "industry": brief.industry,
            "goals": list(brief.goals),
            "funnelStage": brief.funnel_stage,
            "narrative": content.narrative,
            "recommendations": content.recommendations,
            "explainability": content.explainability,
            "confidence": content.confidence,
            "budgetAllocation": budget_allocation,
            "kpis": _dump(kpis),
            "advancedInsights": _dump(insights),
            "anomalies": _dump(content.generated_anomalies) + _dump(anomalies),
            "corrections": _dump(corrections),
            "aiChecks": _dump(content.checks),
            "uiWarnings": _dump(final_warnings),
            "trace": {
                "seasonResolution": _dump(seasons),
                "platformCompatibility": _dump(compatibility),
                "reallocationDetails": allocation.reallocation_details,
                "originalAllocation": allocation.original_allocation,
                "allocationValidation": _dump(allocation_check),
                "failedPlatforms": failed,
                "validationSummary": {"anomaliesCount": len(anomalies), "correctionsCount": len(corrections)},
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            "traceId": trace_id,
            "competitorMirror": None,
        }
        if mirror is not None:
            report["competitorMirror"] = {
                "summary": competitor_summary,
                "budgetAllocation": mirror["budgetAllocation"],
                "kpis": _dump(mirror["kpis"]),
            }
        logger.info("Campaign run %s finished: %d platform(s), %d failed", trace_id, len(per_platform), len(failed))
        return report


async def run_campaign(brief: Union[CampaignBrief, Dict[str, Any]],
                       repository: Optional[BenchmarkRepository] = None,
                       settings: Optional[EngineSettings] = None,
                       narrative_service: Optional[NarrativeService] = None) -> Dict[str, Any]:
    orchestrator = CampaignOrchestrator(repository, settings, narrative_service)
    return await orchestrator.run(brief)


def run_campaign_sync(brief: Union[CampaignBrief, Dict[str, Any]],
                      repository: Optional[BenchmarkRepository] = None,
                      settings: Optional[EngineSettings] = None,
                      narrative_service: Optional[NarrativeService] = None) -> Dict[str, Any]:
    """Blocking wrapper around run_campaign() for scripts and the CLI."""
    return asyncio.run(run_campaign(brief, repository, settings, narrative_service))
