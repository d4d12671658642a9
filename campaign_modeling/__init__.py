"""
Campaign modeling engine for paid-media plans in the Saudi market.

Quick start:
    from campaign_modeling import run_campaign_sync
    report = run_campaign_sync({"industry": "e-commerce", "budget": 80000,
                                "platforms": ["meta", "google_ads"], "seasons": ["ramadan"]})
"""

from .benchmarks import BenchmarkRepository, default_repository, load_benchmarks, normalize_key
from .budget_allocator import BudgetAllocator, split_budget, validate_budget_allocation
from .errors import BenchmarkConfigError, CampaignModelingError, NarrativeServiceError
from .guardrails import GuardrailReconciler, aggregate_totals
from .insights import generate_advanced_insights
from .kpi_projector import KPIProjector
from .models import CampaignBrief, KpiSet, ProjectionResult, TargetAudience, UIWarning
from .modifiers import CAP_TABLE, ModifierComposer, combine_multipliers
from .narrative import (
    GeminiNarrativeService, NarrativeService, OpenAINarrativeService, build_narrative_service
)
from .orchestrator import CampaignOrchestrator, run_campaign, run_campaign_sync
from .reallocation import TacticalReallocator
from .rules import check_platform_compatibility, preflight, resolve_seasons
from .settings import EngineSettings, load_settings

__version__ = "0.1.0"

__all__ = [
    "BenchmarkRepository", "default_repository", "load_benchmarks", "normalize_key",
    "BudgetAllocator", "split_budget", "validate_budget_allocation",
    "BenchmarkConfigError", "CampaignModelingError", "NarrativeServiceError",
    "GuardrailReconciler", "aggregate_totals",
    "generate_advanced_insights",
    "KPIProjector",
    "CampaignBrief", "KpiSet", "ProjectionResult", "TargetAudience", "UIWarning",
    "CAP_TABLE", "ModifierComposer", "combine_multipliers",
    "GeminiNarrativeService", "NarrativeService", "OpenAINarrativeService", "build_narrative_service",
    "CampaignOrchestrator", "run_campaign", "run_campaign_sync",
    "TacticalReallocator",
    "check_platform_compatibility", "preflight", "resolve_seasons",
    "EngineSettings", "load_settings",
]
