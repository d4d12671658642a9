from typing import Any, Dict, Optional, Sequence

from .benchmarks import BenchmarkRepository
from .guardrails import aggregate_totals
from .kpi_projector import KPIProjector, collect_kpis
from .models import CampaignBrief


def competitor_allocation(brief: CampaignBrief, repository: BenchmarkRepository) -> Optional[Dict[str, float]]:
    """Apply the industry's typical competitor split to the brief's budget, None when unknown."""
    split = repository.competitor_split(brief.industry)
    if not split:
        return None
    return {platform: brief.budget * ratio for platform, ratio in split.items()}


def mirror_competitor(brief: CampaignBrief, projector: KPIProjector, seasons: Sequence[str],
                      totals_mode: str = "weighted") -> Optional[Dict[str, Any]]:
    """Project what a typical competitor gets out of the same budget.

    Returns {"budgetAllocation", "kpis": {"totals", "perPlatform"}} or None when the
    industry has no competitor split.
    """
    allocation = competitor_allocation(brief, projector.repository)
    if allocation is None:
        return None
    mirror_brief = brief.model_copy(update={"platforms": list(allocation.keys())})
    per_platform = collect_kpis(projector.project_allocation(allocation, mirror_brief, seasons))
    totals = aggregate_totals(mirror_brief, per_platform, totals_mode)
    return {
        "budgetAllocation": allocation,
        "kpis": {"totals": totals, "perPlatform": per_platform},
    }
