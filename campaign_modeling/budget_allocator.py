import logging
from typing import Dict, List, Optional

from .benchmarks import BenchmarkRepository, normalize_key
from .models import AllocationResult, AllocationValidation, CampaignBrief
from .modifiers import round_half_up
from .reallocation import TacticalReallocator

logger = logging.getLogger(__name__)

MAX_SHARE = 0.70
MIN_SHARE = 0.05


def _unique(platforms: List[str]) -> List[str]:
    seen = []
    for p in platforms:
        key = normalize_key(p)
        if key and key not in seen:
            seen.append(key)
    return seen


def split_budget(weights: Dict[str, float], budget: float) -> Dict[str, float]:
    """Split a budget proportionally to weights.

    Every platform but the last gets w / total * budget rounded half up; the last one
    takes the remainder so the values always sum to the budget exactly. When rounding
    overshoots, the excess is taken back from the largest shares so no value is negative.
    """
    if not weights:
        return {}
    platforms = list(weights.keys())
    total_weight = sum(weights.values())
    if total_weight <= 0:
        # degenerate table: fall back to an even split
        weights = {p: 1.0 for p in platforms}
        total_weight = float(len(platforms))

    allocation = {}
    allocated = 0.0
    for platform in platforms[:-1]:
        share = round_half_up(weights[platform] / total_weight * budget)
        allocation[platform] = share
        allocated += share

    remainder = budget - allocated
    if remainder < 0:
        for donor in sorted(allocation, key=allocation.get, reverse=True):
            taken = min(allocation[donor], -remainder)
            allocation[donor] -= taken
            remainder += taken
            if remainder >= 0:
                break
    allocation[platforms[-1]] = remainder
    return allocation


class BudgetAllocator:
    """Distributes a brief's budget using industry splits adjusted by the primary goal."""

    def __init__(self, repository: BenchmarkRepository, reallocator: Optional[TacticalReallocator] = None):
        self.repository = repository
        self.reallocator = reallocator or TacticalReallocator(repository)

    def weights_for(self, brief: CampaignBrief) -> Dict[str, float]:
        split = self.repository.industry_split(brief.industry)
        weighted = dict(split.platform_split)

        if brief.goals:
            goal_weights = self.repository.goal_weights(brief.goals[0])
            if goal_weights:
                weighted = {p: w * goal_weights.get(p, 1.0) for p, w in weighted.items()}
            else:
                logger.debug("No goal weights for %s, using the industry split as is", brief.goals[0])

        selected = _unique(brief.platforms)
        if not selected:
            selected = _unique(split.recommended_platforms) or ["meta", "google_ads"]
            logger.info("No platforms selected, using recommended platforms %s", selected)
        return {p: weighted.get(p, 1.0) for p in selected}

    def allocate(self, brief: CampaignBrief) -> AllocationResult:
        split = self.repository.industry_split(brief.industry)
        original = split_budget(self.weights_for(brief), brief.budget)
        final, details = self.reallocator.reallocate(original, brief)
        return AllocationResult(
            budget_allocation=final,
            reallocation_details=details,
            original_allocation=original,
            industry_split=dict(split.platform_split),
            goal_weights=brief.goals[0] if brief.goals else "default",
        )


def validate_budget_allocation(allocation: Dict[str, float], brief: CampaignBrief,
                               repository: BenchmarkRepository) -> AllocationValidation:
    """Check an allocation against floors, platform count and share limits."""
    warnings = []
    recommendations = []
    total = brief.budget
    split = repository.industry_split(brief.industry)

    for platform, budget in allocation.items():
        floor = repository.platform_floor(platform)
        if 0 < budget < floor:
            warnings.append(f"{platform}: budget below the recommended minimum ({floor:,.0f})")
            recommendations.append(f"Raise {platform} to at least {floor:,.0f} or drop it from the plan")

    active = [p for p, b in allocation.items() if b > 0]
    if len(active) > split.max_platforms:
        warnings.append(f"Platform count ({len(active)}) exceeds the recommended maximum ({split.max_platforms})")
        recommendations.append("Concentrate the budget on fewer platforms")

    if total > 0:
        for platform, budget in allocation.items():
            if budget <= 0:
                continue
            share = budget / total
            if share < MIN_SHARE:
                warnings.append(f"{platform}: very low budget share ({share * 100:.1f}%)")
            elif share > MAX_SHARE:
                warnings.append(f"{platform}: over-concentration on one platform ({share * 100:.1f}%)")

    return AllocationValidation(is_valid=not warnings, warnings=warnings, recommendations=recommendations)
