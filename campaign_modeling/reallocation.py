import logging
from typing import Dict, List, Optional, Tuple

from .benchmarks import BenchmarkRepository, normalize_key
from .models import CampaignBrief

logger = logging.getLogger(__name__)


class TacticalReallocator:
    """Moves surplus budget to platforms funded below their minimum floor.

    A platform is under-funded when 0 < budget < floor and over-funded when
    budget > 2 * floor (surplus = budget - 2 * floor). Transfers never exceed the
    surplus, so the total is conserved and no value goes negative. If the budget
    cannot cover every floor, some platforms stay under-funded.
    """

    def __init__(self, repository: BenchmarkRepository, low_share_threshold: float = 0.05):
        self.repository = repository
        self.low_share_threshold = low_share_threshold

    def reallocate(self, allocation: Dict[str, float], brief: CampaignBrief) -> Tuple[Dict[str, float], List[str]]:
        final = dict(allocation)
        trace = []

        under_funded = []
        over_funded = []
        for platform, budget in final.items():
            floor = self.repository.platform_floor(platform)
            if 0 < budget < floor:
                under_funded.append(platform)
            elif budget > floor * 2:
                over_funded.append([platform, budget - floor * 2])

        if under_funded and over_funded:
            over_funded.sort(key=lambda item: item[1], reverse=True)
            for platform in under_funded:
                needed = self.repository.platform_floor(platform) - final[platform]
                moved = 0.0
                for donor in over_funded:
                    if moved >= needed:
                        break
                    amount = min(donor[1], needed - moved)
                    if amount > 0:
                        final[donor[0]] -= amount
                        final[platform] += amount
                        donor[1] -= amount
                        moved += amount
                        trace.append(f"Moved {amount:,.0f} from {donor[0]} to {platform} to meet its minimum budget")
                if moved < needed:
                    logger.info("%s remains %.0f below its floor after reallocation", platform, needed - moved)

        threshold = brief.budget * self.low_share_threshold
        for platform, budget in final.items():
            if 0 < budget < threshold:
                trace.append(f"Warning: {platform} receives a low budget ({budget:,.0f}) and may be ineffective")

        trace.extend(self.industry_advisories(brief.industry, final))
        return final, trace

    def industry_advisories(self, industry: Optional[str], allocation: Dict[str, float]) -> List[str]:
        """Advisory text only; the allocation is never changed here."""
        notes = []
        split = self.repository.industry_split(industry)
        funded = {normalize_key(p) for p, b in allocation.items() if b > 0}
        missing = [p for p in split.recommended_platforms if normalize_key(p) not in funded]
        if missing:
            notes.append(f"Recommendation: add {', '.join(missing)} for best results in {industry or 'default'}")

        for advisory in self.repository.advisories(industry):
            budget = allocation.get(advisory.platform, 0)
            if (budget > 0 or advisory.required) and budget < advisory.min_budget:
                notes.append(f"Recommendation: raise {advisory.platform} to at least "
                             f"{advisory.min_budget:,.0f} for {industry}")
        return notes
