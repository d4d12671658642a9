from typing import List

from .benchmarks import BenchmarkRepository
from .models import AdvancedInsight, AdvancedInsights, CampaignBrief, KpiSet, SeasonalLift


def break_even_roas(profit_margin: float) -> float:
    """ROAS needed to cover costs at a given margin (percent); 0 when margin is 0."""
    return 1 / (profit_margin / 100) if profit_margin > 0 else 0.0


def seasonal_insight(seasons: List[str], repository: BenchmarkRepository) -> str:
    for season in seasons:
        text = repository.season_insight(season)
        if text:
            return text
    return repository.default_season_insight


def generate_advanced_insights(totals: KpiSet, brief: CampaignBrief, active_seasons: List[str],
                               repository: BenchmarkRepository) -> AdvancedInsights:
    """Deterministic ARPU / CAC / break-even / seasonal commentary on the totals."""
    industry_cac = repository.industry(brief.industry).avg_cac
    breakeven = break_even_roas(brief.profit_margin)

    cac_better = totals.cac < industry_cac
    cac = AdvancedInsight(
        title="Customer acquisition cost (CAC)",
        value=totals.cac,
        benchmark=industry_cac,
        status="above" if cac_better else "below",
        insight=(f"Projected CAC ({totals.cac:,.2f}) is "
                 f"{'below' if cac_better else 'above'} the industry benchmark ({industry_cac:,.2f})."),
    )

    if breakeven > 0:
        profitable = totals.roas > breakeven
        breakeven_text = (
            f"The campaign is projected to be {'profitable' if profitable else 'unprofitable'}: "
            f"ROAS {totals.roas:.2f}x vs break-even {breakeven:.2f}x."
        )
    else:
        profitable = False
        breakeven_text = "No profit margin given, so break-even ROAS cannot be assessed."

    return AdvancedInsights(
        arpu=AdvancedInsight(
            title="Average revenue per conversion (ARPU)",
            value=totals.arpu,
            status="neutral",
            insight=f"Expected average revenue per conversion is about {totals.arpu:,.2f}.",
        ),
        cac=cac,
        break_even_roas=AdvancedInsight(
            title="Break-even ROAS",
            value=breakeven,
            benchmark=totals.roas,
            status="above" if profitable else "below",
            insight=breakeven_text,
        ),
        seasonal_lift=SeasonalLift(applied=list(active_seasons),
                                   insight=seasonal_insight(active_seasons, repository)),
    )
