"""
Per-platform KPI projection.

For each platform the projector composes three bounded modifiers (CPM, CTR, CVR)
from season, industry, creative, competition and audience factors, applies them to
the platform's base rates and derives the funnel:

    impressions = round(budget / adjCPM * 1000)
    clicks      = round(impressions * adjCTR / 100)
    conversions = round(clicks * adjCVR / 100)
    revenue     = conversions * AOV

Counts are rounded half up.

Unknown platforms come back as failed ProjectionResults, never as exceptions.
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from .benchmarks import BenchmarkRepository, KpiModifier
from .models import CampaignBrief, KpiSet, ProjectionResult, TargetAudience
from .modifiers import ModifierComposer, round_half_up

logger = logging.getLogger(__name__)


def _mean(values: Sequence[float]) -> float:
    return float(np.mean(values)) if len(values) else 1.0


class KPIProjector:
    """Projects KPIs for an allocation using an injected benchmark repository."""

    def __init__(self, repository: BenchmarkRepository, composer: Optional[ModifierComposer] = None):
        self.repository = repository
        self.composer = composer or ModifierComposer()

    # -----------------------------
    # Sub-modifiers
    # -----------------------------
    def season_modifier(self, seasons: Sequence[str]) -> KpiModifier:
        entries = [self.repository.season(s) for s in seasons]
        return KpiModifier(
            cpm=self.composer.combine("season_cpm", [e.cpm_mult for e in entries]),
            ctr=self.composer.combine("season_ctr", [e.ctr_mult for e in entries]),
            cvr=self.composer.combine("season_cvr", [e.cvr_mult for e in entries]),
        )

    def demographic_modifier(self, audience: TargetAudience, platform: str) -> KpiModifier:
        """Mean over matched age buckets, times the gender entry."""
        ages = [self.repository.demographic(platform, f"age_{age}") for age in audience.age_groups]
        ages = [a for a in ages if a is not None]
        cpm = _mean([a.cpm for a in ages])
        ctr = _mean([a.ctr for a in ages])
        cvr = _mean([a.cvr for a in ages])
        if audience.gender:
            gender = self.repository.demographic(platform, f"gender_{audience.gender}")
            if gender is not None:
                cpm *= gender.cpm
                ctr *= gender.ctr
                cvr *= gender.cvr
        return KpiModifier(cpm=cpm, ctr=ctr, cvr=cvr)

    def location_modifier(self, locations: Sequence[str]) -> KpiModifier:
        matched = [self.repository.location(loc) for loc in locations]
        matched = [m for m in matched if m is not None]
        return KpiModifier(cpm=_mean([m.cpm_mod for m in matched]), cvr=_mean([m.cvr_mod for m in matched]))

    def device_modifier(self, devices: Sequence[str]) -> KpiModifier:
        matched = [self.repository.device(d) for d in devices]
        matched = [m for m in matched if m is not None]
        return KpiModifier(ctr=_mean([m.ctr_mod for m in matched]), cvr=_mean([m.cvr_mod for m in matched]))

    def targeting_modifier(self, interests: Sequence[str], behaviors: Sequence[str]) -> KpiModifier:
        """Mean over matched interests times mean over matched behaviors."""
        result = {"cpm": 1.0, "ctr": 1.0, "cvr": 1.0}
        for group in ([self.repository.interest(i) for i in interests],
                      [self.repository.behavior(b) for b in behaviors]):
            matched = [m for m in group if m is not None]
            for kpi in result:
                result[kpi] *= _mean([getattr(m, kpi) for m in matched])
        return KpiModifier(**result)

    # -----------------------------
    # Projection
    # -----------------------------
    def composed_modifiers(self, platform: str, brief: CampaignBrief, seasons: Sequence[str]) -> Dict[str, float]:
        audience = brief.target_audience
        season = self.season_modifier(seasons)
        industry = self.repository.industry(brief.industry)
        creative = self.repository.creative(brief.creative_type)
        competition = self.repository.competition(brief.competition_level)
        demographic = self.demographic_modifier(audience, platform)
        location = self.location_modifier(audience.locations)
        device = self.device_modifier(audience.devices)
        targeting = self.targeting_modifier(audience.interests, audience.behaviors)

        return {
            "cpm": self.composer.combine("cpm", [
                season.cpm, industry.cpm_mod, creative.cpm, competition.cpm,
                demographic.cpm, location.cpm, targeting.cpm,
            ]),
            "ctr": self.composer.combine("ctr", [
                season.ctr, industry.ctr_mod, creative.ctr, competition.ctr,
                demographic.ctr, device.ctr, targeting.ctr,
            ]),
            "cvr": self.composer.combine("cvr", [
                season.cvr, industry.cvr_mod, creative.cvr, competition.cvr,
                demographic.cvr, location.cvr, device.cvr, targeting.cvr,
            ]),
        }

    def project(self, platform: str, budget: float, brief: CampaignBrief,
                seasons: Sequence[str] = ()) -> ProjectionResult:
        """Project one platform. Returns a failed result for unknown platforms."""
        base = self.repository.platform(platform)
        if base is None:
            return ProjectionResult(success=False, error=f"Platform '{platform}' not found in benchmarks")
        try:
            mods = self.composed_modifiers(platform, brief, seasons)
            adjusted_cpm = base.base_cpm * mods["cpm"]
            adjusted_ctr = base.base_ctr * mods["ctr"]
            adjusted_cvr = base.base_cvr * mods["cvr"]

            impressions = round_half_up(budget / adjusted_cpm * 1000) if adjusted_cpm > 0 else 0
            clicks = round_half_up(impressions * adjusted_ctr / 100)
            conversions = round_half_up(clicks * adjusted_cvr / 100)
            cpc = adjusted_cpm / adjusted_ctr * 100 if adjusted_ctr > 0 else 0.0

            aov = brief.avg_order_value or self.repository.industry(brief.industry).avg_order_value
            revenue = conversions * aov
            kpis = KpiSet(
                budget=budget,
                impressions=impressions,
                clicks=clicks,
                conversions=conversions,
                cpm=adjusted_cpm,
                ctr=adjusted_ctr,
                cpc=cpc,
                cvr=adjusted_cvr,
                revenue=revenue,
                roas=revenue / budget if budget > 0 else 0.0,
                cac=budget / conversions if conversions > 0 else 0.0,
            )
            return ProjectionResult(success=True, kpis=kpis)
        except (ValueError, ArithmeticError) as e:
            return ProjectionResult(success=False, error=f"Projection error for '{platform}': {e}")

    def project_allocation(self, allocation: Dict[str, float], brief: CampaignBrief,
                           seasons: Sequence[str] = ()) -> Dict[str, ProjectionResult]:
        return {platform: self.project(platform, budget, brief, seasons) for platform, budget in allocation.items()}


def collect_kpis(results: Dict[str, ProjectionResult]) -> Dict[str, KpiSet]:
    """Unwrap projection results, substituting a zero KpiSet for each failure."""
    per_platform = {}
    for platform, result in results.items():
        if result.success and result.kpis is not None:
            per_platform[platform] = result.kpis
        else:
            logger.warning("KPI projection failed for %s: %s", platform, result.error)
            per_platform[platform] = KpiSet()
    return per_platform


def failed_platforms(results: Dict[str, ProjectionResult]) -> List[str]:
    return [p for p, r in results.items() if not r.success]
