"""
Guardrail reconciliation: aggregate per-platform KPIs into totals and run the
plausibility rule table over the result.

Totals modes for ratio KPIs (cpm, ctr, cpc, cvr, roas, cac):
- "weighted": recomputed from summed counts (budget, impressions, clicks, ...)
- "sum":      per-platform ratios added together (legacy reporting behaviour)
Counts and revenue are always summed; arpu, cpa and break-even ROAS are derived once.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .benchmarks import BenchmarkRepository, Range
from .models import CampaignBrief, Correction, KpiSet, ValidationFlag

logger = logging.getLogger(__name__)

TOTALS_MODES = ("weighted", "sum")
RATE_FIELDS = ("cpm", "ctr", "cvr")

RuleResult = Tuple[List[ValidationFlag], List[Correction]]
GuardrailRule = Callable[[CampaignBrief, Dict[str, KpiSet], KpiSet, BenchmarkRepository], RuleResult]


def _ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    return numerator / denominator * scale if denominator > 0 else 0.0


def aggregate_totals(brief: CampaignBrief, per_platform: Dict[str, KpiSet], mode: str = "weighted") -> KpiSet:
    if mode not in TOTALS_MODES:
        raise ValueError(f"Unknown totals mode: {mode}")
    kpis = list(per_platform.values())
    budget = brief.budget
    impressions = sum(k.impressions for k in kpis)
    clicks = sum(k.clicks for k in kpis)
    conversions = sum(k.conversions for k in kpis)
    revenue = sum(k.revenue for k in kpis)

    if mode == "weighted":
        cpm = _ratio(budget, impressions, 1000)
        ctr = _ratio(clicks, impressions, 100)
        ratios = {
            "cpm": cpm,
            "ctr": ctr,
            "cvr": _ratio(conversions, clicks, 100),
            "cpc": _ratio(cpm, ctr, 100),
            "roas": _ratio(revenue, budget),
            "cac": _ratio(budget, conversions),
        }
    else:
        ratios = {name: sum(getattr(k, name) for k in kpis) for name in ("cpm", "ctr", "cvr", "cpc", "roas", "cac")}

    margin = brief.profit_margin
    return KpiSet(
        budget=budget,
        impressions=impressions,
        clicks=clicks,
        conversions=conversions,
        revenue=revenue,
        arpu=_ratio(revenue, conversions),
        cpa=_ratio(budget, conversions),
        break_even_roas=1 / (margin / 100) if margin > 0 else 0.0,
        **ratios,
    )


# -----------------------------
# Rules
# -----------------------------
def _fmt_range(r: Range) -> str:
    return f"{r.min:g}-{r.max:g}"


def _outside_by(value: float, r: Range) -> float:
    """Relative distance outside the range, 0 when inside."""
    if value < r.min:
        return (r.min - value) / r.min if r.min > 0 else 0.0
    if value > r.max:
        return (value - r.max) / r.max if r.max > 0 else 0.0
    return 0.0


def roas_threshold_rule(brief, per_platform, totals, repository) -> RuleResult:
    rules = repository.validation_rules
    flags = []
    if totals.roas > rules.max_roas_threshold:
        flags.append(ValidationFlag(
            kpi="roas", issue="unrealistic_roas", severity="high",
            message=f"Projected ROAS {totals.roas:.2f}x is above the plausible ceiling",
            expected=f"<= {rules.max_roas_threshold:g}", actual=f"{totals.roas:.2f}",
        ))
    elif 0 < totals.roas < rules.min_roas_threshold:
        flags.append(ValidationFlag(
            kpi="roas", issue="unprofitable", severity="medium",
            message=f"Projected ROAS {totals.roas:.2f}x does not recover the spend",
            expected=f">= {rules.min_roas_threshold:g}", actual=f"{totals.roas:.2f}",
        ))
    return flags, []


def industry_range_rule(brief, per_platform, totals, repository) -> RuleResult:
    flags, corrections = [], []
    threshold = repository.validation_rules.flag_threshold_percentage / 100
    for kpi in ("roas", "arpu") + RATE_FIELDS:
        r = repository.validation_range("industries", brief.industry, kpi)
        value = getattr(totals, kpi)
        if r is None or value <= 0:
            continue
        distance = _outside_by(value, r)
        if distance == 0:
            continue
        flags.append(ValidationFlag(
            kpi=kpi, issue="outside_industry_range",
            severity="high" if distance > threshold else "medium",
            message=f"Total {kpi.upper()} {value:.2f} is outside the usual range for {brief.industry}",
            expected=_fmt_range(r), actual=f"{value:.2f}",
        ))
        if kpi in RATE_FIELDS:
            bound = r.min if value < r.min else r.max
            corrections.append(Correction(field=f"totals.{kpi}", from_value=value, to_value=bound,
                                          rule="industry_range"))
    return flags, corrections


def platform_range_rule(brief, per_platform, totals, repository) -> RuleResult:
    flags, corrections = [], []
    for platform, kpis in per_platform.items():
        if kpis.impressions == 0:
            continue
        for kpi in RATE_FIELDS:
            r = repository.validation_range("platforms", platform, kpi)
            value = getattr(kpis, kpi)
            if r is None or _outside_by(value, r) == 0:
                continue
            flags.append(ValidationFlag(
                kpi=kpi, issue="outside_platform_range", severity="low",
                message=f"{platform} {kpi.upper()} {value:.2f} is outside its usual range",
                expected=_fmt_range(r), actual=f"{value:.2f}",
            ))
            bound = r.min if value < r.min else r.max
            corrections.append(Correction(field=f"perPlatform.{platform}.{kpi}", from_value=value,
                                          to_value=bound, rule="platform_range"))
    return flags, corrections


DEFAULT_RULES: List[GuardrailRule] = [roas_threshold_rule, industry_range_rule, platform_range_rule]


class GuardrailReconciler:
    """Aggregates totals and collects anomalies/corrections from a pluggable rule table."""

    def __init__(self, repository: BenchmarkRepository, rules: Optional[List[GuardrailRule]] = None,
                 totals_mode: str = "weighted", apply_corrections: bool = False):
        if totals_mode not in TOTALS_MODES:
            raise ValueError(f"Unknown totals mode: {totals_mode}")
        self.repository = repository
        self.rules = list(DEFAULT_RULES if rules is None else rules)
        self.totals_mode = totals_mode
        self.apply_corrections = apply_corrections

    def reconcile(self, brief: CampaignBrief, per_platform: Dict[str, KpiSet]):
        """Return (kpis, anomalies, corrections) where kpis = {"totals", "perPlatform"}."""
        totals = aggregate_totals(brief, per_platform, self.totals_mode)
        anomalies: List[ValidationFlag] = []
        corrections: List[Correction] = []
        for rule in self.rules:
            flags, fixes = rule(brief, per_platform, totals, self.repository)
            anomalies.extend(flags)
            corrections.extend(fixes)

        per_platform = dict(per_platform)
        if self.apply_corrections and corrections:
            totals, per_platform = self._apply(corrections, totals, per_platform)

        if anomalies:
            logger.info("Guardrails raised %d anomaly flag(s)", len(anomalies))
        return {"totals": totals, "perPlatform": per_platform}, anomalies, corrections

    @staticmethod
    def _apply(corrections: List[Correction], totals: KpiSet, per_platform: Dict[str, KpiSet]):
        # only rate fields are rewritten, counts and money identities stay intact
        for correction in corrections:
            parts = correction.field.split(".")
            name = parts[-1]
            if name not in RATE_FIELDS:
                continue
            if parts[0] == "totals":
                totals = totals.model_copy(update={name: correction.to_value})
            elif parts[0] == "perPlatform" and parts[1] in per_platform:
                per_platform[parts[1]] = per_platform[parts[1]].model_copy(update={name: correction.to_value})
        return totals, per_platform
