import pytest

from campaign_modeling.guardrails import (
    GuardrailReconciler, aggregate_totals, industry_range_rule, platform_range_rule, roas_threshold_rule
)
from campaign_modeling.models import KpiSet, ValidationFlag


@pytest.fixture()
def per_platform():
    return {
        "meta": KpiSet(budget=6000, impressions=1_000_000, clicks=20_000, conversions=400,
                       cpm=6.0, ctr=2.0, cvr=2.0, cpc=300, roas=6.6667, revenue=40000, cac=15),
        "google_ads": KpiSet(budget=4000, impressions=500_000, clicks=5_000, conversions=100,
                             cpm=8.0, ctr=1.0, cvr=2.0, cpc=800, roas=2.5, revenue=10000, cac=40),
    }


def test_weighted_totals(make_brief, per_platform):
    totals = aggregate_totals(make_brief(budget=10000, profitMargin=30), per_platform, "weighted")
    assert totals.budget == 10000
    assert totals.impressions == 1_500_000
    assert totals.clicks == 25_000
    assert totals.conversions == 500
    assert totals.revenue == pytest.approx(50000)
    assert totals.cpm == pytest.approx(10000 / 1_500_000 * 1000)
    assert totals.ctr == pytest.approx(25_000 / 1_500_000 * 100)
    assert totals.cvr == pytest.approx(2.0)
    assert totals.cpc == pytest.approx(totals.cpm / totals.ctr * 100)
    assert totals.roas == pytest.approx(5.0)
    assert totals.cac == pytest.approx(20.0)
    assert totals.arpu == pytest.approx(100.0)
    assert totals.cpa == pytest.approx(20.0)
    assert totals.break_even_roas == pytest.approx(1 / 0.3)


def test_weighted_ratio_lies_between_platform_ratios(make_brief, per_platform):
    totals = aggregate_totals(make_brief(budget=10000), per_platform, "weighted")
    ctrs = [k.ctr for k in per_platform.values()]
    assert min(ctrs) <= totals.ctr <= max(ctrs)


def test_sum_totals_add_ratios(make_brief, per_platform):
    totals = aggregate_totals(make_brief(budget=10000), per_platform, "sum")
    assert totals.ctr == pytest.approx(3.0)
    assert totals.cpm == pytest.approx(14.0)
    assert totals.roas == pytest.approx(6.6667 + 2.5)
    # counts are summed the same way in both modes
    assert totals.clicks == 25_000
    assert totals.budget == 10000


def test_modes_agree_for_single_platform(make_brief, per_platform):
    single = {"meta": per_platform["meta"]}
    brief = make_brief(budget=6000)
    weighted = aggregate_totals(brief, single, "weighted")
    summed = aggregate_totals(brief, single, "sum")
    assert weighted.ctr == pytest.approx(summed.ctr)
    assert weighted.cvr == pytest.approx(summed.cvr)


def test_empty_platforms_give_zero_ratios(make_brief):
    totals = aggregate_totals(make_brief(budget=5000, profitMargin=0), {}, "weighted")
    assert totals.impressions == 0
    assert totals.cpm == 0
    assert totals.roas == 0
    assert totals.break_even_roas == 0


def test_unknown_totals_mode(make_brief, repository):
    with pytest.raises(ValueError):
        aggregate_totals(make_brief(), {}, "median")
    with pytest.raises(ValueError):
        GuardrailReconciler(repository, totals_mode="median")


def test_roas_threshold_rule(make_brief, repository):
    brief = make_brief()
    flags, corrections = roas_threshold_rule(brief, {}, KpiSet(roas=20), repository)
    assert [(f.issue, f.severity) for f in flags] == [("unrealistic_roas", "high")]
    assert corrections == []

    flags, _ = roas_threshold_rule(brief, {}, KpiSet(roas=0.5), repository)
    assert [(f.issue, f.severity) for f in flags] == [("unprofitable", "medium")]

    assert roas_threshold_rule(brief, {}, KpiSet(roas=0), repository) == ([], [])
    assert roas_threshold_rule(brief, {}, KpiSet(roas=4), repository) == ([], [])


def test_industry_range_rule(make_brief, repository):
    brief = make_brief(industry="e-commerce")
    totals = KpiSet(roas=4.0, arpu=380, ctr=1.8, cvr=2.8, cpm=12.0)
    flags, corrections = industry_range_rule(brief, {}, totals, repository)

    assert len(flags) == 1
    assert flags[0].kpi == "cpm"
    assert flags[0].severity == "high"
    assert flags[0].expected == "3-8"
    assert corrections[0].field == "totals.cpm"
    assert corrections[0].to_value == pytest.approx(8.0)


def test_industry_range_rule_medium_when_close(make_brief, repository):
    brief = make_brief(industry="e-commerce")
    flags, _ = industry_range_rule(brief, {}, KpiSet(cpm=9.0), repository)
    assert flags[0].severity == "medium"


def test_industry_range_rule_flags_without_correcting_money_kpis(make_brief, repository):
    brief = make_brief(industry="e-commerce")
    flags, corrections = industry_range_rule(brief, {}, KpiSet(roas=1.0, arpu=50), repository)
    assert {f.kpi for f in flags} == {"roas", "arpu"}
    assert corrections == []


def test_platform_range_rule(make_brief, repository):
    per_platform = {
        "meta": KpiSet(impressions=1000, cpm=9.0, ctr=1.6, cvr=3.5),
        "tiktok": KpiSet(),
        "snapchat": KpiSet(impressions=1000, cpm=99.0),
    }
    flags, corrections = platform_range_rule(make_brief(), per_platform, KpiSet(), repository)
    assert [(f.kpi, f.severity) for f in flags] == [("cpm", "low")]
    assert corrections[0].field == "perPlatform.meta.cpm"
    assert corrections[0].to_value == pytest.approx(8.0)


def test_reconcile_reports_without_changing_values(make_brief, repository):
    per_platform = {"meta": KpiSet(budget=1000, impressions=100_000, clicks=500, conversions=10,
                                   cpm=10.0, ctr=0.5, cvr=2.0, revenue=3800)}
    kpis, anomalies, corrections = GuardrailReconciler(repository).reconcile(make_brief(budget=1000), per_platform)
    assert anomalies
    assert corrections
    assert kpis["perPlatform"]["meta"].cpm == pytest.approx(10.0)
    assert kpis["totals"].cpm == pytest.approx(10.0)


def test_reconcile_applies_rate_corrections(make_brief, repository):
    per_platform = {"meta": KpiSet(budget=1000, impressions=100_000, clicks=500, conversions=10,
                                   cpm=10.0, ctr=0.5, cvr=2.0, revenue=3800)}
    reconciler = GuardrailReconciler(repository, apply_corrections=True)
    kpis, _, corrections = reconciler.reconcile(make_brief(budget=1000), per_platform)

    assert kpis["perPlatform"]["meta"].cpm == pytest.approx(8.0)
    assert kpis["totals"].cpm == pytest.approx(8.0)
    assert kpis["totals"].ctr == pytest.approx(1.0)
    # counts and money are left alone
    assert kpis["totals"].clicks == 500
    assert kpis["totals"].revenue == pytest.approx(3800)
    assert per_platform["meta"].cpm == pytest.approx(10.0)


def test_custom_rule_table(make_brief, repository, per_platform):
    def always_flag(brief, per_platform, totals, repository):
        return [ValidationFlag(kpi="ctr", issue="custom", severity="low", message="custom rule")], []

    _, anomalies, corrections = GuardrailReconciler(repository, rules=[always_flag]).reconcile(
        make_brief(budget=10000), per_platform)
    assert [a.issue for a in anomalies] == ["custom"]
    assert corrections == []
