import pytest

from campaign_modeling.benchmarks import BenchmarkRepository
from campaign_modeling.kpi_projector import KPIProjector, collect_kpis, failed_platforms
from campaign_modeling.models import KpiSet, TargetAudience


@pytest.fixture()
def flat_repository():
    """One neutral industry and a platform with round base rates."""
    return BenchmarkRepository.from_dict({
        "platforms": {"meta": {"base_cpm": 5.0, "base_ctr": 2.0, "base_cvr": 5.0}},
        "industries": {"default": {"avg_order_value": 100}},
        "devices": {},
    })


def test_funnel_derivation(flat_repository, make_brief):
    brief = make_brief(industry="default", platforms=["meta"])
    result = KPIProjector(flat_repository).project("meta", 10000, brief)

    assert result.success
    kpis = result.kpis
    assert kpis.impressions == 2_000_000
    assert kpis.clicks == 40_000
    assert kpis.conversions == 2_000
    assert kpis.cpc == pytest.approx(250.0)
    assert kpis.revenue == pytest.approx(200_000)
    assert kpis.roas == pytest.approx(20.0)
    assert kpis.cac == pytest.approx(5.0)


def test_roas_and_cac_identities(repository, make_brief):
    brief = make_brief(seasons=["ramadan"], creativeType="video", competitionLevel="high",
                       targetAudience={"ageGroups": ["25-34"], "locations": ["riyadh"]})
    projector = KPIProjector(repository)
    for platform, budget in {"meta": 50000, "google_ads": 30000, "tiktok": 5000}.items():
        kpis = projector.project(platform, budget, brief, ["ramadan"]).kpis
        assert kpis.roas == pytest.approx(kpis.revenue / budget)
        if kpis.conversions > 0:
            assert kpis.cac == pytest.approx(budget / kpis.conversions)


def test_zero_budget(repository, make_brief):
    kpis = KPIProjector(repository).project("meta", 0, make_brief()).kpis
    assert kpis.impressions == 0
    assert kpis.roas == 0
    assert kpis.cac == 0


def test_unknown_platform_is_a_failed_result(repository, make_brief):
    result = KPIProjector(repository).project("myspace", 1000, make_brief())
    assert not result.success
    assert "myspace" in result.error


def test_platform_isolation(repository, make_brief):
    brief = make_brief(platforms=["meta", "myspace"])
    results = KPIProjector(repository).project_allocation({"meta": 40000, "myspace": 40000}, brief)
    per_platform = collect_kpis(results)

    assert set(per_platform) == {"meta", "myspace"}
    assert per_platform["myspace"] == KpiSet()
    assert per_platform["myspace"].budget == 0
    assert per_platform["meta"].impressions > 0
    assert failed_platforms(results) == ["myspace"]


def test_aov_override(repository, make_brief):
    projector = KPIProjector(repository)
    default = projector.project("meta", 20000, make_brief()).kpis
    custom = projector.project("meta", 20000, make_brief(avgOrderValue=1000)).kpis
    assert custom.revenue == pytest.approx(default.conversions * 1000)


def test_demographic_modifier_averages_matched_buckets(repository):
    projector = KPIProjector(repository)
    audience = TargetAudience(ageGroups=["18-24", "25-34", "99-120"], gender="female")
    mod = projector.demographic_modifier(audience, "meta")
    assert mod.cpm == pytest.approx((0.9 + 0.95) / 2)
    assert mod.ctr == pytest.approx((1.3 + 1.2) / 2 * 1.15)
    assert mod.cvr == pytest.approx((0.8 + 1.0) / 2 * 1.2)


def test_unmatched_attributes_are_neutral(repository):
    projector = KPIProjector(repository)
    assert projector.location_modifier(["atlantis"]).cpm == 1.0
    assert projector.device_modifier([]).ctr == 1.0
    mod = projector.targeting_modifier(["unknown"], ["coupon_users"])
    assert mod.ctr == pytest.approx(1.2)


def test_location_modifier_mean(repository):
    mod = KPIProjector(repository).location_modifier(["riyadh", "jeddah"])
    assert mod.cpm == pytest.approx((1.25 + 1.1) / 2)
    assert mod.cvr == pytest.approx((1.2 + 1.1) / 2)


def test_season_modifier_is_capped(repository):
    mod = KPIProjector(repository).season_modifier(["white_friday", "ramadan"])
    # 1.45 * 1.35 = 1.9575 -> 1.6 + 0.5 * 0.3575
    assert mod.cpm == pytest.approx(1.77875)
    assert mod.ctr <= 1.8


def test_composed_modifiers_stay_within_hard_caps(repository, make_brief):
    brief = make_brief(creativeType="influencer_content", competitionLevel="extreme",
                       targetAudience={"ageGroups": ["45+"], "interests": ["luxury_goods"],
                                       "behaviors": ["luxury_brand_buyers"], "locations": ["riyadh"]})
    mods = KPIProjector(repository).composed_modifiers("meta", brief, ["white_friday", "ramadan"])
    assert mods["cpm"] <= 3.0
    assert mods["ctr"] <= 2.5
    assert mods["cvr"] <= 3.0
