import pytest

from campaign_modeling.budget_allocator import BudgetAllocator, split_budget, validate_budget_allocation


def test_split_sums_to_budget():
    weights = {"meta": 0.37, "google_ads": 0.21, "tiktok": 0.19, "snapchat": 0.11}
    for budget in (1000, 12345.67, 80000, 999999):
        allocation = split_budget(weights, budget)
        assert sum(allocation.values()) == pytest.approx(budget)
        assert list(allocation) == list(weights)


def test_split_last_platform_takes_remainder():
    allocation = split_budget({"a": 1, "b": 1, "c": 1}, 100)
    assert allocation == {"a": 33, "b": 33, "c": 34}


def test_split_integer_budget_sums_exactly():
    weights = {"meta": 0.37, "google_ads": 0.21, "tiktok": 0.19, "snapchat": 0.11}
    for budget in (1000, 80000, 999999):
        assert sum(split_budget(weights, budget).values()) == budget


def test_split_rounding_overshoot_never_goes_negative():
    # each of a, b, c rounds 3.5 up to 4, leaving -1 for d before rebalancing
    allocation = split_budget({"a": 7, "b": 7, "c": 7, "d": 1}, 11)
    assert sum(allocation.values()) == 11
    assert all(value >= 0 for value in allocation.values())
    assert allocation == {"a": 3, "b": 4, "c": 4, "d": 0}


def test_split_rounds_half_up():
    assert split_budget({"a": 1, "b": 1, "c": 2}, 10) == {"a": 3, "b": 3, "c": 4}


def test_split_zero_weights_falls_back_to_even():
    assert split_budget({"a": 0, "b": 0}, 100) == {"a": 50, "b": 50}


def test_split_empty():
    assert split_budget({}, 5000) == {}


def test_no_platforms_uses_recommended(repository, make_brief):
    brief = make_brief(industry="e-commerce", budget=10000, platforms=[])
    result = BudgetAllocator(repository).allocate(brief)
    assert list(result.budget_allocation) == ["meta", "google_ads", "tiktok"]
    assert sum(result.budget_allocation.values()) == 10000


def test_goal_weights_apply_to_industry_split(repository, make_brief):
    brief = make_brief(industry="e-commerce", goals=["Awareness"], platforms=["meta", "tiktok"])
    weights = BudgetAllocator(repository).weights_for(brief)
    assert weights["meta"] == pytest.approx(0.32 * 1.15)
    assert weights["tiktok"] == pytest.approx(0.22 * 1.25)


def test_unknown_goal_keeps_industry_split(repository, make_brief):
    brief = make_brief(industry="e-commerce", goals=["World domination"], platforms=["meta"])
    assert BudgetAllocator(repository).weights_for(brief) == {"meta": pytest.approx(0.32)}


def test_platform_ids_are_normalized_and_deduplicated(repository, make_brief):
    brief = make_brief(platforms=["Meta", "meta", "Google Ads"])
    result = BudgetAllocator(repository).allocate(brief)
    assert list(result.budget_allocation) == ["meta", "google_ads"]


def test_allocation_result_trace(repository, make_brief):
    brief = make_brief(goals=["Leads"])
    result = BudgetAllocator(repository).allocate(brief)
    assert result.goal_weights == "Leads"
    assert result.industry_split["meta"] == pytest.approx(0.32)
    assert sum(result.original_allocation.values()) == pytest.approx(brief.budget)


def test_allocation_sum_survives_reallocation(repository, make_brief):
    brief = make_brief(industry="financial services", budget=20000,
                       platforms=["linkedin", "google_ads", "meta", "x"])
    result = BudgetAllocator(repository).allocate(brief)
    assert sum(result.budget_allocation.values()) == pytest.approx(20000)
    assert all(v >= 0 for v in result.budget_allocation.values())


def test_validation_flags_floor_and_shares(repository, make_brief):
    brief = make_brief(budget=80000)
    check = validate_budget_allocation({"meta": 500, "google_ads": 79500}, brief, repository)
    assert not check.is_valid
    assert any("below the recommended minimum" in w for w in check.warnings)
    assert any("very low budget share" in w for w in check.warnings)
    assert any("over-concentration" in w for w in check.warnings)
    assert check.recommendations == ["Raise meta to at least 2,000 or drop it from the plan"]


def test_validation_passes_balanced_plan(repository, make_brief):
    brief = make_brief(budget=80000)
    check = validate_budget_allocation({"meta": 45000, "google_ads": 35000}, brief, repository)
    assert check.is_valid
    assert check.warnings == []
