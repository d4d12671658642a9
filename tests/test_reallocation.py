import pytest

from campaign_modeling.reallocation import TacticalReallocator


def test_moves_surplus_to_underfunded_platform(repository, make_brief):
    brief = make_brief(industry="default", budget=23000, platforms=["meta", "linkedin"])
    final, trace = TacticalReallocator(repository).reallocate({"meta": 20000, "linkedin": 3000}, brief)

    assert final == {"meta": 15000, "linkedin": 8000}
    assert "Moved 5,000 from meta to linkedin to meet its minimum budget" in trace


def test_total_is_conserved_and_non_negative(repository, make_brief):
    cases = [
        {"meta": 20000, "linkedin": 3000},
        {"meta": 4500, "linkedin": 1000},
        {"google_ads": 50000, "youtube": 1000, "tiktok": 800, "x": 200},
        {"meta": 1000, "tiktok": 1000},
    ]
    reallocator = TacticalReallocator(repository)
    for allocation in cases:
        total = sum(allocation.values())
        brief = make_brief(industry="default", budget=total, platforms=list(allocation))
        final, _ = reallocator.reallocate(allocation, brief)
        assert sum(final.values()) == pytest.approx(total)
        assert all(v >= 0 for v in final.values())


def test_insufficient_surplus_leaves_platform_underfunded(repository, make_brief):
    brief = make_brief(industry="default", budget=5500)
    final, trace = TacticalReallocator(repository).reallocate({"meta": 4500, "linkedin": 1000}, brief)
    assert final == {"meta": 4000, "linkedin": 1500}
    assert trace[0] == "Moved 500 from meta to linkedin to meet its minimum budget"


def test_no_donors_no_moves(repository, make_brief):
    brief = make_brief(industry="default", budget=2000)
    allocation = {"meta": 1000, "tiktok": 1000}
    final, trace = TacticalReallocator(repository).reallocate(allocation, brief)
    assert final == allocation
    assert not any(t.startswith("Moved") for t in trace)


def test_input_allocation_is_not_mutated(repository, make_brief):
    allocation = {"meta": 20000, "linkedin": 3000}
    TacticalReallocator(repository).reallocate(allocation, make_brief(budget=23000))
    assert allocation == {"meta": 20000, "linkedin": 3000}


def test_low_share_warning(repository, make_brief):
    brief = make_brief(industry="default", budget=100000)
    _, trace = TacticalReallocator(repository).reallocate({"meta": 96000, "tiktok": 4000}, brief)
    assert "Warning: tiktok receives a low budget (4,000) and may be ineffective" in trace


def test_low_share_threshold_is_configurable(repository, make_brief):
    brief = make_brief(industry="default", budget=100000)
    _, trace = TacticalReallocator(repository, low_share_threshold=0.01).reallocate(
        {"meta": 96000, "tiktok": 4000}, brief)
    assert not any(t.startswith("Warning") for t in trace)


def test_industry_advisories(repository):
    notes = TacticalReallocator(repository).industry_advisories("e-commerce", {"meta": 3000})
    assert notes == [
        "Recommendation: add google_ads, tiktok for best results in e-commerce",
        "Recommendation: raise meta to at least 5,000 for e-commerce",
    ]


def test_required_advisory_flags_missing_platform(repository):
    notes = TacticalReallocator(repository).industry_advisories(
        "financial services", {"google_ads": 20000})
    assert "Recommendation: raise linkedin to at least 10,000 for financial services" in notes


def test_advisories_never_change_allocation(repository, make_brief):
    allocation = {"meta": 3000, "google_ads": 3000, "tiktok": 3000}
    brief = make_brief(industry="e-commerce", budget=9000)
    final, _ = TacticalReallocator(repository).reallocate(allocation, brief)
    assert final == allocation
