"""Pre-run validation: season resolution, platform compatibility and preflight warnings."""

import logging
from typing import List, Optional

from .benchmarks import BenchmarkRepository, normalize_key
from .models import (
    CampaignBrief, PlatformCompatibility, PlatformIssue, SeasonResolution, UIWarning
)

logger = logging.getLogger(__name__)

MAX_SEASONS = 2
NO_SEASON = "none"

WARNING_MESSAGES = {
    "BUDGET_TOO_LOW": "The budget ({userBudget:,.0f}) is below the recommended minimum of {minBudget:,.0f} for {industry}.",
    "PLATFORM_INCOMPATIBLE": "{platform} is not a recommended platform for {industry}.",
    "PLATFORM_DISCOURAGED": "{platform} usually underperforms for {industry}.",
    "SEASON_COUNT_EXCEEDED": "Only {max} seasons are modeled; dropped: {dropped_list}.",
    "SEASON_CONFLICT": "Seasons {pair_list} overlap and should not be planned together.",
}


def resolve_seasons(seasons: List[str], max_seasons: int = MAX_SEASONS,
                    repository: Optional[BenchmarkRepository] = None) -> SeasonResolution:
    """Keep the first max_seasons requested seasons; the rest are dropped."""
    requested = [s for s in seasons if normalize_key(s) not in ("", NO_SEASON)]
    active = requested[:max_seasons]
    dropped = requested[max_seasons:]

    conflicts = []
    if repository is not None:
        keys = {normalize_key(s): s for s in active}
        for pair in repository.season_conflicts:
            if len(pair) == 2 and pair[0] in keys and pair[1] in keys:
                conflicts.append([keys[pair[0]], keys[pair[1]]])
    return SeasonResolution(active=active, dropped=dropped, conflicts=conflicts)


def check_platform_compatibility(industry: Optional[str], platforms: List[str],
                                 repository: BenchmarkRepository) -> PlatformCompatibility:
    """Advisory check of the selected platforms against the industry's allow/discourage lists."""
    compat = repository.compatibility(industry)
    discourage = {normalize_key(p) for p in compat.discourage}
    allow = {normalize_key(p) for p in compat.allow}

    issues = []
    for platform in platforms:
        key = normalize_key(platform)
        if key in discourage:
            issues.append(PlatformIssue(platform=platform, issue="discouraged"))
        elif allow and key not in allow:
            issues.append(PlatformIssue(platform=platform, issue="incompatible"))

    selected = {normalize_key(p) for p in platforms}
    suggestions = [p for p in compat.optimal if normalize_key(p) not in selected] if issues else []
    return PlatformCompatibility(incompatibilities=issues, suggestions=suggestions)


def _message(code: str, context: dict) -> str:
    template = WARNING_MESSAGES.get(code)
    if template is None:
        return f"Please review this input (code: {code})"
    values = dict(context)
    values["dropped_list"] = ", ".join(context.get("dropped", []))
    values["pair_list"] = " and ".join(context.get("pair", []))
    try:
        return template.format(**values)
    except (KeyError, ValueError):
        return f"Please review this input (code: {code})"


def generate_preflight_warnings(brief: CampaignBrief, compatibility: PlatformCompatibility,
                                seasons: SeasonResolution, repository: BenchmarkRepository) -> List[UIWarning]:
    warnings = []

    min_budget = repository.industry_min_budget(brief.industry)
    if brief.budget < min_budget:
        warnings.append(UIWarning(
            code="BUDGET_TOO_LOW", severity="high", field="budget",
            context={"industry": brief.industry, "minBudget": min_budget, "userBudget": brief.budget},
        ))

    if brief.industry and brief.platforms:
        for issue in compatibility.incompatibilities:
            incompatible = issue.issue == "incompatible"
            warnings.append(UIWarning(
                code="PLATFORM_INCOMPATIBLE" if incompatible else "PLATFORM_DISCOURAGED",
                severity="medium" if incompatible else "low",
                field="platforms",
                context={"platform": issue.platform, "industry": brief.industry,
                         "suggestions": compatibility.suggestions},
            ))

    if seasons.dropped:
        warnings.append(UIWarning(
            code="SEASON_COUNT_EXCEEDED", severity="low", field="seasons",
            context={"dropped": seasons.dropped, "active": seasons.active, "max": len(seasons.active)},
        ))

    for pair in seasons.conflicts:
        warnings.append(UIWarning(code="SEASON_CONFLICT", severity="medium", field="seasons",
                                  context={"pair": pair}))

    for warning in warnings:
        warning.message = _message(warning.code, warning.context)
    return warnings


def preflight(brief: CampaignBrief, repository: BenchmarkRepository,
              max_seasons: int = MAX_SEASONS) -> List[UIWarning]:
    """Warnings a caller may confirm with the user before a run. Never blocks."""
    compatibility = check_platform_compatibility(brief.industry, brief.platforms, repository)
    seasons = resolve_seasons(brief.seasons, max_seasons, repository)
    warnings = generate_preflight_warnings(brief, compatibility, seasons, repository)
    if warnings:
        logger.info("Preflight produced %d warning(s): %s", len(warnings), [w.code for w in warnings])
    return warnings
