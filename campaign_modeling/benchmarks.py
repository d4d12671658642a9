"""
Benchmark repository: read-only lookup layer for every table the engine consults.

- Tables are validated pydantic models built from benchmark_data.DEFAULT_BENCHMARKS
- An optional JSON file is deep-merged over the defaults (config/benchmarks.json)
- Lookups normalize keys, so "Real Estate", "real-estate" and "real_estate" match
- Missing modifier entries are neutral (1.0); missing industries fall back to "default"
"""

import copy
import json
import logging
import os
import re
from functools import lru_cache
from typing import Dict, List, Optional, Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .benchmark_data import DEFAULT_BENCHMARKS
from .errors import BenchmarkConfigError

logger = logging.getLogger(__name__)

BENCHMARKS_ENV_VAR = "CAMPAIGN_BENCHMARKS_PATH"


def normalize_key(key: Optional[str]) -> str:
    if key is None:
        return ""
    return re.sub(r"[\s/\-]+", "_", str(key).strip().lower())


# -----------------------------
# Table records
# -----------------------------
class KpiModifier(BaseModel):
    cpm: float = Field(default=1.0, gt=0)
    ctr: float = Field(default=1.0, gt=0)
    cvr: float = Field(default=1.0, gt=0)

    class Config:
        frozen = True


class PlatformBenchmark(BaseModel):
    base_cpm: float = Field(gt=0, description="Base CPM in currency units")
    base_ctr: float = Field(ge=0, description="Base CTR in percent")
    base_cvr: float = Field(ge=0, description="Base CVR in percent")
    optimal_budget_min: float = Field(default=0, ge=0)

    class Config:
        frozen = True


class IndustryBenchmark(BaseModel):
    cpm_mod: float = Field(default=1.0, gt=0)
    ctr_mod: float = Field(default=1.0, gt=0)
    cvr_mod: float = Field(default=1.0, gt=0)
    avg_order_value: float = Field(default=200, ge=0)
    avg_cac: float = Field(default=80, ge=0)
    min_budget: float = Field(default=5000, ge=0)

    class Config:
        frozen = True


class SeasonalBenchmark(BaseModel):
    cpm_mult: float = Field(default=1.0, gt=0)
    ctr_mult: float = Field(default=1.0, gt=0)
    cvr_mult: float = Field(default=1.0, gt=0)
    insight: Optional[str] = None

    class Config:
        frozen = True


class LocationModifier(BaseModel):
    cpm_mod: float = Field(default=1.0, gt=0)
    cvr_mod: float = Field(default=1.0, gt=0)

    class Config:
        frozen = True


class DeviceModifier(BaseModel):
    ctr_mod: float = Field(default=1.0, gt=0)
    cvr_mod: float = Field(default=1.0, gt=0)

    class Config:
        frozen = True


class IndustrySplit(BaseModel):
    platform_split: Dict[str, float] = Field(default_factory=dict)
    min_platforms: int = Field(default=1, ge=0)
    max_platforms: int = Field(default=5, ge=1)
    recommended_platforms: List[str] = Field(default_factory=lambda: ["meta", "google_ads"])


class Compatibility(BaseModel):
    allow: List[str] = Field(default_factory=list)
    discourage: List[str] = Field(default_factory=list)
    optimal: List[str] = Field(default_factory=list)


class Advisory(BaseModel):
    platform: str
    min_budget: float = Field(ge=0)
    required: bool = False


class Range(BaseModel):
    min: float
    max: float
    optimal: Optional[float] = None

    @model_validator(mode='after')
    def validate_bounds(self):
        if self.min > self.max:
            raise ValueError(f"Invalid range: min={self.min} > max={self.max}")
        return self


class ValidationRules(BaseModel):
    max_roas_threshold: float = 15.0
    min_roas_threshold: float = 1.0
    flag_threshold_percentage: float = 30


class ValidationRanges(BaseModel):
    industries: Dict[str, Dict[str, Range]] = Field(default_factory=dict)
    platforms: Dict[str, Dict[str, Range]] = Field(default_factory=dict)
    rules: ValidationRules = Field(default_factory=ValidationRules)

    @field_validator("industries", "platforms", mode="before")
    @classmethod
    def normalize_scope_keys(cls, value):
        if isinstance(value, dict):
            return {normalize_key(k): v for k, v in value.items()}
        return value


_KEYED_TABLES = (
    "platforms", "industries", "seasons", "creatives", "competition", "demographics",
    "locations", "devices", "interests", "behaviors", "industry_splits", "goal_weights",
    "platform_floors", "industry_min_budgets", "platform_compatibility",
    "competitor_splits", "industry_advisories",
)


class BenchmarkTables(BaseModel):
    """All lookup tables in one validated document"""
    platforms: Dict[str, PlatformBenchmark]
    industries: Dict[str, IndustryBenchmark]
    seasons: Dict[str, SeasonalBenchmark] = Field(default_factory=dict)
    default_season_insight: str = ""
    season_conflicts: List[List[str]] = Field(default_factory=list)
    creatives: Dict[str, KpiModifier] = Field(default_factory=dict)
    competition: Dict[str, KpiModifier] = Field(default_factory=dict)
    demographics: Dict[str, Dict[str, KpiModifier]] = Field(default_factory=dict)
    locations: Dict[str, LocationModifier] = Field(default_factory=dict)
    devices: Dict[str, DeviceModifier] = Field(default_factory=dict)
    interests: Dict[str, KpiModifier] = Field(default_factory=dict)
    behaviors: Dict[str, KpiModifier] = Field(default_factory=dict)
    industry_splits: Dict[str, IndustrySplit] = Field(default_factory=dict)
    goal_weights: Dict[str, Dict[str, float]] = Field(default_factory=dict)
    platform_floors: Dict[str, float] = Field(default_factory=dict)
    default_platform_floor: float = Field(default=1000, ge=0)
    industry_min_budgets: Dict[str, float] = Field(default_factory=dict)
    platform_compatibility: Dict[str, Compatibility] = Field(default_factory=dict)
    competitor_splits: Dict[str, Dict[str, float]] = Field(default_factory=dict)
    industry_advisories: Dict[str, List[Advisory]] = Field(default_factory=dict)
    validation_ranges: ValidationRanges = Field(default_factory=ValidationRanges)

    @field_validator(*_KEYED_TABLES, mode="before")
    @classmethod
    def normalize_table_keys(cls, value):
        if isinstance(value, dict):
            return {normalize_key(k): v for k, v in value.items()}
        return value


# -----------------------------
# Repository
# -----------------------------
_NEUTRAL = KpiModifier()
_NEUTRAL_SEASON = SeasonalBenchmark()


class BenchmarkRepository:
    """Read-only view over BenchmarkTables, safe to share between runs."""

    def __init__(self, tables: BenchmarkTables):
        self._tables = tables

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BenchmarkRepository":
        return cls(BenchmarkTables(**data))

    @property
    def tables(self) -> BenchmarkTables:
        return self._tables

    def known_platforms(self) -> List[str]:
        return list(self._tables.platforms.keys())

    def platform(self, platform_id: str) -> Optional[PlatformBenchmark]:
        return self._tables.platforms.get(normalize_key(platform_id))

    def industry(self, industry: Optional[str]) -> IndustryBenchmark:
        industries = self._tables.industries
        return industries.get(normalize_key(industry)) or industries.get("default") or IndustryBenchmark()

    def season(self, season: str) -> SeasonalBenchmark:
        return self._tables.seasons.get(normalize_key(season), _NEUTRAL_SEASON)

    def season_insight(self, season: str) -> Optional[str]:
        entry = self._tables.seasons.get(normalize_key(season))
        return entry.insight if entry else None

    @property
    def default_season_insight(self) -> str:
        return self._tables.default_season_insight

    @property
    def season_conflicts(self) -> List[List[str]]:
        return [[normalize_key(s) for s in pair] for pair in self._tables.season_conflicts]

    def creative(self, creative_type: Optional[str]) -> KpiModifier:
        return self._tables.creatives.get(normalize_key(creative_type), _NEUTRAL)

    def competition(self, level: Optional[str]) -> KpiModifier:
        return self._tables.competition.get(normalize_key(level), _NEUTRAL)

    def demographic(self, platform_id: str, key: str) -> Optional[KpiModifier]:
        # keys keep their punctuation ("age_18-24", "age_45+")
        table = self._tables.demographics.get(normalize_key(platform_id), {})
        return table.get(key.strip().lower())

    def location(self, location: str) -> Optional[LocationModifier]:
        return self._tables.locations.get(normalize_key(location))

    def device(self, device: str) -> Optional[DeviceModifier]:
        return self._tables.devices.get(normalize_key(device))

    def interest(self, interest: str) -> Optional[KpiModifier]:
        return self._tables.interests.get(normalize_key(interest))

    def behavior(self, behavior: str) -> Optional[KpiModifier]:
        return self._tables.behaviors.get(normalize_key(behavior))

    def industry_split(self, industry: Optional[str]) -> IndustrySplit:
        splits = self._tables.industry_splits
        return splits.get(normalize_key(industry)) or splits.get("default") or IndustrySplit()

    def goal_weights(self, goal: Optional[str]) -> Optional[Dict[str, float]]:
        return self._tables.goal_weights.get(normalize_key(goal))

    def platform_floor(self, platform_id: str) -> float:
        return self._tables.platform_floors.get(normalize_key(platform_id), self._tables.default_platform_floor)

    def industry_min_budget(self, industry: Optional[str]) -> float:
        budgets = self._tables.industry_min_budgets
        key = normalize_key(industry)
        if key in budgets:
            return budgets[key]
        return budgets.get("default", 0)

    def compatibility(self, industry: Optional[str]) -> Compatibility:
        table = self._tables.platform_compatibility
        return table.get(normalize_key(industry)) or table.get("default") or Compatibility(allow=self.known_platforms())

    def competitor_split(self, industry: Optional[str]) -> Optional[Dict[str, float]]:
        return self._tables.competitor_splits.get(normalize_key(industry))

    def advisories(self, industry: Optional[str]) -> List[Advisory]:
        return self._tables.industry_advisories.get(normalize_key(industry), [])

    def validation_range(self, scope: str, key: Optional[str], kpi: str) -> Optional[Range]:
        ranges = getattr(self._tables.validation_ranges, scope)
        entry = ranges.get(normalize_key(key))
        if entry is None and scope == "industries":
            entry = ranges.get("default")
        if entry is None:
            return None
        return entry.get(kpi)

    @property
    def validation_rules(self) -> ValidationRules:
        return self._tables.validation_ranges.rules


# -----------------------------
# Loading and saving
# -----------------------------
def default_benchmarks_path() -> str:
    script_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(script_dir, "config", "benchmarks.json")


def _normalize_keys(table: Any) -> Any:
    if isinstance(table, dict):
        return {normalize_key(k): v for k, v in table.items()}
    return table


def _normalize_override(override: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize table keys of an override so "real estate" lands on the "real_estate" entry."""
    normalized = {}
    for section, value in override.items():
        if section in _KEYED_TABLES:
            value = _normalize_keys(value)
        elif section == "validation_ranges" and isinstance(value, dict):
            value = dict(value)
            for scope in ("industries", "platforms"):
                if scope in value:
                    value[scope] = _normalize_keys(value[scope])
        normalized[section] = value
    return normalized


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@lru_cache(maxsize=1)
def default_repository() -> BenchmarkRepository:
    return BenchmarkRepository.from_dict(DEFAULT_BENCHMARKS)


def load_benchmarks(config_path: Optional[str] = None, strict: bool = False) -> BenchmarkRepository:
    """Load benchmark tables, merging a JSON override file over the defaults.

    A missing file means "use the defaults". A broken file falls back to the
    defaults with a warning, or raises BenchmarkConfigError when strict is set.
    """
    if config_path is None:
        config_path = os.getenv(BENCHMARKS_ENV_VAR) or default_benchmarks_path()
    try:
        with open(config_path, 'r') as f:
            override = json.load(f)
        if not isinstance(override, dict):
            raise ValueError("benchmark override must be a JSON object")
        repository = BenchmarkRepository.from_dict(_deep_merge(DEFAULT_BENCHMARKS, _normalize_override(override)))
        logger.info("Loaded benchmark overrides from %s", config_path)
        return repository
    except FileNotFoundError:
        logger.debug("No benchmark overrides at %s, using defaults", config_path)
        return default_repository()
    except (OSError, ValueError, ValidationError) as e:
        if strict:
            raise BenchmarkConfigError(f"Invalid benchmark config {config_path}: {e}") from e
        logger.warning("Error loading benchmarks from %s: %s, using defaults", config_path, e)
        return default_repository()


def save_benchmarks(repository: BenchmarkRepository, config_path: Optional[str] = None) -> str:
    """Write the full tables of a repository as JSON and return the path."""
    if config_path is None:
        config_path = default_benchmarks_path()
    try:
        directory = os.path.dirname(config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(config_path, 'w') as f:
            json.dump(repository.tables.model_dump(), f, indent=2)
    except OSError as e:
        raise BenchmarkConfigError(f"Failed to save benchmarks to {config_path}: {e}") from e
    return config_path


def update_benchmark_override(config_path: str, section: str, key: str, values: Dict[str, float]) -> Dict[str, Any]:
    """Set fields of one entry in a JSON override file, creating it if needed.

    The result is validated against the defaults before it is written.
    """
    override: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, 'r') as f:
            override = json.load(f)
    entry = override.setdefault(section, {}).setdefault(normalize_key(key), {})
    entry.update(values)
    try:
        BenchmarkTables(**_deep_merge(DEFAULT_BENCHMARKS, _normalize_override(override)))
    except ValidationError as e:
        raise BenchmarkConfigError(f"Override for {section}.{key} is invalid: {e}") from e
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(config_path, 'w') as f:
        json.dump(override, f, indent=2)
    return override
