import json
import logging
import os
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from .modifiers import CAP_TABLE, CapPair

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "CAMPAIGN_ENGINE_SETTINGS"

# environment variable -> settings field
ENV_OVERRIDES = {
    "CAMPAIGN_NARRATIVE_PROVIDER": "narrative_provider",
    "CAMPAIGN_TOTALS_MODE": "totals_mode",
    "GEMINI_MODEL": "gemini_model",
    "OPENAI_MODEL": "openai_model",
}


class CapSetting(BaseModel):
    soft: float = Field(gt=0)
    hard: float = Field(gt=0)


def _default_caps() -> Dict[str, CapSetting]:
    return {kpi: CapSetting(soft=pair.soft, hard=pair.hard) for kpi, pair in CAP_TABLE.items()}


class EngineSettings(BaseModel):
    """Tunable engine policy, loaded from config/engine_settings.json"""
    caps: Dict[str, CapSetting] = Field(default_factory=_default_caps, description="Soft/hard caps per KPI type")
    composition_method: Literal["log-sum", "product"] = Field(default="log-sum")
    max_seasons: int = Field(default=2, ge=1, description="Active seasons kept per run")
    low_share_threshold: float = Field(default=0.05, ge=0, le=1, description="Share of budget below which a platform is flagged")
    totals_mode: Literal["weighted", "sum"] = Field(default="weighted",
                                                    description="How ratio KPIs are aggregated across platforms")
    apply_corrections: bool = Field(default=False, description="Clamp rate KPIs to plausible ranges instead of only flagging")
    narrative_provider: Literal["gemini", "openai", "none"] = Field(default="gemini")
    gemini_model: str = Field(default="gemini-2.5-flash")
    openai_model: str = Field(default="gpt-4o-mini")
    temperature: float = Field(default=0.6, ge=0, le=2)
    benchmarks_path: Optional[str] = Field(default=None, description="JSON benchmark override file")

    def cap_pairs(self) -> Dict[str, CapPair]:
        return {kpi: CapPair(soft=c.soft, hard=c.hard) for kpi, c in self.caps.items()}


def default_settings_path() -> str:
    script_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(script_dir, "config", "engine_settings.json")


def load_settings(config_path: Optional[str] = None) -> EngineSettings:
    """Load settings from JSON, falling back to defaults, then apply env overrides."""
    if config_path is None:
        config_path = os.getenv(SETTINGS_ENV_VAR) or default_settings_path()
    data = {}
    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("settings file must contain a JSON object")
    except FileNotFoundError:
        logger.debug("Settings file not found at %s, using default values", config_path)
        data = {}
    except (OSError, ValueError) as e:
        logger.warning("Error loading settings from %s: %s, using default values", config_path, e)
        data = {}

    for env_var, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            data[field_name] = value.strip().lower() if field_name in ("narrative_provider", "totals_mode") else value

    if "caps" in data:
        # partial cap overrides keep the remaining defaults
        caps = {kpi: pair.model_dump() for kpi, pair in _default_caps().items()}
        caps.update(data["caps"])
        data["caps"] = caps

    try:
        return EngineSettings(**data)
    except ValidationError as e:
        logger.warning("Invalid engine settings (%s), using default values", e)
        return EngineSettings()
