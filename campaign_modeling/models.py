from pydantic import BaseModel, Field
from typing import Literal, Optional, List, Any, Dict

Severity = Literal["low", "medium", "high"]


class TargetAudience(BaseModel):
    """Audience attributes that drive the demographic/location/device/targeting modifiers"""
    age_groups: List[str] = Field(default_factory=list, alias="ageGroups", description="Age buckets, e.g. '25-34'")
    gender: Optional[str] = Field(default=None, description="male, female or mixed")
    locations: List[str] = Field(default_factory=list, description="City ids, e.g. 'riyadh'")
    interests: List[str] = Field(default_factory=list, description="Interest targeting tags")
    behaviors: List[str] = Field(default_factory=list, description="Behavior targeting tags")
    devices: List[str] = Field(default_factory=lambda: ["mobile"], description="Device mix, mobile by default")

    class Config:
        populate_by_name = True
        frozen = True


class CampaignBrief(BaseModel):
    """Immutable campaign input owned by the caller"""
    industry: str = Field(default="default", description="Industry id, e.g. 'e-commerce' or 'real estate'")
    sub_industry: Optional[str] = Field(default=None, alias="subIndustry")
    budget: float = Field(ge=0, description="Total budget in currency units")
    duration: Optional[str] = Field(default=None, description="Duration bucket")
    target_audience: TargetAudience = Field(default_factory=TargetAudience, alias="targetAudience")
    goals: List[str] = Field(default_factory=list, description="Goal list, the first one is primary")
    seasons: List[str] = Field(default_factory=list, description="Requested seasons")
    platforms: List[str] = Field(default_factory=list, description="Selected platform ids")
    creative_type: Optional[str] = Field(default=None, alias="creativeType")
    competition_level: Optional[str] = Field(default=None, alias="competitionLevel")
    profit_margin: float = Field(default=0.0, ge=0, le=100, alias="profitMargin", description="Profit margin in percent")
    conversion_definition: Optional[str] = Field(default=None, alias="conversionDefinition")
    funnel_stage: Optional[str] = Field(default=None, alias="funnelStage")
    avg_order_value: Optional[float] = Field(default=None, gt=0, alias="avgOrderValue",
                                             description="Overrides the industry AOV when set")

    class Config:
        populate_by_name = True
        frozen = True


class KpiSet(BaseModel):
    """Projected KPIs for one platform or for the campaign total"""
    budget: float = Field(default=0.0, ge=0)
    impressions: int = Field(default=0, ge=0)
    clicks: int = Field(default=0, ge=0)
    conversions: int = Field(default=0, ge=0)
    cpm: float = Field(default=0.0, ge=0)
    ctr: float = Field(default=0.0, ge=0)
    cpc: float = Field(default=0.0, ge=0)
    cvr: float = Field(default=0.0, ge=0)
    roas: float = Field(default=0.0, ge=0)
    revenue: float = Field(default=0.0, ge=0)
    cac: float = Field(default=0.0, ge=0)
    # total scope only
    arpu: float = Field(default=0.0, ge=0)
    cpa: float = Field(default=0.0, ge=0)
    break_even_roas: float = Field(default=0.0, ge=0, alias="breakEvenRoas")

    class Config:
        populate_by_name = True


class ProjectionResult(BaseModel):
    """Per-platform projection outcome, failures carry an error instead of raising"""
    success: bool = Field(description="Whether the projection succeeded")
    kpis: Optional[KpiSet] = Field(default=None, description="Projected KPIs on success")
    error: Optional[str] = Field(default=None, description="Error message if the projection failed")


class ValidationFlag(BaseModel):
    kpi: str
    issue: str
    severity: Severity
    message: str
    expected: Optional[str] = None
    actual: Optional[str] = None


class Correction(BaseModel):
    field: str
    from_value: float = Field(alias="from")
    to_value: float = Field(alias="to")
    rule: str

    class Config:
        populate_by_name = True


class UIWarning(BaseModel):
    """Advisory warning surfaced before or alongside a run"""
    code: str
    severity: Severity
    message: str = ""
    field: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)


class SeasonResolution(BaseModel):
    active: List[str] = Field(default_factory=list)
    dropped: List[str] = Field(default_factory=list)
    conflicts: List[List[str]] = Field(default_factory=list)


class PlatformIssue(BaseModel):
    platform: str
    issue: Literal["incompatible", "discouraged"]


class PlatformCompatibility(BaseModel):
    incompatibilities: List[PlatformIssue] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class AllocationResult(BaseModel):
    """Output of the budget allocator, after tactical reallocation"""
    budget_allocation: Dict[str, float] = Field(alias="budgetAllocation")
    reallocation_details: List[str] = Field(default_factory=list, alias="reallocationDetails")
    original_allocation: Dict[str, float] = Field(alias="originalAllocation")
    industry_split: Dict[str, float] = Field(default_factory=dict, alias="industrySplit")
    goal_weights: str = Field(default="default", alias="goalWeights")

    class Config:
        populate_by_name = True


class AllocationValidation(BaseModel):
    is_valid: bool = Field(alias="isValid")
    warnings: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class AdvancedInsight(BaseModel):
    title: str
    value: float
    status: Literal["neutral", "above", "below"] = "neutral"
    insight: str = ""
    benchmark: Optional[float] = None


class SeasonalLift(BaseModel):
    applied: List[str] = Field(default_factory=list)
    insight: str = ""


class AdvancedInsights(BaseModel):
    arpu: AdvancedInsight
    cac: AdvancedInsight
    break_even_roas: AdvancedInsight = Field(alias="breakEvenRoas")
    seasonal_lift: SeasonalLift = Field(alias="seasonalLift")

    class Config:
        populate_by_name = True


class GeneratedInsights(BaseModel):
    """Rephrased insight texts returned by the narrative service"""
    arpu: Optional[str] = None
    cac: Optional[str] = None
    break_even_roas: Optional[str] = Field(default=None, alias="breakEvenRoas")
    seasonal_lift: Optional[str] = Field(default=None, alias="seasonalLift")

    class Config:
        populate_by_name = True


class GeneratedWarning(BaseModel):
    code: str
    message: str


class NarrativeChecks(BaseModel):
    roas_budget_identity_ok: bool = True
    arpu_revenue_identity_ok: bool = True
    awareness_finance_zero_ok: bool = True


class NarrativeContent(BaseModel):
    """Content returned by the narrative collaborator (also used as its response schema)"""
    confidence: float = Field(default=0.0, description="Confidence in the report, 0..1")
    narrative: str = Field(default="", description="Executive summary of the plan")
    recommendations: List[str] = Field(default_factory=list)
    explainability: Dict[str, str] = Field(default_factory=dict,
                                           description="Heading -> short explanation")
    generated_advanced_insights: Optional[GeneratedInsights] = Field(default=None, alias="generatedAdvancedInsights")
    generated_anomalies: List[ValidationFlag] = Field(default_factory=list, alias="generatedAnomalies")
    generated_ui_warnings: List[GeneratedWarning] = Field(default_factory=list, alias="generatedUiWarnings")
    checks: NarrativeChecks = Field(default_factory=NarrativeChecks)

    class Config:
        populate_by_name = True
