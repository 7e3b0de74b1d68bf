from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Impact = Literal["High", "Medium", "Low"]
Effort = Literal["Easy", "Medium", "Hard"]


# Recommendations
class Recommendation(BaseModel):
    title: str
    description: str = ""
    impact: Impact = "Medium"
    effort: Effort = "Medium"
    icon: str = "trending-up"
    details: str = ""
    how_to: List[str] = Field(default_factory=list)
    use_case: Optional[str] = None


class TechnicalIssues(BaseModel):
    missing_h1_tags: int = Field(default=0, ge=0)
    missing_meta_titles: int = Field(default=0, ge=0)
    missing_meta_descriptions: int = Field(default=0, ge=0)
    large_images: int = Field(default=0, ge=0)
    http_404_errors: int = Field(default=0, ge=0)


class ToolStep(BaseModel):
    text: str
    link: Optional[str] = None


class PluginMetadata(BaseModel):
    name: str
    slug: str
    category: Literal["seo", "images", "performance", "caching", "security"]
    use_case: List[str]
    description: str
    rating: float
    reviews: int
    active_installs: str
    cost: Literal["Free", "Freemium", "Paid"]
    pricing_details: Optional[str] = None
    url: str
    free_tier_limits: Optional[str] = None
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)
    best_for: str = ""


class RecommendationCard(Recommendation):
    """A ranked recommendation with its steps split for display"""
    steps: List[str] = Field(default_factory=list)
    tool_steps: List[ToolStep] = Field(default_factory=list)
    installed_plugins: List[PluginMetadata] = Field(default_factory=list)
    suggested_plugins: List[PluginMetadata] = Field(default_factory=list)


class PageBuilderOptimization(BaseModel):
    name: str
    category: Literal["css", "javascript", "images", "fonts", "general"]
    title: str
    description: str
    instructions: List[str]
    impact: Impact
    difficulty: Effort


class RecommendationRequest(BaseModel):
    findings: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)
    technical_issues: TechnicalIssues = Field(default_factory=TechnicalIssues)
    cms: Optional[str] = None
    page_builder: Optional[str] = None
    detected_plugins: List[str] = Field(default_factory=list)
    suppressed_use_cases: List[str] = Field(default_factory=list)


class RecommendationReport(BaseModel):
    recommendations: List[RecommendationCard]
    cms: Optional[str] = None
    page_builder: Optional[str] = None
    page_builder_optimizations: List[PageBuilderOptimization] = Field(default_factory=list)
    detected_plugins: List[str] = Field(default_factory=list)


# Platform detection
class DetectionRequest(BaseModel):
    html: str


class DetectionResult(BaseModel):
    cms: Optional[str] = None
    plugins: List[str] = Field(default_factory=list)
    page_builder: Optional[str] = None


class OptimizationCapabilities(BaseModel):
    can_optimize_css: bool
    can_optimize_js: bool
    can_optimize_images: bool
    can_enable_compression: bool
    cache_plugins: List[str]
    optimization_plugins: List[str]
    page_builder_optimizations: List[PageBuilderOptimization]


# Summary
class IssueImpact(BaseModel):
    core_web_vitals: Optional[int] = None
    search_ranking: Optional[int] = None
    accessibility: Optional[int] = None
    user_experience: Optional[int] = None


class SummaryIssue(BaseModel):
    id: str
    title: str
    description: str
    category: Literal["performance", "accessibility", "seo", "technical", "content"]
    severity: Literal["critical", "high", "medium", "low"]
    impact: IssueImpact
    effort: Literal["low", "medium", "high"]
    priority_score: int = 0
    section: str
    section_id: str
    fix_recommendation: str
    estimated_time_to_fix: str
    legal_risk: bool = False
    quick_win: bool = False
    affected_pages: Optional[int] = None
    details_link: Optional[str] = None


class AuditSummary(BaseModel):
    total_issues: int
    critical_issues: int
    high_priority_issues: int
    quick_wins: int
    estimated_total_time: str
    top_priorities: List[SummaryIssue]
    by_category: Dict[str, List[SummaryIssue]]


# Audits
class AuditCreate(BaseModel):
    website_url: str
    findings: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)
    technical_issues: TechnicalIssues = Field(default_factory=TechnicalIssues)
    cms: Optional[str] = None
    page_builder: Optional[str] = None
    detected_plugins: List[str] = Field(default_factory=list)
    desktop_score: Optional[int] = Field(default=None, ge=0, le=100)
    mobile_score: Optional[int] = Field(default=None, ge=0, le=100)
    results: Dict[str, Any] = Field(default_factory=dict)
    html: Optional[str] = None  # used for platform detection when cms is not given


class AuditResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    website_url: str
    status: str
    cms: Optional[str] = None
    page_builder: Optional[str] = None
    detected_plugins: List[str] = Field(default_factory=list)
    desktop_score: Optional[int] = None
    mobile_score: Optional[int] = None
    findings: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)
    technical_issues: Dict[str, int] = Field(default_factory=dict)
    created_at: datetime


class PluginAlternatives(BaseModel):
    use_case: str
    installed: List[PluginMetadata]
    alternatives: List[PluginMetadata]
