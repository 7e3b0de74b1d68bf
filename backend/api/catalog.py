import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException, Query

from schemas import (
    DetectionRequest,
    DetectionResult,
    OptimizationCapabilities,
    PageBuilderOptimization,
    PluginAlternatives,
    PluginMetadata,
    RecommendationReport,
    RecommendationRequest,
)
from services.platform_detection import (
    PAGE_BUILDER_OPTIMIZATIONS,
    detect_wordpress_plugins,
    get_page_builder_optimizations,
    get_plugin_optimization_capabilities,
)
from services.plugin_catalog import (
    ISSUE_TO_USE_CASE,
    all_plugins,
    get_installed_plugins,
    get_non_installed_plugins,
    get_plugins_by_use_case,
    sort_plugins,
)
from services.recommendation_service import build_recommendation_cards, build_recommendations

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/recommendations", response_model=RecommendationReport)
def rank_findings(request: RecommendationRequest):
    """Rank raw findings without storing an audit"""
    try:
        recommendations = build_recommendations(
            request.findings,
            request.technical_issues,
            cms=request.cms,
            detected_plugins=request.detected_plugins,
            page_builder=request.page_builder,
            suppressed_use_cases=request.suppressed_use_cases,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return RecommendationReport(
        recommendations=build_recommendation_cards(recommendations, request.cms, request.detected_plugins),
        cms=request.cms,
        page_builder=request.page_builder,
        page_builder_optimizations=get_page_builder_optimizations(request.page_builder),
        detected_plugins=request.detected_plugins,
    )


@router.get("/plugins", response_model=List[PluginMetadata])
def list_plugins(
    use_case: Optional[str] = None,
    installed: List[str] = Query(default=[]),
    mode: Literal["all", "installed", "recommended"] = "all",
    sort: str = "rating",
    direction: str = "desc",
    cost: Optional[str] = None,
):
    """
    Plugin table. ``use_case`` also accepts issue keys such as
    ``broken-links``; ``mode`` narrows the list to the plugins the site
    already runs or to the alternatives worth suggesting.
    """
    if use_case:
        plugins = get_plugins_by_use_case(ISSUE_TO_USE_CASE.get(use_case, use_case), installed)
    else:
        plugins = all_plugins()

    if mode == "installed":
        plugins = get_installed_plugins(plugins, installed)
    elif mode == "recommended":
        plugins = get_non_installed_plugins(plugins, installed)

    try:
        return sort_plugins(plugins, sort, direction, cost)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/plugins/alternatives", response_model=PluginAlternatives)
def plugin_alternatives(use_case: str, installed: List[str] = Query(default=[])):
    """Installed plugins for a use case next to the ones that clearly beat them"""
    resolved = ISSUE_TO_USE_CASE.get(use_case, use_case)
    candidates = get_plugins_by_use_case(resolved, installed)
    return PluginAlternatives(
        use_case=resolved,
        installed=get_installed_plugins(candidates, installed),
        alternatives=get_non_installed_plugins(candidates, installed),
    )


@router.get("/page-builders/{name}/optimizations", response_model=List[PageBuilderOptimization])
def page_builder_optimizations(name: str):
    if name not in PAGE_BUILDER_OPTIMIZATIONS:
        raise HTTPException(status_code=404, detail="Page builder not found")
    return get_page_builder_optimizations(name)


@router.post("/detect", response_model=DetectionResult)
def detect_platform(request: DetectionRequest):
    """Detect WordPress, its page builder and plugins from page HTML"""
    return detect_wordpress_plugins(request.html)


@router.post("/detect/capabilities", response_model=OptimizationCapabilities)
def detect_capabilities(request: DetectionRequest):
    """What the detected plugins and page builder already optimize"""
    detection = detect_wordpress_plugins(request.html)
    return get_plugin_optimization_capabilities(detection.plugins, detection.page_builder)
