"""
Audit summary service

Collects issues from every audit section (performance, technical,
accessibility, keywords, traffic), scores them and produces the prioritized
action list shown at the top of an audit.
"""
import logging
import math
import re
from typing import Any, Dict, List, Optional

import config
from schemas import AuditSummary, IssueImpact, SummaryIssue

logger = logging.getLogger(__name__)

CATEGORIES = ('performance', 'accessibility', 'seo', 'technical', 'content')

SEVERITY_SCORES = {'critical': 100, 'high': 70, 'medium': 40, 'low': 20}
EFFORT_SCORES = {'low': 100, 'medium': 60, 'high': 30}
QUICK_WIN_BONUS = 15

HOURS_PER_UNIT = {'min': 1 / 60, 'hour': 1, 'day': 8, 'week': 40, 'month': 160}
_TIME_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*(min|hour|day|week|month)?')
_UNIT_PATTERN = re.compile(r'(min|hour|day|week|month)')


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_priority_score(issue: SummaryIssue) -> int:
    """
    Weighted priority: severity 30%, strongest impact 40%, legal risk 20%,
    effort 10%, plus a flat bonus for quick wins
    """
    score = SEVERITY_SCORES[issue.severity] * 0.3

    impact = issue.impact
    score += max(
        impact.core_web_vitals or 0,
        impact.search_ranking or 0,
        impact.accessibility or 0,
        impact.user_experience or 0,
    ) * 0.4

    if issue.legal_risk:
        score += 100 * 0.2

    score += EFFORT_SCORES[issue.effort] * 0.1

    if issue.quick_win:
        score += QUICK_WIN_BONUS

    return _round_half_up(score)


def _vital_severity(score: float) -> str:
    if score < 50:
        return 'critical'
    if score < 75:
        return 'high'
    return 'medium'


def _needs_attention(metric: Optional[Dict[str, Any]]) -> bool:
    # A missing or null score means the metric wasn't measured
    return bool(metric) and metric.get('score') is not None and metric['score'] < 90


def extract_performance_issues(performance_data: Dict[str, Any]) -> List[SummaryIssue]:
    issues = []
    scores = (performance_data.get('desktop') or {}).get('scores') or {}

    lcp = scores.get('lcp')
    if _needs_attention(lcp):
        issues.append(SummaryIssue(
            id='perf-lcp',
            title='Poor Largest Contentful Paint (LCP)',
            description=f"LCP is {lcp.get('display_value', 'unknown')}. Target is under 2.5s for good user experience.",
            category='performance',
            severity=_vital_severity(lcp['score']),
            impact=IssueImpact(core_web_vitals=round(100 - lcp['score']), search_ranking=80, user_experience=90),
            effort='medium',
            section='Performance & Technical',
            section_id='performance',
            fix_recommendation='Optimize images, reduce server response time, eliminate render-blocking resources',
            estimated_time_to_fix='2-4 hours',
        ))

    cls = scores.get('cls')
    if _needs_attention(cls):
        issues.append(SummaryIssue(
            id='perf-cls',
            title='Cumulative Layout Shift (CLS) Issues',
            description=f"CLS is {cls.get('display_value', 'unknown')}. Pages are shifting unexpectedly during load.",
            category='performance',
            severity=_vital_severity(cls['score']),
            impact=IssueImpact(core_web_vitals=round(100 - cls['score']), user_experience=85, search_ranking=70),
            effort='medium',
            section='Performance & Technical',
            section_id='performance',
            fix_recommendation='Add size attributes to images/videos, reserve space for ads, avoid inserting content above existing content',
            estimated_time_to_fix='1-3 hours',
        ))

    inp = scores.get('inp')
    if _needs_attention(inp):
        issues.append(SummaryIssue(
            id='perf-inp',
            title='Slow Interaction to Next Paint (INP)',
            description=f"INP is {inp.get('display_value', 'unknown')}. User interactions are sluggish.",
            category='performance',
            severity=_vital_severity(inp['score']),
            impact=IssueImpact(core_web_vitals=round(100 - inp['score']), user_experience=95, search_ranking=75),
            effort='high',
            section='Performance & Technical',
            section_id='performance',
            fix_recommendation='Optimize JavaScript execution, reduce main thread work, break up long tasks',
            estimated_time_to_fix='3-6 hours',
        ))

    return issues


def extract_technical_issues(technical_data: Dict[str, Any]) -> List[SummaryIssue]:
    issues = []
    images = technical_data.get('images') or {}
    seo = technical_data.get('seo') or {}
    links = technical_data.get('links') or {}

    large_images = len(images.get('large_images') or [])
    if large_images > 0:
        issues.append(SummaryIssue(
            id='tech-large-images',
            title=f'{large_images} Large Unoptimized Images',
            description=f'Found {large_images} images over 100KB. These slow down page load significantly.',
            category='performance',
            severity='critical' if large_images > 10 else 'high' if large_images > 5 else 'medium',
            impact=IssueImpact(core_web_vitals=min(large_images * 5, 90), user_experience=80, search_ranking=60),
            effort='low',
            section='Performance & Technical',
            section_id='performance',
            fix_recommendation='Compress images using WebP/AVIF format, implement lazy loading, use responsive images',
            estimated_time_to_fix='1-2 hours',
            quick_win=True,
            affected_pages=large_images,
        ))

    missing_descriptions = seo.get('missing_meta_descriptions') or 0
    if missing_descriptions > 0:
        issues.append(SummaryIssue(
            id='tech-meta-descriptions',
            title=f'{missing_descriptions} Pages Missing Meta Descriptions',
            description=f"{missing_descriptions} pages don't have meta descriptions, hurting click-through rates from search.",
            category='seo',
            severity='high' if missing_descriptions > 10 else 'medium',
            impact=IssueImpact(search_ranking=85, user_experience=40),
            effort='low',
            section='Performance & Technical',
            section_id='technical',
            fix_recommendation='Add unique, compelling meta descriptions (150-160 characters) to each page',
            estimated_time_to_fix='30 min - 2 hours',
            quick_win=True,
            affected_pages=missing_descriptions,
        ))

    missing_h1 = seo.get('missing_h1') or 0
    if missing_h1 > 0:
        issues.append(SummaryIssue(
            id='tech-h1-tags',
            title=f'{missing_h1} Pages Missing H1 Tags',
            description=f'{missing_h1} pages lack H1 headings, confusing search engines and users.',
            category='seo',
            severity='high',
            impact=IssueImpact(search_ranking=90, accessibility=60, user_experience=50),
            effort='low',
            section='Performance & Technical',
            section_id='technical',
            fix_recommendation='Add descriptive H1 tag to each page with target keywords',
            estimated_time_to_fix='30 min - 1 hour',
            quick_win=True,
            affected_pages=missing_h1,
        ))

    broken_links = links.get('broken_links') or 0
    if broken_links > 0:
        issues.append(SummaryIssue(
            id='tech-broken-links',
            title=f'{broken_links} Broken Links Detected',
            description=f'{broken_links} links return 404 errors, hurting SEO and user experience.',
            category='technical',
            severity='critical' if broken_links > 20 else 'high' if broken_links > 10 else 'medium',
            impact=IssueImpact(search_ranking=85, user_experience=90),
            effort='low',
            section='Performance & Technical',
            section_id='technical',
            fix_recommendation='Fix or remove broken links, implement 301 redirects where appropriate',
            estimated_time_to_fix='1-3 hours',
            quick_win=True,
            affected_pages=broken_links,
        ))

    return issues


def extract_accessibility_issues(accessibility_data: Dict[str, Any]) -> List[SummaryIssue]:
    issues = []

    # Either a multi-page result or a single page result
    pages = accessibility_data['pages'] if 'pages' in accessibility_data else [accessibility_data]
    if not pages:
        return issues

    total_critical = sum((page.get('issues_by_severity') or {}).get('critical', 0) for page in pages)

    if total_critical > 0:
        issues.append(SummaryIssue(
            id='a11y-critical',
            title=f'{total_critical} Critical Accessibility Violations',
            description='Critical WCAG violations blocking disabled users. Legal liability risk.',
            category='accessibility',
            severity='critical',
            impact=IssueImpact(accessibility=100, user_experience=85, search_ranking=40),
            effort='medium',
            section='Accessibility',
            section_id='accessibility',
            fix_recommendation='Address critical issues: missing alt text, keyboard navigation, color contrast, form labels',
            estimated_time_to_fix='2-6 hours',
            legal_risk=True,
            affected_pages=len(pages),
        ))

    if not pages[0].get('eaa_compliant'):
        issues.append(SummaryIssue(
            id='a11y-compliance',
            title='Non-Compliant with UK/EAA Accessibility Laws',
            description="Website doesn't meet WCAG 2.2 AA. Risk of fines up to €3M under European Accessibility Act.",
            category='accessibility',
            severity='critical',
            impact=IssueImpact(accessibility=100),
            effort='high',
            section='Accessibility',
            section_id='accessibility',
            fix_recommendation='Achieve WCAG 2.2 Level AA compliance. Consider accessibility plugins or manual fixes.',
            estimated_time_to_fix='1-2 weeks',
            legal_risk=True,
        ))

    return issues


def extract_seo_issues(keywords_data: Dict[str, Any]) -> List[SummaryIssue]:
    issues = []

    non_branded = keywords_data.get('non_branded_keywords')
    if non_branded is not None and len(non_branded) < 10:
        issues.append(SummaryIssue(
            id='seo-keywords',
            title='Limited Non-Branded Keyword Rankings',
            description=f'Only {len(non_branded)} non-branded keywords ranking. Missing opportunities.',
            category='seo',
            severity='high',
            impact=IssueImpact(search_ranking=90, user_experience=30),
            effort='high',
            section='Keywords',
            section_id='keywords',
            fix_recommendation='Create content targeting recommended keywords, optimize existing pages for secondary keywords',
            estimated_time_to_fix='2-4 weeks',
        ))

    recommended = keywords_data.get('recommended_keywords') or []
    if recommended:
        opportunities = len(recommended[:5])
        issues.append(SummaryIssue(
            id='seo-opportunities',
            title=f'{opportunities} High-Value Keyword Opportunities',
            description=f'Found {opportunities} keywords with good search volume and low competition.',
            category='content',
            severity='medium',
            impact=IssueImpact(search_ranking=80, user_experience=50),
            effort='medium',
            section='Keywords',
            section_id='keywords',
            fix_recommendation='Create targeted content for recommended keywords, optimize page titles and headings',
            estimated_time_to_fix='1-2 weeks',
        ))

    return issues


def extract_traffic_issues(traffic_data: Dict[str, Any]) -> List[SummaryIssue]:
    issues = []

    organic_traffic = (traffic_data.get('organic') or {}).get('total') or 0
    if organic_traffic < 1000:
        issues.append(SummaryIssue(
            id='traffic-low-organic',
            title='Low Organic Traffic',
            description=f'Only {organic_traffic:,} monthly organic visits. Significant growth opportunity.',
            category='seo',
            severity='medium',
            impact=IssueImpact(search_ranking=85, user_experience=20),
            effort='high',
            section='Traffic',
            section_id='traffic',
            fix_recommendation='Improve SEO fundamentals, create quality content, build backlinks, target long-tail keywords',
            estimated_time_to_fix='3-6 months',
        ))

    return issues


def estimate_hours(time_to_fix: str) -> float:
    """
    Lower bound of a time estimate in hours.
    "30 min - 2 hours" -> 0.5, "2-4 hours" -> 2, "1-2 weeks" -> 40
    """
    match = _TIME_PATTERN.search(time_to_fix)
    if not match:
        return 0.0
    unit = match.group(2)
    if unit is None:
        unit_match = _UNIT_PATTERN.search(time_to_fix, match.end())
        if not unit_match:
            return 0.0
        unit = unit_match.group(1)
    return float(match.group(1)) * HOURS_PER_UNIT[unit]


def calculate_total_time(issues: List[SummaryIssue]) -> str:
    total_hours = sum(estimate_hours(issue.estimated_time_to_fix) for issue in issues)

    if total_hours < 8:
        return f'{_round_half_up(total_hours)} hours'
    if total_hours < 40:
        return f'{_round_half_up(total_hours / 8)} days'
    return f'{_round_half_up(total_hours / 40)} weeks'


SECTION_EXTRACTORS = [
    ('performance', extract_performance_issues),
    ('technical', extract_technical_issues),
    ('accessibility', extract_accessibility_issues),
    ('keywords', extract_seo_issues),
    ('traffic', extract_traffic_issues),
]


def generate_audit_summary(audit_results: Dict[str, Any]) -> AuditSummary:
    """Generate the prioritized summary from all audit result sections"""
    issues: List[SummaryIssue] = []
    for section, extractor in SECTION_EXTRACTORS:
        section_data = audit_results.get(section)
        if section_data:
            issues.extend(extractor(section_data))

    for issue in issues:
        issue.priority_score = calculate_priority_score(issue)

    # Highest score first; stable for ties
    issues.sort(key=lambda issue: issue.priority_score, reverse=True)

    by_category = {category: [issue for issue in issues if issue.category == category] for category in CATEGORIES}

    summary = AuditSummary(
        total_issues=len(issues),
        critical_issues=sum(1 for issue in issues if issue.severity == 'critical'),
        high_priority_issues=sum(1 for issue in issues if issue.severity == 'high'),
        quick_wins=sum(1 for issue in issues if issue.quick_win),
        estimated_total_time=calculate_total_time(issues),
        top_priorities=issues[:config.TOP_PRIORITIES],
        by_category=by_category,
    )
    logger.info("Audit summary: %d issues, %d critical, %d quick wins",
                summary.total_issues, summary.critical_issues, summary.quick_wins)
    return summary
