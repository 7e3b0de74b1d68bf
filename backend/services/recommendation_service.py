"""
Recommendation generation and ranking

Raw audit findings ("Eliminate render-blocking resources", "Reduce unused
JavaScript", ...) and technical crawl counts are turned into structured,
CMS-aware recommendations, then suppressed, deduplicated, ranked by impact
and truncated for display.

Findings are matched against FINDING_RULES, an ordered table of
(predicate, template) pairs where the first match wins. Anything unmatched
becomes a generic recommendation titled with the finding text.
"""
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import config
from schemas import Recommendation, RecommendationCard, TechnicalIssues, ToolStep
from services.plugin_catalog import get_installed_plugins, get_non_installed_plugins, get_plugins_by_use_case

logger = logging.getLogger(__name__)

Finding = Union[str, Mapping[str, Any]]

IMPACT_RANK = {'High': 0, 'Medium': 1, 'Low': 2}


def _contains_any(*phrases: str) -> Callable[[str], bool]:
    return lambda text: any(phrase in text for phrase in phrases)


def _offscreen_images(text: str) -> bool:
    return 'images' in text and any(word in text for word in ('offscreen', 'defer', 'lazy'))


# First match wins
FINDING_RULES: List[Tuple[Callable[[str], bool], Dict[str, Any]]] = [
    (_contains_any('unused css'), {
        'title': 'Remove Unused CSS',
        'description': "Your site has CSS code that's not being used, slowing down loading",
        'impact': 'Medium',
        'effort': 'Medium',
        'icon': 'code',
        'details': 'Unused CSS increases file sizes and slows down your website',
        'how_to': [
            'Use developer tools to identify unused CSS',
            'Remove or comment out unused styles',
            'Consider using CSS purging tools',
            'Split CSS into smaller, page-specific files',
        ],
        'instruction_type': 'css',
    }),
    (_contains_any('unused javascript'), {
        'title': 'Remove Unused JavaScript',
        'description': "JavaScript files contain code that's not being executed",
        'impact': 'High',
        'effort': 'Medium',
        'icon': 'code',
        'details': 'Unused JavaScript blocks the browser and wastes bandwidth',
        'how_to': [
            'Audit JavaScript files for unused code',
            'Remove unnecessary third-party scripts',
            'Use code splitting to load JS only when needed',
            'Minify and compress remaining JavaScript',
        ],
        'instruction_type': 'javascript',
    }),
    (_contains_any('render-blocking', 'blocking resources'), {
        'title': 'Fix Render-Blocking Resources',
        'description': 'CSS and JS files are preventing your page from displaying quickly',
        'impact': 'High',
        'effort': 'Hard',
        'icon': 'alert-triangle',
        'details': 'Critical resources must load before the page can be displayed',
        'how_to': [
            'Inline critical CSS in the HTML head',
            'Load non-critical CSS asynchronously',
            'Defer non-essential JavaScript',
            'Use resource hints like preload for critical resources',
        ],
    }),
    (_offscreen_images, {
        'title': 'Lazy Load Images',
        'description': 'Images below the fold are loading immediately, wasting bandwidth',
        'impact': 'Medium',
        'effort': 'Easy',
        'icon': 'image',
        'details': 'Loading images only when needed improves initial page load',
        'how_to': [
            'Add loading="lazy" to img tags',
            'Use intersection observer for custom lazy loading',
            'Prioritize above-the-fold images',
            'Consider using modern image formats',
        ],
        'instruction_type': 'images',
    }),
    (_contains_any('webp', 'next-gen', 'image format'), {
        'title': 'Use Modern Image Formats',
        'description': 'Convert images to WebP or AVIF for better compression',
        'impact': 'Medium',
        'effort': 'Easy',
        'icon': 'image',
        'details': 'Modern formats reduce file size by 25-50% with same quality',
        'how_to': [
            'Convert JPEG/PNG to WebP format',
            'Use picture element with fallbacks',
            'Set up automatic conversion on your server',
            'Test image quality after conversion',
        ],
    }),
    (_contains_any('minify'), {
        'title': 'Minify Code Files',
        'description': 'Remove unnecessary characters from CSS/JS to reduce file sizes',
        'impact': 'Low',
        'effort': 'Easy',
        'icon': 'zap',
        'details': 'Minification removes whitespace and comments, reducing file sizes',
        'how_to': [
            'Use build tools like Webpack or Gulp',
            'Enable minification in your CMS/platform',
            'Use online minification tools',
            'Set up automated minification in deployment',
        ],
    }),
    (_contains_any('server response', 'response time'), {
        'title': 'Improve Server Response Time',
        'description': 'Your server takes too long to respond to requests',
        'impact': 'High',
        'effort': 'Hard',
        'icon': 'server',
        'details': 'Slow server response delays everything else on your page',
        'how_to': [
            'Upgrade to faster hosting',
            'Enable caching on your server',
            'Optimize database queries',
            'Use a Content Delivery Network (CDN)',
        ],
    }),
    (_contains_any('compression'), {
        'title': 'Enable Text Compression',
        'description': 'Compress text files before sending them to browsers',
        'impact': 'Medium',
        'effort': 'Easy',
        'icon': 'zap',
        'details': 'Gzip/Brotli compression reduces text file sizes by 60-80%',
        'how_to': [
            'Enable Gzip compression on your server',
            'Use Brotli compression for better results',
            'Configure compression for CSS, JS, and HTML',
            'Test compression is working properly',
        ],
        'instruction_type': 'compression',
    }),
    (_contains_any('largest contentful paint', 'lcp'), {
        'title': 'Optimize Largest Contentful Paint (LCP)',
        'description': 'The largest element on your page is loading too slowly',
        'impact': 'High',
        'effort': 'Medium',
        'icon': 'image',
        'details': 'LCP is a Core Web Vital and a direct ranking signal',
        'how_to': [
            'Optimize and compress hero images',
            'Use preload for critical resources',
            'Reduce server response times',
            'Remove render-blocking CSS and JavaScript',
        ],
    }),
]

DEFAULT_RECOMMENDATION = {
    'description': 'Improve this aspect of your website performance',
    'impact': 'Medium',
    'effort': 'Medium',
    'icon': 'trending-up',
    'details': 'This optimization will help improve your website speed',
    'how_to': [
        'Research best practices for this optimization',
        'Test changes on a staging environment first',
        'Monitor performance before and after changes',
    ],
}

# Each matching step is inserted at index 1 of the base steps
PLUGIN_INSTRUCTIONS = {
    'css': [
        ('WP Rocket', '🚀 In WP Rocket: Go to File Optimization → CSS Files → Enable "Minify CSS" and "Combine CSS files"'),
        ('Autoptimize', '⚡ In Autoptimize: Enable "Optimize CSS Code" and "Aggregate CSS-files"'),
        ('W3 Total Cache', '🎯 In W3 Total Cache: Enable "Minify CSS" under Performance → Minify settings'),
    ],
    'javascript': [
        ('WP Rocket', '🚀 In WP Rocket: Enable "Minify JavaScript", "Combine JavaScript files", and "Load JavaScript deferred"'),
        ('Autoptimize', '⚡ In Autoptimize: Enable "Optimize JavaScript Code" and consider "Defer non-aggregated JS"'),
        ('W3 Total Cache', '🎯 In W3 Total Cache: Enable "Minify JS" and configure JS minification settings'),
    ],
    'images': [
        ('WP Rocket', '🚀 In WP Rocket: Enable "LazyLoad for images" and "Convert images to WebP" if available'),
        ('Autoptimize', '⚡ In Autoptimize: Enable "Optimize Images" in the Images tab for automatic compression'),
    ],
    'compression': [
        ('WP Rocket', '🚀 WP Rocket handles Gzip compression automatically - check File Optimization settings'),
        ('W3 Total Cache', '🎯 In W3 Total Cache: Enable "Disk: Enhanced" for page cache to improve compression'),
    ],
}

PAGE_BUILDER_INSTRUCTIONS = {
    'css': {
        'Elementor': '🎨 In Elementor: Go to Settings → Advanced → Set "CSS Print Method" to "Internal Embedding" for better loading',
        'Divi': '🎨 In Divi: Go to Theme Options → Builder → Advanced → Enable "Static CSS File Generation"',
        'Fusion Builder (Avada)': '🎨 In Avada: Go to Theme Options → Performance → Set "CSS Compiling Method" to "File"',
    },
    'javascript': {
        'Divi': '🎨 In Divi: Go to Theme Options → General → Performance → Enable "Defer jQuery And jQuery Migrate"',
        'Fusion Builder (Avada)': '🎨 In Avada: Go to Theme Options → Performance → Enable "JS Compiler" for better loading',
    },
    'fonts': {
        'Elementor': '🎨 In Elementor: Go to Settings → Advanced → Set "Google Fonts Display" to "swap" for better loading',
        'Divi': '🎨 In Divi: Go to Theme Options → General → Performance → Disable unused Google Fonts',
    },
}

TECHNICAL_ISSUE_TEMPLATES = [
    {
        'field': 'missing_h1_tags',
        'title': 'Add Missing H1 Tags',
        'description': '{count} page(s) are missing H1 tags, which are critical for SEO',
        'impact': 'High',
        'effort': 'Easy',
        'icon': 'code',
        'details': 'H1 tags help search engines understand the main topic of your pages and improve accessibility',
        'use_case': 'h1-tags',
        'how_to': {
            'WordPress': [
                'Edit each page in WordPress editor',
                'Add a clear, descriptive heading at the top of the page content',
                'Ensure it uses the H1 heading format (usually "Heading 1" in the editor)',
                'Make the H1 unique and descriptive of the page content',
                'Include your primary keyword if relevant',
                'WordPress: Most themes automatically make the page title an H1. Check Theme → Customize → Typography settings',
                'Yoast SEO plugin: Will warn you if H1 is missing in the SEO analysis',
                'Rank Math plugin: Provides H1 tag analysis in the content editor',
            ],
            'default': [
                'Add a clear, descriptive <h1> tag at the top of each page',
                'Ensure each page has exactly one H1 tag',
                'Make the H1 unique and descriptive of the page content',
                'Include your primary keyword if relevant',
                'HTML: <h1>Your Main Page Heading</h1>',
                'For CMS platforms, usually the page title becomes the H1 automatically',
            ],
        },
    },
    {
        'field': 'missing_meta_titles',
        'title': 'Add Missing Meta Titles',
        'description': '{count} page(s) lack meta titles, hurting search visibility',
        'impact': 'High',
        'effort': 'Easy',
        'icon': 'code',
        'details': 'Meta titles appear in search results and browser tabs, and are one of the most important SEO elements',
        'use_case': 'meta-titles',
        'how_to': {
            'WordPress': [
                'Install an SEO plugin: Yoast SEO, Rank Math, or All in One SEO',
                'Edit each page/post and find the SEO section below the editor',
                'Add a compelling title (50-60 characters recommended)',
                'Include your primary keyword near the beginning',
                'Make each title unique and descriptive',
                'Yoast SEO: Edit the "SEO title" field in the Yoast meta box',
                'Rank Math: Use the "SEO Title" field in Rank Math meta box',
                'Preview how it will look in search results using the plugin preview',
            ],
            'default': [
                'Add <title> tag in the <head> section of each page',
                'Keep titles between 50-60 characters',
                'Include primary keyword near the beginning',
                'Make each title unique and compelling',
                'HTML: <title>Your Page Title - Brand Name</title>',
                'For e-commerce: Include product name, category, and brand',
            ],
        },
    },
    {
        'field': 'missing_meta_descriptions',
        'title': 'Add Missing Meta Descriptions',
        'description': '{count} page(s) need meta descriptions for better search previews',
        'impact': 'Medium',
        'effort': 'Easy',
        'icon': 'code',
        'details': 'Meta descriptions appear in search results and influence click-through rates',
        'use_case': 'meta-descriptions',
        'how_to': {
            'WordPress': [
                'Use your SEO plugin to add meta descriptions',
                'Write compelling descriptions (150-160 characters)',
                'Include relevant keywords naturally',
                'Make each description unique and actionable',
                'Add a call-to-action if appropriate',
                'Yoast SEO: Edit the "Meta description" field',
                'Rank Math: Use the "Description" field in the meta box',
                'All in One SEO: Fill in the "Meta Description" field',
            ],
            'default': [
                'Add <meta name="description"> tag in the <head> section',
                'Keep descriptions between 150-160 characters',
                'Include relevant keywords naturally',
                'Write compelling, actionable copy',
                'HTML: <meta name="description" content="Your page description here">',
                'Each page should have a unique description',
            ],
        },
    },
    {
        'field': 'large_images',
        'title': 'Optimize Large Images',
        'description': '{count} image(s) over 100KB are slowing down your site',
        'impact': 'High',
        'effort': 'Easy',
        'icon': 'image',
        'details': 'Large images significantly impact page load time and user experience',
        'use_case': 'large-images',
        'how_to': {
            'WordPress': [
                'Install an image optimization plugin:',
                'Recommended: Imagify, ShortPixel, or EWWW Image Optimizer (all have free tiers)',
                'These plugins automatically compress images on upload',
                'Imagify: Install → Settings → Choose "Normal" compression → Enable "Auto-optimize images"',
                'ShortPixel: Install → Settings → Enter API key (free 100 images/month) → Enable "Optimize on upload"',
                'EWWW: Install → Enable "Compress images on upload" and "Convert to WebP"',
                'For existing images: Use the bulk optimizer in the plugin',
                'Alternative: Compress images before uploading using TinyPNG.com or Squoosh.app',
                'Target: Keep images under 200KB, preferably under 100KB',
            ],
            'default': [
                'Compress images before uploading to your site',
                'Use online tools: TinyPNG.com, Squoosh.app, or ImageOptim',
                'Convert to modern formats: WebP or AVIF',
                "Set appropriate dimensions - don't upload larger than needed",
                'Use responsive images with srcset attribute',
                'For e-commerce: Shopify has built-in image optimization',
                'For Wix/Squarespace: Use their built-in image optimization tools',
                'Target: Keep images under 200KB, preferably under 100KB',
            ],
        },
    },
    {
        'field': 'http_404_errors',
        'title': 'Fix Broken Links (404 Errors)',
        'description': '{count} link(s) return 404 errors, hurting SEO and user experience',
        'impact': 'High',
        'effort': 'Easy',
        'icon': 'alert-triangle',
        'details': 'Broken links waste crawl budget and send visitors to dead ends',
        'use_case': '404-errors',
        'how_to': {
            'WordPress': [
                'Review the list of broken URLs found in the crawl',
                'Update or remove links that point to deleted content',
                'Install the Redirection plugin to manage 301 redirects',
                'Redirection plugin: Tools → Redirection → Add a 301 from the old URL to the best matching page',
                'Rank Math: Enable the 404 Monitor module to catch new broken links',
                'Re-crawl the site to confirm the 404s are gone',
            ],
            'default': [
                'Review the list of broken URLs found in the crawl',
                'Update or remove links that point to deleted content',
                'Add 301 redirects from removed URLs to the closest relevant page',
                'Apache: Redirect 301 /old-page /new-page in .htaccess',
                'Nginx: rewrite ^/old-page$ /new-page permanent;',
                'Re-crawl the site to confirm the 404s are gone',
            ],
        },
    },
]

# Steps mentioning any of these go in the "plugins & tools" list
TOOL_KEYWORDS = (
    'plugin', 'yoast', 'rank math', 'all in one seo', 'imagify', 'shortpixel', 'ewww',
    'wp rocket', 'autoptimize', 'w3 total cache', 'tinypng', 'squoosh', 'redirection',
)

TOOL_LINKS = [
    ('yoast', 'https://wordpress.org/plugins/wordpress-seo/'),
    ('rank math', 'https://wordpress.org/plugins/seo-by-rank-math/'),
    ('all in one seo', 'https://wordpress.org/plugins/all-in-one-seo-pack/'),
    ('imagify', 'https://wordpress.org/plugins/imagify/'),
    ('shortpixel', 'https://wordpress.org/plugins/shortpixel-image-optimiser/'),
    ('ewww', 'https://wordpress.org/plugins/ewww-image-optimizer/'),
    ('wp rocket', 'https://wp-rocket.me/'),
    ('autoptimize', 'https://wordpress.org/plugins/autoptimize/'),
    ('w3 total cache', 'https://wordpress.org/plugins/w3-total-cache/'),
    ('redirection', 'https://wordpress.org/plugins/redirection/'),
    ('tinypng', 'https://tinypng.com/'),
    ('squoosh', 'https://squoosh.app/'),
]


def get_plugin_specific_instructions(
    base_instructions: List[str],
    instruction_type: str,
    detected_plugins: Optional[List[str]] = None,
    page_builder: Optional[str] = None,
) -> List[str]:
    """
    Tailor generic steps to the site's plugins and page builder.
    Every matching step is inserted right after the first base step.
    """
    instructions = list(base_instructions)

    if detected_plugins:
        for plugin, step in PLUGIN_INSTRUCTIONS.get(instruction_type, []):
            if plugin in detected_plugins:
                instructions.insert(1, step)

    if page_builder:
        step = PAGE_BUILDER_INSTRUCTIONS.get(instruction_type, {}).get(page_builder)
        if step:
            instructions.insert(1, step)

    return instructions


def _build_from_template(
    template: Mapping[str, Any],
    detected_plugins: Optional[List[str]],
    page_builder: Optional[str],
) -> Recommendation:
    fields = {key: value for key, value in template.items() if key != 'instruction_type'}
    instruction_type = template.get('instruction_type')
    if instruction_type:
        fields['how_to'] = get_plugin_specific_instructions(
            template['how_to'], instruction_type, detected_plugins, page_builder
        )
    else:
        fields['how_to'] = list(template['how_to'])
    return Recommendation(**fields)


def _normalize_record(finding: Mapping[str, Any]) -> Dict[str, Any]:
    record = dict(finding)
    if 'howTo' in record:
        record.setdefault('how_to', record.pop('howTo'))
    if 'useCase' in record:
        record.setdefault('use_case', record.pop('useCase'))
    return record


def enhance_recommendation(
    finding: Finding,
    detected_plugins: Optional[List[str]] = None,
    page_builder: Optional[str] = None,
) -> Recommendation:
    """
    Map one raw finding to a structured recommendation.

    A mapping that already carries how-to steps is an enriched record and is
    returned as-is; otherwise its title (or description) is matched like a
    plain string. Invalid enriched records raise a pydantic ValidationError,
    a non-string title raises ValueError.
    """
    if isinstance(finding, Mapping):
        record = _normalize_record(finding)
        if record.get('how_to'):
            return Recommendation(**record)
        text = record.get('title') or record.get('description') or ''
        if not isinstance(text, str):
            raise ValueError(f"Finding title must be a string, got {type(text).__name__}")
    else:
        text = str(finding)

    lower_text = text.lower()
    for predicate, template in FINDING_RULES:
        if predicate(lower_text):
            return _build_from_template(template, detected_plugins, page_builder)

    fields = dict(DEFAULT_RECOMMENDATION, title=text, how_to=list(DEFAULT_RECOMMENDATION['how_to']))
    return Recommendation(**fields)


def generate_technical_recommendations(
    technical_issues: Union[TechnicalIssues, Mapping[str, int], None],
    cms: Optional[str] = None,
    suppressed_use_cases: Iterable[str] = (),
) -> List[Recommendation]:
    """
    Build recommendations from technical crawl counts.

    Each count above zero yields one record, with WordPress-specific steps
    when the site runs WordPress. Use cases in ``suppressed_use_cases`` are
    shown elsewhere (e.g. a combined meta tag table), so their records get
    an empty title and are dropped by rank_recommendations.
    """
    if technical_issues is None:
        return []
    if not isinstance(technical_issues, TechnicalIssues):
        technical_issues = TechnicalIssues(**technical_issues)

    suppressed = set(suppressed_use_cases)
    recommendations = []
    for template in TECHNICAL_ISSUE_TEMPLATES:
        count = getattr(technical_issues, template['field'])
        if count <= 0:
            continue

        how_to = template['how_to']['WordPress' if cms == 'WordPress' else 'default']
        recommendations.append(Recommendation(
            title='' if template['use_case'] in suppressed else template['title'],
            description=template['description'].format(count=count),
            impact=template['impact'],
            effort=template['effort'],
            icon=template['icon'],
            details=template['details'],
            how_to=list(how_to),
            use_case=template['use_case'],
        ))
    return recommendations


def rank_recommendations(recommendations: Iterable[Recommendation], limit: Optional[int] = None) -> List[Recommendation]:
    """
    Drop suppressed records, deduplicate by title and rank by impact.

    Suppressed records have an empty title. Deduplication keeps the first
    occurrence. The sort is stable so records of equal impact keep their
    input order; effort is not a tie-break. At most ``limit`` records are
    returned.
    """
    if limit is None:
        limit = config.MAX_RECOMMENDATIONS
    if limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")

    seen_titles = set()
    unique = []
    for recommendation in recommendations:
        if not recommendation.title or recommendation.title in seen_titles:
            continue
        seen_titles.add(recommendation.title)
        unique.append(recommendation)

    ranked = sorted(unique, key=lambda recommendation: IMPACT_RANK[recommendation.impact])
    return ranked[:limit]


def build_recommendations(
    findings: Iterable[Finding],
    technical_issues: Union[TechnicalIssues, Mapping[str, int], None] = None,
    cms: Optional[str] = None,
    detected_plugins: Optional[List[str]] = None,
    page_builder: Optional[str] = None,
    suppressed_use_cases: Iterable[str] = (),
    max_findings: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[Recommendation]:
    """Technical recommendations first, then the first few findings, ranked"""
    if max_findings is None:
        max_findings = config.MAX_PERFORMANCE_FINDINGS
    if max_findings < 0:
        raise ValueError(f"max_findings must not be negative, got {max_findings}")

    technical_recs = generate_technical_recommendations(technical_issues, cms, suppressed_use_cases)
    performance_recs = [
        enhance_recommendation(finding, detected_plugins, page_builder)
        for finding in list(findings)[:max_findings]
    ]

    ranked = rank_recommendations(technical_recs + performance_recs, limit)
    logger.debug(
        "Ranked %d recommendations (%d technical, %d from findings)",
        len(ranked), len(technical_recs), len(performance_recs),
    )
    return ranked


def split_how_to_steps(how_to: List[str]) -> Tuple[List[str], List[ToolStep]]:
    """Separate plain steps from steps that name a plugin or tool, attaching a link where one is known"""
    steps = []
    tool_steps = []
    for step in how_to:
        lower_step = step.lower()
        if not any(keyword in lower_step for keyword in TOOL_KEYWORDS):
            steps.append(step)
            continue
        link = next((url for keyword, url in TOOL_LINKS if keyword in lower_step), None)
        tool_steps.append(ToolStep(text=step, link=link))
    return steps, tool_steps


def build_recommendation_cards(
    recommendations: List[Recommendation],
    cms: Optional[str] = None,
    detected_plugins: Optional[List[str]] = None,
) -> List[RecommendationCard]:
    """
    Attach display data to ranked recommendations: split steps and, for
    WordPress sites, the installed and suggested plugins for each use case.
    """
    detected_plugins = detected_plugins or []
    cards = []
    for recommendation in recommendations:
        steps, tool_steps = split_how_to_steps(recommendation.how_to)
        installed, suggested = [], []
        if recommendation.use_case and cms == 'WordPress':
            candidates = get_plugins_by_use_case(recommendation.use_case, detected_plugins)
            installed = get_installed_plugins(candidates, detected_plugins)
            suggested = get_non_installed_plugins(candidates, detected_plugins)
        cards.append(RecommendationCard(
            **recommendation.model_dump(),
            steps=steps,
            tool_steps=tool_steps,
            installed_plugins=installed,
            suggested_plugins=suggested,
        ))
    return cards
