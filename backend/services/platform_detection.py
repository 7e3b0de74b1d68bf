"""
WordPress platform detection

Detects the CMS, page builder and installed plugins from a page's HTML, and
holds the page-builder optimization settings shown next to recommendations.
"""
import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from schemas import DetectionResult, OptimizationCapabilities, PageBuilderOptimization

logger = logging.getLogger(__name__)

WORDPRESS_MARKERS = ('wp-content', 'wordpress', 'wp-includes', 'wp-admin', '/wp-', 'wp_')

# <meta name="generator"> substrings, checked in order before any markup markers
GENERATOR_CMS = [
    ('WordPress', ('wordpress',)),
    ('Shopify', ('shopify',)),
    ('Wix', ('wix.com',)),
    ('Squarespace', ('squarespace',)),
    ('Joomla', ('joomla',)),
    ('Drupal', ('drupal',)),
    ('Magento', ('magento',)),
    ('PrestaShop', ('prestashop',)),
    ('OpenCart', ('opencart',)),
    ('Webflow', ('webflow',)),
    ('Ghost', ('ghost',)),
    ('TYPO3', ('typo3',)),
    ('Kentico', ('kentico',)),
    ('Umbraco', ('umbraco',)),
    ('Concrete5', ('concrete5',)),
    ('DNN Platform', ('dotnetnuke', 'dnn')),
    ('ModX', ('modx',)),
    ('SilverStripe', ('silverstripe',)),
    ('Textpattern', ('textpattern',)),
    ('Grav', ('grav',)),
    ('Jekyll', ('jekyll',)),
    ('Hugo', ('hugo',)),
    ('Gatsby', ('gatsby',)),
    ('MediaWiki', ('mediawiki',)),
]

# First match wins
PAGE_BUILDER_SIGNATURES = [
    ('Elementor', ('elementor',)),
    ('Divi', ('divi-theme', 'et_pb_', 'et-divi')),
    ('Beaver Builder', ('beaver-builder', 'fl-builder')),
    ('WPBakery Page Builder', ('wpbakery', 'js_composer')),
    ('Fusion Builder (Avada)', ('fusion-builder', 'avada')),
]

# (plugin, markers, confirmations): a plugin is detected when any marker is
# present and, if confirmations are listed, at least one of them is too
PLUGIN_SIGNATURES = [
    # SEO
    ('Yoast SEO', ('yoast',), ('yoast_wpseo', 'wp-seo-main', '/wp-content/plugins/wordpress-seo/')),
    ('Rank Math SEO', ('rank-math', 'rankmath'), ('rank_math', '/wp-content/plugins/seo-by-rank-math/')),
    ('All in One SEO', ('aioseo',), ('all-in-one-seo', '/wp-content/plugins/all-in-one-seo-pack/')),
    # E-commerce
    ('WooCommerce', ('woocommerce',), (
        'wc-ajax', 'add-to-cart', 'woocommerce-page', 'woocommerce.js', 'class="woocommerce',
        'woocommerce-cart', 'woocommerce-checkout', '/wp-content/plugins/woocommerce/',
    )),
    # Security
    ('Wordfence Security', ('wordfence',), ('wordfence_asyncinit', '/wp-content/plugins/wordfence/')),
    ('Sucuri Security', ('sucuri',), ('sucuri-scanner', '/wp-content/plugins/sucuri-scanner/')),
    # Performance
    ('W3 Total Cache', ('w3-total-cache', 'w3tc'), ('w3tc_config', '/wp-content/plugins/w3-total-cache/')),
    ('WP Rocket', (
        'wp-rocket', 'wpr_rocket_', '/wp-content/plugins/wp-rocket/', 'rocket-loader', 'data-rocket-', 'wprocket',
    ), ()),
    ('Autoptimize', ('autoptimize',), ('autoptimize.js', '/wp-content/plugins/autoptimize/')),
    # Forms
    ('Contact Form 7', ('contact-form-7', 'wpcf7'), ()),
    ('Gravity Forms', ('gravity-forms', 'gform'), ()),
    ('WPForms', ('wpforms',), ()),
    # Backup
    ('UpdraftPlus', ('updraftplus',), ()),
    # Caching
    ('LiteSpeed Cache', ('litespeed', 'lscache'), ()),
    ('WP Super Cache', ('wp-super-cache',), ()),
    ('WP Fastest Cache', ('wp-fastest-cache',), ()),
]

OPTIMIZATION_PLUGINS = ['WP Rocket', 'Autoptimize', 'W3 Total Cache', 'LiteSpeed Cache', 'WP Super Cache', 'WP Fastest Cache']
CACHE_PLUGINS = ['WP Rocket', 'W3 Total Cache', 'LiteSpeed Cache', 'WP Super Cache', 'WP Fastest Cache']

PAGE_BUILDER_OPTIMIZATIONS = {
    'Elementor': [
        {
            'name': 'Elementor CSS Print Method',
            'category': 'css',
            'title': 'Optimize Elementor CSS Loading',
            'description': 'Configure Elementor to load CSS more efficiently and reduce render-blocking',
            'instructions': [
                'Go to Elementor → Settings → Advanced',
                'Set "CSS Print Method" to "Internal Embedding"',
                'Enable "Optimize CSS Loading" if available',
                'Consider enabling "Improved CSS Loading" for better Core Web Vitals',
            ],
            'impact': 'Medium',
            'difficulty': 'Easy',
        },
        {
            'name': 'Elementor Font Loading',
            'category': 'fonts',
            'title': 'Optimize Font Loading in Elementor',
            'description': 'Reduce font-related performance issues and layout shifts',
            'instructions': [
                'Go to Elementor → Settings → Advanced',
                'Disable "Load Google Fonts Locally" if using a CDN',
                'Enable "Preload Local Fonts" if loading fonts locally',
                'Set "Google Fonts Display" to "swap" for better loading',
            ],
            'impact': 'Medium',
            'difficulty': 'Easy',
        },
        {
            'name': 'Elementor Asset Optimization',
            'category': 'general',
            'title': 'Enable Elementor Experiments for Performance',
            'description': "Use Elementor's built-in performance experiments",
            'instructions': [
                'Go to Elementor → Settings → Experiments',
                'Enable "Improved Asset Loading" if available',
                'Enable "Optimized DOM Output" for cleaner HTML',
                'Enable "Container" feature for better structure',
                'Test thoroughly after enabling experiments',
            ],
            'impact': 'High',
            'difficulty': 'Medium',
        },
    ],
    'Divi': [
        {
            'name': 'Divi Performance Settings',
            'category': 'general',
            'title': 'Configure Divi Performance Options',
            'description': "Enable Divi's built-in performance features",
            'instructions': [
                'Go to Divi → Theme Options → Builder → Advanced',
                'Enable "Static CSS File Generation"',
                'Enable "Dynamic CSS" for better caching',
                'Enable "Divi Cache" if available',
                'Consider enabling "Critical CSS" for above-fold content',
            ],
            'impact': 'High',
            'difficulty': 'Easy',
        },
        {
            'name': 'Divi Font Optimization',
            'category': 'fonts',
            'title': 'Optimize Font Loading in Divi',
            'description': 'Improve font loading performance',
            'instructions': [
                'Go to Divi → Theme Options → General → Performance',
                'Disable unused Google Fonts',
                'Enable "Defer jQuery And jQuery Migrate"',
                'Consider using system fonts for better performance',
            ],
            'impact': 'Medium',
            'difficulty': 'Easy',
        },
    ],
    'Beaver Builder': [
        {
            'name': 'Beaver Builder Cache Settings',
            'category': 'general',
            'title': 'Enable Beaver Builder Caching',
            'description': 'Improve page loading with Beaver Builder cache',
            'instructions': [
                'Go to Settings → Beaver Builder → Advanced',
                'Enable "CSS & JavaScript Cache"',
                'Set cache expiration appropriately',
                'Clear cache after major changes',
            ],
            'impact': 'Medium',
            'difficulty': 'Easy',
        },
    ],
    'WPBakery Page Builder': [
        {
            'name': 'WPBakery Asset Loading',
            'category': 'css',
            'title': 'Optimize WPBakery CSS/JS Loading',
            'description': 'Reduce render-blocking resources from WPBakery',
            'instructions': [
                'Go to WPBakery Page Builder → Role Manager',
                'Disable "Design Options" if not used',
                'Remove unused WPBakery elements to reduce CSS',
                'Consider using a performance plugin to defer WPBakery CSS',
            ],
            'impact': 'Medium',
            'difficulty': 'Medium',
        },
    ],
    'Fusion Builder (Avada)': [
        {
            'name': 'Avada Performance Settings',
            'category': 'general',
            'title': 'Configure Avada Performance Options',
            'description': "Enable Avada's performance features",
            'instructions': [
                'Go to Avada → Theme Options → Performance',
                'Enable "CSS Compiling Method" → File',
                'Enable "JS Compiler" for better loading',
                'Enable "Disable Emojis" if not needed',
                'Configure "Dynamic CSS & JS" settings',
            ],
            'impact': 'High',
            'difficulty': 'Easy',
        },
    ],
}


def _generator_cms(html_content: str) -> Optional[str]:
    soup = BeautifulSoup(html_content, 'html.parser')
    generator = soup.find('meta', attrs={'name': 'generator'})
    if not generator:
        return None
    content = (generator.get('content') or '').lower()
    for cms, patterns in GENERATOR_CMS:
        if any(pattern in content for pattern in patterns):
            return cms
    return None


def detect_wordpress_plugins(html_content: str) -> DetectionResult:
    """
    Detect the CMS and, for WordPress, its page builder and plugins.

    The generator meta tag is trusted first and may name any known CMS.
    Without one, WordPress is recognized from its markup markers. Plugin
    markers are only checked once WordPress is confirmed.
    """
    lower_html = html_content.lower()

    cms = _generator_cms(html_content)
    if cms is None and any(marker in lower_html for marker in WORDPRESS_MARKERS):
        cms = 'WordPress'
    if cms != 'WordPress':
        if cms:
            logger.info("Detected %s from generator tag", cms)
        return DetectionResult(cms=cms)

    page_builder = None
    for builder, markers in PAGE_BUILDER_SIGNATURES:
        if any(marker in lower_html for marker in markers):
            page_builder = builder
            break

    plugins = []
    for plugin, markers, confirmations in PLUGIN_SIGNATURES:
        if not any(marker in lower_html for marker in markers):
            continue
        if confirmations and not any(marker in lower_html for marker in confirmations):
            continue
        plugins.append(plugin)

    logger.info("Detected WordPress (page builder: %s, plugins: %s)", page_builder or 'none', ', '.join(plugins) or 'none')
    return DetectionResult(cms='WordPress', plugins=plugins, page_builder=page_builder)


def get_page_builder_optimizations(page_builder: Optional[str]) -> List[PageBuilderOptimization]:
    if not page_builder:
        return []
    return [PageBuilderOptimization(**entry) for entry in PAGE_BUILDER_OPTIMIZATIONS.get(page_builder, [])]


def get_plugin_optimization_capabilities(plugins: List[str], page_builder: Optional[str] = None) -> OptimizationCapabilities:
    """Summarize what the detected plugins can already take care of"""
    return OptimizationCapabilities(
        can_optimize_css=any(plugin in ('WP Rocket', 'Autoptimize', 'W3 Total Cache') for plugin in plugins),
        can_optimize_js=any(plugin in ('WP Rocket', 'Autoptimize', 'W3 Total Cache') for plugin in plugins),
        can_optimize_images=any(plugin in ('WP Rocket', 'Autoptimize') for plugin in plugins),
        can_enable_compression=any(plugin in ('WP Rocket', 'W3 Total Cache', 'LiteSpeed Cache') for plugin in plugins),
        cache_plugins=[plugin for plugin in plugins if plugin in CACHE_PLUGINS],
        optimization_plugins=[plugin for plugin in plugins if plugin in OPTIMIZATION_PLUGINS],
        page_builder_optimizations=get_page_builder_optimizations(page_builder),
    )
