from services.platform_detection import (
    detect_wordpress_plugins,
    get_page_builder_optimizations,
    get_plugin_optimization_capabilities,
)

WORDPRESS_PAGE = """
<html>
<head>
  <meta name="generator" content="WordPress 6.4.2">
  <!-- This site is optimized with the Yoast SEO plugin -->
  <link rel="stylesheet" href="/wp-content/plugins/wordpress-seo/css/main.css">
  <link rel="stylesheet" href="/wp-content/plugins/elementor/assets/css/frontend.min.css">
  <script src="/wp-content/plugins/wp-rocket/assets/js/lazyload.min.js" data-rocket-src=""></script>
</head>
<body class="et_pb_section">
  <p>We love woocommerce.</p>
</body>
</html>
"""


def test_non_wordpress_page():
    result = detect_wordpress_plugins("<html><body><h1>Hello</h1></body></html>")
    assert result.cms is None
    assert result.plugins == []
    assert result.page_builder is None


def test_generator_tag_alone_identifies_wordpress():
    result = detect_wordpress_plugins('<html><head><meta name="generator" content="WordPress 6.4"></head></html>')
    assert result.cms == "WordPress"


def test_wordpress_page_builder_and_plugins():
    result = detect_wordpress_plugins(WORDPRESS_PAGE)
    assert result.cms == "WordPress"
    # Elementor is checked before Divi
    assert result.page_builder == "Elementor"
    assert result.plugins == ["Yoast SEO", "WP Rocket"]


def test_plugin_needs_confirmation_marker():
    html = '<link href="/wp-content/themes/site/style.css"><p>Compare yoast and rankmath</p>'
    assert detect_wordpress_plugins(html).plugins == []

    html += '<script src="/wp-content/plugins/seo-by-rank-math/assets/app.js"></script>'
    assert detect_wordpress_plugins(html).plugins == ["Rank Math SEO"]


def test_page_builder_optimizations():
    assert len(get_page_builder_optimizations("Elementor")) == 3
    assert [item.category for item in get_page_builder_optimizations("Divi")] == ["general", "fonts"]
    assert get_page_builder_optimizations("Unknown Builder") == []
    assert get_page_builder_optimizations(None) == []


def test_optimization_capabilities():
    capabilities = get_plugin_optimization_capabilities(["WP Rocket", "Yoast SEO"], "Divi")
    assert capabilities.can_optimize_css
    assert capabilities.can_optimize_images
    assert capabilities.can_enable_compression
    assert capabilities.cache_plugins == ["WP Rocket"]
    assert capabilities.optimization_plugins == ["WP Rocket"]
    assert len(capabilities.page_builder_optimizations) == 2

    capabilities = get_plugin_optimization_capabilities(["Autoptimize"])
    assert capabilities.can_optimize_js
    assert not capabilities.can_enable_compression
    assert capabilities.cache_plugins == []


def test_generator_tag_names_other_cms():
    result = detect_wordpress_plugins('<html><head><meta name="generator" content="Shopify"></head></html>')
    assert result.cms == "Shopify"
    assert result.plugins == []
    assert result.page_builder is None


def test_generator_tag_wins_over_markup_markers():
    html = (
        '<meta name="generator" content="Drupal 10 (https://www.drupal.org)">'
        '<img src="/files/wp-content-migration.png">'
    )
    assert detect_wordpress_plugins(html).cms == "Drupal"


def test_unknown_generator_falls_back_to_markers():
    html = '<meta name="generator" content="Custom Engine 2.1"><link href="/wp-content/themes/site/style.css">'
    assert detect_wordpress_plugins(html).cms == "WordPress"
