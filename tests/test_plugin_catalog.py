import pytest

from services.plugin_catalog import (
    ISSUE_TO_USE_CASE,
    NON_WORDPRESS_TOOLS,
    WORDPRESS_PLUGINS,
    all_plugins,
    get_installed_plugins,
    get_non_installed_plugins,
    get_plugins_by_use_case,
    is_better_than_installed,
    is_plugin_installed,
    plugin_quality_score,
    sort_plugins,
)


def _plugin(name):
    return next(plugin for plugin in all_plugins() if plugin.name == name)


def _names(plugins):
    return [plugin.name for plugin in plugins]


def test_catalog_slugs_are_unique():
    slugs = [plugin.slug for plugin in WORDPRESS_PLUGINS + NON_WORDPRESS_TOOLS]
    assert len(slugs) == len(set(slugs))


def test_installed_match_is_bidirectional():
    yoast = _plugin("Yoast SEO")
    assert is_plugin_installed(yoast, ["Yoast SEO Premium"])
    assert is_plugin_installed(yoast, ["yoast"])
    assert is_plugin_installed(yoast, ["wordpress-seo"])
    assert not is_plugin_installed(yoast, ["Rank Math SEO", ""])
    assert is_plugin_installed(_plugin("Rank Math"), ["Rank Math SEO"])


def test_plugins_by_use_case_installed_first():
    assert _names(get_plugins_by_use_case("meta-titles")) == ["Yoast SEO", "Rank Math", "All in One SEO"]
    assert _names(get_plugins_by_use_case("meta-titles", ["All in One SEO"]))[0] == "All in One SEO"
    assert get_plugins_by_use_case("no-such-use-case") == []


def test_quality_score():
    assert plugin_quality_score(_plugin("Yoast SEO")) == 94
    assert plugin_quality_score(_plugin("Rank Math")) == 89
    assert plugin_quality_score(_plugin("All in One SEO")) == 81


def test_better_than_installed_needs_clear_margin():
    installed = [_plugin("All in One SEO")]
    assert is_better_than_installed(_plugin("Yoast SEO"), installed)
    assert not is_better_than_installed(_plugin("Rank Math"), installed)
    assert is_better_than_installed(_plugin("Rank Math"), [])


def test_installed_and_suggested_split():
    candidates = get_plugins_by_use_case("meta-titles", ["All in One SEO"])
    assert _names(get_installed_plugins(candidates, ["All in One SEO"])) == ["All in One SEO"]
    assert _names(get_non_installed_plugins(candidates, ["All in One SEO"])) == ["Yoast SEO"]
    assert _names(get_non_installed_plugins(candidates, [])) == _names(candidates)


def test_issue_keys_map_to_use_cases():
    assert ISSUE_TO_USE_CASE["broken-links"] == "404-errors"
    assert ISSUE_TO_USE_CASE["missing-meta-titles"] == "meta-titles"


def test_sort_plugins():
    plugins = get_plugins_by_use_case("meta-titles")
    assert _names(sort_plugins(plugins, "reviews")) == ["Yoast SEO", "Rank Math", "All in One SEO"]
    assert _names(sort_plugins(plugins, "reviews", "asc")) == ["All in One SEO", "Rank Math", "Yoast SEO"]

    redirects = get_plugins_by_use_case("404-errors")
    assert {plugin.cost for plugin in sort_plugins(redirects, cost_filter="Free")} == {"Free"}
    assert sort_plugins(redirects, cost_filter="Paid") == []


def test_sort_plugins_by_cost_puts_paid_first_when_descending():
    plugins = get_plugins_by_use_case("lazy-loading")
    assert sort_plugins(plugins, "cost")[0].cost == "Paid"
    assert sort_plugins(plugins, "cost", "asc")[0].cost == "Free"


def test_sort_plugins_rejects_unknown_arguments():
    with pytest.raises(ValueError):
        sort_plugins(all_plugins(), "name")
    with pytest.raises(ValueError):
        sort_plugins(all_plugins(), "rating", "up")


def test_sort_by_active_installs_understands_millions():
    plugins = get_plugins_by_use_case("meta-titles")
    assert _names(sort_plugins(plugins, "active_installs")) == ["Yoast SEO", "All in One SEO", "Rank Math"]

    images = get_plugins_by_use_case("large-images")
    assert sort_plugins(images, "active_installs")[0].active_installs.endswith("million")
    assert sort_plugins(images, "active_installs", "asc")[0].active_installs in ("Web-based", "Desktop app")
