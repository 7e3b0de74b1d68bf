import pytest

from schemas import Recommendation
from services.recommendation_service import (
    build_recommendation_cards,
    build_recommendations,
    enhance_recommendation,
    generate_technical_recommendations,
    get_plugin_specific_instructions,
    rank_recommendations,
    split_how_to_steps,
)


def _titles(recommendations):
    return [recommendation.title for recommendation in recommendations]


@pytest.mark.parametrize(
    "finding, title",
    [
        ("Reduce unused CSS", "Remove Unused CSS"),
        ("Reduce unused JavaScript", "Remove Unused JavaScript"),
        ("Eliminate render-blocking resources", "Fix Render-Blocking Resources"),
        ("Defer offscreen images", "Lazy Load Images"),
        ("Serve images in next-gen formats", "Use Modern Image Formats"),
        ("Minify CSS", "Minify Code Files"),
        ("Reduce initial server response time", "Improve Server Response Time"),
        ("Enable text compression", "Enable Text Compression"),
        ("Largest Contentful Paint element", "Optimize Largest Contentful Paint (LCP)"),
    ],
)
def test_finding_rules(finding, title):
    assert enhance_recommendation(finding).title == title


def test_first_matching_rule_wins():
    # Mentions both unused CSS and minification
    recommendation = enhance_recommendation("Reduce unused CSS and minify the rest")
    assert recommendation.title == "Remove Unused CSS"


def test_unmatched_finding_uses_default():
    recommendation = enhance_recommendation("Avoid enormous network payloads")
    assert recommendation.title == "Avoid enormous network payloads"
    assert recommendation.impact == "Medium"
    assert recommendation.effort == "Medium"
    assert recommendation.icon == "trending-up"
    assert len(recommendation.how_to) == 3


def test_enriched_record_is_kept():
    record = {
        "title": "Custom Fix",
        "description": "Already enriched",
        "impact": "Low",
        "effort": "Easy",
        "howTo": ["Step one"],
        "useCase": "caching",
    }
    recommendation = enhance_recommendation(record)
    assert recommendation.title == "Custom Fix"
    assert recommendation.how_to == ["Step one"]
    assert recommendation.use_case == "caching"


def test_record_without_steps_is_matched_by_title():
    recommendation = enhance_recommendation({"title": "Reduce unused JavaScript"})
    assert recommendation.title == "Remove Unused JavaScript"


def test_invalid_enriched_record_raises():
    with pytest.raises(ValueError):
        enhance_recommendation({"title": "Broken", "impact": "Huge", "how_to": ["x"]})


def test_plugin_and_page_builder_steps_follow_first_step():
    recommendation = enhance_recommendation(
        "Reduce unused CSS",
        detected_plugins=["WP Rocket", "Autoptimize"],
        page_builder="Elementor",
    )
    how_to = recommendation.how_to
    assert how_to[0] == "Use developer tools to identify unused CSS"
    assert how_to[1].startswith("🎨 In Elementor")
    assert how_to[2].startswith("⚡ In Autoptimize")
    assert how_to[3].startswith("🚀 In WP Rocket")
    assert len(how_to) == 7


def test_plugin_instructions_ignore_unknown_type():
    base = ["first", "second"]
    assert get_plugin_specific_instructions(base, "fonts", ["WP Rocket"]) == base
    assert get_plugin_specific_instructions(base, "css") == base


def test_technical_recommendations_by_cms():
    issues = {"missing_h1_tags": 3, "large_images": 0}

    wordpress = generate_technical_recommendations(issues, cms="WordPress")
    other = generate_technical_recommendations(issues)

    assert _titles(wordpress) == ["Add Missing H1 Tags"]
    assert wordpress[0].description.startswith("3 page(s)")
    assert any("Yoast" in step for step in wordpress[0].how_to)
    assert not any("Yoast" in step for step in other[0].how_to)


def test_technical_recommendations_none():
    assert generate_technical_recommendations(None) == []


def test_suppressed_use_case_is_dropped():
    recommendations = build_recommendations(
        [],
        {"missing_meta_titles": 4, "missing_meta_descriptions": 2},
        suppressed_use_cases=["meta-titles"],
    )
    assert _titles(recommendations) == ["Add Missing Meta Descriptions"]


def test_technical_recommendations_come_first_and_rank_by_impact():
    recommendations = build_recommendations(
        ["Reduce unused CSS", "Eliminate render-blocking resources", "Minify JavaScript"],
        {"missing_h1_tags": 2, "large_images": 5},
    )
    assert _titles(recommendations) == [
        "Add Missing H1 Tags",
        "Optimize Large Images",
        "Fix Render-Blocking Resources",
        "Remove Unused CSS",
        "Minify Code Files",
    ]


def test_only_first_six_findings_are_used():
    findings = [f"Finding number {i}" for i in range(6)] + ["Reduce unused JavaScript"]
    recommendations = build_recommendations(findings)
    assert "Remove Unused JavaScript" not in _titles(recommendations)
    assert len(recommendations) == 6


def test_duplicates_keep_first_occurrence():
    recommendations = build_recommendations(["Reduce unused CSS", "Remove unused CSS rules"])
    assert _titles(recommendations) == ["Remove Unused CSS"]


def test_results_are_truncated():
    findings = [f"Finding number {i}" for i in range(15)]
    recommendations = build_recommendations(findings, max_findings=15)
    assert len(recommendations) == 10
    assert recommendations[0].title == "Finding number 0"


def test_rank_is_stable_for_equal_impact():
    recommendations = [
        Recommendation(title="B", impact="Medium", effort="Hard"),
        Recommendation(title="A", impact="Medium", effort="Easy"),
        Recommendation(title="C", impact="High"),
        Recommendation(title=""),
    ]
    assert _titles(rank_recommendations(recommendations)) == ["C", "B", "A"]


def test_negative_limits_raise():
    with pytest.raises(ValueError):
        rank_recommendations([], limit=-1)
    with pytest.raises(ValueError):
        build_recommendations([], max_findings=-1)


def test_split_how_to_steps():
    steps, tool_steps = split_how_to_steps([
        "Edit each page in the editor",
        "Yoast SEO plugin: Check the SEO analysis",
        "Use a caching plugin",
    ])
    assert steps == ["Edit each page in the editor"]
    assert [step.link for step in tool_steps] == [
        "https://wordpress.org/plugins/wordpress-seo/",
        None,
    ]


def test_cards_attach_plugins_for_wordpress():
    recommendations = build_recommendations([], {"missing_meta_titles": 1}, cms="WordPress")

    cards = build_recommendation_cards(recommendations, "WordPress", ["All in One SEO"])
    assert [plugin.name for plugin in cards[0].installed_plugins] == ["All in One SEO"]
    assert [plugin.name for plugin in cards[0].suggested_plugins] == ["Yoast SEO"]
    assert cards[0].tool_steps

    cards = build_recommendation_cards(recommendations, None, ["All in One SEO"])
    assert cards[0].installed_plugins == []
    assert cards[0].suggested_plugins == []


def test_non_string_finding_title_raises():
    with pytest.raises(ValueError):
        enhance_recommendation({"title": 5})
    with pytest.raises(ValueError):
        build_recommendations([{"description": ["not", "text"]}])
