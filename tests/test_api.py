WORDPRESS_HTML = (
    '<link rel="stylesheet" href="/wp-content/plugins/elementor/assets/css/frontend.min.css">'
    '<link rel="stylesheet" href="/wp-content/plugins/wordpress-seo/css/main.css">'
    "<!-- optimized with the Yoast SEO plugin -->"
)


def _create_audit(client, **overrides):
    payload = {
        "website_url": "https://example.com",
        "findings": ["Reduce unused CSS", "Eliminate render-blocking resources"],
        "technical_issues": {"missing_h1_tags": 2, "missing_meta_titles": 1},
        "cms": "WordPress",
        "detected_plugins": ["All in One SEO"],
        "desktop_score": 72,
        "mobile_score": 48,
    }
    payload.update(overrides)
    response = client.post("/api/audits/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected", "total_audits": 0}


def test_create_and_get_audit(client):
    audit = _create_audit(client)
    assert audit["status"] == "completed"
    assert audit["technical_issues"]["missing_h1_tags"] == 2
    assert audit["technical_issues"]["http_404_errors"] == 0

    response = client.get(f"/api/audits/{audit['id']}")
    assert response.status_code == 200
    assert response.json()["website_url"] == "https://example.com"


def test_create_audit_detects_platform_from_html(client):
    audit = _create_audit(client, cms=None, detected_plugins=[], html=WORDPRESS_HTML)
    assert audit["cms"] == "WordPress"
    assert audit["page_builder"] == "Elementor"
    assert audit["detected_plugins"] == ["Yoast SEO"]


def test_create_audit_validation(client):
    response = client.post("/api/audits/", json={"website_url": "https://example.com", "desktop_score": 140})
    assert response.status_code == 422

    response = client.post(
        "/api/audits/",
        json={"website_url": "https://example.com", "technical_issues": {"large_images": -1}},
    )
    assert response.status_code == 422


def test_unknown_audit(client):
    assert client.get("/api/audits/999").status_code == 404
    assert client.get("/api/audits/999/recommendations").status_code == 404
    assert client.get("/api/audits/999/summary").status_code == 404
    assert client.delete("/api/audits/999").status_code == 404


def test_list_and_delete_audits(client):
    first = _create_audit(client)
    _create_audit(client, website_url="https://example.org")

    assert len(client.get("/api/audits/").json()) == 2
    assert len(client.get("/api/audits/", params={"limit": 1}).json()) == 1
    assert client.get("/api/audits/", params={"status": "processing"}).json() == []

    response = client.delete(f"/api/audits/{first['id']}")
    assert response.status_code == 200
    assert client.get(f"/api/audits/{first['id']}").status_code == 404
    assert client.get("/api/health").json()["total_audits"] == 1


def test_audit_recommendations(client):
    audit = _create_audit(client, page_builder="Divi")

    response = client.get(f"/api/audits/{audit['id']}/recommendations")
    assert response.status_code == 200
    report = response.json()

    assert [card["title"] for card in report["recommendations"]] == [
        "Add Missing H1 Tags",
        "Add Missing Meta Titles",
        "Fix Render-Blocking Resources",
        "Remove Unused CSS",
    ]
    meta_titles = report["recommendations"][1]
    assert [plugin["name"] for plugin in meta_titles["installed_plugins"]] == ["All in One SEO"]
    assert [plugin["name"] for plugin in meta_titles["suggested_plugins"]] == ["Yoast SEO"]
    assert len(report["page_builder_optimizations"]) == 2

    unused_css = report["recommendations"][3]
    assert unused_css["how_to"][1].startswith("🎨 In Divi")


def test_audit_summary(client):
    audit = _create_audit(client, results={
        "technical": {"seo": {"missing_h1": 2}},
        "traffic": {"organic": {"total": 450}},
    })

    response = client.get(f"/api/audits/{audit['id']}/summary")
    assert response.status_code == 200
    summary = response.json()
    assert summary["total_issues"] == 2
    assert summary["top_priorities"][0]["id"] == "tech-h1-tags"


def test_stateless_recommendations(client):
    response = client.post("/api/recommendations", json={
        "findings": ["Minify JavaScript", {"title": "Custom", "impact": "High", "how_to": ["Do it"]}],
        "technical_issues": {"missing_meta_titles": 3, "missing_meta_descriptions": 3},
        "suppressed_use_cases": ["meta-titles", "meta-descriptions"],
    })
    assert response.status_code == 200
    assert [card["title"] for card in response.json()["recommendations"]] == ["Custom", "Minify Code Files"]


def test_stateless_recommendations_rejects_invalid_record(client):
    response = client.post("/api/recommendations", json={
        "findings": [{"title": "Broken", "impact": "Huge", "how_to": ["x"]}],
    })
    assert response.status_code == 400


def test_plugins_endpoint(client):
    response = client.get("/api/plugins", params={"use_case": "missing-meta-titles", "sort": "reviews"})
    assert response.status_code == 200
    assert [plugin["name"] for plugin in response.json()] == ["Yoast SEO", "Rank Math", "All in One SEO"]

    response = client.get(
        "/api/plugins",
        params={"use_case": "meta-titles", "installed": ["All in One SEO"], "mode": "installed"},
    )
    assert [plugin["name"] for plugin in response.json()] == ["All in One SEO"]

    assert client.get("/api/plugins", params={"sort": "name"}).status_code == 400
    assert client.get("/api/plugins", params={"mode": "everything"}).status_code == 422


def test_plugin_alternatives(client):
    response = client.get(
        "/api/plugins/alternatives",
        params={"use_case": "missing-meta-titles", "installed": ["All in One SEO"]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["use_case"] == "meta-titles"
    assert [plugin["name"] for plugin in body["installed"]] == ["All in One SEO"]
    assert [plugin["name"] for plugin in body["alternatives"]] == ["Yoast SEO"]


def test_page_builder_optimizations(client):
    response = client.get("/api/page-builders/Elementor/optimizations")
    assert response.status_code == 200
    assert len(response.json()) == 3
    assert client.get("/api/page-builders/Unknown/optimizations").status_code == 404


def test_detect(client):
    response = client.post("/api/detect", json={"html": WORDPRESS_HTML})
    assert response.status_code == 200
    assert response.json() == {"cms": "WordPress", "plugins": ["Yoast SEO"], "page_builder": "Elementor"}

    response = client.post("/api/detect/capabilities", json={"html": WORDPRESS_HTML})
    assert response.status_code == 200
    assert response.json()["can_optimize_css"] is False


def test_stateless_recommendations_rejects_non_string_title(client):
    response = client.post("/api/recommendations", json={"findings": [{"title": 5}]})
    assert response.status_code == 400


def test_create_audit_rejects_invalid_finding_records(client):
    response = client.post("/api/audits/", json={
        "website_url": "https://example.com",
        "findings": [{"title": "X", "impact": "Huge", "how_to": ["a"]}],
    })
    assert response.status_code == 400

    response = client.post("/api/audits/", json={
        "website_url": "https://example.com",
        "findings": [{"title": 5}],
    })
    assert response.status_code == 400
    assert client.get("/api/health").json()["total_audits"] == 0


def test_detect_other_cms(client):
    response = client.post("/api/detect", json={"html": '<meta name="generator" content="Joomla! - Open Source Content Management">'})
    assert response.json() == {"cms": "Joomla", "plugins": [], "page_builder": None}
