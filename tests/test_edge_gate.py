from config.settings import settings

SECURITY_HEADERS = (
    "x-frame-options",
    "x-content-type-options",
    "referrer-policy",
    "x-xss-protection",
    "content-security-policy",
)


def test_dashboard_redirects_without_admin_cookie(client):
    resp = client.get("/attendance-admin-dashboard", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/attendance-admin"
    for name in SECURITY_HEADERS:
        assert name in resp.headers


def test_dashboard_passes_with_admin_cookie(client):
    client.cookies.set("adminAuthenticated", "true")
    resp = client.get("/attendance-admin-dashboard", follow_redirects=False)
    assert resp.status_code != 307
    assert resp.headers["x-frame-options"] == "DENY"


def test_login_page_is_not_redirected(client):
    resp = client.get("/attendance-admin", follow_redirects=False)
    assert resp.status_code != 307
    assert resp.headers["x-content-type-options"] == "nosniff"


def test_attendance_pages_get_csp(client):
    resp = client.get("/attendance")
    csp = resp.headers["content-security-policy"]
    assert csp.startswith("default-src 'self'; script-src 'self' 'unsafe-inline'")
    assert csp.endswith(f"connect-src 'self' {settings.BACKEND_URL}")
    assert resp.headers["referrer-policy"] == "strict-origin-when-cross-origin"
    assert resp.headers["x-xss-protection"] == "1; mode=block"


def test_api_routes_are_untouched(client):
    resp = client.get("/health")
    assert resp.json() == {"status": "ok"}
    assert "content-security-policy" not in resp.headers
