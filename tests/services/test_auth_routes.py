"""Auth Routes — session gate, login and logout over HTTP.

Invariants:
    - Anonymous request to a protected page → 302 /login?callbackUrl=<path+query>
    - Signed-in request to a public page → 302 /dashboard
    - Wrong password → 401 "Invalid credentials." and no session cookie
    - Successful login → 303 to callbackUrl (when local) or /dashboard
    - Logout clears the session; the dashboard is gated again
    - /api/ routes bypass the gate in both directions
"""

from urllib.parse import parse_qs, urlparse

from invoicer.api.routes.auth import safe_callback

USER_EMAIL = "user@nextmail.com"
USER_PASSWORD = "123456"


# ─── gate ────────────────────────────────────────────────────────

async def test_anonymous_dashboard_redirects_to_login(client):
    res = await client.get("/dashboard/invoices", params={"query": "lee", "page": "2"})

    assert res.status_code == 302
    location = urlparse(res.headers["location"])
    assert location.path == "/login"
    assert parse_qs(location.query)["callbackUrl"] == ["/dashboard/invoices?query=lee&page=2"]


async def test_anonymous_public_pages_are_allowed(client):
    assert (await client.get("/")).status_code == 200
    res = await client.get("/login", params={"callbackUrl": "/dashboard/invoices"})
    assert res.status_code == 200
    assert res.json() == {"page": "login", "callback_url": "/dashboard/invoices"}


async def test_signed_in_public_page_redirects_home(signed_in_client):
    res = await signed_in_client.get("/login")
    assert res.status_code == 302
    assert res.headers["location"] == "/dashboard"

    res = await signed_in_client.get("/")
    assert res.headers["location"] == "/dashboard"


async def test_signed_in_dashboard_is_allowed(signed_in_client):
    res = await signed_in_client.get("/dashboard")
    assert res.status_code == 200
    assert "cards" in res.json()


async def test_api_routes_bypass_gate(client, seed_user):
    assert (await client.get("/api/v1/health/")).status_code == 200

    await client.post("/login", data={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert (await client.get("/api/v1/health/")).status_code == 200


# ─── login ───────────────────────────────────────────────────────

async def test_wrong_password_is_401_without_session(client, seed_user):
    res = await client.post("/login", data={"email": USER_EMAIL, "password": "nope-nope"})

    assert res.status_code == 401
    assert res.json() == {"message": "Invalid credentials."}
    assert (await client.get("/dashboard")).status_code == 302


async def test_login_honors_callback_url(client, seed_user):
    res = await client.post(
        "/login",
        params={"callbackUrl": "/dashboard/invoices?page=2"},
        data={"email": USER_EMAIL, "password": USER_PASSWORD},
    )
    assert res.status_code == 303
    assert res.headers["location"] == "/dashboard/invoices?page=2"


async def test_login_ignores_offsite_redirect(client, seed_user):
    res = await client.post(
        "/login",
        data={
            "email": USER_EMAIL, "password": USER_PASSWORD,
            "redirectTo": "https://evil.example/",
        },
    )
    assert res.headers["location"] == "/dashboard"


def test_safe_callback():
    assert safe_callback("/dashboard/invoices", "/dashboard") == "/dashboard/invoices"
    assert safe_callback("//evil.example", "/dashboard") == "/dashboard"
    assert safe_callback(None, "/dashboard") == "/dashboard"


# ─── logout ──────────────────────────────────────────────────────

async def test_logout_clears_session(signed_in_client):
    res = await signed_in_client.post("/dashboard/logout")
    assert res.status_code == 303
    assert res.headers["location"] == "/login"

    res = await signed_in_client.get("/dashboard")
    assert res.status_code == 302
    assert res.headers["location"].startswith("/login?callbackUrl=")
