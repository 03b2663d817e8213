"""Login Route — reflects the principal produced by Basic authentication.

Invariants:
    - Valid credentials: 200 {"message": "User logged in successfully!", "data": <principal>}
    - Two logins with the same credentials produce identical bodies
    - Missing or wrong credentials: 401 + WWW-Authenticate, handler never runs
    - Credentials are decoded as UTF-8; malformed values get the same 401 envelope
"""

import base64


async def test_login_returns_principal(client, seed_account):
    res = await client.post(
        "/api/v1/auth/login", auth=("ada@x.com", "secret"),
    )

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "User logged in successfully!"
    assert body["data"]["id"] == seed_account.id
    assert body["data"]["name"] == "Ada"
    assert body["data"]["location"] == "Paris"
    assert "password" not in body["data"]


async def test_login_is_idempotent(client, seed_account):
    first = await client.post("/api/v1/auth/login", auth=("ada@x.com", "secret"))
    second = await client.post("/api/v1/auth/login", auth=("ada@x.com", "secret"))

    assert first.content == second.content


async def test_login_without_credentials_returns_401(client, seed_account):
    res = await client.post("/api/v1/auth/login")

    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Basic"
    assert res.json()["detail"]["message"] == "Authentication required"


async def test_login_with_wrong_password_returns_401(client, seed_account):
    res = await client.post(
        "/api/v1/auth/login", auth=("ada@x.com", "wrong"),
    )
    assert res.status_code == 401
    assert res.json()["detail"]["error"] == "Invalid email or password"


async def test_login_with_unknown_email_returns_401(client, seed_account):
    res = await client.post(
        "/api/v1/auth/login", auth=("nobody@x.com", "secret"),
    )
    assert res.status_code == 401


async def test_register_then_login_on_legacy_paths(client):
    await client.post(
        "/register",
        json={"name": "Ada", "email": "ada@x.com", "password": "secret", "location": "Paris"},
    )

    res = await client.post("/login", auth=("ada@x.com", "secret"))

    assert res.status_code == 200
    assert res.json()["data"]["location"] == "Paris"


async def test_non_ascii_password_round_trips_through_basic_auth(client):
    reg = await client.post(
        "/api/v1/auth/register",
        json={"name": "Zoë", "email": "zoë@x.com", "password": "pässwört"},
    )
    assert reg.status_code == 200

    res = await client.post(
        "/api/v1/auth/login", auth=("zoë@x.com", "pässwört"),
    )

    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Zoë"


async def test_malformed_basic_header_returns_401_envelope(client, seed_account):
    res = await client.post(
        "/api/v1/auth/login", headers={"Authorization": "Basic !!!not-base64"},
    )

    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Basic"
    assert res.json()["detail"] == {
        "message": "Authentication required", "error": "Malformed credentials",
    }


async def test_basic_value_without_colon_returns_401(client, seed_account):
    token = base64.b64encode("ada@x.com".encode("utf-8")).decode("ascii")

    res = await client.post(
        "/api/v1/auth/login", headers={"Authorization": f"Basic {token}"},
    )

    assert res.status_code == 401
    assert res.json()["detail"]["error"] == "Malformed credentials"


async def test_non_utf8_credentials_return_401(client, seed_account):
    token = base64.b64encode(b"ada@x.com:\xff\xfe").decode("ascii")

    res = await client.post(
        "/api/v1/auth/login", headers={"Authorization": f"Basic {token}"},
    )

    assert res.status_code == 401
    assert res.json()["detail"]["error"] == "Malformed credentials"


async def test_bearer_scheme_returns_401(client, seed_account):
    res = await client.post(
        "/api/v1/auth/login", headers={"Authorization": "Bearer abc"},
    )

    assert res.status_code == 401
    assert res.json()["detail"]["error"] == "Unsupported authorization scheme"
