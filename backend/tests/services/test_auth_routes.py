"""Auth routes — /register, /login (GET and POST), / over the full FastAPI stack.

Tests cover:
    - register returns a token envelope; duplicates 409
    - login via query string and via JSON body
    - welcome route requires a token (Bearer or legacy jwtoken header)
    - validation failures use the 400 envelope (including passwords over 72 UTF-8 bytes)
"""

async def test_register_returns_token(client, registration):
    res = await client.post("/register", json=registration)
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "User registered successfully!"
    assert body["data"]["jwtoken"]
    assert body["data"]["tokenType"] == "bearer"
    assert "password" not in str(body)


async def test_register_duplicate_email_conflict(client, registration):
    await client.post("/register", json=registration)
    res = await client.post(
        "/register", json={**registration, "mobile": "9000011111"},
    )
    assert res.status_code == 409
    assert res.json()["message"] == "Email or mobile already exists!"
    assert res.json()["error"]["code"] == "DUPLICATE_IDENTITY"


async def test_register_missing_field_is_400(client, registration):
    del registration["email"]
    res = await client.post("/register", json=registration)
    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Invalid request data"
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert any(d["field"].endswith("email") for d in body["error"]["details"])


async def test_register_multibyte_password_over_72_bytes_is_400(client, registration):
    res = await client.post(
        "/register", json={**registration, "password": "é" * 40},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid request data"
    assert any(
        d["field"].endswith("password") for d in res.json()["error"]["details"]
    )


async def test_register_and_login_with_multibyte_password(client, registration):
    password = "contraseña-ñandú"
    res = await client.post("/register", json={**registration, "password": password})
    assert res.status_code == 200
    res = await client.post(
        "/login", json={"email": registration["email"], "password": password},
    )
    assert res.status_code == 200


async def test_login_via_query_string(client, registration):
    await client.post("/register", json=registration)
    res = await client.get(
        "/login",
        params={"email": registration["email"], "password": registration["password"]},
    )
    assert res.status_code == 200
    assert res.json()["message"] == "You've logged in successfully!"
    assert res.json()["data"]["jwtoken"]


async def test_login_via_json_body(client, registration):
    await client.post("/register", json=registration)
    res = await client.post(
        "/login",
        json={"email": registration["email"], "password": registration["password"]},
    )
    assert res.status_code == 200


async def test_login_unknown_user_404(client):
    res = await client.get(
        "/login", params={"email": "ghost@example.com", "password": "x"},
    )
    assert res.status_code == 404
    assert res.json()["message"] == "User does not exist"


async def test_login_wrong_password_401(client, registration):
    await client.post("/register", json=registration)
    res = await client.post(
        "/login", json={"email": registration["email"], "password": "nope"},
    )
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid credentials!"


async def test_welcome_with_bearer_token(client, auth_headers):
    res = await client.get("/", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "Welcome to the content"}


async def test_welcome_with_jwtoken_header(client, auth_headers):
    token = auth_headers["Authorization"].removeprefix("Bearer ")
    res = await client.get("/", headers={"jwtoken": token})
    assert res.status_code == 200


async def test_welcome_without_token(client):
    res = await client.get("/")
    assert res.status_code == 401
    assert res.json()["message"] == "You're not logged in!"


async def test_welcome_with_garbage_token(client):
    res = await client.get("/", headers={"Authorization": "Bearer nonsense"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "NOT_LOGGED_IN"
