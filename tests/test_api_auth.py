"""Auth API tests"""
import pytest

TEST_PASSWORD = "secret123"

REGISTER_BODY = {
    "username": "أحمد علي",
    "email": "Ahmed@Example.com",
    "phone": "01123456789",
    "grade": "sec_3",
    "password": "secret123",
    "confirm_password": "secret123",
}


@pytest.mark.asyncio
async def test_register_creates_pending_student(client):
    response = await client.post("/api/v1/auth/register", json=REGISTER_BODY)
    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "student"
    assert data["status"] == "pending"
    assert data["email"] == "ahmed@example.com"
    assert data["grade_label"] == "الصف الثالث الثانوي"
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    await client.post("/api/v1/auth/register", json=REGISTER_BODY)
    response = await client.post(
        "/api/v1/auth/register",
        json={**REGISTER_BODY, "email": "ahmed@example.com"},
    )
    assert response.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [
        {"phone": "0123"},
        {"phone": "01312345678"},
        {"grade": "grade_12"},
        {"confirm_password": "different1"},
        {"password": "123", "confirm_password": "123"},
        {"email": "not-an-email"},
    ],
)
async def test_register_validation(client, override):
    response = await client.post("/api/v1/auth/register", json={**REGISTER_BODY, **override})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_pending_student_cannot_login(client):
    await client.post("/api/v1/auth/register", json=REGISTER_BODY)
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "ahmed@example.com", "password": "secret123"},
    )
    assert response.status_code == 403
    assert "access_token" not in response.json()


@pytest.mark.asyncio
async def test_login_active_student(client, student):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "Student@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == student.id


@pytest.mark.asyncio
async def test_login_pending_admin_allowed(client, make_user):
    await make_user(email="boss@example.com", role="admin", status="pending", grade=None)
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "boss@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_wrong_password(client, student):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "student@example.com", "password": "wrong-pass"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_requires_token(client):
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json()["location"] == "/login"


@pytest.mark.asyncio
async def test_me_for_pending_student_token(client, make_user, headers_for):
    """A token issued before the account went back to pending is refused"""
    user = await make_user(status="pending")
    response = await client.get("/api/v1/auth/me", headers=headers_for(user))
    assert response.status_code == 403
    assert response.json()["location"] == "/login"


@pytest.mark.asyncio
async def test_update_profile(client, student_headers):
    response = await client.put(
        "/api/v1/auth/me",
        json={"username": "طالب مجتهد", "phone": "01598765432"},
        headers=student_headers,
    )
    assert response.status_code == 200
    assert response.json()["username"] == "طالب مجتهد"
    assert response.json()["phone"] == "01598765432"


@pytest.mark.asyncio
async def test_change_password(client, student, student_headers):
    response = await client.post(
        "/api/v1/auth/change-password",
        json={"current_password": "wrong-pass", "new_password": "newpass1", "confirm_password": "newpass1"},
        headers=student_headers,
    )
    assert response.status_code == 403

    response = await client.post(
        "/api/v1/auth/change-password",
        json={"current_password": TEST_PASSWORD, "new_password": "newpass1", "confirm_password": "newpass1"},
        headers=student_headers,
    )
    assert response.status_code == 204

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "student@example.com", "password": "newpass1"},
    )
    assert response.status_code == 200
