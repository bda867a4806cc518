import pytest
from fastapi import status

def test_login_success(client, admin_user):
    """Test successful login with valid credentials."""
    login_data = {
        "login_id": admin_user.login_id,
        "password": "AdminPassword123!"
    }

    response = client.post("/api/auth/login", json=login_data)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["role"] == "Admin"

def test_login_invalid_credentials(client):
    """Test login failure with wrong password."""
    response = client.post("/api/auth/login", json={"login_id": "nobody", "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["errors"][0]["code"] == "AUTH_FAILED"

def test_login_with_generated_credentials(client, make_employee):
    provisioned = make_employee("Jane", "Doe")
    response = client.post(
        "/api/auth/login",
        json={"login_id": provisioned.login_id, "password": provisioned.temp_password},
    )
    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["role"] == "Employee"
    assert user["is_first_login"] is True
    assert user["employee_id"] == provisioned.employee.id

def test_profile_requires_token(client):
    response = client.get("/api/auth/profile")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

def test_profile_rejects_garbage_token(client):
    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

def test_profile_includes_employee(client, make_employee, auth_headers):
    provisioned = make_employee("Jane", "Doe")
    response = client.get("/api/auth/profile", headers=auth_headers(provisioned.employee.user))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["login_id"] == provisioned.login_id
    assert data["employee"]["full_name"] == "Jane Doe"
    assert data["employee"]["leave_balances"] == {"paidLeave": 20, "sickLeave": 10, "unpaidLeave": 0}

def test_change_password(client, admin_user, auth_headers):
    response = client.post(
        "/api/auth/change-password",
        headers=auth_headers(admin_user),
        json={"current_password": "AdminPassword123!", "new_password": "EvenBetter456!"},
    )
    assert response.status_code == status.HTTP_200_OK

    login = client.post("/api/auth/login", json={"login_id": "admin", "password": "EvenBetter456!"})
    assert login.status_code == status.HTTP_200_OK

def test_change_password_too_short(client, admin_user, auth_headers):
    response = client.post(
        "/api/auth/change-password",
        headers=auth_headers(admin_user),
        json={"current_password": "AdminPassword123!", "new_password": "short"},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["errors"][0]["field"] == "new_password"
