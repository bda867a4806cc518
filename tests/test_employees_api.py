from datetime import datetime
from fastapi import status

from hrms.services.attendance_service import AttendanceRecordStore


def _new_employee_payload(**overrides):
    payload = {
        "first_name": "Maya",
        "last_name": "Singh",
        "email": "maya.singh@example.com",
        "date_of_joining": "2023-06-01",
        "department": "Engineering",
        "position": "Developer",
    }
    payload.update(overrides)
    return payload


def test_hr_creates_employee_with_credentials(client, hr_user, auth_headers):
    response = client.post("/api/employees", headers=auth_headers(hr_user), json=_new_employee_payload())

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["employee"]["initials"] == "MS"
    assert data["employee"]["serial_number"] == 1
    assert data["credentials"]["login_id"] == "OIJDODMS20230001"
    assert len(data["credentials"]["temp_password"]) == 8


def test_duplicate_email_is_rejected(client, hr_user, auth_headers):
    client.post("/api/employees", headers=auth_headers(hr_user), json=_new_employee_payload())
    response = client.post("/api/employees", headers=auth_headers(hr_user), json=_new_employee_payload())

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["errors"][0]["code"] == "DUPLICATE_EMPLOYEE"


def test_employee_cannot_create_employees(client, make_employee, auth_headers):
    user = make_employee().employee.user
    response = client.post("/api/employees", headers=auth_headers(user), json=_new_employee_payload())

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["errors"][0]["code"] == "PERMISSION_DENIED"


def test_invalid_email_is_a_validation_error(client, hr_user, auth_headers):
    response = client.post(
        "/api/employees", headers=auth_headers(hr_user), json=_new_employee_payload(email="not-an-email")
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_list_and_get_employees(client, hr_user, make_employee, auth_headers):
    first = make_employee("Ann", "Lee").employee
    make_employee("Bob", "Ray")

    listing = client.get("/api/employees", headers=auth_headers(hr_user))
    assert listing.status_code == status.HTTP_200_OK
    assert [e["full_name"] for e in listing.json()] == ["Ann Lee", "Bob Ray"]

    detail = client.get(f"/api/employees/{first.id}", headers=auth_headers(hr_user))
    assert detail.json()["email"] == first.email


def test_get_unknown_employee(client, hr_user, auth_headers):
    response = client.get("/api/employees/999", headers=auth_headers(hr_user))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["errors"][0]["code"] == "EMPLOYEE_NOT_FOUND"


def test_employee_updates_own_contact_details(client, make_employee, auth_headers):
    employee = make_employee().employee
    response = client.put(
        f"/api/employees/{employee.id}",
        headers=auth_headers(employee.user),
        json={"phone": "+91 98765 43210", "address": {"city": "Pune"}},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["phone"] == "+91 98765 43210"
    assert response.json()["address"]["city"] == "Pune"


def test_employee_cannot_change_position(client, make_employee, auth_headers):
    employee = make_employee().employee
    response = client.put(
        f"/api/employees/{employee.id}",
        headers=auth_headers(employee.user),
        json={"position": "CTO"},
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_employee_cannot_update_someone_else(client, make_employee, auth_headers):
    me = make_employee("Ann", "Lee").employee
    other = make_employee("Bob", "Ray").employee
    response = client.put(f"/api/employees/{other.id}", headers=auth_headers(me.user), json={"phone": "1"})
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_hr_adjusts_leave_balance(client, hr_user, employee, auth_headers):
    response = client.put(f"/api/employees/{employee.id}", headers=auth_headers(hr_user), json={"paid_leave": 25})
    assert response.json()["leave_balances"]["paidLeave"] == 25


def test_admin_deactivates_employee(client, admin_user, hr_user, make_employee, auth_headers):
    employee = make_employee().employee

    assert client.delete(f"/api/employees/{employee.id}", headers=auth_headers(hr_user)).status_code == 403
    response = client.delete(f"/api/employees/{employee.id}", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_200_OK

    listing = client.get("/api/employees", headers=auth_headers(admin_user))
    assert listing.json() == []
    profile = client.get("/api/auth/profile", headers=auth_headers(employee.user))
    assert profile.status_code == status.HTTP_403_FORBIDDEN


def test_status_board(client, db_session, make_employee, auth_headers):
    present = make_employee("Ann", "Lee").employee
    make_employee("Bob", "Ray")
    AttendanceRecordStore(db_session).check_in(present.id, now=datetime.now())

    response = client.get("/api/employees/status", headers=auth_headers(present.user))

    assert response.status_code == status.HTTP_200_OK
    statuses = {e["full_name"]: e["attendance_status"] for e in response.json()}
    assert statuses == {"Ann Lee": "Present", "Bob Ray": "NotCheckedIn"}
