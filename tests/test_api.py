from app.core.constants import HEADER_CORRELATION_ID, ErrorMessages
from app.core.permissions import RoleName


def _submit(client, headers, start="2025-08-04", end="2025-08-06", **extra):
    body = {"startDate": start, "endDate": end, **extra}
    return client.post("/api/leave-requests", json=body, headers=headers)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={HEADER_CORRELATION_ID: "abc-123"})
    assert response.headers[HEADER_CORRELATION_ID] == "abc-123"
    assert "X-Process-Time" in response.headers


def test_missing_token_uses_error_envelope(client):
    response = client.get("/api/leave-requests/my-requests")
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_AUTHENTICATED"
    assert body["error"]["message"] == ErrorMessages.TOKEN_NOT_FOUND
    assert body["error"]["status"] == 401
    assert "timestamp" in body["error"]


def test_garbage_token_is_rejected(client):
    response = client.get(
        "/api/leave-requests/my-requests", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"


def test_submit_leave_request_returns_camel_case_payload(client, make_user, headers_for):
    staff = make_user(RoleName.STAFF, balance=10)

    response = _submit(client, headers_for(staff), reason="Moving house")
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == ErrorMessages.LEAVE_SUBMITTED

    data = body["data"]
    assert data["requestedDays"] == 3
    assert data["remainingBalance"] == 7
    leave_request = data["leaveRequest"]
    assert leave_request["startDate"] == "2025-08-04"
    assert leave_request["endDate"] == "2025-08-06"
    assert leave_request["status"] == "Pending"
    assert leave_request["leaveType"] == "Annual Leave"
    assert leave_request["user"]["email"] == staff.email
    assert leave_request["reviewedById"] is None


def test_wrongly_typed_body_is_a_validation_failure(client, make_user, headers_for):
    staff = make_user(RoleName.STAFF)
    response = client.post(
        "/api/leave-requests",
        json={"startDate": 20250804, "endDate": "2025-08-06"},
        headers=headers_for(staff),
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


def test_reversed_dates_map_to_invalid_date_range(client, make_user, headers_for):
    staff = make_user(RoleName.STAFF)
    response = _submit(client, headers_for(staff), start="2025-08-06", end="2025-08-04")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"


def test_approve_then_cancel_round_trip(client, make_user, assign, headers_for):
    staff = make_user(RoleName.STAFF, balance=10)
    manager = make_user(RoleName.MANAGER)
    assign(manager, staff)
    request_id = _submit(client, headers_for(staff)).json()["data"]["leaveRequest"]["id"]

    pending = client.get("/api/leave-requests/pending", headers=headers_for(manager)).json()
    assert [item["id"] for item in pending["data"]] == [request_id]

    approved = client.patch(f"/api/leave-requests/approve/{request_id}", headers=headers_for(manager))
    assert approved.status_code == 200
    assert approved.json()["data"]["leaveRequest"]["status"] == "Approved"
    assert approved.json()["data"]["leaveRequest"]["reviewedById"] == manager.id
    assert approved.json()["data"]["remainingBalance"] == 7

    again = client.patch(f"/api/leave-requests/approve/{request_id}", headers=headers_for(manager))
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "INVALID_STATE_TRANSITION"

    cancelled = client.patch(f"/api/leave-requests/cancel/{request_id}", headers=headers_for(staff))
    assert cancelled.status_code == 200
    assert cancelled.json()["data"]["leaveRequest"]["status"] == "Cancelled"

    remaining = client.get(f"/api/leave-requests/remaining/{staff.id}", headers=headers_for(staff))
    assert remaining.json()["data"]["annualLeaveBalance"] == 10


def test_reject_with_and_without_body(client, make_user, assign, headers_for):
    staff = make_user(RoleName.STAFF)
    manager = make_user(RoleName.MANAGER)
    assign(manager, staff)
    first = _submit(client, headers_for(staff)).json()["data"]["leaveRequest"]["id"]
    second = _submit(client, headers_for(staff), start="2025-09-01", end="2025-09-02").json()
    second = second["data"]["leaveRequest"]["id"]

    with_note = client.patch(
        f"/api/leave-requests/reject/{first}", json={"reason": "Quarter end"}, headers=headers_for(manager)
    )
    assert with_note.json()["data"]["leaveRequest"]["reviewNote"] == "Quarter end"

    without_body = client.patch(f"/api/leave-requests/reject/{second}", headers=headers_for(manager))
    assert without_body.status_code == 200
    assert without_body.json()["data"]["leaveRequest"]["status"] == "Rejected"


def test_invalid_request_id_is_invalid_input(client, make_user, headers_for):
    manager = make_user(RoleName.MANAGER)
    response = client.patch("/api/leave-requests/approve/abc", headers=headers_for(manager))
    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "INVALID_INPUT"
    assert body["error"]["message"] == ErrorMessages.INVALID_LEAVE_ID


def test_staff_cannot_review(client, make_user, headers_for):
    staff = make_user(RoleName.STAFF)
    response = client.get("/api/leave-requests/all?status=Pending", headers=headers_for(staff))
    assert response.status_code == 200

    response = client.patch("/api/leave-requests/approve/1", headers=headers_for(staff))
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_balance_overwrite(client, make_user, headers_for):
    staff = make_user(RoleName.STAFF, balance=5)
    admin = make_user(RoleName.ADMIN)

    response = client.patch(
        f"/api/leave-requests/balance/{staff.id}",
        json={"annualLeaveBalance": "18"},
        headers=headers_for(admin),
    )
    assert response.status_code == 200
    assert response.json()["message"] == ErrorMessages.BALANCE_UPDATED
    assert response.json()["data"] == {"userId": staff.id, "email": staff.email, "annualLeaveBalance": 18}

    response = client.patch(
        f"/api/leave-requests/balance/{staff.id}",
        json={"annualLeaveBalance": -2},
        headers=headers_for(admin),
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_VALUE"


def test_assign_manager_then_conflict(client, make_user, headers_for):
    admin = make_user(RoleName.ADMIN)
    staff = make_user(RoleName.STAFF)
    manager = make_user(RoleName.MANAGER)
    body = {"staffId": staff.id, "managerId": manager.id, "startDate": "2025-01-01"}

    created = client.post("/api/user-management/assign", json=body, headers=headers_for(admin))
    assert created.status_code == 201
    assert created.json()["data"]["startDate"] == "2025-01-01"
    assert created.json()["message"] == ErrorMessages.ASSIGNMENT_SUCCESS

    duplicate = client.post("/api/user-management/assign", json=body, headers=headers_for(admin))
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "ALREADY_ASSIGNED"

    staff_list = client.get("/api/user-management/staff", headers=headers_for(manager)).json()
    assert [member["email"] for member in staff_list["data"]] == [staff.email]


def test_missing_assignment_ids(client, make_user, headers_for):
    admin = make_user(RoleName.ADMIN)
    response = client.post("/api/user-management/assign", json={"staffId": 1}, headers=headers_for(admin))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MISSING_REQUIRED_FIELD"


def test_users_me_and_roles(client, make_user, headers_for):
    staff = make_user(RoleName.STAFF, email="casey@company.com")

    me = client.get("/api/users/me", headers=headers_for(staff)).json()["data"]
    assert me["email"] == "casey@company.com"
    assert me["role"]["name"] == "staff"
    assert "passwordHash" not in me

    roles = client.get("/api/roles", headers=headers_for(staff)).json()["data"]
    assert {role["name"] for role in roles} == {"admin", "manager", "staff"}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json()["success"] is False
