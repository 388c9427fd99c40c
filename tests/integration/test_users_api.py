# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Integration tests for user management endpoints."""

import pytest

from salescrm.models import User, UserRole


def employee_payload(name: str, **extra) -> dict:
    return {"name": name, "email": f"{name.lower()}@example.com", **extra}


class TestUserVisibility:
    """Tests for GET /api/v1/users."""

    def test_employee_sees_only_self(self, login, employee, admin_user):
        client = login(employee)
        response = client.get("/api/v1/users")
        assert [u["id"] for u in response.json()] == [str(employee.id)]
        assert client.get(f"/api/v1/users/{employee.id}").status_code == 200
        assert client.get(f"/api/v1/users/{admin_user.id}").status_code == 403

    def test_admin_sees_own_team(self, login, make_user, admin_user, employee):
        outsider = make_user("Oscar", UserRole.EMPLOYEE)
        client = login(admin_user)
        ids = {u["id"] for u in client.get("/api/v1/users").json()}
        assert ids == {str(admin_user.id), str(employee.id)}
        assert client.get(f"/api/v1/users/{outsider.id}").status_code == 403

    def test_role_filter(self, login, developer, admin_user, employee):
        response = login(developer).get("/api/v1/users", params={"role": "employee"})
        assert [u["id"] for u in response.json()] == [str(employee.id)]


class TestCreateAdmin:
    """Tests for POST /api/v1/users/admins."""

    def test_developer_creates_admin(self, login, developer):
        response = login(developer).post(
            "/api/v1/users/admins",
            json={"name": "Ann", "email": "ann@example.com", "employee_creation_limit": 2},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["role"] == "admin"
        assert data["employee_creation_limit"] == 2

    def test_admin_cannot_create_admin(self, login, admin_user):
        response = login(admin_user).post(
            "/api/v1/users/admins", json={"name": "Ann", "email": "ann@example.com"}
        )
        assert response.status_code == 403
        assert response.json()["detail"] == "Permission denied: createAdmin"


class TestCreateEmployee:
    """Tests for POST /api/v1/users/employees."""

    def test_admin_creates_own_employee(self, login, admin_user, developer):
        response = login(admin_user).post(
            "/api/v1/users/employees",
            json=employee_payload("Newbie", admin_id=str(developer.id)),
        )
        assert response.status_code == 201
        assert response.json()["created_by_admin_id"] == str(admin_user.id)

    def test_limit_reached(self, login, db_session, make_user, admin_user):
        admin_user.employee_creation_limit = 2
        db_session.commit()
        make_user("One", UserRole.EMPLOYEE, admin=admin_user)
        make_user("Two", UserRole.EMPLOYEE, admin=admin_user)

        response = login(admin_user).post(
            "/api/v1/users/employees", json=employee_payload("Three")
        )
        assert response.status_code == 403
        assert response.json()["detail"] == "Permission denied: limit reached"
        assert db_session.query(User).filter(User.name == "Three").first() is None

    def test_quota_endpoint(self, login, db_session, make_user, admin_user):
        admin_user.employee_creation_limit = 2
        db_session.commit()
        make_user("One", UserRole.EMPLOYEE, admin=admin_user)

        response = login(admin_user).get(f"/api/v1/users/{admin_user.id}/quota")
        assert response.status_code == 200
        assert response.json() == {
            "admin_id": str(admin_user.id),
            "limit": 2,
            "current_count": 1,
            "can_create": True,
        }

    def test_quota_of_non_admin(self, login, developer, employee):
        response = login(developer).get(f"/api/v1/users/{employee.id}/quota")
        assert response.status_code == 400

    def test_developer_picks_admin(self, login, developer, admin_user):
        response = login(developer).post(
            "/api/v1/users/employees",
            json=employee_payload("Picked", admin_id=str(admin_user.id)),
        )
        assert response.status_code == 201
        assert response.json()["created_by_admin_id"] == str(admin_user.id)

    def test_developer_without_admin(self, login, developer):
        response = login(developer).post(
            "/api/v1/users/employees", json=employee_payload("Solo")
        )
        assert response.status_code == 201
        assert response.json()["created_by_admin_id"] is None

    def test_developer_with_invalid_admin(self, login, developer, employee):
        response = login(developer).post(
            "/api/v1/users/employees",
            json=employee_payload("Lost", admin_id=str(employee.id)),
        )
        assert response.status_code == 400

    def test_employee_cannot_create(self, login, employee):
        response = login(employee).post(
            "/api/v1/users/employees", json=employee_payload("Nope")
        )
        assert response.status_code == 403

    def test_duplicate_email(self, login, admin_user, employee):
        response = login(admin_user).post(
            "/api/v1/users/employees",
            json={"name": "Copy", "email": employee.email},
        )
        assert response.status_code == 400


class TestPermissionsAndDelete:
    """Tests for PUT /users/{id}/permissions and DELETE /users/{id}."""

    def test_admin_updates_own_employee(self, login, admin_user, employee):
        response = login(admin_user).put(
            f"/api/v1/users/{employee.id}/permissions",
            json={"permissions": {"viewLeads": "created", "assignLeads": True}},
        )
        assert response.status_code == 200
        assert response.json()["permissions"] == {
            "viewLeads": "created",
            "assignLeads": True,
        }

    @pytest.mark.parametrize(
        "permissions",
        [{"viewLeads": "subordinates"}, {"viewLeads": "bogus"}, {"createLeads": "all"}],
    )
    def test_invalid_permissions(self, login, admin_user, employee, permissions):
        response = login(admin_user).put(
            f"/api/v1/users/{employee.id}/permissions",
            json={"permissions": permissions},
        )
        assert response.status_code == 400

    def test_admin_cannot_edit_foreign_employee(self, login, make_user, admin_user):
        stranger = make_user("Stranger", UserRole.EMPLOYEE)
        response = login(admin_user).put(
            f"/api/v1/users/{stranger.id}/permissions",
            json={"permissions": {"viewLeads": "all"}},
        )
        assert response.status_code == 403

    def test_admin_deletes_own_employee(self, login, db_session, admin_user, employee):
        employee_id = employee.id
        response = login(admin_user).delete(f"/api/v1/users/{employee_id}")
        assert response.status_code == 204
        assert db_session.query(User).filter(User.id == employee_id).first() is None

    def test_cannot_delete_self(self, login, developer):
        response = login(developer).delete(f"/api/v1/users/{developer.id}")
        assert response.status_code == 400

    def test_employee_cannot_delete(self, login, make_user, admin_user, employee):
        peer = make_user("Peer", UserRole.EMPLOYEE, admin=admin_user)
        response = login(employee).delete(f"/api/v1/users/{peer.id}")
        assert response.status_code == 403

    def test_admin_manages_employee_placed_by_developer(
        self, login, db_session, developer, admin_user
    ):
        created = login(developer).post(
            "/api/v1/users/employees",
            json=employee_payload("Placed", admin_id=str(admin_user.id)),
        )
        assert created.status_code == 201
        employee_id = created.json()["id"]

        client = login(admin_user)
        listed = {u["id"] for u in client.get("/api/v1/users").json()}
        assert employee_id in listed
        response = client.put(
            f"/api/v1/users/{employee_id}/permissions",
            json={"permissions": {"viewLeads": "created"}},
        )
        assert response.status_code == 200
        assert client.delete(f"/api/v1/users/{employee_id}").status_code == 204

    @pytest.mark.parametrize(
        "permissions",
        [{"createAdmin": True}, {"clearSystemData": True}, {"viewLeads": "all"}],
    )
    def test_admin_cannot_grant_beyond_own(
        self, login, admin_user, employee, permissions
    ):
        response = login(admin_user).put(
            f"/api/v1/users/{employee.id}/permissions",
            json={"permissions": permissions},
        )
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Cannot grant")

    def test_developer_grants_clear_system_data(self, login, developer, admin_user):
        response = login(developer).put(
            f"/api/v1/users/{admin_user.id}/permissions",
            json={"permissions": {"clearSystemData": True}},
        )
        assert response.status_code == 200
        assert response.json()["permissions"] == {"clearSystemData": True}
