"""Profile page and admin user management."""

from conftest import DEFAULT_PASSWORD, auth_headers


class TestProfile:
    def test_owner_reads_profile(self, client, seed):
        asha = seed.user()

        response = client.get(f"/api/user/profile/{asha.id}", headers=auth_headers(asha))

        assert response.status_code == 200
        assert response.json()["email"] == "asha@example.com"
        assert response.json()["phone"] is None

    def test_other_shopper_is_forbidden(self, client, seed):
        asha = seed.user()
        ravi = seed.user(name="Ravi", email="ravi@example.com")

        response = client.get(f"/api/user/profile/{asha.id}", headers=auth_headers(ravi))

        assert response.status_code == 403

    def test_admin_reads_any_profile(self, client, seed):
        asha = seed.user()
        admin = seed.admin()

        assert client.get(f"/api/user/profile/{asha.id}", headers=auth_headers(admin)).status_code == 200

    def test_missing_profile(self, client, seed):
        admin = seed.admin()

        assert client.get("/api/user/profile/999", headers=auth_headers(admin)).status_code == 404

    def test_updates_profile_fields(self, client, seed):
        asha = seed.user()

        response = client.patch(
            f"/api/user/profile/{asha.id}",
            json={"phone": "9876543210", "preferredEra": "Mughal", "address": "12 Lake Road, Pune"},
            headers=auth_headers(asha),
        )

        assert response.status_code == 200
        data = response.json()
        assert (data["phone"], data["preferredEra"], data["address"]) == ("9876543210", "Mughal", "12 Lake Road, Pune")
        assert data["name"] == "Asha Verma"

    def test_empty_values_keep_stored_ones(self, client, seed):
        asha = seed.user()

        response = client.patch(
            f"/api/user/profile/{asha.id}", json={"name": "", "email": "", "phone": None}, headers=auth_headers(asha)
        )

        assert response.status_code == 200
        assert (response.json()["name"], response.json()["email"]) == ("Asha Verma", "asha@example.com")

    def test_email_taken_by_another_account(self, client, seed):
        asha = seed.user()
        seed.user(name="Ravi", email="ravi@example.com")

        response = client.patch(
            f"/api/user/profile/{asha.id}", json={"email": "ravi@example.com"}, headers=auth_headers(asha)
        )

        assert response.status_code == 409

    def test_cannot_edit_someone_else(self, client, seed):
        asha = seed.user()
        ravi = seed.user(name="Ravi", email="ravi@example.com")

        response = client.patch(f"/api/user/profile/{asha.id}", json={"name": "Hacked"}, headers=auth_headers(ravi))

        assert response.status_code == 403


class TestAdminUserUpdate:
    def test_role_switches_admin_flag(self, client, seed):
        asha = seed.user()
        admin = seed.admin()

        promoted = client.put(f"/api/admin/users/{asha.id}", json={"role": "admin"}, headers=auth_headers(admin))
        assert promoted.status_code == 200
        assert promoted.json()["isAdmin"] is True
        assert client.get("/api/admin/users", headers=auth_headers(asha)).status_code == 200

        demoted = client.put(f"/api/admin/users/{asha.id}", json={"role": "user"}, headers=auth_headers(admin))
        assert demoted.json()["isAdmin"] is False

    def test_updates_contact_fields(self, client, seed):
        asha = seed.user()
        admin = seed.admin()

        response = client.put(
            f"/api/admin/users/{asha.id}",
            json={"name": "Asha V.", "phone": "12345", "preferredEra": "Victorian"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert (response.json()["name"], response.json()["phone"]) == ("Asha V.", "12345")

    def test_null_name_is_rejected(self, client, seed):
        asha = seed.user()
        admin = seed.admin()

        response = client.put(f"/api/admin/users/{asha.id}", json={"name": None}, headers=auth_headers(admin))

        assert response.status_code == 400

    def test_unknown_role(self, client, seed):
        asha = seed.user()
        admin = seed.admin()

        response = client.put(f"/api/admin/users/{asha.id}", json={"role": "owner"}, headers=auth_headers(admin))

        assert response.status_code == 400

    def test_missing_user(self, client, seed):
        admin = seed.admin()

        assert client.put("/api/admin/users/999", json={"name": "X"}, headers=auth_headers(admin)).status_code == 404


class TestAdminUserDelete:
    def test_soft_deleted_user_loses_access(self, client, seed):
        asha = seed.user()
        admin = seed.admin()

        response = client.delete(f"/api/admin/users/{asha.id}", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json()["message"] == f"User with ID {asha.id} has been deleted."
        assert client.get("/api/user/me", headers=auth_headers(asha)).status_code == 401
        login = client.post("/api/user/login", json={"email": "asha@example.com", "password": DEFAULT_PASSWORD})
        assert login.status_code == 401
        listed = client.get("/api/admin/users", headers=auth_headers(admin)).json()
        assert [u["email"] for u in listed] == ["admin@example.com"]

    def test_deleting_twice_is_not_found(self, client, seed):
        asha = seed.user()
        admin = seed.admin()

        client.delete(f"/api/admin/users/{asha.id}", headers=auth_headers(admin))

        assert client.delete(f"/api/admin/users/{asha.id}", headers=auth_headers(admin)).status_code == 404

    def test_requires_admin(self, client, seed):
        asha = seed.user()
        ravi = seed.user(name="Ravi", email="ravi@example.com")

        assert client.delete(f"/api/admin/users/{ravi.id}", headers=auth_headers(asha)).status_code == 403


class TestUserListFilters:
    def seed_accounts(self, seed):
        seed.user(name="Asha Verma", email="asha@example.com")
        seed.user(name="Ravi Kumar", email="ravi@example.com", is_blocked=True)
        return seed.admin()

    def emails(self, client, admin, **params):
        response = client.get("/api/admin/users", params=params, headers=auth_headers(admin))
        assert response.status_code == 200
        return {u["email"] for u in response.json()}

    def test_search_matches_name_or_email(self, client, seed):
        admin = self.seed_accounts(seed)

        assert self.emails(client, admin, search="kumar") == {"ravi@example.com"}
        assert self.emails(client, admin, search="ASHA@") == {"asha@example.com"}

    def test_status_filter(self, client, seed):
        admin = self.seed_accounts(seed)

        assert self.emails(client, admin, status="inactive") == {"ravi@example.com"}
        assert self.emails(client, admin, status="active") == {"asha@example.com", "admin@example.com"}

    def test_role_filter(self, client, seed):
        admin = self.seed_accounts(seed)

        assert self.emails(client, admin, role="admin") == {"admin@example.com"}
        assert self.emails(client, admin, role="user") == {"asha@example.com", "ravi@example.com"}

    def test_unknown_status_value(self, client, seed):
        admin = self.seed_accounts(seed)

        response = client.get("/api/admin/users", params={"status": "gone"}, headers=auth_headers(admin))

        assert response.status_code == 400
