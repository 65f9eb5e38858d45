"""
Filadex User Administration, Language and Theme Preferences

Run:
    pytest tests/test_users_theme.py -v --tb=short
"""

import pytest

from helpers import create_filament, create_user, login


# ---------------------------------------------------------------------------
# Admin-only user management
# ---------------------------------------------------------------------------

class TestUserAdmin:

    def test_non_admin_is_forbidden(self, user_client):
        assert user_client.get("/api/users").status_code == 403
        assert user_client.post("/api/users", json={"username": "x", "password": "secret-pass"}).status_code == 403

    def test_list_hides_password_hashes(self, admin_client):
        create_user(admin_client, "carol")
        users = admin_client.get("/api/users").json()
        assert [u["username"] for u in users] == ["admin", "carol"]
        assert all("passwordHash" not in u for u in users)

    def test_duplicate_username_is_case_insensitive(self, admin_client):
        create_user(admin_client, "Dave")
        resp = admin_client.post("/api/users", json={"username": "dave", "password": "secret-pass"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Username already exists"

    def test_short_password_rejected(self, admin_client):
        resp = admin_client.post("/api/users", json={"username": "eve", "password": "123"})
        assert resp.status_code == 400

    def test_update_user(self, admin_client, make_client):
        user = create_user(admin_client, "frank", "frank-pass")
        resp = admin_client.put(f"/api/users/{user['id']}", json={
            "username": "franky", "password": "franky-pass", "isAdmin": True, "forceChangePassword": True,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["username"] == "franky"
        assert data["isAdmin"] is True
        assert data["forceChangePassword"] is True

        c = make_client()
        assert login(c, "franky", "franky-pass").status_code == 200

    def test_rename_to_taken_username(self, admin_client):
        user = create_user(admin_client, "gina")
        resp = admin_client.put(f"/api/users/{user['id']}", json={"username": "ADMIN"})
        assert resp.status_code == 400

    def test_cannot_demote_last_admin(self, admin_client):
        me = admin_client.get("/api/auth/me").json()
        resp = admin_client.put(f"/api/users/{me['id']}", json={"isAdmin": False})
        assert resp.status_code == 400

    def test_cannot_delete_yourself(self, admin_client):
        me = admin_client.get("/api/auth/me").json()
        assert admin_client.delete(f"/api/users/{me['id']}").status_code == 403

    def test_admin_can_delete_another_admin(self, admin_client, make_client):
        create_user(admin_client, "helper", "helper-pass", is_admin=True)
        helper = make_client()
        login(helper, "helper", "helper-pass")
        admin_id = admin_client.get("/api/auth/me").json()["id"]

        # two admins, so removing one leaves the other in charge
        assert helper.delete(f"/api/users/{admin_id}").status_code == 204
        other = create_user(helper, "plain")
        assert helper.delete(f"/api/users/{other['id']}").status_code == 204

    def test_delete_cascades_filaments(self, admin_client, make_client, db_session):
        from modules.inventory.models import Filament

        user = create_user(admin_client, "ivan", "ivan-pass")
        c = make_client()
        login(c, "ivan", "ivan-pass")
        create_filament(c)

        assert admin_client.delete(f"/api/users/{user['id']}").status_code == 204
        assert db_session.query(Filament).filter(Filament.user_id == user["id"]).count() == 0

    def test_delete_missing(self, admin_client):
        assert admin_client.delete("/api/users/9999").status_code == 404


# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------

class TestLanguage:

    def test_set_language(self, user_client):
        resp = user_client.post("/api/users/language", json={"language": "de"})
        assert resp.status_code == 200
        assert user_client.get("/api/auth/me").json()["language"] == "de"

    def test_unsupported_language(self, user_client):
        assert user_client.post("/api/users/language", json={"language": "fr"}).status_code == 400


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

class TestTheme:

    def test_default_theme(self, user_client):
        assert user_client.get("/api/theme").json() == {
            "variant": "professional", "primary": "#E11D48", "appearance": "light", "radius": 0.5,
        }

    def test_theme_is_per_user(self, admin_client, user_client):
        theme = {"variant": "vibrant", "primary": "#123", "appearance": "dark", "radius": 1}
        assert user_client.post("/api/theme", json=theme).status_code == 200
        assert user_client.get("/api/theme").json()["variant"] == "vibrant"
        assert admin_client.get("/api/theme").json()["variant"] == "professional"

    @pytest.mark.parametrize("field,value", [
        ("variant", "neon"),
        ("appearance", "dim"),
        ("primary", "red"),
        ("radius", -1),
    ])
    def test_invalid_theme(self, user_client, field, value):
        theme = {"variant": "tint", "primary": "#E11D48", "appearance": "system", "radius": 0.5}
        theme[field] = value
        assert user_client.post("/api/theme", json=theme).status_code == 400

    def test_theme_requires_session(self, client):
        assert client.get("/api/theme").status_code == 401
