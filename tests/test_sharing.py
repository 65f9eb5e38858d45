"""
Filadex Sharing: per-material flags and the public inventory view

Run:
    pytest tests/test_sharing.py -v --tb=short
"""

from helpers import create_filament


def _material(admin_client, name):
    resp = admin_client.post("/api/materials", json={"name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class TestSettings:

    def test_requires_session(self, client):
        assert client.get("/api/user-sharing").status_code == 401

    def test_create_then_update(self, user_client):
        first = user_client.post("/api/user-sharing", json={"isPublic": True})
        assert first.status_code == 201
        assert first.json()["materialId"] is None

        second = user_client.post("/api/user-sharing", json={"isPublic": False})
        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["isPublic"] is False

    def test_unknown_material(self, user_client):
        resp = user_client.post("/api/user-sharing", json={"materialId": 9999, "isPublic": True})
        assert resp.status_code == 404

    def test_is_public_must_be_boolean(self, user_client):
        assert user_client.post("/api/user-sharing", json={"isPublic": "yes"}).status_code == 400

    def test_global_and_material_flags_are_exclusive(self, admin_client, user_client):
        pla = _material(admin_client, "PLA")

        user_client.post("/api/user-sharing", json={"materialId": pla["id"], "isPublic": True})
        user_client.post("/api/user-sharing", json={"isPublic": True})
        flags = {s["materialId"]: s["isPublic"] for s in user_client.get("/api/user-sharing").json()}
        assert flags == {None: True, pla["id"]: False}

        user_client.post("/api/user-sharing", json={"materialId": pla["id"], "isPublic": True})
        flags = {s["materialId"]: s["isPublic"] for s in user_client.get("/api/user-sharing").json()}
        assert flags == {None: False, pla["id"]: True}

    def test_settings_are_per_user(self, admin_client, user_client):
        user_client.post("/api/user-sharing", json={"isPublic": True})
        assert admin_client.get("/api/user-sharing").json() == []


# ---------------------------------------------------------------------------
# Public view
# ---------------------------------------------------------------------------

class TestPublicView:

    def test_unknown_user(self, client):
        resp = client.get("/api/public/filaments/9999")
        assert resp.status_code == 404
        assert resp.json()["message"] == "User not found"

    def test_nothing_shared(self, user_client, make_client):
        me = user_client.get("/api/auth/me").json()
        create_filament(user_client)
        resp = make_client().get(f"/api/public/filaments/{me['id']}")
        assert resp.status_code == 404
        assert resp.json()["message"] == "No public filaments found"

    def test_share_everything(self, user_client, make_client):
        me = user_client.get("/api/auth/me").json()
        create_filament(user_client, name="One", material="PLA")
        create_filament(user_client, name="Two", material="PETG")
        user_client.post("/api/user-sharing", json={"isPublic": True})

        resp = make_client().get(f"/api/public/filaments/{me['id']}")
        assert resp.status_code == 200
        data = resp.json()
        assert [f["name"] for f in data["filaments"]] == ["One", "Two"]
        assert data["user"] == {"id": me["id"], "username": "alice"}

    def test_share_one_material_matches_case_insensitively(self, admin_client, user_client, make_client):
        petg = _material(admin_client, "PETG")
        me = user_client.get("/api/auth/me").json()
        create_filament(user_client, name="Shown", material="petg")
        create_filament(user_client, name="Hidden", material="PLA")
        user_client.post("/api/user-sharing", json={"materialId": petg["id"], "isPublic": True})

        data = make_client().get(f"/api/public/filaments/{me['id']}").json()
        assert [f["name"] for f in data["filaments"]] == ["Shown"]

    def test_disabled_flags_are_not_public(self, user_client, make_client):
        me = user_client.get("/api/auth/me").json()
        create_filament(user_client)
        user_client.post("/api/user-sharing", json={"isPublic": True})
        user_client.post("/api/user-sharing", json={"isPublic": False})
        assert make_client().get(f"/api/public/filaments/{me['id']}").status_code == 404


# ---------------------------------------------------------------------------
# Sharing and single-filament access
# ---------------------------------------------------------------------------

class TestSharedAccess:

    def test_shared_filament_is_readable_by_others(self, admin_client, user_client):
        f = create_filament(admin_client)
        assert user_client.get(f"/api/filaments/{f['id']}").status_code == 403

        admin_client.post("/api/user-sharing", json={"isPublic": True})
        resp = user_client.get(f"/api/filaments/{f['id']}")
        assert resp.status_code == 200
        assert resp.json()["name"] == f["name"]

    def test_sharing_never_grants_writes(self, admin_client, user_client):
        f = create_filament(admin_client)
        admin_client.post("/api/user-sharing", json={"isPublic": True})
        assert user_client.patch(f"/api/filaments/{f['id']}", json={"name": "mine"}).status_code == 403
        assert user_client.delete(f"/api/filaments/{f['id']}").status_code == 403
