"""
Shared test helpers for the Filadex test suite.

Consolidates login and fixture-data helpers used across test files.
"""

from types import SimpleNamespace


def login(client, username, password):
    """POST /api/auth/login. On success the client's cookie jar holds the session."""
    return client.post("/api/auth/login", json={"username": username, "password": password})


def create_user(admin_client, username, password="secret-pass", is_admin=False):
    """Create a user through the admin API and return its JSON."""
    resp = admin_client.post("/api/users", json={
        "username": username,
        "password": password,
        "isAdmin": is_admin,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_filament(client, **overrides):
    """Create a filament for the client's user and return its JSON."""
    body = {
        "name": "PLA Basic Black",
        "manufacturer": "Bambu Lab",
        "material": "PLA",
        "colorName": "Black",
        "colorCode": "#000000",
        "diameter": "1.75",
        "totalWeight": "1",
        "remainingPercentage": "100",
    }
    body.update(overrides)
    resp = client.post("/api/filaments", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def spool(**fields):
    """Attribute-style stand-in for a Filament row, for pure statistics tests."""
    defaults = {
        "name": "Spool",
        "material": "PLA",
        "color_name": "Black",
        "total_weight": 1.0,
        "remaining_percentage": 100,
        "purchase_price": None,
        "purchase_date": None,
    }
    defaults.update(fields)
    return SimpleNamespace(**defaults)
