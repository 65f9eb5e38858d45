MODULE_ID = "organizations"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Users, login sessions, admin user management, and per-user theme"

ROUTES = [
    "organizations.routes",
    "organizations.routes_auth",
    "organizations.routes_users",
    "organizations.theme",
]

TABLES = [
    "users",
]

PUBLISHES = []

SUBSCRIBES = []

IMPLEMENTS = []

REQUIRES = []

DAEMONS = []


def register(app, registry) -> None:
    """Register the organizations module routes."""
    from modules.organizations import routes

    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")
