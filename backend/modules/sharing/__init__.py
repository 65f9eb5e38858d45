MODULE_ID = "sharing"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Per-material public sharing flags and the public inventory view"

ROUTES = [
    "sharing.routes",
]

TABLES = [
    "user_sharing",
]

PUBLISHES = []

SUBSCRIBES = []

IMPLEMENTS = ["SharingPolicyProvider"]

REQUIRES = []

DAEMONS = []


def register(app, registry) -> None:
    """Register the sharing module: routes and SharingPolicyProvider."""
    from modules.sharing import routes
    from modules.sharing.services import sharing_policy

    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")

    registry.register_provider("SharingPolicyProvider", sharing_policy)
