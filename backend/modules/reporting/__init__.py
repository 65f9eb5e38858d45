MODULE_ID = "reporting"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Dashboard statistics over the filament inventory"

ROUTES = [
    "reporting.routes",
]

TABLES = []

PUBLISHES = []

SUBSCRIBES = []

IMPLEMENTS = []

REQUIRES = ["FilamentQueryProvider"]

DAEMONS = []


def register(app, registry) -> None:
    """Register the reporting module routes."""
    from modules.reporting import routes

    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")
