MODULE_ID = "inventory"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Filament inventory: CRUD, batch edits, and CSV/JSON import and export"

ROUTES = [
    "inventory.routes",
]

TABLES = [
    "filaments",
]

PUBLISHES = []

SUBSCRIBES = []

IMPLEMENTS = ["FilamentQueryProvider"]

REQUIRES = ["SharingPolicyProvider"]

DAEMONS = []


def register(app, registry) -> None:
    """Register the inventory module: routes and FilamentQueryProvider."""
    from modules.inventory import routes
    from modules.inventory.services import FilamentQueryService

    app.include_router(routes.router, prefix="/api")
    app.include_router(routes.router, prefix="/api/v1")

    registry.register_provider("FilamentQueryProvider", FilamentQueryService())
