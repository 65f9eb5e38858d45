# core/app.py: App factory with dynamic module discovery
#
# Creates and configures the FastAPI application. Discovers all modules under
# backend/modules/, resolves load order from REQUIRES/IMPLEMENTS declarations,
# and calls each module's register(app, registry) function.
#
# main.py is just: from core.app import create_app; app = create_app()

import importlib
import logging
import pathlib
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.errors import FiladexError, InternalError
from core.schemas import HealthCheck

log = logging.getLogger("filadex.api")

# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

_version_file = pathlib.Path(__file__).parent.parent.parent / "VERSION"
if _version_file.exists():
    __version__ = _version_file.read_text().strip()
else:
    __version__ = "1.0.0"


# ---------------------------------------------------------------------------
# Module discovery helpers
# ---------------------------------------------------------------------------

def _discover_modules() -> list[str]:
    """Return a list of module package names found under backend/modules/.

    A valid module directory contains an __init__.py with a MODULE_ID attribute.
    """
    modules_dir = pathlib.Path(__file__).parent.parent / "modules"
    found = []
    for entry in sorted(modules_dir.iterdir()):
        if not entry.is_dir():
            continue
        if not (entry / "__init__.py").exists():
            continue
        pkg_name = f"modules.{entry.name}"
        try:
            mod = importlib.import_module(pkg_name)
        except ImportError as exc:
            log.warning(f"Module discovery: skipping {pkg_name!r}: {exc}")
            continue
        if hasattr(mod, "MODULE_ID"):
            found.append(pkg_name)
    return found


def _resolve_load_order(pkg_names: list[str]) -> list[str]:
    """Topologically sort modules so that providers load before their consumers.

    Interfaces named in IMPLEMENTS map to their providing package; each REQUIRES
    entry becomes an edge to that provider. Kahn's algorithm orders the graph,
    alphabetical among peers. Modules caught in a cycle are appended in
    discovery order with a warning.
    """
    mods: dict[str, dict] = {}
    for pkg in pkg_names:
        m = importlib.import_module(pkg)
        mods[pkg] = {
            "implements": getattr(m, "IMPLEMENTS", []),
            "requires": getattr(m, "REQUIRES", []),
        }

    providers: dict[str, str] = {}
    for pkg, info in mods.items():
        for iface in info["implements"]:
            providers[iface] = pkg

    edges: dict[str, set[str]] = {pkg: set() for pkg in pkg_names}
    for pkg, info in mods.items():
        for iface in info["requires"]:
            provider_pkg = providers.get(iface)
            if provider_pkg and provider_pkg != pkg:
                edges[pkg].add(provider_pkg)

    in_degree: dict[str, int] = {pkg: len(deps) for pkg, deps in edges.items()}
    queue = sorted(pkg for pkg in pkg_names if in_degree[pkg] == 0)
    ordered: list[str] = []

    while queue:
        pkg = queue.pop(0)
        ordered.append(pkg)
        for other_pkg, deps in edges.items():
            if pkg in deps:
                in_degree[other_pkg] -= 1
                if in_degree[other_pkg] == 0:
                    queue.append(other_pkg)
                    queue.sort()

    remaining = [pkg for pkg in pkg_names if pkg not in ordered]
    if remaining:
        log.warning(
            f"Module load order: circular or unresolvable dependencies for "
            f"{remaining}, appending in discovery order."
        )
        ordered.extend(remaining)

    return ordered


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------

def _register_exception_handlers(app: FastAPI) -> None:
    """Render domain errors, request validation errors and crashes as {message, detail}."""

    @app.exception_handler(FiladexError)
    async def _filadex_error(request: Request, exc: FiladexError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail, "detail": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
            message = f"{field}: {first.get('msg')}" if field else first.get("msg")
        else:
            message = "Invalid input"
        return JSONResponse(
            status_code=400,
            content={"message": message, "detail": message, "errors": jsonable_encoder(errors)},
        )

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        log.exception(f"Unhandled error on {request.method} {request.url.path}")
        err = InternalError()
        return JSONResponse(
            status_code=err.status_code,
            content={"message": err.detail, "detail": err.detail},
        )


# ---------------------------------------------------------------------------
# Middleware setup
# ---------------------------------------------------------------------------

def _setup_middleware(app: FastAPI) -> None:
    """Attach CORS and rate limiting to the app."""
    from core.config import settings
    from core.rate_limit import limiter
    from slowapi import _rate_limit_exceeded_handler
    from slowapi.errors import RateLimitExceeded

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    _cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if "*" in _cors_origins:
        log.warning(
            "CORS origin '*' is incompatible with allow_credentials=True, "
            "falling back to empty origins list. Set explicit origins in CORS_ORIGINS."
        )
        _cors_origins = []

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )


def _register_http_middleware(app: FastAPI) -> None:
    """Register the security-headers middleware."""

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.scheme == "https" or request.headers.get("x-forwarded-proto") == "https":
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains"
        return response


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app() -> FastAPI:
    """Create and fully configure the Filadex FastAPI application.

    1. Configure logging from LOG_LEVEL.
    2. Discover modules under backend/modules/ and resolve their load order.
    3. Create the FastAPI instance with a lifespan that creates tables,
       validates module dependencies and seeds first-boot data.
    4. Attach middleware, exception handlers and /health.
    5. Call each module's register(app, registry).
    """
    from core.config import settings
    from core.db import engine, Base, SessionLocal
    from core.registry import registry

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    )

    pkg_names = _discover_modules()
    ordered_pkgs = _resolve_load_order(pkg_names)

    log.info(f"Module load order: {[p.split('.')[-1] for p in ordered_pkgs]}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from modules.organizations.services import seed_default_admin
        from modules.catalog.services import seed_reference_data

        Base.metadata.create_all(bind=engine)
        registry.validate_dependencies()

        db = SessionLocal()
        try:
            seed_default_admin(db)
            if settings.seed_reference_data:
                seed_reference_data(db)
        finally:
            db.close()
        yield

    app = FastAPI(
        title="Filadex",
        description="3D-printing filament inventory manager",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
    )

    _setup_middleware(app)
    _register_http_middleware(app)
    _register_exception_handlers(app)

    @app.get("/health", tags=["System"], response_model=HealthCheck, include_in_schema=False)
    async def health_root():
        return HealthCheck(version=__version__)

    for pkg in ordered_pkgs:
        mod = importlib.import_module(pkg)
        registry.record_requires(
            getattr(mod, "MODULE_ID", pkg),
            getattr(mod, "REQUIRES", []),
        )
        if hasattr(mod, "register"):
            mod.register(app, registry)
            log.debug(f"Registered module: {pkg}")

    return app
