"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from sqlalchemy.orm import sessionmaker

from app.api import router as api_router
from app.api.middleware import AccessControlMiddleware
from app.core.config import Settings, get_settings
from app.core.database import SessionLocal, init_db
from app.services.access_decision import build_access_policy
from app.services.identity_store import IdentityStore
from app.services.seed import seed_demo_data

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def _bootstrap(app: FastAPI) -> None:
    settings: Settings = app.state.settings
    session_factory: sessionmaker = app.state.session_factory
    if settings.AUTO_CREATE_SCHEMA:
        init_db(session_factory.kw["bind"])
    if settings.SEED_DEMO_DATA:
        db = session_factory()
        try:
            seed_demo_data(IdentityStore(db))
        finally:
            db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    _bootstrap(app)
    logger.info(
        "Access policy loaded: rules=%s public_paths=%s",
        len(app.state.access_policy.rules),
        len(app.state.access_policy.public_paths),
    )
    yield


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker | None = None,
) -> FastAPI:
    """
    Build the application. The access policy is validated here, so a misordered
    rule list fails at startup with AccessPolicyError.
    """
    settings = settings or get_settings()
    policy = build_access_policy(settings)

    app = FastAPI(
        title="Gradebook Access API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory or SessionLocal
    app.state.access_policy = policy

    app.add_middleware(AccessControlMiddleware, policy=policy)
    app.include_router(api_router)

    @app.get("/")
    def root() -> dict[str, str]:
        """Home page; public."""
        return {"message": "Gradebook Access API"}

    return app


app = create_app()
