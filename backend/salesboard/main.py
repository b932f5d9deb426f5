from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salesboard.core.config import settings
from salesboard.core.logging_config import configure_logging
import salesboard.models  # noqa: F401  # force model registration

from salesboard.api.v1.auth import router as auth_router
from salesboard.api.v1.months import router as months_router
from salesboard.api.v1.stats import router as stats_router
from salesboard.api.v1.commission import router as commission_router
from salesboard.api.v1.store import router as store_router


def create_application() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Salesboard API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"status": "ok", "service": "salesboard"}

    # Routers
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(months_router, prefix="/api/v1")
    app.include_router(stats_router, prefix="/api/v1")
    app.include_router(commission_router, prefix="/api/v1")
    app.include_router(store_router, prefix="/api/v1")

    return app


app = create_application()
