from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend_fastapi.api.deps import settings
from backend_fastapi.api.errors import register_exception_handlers
from backend_fastapi.api.routes.tasks import router as tasks_router
from backend_fastapi.api.schemas import HealthResponse
from infrastructure.config import Settings, get_settings
from infrastructure.logging_setup import setup_logging


def create_app(config: Settings | None = None) -> FastAPI:
    config = config or get_settings()
    setup_logging(config.log_level)

    app = FastAPI(title="Task Tracker API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=config.cors_allow_credentials,
        allow_methods=list(config.cors_allow_methods),
        allow_headers=list(config.cors_allow_headers),
    )

    register_exception_handlers(app)
    app.include_router(tasks_router)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health(current: Settings = Depends(settings)) -> HealthResponse:
        return HealthResponse(storage=current.storage)

    return app


app = create_app()
