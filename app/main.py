from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infra.logging_config import LoggingConfig, get_logger
from app.routers import auth_router, messages_router


def create_app(testing: bool = False) -> FastAPI:
    settings = get_settings()
    LoggingConfig()
    logger = get_logger()

    app = FastAPI(title="Billing Gateway", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(auth_router.router)
    app.include_router(messages_router.router)

    if not testing:
        logger.info(
            "Billing Gateway starting on port %s, billing API %s",
            settings.port,
            settings.billing_api_url,
        )
    return app


app = create_app()
