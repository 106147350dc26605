import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import config
from db import Base, make_session_factory
from errors import MarketplaceError, Unauthorized
from auth import router as auth_router
from courses import router as courses_router
from purchases import router as purchases_router

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Create and configure the marketplace application"""
    config_name = config_name or os.getenv('APP_ENV', 'default')
    app_config = config[config_name]

    logging.basicConfig(
        level=app_config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Course Marketplace")
    app.state.config = app_config

    # --- База ---
    engine, session_factory = make_session_factory(app_config.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    app.state.engine = engine
    app.state.session_factory = session_factory

    # --- Ошибки ---
    @app.exception_handler(MarketplaceError)
    def marketplace_error(request: Request, exc: MarketplaceError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
        return JSONResponse({"message": exc.message}, status_code=exc.status_code, headers=headers)

    @app.exception_handler(SQLAlchemyError)
    def storage_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Storage failure on %s %s", request.method, request.url.path)
        return JSONResponse(
            {"message": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # --- Роуты ---
    app.include_router(auth_router)
    app.include_router(courses_router)
    app.include_router(purchases_router)

    logger.info("Course marketplace started (%s)", config_name)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
