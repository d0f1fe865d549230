"""
Main application entry point.
"""

import logging

from fastapi import Depends, FastAPI

from bookstore.api.error_handlers import register_error_handlers
from bookstore.api.v1 import schemas as api
from bookstore.api.v1.book_endpoints import router as books_router
from bookstore.api.v1.dependencies import get_book_repository
from bookstore.config import get_settings
from bookstore.domain.ports import BookRepository
from bookstore.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application with routes and error handlers wired."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="CRUD API for book records keyed by ISBN.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    register_error_handlers(app)
    app.include_router(books_router, tags=["books"])

    @app.get("/health", response_model=api.HealthResponse)
    def health_check(
        repo: BookRepository = Depends(get_book_repository),
    ) -> api.HealthResponse:
        """Report that the store answers, with the current book count."""
        return api.HealthResponse(status="ok", books=repo.count())

    logger.info(f"{settings.app_name} ready (database={settings.database_path})")
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bookstore.main:app", host="0.0.0.0", port=8000, reload=True)
