import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from sommelier import config
from sommelier.api import router
from sommelier.exceptions import InvalidRequestError, SommelierError, UpstreamError
from sommelier.models.brand import BrandConfig, DEFAULT_BRAND
from sommelier.services.catalog import WineCatalog, load_wine_catalog
from sommelier.services.llm import GeminiService, LLMService
from sommelier.services.projection import FieldSet
from sommelier.services.sommelier import AISommelier

logger = logging.getLogger(__name__)


async def handle_sommelier_error(request: Request, exc: SommelierError) -> JSONResponse:
    """Translate domain errors into ``{"error": message}`` responses."""
    if isinstance(exc, UpstreamError):
        logger.error(
            f"Error in {request.method} {request.url.path}: {exc.detail}",
            exc_info=exc,
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unreadable bodies (bad JSON, wrong shape) are reported as a plain 400."""
    logger.info(f"{request.method} {request.url.path} -> 400: {exc.errors()}")
    error = InvalidRequestError()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error in {request.method} {request.url.path}: {exc}", exc_info=exc)
    error = SommelierError()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


def create_app(
    catalog: Optional[WineCatalog] = None,
    llm: Optional[LLMService] = None,
    brand: BrandConfig = DEFAULT_BRAND,
    catalog_fields: Optional[FieldSet] = None,
    static_dir: Optional[str] = config.STATIC_DIR,
) -> FastAPI:
    """Build the application with its catalog and LLM service injected.

    Anything not passed in is built from the environment configuration.
    """
    catalog = catalog if catalog is not None else load_wine_catalog(config.CATALOG_FILE)
    llm = llm if llm is not None else GeminiService()
    catalog_fields = catalog_fields or FieldSet.from_name(config.CATALOG_FIELDS)

    app = FastAPI(title="AI Sommelier", version="0.1.0")
    app.state.catalog = catalog
    app.state.sommelier = AISommelier(
        catalog=catalog,
        llm=llm,
        brand=brand,
        catalog_fields=catalog_fields,
        max_output_tokens=config.MAX_OUTPUT_TOKENS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SommelierError, handle_sommelier_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.include_router(router)

    # Mounted last so API routes take precedence
    if static_dir and os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    elif static_dir:
        logger.info(f"Static directory {static_dir} not found; serving API only.")

    logger.info(f"AI Sommelier ready with {len(catalog)} wines for {brand.winery_name}")
    return app


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = create_app()
    logger.info(f"AI Sommelier server running on http://localhost:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
