"""
App setup, middleware, lifespan
"""

import logging
from http import HTTPStatus
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import RelayException
from core.startup import initialize_relay_system, cleanup_relay_system
from api.routes import chat, root

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic"""
    await initialize_relay_system(app)
    try:
        yield
    finally:
        # shutdown
        await cleanup_relay_system(app)


app = FastAPI(title="Chat Relay API", lifespan=lifespan)


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


def _error_response(status_code: int, error: str, message: str, headers=None, model: str = None) -> JSONResponse:
    content = {"error": error, "message": message}
    if model is not None:
        content["model"] = model
    return JSONResponse(status_code=status_code, content=content, headers=headers)


@app.exception_handler(RelayException)
async def relay_exception_handler(request: Request, exc: RelayException):
    if exc.status_code >= 500:
        logger.error(f"{exc.error}: {exc.message}")
    return _error_response(exc.status_code, exc.error, exc.message, model=exc.model)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    try:
        error = HTTPStatus(exc.status_code).phrase.capitalize()
    except ValueError:
        error = "HTTP error"
    return _error_response(exc.status_code, error, str(exc.detail), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _error_response(400, "Bad request", str(exc.errors()))


# Include routes
app.include_router(root.router)
app.include_router(chat.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
