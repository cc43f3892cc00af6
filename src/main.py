import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from api.api_v1.api import api_router
from core.config import settings
from core.db import init_db
from core.errors import VaultError
from log import setup_logging_to_console, setup_logging_to_seq

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=None if settings.is_production else f"{settings.API_V1_STR}/openapi.json",
)

# Set all CORS enabled origins
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(VaultError)
async def vault_exception_handler(request: Request, exc: VaultError):
    return JSONResponse(
        status_code=exc.http_status,
        content={
            "error": "vault",
            "vault": {
                "error_code": exc.error_code,
                "error_message": exc.error_message,
            },
        },
    )


@app.exception_handler(Exception)
async def exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": str(exc)},
    )


app.include_router(api_router, prefix=settings.API_V1_STR)


if __name__ == "__main__":
    setup_logging_to_console(level=logging.INFO)
    setup_logging_to_seq(level=logging.INFO)
    init_db()
    uvicorn.run(app, host="0.0.0.0", port=8001)
