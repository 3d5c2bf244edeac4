import logging
import os
import traceback

from fastapi import Request
from fastapi.responses import JSONResponse

from pricing_engine import InvalidConfiguration


def setup(app):
    log = logging.getLogger("uvicorn.error")

    @app.exception_handler(InvalidConfiguration)
    async def _invalid_configuration(request: Request, exc: InvalidConfiguration):
        log.warning("Rejected configuration on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "error": "invalid_configuration"},
        )

    # catch-all with tracebacks only when DEBUG_ERRORS=1
    if os.getenv("DEBUG_ERRORS", "0") != "1":
        return

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        log.error("Unhandled error on %s %s\n%s", request.method, request.url.path, tb)
        return JSONResponse(status_code=500, content={"detail": str(exc), "trace": tb})
