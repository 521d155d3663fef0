"""Vercel entry point for Plant Detector.

If the package fails to import (missing env, bad dependency build), every
request gets a 503 JSON body naming the failure instead of a blank 500.
"""
import json
import logging
import sys
import traceback

logger = logging.getLogger(__name__)

SERVICE_NAME = "Plant Detector"


def build_startup_error(exc: BaseException) -> dict:
    return {
        "status": "unavailable",
        "service": SERVICE_NAME,
        "error": str(exc),
        "type": type(exc).__name__,
        "traceback": traceback.format_exc(),
        "python_version": sys.version,
    }


def build_fallback_app(startup_error: dict):
    """Minimal ASGI app that reports ``startup_error`` on every request."""
    body = json.dumps(startup_error, ensure_ascii=False).encode("utf-8")

    async def fallback_app(scope, receive, send):
        if scope["type"] == "lifespan":
            while True:
                message = await receive()
                if message["type"] == "lifespan.startup":
                    await send({"type": "lifespan.startup.complete"})
                elif message["type"] == "lifespan.shutdown":
                    await send({"type": "lifespan.shutdown.complete"})
                    return
        elif scope["type"] == "http":
            await send({
                "type": "http.response.start",
                "status": 503,
                "headers": [
                    [b"content-type", b"application/json; charset=utf-8"],
                ],
            })
            await send({
                "type": "http.response.body",
                "body": body,
            })

    return fallback_app


startup_error = None

try:
    from plant_detector.main import app
except Exception as e:
    logger.error(f"{SERVICE_NAME} failed to start: {e}", exc_info=True)
    startup_error = build_startup_error(e)
    app = build_fallback_app(startup_error)
