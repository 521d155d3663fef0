"""
Tests for the serverless entry point in api/index.py
"""
import asyncio
import importlib.util
import json
import os

import plant_detector.main

INDEX_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "api", "index.py")


def _load_entry():
    spec = importlib.util.spec_from_file_location("vercel_index", INDEX_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _call(app, scope, messages=()):
    sent = []
    pending = list(messages)

    async def receive():
        return pending.pop(0)

    async def send(message):
        sent.append(message)

    asyncio.run(app(scope, receive, send))
    return sent


def test_entry_serves_real_app():
    entry = _load_entry()
    assert entry.startup_error is None
    assert entry.app is plant_detector.main.app


def test_fallback_reports_startup_error():
    entry = _load_entry()
    try:
        raise ImportError("No module named 'supabase'")
    except ImportError as e:
        error = entry.build_startup_error(e)

    sent = _call(entry.build_fallback_app(error), {"type": "http", "path": "/health"})

    assert sent[0]["status"] == 503
    body = json.loads(sent[1]["body"])
    assert body["service"] == "Plant Detector"
    assert body["type"] == "ImportError"
    assert "supabase" in body["error"]


def test_fallback_completes_lifespan():
    entry = _load_entry()
    app = entry.build_fallback_app({"error": "boom"})

    sent = _call(app, {"type": "lifespan"}, [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])

    assert [m["type"] for m in sent] == ["lifespan.startup.complete", "lifespan.shutdown.complete"]
