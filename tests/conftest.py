"""Pytest configuration and shared fixtures."""

import json

import pytest
from aiohttp import web


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Reset logging state before each test."""
    from ipwatch.logging import reset_logging

    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def lookup_app():
    """Build a lookup endpoint app from a list of canned responses.

    Each entry is (status, body). The last entry repeats once the list
    runs out. The returned app records how many requests it served in
    app["calls"].
    """

    def _make(responses):
        app = web.Application()
        app["calls"] = 0

        async def handler(request):
            idx = min(app["calls"], len(responses) - 1)
            app["calls"] += 1
            status, body = responses[idx]
            if isinstance(body, dict):
                return web.Response(
                    status=status,
                    text=json.dumps(body),
                    content_type="application/json",
                )
            return web.Response(status=status, text=body)

        app.router.add_get("/ip", handler)
        return app

    return _make
