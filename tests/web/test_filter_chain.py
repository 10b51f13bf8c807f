# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for WebFilterChainMiddleware — ordering, short-circuit, conditional skip."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from flycors.container.ordering import HIGHEST_PRECEDENCE, get_order, order
from flycors.cors.config import CorsConfig
from flycors.web.adapters.starlette.app import create_app
from flycors.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flycors.web.adapters.starlette.filters import CorsFilter
from flycors.web.filters import OncePerRequestFilter

# ---------------------------------------------------------------------------
# Test filters
# ---------------------------------------------------------------------------


@order(HIGHEST_PRECEDENCE + 10)
class OuterFilter(OncePerRequestFilter):
    """Records the Access-Control-Allow-Origin it sees on the way out."""

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Outer-Saw-Cors"] = response.headers.get("Access-Control-Allow-Origin", "none")
        return response


@order(HIGHEST_PRECEDENCE + 1000)
class InnerFilter(OncePerRequestFilter):
    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Inner"] = "applied"
        return response


@order(5)
class ApiOnlyFilter(OncePerRequestFilter):
    url_patterns = ["/api/*"]
    exclude_patterns = ["/api/health"]

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Api-Filter"] = "applied"
        return response


@order(10)
class ShortCircuitFilter(OncePerRequestFilter):
    async def do_filter(self, request, call_next):
        return JSONResponse({"error": "rate limited"}, status_code=429)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _ok_handler(request: Request) -> PlainTextResponse:
    return PlainTextResponse("OK")


ROUTES = [
    Route("/test", _ok_handler, methods=["GET", "OPTIONS"]),
    Route("/api/data", _ok_handler),
    Route("/api/health", _ok_handler),
]


def _make_app(*filters) -> Starlette:
    return Starlette(
        routes=ROUTES,
        middleware=[Middleware(WebFilterChainMiddleware, filters=list(filters))],
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestFilterChainOrdering:
    def test_order_constants(self):
        assert get_order(OuterFilter) < get_order(CorsFilter) < get_order(InnerFilter)

    def test_filters_sorted_regardless_of_registration_order(self):
        cors = CorsFilter(CorsConfig.create(allowed_origin="*", allowed_routes="*"))
        client = TestClient(_make_app(InnerFilter(), cors, OuterFilter()))
        resp = client.get("/test", headers={"Origin": "https://a.io"})
        assert resp.headers["X-Outer-Saw-Cors"] == "https://a.io"
        assert resp.headers["X-Inner"] == "applied"

    def test_preflight_skips_inner_filters(self):
        cors = CorsFilter(CorsConfig.create(allowed_origin="*", allowed_routes="*"))
        client = TestClient(_make_app(InnerFilter(), cors, OuterFilter()))
        resp = client.options("/test", headers={"Origin": "https://a.io"})
        assert resp.status_code == 200
        assert "X-Inner" not in resp.headers
        assert resp.headers["X-Outer-Saw-Cors"] == "https://a.io"


class TestFilterChainConditionalSkip:
    def test_url_pattern_filter_applies_to_matching_path(self):
        resp = TestClient(_make_app(ApiOnlyFilter())).get("/api/data")
        assert resp.headers.get("X-Api-Filter") == "applied"

    def test_url_pattern_filter_skipped_for_non_matching_path(self):
        resp = TestClient(_make_app(ApiOnlyFilter())).get("/test")
        assert "X-Api-Filter" not in resp.headers

    def test_excluded_path_skipped(self):
        resp = TestClient(_make_app(ApiOnlyFilter())).get("/api/health")
        assert "X-Api-Filter" not in resp.headers


class TestFilterChainShortCircuit:
    def test_short_circuit_returns_early(self):
        resp = TestClient(_make_app(ShortCircuitFilter())).get("/test")
        assert resp.status_code == 429
        assert resp.json() == {"error": "rate limited"}


class TestFilterChainEmpty:
    def test_no_filters_passes_through(self):
        resp = TestClient(_make_app()).get("/test")
        assert resp.status_code == 200
        assert resp.text == "OK"


class TestCreateAppExtraFilters:
    def test_user_filters_run_with_cors(self):
        app = create_app(
            routes=ROUTES,
            cors=CorsConfig.create(allowed_origin="a.io", allowed_routes=["test"]),
            filters=[OuterFilter()],
        )
        resp = TestClient(app).get("/test", headers={"Origin": "https://a.io"})
        assert resp.headers["X-Outer-Saw-Cors"] == "https://a.io"

    def test_filter_chain_runs_for_unknown_paths(self):
        app = create_app(
            routes=ROUTES,
            cors=CorsConfig.create(allowed_origin="*", allowed_routes="*"),
        )
        resp = TestClient(app).get("/missing", headers={"Origin": "https://a.io"})
        assert resp.status_code == 404
        assert resp.headers["access-control-allow-origin"] == "https://a.io"
