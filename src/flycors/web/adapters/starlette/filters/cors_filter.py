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
"""CORS filter — adds Access-Control-* headers for allowed routes and origins."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import cast

from starlette.requests import Request
from starlette.responses import Response

from flycors.container.ordering import HIGHEST_PRECEDENCE, order
from flycors.cors.config import CorsConfig
from flycors.cors.pipeline import CorsDecisionPipeline
from flycors.web.filters import OncePerRequestFilter
from flycors.web.ports.filter import CallNext

RouteResolver = Callable[[Request], str]


def path_route(request: Request) -> str:
    """Default route resolver: ``/site/index/`` -> ``site/index``."""
    return request.url.path.strip("/")


class StarletteCorsExchange:
    """Adapts one Starlette request to the CORS pipeline's ports.

    Implements ``RouteProvider``, ``HeaderProvider`` and
    ``ResponseTerminator``; written headers are buffered until the filter
    knows which response they belong to.
    """

    def __init__(self, request: Request, route_resolver: RouteResolver = path_route) -> None:
        self._request = request
        self._route_resolver = route_resolver
        self.headers: dict[str, str] = {}
        self.terminated = False

    def current_route(self) -> str:
        return self._route_resolver(self._request)

    def current_method(self) -> str:
        return self._request.method

    def get_header(self, name: str) -> str | None:
        return self._request.headers.get(name)

    def write_headers(self, headers: Mapping[str, str]) -> None:
        self.headers.update(headers)

    def terminate(self) -> None:
        self.terminated = True


@order(HIGHEST_PRECEDENCE + 100)
class CorsFilter(OncePerRequestFilter):
    """Emits CORS headers decided by :class:`CorsDecisionPipeline`.

    Preflight (``OPTIONS``) requests that resolve to an allowed origin are
    answered here with an empty ``200`` and never reach the route handler.
    """

    def __init__(self, config: CorsConfig, route_resolver: RouteResolver | None = None) -> None:
        self._pipeline = CorsDecisionPipeline(config)
        self._route_resolver = route_resolver or path_route

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        exchange = StarletteCorsExchange(request, self._route_resolver)
        self._pipeline.process(exchange, exchange, exchange)

        if exchange.terminated:
            return Response(status_code=200, headers=exchange.headers)

        response = cast(Response, await call_next(request))
        for name, value in exchange.headers.items():
            response.headers[name] = value
        return response
