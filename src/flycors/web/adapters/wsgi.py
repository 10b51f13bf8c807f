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
"""WSGI middleware — CORS handling for servers that expose headers via the CGI environ."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from flycors.cors.config import CorsConfig
from flycors.cors.headers import to_environ_key
from flycors.cors.pipeline import CorsDecisionPipeline

StartResponse = Callable[..., Any]
WSGIApp = Callable[[dict[str, Any], StartResponse], Iterable[bytes]]
EnvironRouteResolver = Callable[[Mapping[str, Any]], str]


def path_info_route(environ: Mapping[str, Any]) -> str:
    """Default route resolver: ``PATH_INFO`` without surrounding slashes."""
    return str(environ.get("PATH_INFO", "")).strip("/")


class WSGICorsExchange:
    """Adapts a WSGI environ to the CORS pipeline's ports."""

    def __init__(self, environ: Mapping[str, Any], route_resolver: EnvironRouteResolver = path_info_route) -> None:
        self._environ = environ
        self._route_resolver = route_resolver
        self.headers: list[tuple[str, str]] = []
        self.terminated = False

    def current_route(self) -> str:
        return self._route_resolver(self._environ)

    def current_method(self) -> str:
        return str(self._environ.get("REQUEST_METHOD", "GET"))

    def get_header(self, name: str) -> str | None:
        return self._environ.get(to_environ_key(name))

    def write_headers(self, headers: Mapping[str, str]) -> None:
        self.headers.extend(headers.items())

    def terminate(self) -> None:
        self.terminated = True


class CorsWSGIMiddleware:
    """Wraps a WSGI application with CORS header emission.

    Allowed preflight requests are answered with ``200 OK`` and an empty
    body without calling the wrapped application.
    """

    def __init__(
        self,
        app: WSGIApp,
        config: CorsConfig,
        route_resolver: EnvironRouteResolver | None = None,
    ) -> None:
        self.app = app
        self._pipeline = CorsDecisionPipeline(config)
        self._route_resolver = route_resolver or path_info_route

    def __call__(self, environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
        exchange = WSGICorsExchange(environ, self._route_resolver)
        self._pipeline.process(exchange, exchange, exchange)

        if exchange.terminated:
            start_response("200 OK", [*exchange.headers, ("Content-Length", "0")])
            return [b""]

        if not exchange.headers:
            return self.app(environ, start_response)

        def _start_response(status: str, headers: list[tuple[str, str]], exc_info: Any = None) -> Any:
            return start_response(status, [*headers, *exchange.headers], exc_info)

        return self.app(environ, _start_response)
