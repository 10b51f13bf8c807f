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
"""Starlette application factory with the flycors filter chain."""

from __future__ import annotations

from collections.abc import Sequence

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from flycors.config.properties.cors import CorsProperties
from flycors.core.config import Config
from flycors.cors.config import CorsConfig
from flycors.logging.port import LoggingPort
from flycors.logging.structlog_adapter import StructlogAdapter
from flycors.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flycors.web.adapters.starlette.filters.cors_filter import CorsFilter, RouteResolver
from flycors.web.ports.filter import WebFilter


def create_app(
    routes: Sequence[BaseRoute] | None = None,
    cors: CorsConfig | None = None,
    filters: Sequence[WebFilter] | None = None,
    route_resolver: RouteResolver | None = None,
    debug: bool = False,
    config: Config | None = None,
    logging_adapter: LoggingPort | None = None,
) -> Starlette:
    """Create a Starlette application wrapped in a ``WebFilterChainMiddleware``.

    Includes:
    - ``CorsFilter`` (when *cors* is provided and enabled)
    - caller-supplied filters, merged and sorted by ``@order``

    When *config* is given, logging is configured from ``flycors.logging.*``
    (through *logging_adapter*, a ``StructlogAdapter`` by default) and, if
    *cors* is omitted, the CORS settings are bound from ``flycors.cors.*``.
    """
    if config is not None:
        (logging_adapter or StructlogAdapter()).configure(config)
        if cors is None:
            cors = CorsConfig.from_properties(config.bind(CorsProperties))

    chain: list[WebFilter] = []
    if cors is not None and cors.enabled:
        chain.append(CorsFilter(cors, route_resolver=route_resolver))
    if filters:
        chain.extend(filters)

    return Starlette(
        debug=debug,
        routes=list(routes or []),
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
    )
