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
"""CorsDecisionPipeline — decides, per request, which CORS headers to emit.

The route is checked first because it needs no header access; headers are
read only for eligible routes.  Every call is independent: the pipeline
holds nothing but its frozen :class:`CorsConfig`.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from flycors.cors.config import CorsConfig
from flycors.cors.decision import Allow, CorsDecision, NotApplicable
from flycors.cors.headers import RequestHeaders
from flycors.cors.origin_matcher import resolve_origin
from flycors.cors.patterns import OriginSpec
from flycors.cors.ports import HeaderProvider, ResponseTerminator, RouteProvider
from flycors.cors.route_matcher import is_route_allowed

logger = structlog.get_logger("flycors.cors")

PREFLIGHT_METHOD = "OPTIONS"


def evaluate(
    config: CorsConfig,
    current_route: str,
    request_headers: Mapping[str, str],
    method: str = "GET",
) -> CorsDecision:
    """Evaluate one request against *config*."""
    if config.allowed_origin is None:
        return NotApplicable("disabled")

    if not is_route_allowed(config.allowed_routes, current_route):
        logger.debug("cors_route_rejected", route=current_route)
        return NotApplicable("route_not_allowed")

    return _decide_for_allowed_route(config, config.allowed_origin, current_route, request_headers, method)


def _decide_for_allowed_route(
    config: CorsConfig,
    allowed_origin: OriginSpec,
    current_route: str,
    request_headers: Mapping[str, str],
    method: str,
) -> CorsDecision:
    """Resolve the origin for a route that already passed :func:`is_route_allowed`."""
    origin = resolve_origin(allowed_origin, request_headers)
    if isinstance(origin, NotApplicable):
        logger.debug("cors_origin_rejected", route=current_route, reason=origin.reason)
        return origin

    decision = Allow(
        origin=origin,
        allow_methods=config.allow_methods,
        allow_headers=config.allow_headers,
        terminate_after_headers=method.upper() == PREFLIGHT_METHOD,
    )
    logger.debug(
        "cors_allowed",
        route=current_route,
        origin=origin,
        preflight=decision.terminate_after_headers,
    )
    return decision


class CorsDecisionPipeline:
    """Runs :func:`evaluate` against a host framework through its capability ports."""

    def __init__(self, config: CorsConfig) -> None:
        self._config = config

    @property
    def config(self) -> CorsConfig:
        return self._config

    def evaluate(
        self,
        current_route: str,
        request_headers: Mapping[str, str],
        method: str = "GET",
    ) -> CorsDecision:
        return evaluate(self._config, current_route, request_headers, method)

    def process(
        self,
        routes: RouteProvider,
        headers: HeaderProvider,
        response: ResponseTerminator,
    ) -> CorsDecision:
        """Decide for the current request and apply the outcome to *response*.

        Headers are written for an :class:`Allow` decision; a preflight
        request is then terminated.  ``NotApplicable`` leaves the response
        untouched.
        """
        allowed_origin = self._config.allowed_origin
        if allowed_origin is None:
            return NotApplicable("disabled")

        route = routes.current_route()
        if not is_route_allowed(self._config.allowed_routes, route):
            logger.debug("cors_route_rejected", route=route)
            return NotApplicable("route_not_allowed")

        decision = _decide_for_allowed_route(
            self._config,
            allowed_origin,
            route,
            RequestHeaders.from_provider(headers),
            routes.current_method(),
        )
        if isinstance(decision, Allow):
            response.write_headers(decision.headers())
            if decision.terminate_after_headers:
                logger.debug("cors_preflight_terminated", route=route, origin=decision.origin)
                response.terminate()
        return decision
