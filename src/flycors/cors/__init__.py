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
"""flycors CORS — route/origin matching and the per-request decision pipeline."""

from flycors.cors.config import CorsConfig
from flycors.cors.decision import Allow, CorsDecision, NotApplicable
from flycors.cors.headers import CORS_REQUEST_HEADERS, RequestHeaders, to_environ_key
from flycors.cors.origin_matcher import resolve_origin
from flycors.cors.patterns import (
    ANY_ORIGIN,
    ANY_ROUTE,
    AnyOrigin,
    AnyRoute,
    OriginPattern,
    OriginPatterns,
    OriginSpec,
    RoutePatterns,
    RouteSpec,
    parse_origin_spec,
    parse_route_spec,
)
from flycors.cors.pipeline import CorsDecisionPipeline, evaluate
from flycors.cors.ports import HeaderProvider, ResponseTerminator, RouteProvider
from flycors.cors.route_matcher import is_route_allowed

__all__ = [
    "ANY_ORIGIN",
    "ANY_ROUTE",
    "Allow",
    "AnyOrigin",
    "AnyRoute",
    "CORS_REQUEST_HEADERS",
    "CorsConfig",
    "CorsDecision",
    "CorsDecisionPipeline",
    "HeaderProvider",
    "NotApplicable",
    "OriginPattern",
    "OriginPatterns",
    "OriginSpec",
    "RequestHeaders",
    "ResponseTerminator",
    "RouteProvider",
    "RoutePatterns",
    "RouteSpec",
    "evaluate",
    "is_route_allowed",
    "parse_origin_spec",
    "parse_route_spec",
    "resolve_origin",
    "to_environ_key",
]
