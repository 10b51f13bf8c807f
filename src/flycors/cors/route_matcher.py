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
"""Route eligibility check for CORS treatment."""

from __future__ import annotations

from flycors.cors.patterns import WILDCARD, AnyRoute, RouteSpec


def is_route_allowed(route_spec: RouteSpec, current_route: str) -> bool:
    """Return ``True`` if CORS headers may be emitted for *current_route*.

    Routes are compared verbatim (``controllerID/actionID``), no case folding
    and no slash trimming.  An entry ending in ``*`` matches every route whose
    leading characters equal the entry minus that final ``*``; ``"site/*"``
    matches ``"site/index"`` but not ``"site"``.
    """
    if isinstance(route_spec, AnyRoute):
        return True

    if current_route in route_spec:
        return True

    for pattern in route_spec:
        if not pattern.endswith(WILDCARD):
            continue
        prefix = pattern[:-1]
        if current_route[: len(prefix)] == prefix and len(current_route) >= len(prefix):
            return True
    return False
