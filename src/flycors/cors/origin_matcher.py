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
"""Origin resolution against the allowed-origin list.

The value echoed back is always the raw ``Origin`` header so the browser
sees its own scheme and port; the parsed host is used only for comparison.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlsplit

from flycors.cors.decision import NotApplicable
from flycors.cors.patterns import AnyOrigin, OriginSpec


def extract_host(origin: str) -> str | None:
    """Return the host of *origin*, or ``None`` when it has none."""
    try:
        host = urlsplit(origin).hostname
    except ValueError:
        return None
    return host or None


def _get_origin(request_headers: Mapping[str, str]) -> str | None:
    for name, value in request_headers.items():
        if name.lower() == "origin":
            return value
    return None


def resolve_origin(origin_spec: OriginSpec, request_headers: Mapping[str, str]) -> str | NotApplicable:
    """Resolve the value for ``Access-Control-Allow-Origin``.

    Patterns are tried in configured order.  A wildcard pattern that matches
    wins immediately.  The first literal hostname reached decides the outcome
    on its own: later patterns are never consulted, so in
    ``"plain.com,*.example.com"`` the wildcard entry is unreachable.
    """
    origin = _get_origin(request_headers)
    if origin is None:
        return NotApplicable("origin_missing")

    host = extract_host(origin)
    if host is None:
        return NotApplicable("origin_unparsable")

    if isinstance(origin_spec, AnyOrigin):
        return origin

    for pattern in origin_spec:
        if not pattern.is_wildcard:
            return origin if host == pattern.text else NotApplicable("origin_not_allowed")

        if pattern.bare == host or pattern.suffix.search(host):  # type: ignore[union-attr]
            return origin

    return NotApplicable("origin_not_allowed")
