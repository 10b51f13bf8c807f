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
"""Outcome of a single CORS evaluation."""

from __future__ import annotations

from dataclasses import dataclass

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"


@dataclass(frozen=True)
class NotApplicable:
    """No CORS headers are emitted; the request proceeds untouched."""

    reason: str = ""


@dataclass(frozen=True)
class Allow:
    """Emit CORS headers for the resolved origin."""

    origin: str
    allow_methods: str | None = None
    allow_headers: str | None = None
    terminate_after_headers: bool = False

    def headers(self) -> dict[str, str]:
        """Response headers to write, overrides only when configured."""
        headers = {ALLOW_ORIGIN: self.origin}
        if self.allow_methods is not None:
            headers[ALLOW_METHODS] = self.allow_methods
        if self.allow_headers is not None:
            headers[ALLOW_HEADERS] = self.allow_headers
        return headers


CorsDecision = Allow | NotApplicable
