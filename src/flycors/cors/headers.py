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
"""Request-scoped view of the CORS-relevant request headers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from flycors.cors.ports import HeaderProvider

CORS_REQUEST_HEADERS: tuple[str, ...] = (
    "Origin",
    "Access-Control-Request-Method",
    "Access-Control-Request-Headers",
)


def to_environ_key(name: str) -> str:
    """Convert a header name to its CGI/WSGI environ key.

    Example:
        - X-Pingother -> HTTP_X_PINGOTHER
        - X PINGOTHER -> HTTP_X_PINGOTHER
    """
    return "HTTP_" + name.upper().replace(" ", "_").replace("-", "_")


class RequestHeaders(Mapping[str, str]):
    """Read-only, case-insensitive mapping of the CORS request headers.

    Only names in :data:`CORS_REQUEST_HEADERS` are kept, and absent headers
    are missing keys (never ``None`` values).
    """

    def __init__(self, headers: Mapping[str, str] | None = None) -> None:
        wanted = {name.lower(): name for name in CORS_REQUEST_HEADERS}
        self._headers: dict[str, str] = {}
        for name, value in (headers or {}).items():
            canonical = wanted.get(name.lower())
            if canonical is not None and value is not None:
                self._headers[canonical] = value

    @classmethod
    def from_provider(cls, provider: HeaderProvider) -> RequestHeaders:
        found: dict[str, str] = {}
        for name in CORS_REQUEST_HEADERS:
            value = provider.get_header(name)
            if value is not None:
                found[name] = value
        return cls(found)

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> RequestHeaders:
        """Build from a WSGI/CGI environ (``HTTP_ORIGIN`` and friends)."""
        found: dict[str, str] = {}
        for name in CORS_REQUEST_HEADERS:
            value = environ.get(to_environ_key(name))
            if value is not None:
                found[name] = value
        return cls(found)

    def __getitem__(self, name: str) -> str:
        for key, value in self._headers.items():
            if key.lower() == name.lower():
                return value
        raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"RequestHeaders({self._headers!r})"
