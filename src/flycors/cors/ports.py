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
"""Outbound ports: the host framework capabilities the CORS pipeline needs.

Framework adapters (Starlette, WSGI, test fakes) implement these protocols;
the pipeline itself never touches a framework type.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class RouteProvider(Protocol):
    """Exposes what the host framework is dispatching."""

    def current_route(self) -> str:
        """The dispatched route in ``controllerID/actionID`` form."""
        ...

    def current_method(self) -> str:
        """The HTTP method of the current request."""
        ...


@runtime_checkable
class HeaderProvider(Protocol):
    """Case-insensitive read access to the incoming request headers."""

    def get_header(self, name: str) -> str | None: ...


@runtime_checkable
class ResponseTerminator(Protocol):
    """The collaborator owning the response.

    ``write_headers`` is called once for an allowed request; ``terminate``
    follows it for preflight requests and must end the response without
    running any further application logic.
    """

    def write_headers(self, headers: Mapping[str, str]) -> None: ...

    def terminate(self) -> None: ...
