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
"""CORS configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from flycors.core.config import config_properties


@config_properties(prefix="flycors.cors")
@dataclass
class CorsProperties:
    """Raw CORS settings (flycors.cors.*), validated by ``CorsConfig.from_properties``.

    ``allowed_origin`` left unset disables the component entirely.
    ``allowed_routes`` is either ``"*"`` or a list of ``controller/action``
    routes, where a trailing ``*`` turns an entry into a prefix pattern.
    """

    allowed_origin: str | None = None
    allowed_routes: str | list[str] = field(default_factory=list)
    allow_methods: str | None = None
    allow_headers: str | None = None
