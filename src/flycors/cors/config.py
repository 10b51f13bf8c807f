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
"""Validated, immutable CORS configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from flycors.cors.patterns import OriginSpec, RoutePatterns, RouteSpec, parse_origin_spec, parse_route_spec
from flycors.kernel.exceptions import InvalidConfigurationException

if TYPE_CHECKING:
    from flycors.config.properties.cors import CorsProperties

logger = structlog.get_logger("flycors.cors")


@dataclass(frozen=True)
class CorsConfig:
    """Configuration shared read-only by every request evaluation.

    ``allowed_origin=None`` disables CORS handling altogether.  Build it with
    :meth:`create` (or :meth:`from_properties`) so raw values are validated
    once, at startup.
    """

    allowed_origin: OriginSpec | None = None
    allowed_routes: RouteSpec = field(default_factory=RoutePatterns)
    allow_methods: str | None = None
    allow_headers: str | None = None

    @property
    def enabled(self) -> bool:
        return self.allowed_origin is not None

    @classmethod
    def create(
        cls,
        allowed_origin: object = None,
        allowed_routes: object = (),
        allow_methods: object = None,
        allow_headers: object = None,
    ) -> CorsConfig:
        """Validate raw setting values and build a config.

        Raises:
            InvalidConfigurationException: if any value has the wrong shape.
        """
        try:
            return cls(
                allowed_origin=None if allowed_origin is None else parse_origin_spec(allowed_origin),
                allowed_routes=parse_route_spec(allowed_routes),
                allow_methods=_optional_str("allow_methods", allow_methods),
                allow_headers=_optional_str("allow_headers", allow_headers),
            )
        except InvalidConfigurationException as exc:
            logger.warning("cors_config_rejected", code=exc.code, error=str(exc), **exc.context)
            raise

    @classmethod
    def from_properties(cls, props: CorsProperties) -> CorsConfig:
        return cls.create(
            allowed_origin=props.allowed_origin,
            allowed_routes=props.allowed_routes,
            allow_methods=props.allow_methods,
            allow_headers=props.allow_headers,
        )


def _optional_str(name: str, value: object) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise InvalidConfigurationException(
        f'The value of the "{name}" property must be a string.',
        code="CORS_INVALID_OVERRIDE",
        context={"type": type(value).__name__},
    )
