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
"""Origin and route allow-lists as tagged variants.

Raw configuration values are parsed once, at startup, into either the
"any" sentinel or an ordered tuple of patterns.  Matching code never has
to type-check configuration again.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from flycors.kernel.exceptions import InvalidConfigurationException

WILDCARD = "*"


# =============================================================================
# Origins
# =============================================================================


@dataclass(frozen=True)
class AnyOrigin:
    """Every origin with a resolvable host is allowed."""


ANY_ORIGIN = AnyOrigin()


@dataclass(frozen=True)
class OriginPattern:
    """A single allowed-origin entry: a literal hostname or a ``*suffix`` pattern.

    For ``*.example.com`` the host must end with ``.example.com`` or be
    exactly ``example.com`` (the pattern minus its first two characters).
    """

    text: str
    suffix: re.Pattern[str] | None = field(default=None, compare=False, repr=False)

    @classmethod
    def parse(cls, text: str) -> OriginPattern:
        if WILDCARD not in text:
            return cls(text)
        return cls(text, re.compile(re.escape(text[1:]) + r"\Z"))

    @property
    def is_wildcard(self) -> bool:
        return self.suffix is not None

    @property
    def bare(self) -> str:
        """The pattern with its wildcard marker and the following character dropped."""
        return self.text[2:]


@dataclass(frozen=True)
class OriginPatterns:
    """Ordered, non-empty list of allowed-origin patterns."""

    patterns: tuple[OriginPattern, ...]

    def __iter__(self):
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


OriginSpec = AnyOrigin | OriginPatterns


def parse_origin_spec(value: object) -> OriginSpec:
    """Parse the ``allowed_origin`` setting.

    ``"*"`` allows any origin.  Any other string is a comma-separated list of
    hostnames and ``*suffix`` patterns; spaces inside entries are removed
    and entries are lower-cased to compare with the parsed host.

    Raises:
        InvalidConfigurationException: if *value* is not a non-empty string.
    """
    if not isinstance(value, str):
        raise InvalidConfigurationException(
            'The value of the "allowed_origin" property must be a string.',
            code="CORS_INVALID_ORIGIN",
            context={"type": type(value).__name__},
        )
    if not value.strip():
        raise InvalidConfigurationException(
            'The value of the "allowed_origin" property must not be empty.',
            code="CORS_INVALID_ORIGIN",
            context={"type": "str"},
        )
    if value.strip() == WILDCARD:
        return ANY_ORIGIN
    return OriginPatterns(tuple(OriginPattern.parse(entry.replace(" ", "").lower()) for entry in value.split(",")))


# =============================================================================
# Routes
# =============================================================================


@dataclass(frozen=True)
class AnyRoute:
    """Every route is eligible for CORS treatment."""


ANY_ROUTE = AnyRoute()


@dataclass(frozen=True)
class RoutePatterns:
    """Exact ``controller/action`` routes and ``prefix*`` patterns.

    An empty tuple is valid and matches no route.
    """

    patterns: tuple[str, ...] = ()

    def __iter__(self):
        return iter(self.patterns)

    def __contains__(self, route: object) -> bool:
        return route in self.patterns

    def __len__(self) -> int:
        return len(self.patterns)


RouteSpec = AnyRoute | RoutePatterns


def parse_route_spec(value: object) -> RouteSpec:
    """Parse the ``allowed_routes`` setting.

    Raises:
        InvalidConfigurationException: unless *value* is ``"*"`` or a
            sequence of strings.
    """
    if value == WILDCARD:
        return ANY_ROUTE
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise InvalidConfigurationException(
            'The value of the "allowed_routes" property must be a list or a string that contains the "*".',
            code="CORS_INVALID_ROUTES",
            context={"type": type(value).__name__},
        )
    for entry in value:
        if not isinstance(entry, str):
            raise InvalidConfigurationException(
                'Every entry of the "allowed_routes" property must be a string.',
                code="CORS_INVALID_ROUTES",
                context={"type": type(entry).__name__},
            )
    return RoutePatterns(tuple(value))
