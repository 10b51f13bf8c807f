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
"""flycors Web — CORS filtering for ASGI and WSGI applications.

Framework-agnostic types are exported directly.
Default adapter (Starlette) exports are re-exported for convenience.
"""

from flycors.web.adapters.starlette import CorsFilter, WebFilterChainMiddleware, create_app
from flycors.web.adapters.wsgi import CorsWSGIMiddleware
from flycors.web.filters import OncePerRequestFilter
from flycors.web.ports.filter import WebFilter

__all__ = [
    # Framework-agnostic
    "OncePerRequestFilter",
    "WebFilter",
    # Adapters
    "CorsFilter",
    "CorsWSGIMiddleware",
    "WebFilterChainMiddleware",
    "create_app",
]
