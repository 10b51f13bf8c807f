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
"""'flycors check' — Evaluate a configuration against a sample request."""

from __future__ import annotations

import sys

import click
from rich.markup import escape
from rich.table import Table

from flycors.cli.console import console
from flycors.config.properties.cors import CorsProperties
from flycors.core.config import Config
from flycors.cors.config import CorsConfig
from flycors.cors.decision import Allow
from flycors.cors.pipeline import evaluate
from flycors.kernel.exceptions import FlyCorsException
from flycors.logging.structlog_adapter import StructlogAdapter


@click.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--route", "-r", required=True, help="Dispatched route, e.g. site/index.")
@click.option("--origin", "-o", default=None, help="Value of the Origin request header.")
@click.option("--method", "-m", default="GET", show_default=True, help="HTTP method.")
@click.option("--profile", "-p", "profiles", multiple=True, help="Active profile overlay (repeatable).")
def check_command(
    config_file: str,
    route: str,
    origin: str | None,
    method: str,
    profiles: tuple[str, ...],
) -> None:
    """Show which CORS headers CONFIG_FILE produces for a request."""
    try:
        config = Config.from_file(config_file, active_profiles=list(profiles))
        StructlogAdapter(stream=sys.stderr).configure(config)
        cors = CorsConfig.from_properties(config.bind(CorsProperties))
    except (FlyCorsException, ValueError) as exc:
        console.print(f"[error]Invalid configuration:[/error] {escape(str(exc))}")
        raise SystemExit(1) from exc

    headers = {"Origin": origin} if origin is not None else {}
    decision = evaluate(cors, route, headers, method)

    if not isinstance(decision, Allow):
        console.print(f"[warning]Not applicable[/warning] [dim]({decision.reason})[/dim]")
        return

    table = Table(title="CORS response headers", border_style="dim")
    table.add_column("Header", style="info")
    table.add_column("Value")
    for name, value in decision.headers().items():
        table.add_row(name, value)
    console.print(table)

    if decision.terminate_after_headers:
        console.print("[success]Preflight:[/success] response ends after headers")
