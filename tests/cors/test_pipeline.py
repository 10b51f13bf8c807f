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
"""Tests for CorsDecisionPipeline — evaluation order and port-driven processing."""

from __future__ import annotations

from collections.abc import Mapping

import pytest

from flycors.cors.config import CorsConfig
from flycors.cors.decision import ALLOW_HEADERS, ALLOW_METHODS, ALLOW_ORIGIN, Allow, NotApplicable
from flycors.cors.pipeline import CorsDecisionPipeline, evaluate
from flycors.cors.ports import HeaderProvider, ResponseTerminator, RouteProvider
from flycors.cors.route_matcher import is_route_allowed

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeRequest:
    """Implements all three capability ports and records what happened."""

    def __init__(self, route: str, method: str = "GET", headers: dict[str, str] | None = None) -> None:
        self._route = route
        self._method = method
        self._headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.route_reads = 0
        self.header_reads: list[str] = []
        self.written: dict[str, str] = {}
        self.write_calls = 0
        self.terminated = False

    def current_route(self) -> str:
        self.route_reads += 1
        return self._route

    def current_method(self) -> str:
        return self._method

    def get_header(self, name: str) -> str | None:
        self.header_reads.append(name)
        return self._headers.get(name.lower())

    def write_headers(self, headers: Mapping[str, str]) -> None:
        self.write_calls += 1
        self.written.update(headers)

    def terminate(self) -> None:
        self.terminated = True


def _config(**kwargs) -> CorsConfig:
    kwargs.setdefault("allowed_origin", "*.example.com")
    kwargs.setdefault("allowed_routes", ["site/*"])
    return CorsConfig.create(**kwargs)


# ---------------------------------------------------------------------------
# evaluate()
# ---------------------------------------------------------------------------


class TestEvaluate:
    def test_disabled_when_origin_unset(self):
        decision = evaluate(CorsConfig.create(allowed_routes="*"), "site/index", {"Origin": "https://a.com"})
        assert decision == NotApplicable("disabled")

    def test_route_not_allowed(self):
        decision = evaluate(_config(), "admin/index", {"Origin": "https://sub.example.com"})
        assert decision == NotApplicable("route_not_allowed")

    def test_origin_not_allowed(self):
        decision = evaluate(_config(), "site/index", {"Origin": "https://evil.com"})
        assert decision == NotApplicable("origin_not_allowed")

    def test_missing_origin(self):
        assert evaluate(_config(), "site/index", {}) == NotApplicable("origin_missing")

    def test_allow_without_overrides(self):
        decision = evaluate(_config(), "site/index", {"Origin": "https://sub.example.com"})
        assert decision == Allow(origin="https://sub.example.com")
        assert decision.headers() == {ALLOW_ORIGIN: "https://sub.example.com"}

    def test_allow_carries_overrides(self):
        cfg = _config(allow_methods="GET, POST", allow_headers="X-Token")
        decision = evaluate(cfg, "site/index", {"Origin": "https://sub.example.com"})
        assert isinstance(decision, Allow)
        assert decision.headers() == {
            ALLOW_ORIGIN: "https://sub.example.com",
            ALLOW_METHODS: "GET, POST",
            ALLOW_HEADERS: "X-Token",
        }

    @pytest.mark.parametrize("method", ["OPTIONS", "options"])
    def test_preflight_terminates(self, method):
        decision = evaluate(_config(), "site/index", {"Origin": "https://example.com"}, method)
        assert isinstance(decision, Allow)
        assert decision.terminate_after_headers is True

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
    def test_other_methods_do_not_terminate(self, method):
        decision = evaluate(_config(), "site/index", {"Origin": "https://example.com"}, method)
        assert isinstance(decision, Allow)
        assert decision.terminate_after_headers is False

    def test_preflight_for_rejected_origin_is_not_applicable(self):
        decision = evaluate(_config(), "site/index", {"Origin": "https://evil.com"}, "OPTIONS")
        assert isinstance(decision, NotApplicable)

    def test_global_allow(self):
        cfg = CorsConfig.create(allowed_origin="*", allowed_routes="*")
        decision = evaluate(cfg, "", {"Origin": "http://localhost:3000"})
        assert decision == Allow(origin="http://localhost:3000")

    def test_repeated_evaluation_is_identical(self):
        cfg = _config(allow_methods="GET")
        headers = {"Origin": "https://sub.example.com"}
        decisions = {evaluate(cfg, "site/index", headers, "OPTIONS") for _ in range(5)}
        assert len(decisions) == 1

    def test_masking_applies_through_pipeline(self):
        cfg = _config(allowed_origin="plain.com,*.example.com")
        decision = evaluate(cfg, "site/index", {"Origin": "https://sub.example.com"})
        assert isinstance(decision, NotApplicable)


# ---------------------------------------------------------------------------
# CorsDecisionPipeline.process()
# ---------------------------------------------------------------------------


class TestFakeConformance:
    def test_fake_implements_ports(self):
        fake = FakeRequest("site/index")
        assert isinstance(fake, RouteProvider)
        assert isinstance(fake, HeaderProvider)
        assert isinstance(fake, ResponseTerminator)


class TestProcess:
    def test_disabled_reads_nothing(self):
        pipeline = CorsDecisionPipeline(CorsConfig())
        req = FakeRequest("site/index", headers={"Origin": "https://example.com"})
        assert pipeline.process(req, req, req) == NotApplicable("disabled")
        assert req.route_reads == 0
        assert req.header_reads == []

    def test_rejected_route_reads_no_headers(self):
        pipeline = CorsDecisionPipeline(_config())
        req = FakeRequest("admin/index", headers={"Origin": "https://example.com"})
        assert pipeline.process(req, req, req) == NotApplicable("route_not_allowed")
        assert req.header_reads == []
        assert req.write_calls == 0

    def test_allowed_request_writes_headers_once(self):
        pipeline = CorsDecisionPipeline(_config(allow_headers="X-Token"))
        req = FakeRequest("site/index", "GET", {"Origin": "https://app.example.com"})
        decision = pipeline.process(req, req, req)
        assert isinstance(decision, Allow)
        assert req.write_calls == 1
        assert req.written == {ALLOW_ORIGIN: "https://app.example.com", ALLOW_HEADERS: "X-Token"}
        assert req.terminated is False

    def test_preflight_writes_then_terminates(self):
        pipeline = CorsDecisionPipeline(_config())
        req = FakeRequest("site/index", "OPTIONS", {"Origin": "https://app.example.com"})
        pipeline.process(req, req, req)
        assert req.written == {ALLOW_ORIGIN: "https://app.example.com"}
        assert req.terminated is True

    def test_rejected_origin_leaves_response_untouched(self):
        pipeline = CorsDecisionPipeline(_config())
        req = FakeRequest("site/index", "OPTIONS", {"Origin": "https://evil.com"})
        assert isinstance(pipeline.process(req, req, req), NotApplicable)
        assert req.write_calls == 0
        assert req.terminated is False

    def test_evaluate_delegates_to_config(self):
        pipeline = CorsDecisionPipeline(_config())
        assert pipeline.evaluate("site/index", {"Origin": "https://example.com"}) == Allow(
            origin="https://example.com"
        )

    def test_route_checked_once_per_request(self, monkeypatch: pytest.MonkeyPatch):
        calls: list[str] = []

        def counting(route_spec, current_route):
            calls.append(current_route)
            return is_route_allowed(route_spec, current_route)

        monkeypatch.setattr("flycors.cors.pipeline.is_route_allowed", counting)
        pipeline = CorsDecisionPipeline(_config())
        req = FakeRequest("site/index", headers={"Origin": "https://app.example.com"})
        assert isinstance(pipeline.process(req, req, req), Allow)
        assert calls == ["site/index"]
