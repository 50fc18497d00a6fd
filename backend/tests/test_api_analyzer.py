"""Tests for the /api/analyzer and /api/health endpoints."""

import pytest

from strategy_analyzer.api import analyzer
from strategy_analyzer.options.legs import LegLimitError


CALL = {"kind": "call", "strike": 100, "premium": 5, "side": "long"}
PUT = {"kind": "put", "strike": 100, "premium": 5, "side": "long"}


class TestHealth:

    def test_ok(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestEvaluateEndpoint:

    def test_single_long_call(self, client):
        resp = client.post("/api/analyzer/evaluate", json={"legs": [CALL]})
        assert resp.status_code == 200
        body = resp.json()

        assert body["max_profit"] == 95
        assert body["max_loss"] == -5
        assert body["break_even_points"] == [105]
        assert body["break_even_text"] == "105"
        assert body["net_premium"] == -5
        assert len(body["series"]) == 201
        assert body["series"][105] == {"underlying_price": 105, "total_profit": 0}
        assert body["chart"]["labels"][:3] == [0, 1, 2]
        assert body["chart"]["data"][200] == 95
        assert body["price_range"] == {"minimum": 0, "maximum": 200, "step": 1}

    def test_straddle_break_even_text(self, client):
        resp = client.post("/api/analyzer/evaluate", json={"legs": [CALL, PUT]})
        body = resp.json()
        assert body["max_loss"] == -10
        assert body["break_even_points"] == [90, 110]
        assert body["break_even_text"] == "90, 110"

    def test_interpolated_mode(self, client):
        leg = dict(CALL, premium=5.5)
        exact = client.post("/api/analyzer/evaluate", json={"legs": [leg]}).json()
        interp = client.post(
            "/api/analyzer/evaluate", json={"legs": [leg], "breakeven_mode": "interpolated"}
        ).json()

        assert exact["break_even_points"] == []
        assert exact["break_even_text"] == ""
        assert interp["break_even_points"] == [pytest.approx(105.5)]
        assert interp["break_even_text"] == "105.5"

    def test_custom_price_range(self, client):
        resp = client.post(
            "/api/analyzer/evaluate",
            json={"legs": [CALL], "price_range": {"minimum": 80, "maximum": 120, "step": 10}},
        )
        body = resp.json()
        assert body["chart"]["labels"] == [80, 90, 100, 110, 120]
        assert body["max_profit"] == 15

    def test_short_leg(self, client):
        resp = client.post("/api/analyzer/evaluate", json={"legs": [dict(CALL, side="short")]})
        body = resp.json()
        assert body["max_profit"] == 5
        assert body["max_loss"] == -95
        assert body["net_premium"] == 5

    def test_empty_legs_rejected(self, client):
        resp = client.post("/api/analyzer/evaluate", json={"legs": []})
        assert resp.status_code == 422

    def test_too_many_legs(self, client):
        resp = client.post("/api/analyzer/evaluate", json={"legs": [CALL] * 5})
        assert resp.status_code == 400
        assert "at most 4 legs" in resp.json()["detail"]

    def test_max_legs_follows_settings(self, client, monkeypatch):
        monkeypatch.setattr(analyzer.settings, "max_legs", 1)
        resp = client.post("/api/analyzer/evaluate", json={"legs": [CALL, PUT]})
        assert resp.status_code == 400

    def test_bad_step_is_400(self, client):
        resp = client.post(
            "/api/analyzer/evaluate",
            json={"legs": [CALL], "price_range": {"minimum": 0, "maximum": 200, "step": 0}},
        )
        assert resp.status_code == 400
        assert "step" in resp.json()["detail"]

    def test_too_many_legs_is_leg_limit_error(self, long_call):
        with pytest.raises(LegLimitError):
            analyzer.evaluate_legs([long_call] * 5, None)

    def test_oversized_sweep_rejected(self, client):
        resp = client.post(
            "/api/analyzer/evaluate",
            json={"legs": [CALL], "price_range": {"minimum": 0, "maximum": 200, "step": 1e-7}},
        )
        assert resp.status_code == 400
        assert "at most 2001" in resp.json()["detail"]

    def test_sweep_at_point_limit_accepted(self, client):
        resp = client.post(
            "/api/analyzer/evaluate",
            json={"legs": [CALL], "price_range": {"minimum": 0, "maximum": 200, "step": 0.1}},
        )
        assert resp.status_code == 200
        assert len(resp.json()["series"]) == 2001

    def test_point_limit_follows_settings(self, client, monkeypatch):
        monkeypatch.setattr(analyzer.settings, "max_points", 50)
        resp = client.post("/api/analyzer/evaluate", json={"legs": [CALL]})
        assert resp.status_code == 400

    def test_large_range_break_even_text(self, client):
        leg = dict(CALL, strike=1234560, premium=7.5)
        resp = client.post(
            "/api/analyzer/evaluate",
            json={
                "legs": [leg],
                "price_range": {"minimum": 1234500, "maximum": 1234600, "step": 0.5},
            },
        )
        body = resp.json()
        assert body["break_even_points"] == [1234567.5]
        assert body["break_even_text"] == "1234567.5"

    @pytest.mark.parametrize("leg", [
        dict(CALL, kind="future"),
        dict(CALL, side="flat"),
        dict(CALL, strike=-1),
        {"kind": "call", "premium": 5},
    ])
    def test_invalid_leg_fields(self, client, leg):
        resp = client.post("/api/analyzer/evaluate", json={"legs": [leg]})
        assert resp.status_code == 422

    def test_side_defaults_to_long(self, client):
        leg = {"kind": "call", "strike": 100, "premium": 5}
        body = client.post("/api/analyzer/evaluate", json={"legs": [leg]}).json()
        assert body["max_loss"] == -5


class TestFormatNumber:

    def test_large_non_integer_keeps_all_digits(self):
        assert analyzer._format_number(1234567.5) == "1234567.5"

    def test_many_decimals_round_trip(self):
        assert analyzer._format_number(105.123456789) == "105.123456789"
        assert float(analyzer._format_number(0.1 + 0.2)) == 0.1 + 0.2

    def test_integral_float(self):
        assert analyzer._format_number(105.0) == "105"

    def test_int(self):
        assert analyzer._format_number(90) == "90"
