"""
Unit tests for ReplaySettings, load_settings and Frame.
"""
import json

import pytest

from framereplay.settings import ReplaySettings, load_settings
from framereplay.types import Frame, StreamingMode


# =============================================================================
# ReplaySettings Tests
# =============================================================================

class TestReplaySettings:
    """Tests for ReplaySettings dataclass."""

    def test_defaults(self):
        settings = ReplaySettings()
        assert settings.time_tick_rate_ms == 1000
        assert (settings.min_speed, settings.max_speed) == (1, 16)
        assert settings.speed_factor == 2
        assert settings.initial_speed == 1
        assert settings.streaming_mode == StreamingMode.UNAVAILABLE

    @pytest.mark.parametrize("kwargs", [
        {"time_tick_rate_ms": 0},
        {"min_speed": 0},
        {"min_speed": 4, "max_speed": 2, "initial_speed": 4},
        {"speed_factor": 1},
        {"initial_speed": 32},
        {"streaming_mode": 2},
        {"initial_speed": 3},
        {"max_speed": 12},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            ReplaySettings(**kwargs)

    def test_speed_steps(self):
        assert ReplaySettings().speed_steps() == (1, 2, 4, 8, 16)
        assert ReplaySettings(min_speed=3, max_speed=12, initial_speed=6).speed_steps() == (3, 6, 12)
        assert ReplaySettings(speed_factor=4).speed_steps() == (1, 4, 16)

    def test_dict_round_trip(self):
        settings = ReplaySettings(max_speed=8, streaming_mode=StreamingMode.AVAILABLE)
        data = settings.to_dict()
        assert data["streaming_mode"] == "AVAILABLE"
        assert ReplaySettings.from_dict(data) == settings

    def test_from_dict_accepts_mode_value_and_ignores_unknown(self):
        settings = ReplaySettings.from_dict({"streaming_mode": 2, "colour": "red"})
        assert settings.streaming_mode == StreamingMode.AVAILABLE

    def test_from_dict_rejects_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown streaming mode"):
            ReplaySettings.from_dict({"streaming_mode": "sometimes"})


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(str(tmp_path / "nope.json")) == ReplaySettings()

    def test_reads_json_object(self, tmp_path):
        path = tmp_path / "replay.json"
        path.write_text(json.dumps({"time_tick_rate_ms": 250, "streaming_mode": "available"}))
        settings = load_settings(str(path))
        assert settings.time_tick_rate_ms == 250
        assert settings.streaming_mode == StreamingMode.AVAILABLE

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "replay.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_settings(str(path))


# =============================================================================
# Frame Tests
# =============================================================================

class TestFrame:
    """Tests for Frame dataclass."""

    def test_negative_time_rejected(self):
        with pytest.raises(ValueError):
            Frame(time=-1)

    def test_frames_are_immutable(self):
        frame = Frame(time=10)
        with pytest.raises(AttributeError):
            frame.time = 20

    def test_from_dict_keeps_payload(self):
        frame = Frame.from_dict({"time": 100, "lat": 45.0})
        assert frame.time == 100
        assert frame.payload == {"lat": 45.0}
        assert frame.to_dict() == {"time": 100, "lat": 45.0}

    def test_from_dict_accepts_legacy_time_key(self):
        assert Frame.from_dict({"Time": 5}).time == 5

    def test_from_dict_without_time(self):
        with pytest.raises(ValueError):
            Frame.from_dict({"lat": 1})

    def test_scalar_payload(self):
        frame = Frame(time=1, payload="raw")
        assert frame.to_dict() == {"time": 1, "payload": "raw"}
        assert Frame.from_dict(frame.to_dict()) == frame

    @pytest.mark.parametrize("payload", [0, "", [], False, {}])
    def test_falsy_payload_round_trip(self, payload):
        frame = Frame(time=5, payload=payload)
        assert Frame.from_dict(frame.to_dict()).payload == payload
        assert Frame.from_dict({"time": 5, "payload": payload}).payload == payload

    def test_no_extra_keys_gives_no_payload(self):
        assert Frame.from_dict({"time": 5}).payload is None
