"""
Unit tests for the frame file loader.
"""
import json

import pytest

from framereplay.errors import FrameLoadError, ReplayError
from framereplay.frame_loader import load_frames


def write(tmp_path, text, name="frames.json"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestLoadFrames:
    """Tests for load_frames()."""

    def test_json_array(self, tmp_path):
        path = write(tmp_path, json.dumps([{"time": 0, "v": 1}, {"time": 100, "v": 2}]))
        frames = load_frames(path)
        assert [f.time for f in frames] == [0, 100]
        assert frames[1].payload == {"v": 2}

    def test_json_lines_skips_blank_lines(self, tmp_path):
        path = write(tmp_path, '{"time": 0}\n\n{"Time": 50, "v": 3}\n', "frames.jsonl")
        frames = load_frames(path)
        assert [f.time for f in frames] == [0, 50]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FrameLoadError, match="file not found"):
            load_frames(str(tmp_path / "missing.json"))

    def test_bad_json_line_reports_line(self, tmp_path):
        path = write(tmp_path, '{"time": 0}\n{"time": \n', "frames.jsonl")
        with pytest.raises(FrameLoadError) as exc:
            load_frames(path)
        assert exc.value.line == 2
        assert isinstance(exc.value, ReplayError)

    @pytest.mark.parametrize("record", [
        {"v": 1},
        {"time": "10"},
        {"time": 1.5},
        {"time": True},
        {"time": -5},
    ])
    def test_bad_time(self, tmp_path, record):
        path = write(tmp_path, json.dumps([record]))
        with pytest.raises(FrameLoadError):
            load_frames(path)

    def test_non_object_frame(self, tmp_path):
        path = write(tmp_path, "[1, 2]")
        with pytest.raises(FrameLoadError, match="JSON object"):
            load_frames(path)

    def test_decreasing_time(self, tmp_path):
        path = write(tmp_path, json.dumps([{"time": 100}, {"time": 50}]))
        with pytest.raises(FrameLoadError, match="before previous"):
            load_frames(path)

    def test_empty_file_gives_no_frames(self, tmp_path):
        assert load_frames(write(tmp_path, "")) == []
