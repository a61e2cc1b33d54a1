"""End-to-end runs of the stillgrab CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from stillgrab.cli import app


def _jpegs(directory: Path) -> list[str]:
    return sorted(p.name for p in directory.glob("*.jpg"))


@pytest.mark.e2e
class TestExtractCommand:
    def test_reference_scenario(self, runner, video_10s: Path, tmp_path: Path):
        out = tmp_path / "out"
        result = runner.invoke(app, ["extract", str(video_10s), "2", "5", "5", "--output-dir", str(out)])

        assert result.exit_code == 0, result.output
        assert _jpegs(out) == [f"frame_{i:05d}.jpg" for i in range(16)]
        assert "Frames saved as JPEGs from 2 to 5 seconds." in result.stdout

    def test_zero_stride(self, runner, video_10s: Path, tmp_path: Path):
        out = tmp_path / "out"
        result = runner.invoke(app, ["extract", str(video_10s), "2", "5", "0", "-o", str(out)])

        assert result.exit_code != 0
        assert not out.exists() or _jpegs(out) == []

    def test_missing_input(self, runner, tmp_path: Path):
        out = tmp_path / "out"
        result = runner.invoke(app, ["extract", str(tmp_path / "nope.mp4"), "0", "5", "1", "-o", str(out)])

        assert result.exit_code != 0
        assert not out.exists()

    def test_non_numeric_arguments_rejected(self, runner, video_10s: Path, tmp_path: Path):
        result = runner.invoke(app, ["extract", str(video_10s), "two", "5", "1", "-o", str(tmp_path)])

        assert result.exit_code == 2
        assert _jpegs(tmp_path) == []

    def test_start_after_end(self, runner, video_10s: Path, tmp_path: Path):
        out = tmp_path / "out"
        result = runner.invoke(app, ["extract", str(video_10s), "5", "2", "1", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert not out.exists() or _jpegs(out) == []

    def test_config_file(self, runner, video_10s: Path, tmp_path: Path):
        out = tmp_path / "out"
        config_file = tmp_path / "s01.yaml"
        with open(config_file, "w") as f:
            yaml.dump({"filename_pattern": "shot_{index:02d}.jpg", "output_dir": str(out)}, f)

        result = runner.invoke(app, ["extract", str(video_10s), "0", "1", "13", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert _jpegs(out) == ["shot_00.jpg", "shot_01.jpg"]

    def test_opencv_written_video(self, runner, opencv_video: Path, tmp_path: Path):
        out = tmp_path / "out"
        result = runner.invoke(app, ["extract", str(opencv_video), "0", "1", "1", "-o", str(out)])

        assert result.exit_code == 0, result.output
        saved = _jpegs(out)
        assert 0 < len(saved) <= 30
        assert saved[0] == "frame_00000.jpg"


@pytest.mark.e2e
class TestInfoAndSchema:
    def test_info(self, runner, video_10s: Path):
        result = runner.invoke(app, ["info", str(video_10s)])

        assert result.exit_code == 0, result.output
        assert "mpeg4" in result.stdout
        assert "160x120" in result.stdout

    def test_info_audio_only(self, runner, audio_only_file: Path):
        result = runner.invoke(app, ["info", str(audio_only_file)])

        assert result.exit_code == 1
        assert "pcm_s16le" in result.stdout

    def test_info_missing(self, runner, tmp_path: Path):
        result = runner.invoke(app, ["info", str(tmp_path / "nope.mp4")])
        assert result.exit_code == 1

    def test_schema(self, runner):
        result = runner.invoke(app, ["schema"])

        assert result.exit_code == 0
        assert "stride" in result.stdout
        assert "frames_saved" in result.stdout
