import pytest

from pandarkit.points import (
    FrameRecorder,
    PointXYZIT,
    format_point,
    write_points_csv,
)


def _points():
    return [
        PointXYZIT(1.5, -2.25, 0.0, 10.0, 3.5, 3),
        PointXYZIT(0.125, 4.0, -1.0, 255.0, 7.25, 31),
    ]


def test_format_point_fields_in_order():
    assert format_point(PointXYZIT(1.5, -2.25, 0.0, 10.0, 3.5, 3)) == "1.5,-2.25,0,10,3.5,3"


def test_format_point_uses_six_significant_digits():
    text = format_point(PointXYZIT(timestamp=1600000000.123456))
    assert text.split(",")[4] == "1.6e+09"


def test_write_points_csv_round_trip(tmp_path):
    path = tmp_path / "cloud.csv"
    points = _points()
    assert write_points_csv(points, path) == len(points)
    lines = path.read_text().splitlines()
    assert len(lines) == len(points)
    for line, point in zip(lines, points):
        x, y, z, intensity, ts, ring = line.split(",")
        assert (float(x), float(y), float(z)) == (point.x, point.y, point.z)
        assert float(intensity) == point.intensity
        assert float(ts) == point.timestamp
        assert int(ring) == point.ring


def test_recorder_writes_only_requested_frame(tmp_path):
    path = tmp_path / "frame.csv"
    recorder = FrameRecorder(path, 2, verbose=False)
    assert recorder([PointXYZIT(1.0)], 1.0) is False
    assert not path.exists()
    points = _points()
    assert recorder(points, 2.0) is True
    assert path.read_text().splitlines() == [format_point(p) for p in points]
    assert recorder([PointXYZIT(9.0)], 3.0) is False
    assert len(path.read_text().splitlines()) == len(points)
    assert recorder.frames == 3


def test_recorder_without_path_never_writes(tmp_path):
    recorder = FrameRecorder(None, 1, verbose=False)
    assert recorder(_points(), 1.0) is False
    assert recorder.frames == 0
    assert list(tmp_path.iterdir()) == []


def test_recorder_prints_frame_summary(capsys):
    recorder = FrameRecorder(None, 1, verbose=True)
    recorder(_points(), 1.5)
    out = capsys.readouterr().out
    assert out == "timestamp: 1.500000,point_size: 2\n"


@pytest.mark.parametrize("frames", [1, 3])
def test_recorder_quiet_prints_nothing(capsys, tmp_path, frames):
    recorder = FrameRecorder(tmp_path / "f.csv", frames, verbose=False)
    for _ in range(frames):
        recorder(_points(), 0.0)
    assert capsys.readouterr().out == ""
    assert (tmp_path / "f.csv").exists()