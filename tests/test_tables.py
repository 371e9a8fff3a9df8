import pytest

from pandarkit.tables import (
    LaserCalibration,
    block_offsets,
    default_calibration,
    laser_offsets,
)


def test_qt_calibration_has_64_lasers_with_source_values():
    cal = default_calibration("PandarQT")
    assert cal.laser_count == 64
    assert cal.elevation[0] == pytest.approx(-52.121, abs=1e-4)
    assert cal.elevation[-1] == pytest.approx(52.133, abs=1e-4)
    assert cal.azimuth_offset[0] == pytest.approx(8.736, abs=1e-4)
    assert cal.azimuth_offset[-1] == pytest.approx(-7.892, abs=1e-4)


def test_qt_elevation_is_strictly_increasing():
    elev = default_calibration("PandarQT").elevation
    assert all(a < b for a, b in zip(elev, elev[1:]))


@pytest.mark.parametrize("lidar_type", ["PandarXT-32", "PandarXT-16"])
def test_xt_calibration(lidar_type):
    cal = default_calibration(lidar_type)
    assert cal.laser_count == 32
    assert cal.elevation[0] == 15.0
    assert cal.elevation[-1] == -16.0
    assert set(cal.azimuth_offset) == {0.0}


def test_xtm_calibration():
    cal = default_calibration("PandarXTM")
    assert cal.laser_count == 32
    assert cal.elevation[0] == pytest.approx(19.5)
    assert cal.elevation[-1] == pytest.approx(-20.8, abs=1e-5)
    assert cal.elevation[15] == 0.0


def test_unknown_lidar_type_raises():
    with pytest.raises(ValueError):
        default_calibration("Pandar128")
    with pytest.raises(ValueError):
        laser_offsets("Pandar128")
    with pytest.raises(ValueError):
        block_offsets("Pandar128", "single")


def test_qt_has_no_builtin_timing_offsets():
    with pytest.raises(ValueError):
        block_offsets("PandarQT", "single")
    with pytest.raises(ValueError):
        laser_offsets("PandarQT")


def test_calibration_length_mismatch_raises():
    with pytest.raises(ValueError):
        LaserCalibration((1.0, 2.0), (0.0,))


def test_xt_single_block_offsets():
    offsets = block_offsets("PandarXT-32", "single")
    assert len(offsets) == 8
    assert offsets[-1] == pytest.approx(5.632, abs=1e-5)
    steps = [b - a for a, b in zip(offsets, offsets[1:])]
    assert steps == pytest.approx([50.0] * 7, abs=1e-4)


def test_xt_dual_block_offsets_come_in_pairs():
    offsets = block_offsets("PandarXT-16", "DUAL")
    assert [offsets[i] == offsets[i + 1] for i in range(0, 8, 2)] == [True] * 4
    assert offsets[-1] == pytest.approx(5.632, abs=1e-5)
    assert offsets[0] < offsets[2] < offsets[4] < offsets[6]


def test_xt_triple_mode_is_rejected():
    with pytest.raises(ValueError):
        block_offsets("PandarXT-32", "triple")


def test_xtm_block_offsets():
    triple = block_offsets("PandarXTM", "triple")
    assert triple[0] == triple[1] == triple[2]
    assert triple[3:] == (triple[7],) * 5
    assert triple[7] == pytest.approx(5.632, abs=1e-5)
    single = block_offsets("PandarXTM", "single")
    assert single[5] == single[6] == single[7]
    dual = block_offsets("PandarXTM", "dual")
    assert dual[0] == dual[1] < dual[2] == dual[3] < dual[4]


def test_xt_laser_offsets():
    offsets = laser_offsets("PandarXT-32")
    assert len(offsets) == 32
    assert offsets[0] == pytest.approx(0.368, abs=1e-6)
    steps = [b - a for a, b in zip(offsets, offsets[1:])]
    assert steps == pytest.approx([1.512] * 31, abs=1e-4)


def test_xtm_laser_offsets_repeat_after_sixteen():
    offsets = laser_offsets("PandarXTM")
    assert len(offsets) == 32
    assert offsets[:16] == offsets[16:]
    assert offsets[0] == pytest.approx(0.368, abs=1e-6)
    assert offsets[1] - offsets[0] == pytest.approx(2.856, abs=1e-5)