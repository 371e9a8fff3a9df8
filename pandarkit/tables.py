"""Built-in angle corrections and firing-time offsets of the QT and XT lidars."""

from __future__ import annotations

import struct
from dataclasses import dataclass

# PandarQT packet layout.
HS_LIDAR_QT_HEAD_SIZE = 12
HS_LIDAR_QT_PRE_HEADER_SIZE = 6
HS_LIDAR_QT_HEADER_SIZE = 6
HS_LIDAR_QT_BLOCK_NUMBER = 4
HS_LIDAR_QT_BLOCK_HEADER_AZIMUTH = 2
HS_LIDAR_QT_UNIT_NUM = 64
HS_LIDAR_QT_UNIT_SIZE = 4
HS_LIDAR_QT_BLOCK_SIZE = (
    HS_LIDAR_QT_UNIT_SIZE * HS_LIDAR_QT_UNIT_NUM + HS_LIDAR_QT_BLOCK_HEADER_AZIMUTH
)
HS_LIDAR_QT_BODY_SIZE = HS_LIDAR_QT_BLOCK_SIZE * HS_LIDAR_QT_BLOCK_NUMBER
HS_LIDAR_QT_RESERVED_SIZE = 10
HS_LIDAR_QT_ENGINE_VELOCITY = 2
HS_LIDAR_QT_TIMESTAMP_SIZE = 4
HS_LIDAR_QT_ECHO_SIZE = 1
HS_LIDAR_QT_FACTORY_SIZE = 1
HS_LIDAR_QT_UTC_SIZE = 6
HS_LIDAR_QT_SEQUENCE_SIZE = 4
HS_LIDAR_QT_PACKET_TAIL_SIZE = 28
HS_LIDAR_QT_PACKET_TAIL_WITHOUT_UDPSEQ_SIZE = 24
HS_LIDAR_QT_PACKET_SIZE = (
    HS_LIDAR_QT_HEAD_SIZE + HS_LIDAR_QT_BODY_SIZE + HS_LIDAR_QT_PACKET_TAIL_SIZE
)
HS_LIDAR_QT_PACKET_WITHOUT_UDPSEQ_SIZE = (
    HS_LIDAR_QT_HEAD_SIZE
    + HS_LIDAR_QT_BODY_SIZE
    + HS_LIDAR_QT_PACKET_TAIL_WITHOUT_UDPSEQ_SIZE
)

# PandarXT packet layout.
HS_LIDAR_XT_HEAD_SIZE = 12
HS_LIDAR_XT_BLOCK_NUMBER = 8
HS_LIDAR_XT_BLOCK_HEADER_AZIMUTH = 2
HS_LIDAR_XT_UNIT_NUM = 32
HS_LIDAR_XT_UNIT_SIZE = 4
HS_LIDAR_XT_BLOCK_SIZE = (
    HS_LIDAR_XT_UNIT_SIZE * HS_LIDAR_XT_UNIT_NUM + HS_LIDAR_XT_BLOCK_HEADER_AZIMUTH
)
HS_LIDAR_XT_BODY_SIZE = HS_LIDAR_XT_BLOCK_SIZE * HS_LIDAR_XT_BLOCK_NUMBER
HS_LIDAR_XT_RESERVED_SIZE = 10
HS_LIDAR_XT_ENGINE_VELOCITY = 2
HS_LIDAR_XT_TIMESTAMP_SIZE = 4
HS_LIDAR_XT_ECHO_SIZE = 1
HS_LIDAR_XT_FACTORY_SIZE = 1
HS_LIDAR_XT_UTC_SIZE = 6
HS_LIDAR_XT_SEQUENCE_SIZE = 4
HS_LIDAR_XT_PACKET_TAIL_SIZE = 28
HS_LIDAR_XT_PACKET_SIZE = (
    HS_LIDAR_XT_HEAD_SIZE + HS_LIDAR_XT_BODY_SIZE + HS_LIDAR_XT_PACKET_TAIL_SIZE
)
HS_LIDAR_XT16_UNIT_NUM = 16
HS_LIDAR_XT16_PACKET_SIZE = 568
HS_LIDAR_XTM_PACKET_SIZE = 820
HS_LIDAR_XT_MAJOR_VERSION = 6

_FLOAT32 = struct.Struct("<f")


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


def _f32_table(values) -> tuple[float, ...]:
    return tuple(_f32(v) for v in values)


_QT_ELEVATION = _f32_table((
    -52.121, -49.785, -47.577, -45.477, -43.465, -41.528, -39.653, -37.831,
    -36.055, -34.320, -32.619, -30.950, -29.308, -27.690, -26.094, -24.517,
    -22.964, -21.420, -19.889, -18.372, -16.865, -15.368, -13.880, -12.399,
    -10.925, -9.457, -7.994, -6.535, -5.079, -3.626, -2.175, -0.725,
    0.725, 2.175, 3.626, 5.079, 6.534, 7.993, 9.456, 10.923,
    12.397, 13.877, 15.365, 16.861, 18.368, 19.885, 21.415, 22.959,
    24.524, 26.101, 27.697, 29.315, 30.957, 32.627, 34.328, 36.064,
    37.840, 39.662, 41.537, 43.475, 45.487, 47.587, 49.795, 52.133,
))

_QT_AZIMUTH_OFFSET = _f32_table((
    8.736, 8.314, 7.964, 7.669, 7.417, 7.198, 7.007, 6.838,
    6.688, 6.554, 6.434, 6.326, 6.228, 6.140, 6.059, 5.987,
    -5.270, -5.216, -5.167, -5.123, -5.083, -5.047, -5.016, -4.988,
    -4.963, -4.942, -4.924, -4.910, -4.898, -4.889, -4.884, -4.881,
    5.493, 5.496, 5.502, 5.512, 5.525, 5.541, 5.561, 5.584,
    5.611, 5.642, 5.676, 5.716, 5.759, 5.808, 5.862, 5.921,
    -5.330, -5.396, -5.469, -5.550, -5.640, -5.740, -5.850, -5.974,
    -6.113, -6.269, -6.447, -6.651, -6.887, -7.163, -7.493, -7.892,
))

_XT_ELEVATION = _f32_table(float(15 - i) for i in range(HS_LIDAR_XT_UNIT_NUM))

_XTM_ELEVATION = _f32_table((
    19.5, 18.2, 16.9, 15.6, 14.3, 13.0, 11.7, 10.4,
    9.1, 7.8, 6.5, 5.2, 3.9, 2.6, 1.3, 0.0,
    -1.3, -2.6, -3.9, -5.2, -6.5, -7.8, -9.1, -10.4,
    -11.7, -13.0, -14.3, -15.6, -16.9, -18.2, -19.5, -20.8,
))

_ZERO_AZIMUTH_OFFSET = (0.0,) * HS_LIDAR_XT_UNIT_NUM

_BLOCK_BASE = _f32(5.632)
_BLOCK_STEP = _f32(50.0)
_LASER_BASE = _f32(0.368)


def _block_table(multipliers) -> tuple[float, ...]:
    return tuple(_f32(_BLOCK_BASE - _f32(_BLOCK_STEP * m)) for m in multipliers)


def _laser_table(step: float, multipliers) -> tuple[float, ...]:
    step32 = _f32(step)
    return tuple(_f32(_f32(step32 * m) + _LASER_BASE) for m in multipliers)


_XT_BLOCK_OFFSETS = {
    "single": _block_table((7, 6, 5, 4, 3, 2, 1, 0)),
    "dual": _block_table((3, 3, 2, 2, 1, 1, 0, 0)),
}

_XTM_BLOCK_OFFSETS = {
    "single": _block_table((5, 4, 3, 2, 1, 0, 0, 0)),
    "dual": _block_table((2, 2, 1, 1, 0, 0, 0, 0)),
    "triple": _block_table((1, 1, 1, 0, 0, 0, 0, 0)),
}

_XT_LASER_OFFSETS = _laser_table(1.512, range(HS_LIDAR_XT_UNIT_NUM))
_XTM_LASER_OFFSETS = _laser_table(2.856, [i % 16 for i in range(HS_LIDAR_XT_UNIT_NUM)])

_XT_TYPES = ("PandarXT-32", "PandarXT-16")
_XTM_TYPE = "PandarXTM"
_QT_TYPE = "PandarQT"


@dataclass(frozen=True)
class LaserCalibration:
    """Elevation and horizontal azimuth offset of every laser, in degrees."""

    elevation: tuple[float, ...]
    azimuth_offset: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.elevation) != len(self.azimuth_offset):
            raise ValueError(
                f"{len(self.elevation)} elevations but "
                f"{len(self.azimuth_offset)} azimuth offsets"
            )

    @property
    def laser_count(self) -> int:
        return len(self.elevation)


def default_calibration(lidar_type: str) -> LaserCalibration:
    """The angle correction built into the SDK for a lidar model.

    Raises ValueError for a model without built-in angles.
    """
    if lidar_type == _QT_TYPE:
        return LaserCalibration(_QT_ELEVATION, _QT_AZIMUTH_OFFSET)
    if lidar_type in _XT_TYPES:
        return LaserCalibration(_XT_ELEVATION, _ZERO_AZIMUTH_OFFSET)
    if lidar_type == _XTM_TYPE:
        return LaserCalibration(_XTM_ELEVATION, _ZERO_AZIMUTH_OFFSET)
    raise ValueError(f"no built-in calibration for lidar type {lidar_type!r}")


def block_offsets(lidar_type: str, return_mode: str) -> tuple[float, ...]:
    """Firing-time offset of each block in microseconds.

    ``return_mode`` is "single", "dual" or "triple" (the last only for the
    PandarXTM). Raises ValueError for an unknown model or mode.
    """
    mode = str(return_mode).lower()
    if lidar_type in _XT_TYPES:
        table = _XT_BLOCK_OFFSETS
    elif lidar_type == _XTM_TYPE:
        table = _XTM_BLOCK_OFFSETS
    else:
        raise ValueError(f"no built-in block offsets for lidar type {lidar_type!r}")
    try:
        return table[mode]
    except KeyError:
        raise ValueError(
            f"return mode {return_mode!r} is not supported by {lidar_type}"
        ) from None


def laser_offsets(lidar_type: str) -> tuple[float, ...]:
    """Firing-time offset of each laser within a block in microseconds.

    Raises ValueError for a model without built-in offsets.
    """
    if lidar_type in _XT_TYPES:
        return _XT_LASER_OFFSETS
    if lidar_type == _XTM_TYPE:
        return _XTM_LASER_OFFSETS
    raise ValueError(f"no built-in laser offsets for lidar type {lidar_type!r}")