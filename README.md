# pandarkit

`pandarkit` is a pure-Python toolkit for Pandar-family lidar sensors. It
depends on nothing outside the standard library.

It has four modules:

- **`pandarkit.tcp_command`** is a client for the sensor's PTC command channel,
  which listens on TCP port 9347 by default. It reads, writes and resets the
  calibration. A failure raises `PtcError`, and the error's `code` attribute
  holds either a `PtcErrorCode` or the return code the device sent. The module
  also has the framing helpers `build_header`, `parse_header` and
  `read_command`.
- **`pandarkit.points`** has the `PointXYZIT` point record, `format_point`, the
  CSV writer `write_points_csv` and the `FrameRecorder` frame callback.
- **`pandarkit.tables`** has the built-in angle corrections and firing-time
  offsets for the PandarQT, PandarXT-32, PandarXT-16 and PandarXTM.
- **`pandarkit.util`** has the socket helpers `readn`, `writen`, `tcp_open` and
  `select_fd` (with the `WaitFor` enum), the wall clock `now_time_sec` and
  `print_version`.

## Talking to a sensor

```python
from pandarkit.tcp_command import PtcError, TcpCommandClient

client = TcpCommandClient("192.0.2.10", 9347)
try:
    table = client.get_lidar_calibration()   # the correction table as text
except PtcError as exc:
    print("calibration request failed:", exc.code, exc)
else:
    print(table)
```

The client has these other methods:

- `get_calibration()` returns the calibration stored on the device.
- `set_calibration(content)` uploads a `str` or `bytes`. Empty content raises
  `PtcError`.
- `reset_calibration()` asks the device to restore its default calibration.
- `send_command(cmd, payload)` sends any `PtcCommand` and returns the raw
  `CommandResult`.

Each command opens its own connection. That connection uses the `timeout`
attribute of the client, which is 10 seconds by default.

## Saving points

```python
from pandarkit.points import FrameRecorder, PointXYZIT, write_points_csv

write_points_csv(
    [PointXYZIT(x=1.0, y=2.0, z=0.5, intensity=30, timestamp=1.25, ring=7)],
    "one_point.csv",
)
```

Each row has the form `x,y,z,intensity,timestamp,ring`.

`FrameRecorder(path, frame_index, verbose)` is a callable that takes
`(points, timestamp)`:

- When `verbose` is true, it prints the timestamp and the point count of every
  frame it receives.
- It writes the `frame_index`-th frame as CSV to `path`, counting from 1.
- If `path` is `None`, it saves nothing.
- The call returns `True` for the frame that it wrote.

## Calibration tables

```python
from pandarkit.tables import block_offsets, default_calibration, laser_offsets

calibration = default_calibration("PandarXT-32")
print(calibration.laser_count, calibration.elevation[0])

print(block_offsets("PandarXTM", "triple"))
print(laser_offsets("PandarXT-16"))
```

- `default_calibration` knows the PandarQT, PandarXT-32, PandarXT-16 and
  PandarXTM.
- `block_offsets` and `laser_offsets` know only the XT models and the
  PandarXTM. Their values are in microseconds.
- `block_offsets` takes the return modes `"single"` and `"dual"`, and also
  `"triple"` for the PandarXTM.
- Any other model or mode raises `ValueError`.

## What this package does not do

The package does not receive UDP point-cloud or GPS packets from a sensor. It
does not read `.pcap` captures, and it does not decode raw packets into
`PointXYZIT` points. You have to produce the points yourself before you pass
them to `write_points_csv` or `FrameRecorder`. There is no command-line
program.

## Running the tests

Install the `test` extra and run `pytest`.