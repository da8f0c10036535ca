# msfusion

Building blocks for a time-delay compensated, multi-sensor extended Kalman
filter. The package covers the geometry and the bookkeeping around such a
filter.

## Installation

```
pip install msfusion
```

To run the tests, install the `test` extra (`pip install msfusion[test]`) and
run `pytest`.

## What is inside

- `msfusion.quaternion.Quaternion`: an immutable Hamilton quaternion
  `w + xi + yj + zk`. `coeffs()` returns the coefficients in the order
  `x, y, z, w`, and `from_coeffs` reads them back in that order. It offers
  quaternion products with `*`. Multiplying by a 3-vector, or calling
  `rotate`, rotates that vector. It also has `conjugate`, `inverse`,
  `normalized` and `norm`, and converts to and from 3x3 rotation matrices.
- `msfusion.mathutils`: matrix helpers for the error-state equations:
  - `skew`
  - `omega_mat_jpl` and `omega_mat_hamilton`
  - `xi_mat`
  - `quaternion_from_small_angle`
  - `check_for_numeric`, which logs the first NaN or infinite entry and returns
    `False`.
  - `time_human`, which reduces a timestamp modulo 10000 seconds so that it
    reads easily in logs.
- `msfusion.sorted_container.SortedContainer`: a buffer of objects that have a
  `time` attribute, kept in increasing time order.
  - The constructor takes a factory for the "invalid" object. That object is
    returned whenever a request cannot be satisfied, and its `time` is
    `INVALID_TIME` (`-1.0`).
  - `get_value_at`, `get_closest_before`, `get_closest_after` and `get_closest`
    look up entries by time. `get_first` and `get_last` return the oldest and
    newest entries.
  - `insert` adds an entry. It keeps the existing entry if one already sits at
    that time.
  - `update_time` moves an entry to a new time.
  - `clear_older_than` drops old entries.
  - `echo_buffer_content_times` lists the stored times.
- `msfusion.gps_conversion.GPSConversion`: converts WGS84 coordinates to ECEF
  (`wgs84_to_ecef`). After `init_reference`, it also converts to a local
  East-North-Up frame around the reference point (`ecef_to_enu`,
  `wgs84_to_enu`). `adjust_reference` shifts the reference point's ECEF z
  coordinate.
- `msfusion.similarity.From6DoF`: collects pairs of poses (`Pose`) with
  `add_measurement`. Its `compute` method then estimates the rotation,
  translation and scale between the two frames. The result is a
  `SimilarityResult` with `pose`, `scale` and `condition`. Fewer than two
  pairs raise `ValueError`.
- `msfusion.fuzzy_tracking.FuzzyTracker`: watches an orientation that should
  not drift. After filling a buffer of 30 orientations, `check` returns `True`
  when an orientation strays from the per-coefficient median by more than the
  threshold.
- `msfusion.distort_config.DistortConfig`: the two switches `publish_pose` and
  `publish_position`. It has defaults and bounds, `clamped`, `level`, and
  conversion from and to a dictionary-shaped reconfigure message. A message
  with an unknown parameter raises `ValueError`.
- `msfusion.relay.MeasurementRelay`: forwards messages of each `MessageKind` to
  a publisher callable, depending on the current `DistortConfig`.
  `topic_summary` formats a node's topic listing.

## Examples

```python
from msfusion.gps_conversion import GPSConversion

gps = GPSConversion()
gps.init_reference(47.3769, 8.5417, 408.0)
east, north, up = gps.wgs84_to_enu(47.3770, 8.5418, 410.0)
```

```python
from msfusion.sorted_container import SortedContainer

class Stamped:
    def __init__(self, time=-1.0):
        self.time = time

buffer = SortedContainer(Stamped)
for t in (0.1, 0.2, 0.35):
    buffer.insert(Stamped(t))

closest = buffer.get_closest(0.3)   # the entry at 0.35
```

```python
from msfusion.distort_config import DistortConfig
from msfusion.relay import MeasurementRelay, MessageKind

published = []
relay = MeasurementRelay({kind: published.append for kind in MessageKind})
relay.configure(DistortConfig(publish_pose=True, publish_position=False))
relay.handle(MessageKind.POSE, "pose message")      # True, forwarded
relay.handle(MessageKind.POINT, "point message")    # False, dropped
```

## What it does not do

The package does not contain the Kalman filter itself, which does state
propagation, covariance prediction and measurement updates. It has no
connection to any messaging middleware. The relay only calls the publisher
callables you give it. There is no command-line program.