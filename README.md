# cloudmsgs

Point cloud message types, conversions between two representations of the
same data, field-aware cloud concatenation, and rigid-body transforms of
packed binary clouds and of point lists.

## Installation

    pip install .

To run the test suite:

    pip install ".[test]"
    pytest

## Modules

- `cloudmsgs.messages`: message-style dataclasses: `Time` (seconds and
  nanoseconds, non-negative, with `Time.from_nanoseconds` and
  `Time.nanoseconds`), `Header`, `PointField` (its datatype codes are in the
  `PointFieldType` enum), `PointCloud2`, `Image`, `PointIndices`,
  `ModelCoefficients`, `Vertices` and `PolygonMesh`.
- `cloudmsgs.pcl_types`: the library-side counterparts: `PCLHeader` (with a
  sequence number and a stamp in microseconds that must fit an unsigned
  64-bit value), `PCLPointField`, `PCLPointCloud2`, `PCLImage`,
  `PCLPointIndices`, `PCLModelCoefficients`, `PCLVertices` and
  `PCLPolygonMesh`.
- `cloudmsgs.conversions`: `from_pcl` turns any library-side object (or a
  list of them) into the matching message, and `to_pcl` does the reverse;
  other types raise `TypeError`. `to_pcl` always sets the header's sequence
  number to 0. `stamp_from_pcl` and `stamp_to_pcl` convert between
  microsecond stamps and `Time`; the latter drops sub-microsecond parts.
- `cloudmsgs.cloud_ops`: `field_size` (bytes per element of a datatype, 0 if
  unknown), `get_field_index` (position of a named field, or `None`),
  `get_fields_list` (field names joined by spaces) and
  `concatenate_point_clouds`. Concatenation returns a new cloud of height 1;
  padding fields named `_` are skipped and `rgb` / `rgba` are treated as the
  same field. Mismatched fields raise `ConcatenationError`.
- `cloudmsgs.transforms`: `Transform` (translation plus quaternion
  `x, y, z, w`), `TransformStamped`, `transform_as_matrix` (a 4x4 float32
  NumPy array), and functions over packed `PointCloud2` data:
  - `transform_point_cloud2(matrix, cloud)` transforms the float32 `x`, `y`,
    `z` fields and, if present, `vp_x`, `vp_y`, `vp_z`. Points with a
    non-finite coordinate are left alone unless a finite `distance` value is
    present; such max-range points are transformed using the distance as
    `x`, the new `x` is stored back in `distance`, and `x` becomes NaN. A
    missing or non-float32 `x`/`y`/`z` raises `ValueError`.
  - `transform_point_cloud2_with(target_frame, transform, cloud)` applies a
    known `Transform` or `TransformStamped` and sets the frame id.
  - `transform_point_cloud2_to_frame(target_frame, cloud, buffer)` asks
    `buffer.lookup_transform(target_frame, source_frame, time, timeout)` for
    the transform at the cloud's stamp with a one-second timeout.

  The exception classes `TransformError`, `TransformLookupError` and
  `ExtrapolationError` are provided for buffers to raise; errors from the
  buffer propagate unchanged.
- `cloudmsgs.point_transforms`: `Point` (coordinates, optional normal and an
  attribute dict) and `PointCloud`, with `transform_point_cloud`,
  `transform_point_cloud_with_normals` (also rotates normals),
  `transform_point_cloud_to_frame` (looks up at the cloud's stamp through
  `buffer.lookup_transform` with a zero timeout) and
  `transform_point_cloud_between` (uses `buffer.lookup_transform_full` with a
  fixed frame, and gives the result a fresh header stamped with the target
  time). In a cloud that is not dense, points with non-finite coordinates
  are copied unchanged.
- `cloudmsgs.validation`: `is_valid_cloud` (data length equals
  `width * height * point_step`), `is_valid_points` (point count equals
  `width * height`), `is_valid_indices` and `is_valid_model` (always true),
  and `NodeParameters` with its defaults (`max_queue_size=3`, all flags
  `False`). Invalid clouds are reported as warnings on the `cloudmsgs`
  logger.

All transform functions return new objects and leave their input unchanged.
`transform_point_cloud2_with`, `transform_point_cloud2_to_frame` and
`transform_point_cloud_to_frame` return an unchanged copy when the cloud is
already in the target frame.

## Example

    from cloudmsgs.messages import Time
    from cloudmsgs.conversions import stamp_to_pcl, stamp_from_pcl

    stamp = Time.from_nanoseconds(1_000_001_000)
    micros = stamp_to_pcl(stamp)          # 1000001
    assert stamp_from_pcl(micros) == stamp

## What it does not do

This is a library only. It has no command-line tools, does not read or write
point cloud files on disk, does not publish or subscribe to messages, and
does not keep a transform buffer of its own: the lookup functions take any
object that provides `lookup_transform` or `lookup_transform_full`. It also
does not convert clouds into images.