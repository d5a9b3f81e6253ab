"""Rigid transforms and their application to PointCloud2 messages."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Protocol, Union

import numpy as np

from cloudmsgs.cloud_ops import get_field_index
from cloudmsgs.messages import Header, PointCloud2, PointFieldType, Time

_LOOKUP_TIMEOUT = 1.0  # seconds


class TransformError(Exception):
    """Base class for failures to obtain a transform."""


class TransformLookupError(TransformError):
    """Raised when a transform between two frames is not known."""


class ExtrapolationError(TransformError):
    """Raised when a transform is asked for outside the time range it is known for."""


@dataclass(frozen=True)
class Transform:
    """A rotation (quaternion x, y, z, w) followed by a translation (x, y, z).

    The quaternion need not be normalised, but it must not be zero.
    """

    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)

    def __post_init__(self) -> None:
        translation = tuple(float(v) for v in self.translation)
        rotation = tuple(float(v) for v in self.rotation)
        if len(translation) != 3:
            raise ValueError("translation needs three components")
        if len(rotation) != 4:
            raise ValueError("rotation needs four quaternion components")
        if sum(v * v for v in rotation) == 0.0:
            raise ValueError("rotation quaternion must not be zero")
        object.__setattr__(self, "translation", translation)
        object.__setattr__(self, "rotation", rotation)


@dataclass
class TransformStamped:
    """A transform from child_frame_id into header.frame_id at header.stamp."""

    header: Header = field(default_factory=Header)
    child_frame_id: str = ""
    transform: Transform = field(default_factory=Transform)


class _TransformBuffer(Protocol):
    def lookup_transform(
        self, target_frame: str, source_frame: str, time: Time, timeout: float
    ) -> TransformStamped: ...


_AnyTransform = Union[Transform, TransformStamped]


def _basis(rotation: tuple[float, float, float, float]) -> list[list[float]]:
    x, y, z, w = rotation
    s = 2.0 / (x * x + y * y + z * z + w * w)
    xs, ys, zs = x * s, y * s, z * s
    wx, wy, wz = w * xs, w * ys, w * zs
    xx, xy, xz = x * xs, x * ys, x * zs
    yy, yz, zz = y * ys, y * zs, z * zs
    return [
        [1.0 - (yy + zz), xy - wz, xz + wy],
        [xy + wz, 1.0 - (xx + zz), yz - wx],
        [xz - wy, yz + wx, 1.0 - (xx + yy)],
    ]


def transform_as_matrix(transform: _AnyTransform) -> np.ndarray:
    """The transform as a 4x4 homogeneous float32 matrix."""
    if isinstance(transform, TransformStamped):
        transform = transform.transform
    rows = [
        [*row, offset]
        for row, offset in zip(_basis(transform.rotation), transform.translation)
    ]
    rows.append([0.0, 0.0, 0.0, 1.0])
    return np.array(rows, dtype=np.float32)


def _float_view(buf: bytearray, offset: int, count: int, stride: int, dtype: np.dtype) -> np.ndarray:
    if count == 0:
        return np.empty(0, dtype=dtype)
    end = (count - 1) * stride + offset + dtype.itemsize
    if offset < 0 or end > len(buf):
        raise ValueError("point data is shorter than the cloud layout describes")
    return np.ndarray((count,), dtype=dtype, buffer=buf, offset=offset, strides=(stride,))


def transform_point_cloud2(matrix: np.ndarray, cloud: PointCloud2) -> PointCloud2:
    """Apply a 4x4 matrix to the x, y, z (and vp_x, vp_y, vp_z) of every point.

    Points with a non-finite coordinate are left alone, unless the cloud has a
    finite "distance" value for them: such max-range points have x taken from
    the distance, are transformed, and keep the new x in the distance field
    while x itself becomes NaN.  Raises ValueError if x, y or z is missing or
    not FLOAT32.  The input cloud is not changed.
    """
    matrix = np.asarray(matrix, dtype=np.float32)
    if matrix.shape != (4, 4):
        raise ValueError("transform matrix must be 4x4")

    indices = [get_field_index(cloud, name) for name in ("x", "y", "z")]
    if any(index is None for index in indices):
        raise ValueError("input dataset has no X-Y-Z coordinates")
    xyz_fields = [cloud.fields[index] for index in indices]
    if any(pf.datatype != PointFieldType.FLOAT32 for pf in xyz_fields):
        raise ValueError("X-Y-Z coordinates are not floats; only floats are supported")

    out = copy.deepcopy(cloud)
    buf = bytearray(cloud.data)
    dtype = np.dtype(">f4" if cloud.is_bigendian else "<f4")
    count = cloud.width * cloud.height
    step = cloud.point_step

    views = [_float_view(buf, pf.offset, count, step, dtype) for pf in xyz_fields]
    points = np.stack(
        [*(view.astype(np.float32) for view in views), np.ones(count, dtype=np.float32)],
        axis=1,
    )

    finite = np.isfinite(points[:, :3]).all(axis=1)
    dist_index = get_field_index(cloud, "distance")
    if dist_index is not None:
        dist_view = _float_view(buf, cloud.fields[dist_index].offset, count, step, dtype)
        distance = dist_view.astype(np.float32)
        max_range = ~finite & np.isfinite(distance)
    else:
        dist_view = None
        max_range = np.zeros(count, dtype=bool)

    moved = points.copy()
    if dist_view is not None:
        moved[max_range, 0] = distance[max_range]
    with np.errstate(invalid="ignore", over="ignore"):
        transformed = moved @ matrix.T
    result = np.where((finite | max_range)[:, None], transformed, points)

    if dist_view is not None and max_range.any():
        dist_view[max_range] = result[max_range, 0]
        result[max_range, 0] = np.nan

    for column, view in enumerate(views):
        view[:] = result[:, column]

    vp_index = get_field_index(cloud, "vp_x")
    if vp_index is not None:
        base = cloud.fields[vp_index].offset
        vp_views = [_float_view(buf, base + 4 * k, count, step, dtype) for k in range(3)]
        viewpoints = np.stack(
            [*(view.astype(np.float32) for view in vp_views), np.ones(count, dtype=np.float32)],
            axis=1,
        )
        with np.errstate(invalid="ignore", over="ignore"):
            vp_out = viewpoints @ matrix.T
        for column, view in enumerate(vp_views):
            view[:] = vp_out[:, column]

    out.data = bytes(buf)
    return out


def transform_point_cloud2_with(
    target_frame: str, transform: _AnyTransform, cloud: PointCloud2
) -> PointCloud2:
    """Transform a cloud with a known transform and label it with target_frame.

    A cloud already in target_frame is returned as an unchanged copy.
    """
    if cloud.header.frame_id == target_frame:
        return copy.deepcopy(cloud)
    out = transform_point_cloud2(transform_as_matrix(transform), cloud)
    out.header.frame_id = target_frame
    return out


def transform_point_cloud2_to_frame(
    target_frame: str, cloud: PointCloud2, buffer: _TransformBuffer
) -> PointCloud2:
    """Transform a cloud into target_frame using a transform looked up in buffer.

    The lookup is made at the cloud's stamp with a one-second timeout; a
    TransformLookupError or ExtrapolationError from the buffer propagates.
    """
    if cloud.header.frame_id == target_frame:
        return copy.deepcopy(cloud)
    stamped = buffer.lookup_transform(
        target_frame, cloud.header.frame_id, cloud.header.stamp, _LOOKUP_TIMEOUT
    )
    out = transform_point_cloud2(transform_as_matrix(stamped), cloud)
    out.header.frame_id = target_frame
    return out