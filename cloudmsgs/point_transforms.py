"""Rigid transforms applied to point clouds held as lists of points."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Any, Protocol, Union

import numpy as np

from cloudmsgs.conversions import stamp_from_pcl, to_pcl
from cloudmsgs.messages import Header, Time
from cloudmsgs.pcl_types import PCLHeader
from cloudmsgs.transforms import Transform, TransformStamped, transform_as_matrix

_AnyTransform = Union[Transform, TransformStamped]


@dataclass
class Point:
    """A point with coordinates, an optional surface normal and other attributes."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    normal: tuple[float, float, float] | None = None
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class PointCloud:
    """A cloud of points with a microsecond-stamped header."""

    header: PCLHeader = field(default_factory=PCLHeader)
    points: list[Point] = field(default_factory=list)
    width: int = 0
    height: int = 0
    is_dense: bool = True


class _TransformBuffer(Protocol):
    def lookup_transform(
        self, target_frame: str, source_frame: str, time: Time, timeout: float
    ) -> TransformStamped: ...


class _FullTransformBuffer(Protocol):
    def lookup_transform_full(
        self,
        target_frame: str,
        target_time: Time,
        source_frame: str,
        source_time: Time,
        fixed_frame: str,
    ) -> TransformStamped: ...


def _apply(cloud: PointCloud, transform: _AnyTransform, with_normals: bool) -> PointCloud:
    matrix = transform_as_matrix(transform)
    rotation = matrix[:3, :3]
    translation = matrix[:3, 3]

    coords = np.array(
        [(p.x, p.y, p.z) for p in cloud.points], dtype=np.float32
    ).reshape(-1, 3)
    with np.errstate(invalid="ignore", over="ignore"):
        moved = coords @ rotation.T + translation
    # A non-dense cloud may hold invalid points; those are copied unchanged.
    if cloud.is_dense:
        active = np.ones(len(cloud.points), dtype=bool)
    else:
        active = np.isfinite(coords).all(axis=1)

    points = []
    for point, new_xyz, is_active in zip(cloud.points, moved, active):
        if not is_active:
            points.append(copy.deepcopy(point))
            continue
        normal = point.normal
        if with_normals and normal is not None:
            with np.errstate(invalid="ignore", over="ignore"):
                rotated = rotation @ np.asarray(normal, dtype=np.float32)
            normal = tuple(float(v) for v in rotated)
        points.append(
            replace(
                point,
                x=float(new_xyz[0]),
                y=float(new_xyz[1]),
                z=float(new_xyz[2]),
                normal=normal,
                attributes=copy.deepcopy(point.attributes),
            )
        )

    return PointCloud(
        header=copy.deepcopy(cloud.header),
        points=points,
        width=cloud.width,
        height=cloud.height,
        is_dense=cloud.is_dense,
    )


def transform_point_cloud(cloud: PointCloud, transform: _AnyTransform) -> PointCloud:
    """Move every point's coordinates by the transform; other data is copied."""
    return _apply(cloud, transform, with_normals=False)


def transform_point_cloud_with_normals(
    cloud: PointCloud, transform: _AnyTransform
) -> PointCloud:
    """Move every point's coordinates and rotate its normal by the transform."""
    return _apply(cloud, transform, with_normals=True)


def transform_point_cloud_to_frame(
    target_frame: str,
    cloud: PointCloud,
    buffer: _TransformBuffer,
    with_normals: bool = False,
) -> PointCloud:
    """Transform a cloud into target_frame using a transform looked up in buffer.

    A cloud already in target_frame is returned as a copy.  The lookup is made
    at the cloud's stamp without waiting; lookup errors from the buffer propagate.
    """
    if cloud.header.frame_id == target_frame:
        return copy.deepcopy(cloud)
    stamped = buffer.lookup_transform(
        target_frame, cloud.header.frame_id, stamp_from_pcl(cloud.header.stamp), 0.0
    )
    out = _apply(cloud, stamped, with_normals)
    out.header.frame_id = target_frame
    return out


def transform_point_cloud_between(
    target_frame: str,
    target_time: Time,
    cloud: PointCloud,
    fixed_frame: str,
    buffer: _FullTransformBuffer,
    with_normals: bool = False,
) -> PointCloud:
    """Transform a cloud into target_frame at target_time through fixed_frame.

    The result's header is replaced by a fresh one stamped with target_time,
    whose frame id is empty and whose sequence number is 0.  Lookup errors
    from the buffer propagate.
    """
    stamped = buffer.lookup_transform_full(
        target_frame,
        target_time,
        cloud.header.frame_id,
        stamp_from_pcl(cloud.header.stamp),
        fixed_frame,
    )
    out = _apply(cloud, stamped, with_normals)
    out.header = to_pcl(Header(stamp=target_time))
    return out