"""Conversions between message types and point cloud library types."""

from __future__ import annotations

from functools import singledispatch
from typing import Any

from cloudmsgs.messages import (
    Header,
    Image,
    ModelCoefficients,
    PointCloud2,
    PointField,
    PointIndices,
    PolygonMesh,
    Time,
    Vertices,
)
from cloudmsgs.pcl_types import (
    PCLHeader,
    PCLImage,
    PCLModelCoefficients,
    PCLPointCloud2,
    PCLPointField,
    PCLPointIndices,
    PCLPolygonMesh,
    PCLVertices,
)

_NS_PER_US = 1000


def stamp_from_pcl(pcl_stamp: int) -> Time:
    """Turn a microsecond stamp into a Time."""
    return Time.from_nanoseconds(pcl_stamp * _NS_PER_US)


def stamp_to_pcl(stamp: Time) -> int:
    """Turn a Time into a microsecond stamp, dropping sub-microsecond parts."""
    return stamp.nanoseconds() // _NS_PER_US


# ---------------------------------------------------------------- from_pcl


@singledispatch
def from_pcl(obj: Any) -> Any:
    """Convert a point cloud library object into the matching message."""
    raise TypeError(f"cannot convert {type(obj).__name__} to a message")


@from_pcl.register
def _(obj: list) -> list:
    return [from_pcl(item) for item in obj]


@from_pcl.register
def _(obj: PCLHeader) -> Header:
    return Header(stamp=stamp_from_pcl(obj.stamp), frame_id=obj.frame_id)


@from_pcl.register
def _(obj: PCLImage) -> Image:
    return Image(
        header=from_pcl(obj.header),
        height=obj.height,
        width=obj.width,
        encoding=obj.encoding,
        is_bigendian=obj.is_bigendian,
        step=obj.step,
        data=obj.data,
    )


@from_pcl.register
def _(obj: PCLPointField) -> PointField:
    return PointField(name=obj.name, offset=obj.offset, datatype=obj.datatype, count=obj.count)


@from_pcl.register
def _(obj: PCLPointCloud2) -> PointCloud2:
    return PointCloud2(
        header=from_pcl(obj.header),
        height=obj.height,
        width=obj.width,
        fields=from_pcl(obj.fields),
        is_bigendian=obj.is_bigendian,
        point_step=obj.point_step,
        row_step=obj.row_step,
        data=obj.data,
        is_dense=obj.is_dense,
    )


@from_pcl.register
def _(obj: PCLPointIndices) -> PointIndices:
    return PointIndices(header=from_pcl(obj.header), indices=list(obj.indices))


@from_pcl.register
def _(obj: PCLModelCoefficients) -> ModelCoefficients:
    return ModelCoefficients(header=from_pcl(obj.header), values=list(obj.values))


@from_pcl.register
def _(obj: PCLVertices) -> Vertices:
    return Vertices(vertices=list(obj.vertices))


@from_pcl.register
def _(obj: PCLPolygonMesh) -> PolygonMesh:
    return PolygonMesh(
        header=from_pcl(obj.header),
        cloud=from_pcl(obj.cloud),
        polygons=from_pcl(obj.polygons),
    )


# ------------------------------------------------------------------ to_pcl


@singledispatch
def to_pcl(msg: Any) -> Any:
    """Convert a message into the matching point cloud library object."""
    raise TypeError(f"cannot convert {type(msg).__name__} to a point cloud library type")


@to_pcl.register
def _(msg: list) -> list:
    return [to_pcl(item) for item in msg]


@to_pcl.register
def _(msg: Header) -> PCLHeader:
    # Messages carry no sequence number, so it is always reset.
    return PCLHeader(seq=0, stamp=stamp_to_pcl(msg.stamp), frame_id=msg.frame_id)


@to_pcl.register
def _(msg: Image) -> PCLImage:
    return PCLImage(
        header=to_pcl(msg.header),
        height=msg.height,
        width=msg.width,
        encoding=msg.encoding,
        is_bigendian=msg.is_bigendian,
        step=msg.step,
        data=msg.data,
    )


@to_pcl.register
def _(msg: PointField) -> PCLPointField:
    return PCLPointField(name=msg.name, offset=msg.offset, datatype=msg.datatype, count=msg.count)


@to_pcl.register
def _(msg: PointCloud2) -> PCLPointCloud2:
    return PCLPointCloud2(
        header=to_pcl(msg.header),
        height=msg.height,
        width=msg.width,
        fields=to_pcl(msg.fields),
        is_bigendian=msg.is_bigendian,
        point_step=msg.point_step,
        row_step=msg.row_step,
        data=msg.data,
        is_dense=msg.is_dense,
    )


@to_pcl.register
def _(msg: PointIndices) -> PCLPointIndices:
    return PCLPointIndices(header=to_pcl(msg.header), indices=list(msg.indices))


@to_pcl.register
def _(msg: ModelCoefficients) -> PCLModelCoefficients:
    return PCLModelCoefficients(header=to_pcl(msg.header), values=list(msg.values))


@to_pcl.register
def _(msg: Vertices) -> PCLVertices:
    return PCLVertices(vertices=list(msg.vertices))


@to_pcl.register
def _(msg: PolygonMesh) -> PCLPolygonMesh:
    return PCLPolygonMesh(
        header=to_pcl(msg.header),
        cloud=to_pcl(msg.cloud),
        polygons=to_pcl(msg.polygons),
    )