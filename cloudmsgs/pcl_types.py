"""In-memory point cloud library types: microsecond stamps and raw buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from cloudmsgs.messages import PointFieldType

_UINT64_MAX = 2**64 - 1


@dataclass
class PCLHeader:
    """Header whose stamp counts microseconds as an unsigned 64-bit value."""

    seq: int = 0
    stamp: int = 0
    frame_id: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.stamp <= _UINT64_MAX:
            raise ValueError(f"stamp {self.stamp} does not fit in an unsigned 64-bit value")


@dataclass
class PCLPointField:
    INT8: ClassVar[PointFieldType] = PointFieldType.INT8
    UINT8: ClassVar[PointFieldType] = PointFieldType.UINT8
    INT16: ClassVar[PointFieldType] = PointFieldType.INT16
    UINT16: ClassVar[PointFieldType] = PointFieldType.UINT16
    INT32: ClassVar[PointFieldType] = PointFieldType.INT32
    UINT32: ClassVar[PointFieldType] = PointFieldType.UINT32
    FLOAT32: ClassVar[PointFieldType] = PointFieldType.FLOAT32
    FLOAT64: ClassVar[PointFieldType] = PointFieldType.FLOAT64

    name: str = ""
    offset: int = 0
    datatype: int = 0
    count: int = 0


@dataclass
class PCLPointCloud2:
    header: PCLHeader = field(default_factory=PCLHeader)
    height: int = 0
    width: int = 0
    fields: list[PCLPointField] = field(default_factory=list)
    is_bigendian: bool = False
    point_step: int = 0
    row_step: int = 0
    data: bytes = b""
    is_dense: bool = False

    def __post_init__(self) -> None:
        self.data = bytes(self.data)


@dataclass
class PCLImage:
    header: PCLHeader = field(default_factory=PCLHeader)
    height: int = 0
    width: int = 0
    encoding: str = ""
    is_bigendian: bool = False
    step: int = 0
    data: bytes = b""

    def __post_init__(self) -> None:
        self.data = bytes(self.data)


@dataclass
class PCLPointIndices:
    header: PCLHeader = field(default_factory=PCLHeader)
    indices: list[int] = field(default_factory=list)


@dataclass
class PCLModelCoefficients:
    header: PCLHeader = field(default_factory=PCLHeader)
    values: list[float] = field(default_factory=list)


@dataclass
class PCLVertices:
    vertices: list[int] = field(default_factory=list)


@dataclass
class PCLPolygonMesh:
    header: PCLHeader = field(default_factory=PCLHeader)
    cloud: PCLPointCloud2 = field(default_factory=PCLPointCloud2)
    polygons: list[PCLVertices] = field(default_factory=list)