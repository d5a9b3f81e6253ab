"""Message types for headers, point clouds, images, indices and meshes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

_NS_PER_SEC = 1_000_000_000


class PointFieldType(IntEnum):
    """Datatype codes of a point field."""

    INT8 = 1
    UINT8 = 2
    INT16 = 3
    UINT16 = 4
    INT32 = 5
    UINT32 = 6
    FLOAT32 = 7
    FLOAT64 = 8


@dataclass(frozen=True, order=True)
class Time:
    """A non-negative point in time as seconds and nanoseconds.

    Nanoseconds of a second or more are carried into the seconds.
    """

    sec: int = 0
    nanosec: int = 0

    def __post_init__(self) -> None:
        if self.sec < 0 or self.nanosec < 0:
            raise ValueError("cannot store a negative time point")
        carry, nanosec = divmod(self.nanosec, _NS_PER_SEC)
        object.__setattr__(self, "sec", self.sec + carry)
        object.__setattr__(self, "nanosec", nanosec)

    @classmethod
    def from_nanoseconds(cls, nanoseconds: int) -> Time:
        """Build a time from a count of nanoseconds."""
        if nanoseconds < 0:
            raise ValueError("cannot store a negative time point")
        sec, nanosec = divmod(int(nanoseconds), _NS_PER_SEC)
        return cls(sec, nanosec)

    def nanoseconds(self) -> int:
        """The whole time as a count of nanoseconds."""
        return self.sec * _NS_PER_SEC + self.nanosec


@dataclass
class Header:
    stamp: Time = field(default_factory=Time)
    frame_id: str = ""


@dataclass
class PointField:
    name: str = ""
    offset: int = 0
    datatype: int = 0
    count: int = 0


@dataclass
class PointCloud2:
    header: Header = field(default_factory=Header)
    height: int = 0
    width: int = 0
    fields: list[PointField] = field(default_factory=list)
    is_bigendian: bool = False
    point_step: int = 0
    row_step: int = 0
    data: bytes = b""
    is_dense: bool = False

    def __post_init__(self) -> None:
        self.data = bytes(self.data)


@dataclass
class Image:
    header: Header = field(default_factory=Header)
    height: int = 0
    width: int = 0
    encoding: str = ""
    is_bigendian: bool = False
    step: int = 0
    data: bytes = b""

    def __post_init__(self) -> None:
        self.data = bytes(self.data)


@dataclass
class PointIndices:
    header: Header = field(default_factory=Header)
    indices: list[int] = field(default_factory=list)


@dataclass
class ModelCoefficients:
    header: Header = field(default_factory=Header)
    values: list[float] = field(default_factory=list)


@dataclass
class Vertices:
    vertices: list[int] = field(default_factory=list)


@dataclass
class PolygonMesh:
    header: Header = field(default_factory=Header)
    cloud: PointCloud2 = field(default_factory=PointCloud2)
    polygons: list[Vertices] = field(default_factory=list)