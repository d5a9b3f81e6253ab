import pytest

from cloudmsgs.conversions import from_pcl, stamp_from_pcl, stamp_to_pcl, to_pcl
from cloudmsgs.messages import (
    Header,
    Image,
    ModelCoefficients,
    PointCloud2,
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


@pytest.fixture
def pcl_image():
    return PCLImage(
        header=PCLHeader(stamp=3141592653, frame_id="pcl"),
        height=1,
        width=2,
        step=1,
        is_bigendian=True,
        encoding="bgr8",
        data=bytes([0x42, 0x43]),
    )


@pytest.fixture
def pcl_pc2():
    return PCLPointCloud2(
        header=PCLHeader(stamp=3141592653, frame_id="pcl"),
        height=1,
        width=2,
        point_step=1,
        row_step=1,
        is_bigendian=True,
        is_dense=True,
        fields=[
            PCLPointField(name="XYZ", datatype=PCLPointField.INT8, count=3, offset=0),
            PCLPointField(name="RGB", datatype=PCLPointField.INT8, count=3, offset=8 * 3),
        ],
        data=bytes([0x42, 0x43]),
    )


def check_image(image):
    assert image.header.frame_id == "pcl"
    assert image.height == 1
    assert image.width == 2
    assert image.step == 1
    assert image.is_bigendian
    assert image.encoding == "bgr8"
    assert len(image.data) == 2
    assert image.data[0] == 0x42
    assert image.data[1] == 0x43


def check_pc(pc):
    assert pc.header.frame_id == "pcl"
    assert pc.height == 1
    assert pc.width == 2
    assert pc.point_step == 1
    assert pc.row_step == 1
    assert pc.is_bigendian
    assert pc.is_dense
    assert pc.fields[0].name == "XYZ"
    assert pc.fields[0].datatype == PCLPointField.INT8
    assert pc.fields[0].count == 3
    assert pc.fields[0].offset == 0
    assert pc.fields[1].name == "RGB"
    assert pc.fields[1].datatype == PCLPointField.INT8
    assert pc.fields[1].count == 3
    assert pc.fields[1].offset == 8 * 3
    assert len(pc.data) == 2
    assert pc.data[0] == 0x42
    assert pc.data[1] == 0x43


def test_image_conversion(pcl_image):
    image = from_pcl(pcl_image)
    assert isinstance(image, Image)
    check_image(image)
    pcl_image2 = to_pcl(image)
    assert isinstance(pcl_image2, PCLImage)
    check_image(pcl_image2)
    assert pcl_image2.header.stamp == pcl_image.header.stamp


def test_pointcloud2_conversion(pcl_pc2):
    pc2 = from_pcl(pcl_pc2)
    assert isinstance(pc2, PointCloud2)
    check_pc(pc2)
    pcl_pc2_2 = to_pcl(pc2)
    assert isinstance(pcl_pc2_2, PCLPointCloud2)
    check_pc(pcl_pc2_2)
    assert pcl_pc2_2.header.stamp == pcl_pc2.header.stamp


@pytest.mark.parametrize(
    "stamp",
    [
        Time(1, 1000),
        Time(1, 999999000),
        Time(1, 999000000),
        Time(1423680574, 746000000),
        Time(1423680629, 901000000),
    ],
)
def test_stamp_round_trip(stamp):
    assert stamp_from_pcl(stamp_to_pcl(stamp)) == stamp


def test_stamp_to_pcl_drops_sub_microseconds():
    assert stamp_to_pcl(Time(1, 1999)) == stamp_to_pcl(Time(1, 1000))


def test_stamp_from_pcl_is_microseconds():
    assert stamp_from_pcl(3141592653).nanoseconds() == 3141592653 * 1000


def test_header_to_pcl_resets_seq():
    header = to_pcl(Header(stamp=Time(1, 1000), frame_id="pcl"))
    assert header.seq == 0
    assert header.frame_id == "pcl"
    assert from_pcl(header) == Header(stamp=Time(1, 1000), frame_id="pcl")


def test_indices_round_trip():
    msg = PointIndices(header=Header(stamp=Time(1, 1000), frame_id="pcl"), indices=[3, 1, 2])
    pcl = to_pcl(msg)
    assert isinstance(pcl, PCLPointIndices)
    assert pcl.indices == [3, 1, 2]
    assert from_pcl(pcl) == msg


def test_coefficients_round_trip():
    msg = ModelCoefficients(header=Header(frame_id="pcl"), values=[0.5, -1.0])
    pcl = to_pcl(msg)
    assert isinstance(pcl, PCLModelCoefficients)
    assert from_pcl(pcl) == msg


def test_mesh_round_trip(pcl_pc2):
    mesh = PCLPolygonMesh(
        header=PCLHeader(stamp=5, frame_id="mesh"),
        cloud=pcl_pc2,
        polygons=[PCLVertices([0, 1, 2]), PCLVertices([2, 3, 0])],
    )
    msg = from_pcl(mesh)
    assert isinstance(msg, PolygonMesh)
    assert msg.polygons == [Vertices([0, 1, 2]), Vertices([2, 3, 0])]
    check_pc(msg.cloud)
    assert to_pcl(msg) == mesh


def test_conversion_copies_lists():
    pcl = PCLPointIndices(indices=[1, 2])
    msg = from_pcl(pcl)
    msg.indices.append(3)
    assert pcl.indices == [1, 2]


def test_unknown_type_rejected():
    with pytest.raises(TypeError):
        from_pcl("not a cloud")
    with pytest.raises(TypeError):
        to_pcl(42)