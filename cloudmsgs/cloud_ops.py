"""Field lookup and concatenation of PointCloud2 messages."""

from __future__ import annotations

import copy

from cloudmsgs.messages import PointCloud2, PointFieldType

_PADDING = "_"
_COLOUR_PAIRS = {("rgb", "rgba"), ("rgba", "rgb")}

_FIELD_SIZES = {
    PointFieldType.INT8: 1,
    PointFieldType.UINT8: 1,
    PointFieldType.INT16: 2,
    PointFieldType.UINT16: 2,
    PointFieldType.INT32: 4,
    PointFieldType.UINT32: 4,
    PointFieldType.FLOAT32: 4,
    PointFieldType.FLOAT64: 8,
}


class ConcatenationError(ValueError):
    """Raised when two point clouds have incompatible fields."""


def field_size(datatype: int) -> int:
    """Size in bytes of one element of the given datatype, 0 if unknown."""
    try:
        return _FIELD_SIZES[PointFieldType(datatype)]
    except ValueError:
        return 0


def get_field_index(cloud: PointCloud2, field_name: str) -> int | None:
    """Position of the first field with this name, or None."""
    return next(
        (index for index, pf in enumerate(cloud.fields) if pf.name == field_name),
        None,
    )


def get_fields_list(cloud: PointCloud2) -> str:
    """The names of the cloud's fields, separated by spaces."""
    return " ".join(pf.name for pf in cloud.fields)


def _names_compatible(name1: str, name2: str) -> bool:
    return name1 == name2 or (name1, name2) in _COLOUR_PAIRS


def concatenate_point_clouds(cloud1: PointCloud2, cloud2: PointCloud2) -> PointCloud2:
    """Append the points of cloud2 to those of cloud1 in a new, unorganised cloud.

    Padding fields named "_" are skipped; "rgb" and "rgba" count as the same field.
    Raises ConcatenationError when the fields do not match.
    """
    count1 = cloud1.width * cloud1.height
    count2 = cloud2.width * cloud2.height

    if count1 == 0 and count2 > 0:
        return copy.deepcopy(cloud2)
    if count1 > 0 and count2 == 0:
        return copy.deepcopy(cloud1)

    strip = any(pf.name == _PADDING for pf in (*cloud1.fields, *cloud2.fields))

    if not strip and len(cloud1.fields) != len(cloud2.fields):
        raise ConcatenationError(
            f"number of fields in cloud1 ({len(cloud1.fields)}) != "
            f"number of fields in cloud2 ({len(cloud2.fields)})"
        )

    if not strip:
        for index, (pf1, pf2) in enumerate(zip(cloud1.fields, cloud2.fields)):
            if not _names_compatible(pf1.name, pf2.name):
                raise ConcatenationError(
                    f"name of field {index} in cloud1, {pf1.name}, "
                    f"does not match name in cloud2, {pf2.name}"
                )

    out = copy.deepcopy(cloud1)
    base = len(cloud1.data)
    out.width = count1 + count2
    out.height = 1
    out.row_step = out.width
    out.is_dense = cloud1.is_dense and cloud2.is_dense

    if not strip:
        out.data = cloud1.data + cloud2.data
        return out

    fields2 = [pf for pf in cloud2.fields if pf.name != _PADDING]
    sizes2 = [pf.count * field_size(pf.datatype) for pf in fields2]

    data = bytearray(cloud1.data)
    data.extend(bytes(count2 * out.point_step))

    for point in range(count2):
        i = 0
        for pf2, size in zip(fields2, sizes2):
            if i >= len(cloud1.fields):
                break
            pf1 = cloud1.fields[i]
            if pf1.name == _PADDING:
                i += 1
                continue
            if _names_compatible(pf1.name, pf2.name):
                dst = base + point * cloud1.point_step + pf1.offset
                src = point * cloud2.point_step + pf2.offset
                data[dst:dst + size] = cloud2.data[src:src + size]
                i += 1

    out.data = bytes(data)
    return out