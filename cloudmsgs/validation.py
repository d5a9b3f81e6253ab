"""Node parameters and sanity checks for incoming clouds, indices and models."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cloudmsgs.conversions import stamp_from_pcl
from cloudmsgs.messages import ModelCoefficients, PointCloud2, PointIndices
from cloudmsgs.point_transforms import PointCloud

_log = logging.getLogger("cloudmsgs")


@dataclass(frozen=True)
class NodeParameters:
    """Read-only settings shared by point cloud processing nodes.

    max_queue_size: history depth of the subscriptions.
    use_indices: only process the subset of the cloud given by an indices topic.
    transient_local_indices: use the latest indices instead of synchronised ones.
    approximate_sync: match clouds and indices whose stamps are only roughly equal.
    """

    max_queue_size: int = 3
    use_indices: bool = False
    transient_local_indices: bool = False
    approximate_sync: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_queue_size, bool) or not isinstance(self.max_queue_size, int):
            raise TypeError("max_queue_size must be an integer")
        for name in ("use_indices", "transient_local_indices", "approximate_sync"):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a boolean")
        _log.debug(
            "Node created with the following parameters:\n"
            " - approximate_sync          : %s\n"
            " - use_indices               : %s\n"
            " - transient_local_indices_  : %s\n"
            " - max_queue_size            : %d",
            str(self.approximate_sync).lower(),
            str(self.use_indices).lower(),
            str(self.transient_local_indices).lower(),
            self.max_queue_size,
        )


def is_valid_cloud(cloud: PointCloud2, topic_name: str = "input") -> bool:
    """True if the cloud's data size matches width * height * point_step.

    A mismatch is logged as a warning naming the topic.
    """
    if cloud.width * cloud.height * cloud.point_step != len(cloud.data):
        _log.warning(
            "Invalid PointCloud (data = %d, width = %d, height = %d, step = %d) "
            "with stamp %d.%09d, and frame %s on topic %s received!",
            len(cloud.data),
            cloud.width,
            cloud.height,
            cloud.point_step,
            cloud.header.stamp.sec,
            cloud.header.stamp.nanosec,
            cloud.header.frame_id,
            topic_name,
        )
        return False
    return True


def is_valid_points(cloud: PointCloud, topic_name: str = "input") -> bool:
    """True if the number of points matches width * height.

    A mismatch is logged as a warning naming the topic.
    """
    if cloud.width * cloud.height != len(cloud.points):
        stamp = stamp_from_pcl(cloud.header.stamp)
        _log.warning(
            "Invalid PointCloud (points = %d, width = %d, height = %d) "
            "with stamp %d.%09d, and frame %s on topic %s received!",
            len(cloud.points),
            cloud.width,
            cloud.height,
            stamp.sec,
            stamp.nanosec,
            cloud.header.frame_id,
            topic_name,
        )
        return False
    return True


def is_valid_indices(indices: PointIndices, topic_name: str = "indices") -> bool:
    """Indices are always accepted, empty ones included."""
    return True


def is_valid_model(model: ModelCoefficients, topic_name: str = "model") -> bool:
    """Model coefficients are always accepted, empty ones included."""
    return True