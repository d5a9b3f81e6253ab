"""Point cloud message types, conversions, concatenation, rigid transforms and validation."""

__version__ = "0.1.0"

__all__ = [
    "cloud_ops",
    "conversions",
    "messages",
    "pcl_types",
    "point_transforms",
    "transforms",
    "validation",
]