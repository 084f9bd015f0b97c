"""
pypointcloud: variable-schema point clouds with cropping, concatenation and voxel down-sampling
"""

# Make core modules available at package level
from .fields import (
    BaseField, DescriptorType, Fields,
    NONE, INHERIT, XYZS, NORMALS, RGBS,
    CURVATURE, FPFH, SHOT,
)
from .exceptions import (
    PointCloudError,
    InvalidArgumentError,
    EmptyOrReservedFieldSetError,
    MissingFieldsError,
    FieldSetMismatchError,
    FieldMismatchError,
    SizeMismatchError,
)
from .storage import Storage
from .pointcloud import PointCloud, concatenate, DEFAULT_VALUE, DEFAULT_COLOR
from .synthetic import generate_cylinder_point_cloud, generate_plane_point_cloud
from .logger import CloudLogger, LogLevel, get_logger, set_logger

# Open3D conversions live in pypointcloud.interop (requires the open3d extra)

__all__ = [
    'BaseField',
    'DescriptorType',
    'Fields',
    'NONE',
    'INHERIT',
    'XYZS',
    'NORMALS',
    'RGBS',
    'CURVATURE',
    'FPFH',
    'SHOT',
    'PointCloudError',
    'InvalidArgumentError',
    'EmptyOrReservedFieldSetError',
    'MissingFieldsError',
    'FieldSetMismatchError',
    'FieldMismatchError',
    'SizeMismatchError',
    'Storage',
    'PointCloud',
    'concatenate',
    'DEFAULT_VALUE',
    'DEFAULT_COLOR',
    'generate_cylinder_point_cloud',
    'generate_plane_point_cloud',
    'CloudLogger',
    'LogLevel',
    'get_logger',
    'set_logger',
]
