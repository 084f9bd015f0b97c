"""
Conversion between pypointcloud.PointCloud and open3d.geometry.PointCloud.
"""
import numpy as np
import open3d as o3d

from .fields import NORMALS, RGBS, XYZS
from .pointcloud import PointCloud


def to_open3d(cloud):
    """
    Convert to an Open3D point cloud.

    Positions, normals and colors are carried; descriptors are not.
    """
    cloud.require_fields(XYZS)
    pcd = o3d.geometry.PointCloud()
    pcd.points = o3d.utility.Vector3dVector(cloud.xyzs().T.astype(np.float64))
    if cloud.has_normals():
        pcd.normals = o3d.utility.Vector3dVector(cloud.normals().T.astype(np.float64))
    if cloud.has_rgbs():
        pcd.colors = o3d.utility.Vector3dVector(cloud.rgbs().T.astype(np.float64) / 255.0)
    return pcd


def from_open3d(o3d_pcd):
    """Build a PointCloud from an Open3D point cloud."""
    points = np.asarray(o3d_pcd.points)
    fields = XYZS
    if o3d_pcd.has_normals():
        fields = fields | NORMALS
    if o3d_pcd.has_colors():
        fields = fields | RGBS

    cloud = PointCloud(len(points), fields, skip_initialize=True)
    cloud.mutable_xyzs()[...] = points.T
    if cloud.has_normals():
        cloud.mutable_normals()[...] = np.asarray(o3d_pcd.normals).T
    if cloud.has_rgbs():
        colors = np.clip(np.rint(np.asarray(o3d_pcd.colors) * 255.0), 0, 255)
        cloud.mutable_rgbs()[...] = colors.T.astype(np.uint8)
    return cloud
