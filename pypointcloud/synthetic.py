"""
Synthetic point cloud generators.
"""
import numpy as np

from .fields import NORMALS, XYZS
from .pointcloud import PointCloud


def _orthonormal_basis(axis):
    """Two unit vectors orthogonal to ``axis`` and to each other."""
    if np.allclose(np.abs(axis), [1, 0, 0]):
        ortho1 = np.array([0.0, 1.0, 0.0])
    else:
        ortho1 = np.cross(axis, [1, 0, 0])
    ortho1 = ortho1 / np.linalg.norm(ortho1)
    ortho2 = np.cross(axis, ortho1)
    ortho2 = ortho2 / np.linalg.norm(ortho2)
    return ortho1, ortho2


def generate_cylinder_point_cloud(center, axis, radius, height, n_points=2000, noise=0.002,
                                  with_normals=False):
    """
    Generate a synthetic cylinder surface.
    Args:
        center: (3,) center of the cylinder (at midpoint)
        axis: (3,) axis direction (will be normalized)
        radius: float
        height: float
        n_points: int, number of points
        noise: float, stddev of Gaussian noise
        with_normals: also fill the exact outward radial normals
    Returns:
        PointCloud with XYZS (and NORMALS if requested)
    """
    center = np.asarray(center, dtype=np.float64)
    axis = np.asarray(axis, dtype=np.float64)
    axis = axis / np.linalg.norm(axis)
    ortho1, ortho2 = _orthonormal_basis(axis)

    angles = np.random.uniform(0, 2*np.pi, n_points)
    heights = np.random.uniform(-height/2, height/2, n_points)
    radial = np.outer(np.cos(angles), ortho1) + np.outer(np.sin(angles), ortho2)
    pts = center + np.outer(heights, axis) + radius * radial
    if noise > 0:
        pts += np.random.normal(scale=noise, size=pts.shape)

    cloud = PointCloud(n_points, XYZS | NORMALS if with_normals else XYZS)
    cloud.mutable_xyzs()[...] = pts.T
    if with_normals:
        cloud.mutable_normals()[...] = radial.T
    return cloud


def generate_plane_point_cloud(n_points=500, extent=1.0, z=0.0, noise=0.0):
    """
    Sample points uniformly on the square [-extent, extent]^2 of the plane z = const.
    """
    pts = np.empty((n_points, 3))
    pts[:, :2] = np.random.uniform(-extent, extent, size=(n_points, 2))
    pts[:, 2] = z
    if noise > 0:
        pts[:, 2] += np.random.normal(scale=noise, size=n_points)
    cloud = PointCloud(n_points, XYZS)
    cloud.mutable_xyzs()[...] = pts.T
    return cloud
