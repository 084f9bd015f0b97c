"""
Numeric helpers for averaging and normal estimation.
"""
import numpy as np
from scipy.spatial import KDTree

from .logger import get_logger


def finite_columns(block):
    """Boolean mask of the columns of a (rows, N) block that are entirely finite."""
    return np.all(np.isfinite(block), axis=0)


def column_mean(block):
    """
    Mean of the columns of a (rows, N) block, accumulated in float64.

    Returns a row-length vector of NaN when the block has no columns.
    """
    block = np.asarray(block)
    if block.shape[1] == 0:
        return np.full(block.shape[0], np.nan)
    return block.astype(np.float64).sum(axis=1) / block.shape[1]


def finite_column_mean(block):
    """Mean over only the finite columns of a (rows, N) block."""
    block = np.asarray(block)
    return column_mean(block[:, finite_columns(block)])


def estimate_normals_pca(points, radius, num_closest=30):
    """
    Estimate a normal for each point from the covariance of its neighborhood.

    Args:
        points: (N, 3) numpy array of 3D points
        radius: Neighbors must lie within this distance
        num_closest: Maximum number of neighbors, the point itself included

    Returns:
        (N, 3) float64 array of unit normals. Rows are NaN for non-finite
        points and for points with fewer than 3 neighbors.
    """
    points = np.asarray(points, dtype=np.float64)
    normals = np.full((len(points), 3), np.nan)

    finite_idx = np.flatnonzero(np.all(np.isfinite(points), axis=1))
    if finite_idx.size < 3 or num_closest < 3:
        return normals
    finite_points = points[finite_idx]

    tree = KDTree(finite_points)
    k = min(num_closest, len(finite_points))
    distances, neighbors = tree.query(finite_points, k=k, distance_upper_bound=radius)

    for row, idx in enumerate(finite_idx):
        # Missing neighbors are reported with an infinite distance
        valid = np.isfinite(distances[row])
        if np.count_nonzero(valid) < 3:
            continue
        neighborhood = finite_points[neighbors[row, valid]]
        centered = neighborhood - neighborhood.mean(axis=0)
        covariance = centered.T @ centered / len(neighborhood)
        _, eigvecs = np.linalg.eigh(covariance)
        # eigh sorts eigenvalues ascending
        normals[idx] = eigvecs[:, 0]

    missing = np.count_nonzero(np.isnan(normals[finite_idx, 0]))
    if missing:
        get_logger().warning(
            f"estimate_normals: {missing} of {len(finite_idx)} points had fewer than "
            f"3 neighbors within radius {radius}"
        )
    return normals
