import numpy as np
import pytest

from pypointcloud import NORMALS, RGBS, XYZS, PointCloud, set_logger


@pytest.fixture(autouse=True)
def default_logger():
    set_logger(None)
    yield
    set_logger(None)


def make_cloud(xyzs, fields=XYZS):
    """Build a cloud from an (N, 3) list of positions."""
    xyzs = np.asarray(xyzs, dtype=np.float32).reshape(-1, 3)
    cloud = PointCloud(len(xyzs), fields)
    cloud.mutable_xyzs()[...] = xyzs.T
    return cloud


@pytest.fixture
def full_cloud():
    """Five points with positions, normals and colors filled with distinct values."""
    cloud = PointCloud(5, XYZS | NORMALS | RGBS)
    cloud.mutable_xyzs()[...] = np.arange(15, dtype=np.float32).reshape(3, 5)
    cloud.mutable_normals()[...] = -np.arange(15, dtype=np.float32).reshape(3, 5)
    cloud.mutable_rgbs()[...] = np.arange(15, dtype=np.uint8).reshape(3, 5) * 10
    return cloud
