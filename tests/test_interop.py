import numpy as np
import pytest

from pypointcloud import FPFH, NORMALS, RGBS, XYZS, MissingFieldsError, PointCloud

o3d = pytest.importorskip("open3d")
from pypointcloud.interop import from_open3d, to_open3d  # noqa: E402


def test_to_open3d_carries_points_normals_colors(full_cloud):
    pcd = to_open3d(full_cloud)
    np.testing.assert_allclose(np.asarray(pcd.points), full_cloud.xyzs().T)
    np.testing.assert_allclose(np.asarray(pcd.normals), full_cloud.normals().T)
    np.testing.assert_allclose(np.asarray(pcd.colors), full_cloud.rgbs().T / 255.0)


def test_to_open3d_requires_positions():
    with pytest.raises(MissingFieldsError):
        to_open3d(PointCloud(1, NORMALS))


def test_from_open3d_infers_fields():
    pcd = o3d.geometry.PointCloud()
    pcd.points = o3d.utility.Vector3dVector(np.array([[0.0, 1.0, 2.0], [3.0, 4.0, 5.0]]))
    pcd.colors = o3d.utility.Vector3dVector(np.array([[1.0, 0.0, 0.5], [0.0, 1.0, 0.0]]))
    cloud = from_open3d(pcd)
    assert cloud.fields == XYZS | RGBS
    np.testing.assert_array_equal(cloud.xyz(1), [3, 4, 5])
    np.testing.assert_array_equal(cloud.rgb(0), [255, 0, 128])


def test_descriptors_are_not_carried():
    cloud = PointCloud(3, XYZS | FPFH)
    back = from_open3d(to_open3d(cloud))
    assert back.fields == XYZS
    assert back.size == 3
