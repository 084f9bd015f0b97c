"""
Example: estimate normals, crop and voxel down-sample a synthetic cylinder.
"""
import os
import sys
import numpy as np

# Add the current directory to the path to allow importing local modules
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(os.path.dirname(current_dir))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from pypointcloud import (
    CURVATURE, NORMALS, XYZS, CloudLogger, LogLevel, PointCloud, concatenate,
    generate_cylinder_point_cloud, set_logger,
)


def main():
    logger = CloudLogger(mode='console', console_level=LogLevel.DEBUG)
    set_logger(logger)

    np.random.seed(42)  # For reproducible synthetic data
    raw = generate_cylinder_point_cloud([0, 0, 0], [0, 0, 1], radius=0.5, height=2.0,
                                        n_points=2000, noise=0.01)
    logger(f"Generated {raw.size} points with fields {raw.fields}.")

    # Widen the field set so normals and a curvature channel can be stored
    cloud = PointCloud(raw.size, XYZS | NORMALS | CURVATURE)
    cloud.set_from(raw, XYZS)
    cloud.estimate_normals(radius=0.2, num_closest=50)
    cloud.flip_normals_toward_point([0, 0, 0])
    cloud.mutable_descriptors()[0] = np.abs(cloud.xyzs()[2])

    upper = cloud.crop([-1, -1, 0], [1, 1, 1])
    lower = cloud.crop([-1, -1, -1], [1, 1, 0])
    logger(f"Cropped into {upper.size} upper and {lower.size} lower points.")

    merged = concatenate([upper, lower])
    logger(f"Concatenated back to {merged.size} points.")

    for voxel_size in (0.05, 0.1, 0.25):
        down = merged.voxelized_down_sample(voxel_size)
        logger(f"voxel_size={voxel_size}: {down.size} points")

    moved = PointCloud.moved_from(down)
    logger(f"Moved {moved.size} points; source now has {down.size} points.")


if __name__ == "__main__":
    main()
