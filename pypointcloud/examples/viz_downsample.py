import os
import sys
import numpy as np
import open3d as o3d

# Add the current directory to the path to allow importing local modules
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(os.path.dirname(current_dir))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from pypointcloud import RGBS, XYZS, PointCloud, get_logger
from pypointcloud.interop import to_open3d

logger = get_logger()

# Random colored cube, down-sampled and shown side by side with the input
np.random.seed(42)
cloud = PointCloud(20000, XYZS | RGBS)
cloud.mutable_xyzs()[...] = np.random.uniform(-1, 1, size=(3, cloud.size))
cloud.mutable_rgbs()[...] = np.random.randint(0, 256, size=(3, cloud.size))
down = cloud.voxelized_down_sample(0.2)

original = to_open3d(cloud)
reduced = to_open3d(down).translate((2.5, 0, 0))

logger(f"[VIZ] Showing {cloud.size} input points and {down.size} voxel means with draw_plotly...")
try:
    o3d.visualization.draw_plotly([original, reduced])
    logger("[RESULT] Point cloud visualization succeeded.")
except Exception as e:
    logger(f"[FAIL] Point cloud visualization crashed: {e}", "error")
    raise
