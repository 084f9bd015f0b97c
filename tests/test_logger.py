import numpy as np
import pytest

from pypointcloud import NORMALS, XYZS, CloudLogger, LogLevel, PointCloud, get_logger, set_logger


def test_console_level_filtering(capsys):
    logger = CloudLogger(mode='console', console_level=LogLevel.WARNING,
                         include_timestamp=False)
    logger.info("hidden")
    logger.warning("shown")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "[WARNING] shown\n"


def test_callable_with_level_name(capsys):
    logger = CloudLogger(include_timestamp=False, name="cloud")
    logger("hello", "error")
    logger("plain")
    captured = capsys.readouterr()
    assert captured.err == "[ERROR] [cloud] hello\n"
    assert captured.out == "[INFO] [cloud] plain\n"


def test_file_mode(tmp_path):
    log_file = tmp_path / "logs" / "cloud.log"
    logger = CloudLogger(mode='file', log_file=str(log_file), file_level=LogLevel.INFO,
                         include_timestamp=False)
    logger.debug("skipped")
    logger.info("kept")
    assert log_file.read_text() == "[INFO] kept\n"
    assert logger.isEnabledFor(LogLevel.INFO)
    assert not logger.isEnabledFor(LogLevel.DEBUG)


def test_invalid_configuration():
    with pytest.raises(ValueError):
        CloudLogger(mode='syslog')
    with pytest.raises(ValueError):
        CloudLogger(mode='file')
    with pytest.raises(ValueError):
        set_logger("not a logger")


def test_operations_log_debug_messages(tmp_path):
    log_file = tmp_path / "ops.log"
    set_logger(CloudLogger(mode='file', log_file=str(log_file), include_timestamp=False))
    cloud = PointCloud(4, XYZS)
    cloud.crop([0, 0, 0], [1, 1, 1])
    cloud.voxelized_down_sample(1.0)
    text = log_file.read_text()
    assert "crop: kept 4 of 4 points" in text
    assert "voxelized_down_sample: 4 points -> 1 voxels" in text


def test_set_logger_none_restores_default():
    custom = CloudLogger()
    set_logger(custom)
    assert get_logger() is custom
    set_logger(None)
    assert get_logger() is not custom


def test_estimate_normals_warns_about_sparse_points(tmp_path):
    log_file = tmp_path / "normals.log"
    set_logger(CloudLogger(mode='file', log_file=str(log_file), include_timestamp=False))
    cloud = PointCloud(4, XYZS | NORMALS)
    cloud.mutable_xyzs()[...] = np.array([[0, 0, 0], [10, 0, 0], [0, 10, 0], [0, 0, 10]],
                                         dtype=np.float32).T
    cloud.estimate_normals(radius=1.0)
    text = log_file.read_text()
    assert "[WARNING]" in text
    assert "4 of 4 points had fewer than 3 neighbors within radius 1.0" in text
