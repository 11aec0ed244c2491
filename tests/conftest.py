from pathlib import Path

import pytest

from framegraph.core.configuration import Configuration
from framegraph.core.manager import TransformationManager

ROBOT_YAML = """
max_seek_depth: 20
frames: [odometry, body, servo_low, servo_high, laser, camera]
static_transforms:
  - {from: body, to: servo_low, translation: [0.2, 0.0, 0.35]}
  - {from: servo_high, to: laser, translation: [0.0, 0.0, 0.05]}
  - {from: laser, to: camera, rotation: [0.0, 0.0, 0.70710678, 0.70710678]}
dynamic_transforms:
  - {from: servo_low, to: servo_high, producer: dynamixel}
  - {from: body, to: odometry, producer: odometry_task}
example_transforms:
  - {from: servo_low, to: servo_high, rotation: [0.0, 0.38268343, 0.0, 0.92387953]}
"""


@pytest.fixture()
def conf() -> Configuration:
    return Configuration()


@pytest.fixture()
def manager(conf: Configuration) -> TransformationManager:
    return TransformationManager(conf)


@pytest.fixture()
def robot_file(tmp_path: Path) -> Path:
    path = tmp_path / "robot.yaml"
    path.write_text(ROBOT_YAML)
    return path
