"""Pytest fixtures shared by the dupelink tests."""

import pytest

from dupelink.config import DupelinkConfig, Mode


@pytest.fixture
def cfg():
    config = DupelinkConfig()
    config.scan.show_progress = False
    return config


@pytest.fixture
def delete_cfg(cfg):
    cfg.scan.mode = Mode.DELETE
    return cfg


@pytest.fixture
def hardlink_cfg(cfg):
    cfg.scan.mode = Mode.HARDLINK
    return cfg
