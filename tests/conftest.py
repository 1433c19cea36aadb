import json
import logging

import pytest


_ENV_VARS = ("DOCKER_ENFORCE_CONTAINER", "DOCKER_ENFORCE_MODE", "DOCKER_ENFORCE_ALLOWED")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Host env overrides must not leak into policy tests."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """CLI runs install a handler and level on the package logger; undo them."""
    pkg_logger = logging.getLogger("docker_enforce")
    level, handlers = pkg_logger.level, list(pkg_logger.handlers)
    yield
    pkg_logger.setLevel(level)
    pkg_logger.handlers[:] = handlers


@pytest.fixture
def write_config(tmp_path):
    """Write <tmp_path>/.claude/docker-config.json and return the project dir."""

    def _write(data, project=None):
        base = project or tmp_path
        config_dir = base / ".claude"
        config_dir.mkdir(parents=True, exist_ok=True)
        text = data if isinstance(data, str) else json.dumps(data)
        (config_dir / "docker-config.json").write_text(text)
        return base

    return _write
