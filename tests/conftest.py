"""Shared fixtures for arpo tests."""

from pathlib import Path

import pytest
import yaml

import arpo.config.manager as config_manager_module


@pytest.fixture(autouse=True)
def reset_config_manager():
    """Keep the process-wide config manager from leaking between tests."""
    config_manager_module._config_manager = None
    yield
    config_manager_module._config_manager = None


@pytest.fixture
def projects_root(tmp_path) -> Path:
    """A projects root holding three projects (A, B, C) and a stray file."""
    root = tmp_path / "projects"
    for name in ("A", "B", "C"):
        project = root / name
        project.mkdir(parents=True)
        (project / "README.md").write_text(f"# {name}\n")
    (root / "notes.txt").write_text("not a project")
    return root


@pytest.fixture
def config_file(tmp_path, projects_root) -> Path:
    """A config file pointing at ``projects_root`` with file logging off."""
    path = tmp_path / "arpo.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "projects_root": str(projects_root),
                "logging": {"file_enabled": False, "console_enabled": False},
            }
        )
    )
    return path

