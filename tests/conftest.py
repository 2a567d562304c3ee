"""
Shared test fixtures and configuration for bedrockgen tests.

This module provides common fixtures used across all test types:
- Empty project, service and HLD directories
- Sample maintainers.yaml and bedrock.yaml documents
- CLI runner and assertion helpers
"""

from pathlib import Path
from typing import Any

import pytest

from bedrockgen.yaml_serializer import dump_yaml

# ============================================================================
# DIRECTORY FIXTURES
# ============================================================================


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """Empty project root."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def service_dir(project_dir) -> Path:
    """Empty service directory at <project>/my-service."""
    path = project_dir / "my-service"
    path.mkdir()
    return path


@pytest.fixture
def hld_dir(tmp_path) -> Path:
    """Empty HLD repository root."""
    root = tmp_path / "hld"
    root.mkdir()
    return root


# ============================================================================
# DOCUMENT FIXTURES
# ============================================================================


@pytest.fixture
def sample_maintainers() -> dict[str, Any]:
    """Maintainers document with a root entry and one service."""
    return {
        "services": {
            "./": {
                "maintainers": [
                    {"email": "somegithubemailg@users.noreply.github.com", "name": "my name"}
                ]
            },
            "./packages/service1": {
                "maintainers": [{"email": "hello@users.noreply.github.com", "name": "testUser"}]
            },
        }
    }


@pytest.fixture
def maintainers_file(project_dir, sample_maintainers) -> Path:
    """maintainers.yaml written from sample_maintainers."""
    path = project_dir / "maintainers.yaml"
    path.write_text(dump_yaml(sample_maintainers), encoding="utf-8")
    return path


@pytest.fixture
def sample_bedrock() -> dict[str, Any]:
    """bedrock.yaml document with three services and no rings."""
    return {
        "rings": {},
        "services": {
            "./": {
                "helm": {
                    "chart": {
                        "branch": "master",
                        "git": "https://github.com/catalystcode/spk-demo-repo.git",
                        "path": "",
                    }
                },
                "k8sBackendPort": 80,
            },
            "./packages/service1": {
                "helm": {
                    "chart": {
                        "branch": "master",
                        "git": "https://github.com/catalystcode/spk-demo-repo.git",
                        "path": "/service1",
                    }
                },
                "k8sBackendPort": 80,
            },
            "./zookeeper": {
                "helm": {
                    "chart": {
                        "chart": "zookeeper",
                        "repository": "https://kubernetes-charts-incubator.storage.googleapis.com/",
                    }
                },
                "k8sBackendPort": 80,
            },
        },
        "variableGroups": [],
    }


@pytest.fixture
def bedrock_file(project_dir, sample_bedrock) -> Path:
    """bedrock.yaml written from sample_bedrock."""
    path = project_dir / "bedrock.yaml"
    path.write_text(dump_yaml(sample_bedrock), encoding="utf-8")
    return path


# ============================================================================
# CLI TEST HELPERS
# ============================================================================


def assert_command_succeeds(result):
    """Assert that a command executed successfully (exit code 0).

    Args:
        result: Click CliRunner result object
    """
    assert result.exit_code == 0, (
        f"Expected successful execution (exit_code=0), "
        f"but got exit_code={result.exit_code}: {result.output}"
    )


def assert_command_fails(result, expected_error: str | None = None):
    """Assert that a command failed with non-zero exit code.

    Args:
        result: Click CliRunner result object
        expected_error: Optional substring to look for in error output
    """
    assert result.exit_code != 0, (
        f"Expected command to fail (non-zero exit code), but got exit_code=0: {result.output}"
    )

    if expected_error:
        assert expected_error.lower() in result.output.lower(), (
            f"Expected error containing '{expected_error}', but got: {result.output}"
        )


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for testing CLI commands.

    Usage:
        def test_command(cli_runner):
            result = cli_runner.invoke(main, ["command", "args"])
            assert_command_succeeds(result)
    """
    from click.testing import CliRunner

    return CliRunner()
