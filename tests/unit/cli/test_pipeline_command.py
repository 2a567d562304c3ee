"""Unit tests for the bedrockgen pipeline command group."""

from pathlib import Path

import pytest

from bedrockgen.cli import main
from bedrockgen.file_templates import default_component
from bedrockgen.pipeline_templates import (
    hld_lifecycle_pipeline,
    manifest_generation_pipeline,
    service_build_and_update_pipeline,
)
from bedrockgen.yaml_serializer import dump_yaml
from tests.conftest import assert_command_fails, assert_command_succeeds


class TestPipelineRender:
    """Test 'bedrockgen pipeline render'."""

    @pytest.mark.parametrize(
        "kind,document",
        [
            ("manifest", manifest_generation_pipeline()),
            ("lifecycle", hld_lifecycle_pipeline()),
            ("component", default_component()),
        ],
    )
    def test_render_fixed_documents(self, cli_runner, kind, document):
        result = cli_runner.invoke(main, ["pipeline", "render", kind])

        assert_command_succeeds(result)
        assert result.output == dump_yaml(document)

    def test_render_service(self, cli_runner):
        result = cli_runner.invoke(
            main,
            [
                "pipeline",
                "render",
                "service",
                "--service-name",
                "api",
                "--service-path",
                "packages/api",
                "--branch",
                "master",
                "--branch",
                "qa",
                "--variable-group",
                "vg",
            ],
        )

        assert_command_succeeds(result)
        assert result.output == dump_yaml(
            service_build_and_update_pipeline("api", "packages/api", ["master", "qa"], ["vg"])
        )

    def test_render_service_defaults(self, cli_runner):
        result = cli_runner.invoke(main, ["pipeline", "render", "service", "--service-name", "api"])

        assert_command_succeeds(result)
        assert result.output == dump_yaml(
            service_build_and_update_pipeline("api", "api", ["master"], [])
        )

    def test_render_service_requires_name(self, cli_runner):
        result = cli_runner.invoke(main, ["pipeline", "render", "service"])
        assert_command_fails(result, "--service-name is required")

    def test_unknown_kind(self, cli_runner):
        result = cli_runner.invoke(main, ["pipeline", "render", "nope"])
        assert_command_fails(result)

    def test_render_writes_nothing(self, cli_runner, tmp_path):
        with cli_runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            cli_runner.invoke(main, ["pipeline", "render", "manifest"])
            assert list(Path(cwd).iterdir()) == []
