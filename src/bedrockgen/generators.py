"""Generation entry points.

Each generate_* function pairs a document template with the idempotent writer
and, after a successful write, logs the follow-up the operator must perform:
the pipeline variables to define and the command to run next.

Generators return a GenerationResult instead of raising for existing files.
Filesystem errors propagate to the caller.
"""

import logging
import os
from pathlib import Path

from bedrockgen.artifact_writer import GenerationResult, write_if_absent
from bedrockgen.constants import (
    COMPONENT_FILENAME,
    DOCKERFILE_CONTENT,
    DOCKERFILE_FILENAME,
    GITIGNORE_FILENAME,
    PROJECT_PIPELINE_FILENAME,
    RENDER_HLD_PIPELINE_FILENAME,
    SERVICE_PIPELINE_FILENAME,
)
from bedrockgen.file_templates import default_component
from bedrockgen.pipeline_templates import (
    REQUIRED_LIFECYCLE_PIPELINE_VARIABLES,
    REQUIRED_MANIFEST_PIPELINE_VARIABLES,
    REQUIRED_SERVICE_PIPELINE_VARIABLES,
    hld_lifecycle_pipeline,
    manifest_generation_pipeline,
    normalize_service_path,
    service_build_and_update_pipeline,
)
from bedrockgen.yaml_serializer import dump_yaml

logger = logging.getLogger(__name__)

CREATE_PIPELINE_COMMAND = "az pipelines create --name {name} --yaml-path {yaml_path}"


def _report_pipeline(
    log: logging.Logger,
    filename: str,
    command: str,
    required_variables: list[str],
    location: str = "",
) -> None:
    log.info(
        f"Generated {filename}{location}. Commit and push this file to master before "
        f"attempting to deploy via the command '{command}'; before running the pipeline "
        f"ensure the following environment variables are available to your pipeline: "
        f"{', '.join(required_variables)}"
    )


def generate_service_build_and_update_pipeline(
    project_root: str | Path,
    ring_branches: list[str],
    service_name: str,
    service_path: str | Path,
    variable_groups: list[str] | None = None,
    *,
    log: logging.Logger | None = None,
) -> GenerationResult:
    """Write the build and update image tag pipeline into a service directory.

    Args:
        project_root: Root of the project (where bedrock.yaml lives)
        ring_branches: Branches to trigger builds off of, one per ring
        service_name: Service name
        service_path: Service directory
        variable_groups: Azure DevOps variable group names

    Returns:
        GenerationResult for <service_path>/build-update-hld.yaml
    """
    log = log or logger
    abs_project_root = Path(project_root).expanduser().resolve()
    abs_service_path = Path(service_path).expanduser().resolve()

    log.info(f"Generating {SERVICE_PIPELINE_FILENAME} in {abs_service_path}")
    log.debug(f"variableGroups length: {len(variable_groups or [])}")

    rel_service_path = Path(os.path.relpath(abs_service_path, abs_project_root)).as_posix()
    if rel_service_path == ".":
        rel_service_path = ""

    def render() -> str:
        return dump_yaml(
            service_build_and_update_pipeline(
                service_name, rel_service_path, ring_branches, variable_groups
            )
        )

    result = write_if_absent(abs_service_path, SERVICE_PIPELINE_FILENAME, render, log=log)
    if result.written:
        formatted_path = normalize_service_path(rel_service_path)
        _report_pipeline(
            log,
            SERVICE_PIPELINE_FILENAME,
            CREATE_PIPELINE_COMMAND.format(
                name=f"{service_name}-build-update-hld",
                yaml_path=f"{formatted_path.rstrip('/')}/{SERVICE_PIPELINE_FILENAME}",
            ),
            REQUIRED_SERVICE_PIPELINE_VARIABLES,
            location=f" for service in path '{formatted_path}'",
        )
    return result


def generate_hld_azure_pipelines_yaml(
    target_directory: str | Path, *, log: logging.Logger | None = None
) -> GenerationResult:
    """Write manifest-generation.yaml into an HLD repository."""
    log = log or logger
    log.info(f"Generating hld manifest-generation in {Path(target_directory).resolve()}")

    result = write_if_absent(
        target_directory,
        RENDER_HLD_PIPELINE_FILENAME,
        lambda: dump_yaml(manifest_generation_pipeline()),
        log=log,
    )
    if result.written:
        _report_pipeline(
            log,
            RENDER_HLD_PIPELINE_FILENAME,
            CREATE_PIPELINE_COMMAND.format(
                name="manifest-generation", yaml_path=RENDER_HLD_PIPELINE_FILENAME
            ),
            REQUIRED_MANIFEST_PIPELINE_VARIABLES,
        )
    return result


def generate_hld_lifecycle_pipeline_yaml(
    project_root: str | Path, *, log: logging.Logger | None = None
) -> GenerationResult:
    """Write hld-lifecycle.yaml, the pipeline that reconciles services into the HLD."""
    log = log or logger
    log.info(
        f"Generating hld lifecycle pipeline {PROJECT_PIPELINE_FILENAME} in {project_root}"
    )

    result = write_if_absent(
        project_root,
        PROJECT_PIPELINE_FILENAME,
        lambda: dump_yaml(hld_lifecycle_pipeline()),
        log=log,
    )
    if result.written:
        _report_pipeline(
            log,
            PROJECT_PIPELINE_FILENAME,
            CREATE_PIPELINE_COMMAND.format(
                name="hld-lifecycle", yaml_path=PROJECT_PIPELINE_FILENAME
            ),
            REQUIRED_LIFECYCLE_PIPELINE_VARIABLES,
        )
    return result


def generate_default_hld_component_yaml(
    target_directory: str | Path, *, log: logging.Logger | None = None
) -> GenerationResult:
    """Write a default Fabrikate component.yaml when initializing an HLD."""
    log = log or logger
    log.info(f"Generating {COMPONENT_FILENAME} in {Path(target_directory).resolve()}")
    return write_if_absent(
        target_directory,
        COMPONENT_FILENAME,
        lambda: dump_yaml(default_component()),
        log=log,
    )


def generate_gitignore_file(
    target_directory: str | Path, content: str, *, log: logging.Logger | None = None
) -> GenerationResult:
    """Write a starter .gitignore with the given content."""
    log = log or logger
    log.info(f"Generating starter {GITIGNORE_FILENAME} in {Path(target_directory).resolve()}")
    return write_if_absent(target_directory, GITIGNORE_FILENAME, lambda: content, log=log)


def generate_dockerfile(
    target_directory: str | Path, *, log: logging.Logger | None = None
) -> GenerationResult:
    """Write a starter Dockerfile."""
    log = log or logger
    log.info(f"Generating starter {DOCKERFILE_FILENAME} in {Path(target_directory).resolve()}")
    return write_if_absent(
        target_directory, DOCKERFILE_FILENAME, lambda: DOCKERFILE_CONTENT, log=log
    )


__all__ = [
    "CREATE_PIPELINE_COMMAND",
    "generate_default_hld_component_yaml",
    "generate_dockerfile",
    "generate_gitignore_file",
    "generate_hld_azure_pipelines_yaml",
    "generate_hld_lifecycle_pipeline_yaml",
    "generate_service_build_and_update_pipeline",
]
