"""Service command group for bedrockgen.

This module provides CLI commands for services inside a project:
- create: Scaffold a service directory with a Dockerfile, .gitignore and the
  build and update image tag pipeline, then register the service in
  maintainers.yaml and bedrock.yaml
"""

import logging
import sys
from pathlib import Path

import click

from bedrockgen.artifact_writer import GenerationResult
from bedrockgen.bedrock_file import (
    BedrockFile,
    BedrockFileError,
    HelmConfig,
    add_new_service_to_bedrock_file,
    read_bedrock_file,
)
from bedrockgen.click_group import GeneratorGroup
from bedrockgen.commands._output import print_results
from bedrockgen.config_manager import ConfigError, ConfigManager
from bedrockgen.constants import BEDROCK_FILENAME, GITIGNORE_CONTENT, MAINTAINERS_FILENAME
from bedrockgen.generators import (
    generate_dockerfile,
    generate_gitignore_file,
    generate_service_build_and_update_pipeline,
)
from bedrockgen.maintainers import MaintainersError, User, add_new_service_to_maintainers_file

logger = logging.getLogger(__name__)


@click.group(name="service", cls=GeneratorGroup)
def service_group():
    """Manage services in a Bedrock project.

    \b
    COMMANDS:
        create     Create a service and its build pipeline

    \b
    EXAMPLES:
        # Create ./my-service in the current project
        $ bedrockgen service create my-service

        # Create ./packages/api triggered by two ring branches
        $ bedrockgen service create api --packages-dir packages \\
            --branch master --branch qa --variable-group my-vg
    """
    pass


def _load_bedrock(project_root: Path) -> BedrockFile | None:
    bedrock_path = project_root / BEDROCK_FILENAME
    if not bedrock_path.is_file():
        logger.debug(f"No {BEDROCK_FILENAME} in {project_root}")
        return None
    return read_bedrock_file(bedrock_path)


def _helm_config(
    chart_git: str | None,
    chart_branch: str | None,
    chart_path: str | None,
    chart_repository: str | None,
    chart_name: str | None,
) -> HelmConfig | None:
    if not chart_git and not chart_repository:
        return None
    if chart_git:
        return HelmConfig(git=chart_git, branch=chart_branch or "master", path=chart_path or "")
    return HelmConfig(repository=chart_repository, chart=chart_name)


@service_group.command(name="create")
@click.argument("service_name", type=str)
@click.option(
    "--project-root", default=".", help="Project root (default: .)", type=click.Path(file_okay=False)
)
@click.option("--packages-dir", default="", help="Directory holding services (e.g. packages)")
@click.option("--branch", "branches", multiple=True, help="Ring branch that triggers builds")
@click.option("--variable-group", "variable_groups", multiple=True, help="Variable group name")
@click.option("--maintainer-name", help="Name of the service maintainer", type=str)
@click.option("--maintainer-email", help="Email of the service maintainer", type=str)
@click.option("--helm-chart-git", help="Git repository holding the helm chart")
@click.option("--helm-chart-branch", help="Branch of the helm chart git repository")
@click.option("--helm-chart-path", help="Path of the chart in the git repository")
@click.option("--helm-chart-repository", help="Helm chart repository URL")
@click.option("--helm-chart-name", help="Chart name in the helm chart repository")
@click.option("--k8s-backend-port", type=int, help="Kubernetes service port")
@click.option("--config", "config_path", help="Config file path", type=click.Path())
def service_create(
    service_name: str,
    project_root: str,
    packages_dir: str,
    branches: tuple[str, ...],
    variable_groups: tuple[str, ...],
    maintainer_name: str | None,
    maintainer_email: str | None,
    helm_chart_git: str | None,
    helm_chart_branch: str | None,
    helm_chart_path: str | None,
    helm_chart_repository: str | None,
    helm_chart_name: str | None,
    k8s_backend_port: int | None,
    config_path: str | None,
):
    """Create a service and its build and update pipeline.

    Trigger branches come from --branch, then the rings in bedrock.yaml, then
    the configured defaults. Variable groups follow the same order.

    \b
    Examples:
        bedrockgen service create my-service
        bedrockgen service create api --packages-dir packages --branch qa
        bedrockgen service create api --helm-chart-git https://github.com/org/charts.git
    """
    try:
        if not service_name.strip():
            raise ValueError("Service name cannot be empty")

        root = Path(project_root).expanduser().resolve()
        service_dir = root / packages_dir / service_name
        rel_service_path = service_dir.relative_to(root).as_posix()

        bedrock = _load_bedrock(root)
        config = ConfigManager.load_config(config_path)

        if not branches and bedrock and bedrock.rings:
            ring_branches = bedrock.ring_branches()
        else:
            ring_branches = ConfigManager.get_ring_branches(branches, config_path)
        if not ring_branches:
            raise ValueError("At least one ring branch is required to trigger the pipeline")

        if not variable_groups and bedrock and bedrock.variable_groups:
            groups = list(bedrock.variable_groups)
        else:
            groups = ConfigManager.get_variable_groups(variable_groups, config_path)

        service_dir.mkdir(parents=True, exist_ok=True)

        results: list[GenerationResult] = [
            generate_dockerfile(service_dir),
            generate_gitignore_file(service_dir, GITIGNORE_CONTENT),
            generate_service_build_and_update_pipeline(
                root, ring_branches, service_name, service_dir, groups
            ),
        ]

        maintainers_path = root / MAINTAINERS_FILENAME
        if maintainers_path.is_file():
            name, email = ConfigManager.get_maintainer(
                maintainer_name, maintainer_email, config_path
            )
            add_new_service_to_maintainers_file(
                maintainers_path, rel_service_path, [User(name=name, email=email)]
            )
        else:
            logger.warning(f"No {MAINTAINERS_FILENAME} in {root}, skipping maintainers update")

        helm_config = _helm_config(
            helm_chart_git, helm_chart_branch, helm_chart_path, helm_chart_repository, helm_chart_name
        )
        if bedrock is None:
            logger.warning(f"No {BEDROCK_FILENAME} in {root}, skipping service registration")
        elif helm_config is None:
            logger.warning(
                f"No helm chart given (--helm-chart-git or --helm-chart-repository), "
                f"{BEDROCK_FILENAME} not updated"
            )
        else:
            add_new_service_to_bedrock_file(
                root / BEDROCK_FILENAME,
                rel_service_path,
                helm_config,
                k8s_backend_port or config.k8s_backend_port,
            )

        print_results(results, title=f"Service created: {service_name}")

    except (ConfigError, MaintainersError, BedrockFileError, ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error in service create")
        sys.exit(1)


__all__ = ["service_create", "service_group"]
