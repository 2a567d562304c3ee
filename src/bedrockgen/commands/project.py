"""Project command group for bedrockgen.

This module provides CLI commands for project repositories:
- init: Scaffold bedrock.yaml, maintainers.yaml, .gitignore and the HLD
  lifecycle pipeline in a project root
"""

import logging
import sys
from pathlib import Path

import click

from bedrockgen.bedrock_file import generate_default_bedrock_file
from bedrockgen.click_group import GeneratorGroup
from bedrockgen.commands._output import print_results
from bedrockgen.config_manager import ConfigError, ConfigManager
from bedrockgen.constants import GITIGNORE_CONTENT
from bedrockgen.generators import generate_gitignore_file, generate_hld_lifecycle_pipeline_yaml
from bedrockgen.maintainers import User, generate_maintainers_file

logger = logging.getLogger(__name__)


@click.group(name="project", cls=GeneratorGroup)
def project_group():
    """Manage a Bedrock project repository.

    \b
    COMMANDS:
        init       Initialize a project repository

    \b
    EXAMPLES:
        # Initialize the current directory
        $ bedrockgen project init

        # Initialize another directory with a named maintainer
        $ bedrockgen project init ./my-project --maintainer-name "Jane" \\
            --maintainer-email jane@example.com
    """
    pass


@project_group.command(name="init")
@click.argument("directory", default=".", type=click.Path(file_okay=False))
@click.option("--maintainer-name", help="Name of the project maintainer", type=str)
@click.option("--maintainer-email", help="Email of the project maintainer", type=str)
@click.option("--config", "config_path", help="Config file path", type=click.Path())
def project_init(
    directory: str,
    maintainer_name: str | None,
    maintainer_email: str | None,
    config_path: str | None,
):
    """Initialize a project repository.

    Writes bedrock.yaml, maintainers.yaml, .gitignore and hld-lifecycle.yaml.
    Files that already exist are left untouched.

    \b
    Examples:
        bedrockgen project init
        bedrockgen project init ./my-project
    """
    try:
        name, email = ConfigManager.get_maintainer(maintainer_name, maintainer_email, config_path)

        project_root = Path(directory).expanduser().resolve()
        project_root.mkdir(parents=True, exist_ok=True)

        results = [
            generate_gitignore_file(project_root, GITIGNORE_CONTENT),
            generate_default_bedrock_file(project_root),
            generate_maintainers_file(project_root, [User(name=name, email=email)]),
            generate_hld_lifecycle_pipeline_yaml(project_root),
        ]

        print_results(results, title=f"Project initialized: {project_root}")

    except (ConfigError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error in project init")
        sys.exit(1)


__all__ = ["project_group", "project_init"]
