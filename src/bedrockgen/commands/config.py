"""Config command group for bedrockgen.

This module provides CLI commands for the user configuration file:
- show: Display the effective configuration
- set: Update configuration defaults
"""

import logging
import sys

import click

from bedrockgen.click_group import GeneratorGroup
from bedrockgen.config_manager import ConfigError, ConfigManager

logger = logging.getLogger(__name__)


@click.group(name="config", cls=GeneratorGroup)
def config_group():
    """Manage bedrockgen defaults.

    Stored in ~/.bedrockgen/config.toml.

    \b
    EXAMPLES:
        $ bedrockgen config show
        $ bedrockgen config set --branch master --branch qa
        $ bedrockgen config set --maintainer-name "Jane" --maintainer-email jane@example.com
    """
    pass


@config_group.command(name="show")
@click.option("--config", "config_path", help="Config file path", type=click.Path())
def config_show(config_path: str | None):
    """Show the effective configuration."""
    try:
        config = ConfigManager.load_config(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Ring branches:    {', '.join(config.default_ring_branches) or '-'}")
    click.echo(f"Variable groups:  {', '.join(config.default_variable_groups) or '-'}")
    click.echo(f"Maintainer name:  {config.maintainer_name or '-'}")
    click.echo(f"Maintainer email: {config.maintainer_email or '-'}")
    click.echo(f"Backend port:     {config.k8s_backend_port}")


@config_group.command(name="set")
@click.option("--branch", "branches", multiple=True, help="Default ring branch")
@click.option("--variable-group", "variable_groups", multiple=True, help="Default variable group")
@click.option("--maintainer-name", help="Default maintainer name")
@click.option("--maintainer-email", help="Default maintainer email")
@click.option("--k8s-backend-port", type=int, help="Default Kubernetes service port")
@click.option(
    "--config", "config_path", help="Config file path (created if missing)", type=click.Path()
)
def config_set(
    branches: tuple[str, ...],
    variable_groups: tuple[str, ...],
    maintainer_name: str | None,
    maintainer_email: str | None,
    k8s_backend_port: int | None,
    config_path: str | None,
):
    """Update configuration defaults.

    Only the given options are changed.
    """
    updates: dict[str, object] = {}
    if branches:
        updates["default_ring_branches"] = list(branches)
    if variable_groups:
        updates["default_variable_groups"] = list(variable_groups)
    if maintainer_name:
        updates["maintainer_name"] = maintainer_name
    if maintainer_email:
        updates["maintainer_email"] = maintainer_email
    if k8s_backend_port is not None:
        updates["k8s_backend_port"] = k8s_backend_port

    if not updates:
        click.echo("Nothing to update.")
        return

    try:
        ConfigManager.update_config(config_path, **updates)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for key, value in updates.items():
        click.echo(f"Set {key} = {value}")


__all__ = ["config_group", "config_set", "config_show"]
