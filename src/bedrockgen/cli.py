"""CLI entry point for bedrockgen.

Commands:
    bedrockgen project init      # Scaffold a project repository
    bedrockgen service create    # Scaffold a service and its build pipeline
    bedrockgen hld init          # Scaffold an HLD repository
    bedrockgen pipeline render   # Print a generated document
    bedrockgen config show|set   # Manage defaults
"""

import logging

import click

from bedrockgen import __version__
from bedrockgen.click_group import GeneratorGroup
from bedrockgen.commands import (
    config_group,
    hld_group,
    pipeline_group,
    project_group,
    service_group,
)

logger = logging.getLogger(__name__)


@click.group(
    cls=GeneratorGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
@click.version_option(version=__version__)
def main(ctx: click.Context, verbose: bool) -> None:
    """bedrockgen - GitOps pipeline scaffolding for Bedrock projects.

    Generates Azure Pipelines definitions and starter files for a project
    repository, its services, and the high-level definition (HLD) repository.
    Existing files are never overwritten.

    \b
    PROJECT COMMANDS:
        project init          bedrock.yaml, maintainers.yaml, .gitignore,
                              hld-lifecycle.yaml
        service create        Service Dockerfile, .gitignore and
                              build-update-hld.yaml

    \b
    HLD COMMANDS:
        hld init              manifest-generation.yaml, component.yaml,
                              .gitignore

    \b
    OTHER COMMANDS:
        pipeline render       Print a document without writing it
        config show|set       Manage defaults in ~/.bedrockgen/config.toml

    \b
    EXAMPLES:
        $ bedrockgen project init
        $ bedrockgen service create my-service --branch master --branch qa
        $ bedrockgen hld init ../my-hld
        $ bedrockgen pipeline render manifest

    For help on any command: bedrockgen <command> --help
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


main.add_command(project_group)
main.add_command(service_group)
main.add_command(hld_group)
main.add_command(pipeline_group)
main.add_command(config_group)


if __name__ == "__main__":
    main()
