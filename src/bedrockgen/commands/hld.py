"""HLD command group for bedrockgen.

This module provides CLI commands for high-level definition repositories:
- init: Scaffold the manifest generation pipeline, a default Fabrikate
  component and a .gitignore
"""

import logging
import sys
from pathlib import Path

import click

from bedrockgen.click_group import GeneratorGroup
from bedrockgen.commands._output import print_results
from bedrockgen.constants import GITIGNORE_CONTENT
from bedrockgen.generators import (
    generate_default_hld_component_yaml,
    generate_gitignore_file,
    generate_hld_azure_pipelines_yaml,
)

logger = logging.getLogger(__name__)


@click.group(name="hld", cls=GeneratorGroup)
def hld_group():
    """Manage a high-level definition (HLD) repository.

    \b
    COMMANDS:
        init       Initialize an HLD repository

    \b
    EXAMPLES:
        $ bedrockgen hld init
        $ bedrockgen hld init ./my-hld
    """
    pass


@hld_group.command(name="init")
@click.argument("directory", default=".", type=click.Path(file_okay=False))
def hld_init(directory: str):
    """Initialize an HLD repository.

    Writes manifest-generation.yaml, component.yaml and .gitignore.
    Files that already exist are left untouched.
    """
    try:
        hld_root = Path(directory).expanduser().resolve()
        hld_root.mkdir(parents=True, exist_ok=True)

        results = [
            generate_hld_azure_pipelines_yaml(hld_root),
            generate_default_hld_component_yaml(hld_root),
            generate_gitignore_file(hld_root, GITIGNORE_CONTENT),
        ]

        print_results(results, title=f"HLD initialized: {hld_root}")

    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error in hld init")
        sys.exit(1)


__all__ = ["hld_group", "hld_init"]
