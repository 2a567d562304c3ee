"""Pipeline command group for bedrockgen.

This module provides CLI commands for inspecting generated documents:
- render: Print a pipeline or component document without writing a file
"""

import sys

import click

from bedrockgen.click_group import GeneratorGroup
from bedrockgen.file_templates import default_component
from bedrockgen.pipeline_templates import (
    hld_lifecycle_pipeline,
    manifest_generation_pipeline,
    service_build_and_update_pipeline,
)
from bedrockgen.yaml_serializer import dump_yaml

DOCUMENT_KINDS = ["service", "manifest", "lifecycle", "component"]


@click.group(name="pipeline", cls=GeneratorGroup)
def pipeline_group():
    """Inspect generated pipeline documents.

    \b
    COMMANDS:
        render     Print a document to stdout

    \b
    EXAMPLES:
        $ bedrockgen pipeline render manifest
        $ bedrockgen pipeline render service --service-name api \\
            --service-path packages/api --branch master --branch qa
    """
    pass


@pipeline_group.command(name="render")
@click.argument("kind", type=click.Choice(DOCUMENT_KINDS))
@click.option("--service-name", help="Service name (service pipeline only)")
@click.option("--service-path", help="Service path relative to the project root")
@click.option("--branch", "branches", multiple=True, help="Ring branch that triggers builds")
@click.option("--variable-group", "variable_groups", multiple=True, help="Variable group name")
def pipeline_render(
    kind: str,
    service_name: str | None,
    service_path: str | None,
    branches: tuple[str, ...],
    variable_groups: tuple[str, ...],
):
    """Print a generated document without writing it.

    \b
    KINDS:
        service    build-update-hld.yaml (needs --service-name)
        manifest   manifest-generation.yaml
        lifecycle  hld-lifecycle.yaml
        component  component.yaml
    """
    if kind == "service":
        if not service_name:
            click.echo("Error: --service-name is required for the service pipeline", err=True)
            sys.exit(1)
        try:
            document = service_build_and_update_pipeline(
                service_name,
                service_path or service_name,
                list(branches) or ["master"],
                list(variable_groups),
            )
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    elif kind == "manifest":
        document = manifest_generation_pipeline()
    elif kind == "lifecycle":
        document = hld_lifecycle_pipeline()
    else:
        document = default_component()

    click.echo(dump_yaml(document), nl=False)


__all__ = ["pipeline_group", "pipeline_render"]
