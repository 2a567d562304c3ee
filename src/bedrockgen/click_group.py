"""Click group that shows contextual help on usage errors.

A mistyped generator command prints the error followed by the help of the
command that rejected it, then exits with the usage error's exit code.
"""

from typing import Any, NoReturn

import click

_USAGE_ERRORS = (
    click.exceptions.UsageError,
    click.exceptions.BadParameter,
    click.exceptions.MissingParameter,
)


def _fail_with_help(error: click.exceptions.UsageError, fallback: click.Context) -> NoReturn:
    ctx = error.ctx or fallback
    click.echo(f"Error: {error.format_message()}", err=True)
    click.echo("")
    click.echo(ctx.get_help())
    ctx.exit(getattr(error, "exit_code", 1))


class GeneratorGroup(click.Group):
    """Command group used by every bedrockgen command group."""

    def main(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().main(*args, **kwargs)
        except _USAGE_ERRORS as e:
            if e.ctx is None:
                click.echo(f"Error: {e.format_message()}", err=True)
                raise SystemExit(e.exit_code) from e
            _fail_with_help(e, e.ctx)

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except _USAGE_ERRORS as e:
            _fail_with_help(e, ctx)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        """Show the group help when the subcommand does not exist."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            # Parameter errors belong to the subcommand, handled in invoke()
            if isinstance(e, click.exceptions.MissingParameter | click.exceptions.BadParameter):
                raise
            _fail_with_help(e, ctx)


# Nested groups created with @group.group() use the same class
GeneratorGroup.group_class = GeneratorGroup
