#!/usr/bin/env python3
"""hostdeploy CLI - Main entry point"""

import functools
import os
import sys

import rich_click as click
from rich.console import Console

from hostdeploy import __version__
from hostdeploy.commands import init, mobile, push, update

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"

console = Console()


def handle_cli_errors(func):
    """Decorator to handle errors that escape the command classes."""
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")
            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """
    hostdeploy - Deploy a NixOS host from a deployment directory.

    \b
    Quick Start:
      hostdeploy init ./prod --ssh-key KEY --hostname HOST \\
          --route https://example.com --admin-email you@example.com
      hostdeploy push ./prod      # Build, upload and switch
      hostdeploy update ./prod    # Track the latest upstream source
      hostdeploy mobile android   # Build and deploy the Android app
    """


cli.add_command(init.init)
cli.add_command(push.push)
cli.add_command(update.update)
cli.add_command(mobile.mobile)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
