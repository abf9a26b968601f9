"""
hostdeploy CLI - UI Components
Standardized headers for command output
"""

from typing import Optional

from rich.console import Console

LOGO = "hostdeploy"

BRAND_COLOR = "cyan"


def show_header(
    title: str,
    deployment: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized hostdeploy command header.

    Args:
        title: Main title (e.g., "Push Deployment")
        deployment: Deployment directory (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Push Deployment",
            deployment="./prod",
            details={"Route": "https://example.com"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if deployment:
        console.print(f"{prefix} Deployment: [{BRAND_COLOR}]{deployment}[/{BRAND_COLOR}]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [{BRAND_COLOR}]{value}[/{BRAND_COLOR}]")

    console.print()
