"""Configuration command for CoinPrompt CLI."""

import click
from rich.console import Console
from rich.panel import Panel

from coinprompt.config import get_config_path, create_template_config

console = Console()


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Create a template configuration file.

    \b
    Examples:
      coinprompt init
      coinprompt --config ./coinprompt.toml init --force
    """
    config_path = get_config_path(ctx.ensure_object(dict).get("config_path"))

    if config_path.exists() and not force:
        console.print(Panel(
            f"[yellow]Config already exists at {config_path}[/yellow]\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Exists[/bold yellow]",
            border_style="yellow",
        ))
        return

    path = create_template_config(config_path)
    console.print(Panel(
        f"Configuration written to [cyan]{path}[/cyan]\n\n"
        "Edit the [bold]exchange[/bold] and [bold]report[/bold] sections to "
        "change the data source or coin list.",
        title="[bold green]Config created[/bold green]",
        border_style="green",
    ))
