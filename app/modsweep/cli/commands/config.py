"""Config command implementation.

Shows the effective settings and where they are loaded from.
"""

from rich.table import Table

from modsweep.cli.types import resolve_settings
from modsweep.core.paths import get_settings_path
from modsweep.utils.formatting import console


def config() -> None:
    """Show effective settings."""
    settings = resolve_settings()
    path = get_settings_path()

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", no_wrap=True)
    table.add_column("Value")

    for key, value in settings.model_dump().items():
        if isinstance(value, list):
            value = ", ".join(value)
        table.add_row(key, f"[info]{value}[/info]")

    console.print(table)
    source = str(path) if path.exists() else f"{path} (not present, using defaults)"
    console.print(f"\n[dim]Settings file: {source}[/dim]", soft_wrap=True)
