# storefront/dialogs.py
from typing import Callable, Any

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm


def confirm_dialog(console: Console, message: str, on_confirm: Callable[[], Any],
                   title: str = "Confirm deletion", ask: Callable[..., bool] = Confirm.ask):
    """Show a modal-style confirmation panel and run ``on_confirm`` only if accepted.

    Returns whatever ``on_confirm`` returned, or None when cancelled.
    """
    console.print(Panel.fit(f"{message}\n\n[dim]Cancel[/dim] / [bold red]Delete[/bold red]",
                            title=title, border_style="red"))
    if not ask("Delete?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return None
    return on_confirm()
