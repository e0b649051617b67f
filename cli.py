# cli.py
import sys
from datetime import datetime
from urllib.parse import urlencode

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from storeapi.logs import configure_logging
from storefront.config import get_frontend_settings
from storefront.pages import PageContext
from storefront.router import Router, ROUTES
from storefront.session import Session
from storesdk.client import StoreClient

console = Console()

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

# menu key -> (label, path); None path means "ask for a path"
MENU = {
    "1": ("Home", "/"),
    "2": ("Products", "/products"),
    "3": ("Search products", None),
    "4": ("Product details", None),
    "5": ("Login", "/login"),
    "6": ("Sign up", "/signup"),
    "7": ("New product", "/admin/new"),
    "8": ("Edit product", None),
    "9": ("Logout", "/logout"),
    "g": ("Go to path", None),
}


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🎮 Loja Gamer",
        "[bold blue]Storefront[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def path_for(choice: str) -> str:
    _, path = MENU[choice]
    if path is not None:
        return path
    if choice == "3":
        term = prompt_with_autocomplete("Search for").strip()
        params = {"search": term}
        if Confirm.ask("Sort by name?", default=False):
            params["sort"] = "name"
        return f"/products?{urlencode(params)}"
    if choice == "4":
        return f"/product?id={prompt_with_autocomplete('Product ID').strip()}"
    if choice == "8":
        return f"/admin/edit?id={prompt_with_autocomplete('Product ID').strip()}"
    return prompt_with_autocomplete("Path", completer=WordCompleter(list(ROUTES), sentence=True)).strip()


def menu():
    settings = get_frontend_settings()
    configure_logging(settings.log_level)

    client = StoreClient(base_url=settings.api_url, timeout=settings.timeout)
    ctx = PageContext(client, Session(settings.session_file), console=console, settings=settings)
    router = Router(ctx)

    console.clear()
    console.print(create_header())
    router.navigate("/")

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=24)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=24)

        keys = list(MENU)
        half = (len(keys) + 1) // 2
        for left, right in zip(keys[:half], keys[half:] + [""]):
            menu_table.add_row(left, MENU[left][0], right, MENU[right][0] if right else "")
        menu_table.add_row("", "", "q", "Quit")

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(keys + ["q", "quit", "exit"])
        ).strip().lower()

        if choice in MENU:
            console.print()
            console.rule(style="dim")
            router.navigate(path_for(choice))
        elif choice in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thanks for visiting! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)
        else:
            console.print("[red]Unknown option[/red]")

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
