# storefront/pages.py
import logging
from datetime import datetime
from typing import Optional, Dict, Any, List, Callable, Tuple

import requests
from rich import box
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from storesdk.client import StoreClient, StoreAPIError
from .config import FrontendSettings, get_frontend_settings
from .dialogs import confirm_dialog
from .news import fetch_gaming_news, NewsError
from .session import Session, MANAGER

logger = logging.getLogger(__name__)

STORE_TITLE = "Loja Gamer"
API_ERRORS = (StoreAPIError, requests.RequestException)


class PageContext:
    """Everything a page needs: the API client, the session and the console.

    ``ask`` and ``confirm`` default to rich prompts and can be swapped for
    scripted answers.
    """

    def __init__(self, client: StoreClient, session: Session, console: Optional[Console] = None,
                 settings: Optional[FrontendSettings] = None, ask: Optional[Callable[..., str]] = None,
                 confirm: Optional[Callable[..., bool]] = None,
                 news: Optional[Callable[[], List[Dict[str, str]]]] = None):
        self.client = client
        self.session = session
        self.console = console or Console()
        self.settings = settings or get_frontend_settings()
        self.ask = ask or Prompt.ask
        self.confirm = confirm
        self.news = news or self._default_news

    def _default_news(self):
        return fetch_gaming_news(self.settings.news_api_key, self.settings.news_url,
                                 self.settings.news_query, self.settings.timeout)

    def confirm_dialog(self, message: str, on_confirm: Callable[[], Any]):
        if self.confirm is None:
            return confirm_dialog(self.console, message, on_confirm)
        return confirm_dialog(self.console, message, on_confirm, ask=self.confirm)


# ---------------------------
# Formatting helpers
# ---------------------------
def format_amount(price: Any) -> str:
    """``349.9`` -> ``"349,90"``; raises on non-numbers."""
    return f"{float(price):.2f}".replace(".", ",")


def format_price(price: Any) -> str:
    try:
        return f"R$ {format_amount(price)}"
    except (TypeError, ValueError):
        return "R$ -"


def format_date(raw: str) -> str:
    for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d"):
        try:
            return datetime.strptime(raw, fmt).strftime("%d/%m/%Y")
        except (TypeError, ValueError):
            continue
    return raw or ""


def validate_product_form(name: str, price: str, description: str, image: str) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Return ``(product, None)`` when the form is complete, else ``(None, message)``."""
    name, description, image = name.strip(), description.strip(), image.strip()
    try:
        value = float(str(price).replace(",", "."))
    except ValueError:
        value = None
    if not name or not description or not image or value is None or value <= 0:
        return None, "Fill in every field correctly (price must be greater than zero)."
    return {"name": name, "price": value, "description": description, "image": image}, None


def message(ctx: PageContext, title: str, text: str, ok: bool = True):
    style = "green" if ok else "red"
    ctx.console.print(Panel.fit(f"[{style}]{text}[/{style}]", title=title, border_style=style))


def access_denied(ctx: PageContext):
    message(ctx, "Access denied", "You must be logged in as 'manager' to open this page.", ok=False)


# ---------------------------
# Navbar
# ---------------------------
def render_navbar(ctx: PageContext):
    user = ctx.session.current_user()
    links = ["Home", "Products"]
    if user:
        if user.get("role") == MANAGER:
            links.append("New product")
        links.append(f"[bold]Hello, {user['email']} ({user.get('role')})[/bold]")
        links.append("Logout")
    else:
        links.append("Sign up")
        links.append("Login")

    bar = Table(show_header=False, box=box.ROUNDED, expand=True)
    bar.add_column("title", style="bold magenta", width=14)
    bar.add_column("links")
    bar.add_row(STORE_TITLE, "  |  ".join(links))
    ctx.console.print(bar)


# ---------------------------
# Product rendering
# ---------------------------
def product_card(product: Dict[str, Any]) -> Panel:
    body = (
        f"[dim]{product.get('image', '')}[/dim]\n"
        f"[green]{format_price(product.get('price'))}[/green]\n"
        f"[cyan]/product?id={product.get('id')}[/cyan]"
    )
    return Panel(body, title=f"[bold]{product.get('name', '')}[/bold]", width=32)


def product_table(products: List[Dict[str, Any]]) -> Table:
    table = Table(
        title="Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True,
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=14)
    table.add_column("Description", width=40)
    for p in products:
        table.add_row(str(p.get("id", "")), p.get("name", ""), format_price(p.get("price")),
                      p.get("description", ""))
    return table


def _product_id(query: Dict[str, str]) -> Optional[int]:
    try:
        return int(query.get("id", ""))
    except ValueError:
        return None


# ---------------------------
# Pages
# ---------------------------
def home_page(ctx: PageContext, query: Dict[str, str]):
    try:
        news = ctx.news()
        if not news:
            raise NewsError("The news API answered but returned no headlines.")
        lines = [f"[bold]{n['title']}[/bold]\n[dim]Source: {n['source']} - {format_date(n['date'])}[/dim]\n{n['link']}"
                 for n in news[:3]]
        ctx.console.print(Panel("\n\n".join(lines), title="Latest news", border_style="blue"))
    except NewsError as e:
        logger.warning("News unavailable: %s", e)
        ctx.console.print(Panel(f"[red]{e}[/red]", title="Latest news", border_style="blue"))

    try:
        products = ctx.client.list_products()
    except API_ERRORS as e:
        logger.error("Could not load products: %s", e)
        ctx.console.print("[red]Error loading products.[/red]")
        return None
    if not products:
        ctx.console.print("[italic yellow]No products yet[/italic yellow]")
        return None
    ctx.console.print(Columns([product_card(p) for p in products], equal=True))
    return None


def products_page(ctx: PageContext, query: Dict[str, str]):
    try:
        products = ctx.client.list_products(query.get("search"), query.get("sort"))
    except API_ERRORS as e:
        logger.error("Could not load products: %s", e)
        ctx.console.print("[red]Error loading products.[/red]")
        return None
    if not products:
        ctx.console.print("[italic yellow]No products found[/italic yellow]")
        return None
    ctx.console.print(product_table(products))
    return None


def _delete_product(ctx: PageContext, product_id: int):
    try:
        ctx.client.delete_product(product_id)
    except API_ERRORS as e:
        logger.error("Delete of product %s failed: %s", product_id, e)
        message(ctx, "Operation failed", f"Error deleting the product on the server: {e}", ok=False)
        return False
    message(ctx, "Product removed.", "The record was deleted. Back to [cyan]/[/cyan]")
    return True


def detail_page(ctx: PageContext, query: Dict[str, str]):
    product_id = _product_id(query)
    if product_id is None:
        ctx.console.print("No product specified.")
        return None

    try:
        product = ctx.client.get_product(product_id)
    except API_ERRORS as e:
        message(ctx, "Error loading product", str(e), ok=False)
        return None
    if product is None:
        message(ctx, "Error loading product", "Product not found", ok=False)
        return None

    ctx.console.print(Panel(
        f"[dim]{product.get('image', '')}[/dim]\n\n"
        f"[bold]Price:[/bold] {format_price(product.get('price'))}\n"
        f"[bold]Description:[/bold] {product.get('description', '')}",
        title=f"[bold]{product.get('name', '')}[/bold]",
        border_style="cyan",
    ))

    if not ctx.session.is_manager():
        return None

    action = ctx.ask("Action", choices=["back", "edit", "delete"], default="back")
    if action == "edit":
        return f"/admin/edit?id={product_id}"
    if action == "delete":
        ctx.confirm_dialog(f"Are you sure you want to delete product ID {product_id}?",
                           lambda: _delete_product(ctx, product_id))
    return None


def login_page(ctx: PageContext, query: Dict[str, str]):
    email = ctx.ask("Email").strip()
    password = ctx.ask("Password", password=True)
    if not email or not password:
        message(ctx, "Login", "Email and password are required.", ok=False)
        return None
    try:
        users = ctx.client.find_users(email=email, password=password)
    except API_ERRORS as e:
        message(ctx, "Login", str(e), ok=False)
        return None
    if not users:
        message(ctx, "Login", "Invalid email or password.", ok=False)
        return None
    ctx.session.login(users[0])
    message(ctx, "Login", "Login successful! Redirecting...")
    return "/"


def signup_page(ctx: PageContext, query: Dict[str, str]):
    email = ctx.ask("Email").strip()
    password = ctx.ask("Password", password=True)
    role = ctx.ask("Role", choices=["customer", "manager"], default="customer")
    if not email or not password:
        message(ctx, "Sign up", "Email and password are required.", ok=False)
        return None
    try:
        if ctx.client.find_users(email=email):
            raise StoreAPIError(400, "This email is already registered.")
        ctx.client.create_user(email, password, role)
    except API_ERRORS as e:
        detail = e.detail if isinstance(e, StoreAPIError) else str(e)
        message(ctx, "Sign up", detail, ok=False)
        return None
    message(ctx, "Sign up", "Account created! You can log in now.")
    return "/login"


def _product_form(ctx: PageContext, current: Optional[Dict[str, Any]] = None):
    current = current or {}
    price = current.get("price")
    return validate_product_form(
        ctx.ask("Name", default=current.get("name", "")),
        ctx.ask("Price", default="" if price is None else format_amount(price)),
        ctx.ask("Description", default=current.get("description", "")),
        ctx.ask("Image", default=current.get("image", "")),
    )


def new_product_page(ctx: PageContext, query: Dict[str, str]):
    if not ctx.session.is_manager():
        access_denied(ctx)
        return None
    product, error = _product_form(ctx)
    if error:
        message(ctx, "New product", error, ok=False)
        return None
    try:
        created = ctx.client.create_product(**product)
    except API_ERRORS as e:
        message(ctx, "New product", str(e), ok=False)
        return None
    message(ctx, "New product", f"Product [bold]{created['name']}[/bold] created (ID {created['id']}).")
    return None


def edit_product_page(ctx: PageContext, query: Dict[str, str]):
    if not ctx.session.is_manager():
        access_denied(ctx)
        return None
    product_id = _product_id(query)
    if product_id is None:
        message(ctx, "Edit product", "Product ID not provided.", ok=False)
        return None
    try:
        current = ctx.client.get_product(product_id)
    except API_ERRORS as e:
        message(ctx, "Edit product", str(e), ok=False)
        return None
    if current is None:
        message(ctx, "Edit product", "Product not found.", ok=False)
        return None

    changes, error = _product_form(ctx, current)
    if error:
        message(ctx, "Edit product", error, ok=False)
        return None
    try:
        saved = ctx.client.update_product(product_id, **changes)
    except API_ERRORS as e:
        logger.error("Saving product %s failed: %s", product_id, e)
        message(ctx, "Edit product", "Error saving the changes.", ok=False)
        return None
    message(ctx, "Edit product", f"Product [bold]{saved['name']}[/bold] saved.")
    return f"/product?id={product_id}"


def not_found_page(ctx: PageContext, query: Dict[str, str]):
    message(ctx, "404", "Page not found", ok=False)
    return None


def logout_page(ctx: PageContext, query: Dict[str, str]):
    ctx.session.logout()
    return "/"
