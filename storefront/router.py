# storefront/router.py
import logging
from typing import Dict, Callable, Optional, Tuple
from urllib.parse import urlsplit, parse_qs

from . import pages
from .pages import PageContext

logger = logging.getLogger(__name__)

Handler = Callable[[PageContext, Dict[str, str]], Optional[str]]

ROUTES: Dict[str, Handler] = {
    "/": pages.home_page,
    "/index": pages.home_page,
    "/products": pages.products_page,
    "/product": pages.detail_page,
    "/login": pages.login_page,
    "/logout": pages.logout_page,
    "/signup": pages.signup_page,
    "/admin/new": pages.new_product_page,
    "/admin/edit": pages.edit_product_page,
}

MAX_REDIRECTS = 5


def normalize(path: str) -> str:
    path = "/" + path.strip().strip("/")
    if path.endswith(".html"):
        path = path[: -len(".html")]
    return path


def parse(path: str) -> Tuple[str, Dict[str, str]]:
    """Split ``/product?id=3`` into ``("/product", {"id": "3"})``."""
    parts = urlsplit(path)
    query = {k: v[0] for k, v in parse_qs(parts.query).items()}
    return normalize(parts.path), query


class Router:
    def __init__(self, ctx: PageContext, routes: Optional[Dict[str, Handler]] = None):
        self.ctx = ctx
        self.routes = dict(routes if routes is not None else ROUTES)

    def resolve(self, path: str) -> Tuple[Handler, Dict[str, str]]:
        route, query = parse(path)
        return self.routes.get(route, pages.not_found_page), query

    def navigate(self, path: str) -> str:
        """Render ``path`` and follow any redirects; returns the last path shown."""
        for _ in range(MAX_REDIRECTS):
            handler, query = self.resolve(path)
            logger.debug("Rendering %s", path)
            pages.render_navbar(self.ctx)
            target = handler(self.ctx, query)
            if not target:
                return path
            path = target
        logger.warning("Too many redirects, stopping at %s", path)
        return path
