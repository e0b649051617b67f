# storesdk/client.py
from typing import Optional, Dict, Any, List

import requests


class StoreAPIError(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


def _detail(r) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text or "error"
    if isinstance(body, dict) and "detail" in body:
        detail = body["detail"]
        # validation errors come back as a list of dicts
        if isinstance(detail, list):
            return "; ".join(str(d.get("msg", d)) if isinstance(d, dict) else str(d) for d in detail)
        return str(detail)
    return str(body)


class StoreClient:
    """Thin wrapper over the GameStore HTTP API.

    Any object with the ``requests.Session`` call surface can be passed as
    ``session``; the tests hand in FastAPI's ``TestClient``.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:3000", timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _check(self, r):
        if r.status_code >= 400:
            raise StoreAPIError(r.status_code, _detail(r))
        return r.json()

    def reset(self):
        r = self.session.post(f"{self.base_url}/reset", timeout=self.timeout)
        return self._check(r)

    # Products
    def list_products(self, search: Optional[str] = None, sort: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {}
        if search:
            params["search"] = search
        if sort:
            params["sort"] = sort
        r = self.session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
        return self._check(r)

    def get_product(self, product_id: int) -> Optional[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        if r.status_code == 404:
            return None
        return self._check(r)

    def create_product(self, name: str, price: float, description: str = "", image: str = ""):
        r = self.session.post(f"{self.base_url}/products", json={
            "name": name, "price": price, "description": description, "image": image
        }, timeout=self.timeout)
        return self._check(r)

    def update_product(self, product_id: int, **fields):
        r = self.session.patch(f"{self.base_url}/products/{product_id}", json=fields, timeout=self.timeout)
        return self._check(r)

    def replace_product(self, product_id: int, name: str, price: float, description: str = "", image: str = ""):
        r = self.session.put(f"{self.base_url}/products/{product_id}", json={
            "name": name, "price": price, "description": description, "image": image
        }, timeout=self.timeout)
        return self._check(r)

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return self._check(r)

    # Users
    def find_users(self, email: Optional[str] = None, password: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {}
        if email:
            params["email"] = email
        if password:
            params["password"] = password
        r = self.session.get(f"{self.base_url}/users", params=params, timeout=self.timeout)
        return self._check(r)

    def create_user(self, email: str, password: str, role: str):
        r = self.session.post(f"{self.base_url}/users", json={
            "email": email, "password": password, "role": role
        }, timeout=self.timeout)
        return self._check(r)


if __name__ == "__main__":
    import argparse
    import os

    from rich import print

    parser = argparse.ArgumentParser(description="GameStore CLI")
    parser.add_argument("--url", default=os.getenv("GAMESTORE_API_URL", "http://127.0.0.1:3000"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--search", help="Substring to look for in name or description")
    lp.add_argument("--sort", choices=["name"], help="Sort order")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--description", default="")
    cp.add_argument("--image", default="")

    up = subparsers.add_parser("update-product", help="Change some fields of a product")
    up.add_argument("--product-id", type=int, required=True)
    up.add_argument("--name")
    up.add_argument("--price", type=float)
    up.add_argument("--description")
    up.add_argument("--image")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True)

    # ---------------------------
    # User commands
    # ---------------------------
    fu = subparsers.add_parser("find-users", help="Look up users by email and/or password")
    fu.add_argument("--email")
    fu.add_argument("--password")

    cu = subparsers.add_parser("create-user", help="Register a user")
    cu.add_argument("--email", required=True)
    cu.add_argument("--password", required=True)
    cu.add_argument("--role", choices=["manager", "customer"], default="customer")

    # ---------------------------
    # Parse and execute
    # ---------------------------
    args = parser.parse_args()
    c = StoreClient(base_url=args.url)

    try:
        if args.command == "list-products":
            print(c.list_products(args.search, args.sort))
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.price, args.description, args.image))
        elif args.command == "update-product":
            fields = {k: getattr(args, k) for k in ("name", "price", "description", "image")
                      if getattr(args, k) is not None}
            print(c.update_product(args.product_id, **fields))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
        elif args.command == "find-users":
            print(c.find_users(args.email, args.password))
        elif args.command == "create-user":
            print(c.create_user(args.email, args.password, args.role))
    except StoreAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
