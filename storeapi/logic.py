import logging
from typing import Optional, Dict, Any, List

from fastapi import HTTPException

from .database import JsonStore
from .models import ProductIn, ProductPatch, UserIn

# This file contains the core logic for all API endpoints.

logger = logging.getLogger(__name__)


def _find_index(records: List[Dict[str, Any]], record_id: int) -> int:
    for i, r in enumerate(records):
        if r.get("id") == record_id:
            return i
    return -1


def _matches(term: str, product: Dict[str, Any]) -> bool:
    if term in str(product.get("name", "")).lower():
        return True
    description = product.get("description")
    return bool(description) and term in str(description).lower()


# Product endpoints
def list_products_logic(store: JsonStore, search: Optional[str] = None, sort: Optional[str] = None):
    products = store.read()["products"]
    if search:
        logger.debug("Searching products for %r", search)
        term = search.lower()
        products = [p for p in products if _matches(term, p)]
    if sort == "name":
        products = sorted(products, key=lambda p: str(p.get("name", "")).casefold())
    return products


def get_product_logic(store: JsonStore, product_id: int):
    for p in store.read()["products"]:
        if p.get("id") == product_id:
            return p
    raise HTTPException(status_code=404, detail="Product not found")


def create_product_logic(store: JsonStore, payload: ProductIn):
    data = store.read()
    product = {"id": store.next_id(data["products"]), **payload.model_dump()}
    data["products"].append(product)
    store.write(data)
    logger.info("Product %s saved", product["id"])
    return product


def update_product_logic(store: JsonStore, product_id: int, patch: ProductPatch):
    data = store.read()
    idx = _find_index(data["products"], product_id)
    if idx == -1:
        raise HTTPException(status_code=404, detail="Product not found")
    # explicit nulls leave the stored value alone
    merged = {**data["products"][idx], **patch.model_dump(exclude_unset=True, exclude_none=True)}
    merged["id"] = product_id
    data["products"][idx] = merged
    store.write(data)
    logger.info("Product %s updated", product_id)
    return merged


def replace_product_logic(store: JsonStore, product_id: int, payload: ProductIn):
    data = store.read()
    idx = _find_index(data["products"], product_id)
    if idx == -1:
        raise HTTPException(status_code=404, detail="Product not found")
    product = {"id": product_id, **payload.model_dump()}
    data["products"][idx] = product
    store.write(data)
    logger.info("Product %s replaced", product_id)
    return product


def delete_product_logic(store: JsonStore, product_id: int):
    data = store.read()
    remaining = [p for p in data["products"] if p.get("id") != product_id]
    if len(remaining) == len(data["products"]):
        raise HTTPException(status_code=404, detail="Product not found")
    data["products"] = remaining
    store.write(data)
    logger.info("Product %s deleted", product_id)
    return {"detail": "Product deleted."}


# User endpoints
def list_users_logic(store: JsonStore, email: Optional[str] = None, password: Optional[str] = None):
    users = store.read()["users"]
    if email:
        users = [u for u in users if str(u.get("email", "")).lower() == email.lower()]
    if password:
        users = [u for u in users if u.get("password") == password]
    logger.debug("User lookup for %r matched %d", email, len(users))
    return users


def create_user_logic(store: JsonStore, payload: UserIn):
    if not payload.email.strip() or not payload.password:
        raise HTTPException(status_code=400, detail="Email, password and role are required.")

    data = store.read()
    email = payload.email.strip()
    if any(str(u.get("email", "")).lower() == email.lower() for u in data["users"]):
        raise HTTPException(status_code=400, detail="This email is already registered.")

    user = {
        "id": store.next_id(data["users"]),
        "email": email,
        "password": payload.password,
        "role": payload.role.value,
    }
    data["users"].append(user)
    store.write(data)
    logger.info("User %s (%s) registered", user["id"], user["email"])
    return user


def reset_logic(store: JsonStore):
    store.reset()
    logger.info("Store reset")
    return {"status": "reset"}
