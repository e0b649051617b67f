# storeapi/main.py
import logging
from typing import Optional, List

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .database import JsonStore, StorageError, get_store
from .logic import (
    list_products_logic, get_product_logic, create_product_logic,
    update_product_logic, replace_product_logic, delete_product_logic,
    list_users_logic, create_user_logic, reset_logic,
)
from .logs import configure_logging
from .models import Product, ProductIn, ProductPatch, User, UserIn

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(title=settings.app_name, version=settings.version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------
# Error handlers
# ---------------------------
@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error."})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error."})


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/products", response_model=List[Product])
async def list_products(search: Optional[str] = None, sort: Optional[str] = None,
                        store: JsonStore = Depends(get_store)):
    return list_products_logic(store, search, sort)


@app.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: int, store: JsonStore = Depends(get_store)):
    return get_product_logic(store, product_id)


@app.post("/products", response_model=Product, status_code=201)
async def create_product(payload: ProductIn, store: JsonStore = Depends(get_store)):
    return create_product_logic(store, payload)


@app.patch("/products/{product_id}", response_model=Product)
async def update_product(product_id: int, payload: ProductPatch, store: JsonStore = Depends(get_store)):
    return update_product_logic(store, product_id, payload)


@app.put("/products/{product_id}", response_model=Product)
async def replace_product(product_id: int, payload: ProductIn, store: JsonStore = Depends(get_store)):
    return replace_product_logic(store, product_id, payload)


@app.delete("/products/{product_id}")
async def delete_product(product_id: int, store: JsonStore = Depends(get_store)):
    return delete_product_logic(store, product_id)


# ---------------------------
# User endpoints
# ---------------------------
@app.get("/users", response_model=List[User])
async def list_users(email: Optional[str] = None, password: Optional[str] = None,
                     store: JsonStore = Depends(get_store)):
    return list_users_logic(store, email, password)


@app.post("/users", response_model=User, status_code=201)
async def create_user(payload: UserIn, store: JsonStore = Depends(get_store)):
    return create_user_logic(store, payload)


# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all(store: JsonStore = Depends(get_store)):
    return reset_logic(store)


def run():
    import uvicorn

    configure_logging(settings.log_level)
    logger.info("Serving %s on http://%s:%s (data file: %s)",
                settings.app_name, settings.host, settings.port, settings.db_file)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
