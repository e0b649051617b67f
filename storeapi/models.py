# storeapi/models.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Role(str, Enum):
    manager = "manager"
    customer = "customer"


class ProductIn(BaseModel):
    name: str
    price: float
    description: str = ""
    image: str = ""


class ProductPatch(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    image: Optional[str] = None


class Product(ProductIn):
    id: int


class UserIn(BaseModel):
    email: str
    password: str
    role: Role


class User(BaseModel):
    id: int
    email: str
    role: Role
