# storefront/models.py
from pydantic import BaseModel
from typing import List

class Product(BaseModel):
    id: int
    name: str
    price: float
    category: str = ""
    description: str = ""
    stock: int = 0

class OrderItem(BaseModel):
    productId: int
    name: str
    price: float
    quantity: int

class Order(BaseModel):
    id: int
    userId: int
    products: List[OrderItem]
    total: float
    status: str = "pending"
    createdAt: str

class CartItem(BaseModel):
    productId: int
    quantity: int

