from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List

from .models import Product, Order, OrderItem

class ProductIn(BaseModel):
    name: str
    price: float = Field(ge=0, allow_inf_nan=False)
    category: str = ""
    description: str = ""
    stock: int = Field(0, ge=0)

class ProductUpdate(BaseModel):
    # unknown fields are overlaid onto the stored record as-is
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    description: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)

class OrderItemIn(BaseModel):
    productId: int
    quantity: int = Field(gt=0)

class OrderIn(BaseModel):
    userId: int
    products: List[OrderItemIn] = Field(min_length=1)

class AddToCartIn(BaseModel):
    productId: int
    quantity: int = Field(1, gt=0)

def envelope(data: Any = None, message: Optional[str] = None,
             count: Optional[int] = None, success: bool = True) -> Dict[str, Any]:
    out: Dict[str, Any] = {"success": success}
    if message is not None:
        out["message"] = message
    if data is not None:
        out["data"] = data
    if count is not None:
        out["count"] = count
    return out

def next_id(records: List[Dict[str, Any]]) -> int:
    ids = [r["id"] for r in records if isinstance(r.get("id"), int)]
    return max(ids) + 1 if ids else 1

def find_index(records: List[Dict[str, Any]], record_id: int) -> int:
    for i, r in enumerate(records):
        if r.get("id") == record_id:
            return i
    return -1

def _make_product_dict(product_id: int, p: ProductIn) -> Dict[str, Any]:
    return Product(id=product_id, **p.model_dump()).model_dump()

def _make_order_dict(order_id: int, user_id: int, items: List[Dict[str, Any]], total: Decimal) -> Dict[str, Any]:
    order = Order(
        id=order_id,
        userId=user_id,
        products=[OrderItem(**it) for it in items],
        total=float(total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
        status="pending",
        createdAt=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )
    return order.model_dump()

def matches_query(product: Dict[str, Any], q: str) -> bool:
    term = q.lower()
    return any(term in str(product.get(field) or "").lower()
               for field in ("name", "description", "category"))
