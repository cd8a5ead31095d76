"""Types used across encoder tests"""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field


class X(BaseModel):
    """Minimal model with one int field"""

    x: int


class Order(BaseModel):
    """Model with nested and aliased fields"""

    order_id: int = Field(alias="orderId")
    items: list[X] = []
    note: str | None = None
    created_at: datetime | None = None


@dataclass
class Point:
    """Stdlib dataclass, resolvable by pydantic"""

    lat: float
    lon: float


class Unregistered:
    """Plain class pydantic has no serializer for"""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"Unregistered({self.name!r})"


class Dangling(BaseModel):
    """Model whose field refers to a class that is never defined"""

    child: "Missing"  # noqa: F821


class TreeNode(BaseModel):
    """Self-referencing model"""

    x: int
    children: list["TreeNode"] = []
