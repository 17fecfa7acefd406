"""請求書項目の値オブジェクト"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


class InvoiceItem(BaseModel):
    """検証済みの請求明細行を表す値オブジェクト"""

    description: str = Field(..., description="商品描述")
    quantity: int = Field(..., description="數量")
    price: Decimal = Field(..., description="單價")

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> Any:
        """商品描述のバリデーション"""
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("description_required", "商品描述為必填")
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def require_quantity(cls, v: Any) -> Any:
        if v is None or v == "":
            raise PydanticCustomError("quantity_required", "數量為必填")
        return v

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v: int) -> int:
        """数量は1以上"""
        if v < 1:
            raise PydanticCustomError("quantity_too_small", "最小數量為1")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def require_price(cls, v: Any) -> Any:
        if v is None or v == "":
            raise PydanticCustomError("price_required", "單價為必填")
        return v

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: Decimal) -> Decimal:
        """単価は0以上"""
        if not v.is_finite():
            raise PydanticCustomError("price_invalid", "單價必須為數字")
        if v < 0:
            raise PydanticCustomError("price_negative", "價格不能為負數")
        return v

    @property
    def line_amount(self) -> Decimal:
        """明細金額（数量 × 単価）"""
        return self.quantity * self.price

    class Config:
        frozen = True


@dataclass
class ItemDraft:
    """フォーム編集中の明細行

    入力途中の値を保持するため、バリデーションは行わない
    """

    description: str = ""
    quantity: Any = 1
    price: Any = field(default_factory=lambda: Decimal("0"))
