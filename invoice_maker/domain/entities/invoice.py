"""請求書エンティティ"""
from datetime import date as Date
from decimal import Decimal
from typing import Any, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from invoice_maker.domain.services.invoice_rules import recompute_total
from invoice_maker.domain.value_objects.invoice_items import InvoiceItem

_REQUIRED_MESSAGES = {
    "invoice_number": "發票號碼為必填",
    "date": "日期為必填",
    "company_name": "公司名稱為必填",
    "company_address": "公司地址為必填",
    "company_email": "公司電子郵件為必填",
    "company_phone": "公司電話為必填",
    "client_name": "客戶名稱為必填",
}


class InvoiceData(BaseModel):
    """検証済みの請求書を表すエンティティ

    PDF生成に渡される不変のスナップショット。合計は明細から都度計算する
    """

    invoice_number: str = Field(..., description="發票號碼")
    date: Date = Field(..., description="日期")

    # 発行元
    company_name: str = Field(..., description="公司名稱")
    company_address: str = Field(..., description="公司地址")
    company_email: str = Field(..., description="公司電子郵件")
    company_phone: str = Field(..., description="公司電話")

    # 顧客
    client_name: str = Field(..., description="客戶名稱")
    client_email: Optional[str] = Field(default=None, description="客戶電子郵件")
    client_phone: Optional[str] = Field(default=None, description="客戶電話")

    items: List[InvoiceItem] = Field(..., description="商品項目")
    notes: Optional[str] = Field(default=None, description="備註")

    @field_validator(*_REQUIRED_MESSAGES, mode="before")
    @classmethod
    def validate_required(cls, v: Any, info: ValidationInfo) -> Any:
        """必須項目のバリデーション"""
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("required", _REQUIRED_MESSAGES[info.field_name])
        return v

    @field_validator("client_email", "client_phone", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """空文字の任意項目は未入力として扱う"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("client_email")
    @classmethod
    def validate_client_email(cls, v: Optional[str]) -> Optional[str]:
        """メールアドレスの書式チェック"""
        if v is None:
            return None
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("email_invalid", "無效的電子郵件")
        return v

    @field_validator("items")
    @classmethod
    def validate_items(cls, v: List[InvoiceItem]) -> List[InvoiceItem]:
        """明細は1件以上必要"""
        if not v:
            raise PydanticCustomError("items_empty", "至少需要一個商品")
        return v

    @property
    def total(self) -> Decimal:
        """合計金額（明細から導出）"""
        return recompute_total(self.items)

    class Config:
        frozen = True
