"""フォーム編集中の請求書エンティティ"""
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List

from invoice_maker.domain.services.invoice_rules import (
    generate_invoice_number,
    recompute_total,
)
from invoice_maker.domain.value_objects.company_profile import CompanyProfile
from invoice_maker.domain.value_objects.invoice_items import ItemDraft


@dataclass
class InvoiceDraft:
    """フォームセッション中の請求書

    入力途中の値を保持する。合計は保存せず、明細から都度計算する
    """

    invoice_number: str
    date: str
    company_name: str
    company_address: str
    company_email: str
    company_phone: str
    client_name: str = ""
    client_email: str = ""
    client_phone: str = ""
    items: List[ItemDraft] = field(default_factory=lambda: [ItemDraft()])
    notes: str = ""

    @classmethod
    def new(cls, company: CompanyProfile, prefix: str, now: datetime) -> "InvoiceDraft":
        """既定値で新しい下書きを作成する

        Args:
            company: 発行元情報
            prefix: 請求書番号の接頭辞
            now: フォームを開いた時刻
        """
        return cls(
            invoice_number=generate_invoice_number(prefix, now),
            date=now.date().isoformat(),
            company_name=company.company_name,
            company_address=company.company_address,
            company_email=company.company_email,
            company_phone=company.company_phone,
        )

    @property
    def total(self) -> Decimal:
        return recompute_total(self.items)

    def add_item(self) -> ItemDraft:
        """既定値の明細を末尾に追加する"""
        item = ItemDraft()
        self.items.append(item)
        return item

    def remove_item(self, index: int) -> ItemDraft:
        """指定位置の明細を削除する

        編集中は明細が0件になることを許容し、送信時のバリデーションで弾く

        Raises:
            IndexError: 範囲外のインデックスの場合
        """
        self._check_index(index)
        return self.items.pop(index)

    def item_at(self, index: int) -> ItemDraft:
        self._check_index(index)
        return self.items[index]

    def replace_item(self, index: int, item: ItemDraft) -> ItemDraft:
        """指定位置の明細を置き換える"""
        self._check_index(index)
        self.items[index] = item
        return item

    def _check_index(self, index: int) -> None:
        # 負のインデックスも範囲外として扱う
        if not 0 <= index < len(self.items):
            raise IndexError(f"明細のインデックスが範囲外です: {index}")

    @classmethod
    def editable_fields(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.name != "items"]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
