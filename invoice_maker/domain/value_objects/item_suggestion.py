"""商品候補の値オブジェクト"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Tuple


@dataclass(frozen=True)
class ItemSuggestion:
    """ワンクリックで明細に反映できる商品候補"""

    description: str
    price: Decimal

    def __post_init__(self):
        """バリデーション"""
        if not self.description:
            raise ValueError("商品候補の説明が空です")

        if self.price < 0:
            raise ValueError(f"商品候補の価格が負の値です: {self.price}")


class SuggestionCategory:
    """商品候補のカテゴリ定数"""
    SERVICES = "服務項目"
    PRODUCTS = "產品"


SUGGESTED_ITEMS: Dict[str, Tuple[ItemSuggestion, ...]] = {
    SuggestionCategory.SERVICES: (
        ItemSuggestion("基本美甲服務", Decimal("380")),
        ItemSuggestion("手部護理套餐", Decimal("480")),
        ItemSuggestion("足部護理套餐", Decimal("580")),
        ItemSuggestion("光療美甲服務", Decimal("480")),
        ItemSuggestion("卸甲服務", Decimal("100")),
    ),
    SuggestionCategory.PRODUCTS: (
        ItemSuggestion("指甲油 OPI", Decimal("150")),
        ItemSuggestion("手部護理霜", Decimal("120")),
        ItemSuggestion("足部護理霜", Decimal("120")),
        ItemSuggestion("指甲修護精華", Decimal("180")),
        ItemSuggestion("去甲油液", Decimal("80")),
        ItemSuggestion("指甲銼刀套裝", Decimal("100")),
    ),
}
