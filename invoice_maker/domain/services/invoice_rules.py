"""請求書の導出ルール

合計計算・敬称の切り替え・商品候補の反映など、状態を持たない変換をまとめる
"""
import re
from dataclasses import replace
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Tuple

from invoice_maker.domain.value_objects.invoice_items import ItemDraft
from invoice_maker.domain.value_objects.item_suggestion import ItemSuggestion

HONORIFIC_SUFFIXES: Tuple[str, ...] = ("小姐", "女士", "先生")

_HONORIFIC_PATTERN = re.compile(
    "(?:" + "|".join(re.escape(s) for s in HONORIFIC_SUFFIXES) + r")+$"
)

_CENT = Decimal("0.01")


def _as_decimal(value: Any) -> Decimal:
    """入力途中の値を数値として扱う。数値にならない値は0"""
    if value is None or value == "" or isinstance(value, bool):
        return Decimal("0")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def line_amount(quantity: Any, price: Any) -> Decimal:
    """明細金額を計算する"""
    return _as_decimal(quantity) * _as_decimal(price)


def recompute_total(items: Iterable[Any]) -> Decimal:
    """明細の合計金額を計算する

    Args:
        items: quantityとpriceを持つ明細のシーケンス

    Returns:
        Decimal: Σ(quantity × price)。空の場合は0
    """
    return sum((line_amount(item.quantity, item.price) for item in items), Decimal("0"))


def format_money(value: Any, currency_symbol: str = "$") -> str:
    """金額を通貨記号付きの小数2桁で整形する"""
    amount = _as_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"{currency_symbol}{amount:.2f}"


def apply_name_suffix_toggle(name: str, suffix: str) -> str:
    """顧客名末尾の敬称を付け替える

    既存の敬称を取り除いてから指定の敬称を付けるため、繰り返し適用しても重複しない

    Raises:
        ValueError: 未対応の敬称の場合
    """
    if suffix not in HONORIFIC_SUFFIXES:
        raise ValueError(f"未対応の敬称です: {suffix}")
    base = _HONORIFIC_PATTERN.sub("", (name or "").rstrip())
    return base + suffix


def apply_suggestion(item: ItemDraft, suggestion: ItemSuggestion) -> ItemDraft:
    """商品候補の説明と単価を明細に反映する（数量は維持）"""
    return replace(item, description=suggestion.description, price=suggestion.price)


def generate_invoice_number(prefix: str, now: datetime) -> str:
    """PREFIX-YYMMDD-HHMM 形式の請求書番号を生成する"""
    return f"{prefix}-{now:%y%m%d}-{now:%H%M}"


def build_invoice_filename(invoice_number: str) -> str:
    return f"invoice-{invoice_number}.pdf"
