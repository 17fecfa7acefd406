"""請求書の導出ルールのテスト"""
import re
from datetime import datetime
from decimal import Decimal

import pytest

from invoice_maker.domain.services.invoice_rules import (
    HONORIFIC_SUFFIXES,
    apply_name_suffix_toggle,
    apply_suggestion,
    build_invoice_filename,
    format_money,
    generate_invoice_number,
    recompute_total,
)
from invoice_maker.domain.value_objects.invoice_items import InvoiceItem, ItemDraft
from invoice_maker.domain.value_objects.item_suggestion import ItemSuggestion


def test_recompute_total_empty_items():
    """明細が空の場合は0"""
    assert recompute_total([]) == Decimal("0")


def test_recompute_total_sums_line_amounts():
    """数量×単価の合計"""
    items = [
        ItemDraft(description="A", quantity=2, price=Decimal("100")),
        ItemDraft(description="B", quantity=3, price=Decimal("12.50")),
        ItemDraft(description="C", quantity=1, price=Decimal("0")),
    ]

    assert recompute_total(items) == Decimal("237.50")


def test_recompute_total_treats_incomplete_values_as_zero():
    """入力途中の値は0として扱う"""
    items = [
        ItemDraft(description="A", quantity=None, price=Decimal("100")),
        ItemDraft(description="B", quantity=2, price=""),
        ItemDraft(description="C", quantity="abc", price=Decimal("5")),
        ItemDraft(description="D", quantity="3", price="1.5"),
    ]

    assert recompute_total(items) == Decimal("4.5")


def test_recompute_total_accepts_validated_items():
    """検証済みの明細でも計算できる"""
    items = [InvoiceItem(description="Service A", quantity=2, price=Decimal("100"))]

    assert recompute_total(items) == Decimal("200")


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("200"), "$200.00"),
        (Decimal("0.005"), "$0.01"),
        (Decimal("1234.5"), "$1234.50"),
        (0, "$0.00"),
    ],
)
def test_format_money(value, expected):
    """金額は小数2桁で通貨記号付き"""
    assert format_money(value) == expected


def test_format_money_custom_symbol():
    assert format_money(Decimal("380"), "HK$") == "HK$380.00"


@pytest.mark.parametrize("suffix", HONORIFIC_SUFFIXES)
def test_apply_name_suffix_toggle_is_idempotent(suffix):
    """同じ敬称を繰り返し適用しても結果は変わらない"""
    once = apply_name_suffix_toggle("陳小明", suffix)
    twice = apply_name_suffix_toggle(once, suffix)

    assert once == f"陳小明{suffix}"
    assert twice == once


def test_apply_name_suffix_toggle_switches_suffix():
    """別の敬称に切り替えると置き換わる"""
    name = apply_name_suffix_toggle("陳小明", "小姐")
    name = apply_name_suffix_toggle(name, "女士")
    name = apply_name_suffix_toggle(name, "先生")

    assert name == "陳小明先生"


def test_apply_name_suffix_toggle_never_stacks_suffixes():
    """既に敬称が重なっている名前でも敬称は1つになる"""
    result = apply_name_suffix_toggle("王大文先生小姐", "女士")

    assert result == "王大文女士"
    assert not re.search(r"(小姐|女士|先生){2}$", result)


def test_apply_name_suffix_toggle_empty_name():
    assert apply_name_suffix_toggle("", "小姐") == "小姐"


def test_apply_name_suffix_toggle_unknown_suffix():
    """未対応の敬称はエラー"""
    with pytest.raises(ValueError, match="未対応の敬称です"):
        apply_name_suffix_toggle("陳小明", "Ms.")


def test_apply_suggestion_keeps_quantity():
    """商品候補の反映で数量は変わらない"""
    item = ItemDraft(description="", quantity=3, price=Decimal("0"))
    suggestion = ItemSuggestion("基本美甲服務", Decimal("380"))

    updated = apply_suggestion(item, suggestion)

    assert updated.description == "基本美甲服務"
    assert updated.price == Decimal("380")
    assert updated.quantity == 3


def test_generate_invoice_number():
    """PREFIX-YYMMDD-HHMM 形式"""
    number = generate_invoice_number("NNB-INV", datetime(2025, 3, 15, 14, 30))

    assert number == "NNB-INV-250315-1430"


def test_build_invoice_filename():
    assert build_invoice_filename("NNB-INV-250101-1200") == "invoice-NNB-INV-250101-1200.pdf"


def test_item_suggestion_rejects_negative_price():
    with pytest.raises(ValueError, match="負の値"):
        ItemSuggestion("卸甲服務", Decimal("-1"))
