"""InvoiceDraftのテスト"""
import re
from datetime import datetime
from decimal import Decimal

import pytest

from invoice_maker.domain.entities.invoice_draft import InvoiceDraft
from invoice_maker.domain.value_objects.company_profile import CompanyProfile
from invoice_maker.domain.value_objects.invoice_items import ItemDraft


def test_new_draft_defaults(company_profile: CompanyProfile, fixed_now: datetime):
    """既定値の下書き"""
    draft = InvoiceDraft.new(company_profile, "NNB-INV", fixed_now)

    assert draft.invoice_number == "NNB-INV-250101-1200"
    assert re.fullmatch(r"NNB-INV-\d{6}-\d{4}", draft.invoice_number)
    assert draft.date == "2025-01-01"
    assert draft.company_name == "Na Na Beauty"
    assert draft.items == [ItemDraft(description="", quantity=1, price=Decimal("0"))]
    assert draft.total == Decimal("0")


def test_add_item_appends_default_item(valid_draft: InvoiceDraft):
    """明細追加は1件だけ増え、既存の明細は変わらない"""
    before = [ItemDraft(**vars(item)) for item in valid_draft.items]

    added = valid_draft.add_item()

    assert len(valid_draft.items) == len(before) + 1
    assert valid_draft.items[:-1] == before
    assert added == ItemDraft(description="", quantity=1, price=Decimal("0"))


def test_remove_item_preserves_order(valid_draft: InvoiceDraft):
    """指定位置の明細だけが削除され、順序は保たれる"""
    valid_draft.items = [ItemDraft(description=name) for name in ("A", "B", "C", "D")]

    removed = valid_draft.remove_item(1)

    assert removed.description == "B"
    assert [item.description for item in valid_draft.items] == ["A", "C", "D"]


def test_remove_last_item_leaves_empty_list(valid_draft: InvoiceDraft):
    """編集中は明細0件を許容する"""
    valid_draft.remove_item(0)

    assert valid_draft.items == []
    assert valid_draft.total == Decimal("0")


def test_remove_item_out_of_range(valid_draft: InvoiceDraft):
    with pytest.raises(IndexError, match="範囲外"):
        valid_draft.remove_item(5)


@pytest.mark.parametrize("index", [-1, -2, 1])
def test_item_access_rejects_out_of_range_index(valid_draft: InvoiceDraft, index: int):
    """負のインデックスも範囲外として扱う"""
    with pytest.raises(IndexError, match="範囲外"):
        valid_draft.remove_item(index)
    with pytest.raises(IndexError, match="範囲外"):
        valid_draft.item_at(index)
    with pytest.raises(IndexError, match="範囲外"):
        valid_draft.replace_item(index, ItemDraft(description="X"))

    assert valid_draft.items == [ItemDraft(description="Service A", quantity=2, price=Decimal("100"))]


def test_replace_item(valid_draft: InvoiceDraft):
    item = ItemDraft(description="Service B", quantity=1, price=Decimal("50"))

    assert valid_draft.replace_item(0, item) is item
    assert valid_draft.item_at(0) is item
    assert valid_draft.total == Decimal("50")


def test_total_follows_item_mutations(valid_draft: InvoiceDraft):
    """合計は明細の変更に追従する"""
    assert valid_draft.total == Decimal("200")

    item = valid_draft.add_item()
    item.description = "Service B"
    item.price = Decimal("50")
    assert valid_draft.total == Decimal("250")

    item.quantity = 3
    assert valid_draft.total == Decimal("350")

    valid_draft.remove_item(0)
    assert valid_draft.total == Decimal("150")


def test_editable_fields_exclude_items():
    fields = InvoiceDraft.editable_fields()

    assert "items" not in fields
    assert "total" not in fields
    assert "client_name" in fields
