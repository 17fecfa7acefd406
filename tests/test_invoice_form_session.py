"""InvoiceFormSessionのテスト"""
import asyncio
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from invoice_maker.domain.exceptions import InvoiceValidationError, SubmissionInProgressError
from invoice_maker.domain.value_objects.company_profile import CompanyProfile
from invoice_maker.domain.value_objects.invoice_items import ItemDraft
from invoice_maker.domain.value_objects.item_suggestion import (
    SUGGESTED_ITEMS,
    ItemSuggestion,
    SuggestionCategory,
)
from invoice_maker.usecases.invoice_form_session import InvoiceFormSession


@pytest.fixture
def mock_use_case() -> AsyncMock:
    use_case = AsyncMock()
    use_case.execute = AsyncMock(return_value=Path("output/invoice.pdf"))
    return use_case


@pytest.fixture
def session(mock_use_case, company_profile: CompanyProfile, fixed_now: datetime) -> InvoiceFormSession:
    return InvoiceFormSession(
        use_case=mock_use_case,
        company=company_profile,
        clock=lambda: fixed_now,
    )


def _fill(session: InvoiceFormSession) -> None:
    session.set_field("client_name", "Test Client")
    session.update_item(0, description="Service A", quantity=2, price=Decimal("100"))


def test_initial_draft(session: InvoiceFormSession):
    """フォームを開いた時点の既定値"""
    draft = session.draft

    assert draft.invoice_number == "NNB-INV-250101-1200"
    assert draft.date == "2025-01-01"
    assert draft.company_name == "Na Na Beauty"
    assert draft.client_name == ""
    assert draft.items == [ItemDraft()]
    assert session.total == Decimal("0")
    assert session.formatted_total == "$0.00"
    assert not session.in_progress


def test_total_follows_item_changes(session: InvoiceFormSession):
    """明細を変更するたびに合計が再計算される"""
    session.update_item(0, description="A", quantity=2, price=Decimal("10"))
    session.add_item()
    session.update_item(1, description="B", quantity=1, price=Decimal("5.5"))
    assert session.total == Decimal("25.5")
    assert session.formatted_total == "$25.50"

    session.update_item(0, quantity=3)
    assert session.total == Decimal("35.5")

    session.remove_item(0)
    assert session.total == Decimal("5.5")


def test_total_is_not_settable(session: InvoiceFormSession):
    with pytest.raises(ValueError, match="設定できないフィールドです"):
        session.set_field("total", Decimal("999"))
    with pytest.raises(ValueError):
        session.set_field("items", [])


def test_toggle_name_suffix(session: InvoiceFormSession):
    session.set_field("client_name", "陳")

    assert session.toggle_name_suffix("小姐") == "陳小姐"
    assert session.toggle_name_suffix("先生") == "陳先生"
    assert session.toggle_name_suffix("先生") == "陳先生"
    assert session.draft.client_name == "陳先生"


def test_apply_suggestion_keeps_quantity(session: InvoiceFormSession):
    session.update_item(0, quantity=3)
    suggestion = SUGGESTED_ITEMS[SuggestionCategory.SERVICES][0]

    item = session.apply_suggestion(0, suggestion)

    assert item.description == suggestion.description
    assert item.price == suggestion.price
    assert item.quantity == 3
    assert session.total == suggestion.price * 3


def test_apply_suggestion_custom_item(session: InvoiceFormSession):
    session.apply_suggestion(0, ItemSuggestion(description="Gel removal", price=Decimal("50")))

    assert session.draft.items[0] == ItemDraft(description="Gel removal", quantity=1, price=Decimal("50"))


def test_item_updates_reject_negative_index(session: InvoiceFormSession):
    """負のインデックスで末尾の明細を書き換えない"""
    session.update_item(0, description="Service A")
    suggestion = SUGGESTED_ITEMS[SuggestionCategory.PRODUCTS][0]

    with pytest.raises(IndexError, match="範囲外"):
        session.update_item(-1, description="Other")
    with pytest.raises(IndexError, match="範囲外"):
        session.apply_suggestion(-1, suggestion)

    assert session.draft.items == [ItemDraft(description="Service A")]


def test_suggestions_catalog(session: InvoiceFormSession):
    assert set(session.suggestions) == {SuggestionCategory.SERVICES, SuggestionCategory.PRODUCTS}


def test_load_ignores_total_and_unknown_keys(session: InvoiceFormSession):
    """totalなどの導出値は入力から受け付けない"""
    session.load(
        {
            "client_name": "陳小姐",
            "items": [{"description": "Polish", "quantity": 2, "price": "80"}],
            "total": "1",
            "unknown": "x",
        }
    )

    assert session.draft.client_name == "陳小姐"
    assert session.draft.items == [ItemDraft(description="Polish", quantity=2, price="80")]
    assert session.total == Decimal("160")


def test_load_rejects_malformed_item(session: InvoiceFormSession):
    with pytest.raises(ValueError, match="明細の形式が不正です"):
        session.load({"items": ["Polish"]})


def test_validate_reports_errors(session: InvoiceFormSession):
    result = session.validate()

    assert not result.is_valid
    assert result.errors["client_name"] == "客戶名稱為必填"
    assert "items[0].description" in result.errors


@pytest.mark.asyncio
async def test_submit_success_resets_form(session: InvoiceFormSession, mock_use_case):
    """送信に成功するとフォームは既定値に戻る"""
    _fill(session)
    submitted = session.draft

    result = await session.submit()

    assert result == Path("output/invoice.pdf")
    snapshot = mock_use_case.execute.call_args.args[0]
    assert snapshot is not submitted
    assert snapshot.client_name == "Test Client"
    assert session.draft.client_name == ""
    assert session.draft.items == [ItemDraft()]
    assert not session.in_progress


@pytest.mark.asyncio
async def test_submit_failure_keeps_draft(session: InvoiceFormSession, mock_use_case):
    """送信に失敗した場合は入力内容を残し、再送信できる"""
    _fill(session)
    mock_use_case.execute.side_effect = InvoiceValidationError({"client_name": "客戶名稱為必填"})

    with pytest.raises(InvoiceValidationError):
        await session.submit()

    assert session.draft.client_name == "Test Client"
    assert not session.in_progress

    mock_use_case.execute.side_effect = None
    assert await session.submit() == Path("output/invoice.pdf")


@pytest.mark.asyncio
async def test_submit_rejects_concurrent_submission(session: InvoiceFormSession, mock_use_case):
    """送信処理中の再送信は受け付けない"""
    _fill(session)
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow_execute(record):
        started.set()
        await release.wait()
        return Path("output/invoice.pdf")

    mock_use_case.execute.side_effect = slow_execute

    task = asyncio.create_task(session.submit())
    await started.wait()
    assert session.in_progress

    with pytest.raises(SubmissionInProgressError):
        await session.submit()

    release.set()
    assert await task == Path("output/invoice.pdf")
    assert not session.in_progress
    assert mock_use_case.execute.call_count == 1
