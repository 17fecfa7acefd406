"""請求書フォームのセッション"""
import copy
import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Tuple

from invoice_maker.domain.entities.invoice_draft import InvoiceDraft
from invoice_maker.domain.exceptions import SubmissionInProgressError
from invoice_maker.domain.services.invoice_rules import (
    apply_name_suffix_toggle,
    apply_suggestion,
    format_money,
)
from invoice_maker.domain.services.invoice_validator import validate
from invoice_maker.domain.value_objects.company_profile import CompanyProfile
from invoice_maker.domain.value_objects.invoice_items import ItemDraft
from invoice_maker.domain.value_objects.item_suggestion import SUGGESTED_ITEMS, ItemSuggestion
from invoice_maker.domain.value_objects.validation_result import ValidationResult
from invoice_maker.usecases.generate_invoice_pdf_use_case import GenerateInvoicePdfUseCase

logger = logging.getLogger(__name__)


class InvoiceFormSession:
    """1枚分の請求書を入力して送信するまでのフォーム状態

    合計は明細の変更ごとに計算し直した値を常に返す。送信中は再送信を受け付けない
    """

    def __init__(
        self,
        use_case: GenerateInvoicePdfUseCase,
        company: CompanyProfile,
        invoice_number_prefix: str = "NNB-INV",
        currency_symbol: str = "$",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.use_case = use_case
        self.company = company
        self.invoice_number_prefix = invoice_number_prefix
        self.currency_symbol = currency_symbol
        self._clock = clock
        self._in_progress = False
        self._draft = self._new_draft()

    def _new_draft(self) -> InvoiceDraft:
        return InvoiceDraft.new(self.company, self.invoice_number_prefix, self._clock())

    @property
    def draft(self) -> InvoiceDraft:
        return self._draft

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    @property
    def total(self) -> Decimal:
        return self._draft.total

    @property
    def formatted_total(self) -> str:
        return format_money(self.total, self.currency_symbol)

    @property
    def suggestions(self) -> Dict[str, Tuple[ItemSuggestion, ...]]:
        return SUGGESTED_ITEMS

    def set_field(self, name: str, value: Any) -> None:
        """明細以外のフィールドを更新する

        Raises:
            ValueError: 存在しない、または直接設定できないフィールドの場合
        """
        if name not in InvoiceDraft.editable_fields():
            raise ValueError(f"設定できないフィールドです: {name}")
        setattr(self._draft, name, value)

    def load(self, values: Mapping[str, Any]) -> None:
        """辞書からフォームの値をまとめて設定する

        totalなどの導出値や未知のキーは無視する
        """
        editable = InvoiceDraft.editable_fields()
        for name, value in values.items():
            if name == "items":
                self._draft.items = [self._to_item(item) for item in value or []]
            elif name in editable:
                setattr(self._draft, name, value)
            else:
                logger.warning(f"未知の入力項目を無視しました: {name}")

    @staticmethod
    def _to_item(value: Any) -> ItemDraft:
        if isinstance(value, ItemDraft):
            return value
        if not isinstance(value, Mapping):
            raise ValueError(f"明細の形式が不正です: {value!r}")
        return ItemDraft(
            description=value.get("description", ""),
            quantity=value.get("quantity", 1),
            price=value.get("price", Decimal("0")),
        )

    def add_item(self) -> ItemDraft:
        return self._draft.add_item()

    def remove_item(self, index: int) -> ItemDraft:
        return self._draft.remove_item(index)

    def update_item(self, index: int, **changes: Any) -> ItemDraft:
        """明細の description / quantity / price を更新する"""
        return self._draft.replace_item(index, replace(self._draft.item_at(index), **changes))

    def apply_suggestion(self, index: int, suggestion: ItemSuggestion) -> ItemDraft:
        return self._draft.replace_item(index, apply_suggestion(self._draft.item_at(index), suggestion))

    def toggle_name_suffix(self, suffix: str) -> str:
        self._draft.client_name = apply_name_suffix_toggle(self._draft.client_name, suffix)
        return self._draft.client_name

    def validate(self) -> ValidationResult:
        return validate(self._draft)

    def reset(self) -> None:
        """次の請求書用に既定値の下書きへ戻す"""
        self._draft = self._new_draft()

    async def submit(self) -> Path:
        """入力内容からPDFを生成して保存する

        成功した場合はフォームを既定値に戻す。失敗した場合は入力内容を残して再送信できる状態に戻す

        Returns:
            Path: 保存されたPDFのパス

        Raises:
            SubmissionInProgressError: 送信処理が実行中の場合
            InvoiceValidationError: 入力値が不正な場合
            RenderError: PDFの生成に失敗した場合
        """
        if self._in_progress:
            raise SubmissionInProgressError("請求書の送信処理が実行中です")

        self._in_progress = True
        try:
            snapshot = copy.deepcopy(self._draft)
            file_path = await self.use_case.execute(snapshot)
        finally:
            self._in_progress = False

        self.reset()
        return file_path
