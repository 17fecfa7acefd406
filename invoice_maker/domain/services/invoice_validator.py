"""請求書のバリデーション"""
import logging
from typing import Any, Dict, Mapping, Tuple, Union

from pydantic import ValidationError

from invoice_maker.domain.entities.invoice import InvoiceData
from invoice_maker.domain.entities.invoice_draft import InvoiceDraft
from invoice_maker.domain.value_objects.validation_result import ValidationResult

logger = logging.getLogger(__name__)

# pydantic標準エラーの表示文言（接頭辞で判定）
_TYPE_MESSAGES: Tuple[Tuple[str, str], ...] = (
    ("missing", "此欄位為必填"),
    ("int_", "必須為整數"),
    ("decimal_", "必須為數字"),
    ("finite_number", "必須為數字"),
    ("date_", "日期格式無效"),
    ("string_", "必須為文字"),
    ("list_", "格式無效"),
)


def format_error_path(loc: Tuple[Union[str, int], ...]) -> str:
    """エラー位置を items[2].price 形式のパスに変換する"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _message_for(error: Dict[str, Any]) -> str:
    error_type = error.get("type", "")
    for prefix, message in _TYPE_MESSAGES:
        if error_type.startswith(prefix):
            return message
    return error.get("msg", "")


def validate(record: Union[InvoiceDraft, Mapping[str, Any]]) -> ValidationResult:
    """請求書の全フィールドをまとめて検証する

    1件でも不正があれば送信不可。エラーは途中で打ち切らず全件返す

    Args:
        record: フォームの下書き、またはフィールド名をキーとする辞書

    Returns:
        ValidationResult: 成功時は検証済みInvoiceData、失敗時はパスごとのエラー
    """
    data = record.to_dict() if isinstance(record, InvoiceDraft) else dict(record)

    try:
        invoice = InvoiceData.model_validate(data)
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for error in e.errors(include_url=False):
            errors.setdefault(format_error_path(error["loc"]), _message_for(error))
        logger.debug("請求書の検証に失敗しました", extra={"context": {"errors": errors}})
        return ValidationResult.failed(errors)

    return ValidationResult.ok(invoice)
