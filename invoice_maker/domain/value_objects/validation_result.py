"""バリデーション結果を表す値オブジェクト"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from invoice_maker.domain.entities.invoice import InvoiceData


@dataclass(frozen=True)
class ValidationResult:
    """検証結果

    成功時は検証済みの請求書、失敗時はフィールドパスごとのエラーを持つ
    """

    invoice: Optional["InvoiceData"] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors and self.invoice is not None

    @classmethod
    def ok(cls, invoice: "InvoiceData") -> "ValidationResult":
        return cls(invoice=invoice)

    @classmethod
    def failed(cls, errors: Dict[str, str]) -> "ValidationResult":
        return cls(errors=dict(errors))
