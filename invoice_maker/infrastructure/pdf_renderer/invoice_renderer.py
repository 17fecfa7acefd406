"""ReportLabを使った請求書PDFレンダラー"""
import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from invoice_maker.domain.entities.invoice import InvoiceData
from invoice_maker.domain.exceptions import RenderError
from invoice_maker.domain.repositories.invoice_renderer import IInvoiceRenderer
from invoice_maker.domain.value_objects.document_labels import DocumentLabels
from invoice_maker.infrastructure.pdf_renderer.invoice_layout import build_invoice_layout
from invoice_maker.infrastructure.pdf_renderer.reportlab_backend import ReportLabBackend

logger = logging.getLogger(__name__)


class ReportLabInvoiceRenderer(IInvoiceRenderer):
    """請求書をレイアウト命令に変換し、ReportLabでPDFに描画する"""

    def __init__(
        self,
        backend: ReportLabBackend,
        labels: Optional[DocumentLabels] = None,
        currency_symbol: str = "$",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """初期化

        Args:
            backend: 描画バックエンド
            labels: 印字する文言（省略時は英語）
            currency_symbol: 通貨記号
            clock: 著作権表記の年を決める時計
        """
        self.backend = backend
        self.labels = labels or DocumentLabels()
        self.currency_symbol = currency_symbol
        self._clock = clock

    def render(self, invoice: InvoiceData) -> bytes:
        logger.info(f"請求書PDFを生成中: {invoice.invoice_number}")

        try:
            layout = build_invoice_layout(
                invoice,
                labels=self.labels,
                currency_symbol=self.currency_symbol,
                year=self._clock().year,
            )
            document = self.backend.render(
                layout,
                title=f"{self.labels.title} {invoice.invoice_number}",
                author=invoice.company_name,
            )
        except RenderError:
            logger.error(f"請求書PDFの生成に失敗しました: {invoice.invoice_number}")
            raise
        except Exception as e:
            logger.error(f"請求書PDFの生成中にエラーが発生しました: {e}")
            raise RenderError(f"請求書PDFの生成に失敗しました: {e}") from e

        logger.info(
            f"請求書PDFの生成が完了しました: {invoice.invoice_number}",
            extra={"context": {"pages": document.page_count, "bytes": len(document.content)}},
        )
        return document.content

    async def render_async(self, invoice: InvoiceData) -> bytes:
        return await asyncio.to_thread(self.render, invoice)
