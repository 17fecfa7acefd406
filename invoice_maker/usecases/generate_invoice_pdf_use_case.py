"""請求書PDFを生成して保存するユースケース"""
import logging
from pathlib import Path
from typing import Any, Mapping, Union

from invoice_maker.domain.entities.invoice_draft import InvoiceDraft
from invoice_maker.domain.exceptions import InvoiceValidationError, RenderError
from invoice_maker.domain.repositories.document_repository import IDocumentRepository
from invoice_maker.domain.repositories.invoice_renderer import IInvoiceRenderer
from invoice_maker.domain.services.invoice_rules import build_invoice_filename
from invoice_maker.domain.services.invoice_validator import validate

logger = logging.getLogger(__name__)


class GenerateInvoicePdfUseCase:
    """フォームの入力内容を検証し、PDFを生成して保存するユースケース"""

    def __init__(
        self,
        renderer: IInvoiceRenderer,
        document_repository: IDocumentRepository,
    ):
        self.renderer = renderer
        self.document_repository = document_repository

    async def execute(self, record: Union[InvoiceDraft, Mapping[str, Any]]) -> Path:
        """請求書PDFを生成して保存する

        Args:
            record: フォームの下書き、またはフィールド名をキーとする辞書

        Returns:
            Path: 保存されたPDFのパス

        Raises:
            InvoiceValidationError: 入力値が不正な場合
            RenderError: PDFの生成に失敗した場合
            OSError: 保存に失敗した場合
        """
        logger.info("請求書PDFの生成処理を開始します")

        # ステップ1: 全フィールドを検証（ここで入力内容を確定させる）
        logger.info("ステップ1: 入力値を検証中...")
        result = validate(record)
        if not result.is_valid:
            logger.warning(
                f"入力値に {len(result.errors)} 件のエラーがあります",
                extra={"context": {"errors": result.errors}},
            )
            raise InvoiceValidationError(result.errors)

        invoice = result.invoice
        logger.info(f"入力値の検証が完了しました: {invoice.invoice_number} (合計: {invoice.total:,.2f})")

        try:
            # ステップ2: PDFを生成
            logger.info("ステップ2: PDFを生成中...")
            content = await self.renderer.render_async(invoice)

            # ステップ3: PDFを保存
            logger.info("ステップ3: PDFを保存中...")
            file_path = await self.document_repository.save(
                build_invoice_filename(invoice.invoice_number), content
            )

        except RenderError as e:
            logger.error(f"PDFの生成に失敗しました: {e}")
            raise
        except Exception as e:
            logger.error(f"PDFの保存中にエラーが発生しました: {e}")
            raise

        logger.info(f"処理完了: 請求書 {invoice.invoice_number} を {file_path} に保存しました")
        return file_path
