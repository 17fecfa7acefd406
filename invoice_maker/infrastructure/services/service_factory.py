"""サービスの初期化を行うファクトリ"""
import logging
from pathlib import Path

from invoice_maker.domain.value_objects.application_config import ApplicationConfig
from invoice_maker.domain.value_objects.company_profile import CompanyProfile
from invoice_maker.domain.value_objects.document_labels import DocumentLabels
from invoice_maker.infrastructure.pdf_renderer.invoice_renderer import ReportLabInvoiceRenderer
from invoice_maker.infrastructure.pdf_renderer.reportlab_backend import ReportLabBackend
from invoice_maker.infrastructure.storage.local_document_repository import LocalDocumentRepository
from invoice_maker.usecases.generate_invoice_pdf_use_case import GenerateInvoicePdfUseCase
from invoice_maker.usecases.invoice_form_session import InvoiceFormSession


class ServiceFactory:
    """サービスの初期化を行うファクトリ"""

    def __init__(self, logger: logging.Logger) -> None:
        """初期化

        Args:
            logger: ロガー
        """
        self.logger = logger

    def create_renderer(
        self,
        config: ApplicationConfig,
        labels: DocumentLabels,
    ) -> ReportLabInvoiceRenderer:
        """PDFレンダラーを作成

        Args:
            config: アプリケーション設定
            labels: 印字する文言

        Returns:
            ReportLabInvoiceRenderer: PDFレンダラー

        Raises:
            RenderError: フォントを登録できない場合
        """
        backend = ReportLabBackend(
            font_name=config.font_name,
            bold_font_name=config.bold_font_name,
        )
        self.logger.info(f"フォント: {backend.font_name} / {backend.bold_font_name}")

        return ReportLabInvoiceRenderer(
            backend=backend,
            labels=labels,
            currency_symbol=config.currency_symbol,
        )

    def create_document_repository(self, config: ApplicationConfig) -> LocalDocumentRepository:
        """保存先リポジトリを作成"""
        output_dir = Path(config.output_dir)
        self.logger.info(f"出力ディレクトリ: {output_dir}")
        return LocalDocumentRepository(output_dir=output_dir)

    def create_use_case(
        self,
        renderer: ReportLabInvoiceRenderer,
        document_repository: LocalDocumentRepository,
    ) -> GenerateInvoicePdfUseCase:
        return GenerateInvoicePdfUseCase(
            renderer=renderer,
            document_repository=document_repository,
        )

    def create_form_session(
        self,
        config: ApplicationConfig,
        company: CompanyProfile,
        labels: DocumentLabels,
    ) -> InvoiceFormSession:
        """フォームセッションを作成

        Args:
            config: アプリケーション設定
            company: 発行元情報
            labels: 印字する文言

        Returns:
            InvoiceFormSession: フォームセッション
        """
        self.logger.info("サービスの初期化を開始します...")

        renderer = self.create_renderer(config, labels)
        document_repository = self.create_document_repository(config)
        use_case = self.create_use_case(renderer, document_repository)

        session = InvoiceFormSession(
            use_case=use_case,
            company=company,
            invoice_number_prefix=config.invoice_number_prefix,
            currency_symbol=config.currency_symbol,
        )
        self.logger.info("サービスの初期化が完了しました")
        return session
