"""PDFレンダラーモジュール"""
from invoice_maker.infrastructure.pdf_renderer.invoice_layout import build_invoice_layout
from invoice_maker.infrastructure.pdf_renderer.invoice_renderer import ReportLabInvoiceRenderer
from invoice_maker.infrastructure.pdf_renderer.reportlab_backend import ReportLabBackend, RenderedDocument

__all__ = ["build_invoice_layout", "ReportLabInvoiceRenderer", "ReportLabBackend", "RenderedDocument"]
