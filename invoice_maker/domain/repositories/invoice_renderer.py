"""請求書レンダラーのインターフェース"""
from abc import ABC, abstractmethod

from invoice_maker.domain.entities.invoice import InvoiceData


class IInvoiceRenderer(ABC):
    """検証済みの請求書をPDFに変換するレンダラーのインターフェース"""

    @abstractmethod
    def render(self, invoice: InvoiceData) -> bytes:
        """請求書をPDFに変換する

        入力は検証済みであることが前提で、再検証は行わない

        Args:
            invoice: 検証済みの請求書

        Returns:
            bytes: PDFのバイト列

        Raises:
            RenderError: レイアウトまたは出力に失敗した場合
        """
        pass

    @abstractmethod
    async def render_async(self, invoice: InvoiceData) -> bytes:
        """イベントループを塞がずに render を実行する"""
        pass
