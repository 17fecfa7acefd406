"""ドキュメント保存リポジトリのインターフェース"""
from abc import ABC, abstractmethod
from pathlib import Path


class IDocumentRepository(ABC):
    """生成したPDFを利用者の手元に保存するリポジトリのインターフェース"""

    @abstractmethod
    async def save(self, filename: str, content: bytes) -> Path:
        """ドキュメントを保存する

        Args:
            filename: 保存ファイル名（例: invoice-NNB-INV-250101-1200.pdf）
            content: PDFのバイト列

        Returns:
            Path: 保存先のパス
        """
        pass
