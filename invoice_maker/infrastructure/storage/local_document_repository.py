"""ローカルディレクトリへのドキュメント保存"""
import asyncio
import logging
import re
from pathlib import Path

from invoice_maker.domain.repositories.document_repository import IDocumentRepository

logger = logging.getLogger(__name__)

_INVALID_FILENAME_CHARS = re.compile(r'[\\/*?:"<>|\x00-\x1f]')


class LocalDocumentRepository(IDocumentRepository):
    """生成したPDFを出力ディレクトリに保存するリポジトリ"""

    def __init__(self, output_dir: Path):
        """初期化

        Args:
            output_dir: 保存先ディレクトリ（存在しない場合は作成する）
        """
        self.output_dir = output_dir

    def _build_file_name(self, filename: str) -> str:
        """ファイル名に使えない文字を取り除く"""
        cleaned = _INVALID_FILENAME_CHARS.sub("", filename).strip()
        if not cleaned or cleaned.startswith("."):
            raise ValueError(f"保存ファイル名が無効です: {filename!r}")
        return cleaned

    def _write(self, file_path: Path, content: bytes) -> None:
        # 書き込み途中のファイルを残さないよう一時ファイル経由で置き換える
        temp_path = file_path.with_name(file_path.name + ".part")
        try:
            temp_path.write_bytes(content)
            temp_path.replace(file_path)
        finally:
            if temp_path.exists():
                temp_path.unlink()

    async def save(self, filename: str, content: bytes) -> Path:
        file_path = self.output_dir / self._build_file_name(filename)
        logger.info(f"ドキュメントを保存中: {file_path.name}")

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(self._write, file_path, content)
        except OSError as e:
            logger.error(f"ドキュメントの保存に失敗しました: {e}")
            raise

        logger.info(
            "ドキュメントを保存しました",
            extra={"context": {"path": str(file_path), "bytes": len(content)}},
        )
        return file_path
