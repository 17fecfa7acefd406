"""ドメイン例外"""
from typing import Dict


class InvoiceValidationError(ValueError):
    """請求書の入力値が不正な場合の例外

    全フィールドのエラーをまとめて保持する
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        summary = ", ".join(f"{path}: {message}" for path, message in self.errors.items())
        super().__init__(f"請求書の入力値が不正です: {summary}")


class RenderError(Exception):
    """PDFのレイアウトまたは出力に失敗した場合の例外"""


class SubmissionInProgressError(RuntimeError):
    """送信処理が既に実行中の場合の例外"""
