"""設定の読み込みを行うサービス"""
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from invoice_maker.domain.value_objects.application_config import ApplicationConfig
from invoice_maker.domain.value_objects.company_profile import CompanyProfile
from invoice_maker.domain.value_objects.document_labels import DocumentLabels, LabelLanguage


class ConfigLoader:
    """環境変数から設定を読み込むサービス"""

    def __init__(self, project_root: Path) -> None:
        """初期化

        Args:
            project_root: プロジェクトルートディレクトリ
        """
        self.project_root = project_root
        self.logger = logging.getLogger(__name__)

    def load_config(self) -> ApplicationConfig:
        """アプリケーション設定を読み込む

        Returns:
            ApplicationConfig: アプリケーション設定

        Raises:
            ValueError: 設定値が無効な場合
        """
        load_dotenv()

        defaults = ApplicationConfig()

        label_language = self._parse_label_language(os.getenv("INVOICE_LABEL_LANGUAGE"))

        try:
            config = ApplicationConfig(
                log_level=os.getenv("LOG_LEVEL", defaults.log_level),
                output_dir=self._resolve_path(
                    os.getenv("INVOICE_OUTPUT_DIR", defaults.output_dir)
                ),
                input_file=self._parse_input_file(os.getenv("INVOICE_INPUT_FILE")),
                invoice_number_prefix=os.getenv(
                    "INVOICE_NUMBER_PREFIX", defaults.invoice_number_prefix
                ),
                currency_symbol=os.getenv("INVOICE_CURRENCY_SYMBOL", defaults.currency_symbol),
                label_language=label_language or defaults.label_language,
                font_name=os.getenv("INVOICE_FONT", defaults.font_name),
                bold_font_name=os.getenv("INVOICE_BOLD_FONT", defaults.bold_font_name),
            )
        except ValueError as e:
            raise ValueError(f"設定値が無効です: {str(e)}")

        self.logger.info(
            "設定を読み込みました",
            extra={"context": {"output_dir": config.output_dir, "label_language": config.label_language}},
        )
        return config

    def load_company_profile(self) -> CompanyProfile:
        """発行元情報を読み込む（未設定の項目は既定値）

        Raises:
            ValueError: 設定値が無効な場合
        """
        load_dotenv()

        overrides = {
            field: value
            for field, value in (
                ("company_name", os.getenv("COMPANY_NAME")),
                ("company_address", os.getenv("COMPANY_ADDRESS")),
                ("company_phone", os.getenv("COMPANY_PHONE")),
                ("company_email", os.getenv("COMPANY_EMAIL")),
            )
            if value
        }

        try:
            return CompanyProfile(**overrides)
        except ValueError as e:
            raise ValueError(f"発行元情報が無効です: {str(e)}")

    def load_labels(self, config: ApplicationConfig) -> DocumentLabels:
        return DocumentLabels.for_language(config.label_language)

    def _resolve_path(self, value: str) -> str:
        """相対パスはプロジェクトルート基準で解決する"""
        path = Path(value)
        if not path.is_absolute():
            path = self.project_root / path
        return str(path)

    def _parse_input_file(self, value: Optional[str]) -> Optional[str]:
        """入力JSONファイルのパスをパースする

        Args:
            value: 環境変数の値

        Returns:
            Optional[str]: 解決済みのパス、存在しない場合はNone
        """
        if not value:
            return None

        resolved = self._resolve_path(value)
        if not Path(resolved).is_file():
            self.logger.warning(
                f"INVOICE_INPUT_FILE のファイルが見つかりません: {value}。既定の入力値で実行します。"
            )
            return None
        return resolved

    def _parse_label_language(self, value: Optional[str]) -> Optional[str]:
        """ラベル言語をパースする

        Args:
            value: 環境変数の値

        Returns:
            Optional[str]: パースされた値、無効な場合はNone
        """
        if not value:
            return None

        valid_languages = [LabelLanguage.ENGLISH, LabelLanguage.TRADITIONAL_CHINESE]
        if value not in valid_languages:
            self.logger.warning(
                f"INVOICE_LABEL_LANGUAGE の値が無効です: {value}。既定の言語を使用します。"
            )
            return None

        return value
