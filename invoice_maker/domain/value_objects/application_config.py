"""アプリケーション設定を表す値オブジェクト"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from invoice_maker.domain.value_objects.document_labels import LabelLanguage


class ApplicationConfig(BaseModel):
    """アプリケーション設定の値オブジェクト"""

    # ログ設定
    log_level: str = Field(default="INFO", description="ログレベル")

    # 出力設定
    output_dir: str = Field(default="output", description="PDF保存先ディレクトリ")
    input_file: Optional[str] = Field(default=None, description="請求書入力JSONファイル")

    # 請求書設定
    invoice_number_prefix: str = Field(default="NNB-INV", description="請求書番号の接頭辞")
    currency_symbol: str = Field(default="$", description="通貨記号")
    label_language: str = Field(default=LabelLanguage.ENGLISH, description="PDFラベル言語")

    # フォント設定
    font_name: str = Field(default="MSung-Light", description="本文フォント")
    bold_font_name: str = Field(default="MSung-Light", description="太字フォント")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("label_language")
    @classmethod
    def validate_label_language(cls, v: str) -> str:
        """ラベル言語のバリデーション"""
        valid_languages = [LabelLanguage.ENGLISH, LabelLanguage.TRADITIONAL_CHINESE]
        if v not in valid_languages:
            raise ValueError(f"ラベル言語は {valid_languages} のいずれかである必要があります")
        return v

    @field_validator("invoice_number_prefix", "currency_symbol", "font_name", "bold_font_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("空の値は指定できません")
        return v.strip()

    class Config:
        frozen = True
