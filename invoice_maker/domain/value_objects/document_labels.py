"""PDFに印字するラベル文言の値オブジェクト"""
from typing import Tuple

from pydantic import BaseModel, Field


class LabelLanguage:
    """ラベル言語の定数"""
    ENGLISH = "en"
    TRADITIONAL_CHINESE = "zh-Hant"


class DocumentLabels(BaseModel):
    """請求書テンプレートの文言

    copyrightは {year} と {company} を埋め込むテンプレート文字列
    """

    watermark: str = Field(default="Sample Only", description="透かし文字")
    title: str = Field(default="INVOICE", description="文書タイトル")
    invoice_number: str = Field(default="Invoice #", description="請求書番号ラベル")
    date: str = Field(default="Date", description="日付ラベル")
    issuer: str = Field(default="From:", description="発行元ラベル")
    recipient: str = Field(default="To:", description="宛先ラベル")
    phone: str = Field(default="Phone", description="電話番号ラベル")
    email: str = Field(default="Email", description="メールアドレスラベル")
    column_headers: Tuple[str, str, str, str] = Field(
        default=("Description", "Quantity", "Price", "Amount"),
        description="明細テーブルの見出し",
    )
    total: str = Field(default="Total:", description="合計ラベル")
    notes: str = Field(default="Notes:", description="備考ラベル")
    thank_you: str = Field(default="Thank you for your business!", description="お礼文")
    copyright: str = Field(
        default="© {year} {company}. All rights reserved.",
        description="著作権表記テンプレート",
    )

    @classmethod
    def for_language(cls, language: str) -> "DocumentLabels":
        """言語コードからラベルを作成する

        Args:
            language: LabelLanguageのいずれか

        Raises:
            ValueError: 未対応の言語の場合
        """
        if language == LabelLanguage.ENGLISH:
            return cls()
        if language == LabelLanguage.TRADITIONAL_CHINESE:
            return cls(
                watermark="僅供參考",
                title="發票",
                invoice_number="發票號碼",
                date="日期",
                issuer="發票人：",
                recipient="客戶：",
                phone="電話",
                email="電子郵件",
                column_headers=("商品描述", "數量", "單價", "金額"),
                total="總計：",
                notes="備註：",
                thank_you="感謝您的惠顧！",
                copyright="© {year} {company} 版權所有",
            )
        raise ValueError(f"未対応のラベル言語です: {language}")

    def format_copyright(self, year: int, company: str) -> str:
        return self.copyright.format(year=year, company=company)

    class Config:
        frozen = True
