"""発行元情報を表す値オブジェクト"""
from pydantic import BaseModel, Field, field_validator


class CompanyProfile(BaseModel):
    """発行元（自社）情報の値オブジェクト"""

    company_name: str = Field(default="Na Na Beauty", description="公司名稱")
    company_address: str = Field(
        default="九龍尖沙咀漆咸道南61 - 65號 首都廣場2樓S129室",
        description="公司地址",
    )
    company_phone: str = Field(default="98375219", description="公司電話")
    company_email: str = Field(default="info@nanabeauty.com", description="公司電子郵件")

    @field_validator("company_name", "company_address", "company_phone", "company_email")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """発行元情報は空にできない"""
        if not v or not v.strip():
            raise ValueError("発行元情報は空にできません")
        return v.strip()

    class Config:
        frozen = True
