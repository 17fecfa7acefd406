"""pytest共通設定"""
from datetime import date, datetime
from decimal import Decimal

import pytest

from invoice_maker.domain.entities.invoice import InvoiceData
from invoice_maker.domain.entities.invoice_draft import InvoiceDraft
from invoice_maker.domain.value_objects.company_profile import CompanyProfile
from invoice_maker.domain.value_objects.invoice_items import InvoiceItem, ItemDraft


@pytest.fixture
def fixed_now() -> datetime:
    """テスト用の固定時刻"""
    return datetime(2025, 1, 1, 12, 0)


@pytest.fixture
def company_profile() -> CompanyProfile:
    """テスト用の発行元情報"""
    return CompanyProfile()


@pytest.fixture
def valid_draft(company_profile: CompanyProfile) -> InvoiceDraft:
    """入力済みの下書き"""
    return InvoiceDraft(
        invoice_number="NNB-INV-2501011200",
        date="2025-01-01",
        company_name=company_profile.company_name,
        company_address=company_profile.company_address,
        company_email=company_profile.company_email,
        company_phone=company_profile.company_phone,
        client_name="Test Client",
        items=[ItemDraft(description="Service A", quantity=2, price=Decimal("100"))],
    )


@pytest.fixture
def sample_invoice(company_profile: CompanyProfile) -> InvoiceData:
    """検証済みの請求書"""
    return InvoiceData(
        invoice_number="NNB-INV-2501011200",
        date=date(2025, 1, 1),
        company_name=company_profile.company_name,
        company_address=company_profile.company_address,
        company_email=company_profile.company_email,
        company_phone=company_profile.company_phone,
        client_name="Test Client",
        items=[InvoiceItem(description="Service A", quantity=2, price=Decimal("100"))],
    )
