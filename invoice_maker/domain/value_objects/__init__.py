"""値オブジェクト"""
from invoice_maker.domain.value_objects.application_config import ApplicationConfig
from invoice_maker.domain.value_objects.company_profile import CompanyProfile
from invoice_maker.domain.value_objects.document_labels import DocumentLabels, LabelLanguage
from invoice_maker.domain.value_objects.invoice_items import InvoiceItem, ItemDraft
from invoice_maker.domain.value_objects.item_suggestion import ItemSuggestion, SUGGESTED_ITEMS
from invoice_maker.domain.value_objects.validation_result import ValidationResult

__all__ = [
    "ApplicationConfig",
    "CompanyProfile",
    "DocumentLabels",
    "LabelLanguage",
    "InvoiceItem",
    "ItemDraft",
    "ItemSuggestion",
    "SUGGESTED_ITEMS",
    "ValidationResult",
]
