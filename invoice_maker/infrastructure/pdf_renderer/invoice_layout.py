"""請求書テンプレートのレイアウト

検証済みの請求書から描画命令の列を組み立てる。描画は行わない
"""
from typing import List

from invoice_maker.domain.entities.invoice import InvoiceData
from invoice_maker.domain.services.invoice_rules import format_money
from invoice_maker.domain.value_objects.document_labels import DocumentLabels
from invoice_maker.infrastructure.pdf_renderer.layout_instructions import (
    GRAY,
    INDIGO,
    SLATE,
    WATERMARK_GRAY,
    WHITE,
    Align,
    CircleInstruction,
    Instruction,
    InvoiceLayout,
    LineInstruction,
    PageGeometry,
    Placement,
    RectInstruction,
    TableInstruction,
    TextInstruction,
    TextStyle,
)

LEFT_X = 20.0
RIGHT_X = 190.0
LINE_STEP = 5.0

WATERMARK_Y = 148.0

HEADER_HEIGHT = 40.0
HEADER_DIVIDER_Y = 45.0
ORNAMENT_RADIUS = 2.0

META_Y = 60.0
ISSUER_Y = 80.0
RECIPIENT_Y = 120.0
TABLE_Y = 150.0
TABLE_COLUMN_WIDTHS = (80.0, 25.0, 32.5, 32.5)

NOTES_LABEL_OFFSET = 20.0
NOTES_TEXT_OFFSET = 25.0

# ページ下端からの距離
FOOTER_DIVIDER_OFFSET = 25.0
FOOTER_THANKS_OFFSET = 20.0
FOOTER_COPYRIGHT_OFFSET = 15.0

_BODY = TextStyle(font_size=10, color=SLATE)
_BODY_BOLD = TextStyle(font_size=10, color=SLATE, bold=True)


def _watermark(labels: DocumentLabels, page: PageGeometry) -> List[Instruction]:
    return [
        TextInstruction(
            labels.watermark,
            page.width / 2,
            WATERMARK_Y,
            TextStyle(font_size=60, color=WATERMARK_GRAY, bold=True, align=Align.CENTER),
            placement=Placement.EVERY_PAGE,
        )
    ]


def _header(invoice: InvoiceData, labels: DocumentLabels, page: PageGeometry) -> List[Instruction]:
    center = page.width / 2
    return [
        RectInstruction(0, 0, page.width, HEADER_HEIGHT, fill=INDIGO),
        LineInstruction(LEFT_X, HEADER_DIVIDER_Y, RIGHT_X, HEADER_DIVIDER_Y, color=WHITE),
        CircleInstruction(LEFT_X, HEADER_DIVIDER_Y, ORNAMENT_RADIUS, fill=WHITE),
        CircleInstruction(RIGHT_X, HEADER_DIVIDER_Y, ORNAMENT_RADIUS, fill=WHITE),
        TextInstruction(
            invoice.company_name,
            center,
            25,
            TextStyle(font_size=24, color=WHITE, bold=True, align=Align.CENTER),
        ),
        TextInstruction(
            labels.title,
            center,
            35,
            TextStyle(font_size=16, color=WHITE, align=Align.CENTER),
        ),
    ]


def _metadata(invoice: InvoiceData, labels: DocumentLabels) -> List[Instruction]:
    return [
        TextInstruction(f"{labels.invoice_number}: {invoice.invoice_number}", LEFT_X, META_Y, _BODY),
        TextInstruction(
            f"{labels.date}: {invoice.date.isoformat()}", LEFT_X, META_Y + LINE_STEP, _BODY
        ),
    ]


def _stacked(lines: List[tuple], top: float) -> List[Instruction]:
    """(text, style) の並びを5mm間隔で縦に積む"""
    return [
        TextInstruction(text, LEFT_X, top + index * LINE_STEP, style)
        for index, (text, style) in enumerate(lines)
    ]


def _issuer(invoice: InvoiceData, labels: DocumentLabels) -> List[Instruction]:
    return _stacked(
        [
            (labels.issuer, _BODY),
            (invoice.company_name, _BODY_BOLD),
            (invoice.company_address, _BODY),
            (f"{labels.phone}: {invoice.company_phone}", _BODY),
            (f"{labels.email}: {invoice.company_email}", _BODY),
        ],
        ISSUER_Y,
    )


def _recipient(invoice: InvoiceData, labels: DocumentLabels) -> List[Instruction]:
    lines = [
        (labels.recipient, _BODY),
        (invoice.client_name, _BODY_BOLD),
    ]
    # 未入力の任意項目は行ごと省略し、空行を残さない
    if invoice.client_phone:
        lines.append((f"{labels.phone}: {invoice.client_phone}", _BODY))
    if invoice.client_email:
        lines.append((f"{labels.email}: {invoice.client_email}", _BODY))
    return _stacked(lines, RECIPIENT_Y)


def _items_table(invoice: InvoiceData, labels: DocumentLabels, currency_symbol: str) -> TableInstruction:
    rows = tuple(
        (
            item.description,
            str(item.quantity),
            format_money(item.price, currency_symbol),
            format_money(item.line_amount, currency_symbol),
        )
        for item in invoice.items
    )
    return TableInstruction(
        x=LEFT_X,
        y=TABLE_Y,
        column_widths=TABLE_COLUMN_WIDTHS,
        header=tuple(labels.column_headers),
        rows=rows,
        total_row=("", "", labels.total, format_money(invoice.total, currency_symbol)),
    )


def _notes(invoice: InvoiceData, labels: DocumentLabels) -> List[Instruction]:
    if not invoice.notes:
        return []
    return [
        TextInstruction(
            labels.notes,
            LEFT_X,
            NOTES_LABEL_OFFSET,
            _BODY,
            placement=Placement.AFTER_TABLE,
        ),
        TextInstruction(
            invoice.notes,
            LEFT_X,
            NOTES_TEXT_OFFSET,
            TextStyle(font_size=9, color=SLATE),
            placement=Placement.AFTER_TABLE,
            max_width=RIGHT_X - LEFT_X,
        ),
    ]


def _footer(invoice: InvoiceData, labels: DocumentLabels, page: PageGeometry, year: int) -> List[Instruction]:
    center = page.width / 2
    divider_y = page.height - FOOTER_DIVIDER_OFFSET
    small = TextStyle(font_size=8, color=GRAY, align=Align.CENTER)
    every_page = Placement.EVERY_PAGE
    return [
        TextInstruction(
            labels.thank_you, center, page.height - FOOTER_THANKS_OFFSET, small, placement=every_page
        ),
        TextInstruction(
            labels.format_copyright(year, invoice.company_name),
            center,
            page.height - FOOTER_COPYRIGHT_OFFSET,
            small,
            placement=every_page,
        ),
        LineInstruction(LEFT_X, divider_y, RIGHT_X, divider_y, color=INDIGO, placement=every_page),
        CircleInstruction(LEFT_X, divider_y, ORNAMENT_RADIUS, fill=INDIGO, placement=every_page),
        CircleInstruction(RIGHT_X, divider_y, ORNAMENT_RADIUS, fill=INDIGO, placement=every_page),
    ]


def build_invoice_layout(
    invoice: InvoiceData,
    labels: DocumentLabels,
    currency_symbol: str,
    year: int,
    page: PageGeometry = PageGeometry(),
) -> InvoiceLayout:
    """請求書のレイアウト命令を組み立てる

    命令は描画順（透かし → ヘッダー → 請求情報 → 発行元 → 宛先 → 明細 → 備考 → フッター）に並ぶ

    Args:
        invoice: 検証済みの請求書
        labels: 印字する文言
        currency_symbol: 通貨記号
        year: 著作権表記に使う年
        page: ページ寸法

    Returns:
        InvoiceLayout: レイアウト命令
    """
    instructions: List[Instruction] = []
    instructions += _watermark(labels, page)
    instructions += _header(invoice, labels, page)
    instructions += _metadata(invoice, labels)
    instructions += _issuer(invoice, labels)
    instructions += _recipient(invoice, labels)
    instructions.append(_items_table(invoice, labels, currency_symbol))
    instructions += _notes(invoice, labels)
    instructions += _footer(invoice, labels, page, year)
    return InvoiceLayout(page=page, instructions=tuple(instructions))
