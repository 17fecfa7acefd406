"""ReportLabによるレイアウト命令の描画"""
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from invoice_maker.domain.exceptions import RenderError
from invoice_maker.infrastructure.pdf_renderer.layout_instructions import (
    Align,
    CircleInstruction,
    Color,
    Instruction,
    InvoiceLayout,
    LineInstruction,
    PageGeometry,
    Placement,
    RectInstruction,
    TableInstruction,
    TextInstruction,
)

logger = logging.getLogger(__name__)

LINE_SPACING = 1.15
FAKE_BOLD_STROKE = 0.04


@dataclass(frozen=True)
class RenderedDocument:
    """描画結果"""

    content: bytes
    page_count: int
    # 表が終わるページでの表下端（mm、ページ上端から）
    table_end_y: float


@dataclass(frozen=True)
class _Placed:
    """ページに配置したAFTER_TABLE命令"""

    instruction: Instruction
    offset_y: float
    # 折り返し後の行のうちこのページに置く分（テキスト以外はNone）
    lines: Optional[Tuple[str, ...]] = None


@dataclass
class _PagePlan:
    table_part: Optional[Table] = None
    table_top: float = 0.0
    table_height: float = 0.0
    placed: List[_Placed] = field(default_factory=list)


def register_font(font: str) -> str:
    """フォントを登録して描画時のフォント名を返す

    標準フォントはそのまま、.ttfのパスはTrueTypeフォントとして、
    それ以外はCIDフォント名（例: MSung-Light）として登録する

    Raises:
        RenderError: フォントが見つからない場合
    """
    if font in pdfmetrics.standardFonts:
        return font

    try:
        if font.lower().endswith(".ttf"):
            name = Path(font).stem
            if name not in pdfmetrics.getRegisteredFontNames():
                pdfmetrics.registerFont(TTFont(name, font))
            return name

        if font not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(UnicodeCIDFont(font))
        return font
    except Exception as e:
        raise RenderError(f"フォントを登録できませんでした: {font}") from e


def _to_reportlab(color: Color) -> colors.Color:
    return colors.Color(color.red / 255, color.green / 255, color.blue / 255, alpha=color.alpha)


class ReportLabBackend:
    """レイアウト命令をReportLabのキャンバスに描画してPDFを作る"""

    def __init__(self, font_name: str = "MSung-Light", bold_font_name: str = "MSung-Light") -> None:
        self.font_name = register_font(font_name)
        self.bold_font_name = register_font(bold_font_name)

    def render(self, layout: InvoiceLayout, title: str = "", author: str = "") -> RenderedDocument:
        """レイアウトをPDFに変換する

        Args:
            layout: レイアウト命令
            title: PDFのタイトル
            author: PDFの作成者

        Returns:
            RenderedDocument: PDFのバイト列とページ情報
        """
        page = layout.page
        buffer = io.BytesIO()
        canvas = Canvas(buffer, pagesize=(page.width * mm, page.height * mm))
        if title:
            canvas.setTitle(title)
        if author:
            canvas.setAuthor(author)

        plans = self._plan_pages(layout)
        table_end_y = 0.0

        for index, plan in enumerate(plans):
            for instruction in layout.instructions:
                if isinstance(instruction, TableInstruction):
                    if plan.table_part is not None:
                        table_end_y = plan.table_top + plan.table_height
                        plan.table_part.drawOn(
                            canvas, instruction.x * mm, self._y(page, table_end_y)
                        )
                elif instruction.placement == Placement.EVERY_PAGE:
                    self._draw(canvas, page, instruction)
                elif instruction.placement == Placement.FIRST_PAGE and index == 0:
                    self._draw(canvas, page, instruction)
                elif instruction.placement == Placement.AFTER_TABLE:
                    for placed in plan.placed:
                        if placed.instruction is instruction:
                            self._draw(
                                canvas, page, instruction, offset_y=placed.offset_y, lines=placed.lines
                            )
            canvas.showPage()

        canvas.save()
        logger.debug(
            "PDFを描画しました",
            extra={"context": {"pages": len(plans), "table_end_y": round(table_end_y, 2)}},
        )
        return RenderedDocument(
            content=buffer.getvalue(),
            page_count=len(plans),
            table_end_y=table_end_y,
        )

    def _plan_pages(self, layout: InvoiceLayout) -> List[_PagePlan]:
        """表の改ページ位置と、備考などを置くページを決める"""
        page = layout.page
        table = layout.table
        after_table = [
            i for i in layout.instructions
            if not isinstance(i, TableInstruction) and i.placement == Placement.AFTER_TABLE
        ]

        if table is None:
            plans = [_PagePlan()]
            table_end = 0.0
        else:
            plans = [
                _PagePlan(part, top, height) for part, top, height in self._paginate_table(table, page)
            ]
            table_end = plans[-1].table_top + plans[-1].table_height

        if after_table:
            self._flow_after_table(after_table, page, plans, table_end)
        return plans

    def _flow_after_table(
        self,
        instructions: List[Instruction],
        page: PageGeometry,
        plans: List[_PagePlan],
        table_end: float,
    ) -> None:
        """備考などを表の下に配置する

        各命令の先頭行が表の下に収まらない場合はまとめて次ページの上余白から始める。
        折り返した行が下限を超える分は次ページ以降に続ける
        """
        limit = page.table_bottom_limit
        offsets = [self._top_of(i) for i in instructions]

        anchor = table_end
        if table_end + max(offsets) > limit:
            plans.append(_PagePlan())
            anchor = page.top_margin - min(offsets)

        for instruction, offset in zip(instructions, offsets):
            y = anchor + offset
            if y > limit:
                plans.append(_PagePlan())
                anchor = page.top_margin - offset
                y = page.top_margin

            if not isinstance(instruction, TextInstruction):
                plans[-1].placed.append(_Placed(instruction, anchor))
                continue

            leading = self._leading(instruction)
            lines = self._lines(instruction, self._font_for(instruction))
            total_height = len(lines) * leading
            continued = False
            while True:
                capacity = int((limit - y) // leading) + 1 if y <= limit else 0
                chunk, lines = lines[:capacity], lines[capacity:]
                if chunk:
                    plans[-1].placed.append(_Placed(instruction, y - instruction.y, tuple(chunk)))
                if not lines:
                    break
                plans.append(_PagePlan())
                y = page.top_margin
                continued = True

            if continued:
                # 続きのページでは後続の命令を最後の行の下に詰める
                anchor = y + len(chunk) * leading - offset - total_height

    def _paginate_table(
        self, instruction: TableInstruction, page: PageGeometry
    ) -> List[Tuple[Optional[Table], float, float]]:
        """表をページごとに分割する

        Returns:
            List[Tuple[Optional[Table], float, float]]: (表の断片, 上端mm, 高さmm) のリスト
        """
        width = sum(instruction.column_widths) * mm
        remaining: Optional[Table] = self._build_table(instruction)
        top = instruction.y
        parts: List[Tuple[Optional[Table], float, float]] = []

        while remaining is not None:
            available = (page.table_bottom_limit - top) * mm
            _, height = remaining.wrap(width, available)
            if height <= available:
                parts.append((remaining, top, height / mm))
                break

            split = remaining.split(width, available)
            if len(split) < 2:
                if top <= page.top_margin:
                    raise RenderError("明細行が1ページに収まりません")
                parts.append((None, top, 0.0))
            else:
                first, remaining = split[0], split[1]
                _, first_height = first.wrap(width, available)
                parts.append((first, top, first_height / mm))
            top = page.top_margin

        return parts

    def _build_table(self, instruction: TableInstruction) -> Table:
        style = instruction.style
        cell_style = ParagraphStyle(
            name="InvoiceCell",
            fontName=self.font_name,
            fontSize=style.font_size,
            leading=style.font_size * LINE_SPACING,
            textColor=_to_reportlab(style.text_color),
        )

        body = []
        for row in instruction.rows:
            cells = []
            for column, value in enumerate(row):
                if column in instruction.wrap_columns:
                    cell_style_for_value = cell_style.clone(
                        name="InvoiceCellWrap", wordWrap=None if value.isascii() else "CJK"
                    )
                    # 行内分割はフローアブルのリストのセルだけが対象になる
                    cells.append([Paragraph(escape(value), cell_style_for_value)])
                else:
                    cells.append(value)
            body.append(cells)

        data = [list(instruction.header)] + body + [list(instruction.total_row)]
        total_index = len(data) - 1
        padding = style.cell_padding * mm

        commands = [
            ("FONTNAME", (0, 0), (-1, -1), self.font_name),
            ("FONTSIZE", (0, 0), (-1, -1), style.font_size),
            ("TEXTCOLOR", (0, 0), (-1, -1), _to_reportlab(style.text_color)),
            ("BACKGROUND", (0, 0), (-1, -1), _to_reportlab(style.fill)),
            ("BACKGROUND", (0, 0), (-1, 0), _to_reportlab(style.header_fill)),
            ("TEXTCOLOR", (0, 0), (-1, 0), _to_reportlab(style.header_text_color)),
            ("FONTNAME", (0, 0), (-1, 0), self.bold_font_name),
            ("FONTNAME", (0, total_index), (-1, total_index), self.bold_font_name),
            ("GRID", (0, 0), (-1, -1), 0.5, _to_reportlab(style.grid_color)),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), padding),
            ("RIGHTPADDING", (0, 0), (-1, -1), padding),
            ("TOPPADDING", (0, 0), (-1, -1), padding),
            ("BOTTOMPADDING", (0, 0), (-1, -1), padding),
        ]
        for column in instruction.numeric_columns:
            commands.append(("ALIGN", (column, 0), (column, -1), "RIGHT"))

        return Table(
            data,
            colWidths=[w * mm for w in instruction.column_widths],
            repeatRows=1,
            splitInRow=1,
            style=TableStyle(commands),
        )

    @staticmethod
    def _top_of(instruction: Instruction) -> float:
        if isinstance(instruction, LineInstruction):
            return instruction.y1
        return instruction.y

    @staticmethod
    def _y(page: PageGeometry, y: float) -> float:
        """ページ上端からのmmをPDF座標（下端原点のpt）に変換"""
        return (page.height - y) * mm

    def _draw(
        self,
        canvas: Canvas,
        page: PageGeometry,
        instruction: Instruction,
        offset_y: float = 0.0,
        lines: Optional[Tuple[str, ...]] = None,
    ) -> None:
        canvas.saveState()
        try:
            if isinstance(instruction, TextInstruction):
                self._draw_text(canvas, page, instruction, offset_y, lines)
            elif isinstance(instruction, RectInstruction):
                canvas.setFillColor(_to_reportlab(instruction.fill))
                canvas.setFillAlpha(instruction.fill.alpha)
                canvas.rect(
                    instruction.x * mm,
                    self._y(page, offset_y + instruction.y + instruction.height),
                    instruction.width * mm,
                    instruction.height * mm,
                    stroke=0,
                    fill=1,
                )
            elif isinstance(instruction, LineInstruction):
                canvas.setStrokeColor(_to_reportlab(instruction.color))
                canvas.setLineWidth(instruction.width * mm)
                canvas.line(
                    instruction.x1 * mm,
                    self._y(page, offset_y + instruction.y1),
                    instruction.x2 * mm,
                    self._y(page, offset_y + instruction.y2),
                )
            elif isinstance(instruction, CircleInstruction):
                canvas.setFillColor(_to_reportlab(instruction.fill))
                canvas.circle(
                    instruction.x * mm,
                    self._y(page, offset_y + instruction.y),
                    instruction.radius * mm,
                    stroke=0,
                    fill=1,
                )
            else:
                raise RenderError(f"未対応のレイアウト命令です: {type(instruction).__name__}")
        finally:
            canvas.restoreState()

    def _draw_text(
        self,
        canvas: Canvas,
        page: PageGeometry,
        instruction: TextInstruction,
        offset_y: float,
        lines: Optional[Tuple[str, ...]] = None,
    ) -> None:
        style = instruction.style
        font = self._font_for(instruction)
        # 太字フェイスが無い場合は塗り+線で太字を再現する
        fake_bold = style.bold and self.bold_font_name == self.font_name
        color = _to_reportlab(style.color)

        canvas.setFillColor(color)
        canvas.setFillAlpha(style.color.alpha)
        if fake_bold:
            canvas.setStrokeColor(color)
            canvas.setStrokeAlpha(style.color.alpha)
            canvas.setLineWidth(style.font_size * FAKE_BOLD_STROKE)

        if lines is None:
            lines = tuple(self._lines(instruction, font))

        leading = self._leading(instruction)
        for index, line in enumerate(lines):
            x = instruction.x * mm
            width = pdfmetrics.stringWidth(line, font, style.font_size)
            if style.align == Align.CENTER:
                x -= width / 2
            elif style.align == Align.RIGHT:
                x -= width

            text = canvas.beginText(x, self._y(page, offset_y + instruction.y + index * leading))
            text.setFont(font, style.font_size)
            if fake_bold:
                text.setTextRenderMode(2)
            text.textOut(line)
            canvas.drawText(text)

    def _font_for(self, instruction: TextInstruction) -> str:
        return self.bold_font_name if instruction.style.bold else self.font_name

    @staticmethod
    def _leading(instruction: TextInstruction) -> float:
        """行送り（mm）"""
        return instruction.style.font_size * LINE_SPACING / mm

    def _lines(self, instruction: TextInstruction, font: str) -> List[str]:
        paragraphs = instruction.text.splitlines() or [""]
        if instruction.max_width is None:
            return paragraphs
        lines: List[str] = []
        for paragraph in paragraphs:
            lines.extend(
                simpleSplit(paragraph, font, instruction.style.font_size, instruction.max_width * mm)
                or [""]
            )
        return lines
