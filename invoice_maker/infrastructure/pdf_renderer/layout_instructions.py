"""レイアウト命令

座標はすべてミリメートル、ページ左上を原点とする。テキストのyはベースライン位置
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Color:
    """RGB色（0-255）と不透明度"""

    red: int
    green: int
    blue: int
    alpha: float = 1.0


INDIGO = Color(99, 102, 241)
SLATE = Color(75, 85, 99)
GRAY = Color(156, 163, 175)
GRID_GRAY = Color(200, 200, 200)
TABLE_FILL = Color(249, 250, 251)
WHITE = Color(255, 255, 255)
WATERMARK_GRAY = Color(128, 128, 128, 0.1)


class Placement:
    """命令を描画するページ"""
    FIRST_PAGE = "first_page"
    EVERY_PAGE = "every_page"
    # 表の終了位置からの相対座標で、表が終わるページに描画する
    AFTER_TABLE = "after_table"


class Align:
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class TextStyle:
    font_size: float
    color: Color
    bold: bool = False
    align: str = Align.LEFT


@dataclass(frozen=True)
class TextInstruction:
    text: str
    x: float
    y: float
    style: TextStyle
    placement: str = Placement.FIRST_PAGE
    max_width: Optional[float] = None


@dataclass(frozen=True)
class RectInstruction:
    x: float
    y: float
    width: float
    height: float
    fill: Color
    placement: str = Placement.FIRST_PAGE


@dataclass(frozen=True)
class LineInstruction:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float = 0.5
    placement: str = Placement.FIRST_PAGE


@dataclass(frozen=True)
class CircleInstruction:
    x: float
    y: float
    radius: float
    fill: Color
    placement: str = Placement.FIRST_PAGE


@dataclass(frozen=True)
class TableStyleSpec:
    font_size: float = 10
    cell_padding: float = 3
    text_color: Color = SLATE
    fill: Color = TABLE_FILL
    header_fill: Color = INDIGO
    header_text_color: Color = WHITE
    grid_color: Color = GRID_GRAY


@dataclass(frozen=True)
class TableInstruction:
    """明細テーブル

    1ページに収まらない場合は改ページ位置をバックエンドが決める。
    見出し行は各ページで繰り返し、合計行は最終行に置く
    """

    x: float
    y: float
    column_widths: Tuple[float, ...]
    header: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]
    total_row: Tuple[str, ...]
    style: TableStyleSpec = field(default_factory=TableStyleSpec)
    # 折り返し対象の列
    wrap_columns: Tuple[int, ...] = (0,)
    # 右寄せの列
    numeric_columns: Tuple[int, ...] = (1, 2, 3)


Instruction = Union[
    TextInstruction,
    RectInstruction,
    LineInstruction,
    CircleInstruction,
    TableInstruction,
]


@dataclass(frozen=True)
class PageGeometry:
    width: float = 210.0
    height: float = 297.0
    # 継続ページで表を始める位置
    top_margin: float = 20.0
    # 表がこの位置を越えたら改ページする（フッター区切り線より上）
    table_bottom_limit: float = 267.0


@dataclass(frozen=True)
class InvoiceLayout:
    """描画順に並んだレイアウト命令の集合"""

    page: PageGeometry
    instructions: Tuple[Instruction, ...]

    @property
    def table(self) -> Optional[TableInstruction]:
        for instruction in self.instructions:
            if isinstance(instruction, TableInstruction):
                return instruction
        return None

    def texts(self) -> Tuple[str, ...]:
        return tuple(i.text for i in self.instructions if isinstance(i, TextInstruction))
