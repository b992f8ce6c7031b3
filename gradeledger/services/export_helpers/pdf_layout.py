# /gradeledger/services/export_helpers/pdf_layout.py

"""
A small drawing surface on top of PyMuPDF for tabular reports.

All coordinates are PDF points on an A4 portrait page, measured from the top
left corner. `y` is a cursor that moves down as content is drawn;
`ensure_space` starts a new page when the next block would run into the
bottom margin and reports whether it did, so callers can redraw table
headers.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import fitz  # PyMuPDF

from ...core import config

PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
MARGIN_X = 40
MARGIN_TOP = 50
MARGIN_BOTTOM = 50
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN_X

REGULAR_FONT = "helv"
BOLD_FONT = "hebo"

BLACK = (0, 0, 0)
HEADER_FILL = (0.90, 0.90, 0.90)
STRIPE_FILL = (0.97, 0.97, 0.97)
SUMMARY_FILL = (0.96, 0.96, 0.96)


@dataclass
class Column:
    header: str
    width: float
    align: str = "left"  # left | center | right


def text_width(text: str, size: float, bold: bool = False) -> float:
    return fitz.get_text_length(text, fontname=BOLD_FONT if bold else REGULAR_FONT, fontsize=size)


def fit_text(text: str, width: float, size: float, bold: bool = False, padding: float = 8) -> str:
    """Truncates `text` with '...' so it fits inside a cell of `width` points."""
    available = width - padding
    if text_width(text, size, bold) <= available:
        return text
    while text and text_width(text + "...", size, bold) > available:
        text = text[:-1]
    return text + "..." if text else ""


class PdfCanvas:
    def __init__(self):
        self.doc = fitz.open()
        self.page: Optional[fitz.Page] = None
        self.y = 0.0
        self.new_page()

    @property
    def bottom_limit(self) -> float:
        return PAGE_HEIGHT - MARGIN_BOTTOM

    def new_page(self) -> None:
        self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN_TOP

    def ensure_space(self, needed: float) -> bool:
        if self.y + needed > self.bottom_limit:
            self.new_page()
            return True
        return False

    # --- Primitives ---

    def text(self, x: float, y: float, text: str, size: float = 10, bold: bool = False) -> None:
        self.page.insert_text(
            fitz.Point(x, y), text, fontsize=size,
            fontname=BOLD_FONT if bold else REGULAR_FONT, color=BLACK,
        )

    def centered_text(self, y: float, text: str, size: float = 10, bold: bool = False) -> None:
        self.text((PAGE_WIDTH - text_width(text, size, bold)) / 2, y, text, size, bold)

    def rect(self, x: float, y: float, w: float, h: float,
             fill: Optional[Tuple[float, float, float]] = None, border: bool = True) -> None:
        self.page.draw_rect(
            fitz.Rect(x, y, x + w, y + h),
            color=BLACK if border else None, fill=fill, width=0.5,
        )

    def line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        self.page.draw_line(fitz.Point(x0, y0), fitz.Point(x1, y1), color=BLACK, width=0.5)

    # --- Composite Blocks ---

    def heading(self, text: str, size: float = 14, gap: float = 18) -> None:
        self.text(MARGIN_X, self.y + size, text, size=size, bold=True)
        self.y += size + gap

    def letterhead(self, lines: Sequence[Tuple[str, float, bool]], gap_after: float = 18) -> None:
        """Centred header lines given as (text, font size, bold)."""
        for text, size, bold in lines:
            self.y += size + 4
            if text:
                self.centered_text(self.y, text, size=size, bold=bold)
        self.y += gap_after

    def table_row(self, columns: List[Column], values: Sequence[str], height: float = 18,
                  size: float = 9, bold: bool = False,
                  fill: Optional[Tuple[float, float, float]] = None) -> None:
        """Draws one bordered row at the cursor and advances the cursor."""
        x = MARGIN_X
        if fill is not None:
            self.rect(x, self.y, sum(c.width for c in columns), height, fill=fill, border=False)
        baseline = self.y + (height + size) / 2 - 1.5
        for column, value in zip(columns, values):
            self.rect(x, self.y, column.width, height)
            cell = fit_text(str(value), column.width, size, bold)
            if column.align == "center":
                tx = x + (column.width - text_width(cell, size, bold)) / 2
            elif column.align == "right":
                tx = x + column.width - 4 - text_width(cell, size, bold)
            else:
                tx = x + 4
            self.text(tx, baseline, cell, size=size, bold=bold)
            x += column.width
        self.y += height

    def table_header(self, columns: List[Column], height: float = 18, size: float = 9) -> None:
        self.table_row(columns, [c.header for c in columns], height=height, size=size, bold=True, fill=HEADER_FILL)

    def stamp_footers(self, caption: str = "") -> None:
        """Writes 'Page i of n' (and an optional caption) on every page."""
        total = self.doc.page_count
        for index, page in enumerate(self.doc, start=1):
            label = f"Page {index} of {total}"
            footer_y = PAGE_HEIGHT - 20
            page.insert_text(
                fitz.Point(PAGE_WIDTH - MARGIN_X - text_width(label, 8), footer_y),
                label, fontsize=8, fontname=REGULAR_FONT, color=BLACK,
            )
            if caption:
                page.insert_text(fitz.Point(MARGIN_X, footer_y), caption, fontsize=8,
                                 fontname=REGULAR_FONT, color=BLACK)

    def to_bytes(self) -> bytes:
        try:
            return self.doc.tobytes(garbage=3, deflate=True)
        finally:
            self.doc.close()


def institution_letterhead(title: str, subtitle_lines: Sequence[str] = ()) -> List[Tuple[str, float, bool]]:
    lines = [
        (config.INSTITUTION_NAME, 18, True),
        (config.INSTITUTION_COLLEGE, 11, False),
        (config.INSTITUTION_ADDRESS, 10, False),
        (config.INSTITUTION_PHONE, 10, False),
    ]
    lines += [(line, 10, False) for line in subtitle_lines]
    lines.append(("", 6, False))
    lines.append((title, 16, True))
    return lines
