"""
Single source of truth for all Excel colors, fonts, fills, borders, alignments.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Color constants (hex for openpyxl, RGB tuples for the PDF renderer)
# ---------------------------------------------------------------------------
DEEP_PURPLE = "2B0F6E"
GOLD = "F6C84C"
ALTERNATE_ROW = "F5F5F5"
WHITE = "FFFFFF"
BLACK = "000000"
GRAY_666 = "646464"
BORDER_GRAY = "CCCCCC"
TOTAL_ROW_BG = "EDE7F6"


def rgb(hex_color: str) -> tuple[int, int, int]:
    """'2B0F6E' → (43, 15, 110)."""
    return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name="Calibri", size=18, bold=True, color=DEEP_PURPLE)
SUBTITLE_FONT = Font(name="Calibri", size=12, color=GRAY_666)
PRINTED_FONT = Font(name="Calibri", size=10, italic=True, color=GRAY_666)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=BLACK)
DATA_FONT = Font(name="Calibri", size=10, color=BLACK)
TOTAL_FONT = Font(name="Calibri", size=10, bold=True, color=DEEP_PURPLE)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=GOLD, end_color=GOLD, fill_type="solid")
ALTERNATE_FILL = PatternFill(start_color=ALTERNATE_ROW, end_color=ALTERNATE_ROW, fill_type="solid")
TOTAL_FILL = PatternFill(start_color=TOTAL_ROW_BG, end_color=TOTAL_ROW_BG, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
THIN_BORDER = Border(
    left=Side(style="thin", color=BORDER_GRAY),
    right=Side(style="thin", color=BORDER_GRAY),
    top=Side(style="thin", color=BORDER_GRAY),
    bottom=Side(style="thin", color=BORDER_GRAY),
)
HEADER_BORDER = Border(
    left=Side(style="thin", color=DEEP_PURPLE),
    right=Side(style="thin", color=DEEP_PURPLE),
    top=Side(style="thin", color=DEEP_PURPLE),
    bottom=Side(style="medium", color=DEEP_PURPLE),
)
TOTAL_BORDER = Border(
    left=Side(style="thin", color="999999"),
    right=Side(style="thin", color="999999"),
    top=Side(style="medium", color="999999"),
    bottom=Side(style="medium", color="999999"),
)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
WRAP = Alignment(horizontal="left", vertical="top", wrap_text=True)
