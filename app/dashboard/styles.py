"""Cosmetic styles for the exported workbook."""

from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

COLORS = {
    "slate_900": "0F172A",
    "sky_500": "0EA5E9",
    "sky_100": "E0F2FE",
    "slate_100": "F1F5F9",
}

TITLE_FONT = Font(bold=True, size=18, color=COLORS["slate_900"])
SELECTIONS_FONT = Font(bold=True, size=12, color=COLORS["sky_500"])
SECTION_FONT = Font(bold=True, size=12)
BOLD_FONT = Font(bold=True)

SECTION_FILL = PatternFill("solid", fgColor=COLORS["sky_100"])
KPI_FILL = PatternFill("solid", fgColor=COLORS["slate_100"])

_THIN = Side(style="thin")
KPI_BORDER = Border(top=_THIN, bottom=_THIN)

HEADER_ALIGNMENT = Alignment(vertical="center")
HEADER_ROW_HEIGHT = 18

DATE_FORMAT = "yyyy-mm-dd"
COUNT_FORMAT = "0"
PERCENT_FORMAT = "0.0%"
