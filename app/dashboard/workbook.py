"""Workbook construction and serialization.

This module lays generated trips and lookup lists out into the three sheets
of the exported workbook (Data, Lists, Dashboard) and writes the dashboard
formulas. All dashboard logic lives in those formulas; the spreadsheet
application recalculates them when the Month/Vendor selections change.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.datavalidation import DataValidation
from openpyxl.worksheet.table import Table, TableStyleInfo
from openpyxl.worksheet.worksheet import Worksheet

from app.core.models import LookupLists, Trip
from app.dashboard import styles
from app.dashboard.formulas import (
    CellRef,
    ColumnRange,
    Expr,
    TableColumn,
    all_of,
    call,
    count_rows,
    distinct_count,
    distinct_values,
    eq,
    list_extent,
    safe_ratio,
    to_formula,
)
from app.dashboard.layout import (
    DASHBOARD_COLUMN_WIDTHS,
    DASHBOARD_SHEET,
    DATA_COLUMNS,
    DATA_SHEET,
    DEFAULT_LAYOUT,
    LIST_COLUMNS,
    LISTS_SHEET,
    TABLE_NAME,
    TABLE_STYLE,
    DashboardLayout,
)

logger = logging.getLogger(__name__)

DEFAULT_CREATOR = "Agentic Dashboard"


class WorkbookBuildError(Exception):
    """Exception raised when the workbook cannot be built or serialized.

    Attributes:
        message: Human-readable error description
        detail: Additional technical details (optional)
    """

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


def _col(name: str) -> TableColumn:
    return TableColumn(TABLE_NAME, name)


def selection_criteria(layout: DashboardLayout = DEFAULT_LAYOUT) -> Expr:
    """Mask of table rows matching the Dashboard Month and Vendor selections."""
    return all_of(
        eq(_col("Month"), CellRef(layout.month_cell, sheet=DASHBOARD_SHEET, absolute=True)),
        eq(_col("Vendor"), CellRef(layout.vendor_cell, sheet=DASHBOARD_SHEET, absolute=True)),
    )


def kpi_formulas(layout: DashboardLayout = DEFAULT_LAYOUT) -> list[tuple[str, str, Expr]]:
    """Return (label, cell, expression) for the headline KPIs, top to bottom."""
    selected = selection_criteria(layout)
    total_cell = layout.kpi_value_cell(0)
    on_time_cell = layout.kpi_value_cell(1)

    return [
        ("Total Trips", total_cell, count_rows(_col("Month"), selected)),
        (
            "On-time Vehicles",
            on_time_cell,
            count_rows(_col("OnTime"), all_of(selected, eq(_col("OnTime"), True))),
        ),
        (
            "Delayed Vehicles",
            layout.kpi_value_cell(2),
            count_rows(_col("OnTime"), all_of(selected, eq(_col("OnTime"), False))),
        ),
        ("On-time %", layout.kpi_value_cell(3), safe_ratio(CellRef(on_time_cell), CellRef(total_cell))),
        (
            "Breakdowns",
            layout.kpi_value_cell(4),
            count_rows(_col("Breakdown"), all_of(selected, eq(_col("Breakdown"), True))),
        ),
    ]


def breakdown_formulas(
    list_title: str,
    table_column: str,
    count: int,
    label_column: str,
    count_column: str,
    layout: DashboardLayout = DEFAULT_LAYOUT,
) -> list[tuple[str, Expr, str, Expr]]:
    """Per-category rows: (label cell, label formula, count cell, count formula).

    Row ``i`` shows the ``i``-th entry of a Lists column and counts the
    selected rows whose ``table_column`` equals that label.
    """
    selected = selection_criteria(layout)
    source = ColumnRange(LIST_COLUMNS[list_title], sheet=LISTS_SHEET)
    rows = []
    for i in range(count):
        row = layout.breakdown_first_row + i
        label_cell = f"{label_column}{row}"
        rows.append((
            label_cell,
            call("INDEX", source, i + 2),
            f"{count_column}{row}",
            count_rows(_col(table_column), all_of(selected, eq(_col(table_column), CellRef(label_cell)))),
        ))
    return rows


def _write_data_sheet(ws: Worksheet, trips: Sequence[Trip]) -> None:
    ws.append([c.header for c in DATA_COLUMNS])
    for trip in trips:
        ws.append([getattr(trip, c.attribute) for c in DATA_COLUMNS])

    for idx, column in enumerate(DATA_COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = column.width

    for cell in ws["A"][1:]:
        cell.number_format = styles.DATE_FORMAT

    header_row = ws.row_dimensions[1]
    header_row.height = styles.HEADER_ROW_HEIGHT
    for cell in ws[1]:
        cell.font = styles.BOLD_FONT
        cell.alignment = styles.HEADER_ALIGNMENT
    ws.freeze_panes = "A2"

    # A table needs at least one body row, even an empty one.
    last_row = max(len(trips), 1) + 1
    table = Table(
        displayName=TABLE_NAME,
        ref=f"A1:{get_column_letter(len(DATA_COLUMNS))}{last_row}",
    )
    table.tableStyleInfo = TableStyleInfo(
        name=TABLE_STYLE,
        showFirstColumn=False,
        showLastColumn=False,
        showRowStripes=True,
        showColumnStripes=False,
    )
    ws.add_table(table)


def _write_lists_sheet(ws: Worksheet, lookups: LookupLists) -> None:
    for title, values in lookups.columns():
        column = LIST_COLUMNS[title]
        header = ws[f"{column}1"]
        header.value = title
        header.font = styles.BOLD_FONT
        for offset, value in enumerate(values, start=2):
            ws[f"{column}{offset}"] = value
        ws.column_dimensions[column].width = max([len(title), *(len(v) for v in values)]) + 2


def _add_dropdown(ws: Worksheet, cell: str, source: Expr) -> None:
    dv = DataValidation(
        type="list",
        formula1=source.render(),
        allow_blank=False,
        showErrorMessage=True,
        showInputMessage=True,
    )
    dv.error = "Select a value from the dropdown"
    dv.errorTitle = "Invalid selection"
    dv.prompt = "Choose a filter value"
    dv.promptTitle = "Filter"
    ws.add_data_validation(dv)
    dv.add(cell)


def _section_header(ws: Worksheet, cell: str, text: str) -> None:
    ws[cell] = text
    ws[cell].font = styles.SECTION_FONT
    ws[cell].fill = styles.SECTION_FILL


def _write_dashboard_sheet(
    ws: Worksheet,
    lookups: LookupLists,
    layout: DashboardLayout,
    default_selection: bool,
) -> None:
    for column, width in DASHBOARD_COLUMN_WIDTHS.items():
        ws.column_dimensions[column].width = width

    ws[layout.title_cell] = "Logistics Operations Dashboard"
    ws[layout.title_cell].font = styles.TITLE_FONT
    ws.merge_cells(layout.title_range)

    _section_header(ws, layout.selections_cell, "Selections")
    ws[layout.selections_cell].font = styles.SELECTIONS_FONT

    # Selection cells
    ws[f"{layout.label_column}{layout.month_row}"] = "Month"
    ws[f"{layout.label_column}{layout.vendor_row}"] = "Vendor"
    _add_dropdown(ws, layout.month_cell, list_extent(LISTS_SHEET, LIST_COLUMNS["Months"]))
    _add_dropdown(ws, layout.vendor_cell, list_extent(LISTS_SHEET, LIST_COLUMNS["Vendors"]))
    if default_selection and lookups.months and lookups.vendors:
        ws[layout.month_cell] = max(lookups.months)
        ws[layout.vendor_cell] = lookups.vendors[0]

    # Headline KPIs
    _section_header(ws, layout.kpi_header_cell, "KPIs")
    for idx, (label, cell, expr) in enumerate(kpi_formulas(layout)):
        row = layout.kpi_first_row + idx
        label_cell = ws[f"{layout.label_column}{row}"]
        label_cell.value = label
        label_cell.font = styles.BOLD_FONT
        label_cell.fill = styles.KPI_FILL
        ws[cell] = to_formula(expr)
        ws[cell].border = styles.KPI_BORDER
        ws[cell].number_format = styles.PERCENT_FORMAT if label.endswith("%") else styles.COUNT_FORMAT

    # Breakdowns
    blocks = (
        (layout.reasons_header_cell, "Reasons for Delay", "Reason", "Reasons", "ReasonForDelay",
         len(lookups.reasons), layout.reasons_label_column, layout.reasons_count_column),
        (layout.trucks_header_cell, "Truck Type at Origin", "Truck Type", "TruckTypes", "TruckType",
         len(lookups.truck_types), layout.trucks_label_column, layout.trucks_count_column),
    )
    for header_cell, title, label_header, list_title, table_column, count, label_col, count_col in blocks:
        _section_header(ws, header_cell, title)
        ws[f"{label_col}{layout.breakdown_header_row}"] = label_header
        ws[f"{count_col}{layout.breakdown_header_row}"] = "Count"
        ws[f"{label_col}{layout.breakdown_header_row}"].font = styles.BOLD_FONT
        ws[f"{count_col}{layout.breakdown_header_row}"].font = styles.BOLD_FONT
        for label_cell, label_expr, count_cell, count_expr in breakdown_formulas(
            list_title, table_column, count, label_col, count_col, layout
        ):
            ws[label_cell] = to_formula(label_expr)
            ws[count_cell] = to_formula(count_expr)

    # Distinct vehicles for the selection
    selected = selection_criteria(layout)
    _section_header(ws, layout.distinct_header_cell, "Truck numbers used (distinct)")
    ws[f"{layout.label_column}{layout.distinct_count_row}"] = "Count"
    ws[layout.distinct_count_cell] = to_formula(distinct_count(_col("VehicleId"), selected))
    ws[f"{layout.label_column}{layout.distinct_list_label_row}"] = "List"
    ws[layout.distinct_list_cell] = to_formula(distinct_values(_col("VehicleId"), selected))


def build_workbook(
    trips: Sequence[Trip],
    lookups: LookupLists,
    *,
    creator: str = DEFAULT_CREATOR,
    created: datetime | None = None,
    default_selection: bool = True,
    layout: DashboardLayout = DEFAULT_LAYOUT,
) -> Workbook:
    """Build the Data / Lists / Dashboard workbook.

    Args:
        trips: Trip records, written to the Data sheet in order.
        lookups: Lookup lists for the Lists sheet and breakdown rows.
        creator: Workbook properties author.
        created: Creation timestamp; defaults to now (UTC).
        default_selection: Pre-fill the selection cells so KPIs show values
            as soon as the file is opened.
        layout: Dashboard cell positions.

    Returns:
        Workbook with the Dashboard as the active sheet.

    Raises:
        WorkbookBuildError: If openpyxl rejects a value, style or formula.
    """
    try:
        wb = Workbook()
        data_ws = wb.active
        data_ws.title = DATA_SHEET
        lists_ws = wb.create_sheet(LISTS_SHEET)
        dashboard_ws = wb.create_sheet(DASHBOARD_SHEET)

        wb.properties.creator = creator
        created = created or datetime.now(timezone.utc)
        # Document properties are stored as naive UTC.
        if created.tzinfo is not None:
            created = created.astimezone(timezone.utc).replace(tzinfo=None)
        wb.properties.created = created

        _write_data_sheet(data_ws, trips)
        _write_lists_sheet(lists_ws, lookups)
        _write_dashboard_sheet(dashboard_ws, lookups, layout, default_selection)

        wb.active = wb.sheetnames.index(DASHBOARD_SHEET)
    except Exception as e:
        raise WorkbookBuildError(
            message="Failed to build workbook",
            detail=f"{type(e).__name__}: {e}",
        ) from e

    logger.debug(
        "Built workbook rows=%d months=%d vendors=%d",
        len(trips),
        len(lookups.months),
        len(lookups.vendors),
    )
    return wb


def workbook_to_bytes(wb: Workbook) -> bytes:
    """Serialize a workbook to xlsx bytes in memory.

    Raises:
        WorkbookBuildError: If the workbook cannot be written.
    """
    buffer = io.BytesIO()
    try:
        wb.save(buffer)
    except Exception as e:
        raise WorkbookBuildError(
            message="Failed to serialize workbook",
            detail=f"{type(e).__name__}: {e}",
        ) from e
    return buffer.getvalue()
