"""Sheet names, column order and cell positions of the exported workbook."""

from __future__ import annotations

from dataclasses import dataclass

from openpyxl.utils import get_column_letter

DATA_SHEET = "Data"
LISTS_SHEET = "Lists"
DASHBOARD_SHEET = "Dashboard"

TABLE_NAME = "DataTable"
TABLE_STYLE = "TableStyleMedium2"


@dataclass(frozen=True)
class DataColumn:
    header: str
    attribute: str  # Trip field written to the column
    width: float


DATA_COLUMNS: tuple[DataColumn, ...] = (
    DataColumn("Date", "date", 14),
    DataColumn("Month", "month", 10),
    DataColumn("Vendor", "vendor", 16),
    DataColumn("VehicleId", "vehicle_id", 16),
    DataColumn("TruckType", "truck_type", 16),
    DataColumn("Origin", "origin", 14),
    DataColumn("OnTime", "on_time", 10),
    DataColumn("ReasonForDelay", "reason_for_delay", 24),
    DataColumn("Breakdown", "breakdown", 12),
    DataColumn("DelayMinutes", "delay_minutes", 14),
)

DATA_HEADERS: tuple[str, ...] = tuple(c.header for c in DATA_COLUMNS)

# Lists sheet column per lookup list, in LookupLists.columns() order.
LIST_TITLES: tuple[str, ...] = ("Months", "Vendors", "Reasons", "TruckTypes", "Origins")
LIST_COLUMNS: dict[str, str] = {
    title: get_column_letter(idx) for idx, title in enumerate(LIST_TITLES, start=1)
}


@dataclass(frozen=True)
class DashboardLayout:
    """Fixed positions of the Dashboard sheet blocks."""

    title_cell: str = "B1"
    title_range: str = "B1:I1"
    selections_cell: str = "B2"

    label_column: str = "B"
    value_column: str = "C"
    month_row: int = 4
    vendor_row: int = 5

    kpi_header_cell: str = "B8"
    kpi_first_row: int = 10

    # Breakdown tables share a header row; data rows start right below it.
    breakdown_header_row: int = 10
    reasons_header_cell: str = "E8"
    reasons_label_column: str = "E"
    reasons_count_column: str = "F"
    trucks_header_cell: str = "H8"
    trucks_label_column: str = "H"
    trucks_count_column: str = "I"

    distinct_header_cell: str = "B17"
    distinct_count_row: int = 18
    distinct_list_label_row: int = 20

    @property
    def month_cell(self) -> str:
        return f"{self.value_column}{self.month_row}"

    @property
    def vendor_cell(self) -> str:
        return f"{self.value_column}{self.vendor_row}"

    @property
    def breakdown_first_row(self) -> int:
        return self.breakdown_header_row + 1

    @property
    def distinct_count_cell(self) -> str:
        return f"{self.value_column}{self.distinct_count_row}"

    @property
    def distinct_list_cell(self) -> str:
        return f"{self.label_column}{self.distinct_list_label_row + 1}"

    def kpi_value_cell(self, index: int) -> str:
        return f"{self.value_column}{self.kpi_first_row + index}"


DEFAULT_LAYOUT = DashboardLayout()

DASHBOARD_COLUMN_WIDTHS: dict[str, float] = {
    "A": 2,
    "B": 20,
    "C": 24,
    "D": 2,
    "E": 22,
    "F": 12,
    "G": 2,
    "H": 22,
    "I": 12,
}
