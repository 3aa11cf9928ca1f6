"""
Column alias tables — one row per canonical column.

Inventory rows arrive from two independently maintained sources: the
``inventory_data`` table (lower/underscore names) and flat CSV exports
(display headers, occasionally with stray spaces). Every consumer sees only
the canonical header, in the order declared here.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SourceKind(str, Enum):
    RELATIONAL = "relational"
    DELIMITED_FILE = "delimited_file"


@dataclass(frozen=True)
class ColumnSpec:
    field: str                      # python-side name
    header: str                     # canonical header (the dashboard/export column)
    relational: str                 # physical column in inventory_data
    file_names: tuple[str, ...]     # header spellings seen in CSV exports
    kind: str                       # date | text | int | cost

    def source_name(self, kind: SourceKind) -> tuple[str, ...]:
        if kind == SourceKind.RELATIONAL:
            return (self.relational,)
        return self.file_names


def _col(field, header, relational, kind, *extra_file_names) -> ColumnSpec:
    return ColumnSpec(field, header, relational, (header, *extra_file_names), kind)


# Header spellings ("Recommended Quntitty", "30_days") are kept verbatim:
# existing exports and spreadsheets downstream key on them.
INVENTORY_COLUMNS: list[ColumnSpec] = [
    _col("date",                   "Date",                    "date",                    "date"),
    _col("market_id",              "Marketid",                "marketid",                "text"),
    _col("customer_number",        "custno",                  "custno",                  "text"),
    _col("company",                "company",                 "company",                 "text"),
    _col("item_code",              "Item",                    "item",                    "text"),
    _col("status",                 "Status",                  "status",                  "text"),
    _col("item_description",       "Itmdesc",                 "itmdesc",                 "text"),
    _col("in_stock",               "In_Stock",                "in_stock",                "int"),
    _col("in_transit",             "In_Transit",              "in_transit",              "int"),
    _col("total_stock",            "Total_Stock",             "total_stock",             "int", "Total _Stock"),
    _col("unit_cost",              "cost",                    "cost",                    "cost"),
    _col("allocations",            "Allocations",             "allocations",             "int"),
    _col("week1_qty",              "W1",                      "w1",                      "int"),
    _col("week2_qty",              "W2",                      "w2",                      "int"),
    _col("week3_qty",              "W3",                      "w3",                      "int"),
    _col("last_30_days_qty",       "30_days",                 "days_30",                 "int"),
    _col("overnight_qty",          "OVERNIGHT",               "overnight",               "int"),
    _col("overnight_reorder_cost", "To_Order_Cost_Overnight", "to_order_cost_overnight", "cost"),
    _col("two_day_qty",            "2_DAY_SHIP",              "two_day_ship",            "int"),
    _col("two_day_reorder_cost",   "To_Order_Cost_2DAY",      "to_order_cost_2day",      "cost"),
    _col("ground_qty",             "GROUND",                  "ground",                  "int"),
    _col("ground_reorder_cost",    "To_Order_Cost_GROUND",    "to_order_cost_ground",    "cost"),
    _col("recommended_quantity",   "Recommended Quntitty",    "recommended_quantity",    "text"),
    _col("recommended_shipping",   "Recommended Shipping",    "recommended_shipping",    "text"),
]

HEADER_CONTRACT: list[str] = [c.header for c in INVENTORY_COLUMNS]
MARKET_HEADER = "Marketid"

# Excel number formats per column kind (see restock.excel.formatters)
_EXPORT_TYPES = {"date": "text", "text": "text", "int": "number", "cost": "currency"}


def export_columns() -> list[tuple[str, str, str]]:
    """(key, col_type, label) specs for ExcelWriter.write_table."""
    return [(c.header, _EXPORT_TYPES[c.kind], c.header) for c in INVENTORY_COLUMNS]


# ---------------------------------------------------------------------------
# Approval history ledger: canonical field -> physical column in history_data.
# The quoted mixed-case names are what the production table was created with.
# ---------------------------------------------------------------------------

HISTORY_COLUMNS: list[tuple[str, str, str]] = [
    # (field, physical column, kind)
    ("market_id",                "marketid",        "text"),
    ("company",                  "company",         "text"),
    ("item_description",         "itmdesc",         "text"),
    ("unit_cost",                "cost",            "cost"),
    ("total_stock",              "Total_Stock",     "int"),
    ("original_recommended_qty", "Original_Recomr", "text"),
    ("order_qty",                "Order_Qty",       "int"),
    ("total_cost",               "Total_Cost",      "cost"),
    ("recommended_shipping",     "Recommended_",    "text"),
    ("approved_by",              "Approved_By",     "text"),
    ("approved_at",              "approved_at",     "timestamp"),
    ("comments",                 "comments",        "text"),
]

_HISTORY_EXPORT_TYPES = {"text": "text", "int": "number", "cost": "currency", "timestamp": "text"}


def history_export_columns() -> list[tuple[str, str, str]]:
    return [
        (field, _HISTORY_EXPORT_TYPES[kind], field.replace("_", " ").title())
        for field, _, kind in HISTORY_COLUMNS
    ]
