"""Payout report renderer: summary, distributions and holders sheets."""

from __future__ import annotations

from typing import List, Optional

import pandas as pd
import structlog
from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side, Alignment, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from payout_domain.blocks import (
    DistributionBlock,
    HolderBlock,
    LedgerSummaryBlock,
    ReportContext,
    ReportExecutor,
)
from payout_domain.schemas import ReportCFG

logger = structlog.get_logger(__name__)

SUMMARY_LABELS = [
    ("as_of", "As of (logical time)", '#,##0'),
    ("total_shares", "Total shares", '#,##0'),
    ("holders", "Holders", '#,##0'),
    ("distributions", "Distributions", '#,##0'),
    ("active_distributions", "Active distributions", '#,##0'),
    ("total_distributed", "Total distributed", '#,##0'),
    ("total_claimed", "Total claimed", '#,##0'),
    ("total_unclaimed", "Total unclaimed", '#,##0'),
    ("rounding_dust", "Rounding dust", '#,##0'),
    ("paused", "Paused", None),
]

# (column, header, number format, summed in totals row)
DISTRIBUTION_LAYOUT = [
    ("distribution_id", "ID", '0', False),
    ("status", "Status", None, False),
    ("created_at", "Created at", '#,##0', False),
    ("creator", "Creator", None, False),
    ("total_amount", "Deposited", '#,##0', True),
    ("per_share_rate", "Rate (fixed-point)", '#,##0', False),
    ("shares_at_creation", "Shares at creation", '#,##0', False),
    ("total_claimed", "Claimed", '#,##0', True),
    ("claimed_pct", "% Claimed", '0.0%', False),
    ("unclaimed_amount", "Unclaimed", '#,##0', True),
    ("rounding_dust", "Dust", '#,##0', True),
]

HOLDER_LAYOUT = [
    ("holder_id", "Holder", None, False),
    ("shares", "Shares", '#,##0', True),
    ("ownership_pct", "% Owned", '0.0%', True),
    ("total_received", "Total received", '#,##0', True),
    ("participation_count", "Claims", '#,##0', False),
    ("last_claim_at", "Last claim at", '#,##0', False),
]

PERCENT_COLUMNS = {"claimed_pct", "ownership_pct"}


class PayoutReportRenderer:
    """Render a LedgerSnapshot into an Excel workbook.

    Sheets:
        Summary: label/value pairs of ledger aggregates
        Distributions: one row per distribution plus a totals row
        Holders: one row per holder plus a totals row

    Totals rows are SUM formulas over the data rows so the workbook stays
    consistent if a reader edits a figure.
    """

    def __init__(self, config: ReportCFG):
        self.config = config

        self.bold_font = Font(bold=True)
        self.title_font = Font(size=14, bold=True)
        self.header_font = Font(bold=True, color="FFFFFF")  # White text on dark blue
        self.header_fill = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
        self.label_fill = PatternFill(start_color="E7E6E6", end_color="E7E6E6", fill_type="solid")

        self.thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        self.totals_border = Border(top=Side(style='medium'), bottom=Side(style='medium'))

        self.center_align = Alignment(horizontal='center', vertical='center')

    def render(self, output_path: str) -> str:
        wb = self.build_workbook()
        wb.save(output_path)
        logger.info("Payout report written", path=str(output_path), title=self.config.title)
        return output_path

    def build_workbook(self) -> Workbook:
        context = self._compute_frames()

        wb = Workbook()
        wb.remove(wb.active)

        self._render_summary_sheet(wb, context.get("ledger_summary"))
        if self.config.include_distributions:
            self._render_table_sheet(
                wb, "Distributions", context.get("distribution_summary"), DISTRIBUTION_LAYOUT
            )
        if self.config.include_holders:
            self._render_table_sheet(
                wb, "Holders", context.get("holder_payouts"), HOLDER_LAYOUT
            )
        return wb

    def _compute_frames(self) -> ReportContext:
        blocks = [LedgerSummaryBlock()]
        if self.config.include_distributions:
            blocks.append(DistributionBlock())
        if self.config.include_holders:
            blocks.append(HolderBlock(include_zero_balances=self.config.include_zero_balances))

        context = ReportContext()
        context.set("ledger_snapshot", self.config.snapshot)
        return ReportExecutor(blocks).execute(context)

    # ------------------------------------------------------------------ #
    # Sheets
    # ------------------------------------------------------------------ #

    def _render_summary_sheet(self, wb: Workbook, summary_df: pd.DataFrame) -> None:
        sheet = wb.create_sheet(title="Summary")
        sheet.sheet_view.showGridLines = False

        title_cell = sheet["A1"]
        title_cell.value = self.config.title
        title_cell.font = self.title_font

        if self.config.asset_symbol:
            sheet["A2"].value = f"Asset: {self.config.asset_symbol}"
            sheet["A2"].font = Font(italic=True)

        summary = summary_df.iloc[0]
        row = 4
        for key, label, number_format in SUMMARY_LABELS:
            label_cell = sheet.cell(row=row, column=1, value=label)
            label_cell.font = self.bold_font
            label_cell.fill = self.label_fill
            label_cell.border = self.thin_border

            value_cell = sheet.cell(row=row, column=2, value=self._cell_value(summary[key]))
            value_cell.border = self.thin_border
            if number_format:
                value_cell.number_format = number_format
            row += 1

        sheet.column_dimensions['A'].width = 25
        sheet.column_dimensions['B'].width = 18

    def _render_table_sheet(
        self,
        wb: Workbook,
        title: str,
        df: pd.DataFrame,
        layout: List[tuple],
    ) -> Worksheet:
        sheet = wb.create_sheet(title=title)
        sheet.sheet_view.showGridLines = False
        sheet.freeze_panes = "A2"

        for col_idx, (_, header, _, _) in enumerate(layout, start=1):
            cell = sheet.cell(row=1, column=col_idx, value=self._header_text(header))
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.center_align
            cell.border = self.thin_border

        row = 2
        for record in df.to_dict(orient="records"):
            for col_idx, (key, _, number_format, _) in enumerate(layout, start=1):
                value = self._cell_value(record[key])
                if key in PERCENT_COLUMNS and value is not None:
                    value = value / 100
                cell = sheet.cell(row=row, column=col_idx, value=value)
                cell.border = self.thin_border
                if number_format:
                    cell.number_format = number_format
            row += 1

        last_data_row = row - 1
        totals_row = row
        label_cell = sheet.cell(row=totals_row, column=1, value="Totals")
        label_cell.font = self.bold_font
        label_cell.border = self.totals_border

        for col_idx, (_, _, number_format, summed) in enumerate(layout, start=1):
            if not summed:
                continue
            letter = self._col_letter(col_idx)
            cell = sheet.cell(row=totals_row, column=col_idx)
            cell.value = f"=SUM({letter}2:{letter}{last_data_row})" if last_data_row >= 2 else 0
            cell.font = self.bold_font
            cell.border = self.totals_border
            if number_format:
                cell.number_format = number_format

        for col_idx in range(1, len(layout) + 1):
            sheet.column_dimensions[self._col_letter(col_idx)].width = 18
        return sheet

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _header_text(self, header: str) -> str:
        amount_headers = {"Deposited", "Claimed", "Unclaimed", "Dust", "Total received"}
        if self.config.asset_symbol and header in amount_headers:
            return f"{header} ({self.config.asset_symbol})"
        return header

    @staticmethod
    def _cell_value(value) -> Optional[object]:
        """Convert pandas/numpy scalars to plain Python values openpyxl accepts."""
        if value is None:
            return None
        if isinstance(value, float) and pd.isna(value):
            return None
        if hasattr(value, "item"):
            value = value.item()
            if isinstance(value, float) and pd.isna(value):
                return None
        return value

    @staticmethod
    def _col_letter(idx: int) -> str:
        """Convert 1-based column index to Excel column letter."""
        letter = ""
        while idx > 0:
            idx, rem = divmod(idx - 1, 26)
            letter = chr(65 + rem) + letter
        return letter
