"""Summary domain service for budget vs expense reporting."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from budgetline.database.base import Database
from budgetline.domain.entities import (
    ChartItem,
    ComparisonRow,
    EntryType,
    LedgerSource,
    SummaryGroupBy,
)

ZERO = Decimal("0")


def group_key(item: ChartItem, group_by: SummaryGroupBy) -> str:
    """Return the label an item is aggregated under."""
    if group_by == SummaryGroupBy.BUSINESS_LINE:
        return item.business_line_name
    if group_by == SummaryGroupBy.COST_CENTER:
        return item.cost_center_name
    if group_by == SummaryGroupBy.TYPE:
        return EntryType(item.entry_type).value
    return item.period


class SummaryService:
    """Service for building chart-style aggregates over both ledgers."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def chart_items(self) -> list[ChartItem]:
        """Every budget and expense line with names resolved."""
        return self.db.list_chart_items()

    def filter_items(
        self,
        items: Iterable[ChartItem],
        business_line: Optional[str] = None,
        entry_type: Optional[EntryType] = None,
        source: Optional[LedgerSource] = None,
        year: Optional[int] = None,
    ) -> list[ChartItem]:
        """Apply optional filters; business line matching ignores case."""
        wanted_line = business_line.strip().lower() if business_line else None
        return [
            item
            for item in items
            if (wanted_line is None or item.business_line_name.lower() == wanted_line)
            and (entry_type is None or item.entry_type == entry_type)
            and (source is None or item.source == source)
            and (year is None or item.year == year)
        ]

    def totals_by_type(
        self, source: Optional[LedgerSource] = None, year: Optional[int] = None
    ) -> dict[EntryType, Decimal]:
        """CAPEX and OPEX totals, optionally for one ledger."""
        totals = {EntryType.CAPEX: ZERO, EntryType.OPEX: ZERO}
        for item in self.filter_items(self.chart_items(), source=source, year=year):
            totals[EntryType(item.entry_type)] += item.amount
        return totals

    def compare(
        self,
        group_by: SummaryGroupBy = SummaryGroupBy.BUSINESS_LINE,
        business_line: Optional[str] = None,
        entry_type: Optional[EntryType] = None,
        year: Optional[int] = None,
    ) -> list[ComparisonRow]:
        """Budget vs expense totals per group.

        Month groups are ordered chronologically, all others by name.
        """
        items = self.filter_items(
            self.chart_items(), business_line=business_line, entry_type=entry_type, year=year
        )
        budget: dict[str, Decimal] = defaultdict(lambda: ZERO)
        expense: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for item in items:
            key = group_key(item, group_by)
            if item.source == LedgerSource.EXPENSE:
                expense[key] += item.amount
            else:
                budget[key] += item.amount

        groups = set(budget) | set(expense)
        if group_by == SummaryGroupBy.MONTH:
            ordered = sorted(groups)
        else:
            ordered = sorted(groups, key=lambda name: (name.lower(), name))
        return [ComparisonRow(group=g, budget=budget[g], expense=expense[g]) for g in ordered]

    def budget_trend(
        self, entry_type: EntryType = EntryType.OPEX
    ) -> dict[str, dict[str, Decimal]]:
        """Monthly budget totals per business line.

        Returns:
            Mapping of ``YYYY-MM`` to business line name to amount, ordered by month
        """
        trend: dict[str, dict[str, Decimal]] = {}
        items = self.filter_items(
            self.chart_items(), entry_type=entry_type, source=LedgerSource.BUDGET
        )
        for item in sorted(items, key=lambda i: (i.year, i.month)):
            per_line = trend.setdefault(item.period, {})
            per_line[item.business_line_name] = (
                per_line.get(item.business_line_name, ZERO) + item.amount
            )
        return trend
