"""
Tool: Finance Service
Purpose: Monthly financial history, one entry per month, sorted by month
"""

from __future__ import annotations

import re
from typing import Any, Optional

from lifeos.models import FinancialEntry
from lifeos.store import FINANCIAL_KEY

from .base import Service


MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class FinanceService(Service):
    async def save_entry(
        self,
        month: str,
        net_worth: Any,
        income: Any,
        expenses: Any,
        editing_index: Optional[int] = None,
    ) -> dict[str, Any]:
        """
        Insert or replace a monthly entry.

        With editing_index the entry at that position is replaced;
        otherwise an existing entry for the same month is replaced, or a
        new one is appended. The list is re-sorted by month either way.
        """
        if not MONTH_PATTERN.match(str(month)):
            return self._fail(f"Invalid month '{month}'. Use YYYY-MM")
        try:
            entry = FinancialEntry(
                month=str(month),
                net_worth=float(net_worth),
                income=float(income),
                expenses=float(expenses),
            )
        except (TypeError, ValueError):
            return self._fail("Net worth, income and expenses must be numbers")

        entries = list(self.state.financial)
        existing = next((i for i, e in enumerate(entries) if e.month == entry.month), None)

        if editing_index is not None:
            if not 0 <= editing_index < len(entries):
                return self._fail(f"No financial entry at index {editing_index}")
            if existing is not None and existing != editing_index:
                return self._fail(f"An entry for {entry.month} already exists")
            entries[editing_index] = entry
        elif existing is not None:
            entries[existing] = entry
        else:
            entries.append(entry)

        entries.sort(key=lambda e: e.month)
        await self._write(FINANCIAL_KEY, [e.to_dict() for e in entries])

        self.notifier.notify("Financial data saved!", "success")
        return {"success": True, "data": entry.to_dict(), "message": "Financial data saved!"}

    def history(self, months: int = 12) -> list[FinancialEntry]:
        return self.state.financial[-months:]
