"""
SessionContext — the role and date range a dashboard session works with.

The browser keeps these between page loads; the server never reads them from
anywhere but the request, so every query receives them explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass

from restock.data.dates import DateWindow, format_us_date, to_inclusive_window


@dataclass(frozen=True)
class SessionContext:
    role: str
    start_text: str
    end_text: str

    def window(self) -> DateWindow:
        """Validated inclusive window; raises RangeValidationError subclasses."""
        return to_inclusive_window(self.start_text, self.end_text)

    def to_dict(self) -> dict:
        w = self.window()
        return {
            "userRole": self.role,
            "startDate": format_us_date(w.start),
            "endDate": format_us_date(w.end),
            "startDateISO": w.start.isoformat(),
            "endDateISO": w.end.isoformat(),
        }
