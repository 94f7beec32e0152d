# tastetab/api/reports.py
import logging
from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from pymongo.database import Database

from tastetab.api.bills import fetch_all_bills
from tastetab.api.deps import get_admin_user, get_any_user
from tastetab.core.errors import APIError
from tastetab.database import BILLS, get_db, parse_object_id, serialize_doc
from tastetab.services import reports

logger = logging.getLogger(__name__)

router = APIRouter()


class BillFilters:
    """Query parameters shared by the report endpoints."""

    def __init__(
        self,
        period: Optional[str] = Query(None, description="Preset: " + ", ".join(reports.PERIODS)),
        day: Optional[date] = Query(None, alias="date"),
        start: Optional[date] = None,
        end: Optional[date] = None,
        paymentMethod: Literal["all", "cash", "online"] = "all",
        status: Literal["all", "success", "failed"] = "all",
        search: Optional[str] = None,
    ):
        self.period = period
        self.day = day
        self.start = start
        self.end = end
        self.payment_method = paymentMethod
        self.status = status
        self.search = search

    def date_bounds(self):
        if self.day:
            return self.day, self.day
        if self.period:
            try:
                bounds = reports.period_range(self.period)
            except ValueError:
                raise APIError(400, f"Unknown period: {self.period}", "period")
            return bounds or (None, None)
        if self.start and self.end and self.start > self.end:
            raise APIError(400, "start must not be after end", "start")
        return self.start, self.end

    def apply(self, bills: list) -> list:
        start, end = self.date_bounds()
        return reports.filter_bills(
            bills,
            search=self.search,
            payment_method=self.payment_method,
            status=self.status,
            start=start,
            end=end,
        )


def _filtered(filters: BillFilters, db: Database) -> list:
    bills = [serialize_doc(bill) for bill in fetch_all_bills(db)]
    return filters.apply(bills)


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _render_pdf(render, *args) -> bytes:
    try:
        return render(*args)
    except OSError as e:
        logger.error(f"PDF rendering failed: {e}")
        raise APIError(500, "Failed to generate PDF")


@router.get("/reports/summary")
def summary(
    filters: BillFilters = Depends(),
    _: dict = Depends(get_admin_user),
    db: Database = Depends(get_db),
):
    bills = _filtered(filters, db)
    start, end = filters.date_bounds()
    return {
        "range": {
            "start": start.isoformat() if start else None,
            "end": end.isoformat() if end else None,
        },
        "totals": reports.payment_summary(bills),
        "categorySpending": reports.category_spending(bills),
    }


@router.get("/reports/export.csv")
def export_csv(
    filters: BillFilters = Depends(),
    _: dict = Depends(get_admin_user),
    db: Database = Depends(get_db),
):
    bills = _filtered(filters, db)
    filename = reports.csv_filename(filters.day, filters.period)
    return Response(
        content=reports.bills_to_csv(bills),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/reports/export.pdf")
def export_pdf(
    filters: BillFilters = Depends(),
    _: dict = Depends(get_admin_user),
    db: Database = Depends(get_db),
):
    bills = _filtered(filters, db)
    content = _render_pdf(reports.report_pdf, bills)
    filename = reports.csv_filename(filters.day, filters.period)[: -len(".csv")] + ".pdf"
    return _pdf_response(content, filename)


@router.get("/bills/{bill_id}/receipt")
def bill_receipt(bill_id: str, _: dict = Depends(get_any_user), db: Database = Depends(get_db)):
    oid = parse_object_id(bill_id)
    if oid is None:
        raise APIError(400, "Invalid bill id")
    bill = db[BILLS].find_one({"_id": oid})
    if not bill:
        raise APIError(404, "Bill not found")
    content = _render_pdf(reports.receipt_pdf, bill)
    return _pdf_response(content, reports.receipt_filename(reports.bill_datetime(bill)))
