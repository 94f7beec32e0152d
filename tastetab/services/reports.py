# tastetab/services/reports.py
"""Sales reporting over an in-memory list of bills.

Every function here takes the full bill list as fetched from the ledger and
works on it in memory: no function mutates its input and every listing keeps
the order it was given. Bills are plain dicts shaped like the stored
documents (``items``, ``grandTotal``, ``paymentMethod``, ``status``,
``date``); ``date`` may be a ``datetime`` or an ISO-8601 string.
"""
import calendar
import html
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

import pdfkit

PERIODS = (
    "today",
    "yesterday",
    "lastWeek",
    "thisMonth",
    "lastMonth",
    "last1Month",
    "lastYear",
    "allTime",
)

CSV_HEADERS = ["ID", "Items", "Grand Total", "Date", "Payment Method", "Status"]

PDF_OPTIONS = {"encoding": "UTF-8", "page-size": "A4", "quiet": ""}


# --- Dates ---

def bill_datetime(bill: dict) -> Optional[datetime]:
    """Naive UTC datetime of a bill, or None when it has no usable date."""
    value = bill.get("date")
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _sub_months(day: date, months: int) -> date:
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def period_range(period: str, today: Optional[date] = None) -> Optional[Tuple[date, date]]:
    """Inclusive (start, end) days for a preset; None for ``allTime``."""
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period}")
    today = today or datetime.now(timezone.utc).date()

    if period == "today":
        return today, today
    if period == "yesterday":
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday
    if period == "lastWeek":
        return today - timedelta(weeks=1), today
    if period == "thisMonth":
        return today.replace(day=1), today
    if period == "lastMonth":
        last_month = _sub_months(today, 1)
        start = last_month.replace(day=1)
        end = last_month.replace(day=calendar.monthrange(last_month.year, last_month.month)[1])
        return start, end
    if period == "last1Month":
        return _sub_months(today, 1), today
    if period == "lastYear":
        return _sub_months(today, 12), today
    return None


def filter_by_date(bills: Iterable[dict], start: date, end: date) -> List[dict]:
    """Bills dated from the start of ``start`` through the end of ``end``."""
    lower = datetime.combine(start, time.min)
    upper = datetime.combine(end, time.max)
    kept = []
    for bill in bills:
        when = bill_datetime(bill)
        if when is not None and lower <= when <= upper:
            kept.append(bill)
    return kept


def filter_bills(
    bills: Iterable[dict],
    search: Optional[str] = None,
    payment_method: str = "all",
    status: str = "all",
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[dict]:
    bills = list(bills)
    if start is not None or end is not None:
        bills = filter_by_date(bills, start or date.min, end or date.max)

    needle = (search or "").lower()
    kept = []
    for bill in bills:
        if needle and not any(needle in str(i.get("itemName", "")).lower() for i in bill.get("items", [])):
            continue
        if payment_method != "all" and bill.get("paymentMethod") != payment_method:
            continue
        if status != "all" and bill.get("status") != status:
            continue
        kept.append(bill)
    return kept


# --- Aggregates ---

def category_spending(bills: Iterable[dict]) -> List[Dict]:
    totals: Dict[str, float] = {}
    for bill in bills:
        for item in bill.get("items", []):
            category = item.get("category")
            totals[category] = totals.get(category, 0) + item.get("total", 0)
    return [{"category": c, "total": t} for c, t in totals.items()]


def payment_summary(bills: Iterable[dict]) -> Dict:
    bills = list(bills)

    def amount(method):
        return sum(b.get("grandTotal", 0) for b in bills if b.get("paymentMethod") == method)

    def successful(method):
        return sum(1 for b in bills if b.get("paymentMethod") == method and b.get("status") == "success")

    return {
        "count": len(bills),
        "totalAmount": sum(b.get("grandTotal", 0) for b in bills),
        "onlineAmount": amount("online"),
        "cashAmount": amount("cash"),
        "onlineTransactions": successful("online"),
        "cashTransactions": successful("cash"),
        "failedTransactions": sum(1 for b in bills if b.get("status") == "failed"),
    }


# --- CSV ---

def _number(value) -> str:
    # 250.0 prints as 250, matching what the billing screen shows
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _items_label(bill: dict, separator: str) -> str:
    return separator.join(
        f"{item.get('itemName')} (Qty: {_number(item.get('quantity'))})" for item in bill.get("items", [])
    )


def _day(bill: dict) -> str:
    when = bill_datetime(bill)
    return when.strftime("%Y-%m-%d") if when else ""


def bills_to_csv(bills: Iterable[dict]) -> str:
    rows = [",".join(CSV_HEADERS)]
    for bill in bills:
        rows.append(
            ",".join(
                [
                    str(bill.get("_id", "")),
                    f'"{_items_label(bill, "; ")}"',
                    _number(bill.get("grandTotal")),
                    _day(bill),
                    str(bill.get("paymentMethod", "")),
                    str(bill.get("status", "")),
                ]
            )
        )
    return "\n".join(rows)


def csv_filename(selected_date: Optional[date] = None, period: Optional[str] = None) -> str:
    if selected_date:
        return f"bills_{selected_date.strftime('%Y-%m-%d')}.csv"
    if period:
        return f"bills_{period}.csv"
    return "bills_all.csv"


# --- PDF ---

def render_receipt_html(bill: dict) -> str:
    when = bill_datetime(bill)
    method = str(bill.get("paymentMethod", "")).capitalize()
    status = "Successful" if bill.get("status") == "success" else "Failed"

    html_doc = f"""
    <html><head><meta charset="utf-8"></head>
    <body style="font-family: Helvetica, Arial, sans-serif; width: 170mm; margin: 20mm;">
    <h1 style="text-align:center; font-size:16pt;">FOOD BILL</h1>
    <p>Date: {when.strftime('%Y-%m-%d %H:%M:%S') if when else ''}</p>
    <p>Payment Method: {html.escape(method)}</p>
    <p>Status: {status}</p>
    <table style="width:100%; border-collapse: collapse; font-size:10pt;">
    <tr style="border-bottom: 1px solid #000;"><th align="left">Item</th><th align="center">Qty</th><th align="right">Price</th><th align="right">Total</th></tr>
    """
    for item in bill.get("items", []):
        html_doc += (
            f"<tr><td>{html.escape(str(item.get('itemName', '')))}</td>"
            f"<td align=\"center\">{_number(item.get('quantity'))}</td>"
            f"<td align=\"right\">&#8377;{_number(item.get('price'))}</td>"
            f"<td align=\"right\">&#8377;{_number(item.get('total'))}</td></tr>"
        )
    html_doc += f"""
    </table>
    <hr>
    <p style="font-size:12pt;"><b>Grand Total: &#8377;{_number(bill.get('grandTotal'))}</b></p>
    </body></html>
    """
    return html_doc


def receipt_filename(when: Optional[datetime] = None) -> str:
    when = when or datetime.now(timezone.utc)
    return f"bill_{when.strftime('%Y-%m-%d')}.pdf"


def render_report_html(bills: Iterable[dict], title: str = "Bills") -> str:
    bills = list(bills)
    html_doc = f"""
    <html><head><meta charset="utf-8"></head>
    <body style="font-family: Helvetica, Arial, sans-serif;">
    <h1>{html.escape(title)}</h1>
    <table border="1" style="width:100%; border-collapse: collapse; font-size:9pt;">
    <tr><th>ID</th><th>Date</th><th>Items</th><th>Payment Method</th><th>Status</th><th>Grand Total</th></tr>
    """
    for bill in bills:
        items = "<br>".join(
            html.escape(
                f"{item.get('itemName')} x {_number(item.get('quantity'))} = {_number(item.get('total'))}"
            )
            for item in bill.get("items", [])
        )
        html_doc += (
            f"<tr><td>{html.escape(str(bill.get('_id', '')))}</td><td>{_day(bill)}</td>"
            f"<td>{items}</td><td>{html.escape(str(bill.get('paymentMethod', '')))}</td>"
            f"<td>{html.escape(str(bill.get('status', '')))}</td>"
            f"<td align=\"right\">&#8377;{_number(bill.get('grandTotal'))}</td></tr>"
        )
    summary = payment_summary(bills)
    html_doc += f"""
    </table>
    <p>Bills: {summary['count']} | Total: &#8377;{_number(summary['totalAmount'])}</p>
    </body></html>
    """
    return html_doc


def html_to_pdf(html_doc: str) -> bytes:
    # output_path=False makes pdfkit return the PDF bytes
    return pdfkit.from_string(html_doc, False, options=PDF_OPTIONS)


def receipt_pdf(bill: dict) -> bytes:
    return html_to_pdf(render_receipt_html(bill))


def report_pdf(bills: Iterable[dict], title: str = "Bills") -> bytes:
    return html_to_pdf(render_report_html(bills, title))
