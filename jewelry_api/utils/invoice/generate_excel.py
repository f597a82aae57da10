# jewelry_api/utils/invoice/generate_excel.py
from io import BytesIO

import pandas as pd

from ..logger import Log
from .formatting import format_timestamp


XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def generate_invoice_excel_bytes(invoice: dict) -> bytes:
    """
    One sheet with a row per invoice line and a summary sheet with the
    invoice header. Amounts stay numeric so the spreadsheet can sum them.
    """
    lines = [
        {
            "Item": line.get("name"),
            "Quantity": line.get("quantity"),
            "Weight": line.get("weight"),
            "Price": line.get("price"),
        }
        for line in invoice.get("items") or []
    ]
    items_df = pd.DataFrame(lines, columns=["Item", "Quantity", "Weight", "Price"])

    summary_df = pd.DataFrame(
        [
            ("Invoice", str(invoice.get("_id"))),
            ("Date", format_timestamp(invoice.get("createdAt"))),
            ("Branch", invoice.get("branchId")),
            ("Customer", invoice.get("customerName")),
            ("Phone", invoice.get("customerPhone")),
            ("Gold price", invoice.get("goldPrice")),
            ("Total price", invoice.get("totalPrice")),
        ],
        columns=["Field", "Value"],
    )

    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        summary_df.to_excel(writer, sheet_name="Invoice", index=False)
        items_df.to_excel(writer, sheet_name="Items", index=False)
    data = buf.getvalue()

    Log.info(f"[generate_excel.py][generate_invoice_excel_bytes][{invoice.get('_id')}] {len(data)} bytes")
    return data
