# jewelry_api/utils/invoice/generate_invoice.py
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.lib.units import mm

from ..logger import Log
from .formatting import format_amount, format_timestamp


def _draw_invoice(c: canvas.Canvas, invoice: dict):
    width, height = A4

    # HEADER
    c.setFont("Helvetica-Bold", 18)
    c.drawString(30 * mm, height - 30 * mm, "SALES INVOICE")

    c.setFont("Helvetica", 10)
    c.drawString(30 * mm, height - 38 * mm, f"Invoice #: {invoice.get('_id')}")
    c.drawString(30 * mm, height - 44 * mm, f"Date: {format_timestamp(invoice.get('createdAt'))}")
    c.drawString(30 * mm, height - 50 * mm, f"Branch: {invoice.get('branchId') or ''}")

    # CUSTOMER
    y = height - 65 * mm
    c.setFont("Helvetica-Bold", 11)
    c.drawString(30 * mm, y, "Billed To:")

    c.setFont("Helvetica", 10)
    c.drawString(30 * mm, y - 14, str(invoice.get("customerName") or ""))
    c.drawString(30 * mm, y - 28, str(invoice.get("customerPhone") or ""))

    # ITEMS
    y -= 60
    c.setFont("Helvetica-Bold", 11)
    c.drawString(30 * mm, y, "Item")
    c.drawRightString(120 * mm, y, "Qty")
    c.drawRightString(150 * mm, y, "Weight")
    c.drawRightString(180 * mm, y, "Price")

    y -= 18
    c.setFont("Helvetica", 10)

    for line in invoice.get("items") or []:
        if y < 40 * mm:
            c.showPage()
            y = height - 30 * mm
            c.setFont("Helvetica", 10)
        c.drawString(30 * mm, y, str(line.get("name") or ""))
        c.drawRightString(120 * mm, y, str(line.get("quantity") or 0))
        c.drawRightString(150 * mm, y, format_amount(line.get("weight")))
        c.drawRightString(180 * mm, y, format_amount(line.get("price")))
        y -= 14

    # TOTALS
    y -= 15
    c.setFont("Helvetica", 10)
    c.drawString(30 * mm, y, "Gold price")
    c.drawRightString(180 * mm, y, format_amount(invoice.get("goldPrice")))

    y -= 16
    c.setFont("Helvetica-Bold", 12)
    c.drawString(30 * mm, y, "Total")
    c.drawRightString(180 * mm, y, format_amount(invoice.get("totalPrice")))

    # FOOTER
    c.setFont("Helvetica", 9)
    c.drawString(30 * mm, 30 * mm, "Thank you for your business.")


def generate_invoice_pdf_bytes(invoice: dict) -> bytes:
    """
    Render an invoice document into memory and return the PDF bytes.
    """
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"Invoice {invoice.get('_id')}")

    _draw_invoice(c, invoice)

    c.showPage()
    c.save()
    buf.seek(0)
    data = buf.read()

    Log.info(f"[generate_invoice.py][generate_invoice_pdf_bytes][{invoice.get('_id')}] {len(data)} bytes")
    return data
