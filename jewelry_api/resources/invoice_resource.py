# resources/invoice_resource.py
from io import BytesIO

from flask import send_file
from flask.views import MethodView

from ..constants.service_code import ACTIONS, HTTP_STATUS_CODES, RESOURCES
from ..models.invoice_model import Invoice
from ..schemas.invoice_schema import InvoiceIdQuerySchema, InvoiceSchema
from ..security.auth import token_required
from ..security.policy import authorize, require
from ..utils.blueprint import Blueprint
from ..utils.errors import NotFoundError
from ..utils.helpers import principal_log_tag, serialize_doc
from ..utils.invoice.generate_excel import XLSX_MIMETYPE, generate_invoice_excel_bytes
from ..utils.invoice.generate_invoice import generate_invoice_pdf_bytes
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.rate_limits import crud_write_limiter


blp_invoice = Blueprint("Invoices", __name__, description="Sales invoice operations")


def _load_readable_invoice(invoice_id, principal, log_tag):
    """Fetch an invoice and check the caller may read it."""
    invoice = Invoice.get_by_id(invoice_id)
    if not invoice:
        Log.info(f"{log_tag} Invoice not found")
        raise NotFoundError("Invoice not found")

    require(authorize(principal, ACTIONS["READ"], RESOURCES["INVOICE"], target=invoice))
    return invoice


@blp_invoice.route("/invoices")
class InvoicesResource(MethodView):

    @token_required
    @blp_invoice.response(HTTP_STATUS_CODES["OK"], InvoiceSchema(many=True))
    @blp_invoice.doc(summary="List invoices", security=[{"Bearer": []}])
    def get(self, principal):
        log_tag = principal_log_tag("invoice_resource.py", "InvoicesResource", "get", principal)

        require(authorize(principal, ACTIONS["LIST"], RESOURCES["INVOICE"]))

        branch_filter = None if principal.is_admin else principal.branch_id
        invoices = Invoice.list_for(branch_id=branch_filter)
        Log.info(f"{log_tag} {len(invoices)} invoices")

        return prepared_response(
            status=True,
            status_code="OK",
            message="Invoices retrieved successfully",
            data=[serialize_doc(i) for i in invoices],
        )

    @token_required
    @crud_write_limiter(entity_name="invoice")
    @blp_invoice.arguments(InvoiceSchema)
    @blp_invoice.response(HTTP_STATUS_CODES["CREATED"], InvoiceSchema)
    @blp_invoice.doc(
        summary="Create an invoice",
        description="""
            • Admin: may submit branchId; defaults to their own branch.
            • Other roles: branchId is always forced to the caller's branch.
        """,
        security=[{"Bearer": []}],
    )
    def post(self, invoice_data, principal):
        log_tag = principal_log_tag("invoice_resource.py", "InvoicesResource", "post", principal)

        require(authorize(principal, ACTIONS["CREATE"], RESOURCES["INVOICE"], proposed=invoice_data))

        if principal.is_admin and invoice_data.get("branchId"):
            target_branch_id = invoice_data["branchId"]
        else:
            target_branch_id = principal.branch_id

        invoice_id = Invoice(
            branch_id=target_branch_id,
            user_id=principal.uid,
            customer_name=invoice_data["customerName"],
            customer_phone=invoice_data["customerPhone"],
            items=invoice_data["items"],
            total_price=invoice_data["totalPrice"],
            gold_price=invoice_data["goldPrice"],
            total_profits=invoice_data.get("totalProfits"),
        ).save()
        Log.info(f"{log_tag} Invoice created: {invoice_id} for branch {target_branch_id}")

        return prepared_response(
            status=True,
            status_code="CREATED",
            message="Invoice created successfully",
            data=serialize_doc(Invoice.get_by_id(invoice_id)),
        )


@blp_invoice.route("/invoices/<invoice_id>")
class InvoiceResource(MethodView):

    @token_required
    @blp_invoice.response(HTTP_STATUS_CODES["OK"], InvoiceSchema)
    @blp_invoice.doc(summary="Get an invoice", security=[{"Bearer": []}])
    def get(self, invoice_id, principal):
        log_tag = principal_log_tag("invoice_resource.py", "InvoiceResource", "get", principal, invoice_id=invoice_id)

        invoice = _load_readable_invoice(invoice_id, principal, log_tag)

        return prepared_response(
            status=True,
            status_code="OK",
            message="Invoice retrieved successfully",
            data=serialize_doc(invoice),
        )


@blp_invoice.route("/invoices/pdf")
class InvoicePdfResource(MethodView):

    @token_required
    @blp_invoice.arguments(InvoiceIdQuerySchema, location="query")
    @blp_invoice.doc(summary="Download an invoice as PDF", security=[{"Bearer": []}])
    def get(self, query_data, principal):
        invoice_id = query_data["id"]
        log_tag = principal_log_tag("invoice_resource.py", "InvoicePdfResource", "get", principal, invoice_id=invoice_id)

        invoice = _load_readable_invoice(invoice_id, principal, log_tag)

        return send_file(
            BytesIO(generate_invoice_pdf_bytes(invoice)),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=f"invoice-{invoice_id}.pdf",
        )


@blp_invoice.route("/invoices/excel")
class InvoiceExcelResource(MethodView):

    @token_required
    @blp_invoice.arguments(InvoiceIdQuerySchema, location="query")
    @blp_invoice.doc(summary="Download an invoice as a spreadsheet", security=[{"Bearer": []}])
    def get(self, query_data, principal):
        invoice_id = query_data["id"]
        log_tag = principal_log_tag("invoice_resource.py", "InvoiceExcelResource", "get", principal, invoice_id=invoice_id)

        invoice = _load_readable_invoice(invoice_id, principal, log_tag)

        return send_file(
            BytesIO(generate_invoice_excel_bytes(invoice)),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=f"invoice-{invoice_id}.xlsx",
        )
