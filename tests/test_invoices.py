import pytest

INVOICE = {
    "customerName": "Huda",
    "customerPhone": "+20 100 000 0000",
    "items": [
        {"name": "Gold Ring", "quantity": 1, "weight": 4.5, "price": 300.0},
        {"name": "Chain", "quantity": 2, "weight": 10.0, "price": 700.0},
    ],
    "totalPrice": 1700.0,
    "goldPrice": 65.5,
    "totalProfits": 120.0,
}


def create_invoice(client, headers, **overrides):
    return client.post("/api/invoices", json={**INVOICE, **overrides}, headers=headers)


class TestCreateInvoice:
    def test_sales_branch_is_forced(self, client, login_as):
        uid, sales = login_as("sales", "b1")

        resp = create_invoice(client, sales, branchId="b2")

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["branchId"] == "b1"
        assert data["userId"] == uid
        assert len(data["items"]) == 2
        assert "isDelete" not in data

    def test_sales_without_branch_cannot_create(self, client, login_as):
        _, sales = login_as("sales")
        resp = create_invoice(client, sales)
        assert resp.status_code == 403
        assert client.get("/api/invoices", headers=sales).get_json()["data"] == []

    def test_admin_may_choose_branch(self, client, login_as):
        _, admin = login_as("admin", "hq")
        assert create_invoice(client, admin, branchId="b2").get_json()["data"]["branchId"] == "b2"
        assert create_invoice(client, admin).get_json()["data"]["branchId"] == "hq"

    def test_profits_default_to_zero(self, client, login_as):
        _, sales = login_as("sales", "b1")
        payload = dict(INVOICE)
        del payload["totalProfits"]
        resp = client.post("/api/invoices", json=payload, headers=sales)
        assert resp.get_json()["data"]["totalProfits"] == 0

    @pytest.mark.parametrize("missing", ["customerName", "customerPhone", "items", "totalPrice", "goldPrice"])
    def test_required_fields(self, client, login_as, missing):
        _, sales = login_as("sales", "b1")
        payload = dict(INVOICE)
        del payload[missing]
        resp = client.post("/api/invoices", json=payload, headers=sales)
        assert resp.status_code == 400
        assert missing in resp.get_json()["errors"]["json"]

    def test_empty_items_rejected(self, client, login_as):
        _, sales = login_as("sales", "b1")
        assert create_invoice(client, sales, items=[]).status_code == 400


class TestReadInvoices:
    def test_list_scoping(self, client, login_as):
        _, b1 = login_as("sales", "b1")
        _, b2 = login_as("manager", "b2")
        create_invoice(client, b1)
        create_invoice(client, b2)

        assert len(client.get("/api/invoices", headers=b1).get_json()["data"]) == 1
        _, admin = login_as("admin")
        assert len(client.get("/api/invoices", headers=admin).get_json()["data"]) == 2

    def test_read_other_branch_forbidden(self, client, login_as):
        _, b1 = login_as("sales", "b1")
        invoice_id = create_invoice(client, b1).get_json()["data"]["id"]

        _, b2 = login_as("sales", "b2")
        assert client.get(f"/api/invoices/{invoice_id}", headers=b2).status_code == 403
        assert client.get(f"/api/invoices/{invoice_id}", headers=b1).status_code == 200

    def test_unknown_invoice(self, client, login_as):
        _, sales = login_as("sales", "b1")
        assert client.get("/api/invoices/0123456789abcdef01234567", headers=sales).status_code == 404

    def test_no_update_or_delete_routes(self, client, login_as):
        _, admin = login_as("admin", "b1")
        invoice_id = create_invoice(client, admin).get_json()["data"]["id"]
        assert client.delete(f"/api/invoices/{invoice_id}", headers=admin).status_code == 405
        assert client.put(f"/api/invoices/{invoice_id}", json=INVOICE, headers=admin).status_code == 405


class TestExports:
    def test_pdf(self, client, login_as):
        _, sales = login_as("sales", "b1")
        invoice_id = create_invoice(client, sales).get_json()["data"]["id"]

        resp = client.get(f"/api/invoices/pdf?id={invoice_id}", headers=sales)

        assert resp.status_code == 200
        assert resp.mimetype == "application/pdf"
        assert "attachment" in resp.headers["Content-Disposition"]
        assert f"invoice-{invoice_id}.pdf" in resp.headers["Content-Disposition"]
        assert resp.data.startswith(b"%PDF")

    def test_excel(self, client, login_as):
        _, sales = login_as("sales", "b1")
        invoice_id = create_invoice(client, sales).get_json()["data"]["id"]

        resp = client.get(f"/api/invoices/excel?id={invoice_id}", headers=sales)

        assert resp.status_code == 200
        assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        assert "attachment" in resp.headers["Content-Disposition"]
        # xlsx files are zip archives
        assert resp.data[:2] == b"PK"

    def test_exports_follow_read_rules(self, client, login_as):
        _, b1 = login_as("sales", "b1")
        invoice_id = create_invoice(client, b1).get_json()["data"]["id"]
        _, b2 = login_as("manager", "b2")

        assert client.get(f"/api/invoices/pdf?id={invoice_id}", headers=b2).status_code == 403
        assert client.get(f"/api/invoices/excel?id={invoice_id}", headers=b2).status_code == 403

    def test_export_needs_id(self, client, login_as):
        _, sales = login_as("sales", "b1")
        assert client.get("/api/invoices/pdf", headers=sales).status_code == 400
        assert client.get("/api/invoices/excel?id=0123456789abcdef01234567", headers=sales).status_code == 404
