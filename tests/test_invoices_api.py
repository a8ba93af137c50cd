from datetime import datetime, timedelta
from decimal import Decimal
import unittest

from solarflow.models import Invoice, InvoiceItem

from tests.helpers import ApiTestCase


class InvoiceApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.client_row = self.make_client("Asha Rao", self.agent)
        self.panel = self.make_inventory("Solar Panel (320W)", unit_price="15000.00")
        self.inverter = self.make_inventory("Inverter (5KW)", unit_price="45000.00")

    def _payload(self, number="INV-2026-001", **overrides):
        payload = {
            "clientId": self.client_row.id,
            "invoiceNumber": number,
            "totalAmount": "165000.00",
            "dueDate": (datetime.utcnow() + timedelta(days=30)).isoformat(),
            "items": [
                {"itemId": self.panel.id, "quantity": 8, "unitPrice": "15000.00"},
                {"itemId": self.inverter.id, "quantity": 1, "unitPrice": "45000.00"},
            ],
        }
        payload.update(overrides)
        return payload

    def test_create_with_items(self):
        response = self.client.post("/api/invoices", headers=self.auth(self.admin), json=self._payload())
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["invoiceNumber"], "INV-2026-001")
        self.assertEqual(body["status"], "pending")
        self.assertEqual(body["amountPaid"], "0.00")
        self.assertEqual(len(body["items"]), 2)
        totals = sorted(Decimal(item["totalPrice"]) for item in body["items"])
        self.assertEqual(totals, [Decimal("45000.00"), Decimal("120000.00")])

        stored = self.db.query(InvoiceItem).filter(InvoiceItem.invoice_id == body["id"]).count()
        self.assertEqual(stored, 2)

    def test_duplicate_number_writes_nothing(self):
        self.make_invoice(self.client_row.id, "INV-2026-001")

        response = self.client.post("/api/invoices", headers=self.auth(self.admin), json=self._payload())
        self.assertEqual(response.status_code, 400)
        self.assertIn("already exists", response.json()["message"])
        self.assertEqual(self.db.query(Invoice).count(), 1)
        self.assertEqual(self.db.query(InvoiceItem).count(), 0)

    def test_rejects_non_positive_quantity(self):
        payload = self._payload(items=[{"itemId": self.panel.id, "quantity": 0, "unitPrice": "15000.00"}])
        response = self.client.post("/api/invoices", headers=self.auth(self.admin), json=payload)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.db.query(Invoice).count(), 0)

    def test_list_filtered_by_client(self):
        other = self.make_client("Vikram Das", self.other_agent)
        self.make_invoice(self.client_row.id, "INV-001", items=[(self.panel.id, 2, "15000.00")])
        self.make_invoice(other.id, "INV-002")

        response = self.client.get("/api/invoices", params={"clientId": self.client_row.id},
                                   headers=self.auth(self.agent))
        body = response.json()
        self.assertEqual([i["invoiceNumber"] for i in body], ["INV-001"])
        self.assertEqual(body[0]["client"]["name"], "Asha Rao")
        self.assertEqual(body[0]["items"][0]["item"]["itemName"], "Solar Panel (320W)")

        everything = self.client.get("/api/invoices", headers=self.auth(self.agent)).json()
        self.assertEqual(len(everything), 2)

    def test_get_invoice(self):
        invoice = self.make_invoice(self.client_row.id, "INV-001", items=[(self.panel.id, 2, "15000.00")])
        response = self.client.get(f"/api/invoices/{invoice.id}", headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["items"][0]["totalPrice"], "30000.00")

    def test_get_invoice_with_missing_client(self):
        invoice = self.make_invoice("gone-client", "INV-404")
        response = self.client.get(f"/api/invoices/{invoice.id}", headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Invoice not found"})


if __name__ == "__main__":
    unittest.main()
