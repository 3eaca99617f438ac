"""Integration tests for the shipping label endpoints via TestClient."""

_SENDER = {
    "name": "Main Warehouse",
    "address": "1 Dock Road",
    "city": "Springfield",
    "postalCode": "62701",
    "country": "US",
}


class TestCreateShippingLabelAPI:
    def test_create_returns_201(self, client, documents):
        response = documents.shipping_label(serviceType="Ground", weight=2.5)
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "DRAFT"
        assert body["labelNumber"].startswith("SL-")
        assert body["carrier"] == "UPS"
        assert body["toAddress"]["state"] == "IL"
        assert body["fromAddress"]["state"] is None

    def test_for_a_pack_slip(self, client, documents):
        pack_slip_id = documents.pack_slip().json()["id"]
        response = documents.shipping_label(packSlipId=pack_slip_id)
        assert response.status_code == 201
        assert response.json()["packSlipId"] == pack_slip_id

    def test_unknown_carrier_returns_400(self, client, documents):
        assert documents.shipping_label(carrier="PIGEON").status_code == 400

    def test_incomplete_recipient_returns_400(self, client, documents):
        response = client.post(
            "/shipping-labels",
            json={
                "orderId": "ord-001",
                "carrier": "UPS",
                "fromAddress": _SENDER,
                "toAddress": {**_SENDER, "name": "Jane Doe", "city": ""},
            },
        )
        assert response.status_code == 400

    def test_missing_addresses_return_400(self, client, documents):
        response = client.post("/shipping-labels", json={"orderId": "ord-001", "carrier": "UPS"})
        assert response.status_code == 400


class TestShippingLabelProgressAPI:
    def test_generate_print_ship(self, client, documents):
        label_id = documents.shipping_label().json()["id"]

        response = client.patch(
            f"/shipping-labels/{label_id}",
            json={"status": "GENERATED", "labelUrl": "https://labels.example.com/1.pdf"},
        )
        assert response.json()["labelUrl"] == "https://labels.example.com/1.pdf"

        client.patch(f"/shipping-labels/{label_id}", json={"status": "PRINTED"})
        response = client.patch(
            f"/shipping-labels/{label_id}",
            json={"status": "SHIPPED", "trackingNumber": "1Z999"},
        )
        body = response.json()
        assert body["status"] == "SHIPPED"
        assert body["trackingNumber"] == "1Z999"
        assert client.get(f"/shipping-labels/{label_id}/next-statuses").json()["nextStatuses"] == []

    def test_cancel_after_shipping_returns_400(self, client, documents):
        label_id = documents.shipping_label().json()["id"]
        for status in ("GENERATED", "PRINTED", "SHIPPED"):
            client.patch(f"/shipping-labels/{label_id}", json={"status": status})
        response = client.patch(f"/shipping-labels/{label_id}", json={"status": "CANCELLED"})
        assert response.status_code == 400

    def test_unknown_returns_404(self, client, documents):
        assert client.get("/shipping-labels/nope").status_code == 404


class TestEditShippingLabelAPI:
    def test_edit_draft(self, client, documents):
        label_id = documents.shipping_label(serviceType="Ground").json()["id"]
        response = client.put(
            f"/shipping-labels/{label_id}",
            json={
                "carrier": "fedex",
                "serviceType": "Express",
                "toAddress": {**_SENDER, "name": "John Roe", "country": "CA"},
                "weight": 1.75,
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["carrier"] == "FEDEX"
        assert body["serviceType"] == "Express"
        assert body["toAddress"]["name"] == "John Roe"
        assert body["toAddress"]["country"] == "CA"
        assert body["fromAddress"]["name"] == "Main Warehouse"
        assert body["weight"] == 1.75

    def test_unknown_carrier_returns_400(self, client, documents):
        label_id = documents.shipping_label().json()["id"]
        response = client.put(f"/shipping-labels/{label_id}", json={"carrier": "PIGEON"})
        assert response.status_code == 400
        assert client.get(f"/shipping-labels/{label_id}").json()["carrier"] == "UPS"

    def test_incomplete_address_returns_400(self, client, documents):
        label_id = documents.shipping_label().json()["id"]
        response = client.put(f"/shipping-labels/{label_id}", json={"toAddress": {**_SENDER, "city": ""}})
        assert response.status_code == 400

    def test_generated_label_cannot_be_edited(self, client, documents):
        label_id = documents.shipping_label().json()["id"]
        client.patch(f"/shipping-labels/{label_id}", json={"status": "GENERATED", "trackingNumber": "1Z999"})

        response = client.put(f"/shipping-labels/{label_id}", json={"notes": "Late"})
        assert response.status_code == 400
        assert response.json()["error"]["status"] == ["A GENERATED shipping label cannot be edited"]


class TestDeleteShippingLabelAPI:
    def test_delete_draft(self, client, documents):
        label_id = documents.shipping_label().json()["id"]
        response = client.delete(f"/shipping-labels/{label_id}")
        assert response.json() == {"status": "ok"}
        assert client.get(f"/shipping-labels/{label_id}").status_code == 404

    def test_delete_cancelled(self, client, documents):
        label_id = documents.shipping_label().json()["id"]
        client.patch(f"/shipping-labels/{label_id}", json={"status": "CANCELLED"})
        assert client.delete(f"/shipping-labels/{label_id}").status_code == 200

    def test_generated_label_is_kept(self, client, documents):
        label_id = documents.shipping_label().json()["id"]
        client.patch(f"/shipping-labels/{label_id}", json={"status": "GENERATED", "trackingNumber": "1Z999"})
        response = client.delete(f"/shipping-labels/{label_id}")
        assert response.status_code == 400
        assert response.json()["error"]["status"] == ["A GENERATED shipping label cannot be deleted"]
