from unittest.mock import patch

import pytest

from showcase.extensions import db
from showcase.models.intake import ClientIntake
from showcase.models.order import Order
from showcase.services.checkout import deposit_cents_for_budget

STRIPE_SESSION = {"id": "cs_test_checkout", "url": "https://checkout.stripe.com/c/pay/cs_test_checkout"}


@pytest.mark.parametrize("budget,expected", [
    ("under-5k", 175000),
    ("10k-25k", 875000),
    ("50k-plus", 3750000),
    ("unknown", 250000),
])
def test_deposit_is_half_the_budget_bucket(budget, expected):
    assert deposit_cents_for_budget(budget) == expected


@pytest.mark.payment
class TestOrderCheckout:
    def test_line_items_from_stored_order(self, app, client, order_payload):
        order_id = client.post("/api/orders", json=order_payload).get_json()["orderId"]

        with patch("stripe.checkout.Session.create", return_value=STRIPE_SESSION) as create:
            response = client.post("/api/checkout", json={"orderId": order_id})

        assert response.status_code == 200
        assert response.get_json() == {"url": STRIPE_SESSION["url"], "sessionId": "cs_test_checkout"}

        kwargs = create.call_args.kwargs
        amounts = [
            (li["price_data"]["product_data"]["name"], li["price_data"]["unit_amount"], li["quantity"])
            for li in kwargs["line_items"]
        ]
        assert ("Carne Asada Taco", 525, 2) in amounts
        assert ("Horchata", 300, 1) in amounts
        assert ("Tax", 115, 1) in amounts
        assert ("Tip", 200, 1) in amounts
        assert sum(amount * qty for _, amount, qty in amounts) == 1665
        assert kwargs["metadata"] == {"orderId": order_id}

        with app.app_context():
            assert db.session.get(Order, order_id).stripe_session_id == "cs_test_checkout"

    def test_unknown_order(self, client):
        assert client.post("/api/checkout", json={"orderId": "missing"}).status_code == 404

    def test_order_id_required(self, client):
        assert client.post("/api/checkout", json={}).status_code == 400

    def test_paid_order_conflicts(self, app, client, order_payload):
        order_id = client.post("/api/orders", json=order_payload).get_json()["orderId"]
        with app.app_context():
            db.session.get(Order, order_id).payment_status = "paid"
            db.session.commit()

        with patch("stripe.checkout.Session.create") as create:
            response = client.post("/api/checkout", json={"orderId": order_id})

        assert response.status_code == 409
        assert response.get_json()["code"] == "CONFLICT"
        create.assert_not_called()


@pytest.mark.payment
class TestDepositCheckout:
    def test_deposit_session(self, app, client, intake_payload):
        intake_id = client.post("/api/intake", json=intake_payload).get_json()["intakeId"]

        with patch("stripe.checkout.Session.create", return_value=STRIPE_SESSION) as create:
            response = client.post(
                "/api/checkout",
                json={"type": "deposit", "intakeId": intake_id, "budget": "10k-25k"},
            )

        assert response.status_code == 200
        kwargs = create.call_args.kwargs
        assert kwargs["line_items"][0]["price_data"]["unit_amount"] == 875000
        assert kwargs["metadata"]["intakeId"] == intake_id
        assert kwargs["metadata"]["type"] == "deposit"

        with app.app_context():
            intake = db.session.get(ClientIntake, intake_id)
            assert intake.stripe_session_id == "cs_test_checkout"
            assert intake.deposit_amount == 875000

    def test_budget_required(self, client):
        response = client.post("/api/checkout", json={"type": "deposit", "intakeId": "x"})
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [
        {"type": "deposit", "intakeId": "x", "budget": ["10k-25k"]},
        {"type": "deposit", "intakeId": {"id": "x"}, "budget": "10k-25k"},
        {"orderId": 42},
    ])
    def test_non_string_fields_rejected(self, client, body):
        with patch("stripe.checkout.Session.create") as create:
            response = client.post("/api/checkout", json=body)

        assert response.status_code == 400
        create.assert_not_called()
