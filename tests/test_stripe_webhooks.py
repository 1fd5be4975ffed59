from datetime import datetime
from unittest.mock import patch

import pytest
import stripe

from showcase.extensions import db, mail
from showcase.models.generator import GeneratorSubscription
from showcase.models.order import Order
from showcase.models.payment import Payment
from showcase.models.user import User
from showcase.services import stripe_events

WEBHOOK_URL = "/api/webhooks/stripe"
SIGNATURE_HEADERS = {"Stripe-Signature": "t=1700000000,v1=test"}


def make_event(event_type, obj, event_id="evt_test_1"):
    return {"id": event_id, "type": event_type, "data": {"object": obj}}


def post_event(client, event):
    with patch("stripe.Webhook.construct_event", return_value=event):
        return client.post(WEBHOOK_URL, data=b"{}", headers=SIGNATURE_HEADERS)


@pytest.fixture
def checkout_session():
    return {
        "id": "cs_test_abc",
        "object": "checkout.session",
        "payment_intent": "pi_test_abc",
        "metadata": {},
    }


@pytest.fixture
def expanded_session():
    return {
        "id": "cs_test_abc",
        "amount_total": 2500,
        "currency": "usd",
        "payment_intent": "pi_test_abc",
        "customer": {"id": "cus_test", "email": "buyer@example.com"},
        "metadata": {},
        "line_items": {
            "data": [
                {"description": "Carne Asada Taco", "quantity": 2, "price": {"unit_amount": 450}},
                {"description": "Horchata", "quantity": 1, "price": {"unit_amount": 300}},
            ]
        },
    }


@pytest.mark.payment
class TestSignatureVerification:
    def test_bad_signature(self, client):
        error = stripe.SignatureVerificationError("bad signature", "t=1,v1=bad")
        with patch("stripe.Webhook.construct_event", side_effect=error):
            response = client.post(WEBHOOK_URL, data=b"{}", headers={"Stripe-Signature": "bad"})

        assert response.status_code == 400
        assert response.get_json()["code"] == "INVALID_SIGNATURE"

    def test_invalid_payload(self, client):
        with patch("stripe.Webhook.construct_event", side_effect=ValueError("bad json")):
            response = client.post(WEBHOOK_URL, data=b"not json", headers=SIGNATURE_HEADERS)

        assert response.status_code == 400
        assert response.get_json()["code"] == "INVALID_PAYLOAD"

    def test_missing_secret(self, app, client):
        app.config["STRIPE_WEBHOOK_SECRET"] = None
        response = client.post(WEBHOOK_URL, data=b"{}", headers=SIGNATURE_HEADERS)

        assert response.status_code == 500
        assert response.get_json()["code"] == "WEBHOOK_MISCONFIGURED"

    def test_unhandled_event_type(self, client):
        response = post_event(client, make_event("invoice.paid", {"id": "in_1"}))

        assert response.status_code == 200
        assert response.get_json() == {"received": True, "handled": False}


@pytest.mark.payment
@pytest.mark.db
class TestCheckoutCompleted:
    def test_records_payment(self, app, client, checkout_session, expanded_session):
        event = make_event("checkout.session.completed", checkout_session)

        with patch("stripe.checkout.Session.retrieve", return_value=expanded_session) as retrieve:
            response = post_event(client, event)

        assert response.status_code == 200
        data = response.get_json()
        assert data["handled"] is True
        assert data["duplicate"] is False
        retrieve.assert_called_once_with("cs_test_abc", expand=["line_items", "customer"])

        with app.app_context():
            payment = Payment.query.one()
            user = User.query.filter_by(email="buyer@example.com").one()
            assert payment.user_id == user.id
            assert payment.amount_cents == 2500
            assert payment.stripe_payment_id == "pi_test_abc"
            assert payment.stripe_session_id == "cs_test_abc"
            assert payment.payment_metadata["orderSummary"] == "2 x Carne Asada Taco\n1 x Horchata"

    def test_replayed_event_records_one_payment(self, app, client, checkout_session, expanded_session):
        event = make_event("checkout.session.completed", checkout_session)

        with patch("stripe.checkout.Session.retrieve", return_value=expanded_session):
            first = post_event(client, event)
            with mail.record_messages() as outbox:
                second = post_event(client, event)

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.get_json()["duplicate"] is True
        assert second.get_json()["paymentId"] == first.get_json()["paymentId"]
        assert outbox == []

        with app.app_context():
            assert Payment.query.count() == 1

    def test_concurrent_insert_resolves_to_existing_payment(self, app, client, checkout_session, expanded_session):
        event = make_event("checkout.session.completed", checkout_session)
        real_find = stripe_events._find_payment
        calls = []

        def find_after_lost_race(*args):
            calls.append(args)
            # The first lookup misses, as if the other delivery had not committed yet
            return None if len(calls) == 1 else real_find(*args)

        with patch("stripe.checkout.Session.retrieve", return_value=expanded_session):
            first = post_event(client, event)
            with patch("showcase.services.stripe_events._find_payment", side_effect=find_after_lost_race):
                second = post_event(client, event)

        assert second.status_code == 200
        assert second.get_json()["duplicate"] is True
        assert second.get_json()["paymentId"] == first.get_json()["paymentId"]
        assert len(calls) == 2

        with app.app_context():
            assert Payment.query.count() == 1

    def test_session_without_payment_intent(self, app, client, checkout_session, expanded_session):
        checkout_session["payment_intent"] = None
        expanded_session["payment_intent"] = None
        event = make_event("checkout.session.completed", checkout_session)

        with patch("stripe.checkout.Session.retrieve", return_value=expanded_session):
            post_event(client, event)
            post_event(client, event)

        with app.app_context():
            payment = Payment.query.one()
            assert payment.stripe_payment_id is None

    def test_sends_confirmation_emails(self, app, client, checkout_session, expanded_session):
        event = make_event("checkout.session.completed", checkout_session)

        with patch("stripe.checkout.Session.retrieve", return_value=expanded_session):
            with mail.record_messages() as outbox:
                post_event(client, event)

        recipients = {m.recipients[0] for m in outbox}
        assert recipients == {"buyer@example.com", app.config["KITCHEN_EMAIL"]}

    def test_marks_order_paid(self, app, client, order_payload, checkout_session, expanded_session):
        order_id = client.post("/api/orders", json=order_payload).get_json()["orderId"]
        checkout_session["metadata"] = {"orderId": order_id}
        expanded_session["metadata"] = {"orderId": order_id}

        with patch("stripe.checkout.Session.retrieve", return_value=expanded_session):
            response = post_event(client, make_event("checkout.session.completed", checkout_session))

        assert response.status_code == 200
        with app.app_context():
            order = db.session.get(Order, order_id)
            assert order.payment_status == "paid"
            assert order.stripe_session_id == "cs_test_abc"
            assert Payment.query.one().order_id == order_id

    def test_no_customer_email_skips_payment(self, app, client, checkout_session, expanded_session):
        expanded_session["customer"] = None

        with patch("stripe.checkout.Session.retrieve", return_value=expanded_session):
            response = post_event(client, make_event("checkout.session.completed", checkout_session))

        assert response.status_code == 200
        assert response.get_json()["paymentId"] is None
        with app.app_context():
            assert Payment.query.count() == 0

    def test_processing_failure_returns_500_and_alerts(self, app, client, checkout_session):
        error = stripe.APIConnectionError("network down")

        with patch("stripe.checkout.Session.retrieve", side_effect=error):
            with mail.record_messages() as outbox:
                response = post_event(client, make_event("checkout.session.completed", checkout_session))

        assert response.status_code == 500
        assert response.get_json()["code"] == "WEBHOOK_PROCESSING_FAILED"
        assert [m.recipients[0] for m in outbox] == [app.config["ADMIN_EMAIL"]]


@pytest.mark.payment
class TestGeneratorSubscriptionEvents:
    @pytest.fixture
    def pro_checkout(self, make_user):
        user = make_user(email="maker@example.com", name="Maker")
        return user, {
            "id": "cs_test_pro",
            "customer": "cus_pro",
            "customer_details": {"email": "maker@example.com"},
            "subscription": "sub_pro",
            "metadata": {"userId": user["id"], "purpose": "generator_pro_upgrade"},
        }

    def test_pro_checkout_starts_subscription_once(self, app, client, seeded_plans, pro_checkout):
        user, session = pro_checkout
        event = make_event("checkout.session.completed", session)

        with mail.record_messages() as outbox:
            assert post_event(client, event).status_code == 200
            assert post_event(client, event).status_code == 200

        assert len(outbox) == 1
        with app.app_context():
            subscription = GeneratorSubscription.query.one()
            assert subscription.user_id == user["id"]
            assert subscription.status == "active"
            assert subscription.stripe_sub_id == "sub_pro"
            assert subscription.stripe_customer_id == "cus_pro"
            assert subscription.plan.plan_type == "PRO"
            assert (subscription.current_period_end - subscription.current_period_start).days == 14

    def test_subscription_updated(self, app, client, seeded_plans, pro_checkout):
        _, session = pro_checkout
        post_event(client, make_event("checkout.session.completed", session))

        subscription = {
            "id": "sub_pro",
            "status": "past_due",
            "current_period_start": 1735689600,
            "current_period_end": 1738368000,
            "cancel_at_period_end": True,
        }
        response = post_event(client, make_event("customer.subscription.updated", subscription, "evt_2"))

        assert response.status_code == 200
        with app.app_context():
            row = GeneratorSubscription.query.one()
            assert row.status == "past_due"
            assert row.cancel_at_period_end is True
            assert row.current_period_end == datetime(2025, 2, 1)

    def test_subscription_deleted(self, app, client, seeded_plans, pro_checkout):
        _, session = pro_checkout
        post_event(client, make_event("checkout.session.completed", session))

        with mail.record_messages() as outbox:
            response = post_event(client, make_event("customer.subscription.deleted", {"id": "sub_pro"}, "evt_3"))

        assert response.status_code == 200
        assert len(outbox) == 1
        with app.app_context():
            assert GeneratorSubscription.query.one().status == "canceled"
