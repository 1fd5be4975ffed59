# showcase/services/checkout.py
"""Stripe Checkout session creation and lookup."""

import logging

import stripe
from flask import current_app

from showcase.errors import ApiError, Conflict, ExternalServiceError, ValidationError
from showcase.extensions import db
from showcase.services import intake as intake_service
from showcase.services import orders as order_service

logger = logging.getLogger(__name__)

# Project budget bucket to estimated project size, in dollars
BUDGET_MAP = {
    "under-5k": 3500,
    "5k-10k": 7500,
    "10k-25k": 17500,
    "25k-50k": 37500,
    "50k-plus": 75000,
}
DEFAULT_PROJECT_AMOUNT = 5000
DEPOSIT_RATIO = 0.5
GENERATOR_TRIAL_DAYS = 14
GENERATOR_PRO_PURPOSE = "generator_pro_upgrade"


def configure_stripe():
    secret_key = current_app.config.get("STRIPE_SECRET_KEY")
    if not secret_key:
        raise ApiError("Stripe is not configured", code="STRIPE_MISCONFIGURED")
    stripe.api_key = secret_key


def stripe_field(obj, key, default=None):
    """Read ``key`` from a Stripe object or plain dict; missing or null gives ``default``."""
    if obj is None:
        return default
    try:
        value = obj[key]
    except (KeyError, TypeError):
        return default
    return default if value is None else value


def deposit_cents_for_budget(budget):
    """Half the bucket's project size, in cents. Unknown buckets use the default size."""
    project_amount = BUDGET_MAP.get(budget, DEFAULT_PROJECT_AMOUNT)
    return int(project_amount * DEPOSIT_RATIO) * 100


def _create_session(**params):
    configure_stripe()
    try:
        return stripe.checkout.Session.create(**params)
    except stripe.StripeError as e:
        logger.error(f"Stripe checkout session creation failed: {str(e)}")
        raise ExternalServiceError("Payment provider error")


def retrieve_session(session_id, expand=None):
    configure_stripe()
    try:
        if expand:
            return stripe.checkout.Session.retrieve(session_id, expand=expand)
        return stripe.checkout.Session.retrieve(session_id)
    except stripe.StripeError as e:
        logger.error(f"Stripe session lookup failed for {session_id}: {str(e)}")
        raise ExternalServiceError("Payment provider error")


def create_deposit_checkout(intake_id, budget):
    intake = intake_service.get_intake(intake_id)
    deposit_cents = deposit_cents_for_budget(budget)
    app_url = current_app.config["APP_URL"]

    session = _create_session(
        line_items=[{
            "price_data": {
                "currency": "usd",
                "product_data": {
                    "name": "Website Development Project - 50% Deposit",
                    "description": f"Deposit for project. Remaining ${deposit_cents / 100:.2f} due upon completion.",
                },
                "unit_amount": deposit_cents,
            },
            "quantity": 1,
        }],
        mode="payment",
        success_url=f"{app_url}/intake/success?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{app_url}/intake",
        metadata={
            "intakeId": intake.id,
            "type": "deposit",
            "depositAmount": str(deposit_cents),
        },
    )

    intake.stripe_session_id = session["id"]
    intake.deposit_amount = deposit_cents
    db.session.commit()
    logger.info(f"Deposit checkout {session['id']} created for intake {intake.id}")
    return session


def create_order_checkout(order_id):
    """Checkout for a stored order, charged at the totals computed when it was placed."""
    order = order_service.get_order(order_id)
    if order.payment_status == "paid":
        raise Conflict("Order is already paid")

    line_items = []
    for item in order.items:
        unit = item.unit_cents + sum(c.get("priceCents", 0) for c in item.customizations or [])
        line_items.append({
            "price_data": {"currency": "usd", "product_data": {"name": item.name}, "unit_amount": unit},
            "quantity": item.qty,
        })
    for label, cents in (("Tax", order.tax_cents), ("Tip", order.tip_cents)):
        if cents:
            line_items.append({
                "price_data": {"currency": "usd", "product_data": {"name": label}, "unit_amount": cents},
                "quantity": 1,
            })

    app_url = current_app.config["APP_URL"]
    session = _create_session(
        line_items=line_items,
        mode="payment",
        customer_email=order.customer_email or None,
        success_url=f"{app_url}/track-order?orderId={order.id}",
        cancel_url=f"{app_url}/order",
        metadata={"orderId": order.id},
    )

    order.stripe_session_id = session["id"]
    db.session.commit()
    logger.info(f"Order checkout {session['id']} created for order {order.id}")
    return session


def create_generator_pro_checkout(user):
    price_id = current_app.config.get("STRIPE_GENERATOR_PRO_PRICE_ID")
    if not price_id:
        raise ApiError("Missing STRIPE_GENERATOR_PRO_PRICE_ID", code="STRIPE_MISCONFIGURED")

    app_url = current_app.config["APP_URL"]
    return _create_session(
        line_items=[{"price": price_id, "quantity": 1}],
        mode="subscription",
        success_url=f"{app_url}/generator/success?sessionId={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{app_url}/generator/pricing",
        customer_email=user.email,
        billing_address_collection="required",
        subscription_data={"trial_period_days": GENERATOR_TRIAL_DAYS},
        metadata={"userId": user.id, "purpose": GENERATOR_PRO_PURPOSE},
    )


def verify_deposit(session_id):
    session = retrieve_session(session_id)
    if stripe_field(session, "payment_status") != "paid":
        raise ValidationError("Payment not completed", field="sessionId")

    intake_id = stripe_field(stripe_field(session, "metadata"), "intakeId")
    if not intake_id:
        raise ValidationError("Intake ID not found in session", field="sessionId")
    return intake_service.mark_deposit_paid(intake_id)
