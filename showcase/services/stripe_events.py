# showcase/services/stripe_events.py
"""
Stripe webhook verification and event handling.

``checkout.session.completed`` records a Payment. Payments are keyed by the
payment intent id (the session id when the session has no intent), so a
redelivered event finds the existing row instead of inserting a second one.
"""

import logging

import stripe
from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from showcase.errors import ApiError, ValidationError
from showcase.extensions import db
from showcase.models.base import utcnow
from showcase.models.payment import Payment
from showcase.models.user import User
from showcase.services import generator as generator_service
from showcase.services import orders as order_service
from showcase.services import users as user_service
from showcase.services.checkout import GENERATOR_PRO_PURPOSE, retrieve_session, stripe_field
from showcase.services.notifications import NotificationService

logger = logging.getLogger(__name__)

CHECKOUT_EXPAND = ["line_items", "customer"]


def construct_event(payload, signature):
    secret = current_app.config.get("STRIPE_WEBHOOK_SECRET")
    if not secret:
        raise ApiError("Webhook secret not configured", code="WEBHOOK_MISCONFIGURED")

    try:
        return stripe.Webhook.construct_event(payload, signature, secret)
    except ValueError:
        logger.warning("Stripe webhook with invalid payload")
        raise ValidationError("Invalid payload", code="INVALID_PAYLOAD")
    except stripe.SignatureVerificationError:
        logger.warning("Stripe webhook signature verification failed")
        raise ValidationError("Invalid signature", code="INVALID_SIGNATURE")


def handle_event(event):
    """Dispatch a verified event. Returns a dict merged into the webhook response."""
    event_type = stripe_field(event, "type")
    obj = stripe_field(stripe_field(event, "data"), "object")
    logger.info(f"Processing Stripe event {stripe_field(event, 'id')} ({event_type})")

    if event_type == "checkout.session.completed":
        metadata = stripe_field(obj, "metadata") or {}
        if stripe_field(metadata, "purpose") == GENERATOR_PRO_PURPOSE:
            return handle_generator_checkout(obj)
        return handle_checkout_completed(obj)
    if event_type == "customer.subscription.updated":
        return handle_subscription_updated(obj)
    if event_type == "customer.subscription.deleted":
        return handle_subscription_deleted(obj)

    logger.debug(f"Ignoring Stripe event type {event_type}")
    return {"handled": False}


def _customer_email(session):
    customer = stripe_field(session, "customer")
    email = None
    if customer is not None and not isinstance(customer, str):
        email = stripe_field(customer, "email")
    return email or stripe_field(stripe_field(session, "customer_details"), "email") \
        or stripe_field(session, "customer_email")


def _amount_cents(session, line_items):
    for key in ("amount_total", "amount_subtotal"):
        amount = stripe_field(session, key)
        if isinstance(amount, int):
            return amount

    amount = sum(
        stripe_field(stripe_field(li, "price"), "unit_amount", 0) * stripe_field(li, "quantity", 1)
        for li in line_items
    )
    return amount or None


def _resolve_user(metadata, customer_email):
    user_id = stripe_field(metadata, "userId")
    user = db.session.get(User, user_id) if user_id else None
    if user is None and customer_email:
        user = user_service.find_or_create_by_email(customer_email)
    return user


def handle_checkout_completed(session):
    session_id = stripe_field(session, "id")
    expanded = retrieve_session(session_id, expand=CHECKOUT_EXPAND)

    customer_email = _customer_email(expanded) or _customer_email(session)
    line_items = list(stripe_field(stripe_field(expanded, "line_items"), "data", []))
    order_summary = "\n".join(
        f"{stripe_field(li, 'quantity', 1)} x {stripe_field(li, 'description', '')}" for li in line_items
    )
    metadata = stripe_field(expanded, "metadata") or stripe_field(session, "metadata") or {}

    payment, created = record_payment(session, expanded, metadata, customer_email, line_items, order_summary)

    order_id = stripe_field(metadata, "orderId")
    if order_id:
        order = order_service.mark_order_paid(order_id, session_id)
        if order is not None and payment is not None and payment.order_id is None:
            payment.order_id = order.id
    db.session.commit()

    if payment is None or created:
        NotificationService.dispatch(
            NotificationService.notify_checkout_completed,
            session_id,
            customer_email,
            order_summary,
            utcnow().isoformat() + "Z",
        )

    return {
        "handled": True,
        "paymentId": payment.id if payment is not None else None,
        "duplicate": payment is not None and not created,
    }


def record_payment(session, expanded, metadata, customer_email, line_items, order_summary):
    """
    Insert the Payment for a completed session unless it already exists.
    Returns ``(payment, created)``; ``payment`` is None when no user or amount
    can be resolved.
    """
    session_id = stripe_field(session, "id")
    user = _resolve_user(metadata, customer_email)
    amount_cents = _amount_cents(expanded, line_items)
    if user is None or amount_cents is None:
        logger.warning(f"Checkout {session_id} not recorded: user or amount unresolved")
        db.session.commit()
        return None, False

    payment_intent = stripe_field(session, "payment_intent") or stripe_field(expanded, "payment_intent")
    if payment_intent is not None and not isinstance(payment_intent, str):
        payment_intent = stripe_field(payment_intent, "id")

    existing = _find_payment(payment_intent, session_id)
    if existing is not None:
        logger.info(f"Payment for checkout {session_id} already recorded as {existing.id}")
        return existing, False

    payment = Payment(
        user_id=user.id,
        amount_cents=amount_cents,
        currency=stripe_field(expanded, "currency", "usd"),
        stripe_payment_id=payment_intent,
        stripe_session_id=session_id,
        payment_metadata={
            "sessionId": session_id,
            "orderSummary": order_summary,
            "lineItems": [
                {
                    "description": stripe_field(li, "description"),
                    "quantity": stripe_field(li, "quantity"),
                    "price": stripe_field(stripe_field(li, "price"), "unit_amount"),
                }
                for li in line_items
            ],
        },
    )
    db.session.add(payment)
    try:
        db.session.commit()
    except IntegrityError:
        # A concurrent delivery of the same event won the insert
        db.session.rollback()
        existing = _find_payment(payment_intent, session_id)
        if existing is None:
            raise
        return existing, False

    logger.info(f"Recorded payment {payment.id} ({amount_cents} cents) for checkout {session_id}")
    return payment, True


def _find_payment(payment_intent, session_id):
    if payment_intent:
        condition = or_(Payment.stripe_payment_id == payment_intent, Payment.stripe_session_id == session_id)
    else:
        condition = Payment.stripe_session_id == session_id
    return Payment.query.filter(condition).first()


def handle_generator_checkout(session):
    metadata = stripe_field(session, "metadata") or {}
    if not stripe_field(metadata, "userId"):
        return {"handled": False}

    customer_email = _customer_email(session)
    if not customer_email:
        logger.warning("Generator checkout completed without a customer email")
        return {"handled": False}

    user = user_service.find_or_create_by_email(customer_email)
    customer = stripe_field(session, "customer")
    subscription, created = generator_service.start_pro_subscription(
        user,
        stripe_sub_id=stripe_field(session, "subscription"),
        stripe_customer_id=customer if isinstance(customer, str) else stripe_field(customer, "id"),
    )
    db.session.commit()

    if created:
        logger.info(f"Generator Pro subscription {subscription.id} started for user {user.id}")
        NotificationService.dispatch(
            NotificationService.notify_trial_started,
            user.email,
            user.name,
            "Pro",
            generator_service.TRIAL_DAYS,
        )
    return {"handled": True}


def _period_bounds(subscription):
    start = stripe_field(subscription, "current_period_start")
    end = stripe_field(subscription, "current_period_end")
    if start is None or end is None:
        items = stripe_field(stripe_field(subscription, "items"), "data", [])
        if items:
            start = start or stripe_field(items[0], "current_period_start")
            end = end or stripe_field(items[0], "current_period_end")
    return start, end


def handle_subscription_updated(subscription):
    stripe_sub_id = stripe_field(subscription, "id")
    status = stripe_field(subscription, "status")
    start, end = _period_bounds(subscription)

    updated = generator_service.sync_subscription(
        stripe_sub_id,
        status,
        period_start=start,
        period_end=end,
        cancel_at_period_end=stripe_field(subscription, "cancel_at_period_end"),
    )
    db.session.commit()
    logger.info(f"Generator subscription {stripe_sub_id} updated to {status} ({len(updated)} rows)")

    if status == "active" and updated:
        sub = updated[0]
        NotificationService.dispatch(
            NotificationService.notify_subscription_active,
            sub.user.email,
            sub.user.name,
            sub.plan.name,
            sub.current_period_end,
        )
    return {"handled": True}


def handle_subscription_deleted(subscription):
    stripe_sub_id = stripe_field(subscription, "id")
    updated = generator_service.sync_subscription(stripe_sub_id, "canceled")
    db.session.commit()
    logger.info(f"Generator subscription {stripe_sub_id} canceled ({len(updated)} rows)")

    if updated:
        sub = updated[0]
        NotificationService.dispatch(
            NotificationService.notify_subscription_cancelled,
            sub.user.email,
            sub.user.name,
            sub.plan.name,
        )
    return {"handled": True}
