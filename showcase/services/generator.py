"""AI website generator: plans, subscriptions and site requests."""

import logging
from datetime import datetime, timedelta, timezone

from flask import current_app

from showcase.errors import ApiError, NotFound, ValidationError
from showcase.extensions import db
from showcase.models.base import utcnow
from showcase.models.generator import (
    GeneratedSite,
    GeneratorPlan,
    GeneratorPlanType,
    GeneratorSubscription,
    SiteStatus,
)
from showcase.validation import validate_string

logger = logging.getLogger(__name__)

ESTIMATED_GENERATION_SECONDS = 30
TRIAL_DAYS = 14
ACTIVE_SUBSCRIPTION_STATUSES = ("active", "trialing")
UNLIMITED = 999999

DEFAULT_PLANS = (
    {
        "plan_type": GeneratorPlanType.STANDARD.value,
        "name": "Standard",
        "description": "Free plan with essential site generation",
        "price_cents": 0,
        "max_sites": 3,
        "max_pages": 10,
        "form_submissions": 100,
        "storage_gb": 5,
        "bandwidth_gb": 10,
    },
    {
        "plan_type": GeneratorPlanType.PRO.value,
        "name": "Pro",
        "description": "Unlimited sites, custom domains and priority support",
        "price_cents": 2999,
        "max_sites": UNLIMITED,
        "max_pages": UNLIMITED,
        "custom_domain": True,
        "remove_branding": True,
        "priority_support": True,
        "advanced_analytics": True,
        "form_submissions": UNLIMITED,
        "storage_gb": 100,
        "bandwidth_gb": 500,
    },
)


def seed_plans():
    """Create the default plans that are missing. Returns the number created."""
    created = 0
    for defaults in DEFAULT_PLANS:
        if GeneratorPlan.query.filter_by(plan_type=defaults["plan_type"]).first():
            continue
        plan = GeneratorPlan(**defaults)
        if defaults["plan_type"] == GeneratorPlanType.PRO.value:
            plan.stripe_price_id = current_app.config.get("STRIPE_GENERATOR_PRO_PRICE_ID")
        db.session.add(plan)
        created += 1
    db.session.commit()
    return created


def get_plan(plan_type):
    return GeneratorPlan.query.filter_by(plan_type=plan_type).first()


def active_subscription(user):
    return (
        GeneratorSubscription.query
        .filter(
            GeneratorSubscription.user_id == user.id,
            GeneratorSubscription.status.in_(ACTIVE_SUBSCRIPTION_STATUSES),
        )
        .order_by(GeneratorSubscription.created_at.desc())
        .first()
    )


def current_plan(user):
    """The active subscription's plan, or the free Standard plan."""
    subscription = active_subscription(user)
    if subscription is not None:
        return subscription.plan, subscription

    plan = get_plan(GeneratorPlanType.STANDARD.value)
    if plan is None:
        raise ApiError("Standard plan is not configured", code="PLAN_NOT_CONFIGURED")
    return plan, None


def create_site(data, user=None):
    business_name = validate_string(data.get("businessName"), "businessName", max_length=200)
    site_type = data.get("siteType")
    if isinstance(site_type, str):
        site_type = [site_type]
    if not isinstance(site_type, list) or not site_type or not all(isinstance(t, str) for t in site_type):
        raise ValidationError("Business name and site type are required", field="siteType")

    site = GeneratedSite(
        user_id=user.id if user is not None else None,
        business_name=business_name,
        tagline=validate_string(data.get("tagline"), "tagline", max_length=255, required=False),
        industry=validate_string(data.get("industry"), "industry", max_length=100, required=False),
        site_type=site_type,
        color_scheme=validate_string(data.get("colorScheme"), "colorScheme", max_length=50, required=False),
        layout_style=validate_string(data.get("layoutStyle"), "layoutStyle", max_length=50, required=False),
        config={k: v for k, v in data.items() if k not in ("businessName", "siteType")},
        status=SiteStatus.GENERATING.value,
    )
    db.session.add(site)
    db.session.commit()
    logger.info(f"Site generation {site.id} queued for {business_name}")
    return site


def get_site(site_id):
    site = db.session.get(GeneratedSite, site_id)
    if site is None:
        raise NotFound("Site not found")
    return site


def site_urls(site):
    return {
        "previewUrl": f"/generator/preview/{site.id}",
        "downloadUrl": f"/generator/download/{site.id}",
    }


def start_pro_subscription(user, stripe_sub_id=None, stripe_customer_id=None, now=None):
    """
    Record the Pro trial for ``user``. Only one subscription is kept per
    user and plan; returns ``(subscription, created)``.
    """
    plan = get_plan(GeneratorPlanType.PRO.value)
    if plan is None:
        raise ApiError("Pro plan not found", code="PLAN_NOT_CONFIGURED")

    existing = GeneratorSubscription.query.filter_by(user_id=user.id, plan_id=plan.id).first()
    if existing is not None:
        return existing, False

    now = now or utcnow()
    subscription = GeneratorSubscription(
        user_id=user.id,
        plan_id=plan.id,
        stripe_sub_id=stripe_sub_id,
        stripe_customer_id=stripe_customer_id,
        status="active",
        current_period_start=now,
        current_period_end=now + timedelta(days=TRIAL_DAYS),
    )
    db.session.add(subscription)
    db.session.flush()
    return subscription, True


def _from_timestamp(value):
    if not value:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)


def sync_subscription(stripe_sub_id, status, period_start=None, period_end=None, cancel_at_period_end=None):
    """Apply a provider subscription update to every matching row."""
    subscriptions = GeneratorSubscription.query.filter_by(stripe_sub_id=stripe_sub_id).all()
    for subscription in subscriptions:
        subscription.status = status
        if period_start:
            subscription.current_period_start = _from_timestamp(period_start)
        if period_end:
            subscription.current_period_end = _from_timestamp(period_end)
        if cancel_at_period_end is not None:
            subscription.cancel_at_period_end = bool(cancel_at_period_end)
    return subscriptions
