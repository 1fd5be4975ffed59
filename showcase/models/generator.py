from enum import Enum

from showcase.extensions import db
from showcase.models.base import TimestampMixin, isoformat, new_id


class GeneratorPlanType(str, Enum):
    STANDARD = "STANDARD"
    PRO = "PRO"


class SiteStatus(str, Enum):
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


class GeneratorPlan(TimestampMixin, db.Model):
    __tablename__ = "generator_plans"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    plan_type = db.Column(db.String(20), unique=True, nullable=False)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price_cents = db.Column(db.Integer, nullable=False, default=0)
    stripe_price_id = db.Column(db.String(120), nullable=True)
    max_sites = db.Column(db.Integer, nullable=False)
    max_pages = db.Column(db.Integer, nullable=False)
    custom_domain = db.Column(db.Boolean, nullable=False, default=False)
    remove_branding = db.Column(db.Boolean, nullable=False, default=False)
    priority_support = db.Column(db.Boolean, nullable=False, default=False)
    advanced_analytics = db.Column(db.Boolean, nullable=False, default=False)
    form_submissions = db.Column(db.Integer, nullable=False)
    storage_gb = db.Column(db.Integer, nullable=False)
    bandwidth_gb = db.Column(db.Integer, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    def to_dict(self):
        return {
            "id": self.id,
            "planType": self.plan_type,
            "name": self.name,
            "description": self.description,
            "priceCents": self.price_cents,
            "limits": {
                "maxSites": self.max_sites,
                "maxPages": self.max_pages,
                "formSubmissions": self.form_submissions,
                "storageGb": self.storage_gb,
                "bandwidthGb": self.bandwidth_gb,
            },
            "features": {
                "customDomain": self.custom_domain,
                "removeBranding": self.remove_branding,
                "prioritySupport": self.priority_support,
                "advancedAnalytics": self.advanced_analytics,
            },
        }


class GeneratorSubscription(TimestampMixin, db.Model):
    __tablename__ = "generator_subscriptions"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    plan_id = db.Column(db.String(36), db.ForeignKey("generator_plans.id"), nullable=False)
    stripe_sub_id = db.Column(db.String(255), unique=True, nullable=True)
    stripe_customer_id = db.Column(db.String(255), nullable=True)
    status = db.Column(db.String(30), nullable=False, default="active")
    current_period_start = db.Column(db.DateTime, nullable=True)
    current_period_end = db.Column(db.DateTime, nullable=True)
    cancel_at_period_end = db.Column(db.Boolean, nullable=False, default=False)

    plan = db.relationship("GeneratorPlan")
    user = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "planType": self.plan.plan_type if self.plan else None,
            "status": self.status,
            "currentPeriodStart": isoformat(self.current_period_start),
            "currentPeriodEnd": isoformat(self.current_period_end),
            "cancelAtPeriodEnd": self.cancel_at_period_end,
        }


class GeneratedSite(TimestampMixin, db.Model):
    __tablename__ = "generated_sites"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True, index=True)
    business_name = db.Column(db.String(200), nullable=False)
    tagline = db.Column(db.String(255), nullable=True)
    industry = db.Column(db.String(100), nullable=True)
    site_type = db.Column(db.JSON, nullable=False, default=list)
    color_scheme = db.Column(db.String(50), nullable=True)
    layout_style = db.Column(db.String(50), nullable=True)
    config = db.Column(db.JSON, nullable=False, default=dict)
    status = db.Column(db.String(20), nullable=False, default=SiteStatus.GENERATING.value)

    def to_dict(self):
        return {
            "id": self.id,
            "businessName": self.business_name,
            "tagline": self.tagline,
            "industry": self.industry,
            "siteType": self.site_type or [],
            "colorScheme": self.color_scheme,
            "layoutStyle": self.layout_style,
            "status": self.status,
            "createdAt": isoformat(self.created_at),
        }
