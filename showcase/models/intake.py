from enum import Enum

from showcase.extensions import db
from showcase.models.base import TimestampMixin, isoformat, new_id


class IntakeStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


KNOWN_INTAKE_STATUSES = {s.value for s in IntakeStatus}


class ClientIntake(TimestampMixin, db.Model):
    __tablename__ = "client_intakes"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    # Contact
    full_name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(40), nullable=True)
    company = db.Column(db.String(200), nullable=False)
    website = db.Column(db.String(500), nullable=True)

    # Project
    project_type = db.Column(db.String(100), nullable=False)
    project_description = db.Column(db.Text, nullable=True)
    goals = db.Column(db.Text, nullable=True)
    target_audience = db.Column(db.Text, nullable=True)
    features = db.Column(db.JSON, nullable=False, default=list)
    design_preferences = db.Column(db.Text, nullable=True)
    brand_guidelines = db.Column(db.Text, nullable=True)
    content_ready = db.Column(db.String(100), nullable=True)
    competitors = db.Column(db.Text, nullable=True)
    inspiration = db.Column(db.Text, nullable=True)
    timeline = db.Column(db.String(100), nullable=True)
    budget = db.Column(db.String(100), nullable=True)
    launch_date = db.Column(db.DateTime, nullable=True)
    additional_notes = db.Column(db.Text, nullable=True)
    preferred_call_date = db.Column(db.String(50), nullable=True)
    preferred_call_time = db.Column(db.String(50), nullable=True)
    uploaded_files = db.Column(db.JSON, nullable=False, default=list)

    # B2B lead
    business_type = db.Column(db.String(100), nullable=True)
    revenue_model = db.Column(db.String(100), nullable=True)
    payment_processor_status = db.Column(db.String(100), nullable=True)
    monthly_revenue_estimate = db.Column(db.String(100), nullable=True)
    commission_interested = db.Column(db.Boolean, nullable=False, default=False)
    referral_source = db.Column(db.String(100), nullable=True)

    terms_accepted = db.Column(db.Boolean, nullable=False, default=False)
    status = db.Column(db.String(50), nullable=False, default=IntakeStatus.PENDING.value, index=True)
    deposit_paid = db.Column(db.Boolean, nullable=False, default=False)
    deposit_amount = db.Column(db.Integer, nullable=True)
    stripe_session_id = db.Column(db.String(255), nullable=True, index=True)

    def summary(self):
        """Fields shown in the admin listing."""
        return {
            "id": self.id,
            "fullName": self.full_name,
            "email": self.email,
            "company": self.company,
            "projectType": self.project_type,
            "budget": self.budget,
            "timeline": self.timeline,
            "status": self.status,
            "depositPaid": self.deposit_paid,
            "createdAt": isoformat(self.created_at),
        }

    def to_dict(self):
        return {
            **self.summary(),
            "phone": self.phone,
            "website": self.website,
            "projectDescription": self.project_description,
            "goals": self.goals,
            "targetAudience": self.target_audience,
            "features": self.features or [],
            "designPreferences": self.design_preferences,
            "brandGuidelines": self.brand_guidelines,
            "contentReady": self.content_ready,
            "competitors": self.competitors,
            "inspiration": self.inspiration,
            "preferredCallDate": self.preferred_call_date,
            "preferredCallTime": self.preferred_call_time,
            "launchDate": isoformat(self.launch_date),
            "additionalNotes": self.additional_notes,
            "uploadedFiles": self.uploaded_files or [],
            "businessType": self.business_type,
            "revenueModel": self.revenue_model,
            "paymentProcessorStatus": self.payment_processor_status,
            "monthlyRevenueEstimate": self.monthly_revenue_estimate,
            "commissionInterested": self.commission_interested,
            "referralSource": self.referral_source,
            "termsAccepted": self.terms_accepted,
            "depositAmount": self.deposit_amount,
            "stripeSessionId": self.stripe_session_id,
            "updatedAt": isoformat(self.updated_at),
        }
