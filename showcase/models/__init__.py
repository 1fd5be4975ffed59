from showcase.models.affiliate import Affiliate, AffiliatePayout, Referral
from showcase.models.creator import Creator, Plan, Post, PostLike
from showcase.models.generator import GeneratedSite, GeneratorPlan, GeneratorSubscription
from showcase.models.intake import ClientIntake
from showcase.models.menu import MenuCategory, MenuCustomization, MenuItem
from showcase.models.order import Order, OrderItem, OrderStatusHistory
from showcase.models.payment import Payment
from showcase.models.payout import PayoutRequest
from showcase.models.user import User

__all__ = [
    "Affiliate",
    "AffiliatePayout",
    "ClientIntake",
    "Creator",
    "GeneratedSite",
    "GeneratorPlan",
    "GeneratorSubscription",
    "MenuCategory",
    "MenuCustomization",
    "MenuItem",
    "Order",
    "OrderItem",
    "OrderStatusHistory",
    "Payment",
    "PayoutRequest",
    "Plan",
    "Post",
    "PostLike",
    "Referral",
    "User",
]
