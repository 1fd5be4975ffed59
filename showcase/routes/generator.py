from flask import Blueprint, jsonify, request

from showcase.security.auth import current_user, login_required
from showcase.services import checkout as checkout_service
from showcase.services import generator as generator_service
from showcase.validation import get_json_body

generator_bp = Blueprint("generator", __name__, url_prefix="/api/generator")


@generator_bp.route("/sites", methods=["POST"])
def create_site():
    site = generator_service.create_site(get_json_body(request))
    return jsonify({
        "success": True,
        "siteId": site.id,
        "message": "Site generation started",
        "estimatedTime": generator_service.ESTIMATED_GENERATION_SECONDS,
        "previewUrl": generator_service.site_urls(site)["previewUrl"],
    }), 201


@generator_bp.route("/sites/<site_id>", methods=["GET"])
def site_status(site_id):
    site = generator_service.get_site(site_id)
    return jsonify({"siteId": site.id, "status": site.status, **generator_service.site_urls(site)}), 200


@generator_bp.route("/plan", methods=["GET"])
@login_required
def user_plan():
    """The caller's generator plan: the active subscription's, or Standard."""
    plan, subscription = generator_service.current_plan(current_user())
    return jsonify({
        "planType": plan.plan_type,
        "plan": plan.to_dict(),
        "subscription": subscription.to_dict() if subscription is not None else None,
    }), 200


@generator_bp.route("/checkout-pro", methods=["POST"])
@login_required
def checkout_pro():
    session = checkout_service.create_generator_pro_checkout(current_user())
    return jsonify({"success": True, "url": session["url"], "sessionId": session["id"]}), 200
