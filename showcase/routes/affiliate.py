from flask import Blueprint, current_app, jsonify, request

from showcase.errors import NotFound, ValidationError
from showcase.models.affiliate import Referral
from showcase.security.auth import current_user, login_required
from showcase.services import affiliates as affiliate_service
from showcase.validation import get_json_body

affiliate_bp = Blueprint("affiliate", __name__, url_prefix="/api/affiliate")


@affiliate_bp.route("", methods=["POST"])
@login_required
def create_affiliate():
    affiliate, created = affiliate_service.create_affiliate(current_user())
    message = "Affiliate account created successfully" if created else "Affiliate account already exists"
    return jsonify({"affiliate": affiliate.to_dict(), "message": message}), 201 if created else 200


@affiliate_bp.route("", methods=["GET"])
@login_required
def get_affiliate():
    affiliate = affiliate_service.get_affiliate(current_user())
    if affiliate is None:
        return jsonify({"affiliate": None}), 200

    data = affiliate.to_dict()
    data["referralCount"] = Referral.query.filter_by(affiliate_id=affiliate.id).count()
    return jsonify({"affiliate": data}), 200


@affiliate_bp.route("/stats", methods=["GET"])
@login_required
def affiliate_stats():
    affiliate = affiliate_service.get_affiliate(current_user())
    if affiliate is None:
        raise NotFound("No affiliate account found")
    return jsonify(affiliate_service.affiliate_stats(affiliate)), 200


@affiliate_bp.route("/track", methods=["GET"])
def set_tracking_cookie():
    """Remember the visitor's referring affiliate for 30 days."""
    code = request.args.get("ref")
    if not code:
        raise ValidationError("Affiliate code required", field="ref")

    affiliate = affiliate_service.find_active_by_code(code)
    if affiliate is None:
        raise NotFound("Invalid or inactive affiliate code")

    response = jsonify({
        "success": True,
        "message": "Affiliate tracking cookie set",
        "code": affiliate.code,
    })
    response.set_cookie(
        affiliate_service.AFFILIATE_COOKIE_NAME,
        affiliate.code,
        max_age=affiliate_service.COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        secure=current_app.config.get("ENVIRONMENT") == "production",
        samesite="Lax",
    )
    return response


@affiliate_bp.route("/track", methods=["POST"])
def record_referral():
    data = get_json_body(request)
    code = data.get("affiliateCode") or request.cookies.get(affiliate_service.AFFILIATE_COOKIE_NAME)
    referral, message = affiliate_service.record_referral(data.get("userId"), code)

    if referral is None:
        return jsonify({"success": False, "message": message}), 200

    response = jsonify({"success": True, "message": message, "referral": referral.to_dict()})
    response.delete_cookie(affiliate_service.AFFILIATE_COOKIE_NAME, path="/")
    return response, 201
