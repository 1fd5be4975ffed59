from flask import Blueprint, jsonify, request

from showcase.security.auth import current_user, login_required
from showcase.services import creators as creator_service
from showcase.services import payouts as payout_service
from showcase.services import posts as post_service
from showcase.validation import get_json_body, validate_int

creator_bp = Blueprint("creator", __name__, url_prefix="/api/creator")
posts_bp = Blueprint("posts", __name__, url_prefix="/api/posts")


@creator_bp.route("/settings", methods=["GET"])
@login_required
def get_settings():
    return jsonify({"ageRestricted": creator_service.age_restricted(current_user())}), 200


@creator_bp.route("/settings", methods=["POST"])
@login_required
def update_settings():
    value = creator_service.set_age_restricted(
        current_user(), get_json_body(request).get("ageRestricted")
    )
    return jsonify({"ok": True, "ageRestricted": value}), 200


@creator_bp.route("/payouts/preferences", methods=["GET"])
@login_required
def get_payout_preferences():
    creator = payout_service.require_creator(current_user())
    return jsonify({
        "payoutCadence": creator.payout_cadence,
        "payoutMethod": creator.payout_method,
        "promoEndsAt": creator.promo_ends_at.isoformat() if creator.promo_ends_at else None,
    }), 200


@creator_bp.route("/payouts/preferences", methods=["POST"])
@login_required
def update_payout_preferences():
    creator = payout_service.update_preferences(current_user(), get_json_body(request))
    return jsonify({
        "ok": True,
        "payoutCadence": creator.payout_cadence,
        "payoutMethod": creator.payout_method,
    }), 200


@creator_bp.route("/payouts/request", methods=["POST"])
@login_required
def request_payout():
    row = payout_service.create_request(current_user(), get_json_body(request))
    return jsonify({"ok": True, "requestId": row.id}), 201


@creator_bp.route("/payouts/preview", methods=["GET"])
@login_required
def preview_payout():
    """Revenue-share breakdown for a hypothetical gross amount, at the creator's current fee."""
    breakdown = payout_service.preview(
        current_user(),
        validate_int(request.args.get("grossCents"), "grossCents", minimum=0),
        validate_int(request.args.get("feesCents"), "feesCents", minimum=0, required=False, default=0),
        validate_int(request.args.get("taxesCents"), "taxesCents", minimum=0, required=False, default=0),
    )
    return jsonify(breakdown.to_dict()), 200


@creator_bp.route("/content", methods=["POST"])
@login_required
def create_content():
    post = post_service.create_post(current_user(), get_json_body(request))
    return jsonify({
        "success": True,
        "post": post.to_dict(),
        "message": "Post created successfully",
    }), 201


@creator_bp.route("/<user_id>/posts", methods=["GET"])
def creator_posts(user_id):
    posts = post_service.published_posts(user_id)
    return jsonify({"posts": [post.to_dict() for post in posts]}), 200


@creator_bp.route("/<user_id>/plans", methods=["GET"])
def creator_plans(user_id):
    plans = post_service.active_plans(user_id)
    return jsonify({"plans": [plan.to_dict() for plan in plans]}), 200


@posts_bp.route("/like", methods=["POST"])
@login_required
def toggle_like():
    liked = post_service.toggle_like(current_user(), get_json_body(request).get("postId"))
    return jsonify({
        "success": True,
        "isLiked": liked,
        "message": "Post liked" if liked else "Post unliked",
    }), 200
