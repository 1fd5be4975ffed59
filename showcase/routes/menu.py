from flask import Blueprint, jsonify

from showcase.services import menu as menu_service

menu_bp = Blueprint("menu", __name__, url_prefix="/api/menu")


@menu_bp.route("", methods=["GET"])
def get_menu():
    """Active categories with available items and customizations."""
    categories = menu_service.get_menu()
    return jsonify({"categories": [category.to_dict() for category in categories]}), 200
