import logging

logger = logging.getLogger(__name__)


def register_blueprints(app):
    """Register all API blueprints"""
    from showcase.routes.admin import admin_bp
    from showcase.routes.affiliate import affiliate_bp
    from showcase.routes.checkout import checkout_bp
    from showcase.routes.creator import creator_bp, posts_bp
    from showcase.routes.generator import generator_bp
    from showcase.routes.health import health_bp
    from showcase.routes.intake import intake_bp
    from showcase.routes.menu import menu_bp
    from showcase.routes.orders import orders_bp
    from showcase.routes.webhooks import webhooks_bp

    for blueprint in (
        menu_bp,
        orders_bp,
        intake_bp,
        checkout_bp,
        webhooks_bp,
        admin_bp,
        creator_bp,
        posts_bp,
        affiliate_bp,
        generator_bp,
        health_bp,
    ):
        app.register_blueprint(blueprint)

    logger.info(f"Registered {len(app.blueprints)} API blueprints")
