from ..resources import (
    blp_auth,
    blp_user,
    blp_branch,
    blp_item,
    blp_invoice,
    blp_chart,
)


def health():
    return {"status": "ok"}


def register_routes(app, api):
    blueprints = [
        blp_auth,
        blp_user,
        blp_branch,
        blp_item,
        blp_invoice,
        blp_chart,
    ]

    for blueprint in blueprints:
        api.register_blueprint(blueprint, url_prefix="/api")

    # Liveness probe, outside the documented API
    app.add_url_rule("/health", "health", health, methods=["GET"])
