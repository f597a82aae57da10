from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix
from flask_smorest import Api

from .config import load_config
from .extensions import MongoDB, FirebaseIdentity, cors
from .routes import register_routes
from .scripts.create_admin import register_commands
from .utils.extensions import limiter
from .utils.error_handlers import register_error_handlers


def create_app(config_object=None, mongo_client=None, identity=None):
    """
    Build the API application.

    `mongo_client` and `identity` replace the store client and the identity
    provider; tests inject a mongomock client and an in-memory identity.
    """
    app = Flask(__name__)

    #get actual client IP
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_for=1,      # Trust X-Forwarded-For
        x_proto=1,    # Trust X-Forwarded-Proto
        x_host=1,     # Trust X-Forwarded-Host
        x_port=1,     # Trust X-Forwarded-Port
        x_prefix=1    # Trust X-Forwarded-Prefix
    )

    # Load configuration (includes the flask-smorest OPENAPI_* keys)
    load_config(app, config_object)

    api = Api(app)
    api.spec.components.security_scheme(
        "Bearer", {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
    )

    # Initialize all extensions
    MongoDB(app, client=mongo_client)
    if identity is not None:
        app.extensions["identity"] = identity
    else:
        FirebaseIdentity(app)
    cors.init_app(app, origins=app.config["CORS_ORIGINS"])
    limiter.init_app(app)

    # Register custom error handlers (after Api, so ours win)
    register_error_handlers(app)

    # Register all blueprints using `api.register_blueprint(...)`
    register_routes(app, api)
    register_commands(app)

    return app
