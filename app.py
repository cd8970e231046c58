from flask import Flask, jsonify
from flask_cors import CORS

from config import Config
from models.users import ensure_default_admin
from utils.db import init_db_connection, ensure_indexes, ping
from utils.errors import register_error_handlers
from utils.logging_config import setup_logging

# Import controllers
from controllers.auth_controller import auth_bp
from controllers.user_controller import user_bp
from controllers.admin_controller import admin_bp
from controllers.device_controller import device_bp


def init_collections(app):
    """Indexes and the default admin account; safe to run on every start."""
    with app.app_context():
        ensure_indexes()
        ensure_default_admin(app.config)


def create_app(config_object=Config):
    app = Flask(__name__)               # Initialize Flask app
    app.config.from_object(config_object)
    setup_logging(app)

    CORS(app, origins=app.config["CORS_ORIGINS"])
    init_db_connection(app)             # Initialize MongoDB connection
    register_error_handlers(app)

    # Register Blueprint
    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(device_bp)

    @app.route("/api/health")
    def health():
        ping()
        return jsonify({"status": "ok", "db": "ok"})

    if app.config.get("INIT_DB_ON_START"):
        try:
            init_collections(app)
        except Exception as e:
            # The server still starts; requests will report the DB error
            app.logger.error("[INIT] Error: %s", e)

    return app


# Run the app
if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"])
