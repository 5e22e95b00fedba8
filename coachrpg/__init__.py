# coachrpg/__init__.py
import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager

from config import Config

db = SQLAlchemy()
jwt = JWTManager()


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)

    # CORS: allow the dashboards (and others) to call /api/*
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # -----------------------------
    # JWT error handlers
    # -----------------------------
    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return (
            jsonify(
                {
                    "message": "Missing or invalid auth token",
                    "error": reason,
                }
            ),
            401,
        )

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return (
            jsonify(
                {
                    "message": "Invalid auth token",
                    "error": reason,
                }
            ),
            422,
        )

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"message": "Token has expired"}), 401

    # -----------------------------
    # Domain error handlers
    # -----------------------------
    from .errors import CharacterNotFound

    @app.errorhandler(CharacterNotFound)
    def character_not_found(error):
        db.session.rollback()
        return jsonify({"message": str(error)}), 404

    # -----------------------------
    # IMPORT BLUEPRINTS (all routes)
    # -----------------------------
    from .routes.auth_routes import auth_bp
    from .routes.profile_routes import profile_bp
    from .routes.schedule_routes import schedule_bp
    from .routes.client_routes import client_bp
    from .routes.admin_routes import admin_bp
    from .routes.workout_routes import workouts_bp
    from .routes.rpg_routes import rpg_bp

    # -----------------------------
    # REGISTER BLUEPRINTS
    # -----------------------------
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(profile_bp, url_prefix="/api/profile")
    app.register_blueprint(schedule_bp, url_prefix="/api/schedule")
    app.register_blueprint(client_bp, url_prefix="/api/client")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")
    app.register_blueprint(workouts_bp, url_prefix="/api/workouts")
    app.register_blueprint(rpg_bp, url_prefix="/api/rpg")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    # -----------------------------
    # DB init
    # -----------------------------
    from .models import user, appointment, workout, character  # noqa: F401

    with app.app_context():
        db.create_all()

    return app
