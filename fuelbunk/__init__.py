# -*- coding: utf-8 -*-
import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import Config, ensure_instance
from .extensions import db, migrate, login_manager
from .settlement import NotFoundError, SettlementError, StateError, ValidationError

# blueprints
from .auth import auth_bp
from .admin_mgmt import bp as admin_mgmt_bp
from .modules.duty import bp as duty_bp
from .modules.dashboard import bp as dashboard_bp
from .modules.payroll import bp as payroll_bp
from .modules.attendance import bp as attendance_bp
from .modules.sales import bp as sales_bp

logger = logging.getLogger(__name__)

ERROR_STATUS = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (StateError, 409),
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def create_app(config_object=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config)
    _configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    ensure_instance(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"ok": False, "error": "unauthorized"}), 401

    # --- engine errors -> JSON ---
    @app.errorhandler(SettlementError)
    def settlement_error(e: SettlementError):
        status = next((s for cls, s in ERROR_STATUS if isinstance(e, cls)), 400)
        if status >= 409:
            logger.warning("%s: %s", e.code, e.message)
        return jsonify(e.to_dict()), status

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        if e.code is None or e.code < 400:
            return e
        return jsonify({"ok": False, "error": e.name.lower().replace(" ", "_"), "message": e.description}), e.code

    # --- blueprints ---
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_mgmt_bp)
    app.register_blueprint(duty_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(payroll_bp)
    app.register_blueprint(attendance_bp)
    app.register_blueprint(sales_bp)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    return app
