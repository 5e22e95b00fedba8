# coachrpg/routes/auth_routes.py
import re

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import current_user_id, issue_token
from ..models.user import User, ClientProfile, ROLE_CLIENT

auth_bp = Blueprint("auth", __name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# -----------------------------
# Routes
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    """
    Client signup. Body:
    { "email": "...", "password": "...", "full_name": "...", "phone": "..." }
    """
    data = request.get_json(silent=True) or {}

    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""  # do NOT strip passwords
    full_name = (data.get("full_name") or "").strip()
    phone = (data.get("phone") or "").strip()

    if not EMAIL_RE.match(email):
        return jsonify({"message": "Invalid email address"}), 400

    if len(password) < 8:
        return jsonify({"message": "Password must be at least 8 characters"}), 400
    if not re.search(r"[A-Za-z]", password):
        return jsonify({"message": "Password must contain at least one letter"}), 400
    if not re.search(r"[0-9]", password):
        return jsonify({"message": "Password must contain at least one number"}), 400

    if not full_name:
        return jsonify({"message": "Full name is required"}), 400
    if not phone:
        return jsonify({"message": "Phone number is required"}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({"message": "Email already registered"}), 400

    user = User(email=email, role=ROLE_CLIENT)
    user.set_password(password)
    user.client_profile = ClientProfile(full_name=full_name, phone=phone)

    try:
        db.session.add(user)
        db.session.commit()

        return jsonify(
            {
                "message": "Registration successful",
                "token": issue_token(user),
                "user": user.to_dict(),
            }
        ), 201

    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Registration Error: {e}")
        return jsonify({"message": "Internal server error"}), 500


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Accepts: { "email": "...", "password": "..." }
    """
    data = request.get_json(silent=True) or {}

    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""

    if not email or not password:
        return jsonify({"message": "email and password are required"}), 400

    user = User.query.filter_by(email=email).first()

    if not user or not user.check_password(password):
        current_app.logger.info(f"[auth/login] invalid credentials for '{email}'")
        return jsonify({"message": "invalid credentials"}), 401

    return jsonify({"token": issue_token(user), "user": user.to_dict()}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    user = db.session.get(User, current_user_id())
    if not user:
        return jsonify({"message": "user not found"}), 404
    return jsonify({"user": user.to_dict()}), 200
