# coachrpg/auth.py
from functools import wraps

from flask import jsonify
from flask_jwt_extended import (
    create_access_token,
    get_jwt,
    get_jwt_identity,
    verify_jwt_in_request,
)

from .models.user import ROLE_ADMIN, ROLE_CLIENT


def issue_token(user) -> str:
    return create_access_token(identity=str(user.id), additional_claims={"role": user.role})


def current_user_id() -> int:
    return int(get_jwt_identity())


def current_role() -> str:
    return get_jwt().get("role")


def role_required(role: str):
    """jwt_required() plus a check on the token's role claim."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            if current_role() != role:
                return jsonify({"message": f"{role.lower()} access required"}), 403
            return fn(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(ROLE_ADMIN)
client_required = role_required(ROLE_CLIENT)
