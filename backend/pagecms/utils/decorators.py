from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity

from pagecms.security.access_control import is_authorized
from pagecms.security.principal import Principal


def current_principal() -> Principal:
    """Principal of the request's JWT. Call inside ``jwt_required`` views."""
    return Principal.from_claims(get_jwt_identity(), get_jwt())

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if not is_authorized(current_principal(), allowed_roles):
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
