from flask import jsonify
from pagecms.domain.exceptions import (
    AuthorizationError,
    ConcurrencyConflict,
    EntityNotFound,
    ValidationError,
)

def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        response = jsonify({
            "error": "ValidationError",
            "message_key": error.message_key,
            "message": error.log_message,
        })
        response.status_code = 400
        return response

    @app.errorhandler(AuthorizationError)
    def handle_authorization_error(error):
        response = jsonify({
            "error": "AuthorizationError",
            "message": str(error),
        })
        response.status_code = 403
        return response

    @app.errorhandler(ConcurrencyConflict)
    def handle_concurrency_conflict(error):
        response = jsonify({
            "error": "ConcurrencyConflict",
            "message": str(error),
        })
        response.status_code = 409
        return response

    @app.errorhandler(EntityNotFound)
    def handle_entity_not_found(error):
        response = jsonify({
            "error": "NotFound",
            "message": str(error),
        })
        response.status_code = 404
        return response
