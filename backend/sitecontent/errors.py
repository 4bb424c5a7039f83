from flask import jsonify
from sitecontent.domain.invariants.exceptions import InvalidContentFormat, InvariantViolation

def register_error_handlers(app):
    @app.errorhandler(InvalidContentFormat)
    def handle_invalid_content_format(error):
        response = jsonify({
            "error": "InvalidContentFormat",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response
