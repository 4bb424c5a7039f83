from flask import current_app, jsonify
from . import v1_bp

@v1_bp.route('/health', methods=['GET'])
def health_check():
    configured = bool(current_app.config.get("SQLALCHEMY_DATABASE_URI"))
    return jsonify({
        "status": "ok",
        "service": "site-content",
        "store": "configured" if configured else "not_configured",
        "record_id": current_app.config["CONTENT_RECORD_ID"],
    })
