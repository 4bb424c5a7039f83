# sitecontent/api/v1/content.py
from flask import Response, current_app, g, jsonify, request
from sitecontent.application.content import ContentReconciler, SQLAlchemyContentStore
from sitecontent.domain.invariants.exceptions import InvalidContentFormat
from sitecontent.domain.lifecycle.save import SaveStatus
from sitecontent.normalizers.content import normalize_content, parse_content
from . import v1_bp # import the versioned blueprint

EXPORT_FILENAME = "site-content.json"

STATUS_CODES = {
    SaveStatus.SAVED: 200,
    SaveStatus.FAILED: 502,
}


def get_reconciler() -> ContentReconciler:
    """
    One reconciler per request.

    Every request runs on its own event loop, so nothing that owns a
    timer may outlive it; API saves are therefore always immediate.
    """
    if "content_reconciler" not in g:
        app = current_app._get_current_object()
        store = SQLAlchemyContentStore(app, app.config["CONTENT_RECORD_ID"])
        g.content_reconciler = ContentReconciler.from_config(store, app.config)
    return g.content_reconciler


def save_response(status: SaveStatus, **extra):
    body = {"status": status.value}
    body.update(extra)
    if status.skipped:
        # Accepted but deliberately not stored
        return jsonify(body), 202
    return jsonify(body), STATUS_CODES.get(status, 200)


# ------------------------
# Content
# ------------------------

@v1_bp.route("/content", methods=["GET"])
async def get_content():
    content = await get_reconciler().load()
    return jsonify(normalize_content(content))


@v1_bp.route("/content", methods=["PUT"])
async def save_content():
    data = request.get_json(silent=True)
    if data is None:
        raise InvalidContentFormat("Request body must be JSON content")

    snapshot = parse_content(data)
    status = await get_reconciler().save(snapshot, immediate=True)

    current_app.logger.info("Content save via API: %s", status.value)
    return save_response(status)


@v1_bp.route("/content/reset", methods=["POST"])
async def reset_content():
    content = await get_reconciler().reset()
    return jsonify(normalize_content(content))


@v1_bp.route("/content/export", methods=["GET"])
async def export_content():
    reconciler = get_reconciler()
    content = await reconciler.load()

    return Response(
        reconciler.export_content(content),
        mimetype="application/json",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


@v1_bp.route("/content/import", methods=["POST"])
async def import_content():
    reconciler = get_reconciler()
    snapshot = reconciler.import_content(request.get_data(as_text=True))
    status = await reconciler.save(snapshot, immediate=True)

    current_app.logger.info("Content import via API: %s", status.value)
    return save_response(
        status,
        content=normalize_content(reconciler.normalize_order(snapshot)),
    )
