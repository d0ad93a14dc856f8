import logging
from flask import Blueprint, jsonify, request, current_app

logger = logging.getLogger(__name__)

analyze_router = Blueprint('analyze_router', __name__)


# --- HELPER FUNCTIONS ---

def get_analyzer():
    """Retrieves the shared analyzer from the Flask application context."""
    analyzer = current_app.config.get('ANALYZER')
    if not analyzer:
        raise RuntimeError("AccessibilityAnalyzer is not set in app.config['ANALYZER']")
    return analyzer


def too_large_response(max_bytes: int):
    return jsonify({
        "error": "File too large",
        "details": f"Uploads are limited to {max_bytes} bytes"
    }), 413


# --- API ROUTES ---

@analyze_router.route('/analyze', methods=['POST'])
def analyze_file():
    """
    Accepts one uploaded HTML document (multipart field 'file') and returns
    its accessibility score and issues, tagged with the original filename.
    """
    upload = request.files.get('file')
    if upload is None or not upload.filename:
        return jsonify({"error": "No file uploaded"}), 400

    max_bytes = current_app.config.get('MAX_UPLOAD_BYTES')
    raw = upload.read()
    # The request cap includes multipart overhead, so the file size is checked exactly here
    if max_bytes and len(raw) > max_bytes:
        return too_large_response(max_bytes)

    # Undecodable bytes become U+FFFD, as a browser would render them
    html_content = raw.decode('utf-8', errors='replace')

    try:
        result = get_analyzer().analyze(html_content)
    except Exception as e:
        logger.error(f"Analysis error for '{upload.filename}': {e}", exc_info=True)
        return jsonify({"error": "Failed to analyze file", "details": str(e)}), 500

    for failure in result.rule_errors:
        logger.warning(f"Rule '{failure.rule}' skipped for '{upload.filename}': {failure.message}")

    payload = result.to_dict()
    payload["fileName"] = upload.filename
    return jsonify(payload)


@analyze_router.route('/health', methods=['GET'])
def health():
    """Reports service liveness and the active rule set."""
    return jsonify({"status": "ok", "rules": get_analyzer().registry.names()})
