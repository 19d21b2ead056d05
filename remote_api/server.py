"""Small web server exposing document metrics and preset switching.

Lets an editor integration (or a phone) post a note and get the status line
back, and cycle or activate presets without the CLI.
"""

import os
from functools import wraps
from pathlib import Path

from flask import Flask, jsonify, render_template_string, request

from wordcount.config import PresetValidationError, UnknownPresetError, get_config
from wordcount.manager import get_preset_manager
from wordcount.state import get_state
from wordcount.status import render_status

app = Flask(__name__)

# Configuration via environment variables
CONFIG_PATH = os.environ.get("WORDCOUNT_CONFIG") or None
STATE_PATH = os.environ.get("WORDCOUNT_STATE") or None
AUTH_TOKEN = os.environ.get("WORDCOUNT_AUTH_TOKEN", "")


def require_auth(f):
    """Decorator to require auth token for sensitive endpoints."""
    @wraps(f)
    def decorated(*args, **kwargs):
        if AUTH_TOKEN:
            token = request.headers.get("Authorization", "").replace("Bearer ", "")
            if token != AUTH_TOKEN:
                return jsonify({"error": "Unauthorized"}), 401
        return f(*args, **kwargs)
    return decorated


def get_manager():
    """Build a manager from the current config and state files."""
    config_path = Path(CONFIG_PATH) if CONFIG_PATH else None
    state_path = Path(STATE_PATH) if STATE_PATH else None
    return get_preset_manager(get_config(config_path), get_state(state_path))


@app.errorhandler(UnknownPresetError)
def handle_unknown_preset(e):
    return jsonify({"error": str(e)}), 404


@app.errorhandler(PresetValidationError)
def handle_invalid_preset(e):
    return jsonify({"error": str(e)}), 400


COUNTER_PAGE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Word Count</title>
    <style>
        body { font-family: -apple-system, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; }
        textarea { width: 100%; height: 300px; }
        #status { margin-top: 12px; font-weight: 600; }
    </style>
</head>
<body>
    <textarea id="text" placeholder="Paste Markdown here"></textarea>
    <div id="status"></div>
    <button onclick="cycle()">Next preset</button>
    <script>
        const AUTH_TOKEN = localStorage.getItem('wordcount_token') || '';
        function headers() {
            const h = {'Content-Type': 'application/json'};
            if (AUTH_TOKEN) h['Authorization'] = 'Bearer ' + AUTH_TOKEN;
            return h;
        }
        async function update() {
            const res = await fetch('/metrics', {
                method: 'POST',
                headers: headers(),
                body: JSON.stringify({text: document.getElementById('text').value})
            });
            const data = await res.json();
            document.getElementById('status').textContent = data.status || data.error;
        }
        async function cycle() {
            await fetch('/presets/cycle', {method: 'POST', headers: headers()});
            update();
        }
        document.getElementById('text').addEventListener('input', update);
        update();
    </script>
</body>
</html>
"""


@app.route("/")
def index():
    """Serve the counter page."""
    return render_template_string(COUNTER_PAGE)


@app.route("/metrics", methods=["POST"])
@require_auth
def post_metrics():
    """Compute metrics for posted text with the active (or given) preset."""
    data = request.get_json(silent=True) or {}
    text = data.get("text")
    if not isinstance(text, str):
        return jsonify({"error": "'text' must be a string"}), 400

    manager = get_manager()
    preset_id = data.get("preset_id")
    preset = manager.config.get_preset(preset_id) if preset_id else manager.get_active_preset()
    metrics = manager.compute(text, preset.id)

    return jsonify({
        "preset": {"id": preset.id, "name": preset.name},
        "metrics": metrics.as_dict(),
        "status": render_status(preset, metrics, len(manager.presets), manager.locale),
    })


@app.route("/presets")
@require_auth
def get_presets():
    """List presets, the active one and the registered commands."""
    return jsonify(get_manager().get_status())


@app.route("/presets/<preset_id>/activate", methods=["POST"])
@require_auth
def activate_preset(preset_id: str):
    """Make a preset active."""
    preset = get_manager().activate_preset(preset_id)
    return jsonify({"message": f"Active preset: {preset.name}", "id": preset.id})


@app.route("/presets/cycle", methods=["POST"])
@require_auth
def cycle_preset():
    """Activate the next preset."""
    preset = get_manager().cycle_preset()
    return jsonify({"message": f"Active preset: {preset.name}", "id": preset.id})


if __name__ == "__main__":
    # For development only
    app.run(host="127.0.0.1", port=8080, debug=True)
