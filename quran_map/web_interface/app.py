"""
Web interface for QuranMap: the verse selector page and its JSON API.
"""

import logging
from datetime import datetime

from flask import Flask, jsonify, request, render_template, current_app


def create_app(controller):
    """Create the Flask application around a session controller."""
    app = Flask(__name__, template_folder='templates', static_folder='static')
    app.logger.setLevel(logging.INFO)

    app.config['TEMPLATES_AUTO_RELOAD'] = True
    app.json.ensure_ascii = False

    # Store component references
    app.controller = controller

    def _verse_options():
        return [
            {'value': str(index), 'label': record.option_label}
            for index, record in enumerate(current_app.controller.records)
        ]

    @app.route('/')
    def index():
        """Main page with the verse selector and map."""
        return render_template('index.html', options=_verse_options(),
                               state=current_app.controller.snapshot())

    @app.route('/health')
    def health():
        controller = current_app.controller
        status = 'error' if controller.fatal_error else 'ok'
        return jsonify({
            'status': status,
            'records': len(controller.records),
            'timestamp': datetime.now().isoformat()
        }), (503 if controller.fatal_error else 200)

    # === API Endpoints ===

    @app.route('/api/verses', methods=['GET'])
    def get_verses():
        """List the selectable verses."""
        return jsonify({'success': True, 'data': _verse_options()})

    @app.route('/api/state', methods=['GET'])
    def get_state():
        """Current display state."""
        return jsonify({'success': True, 'data': current_app.controller.snapshot()})

    @app.route('/api/select', methods=['POST'])
    def select_verse():
        """Select a verse by index; an empty value clears the selection."""
        try:
            payload = request.get_json(silent=True)
            if payload is None:
                payload = request.form
            snapshot = current_app.controller.select(payload.get('selection'))

            if snapshot['fatal']:
                return jsonify({'success': False, 'error': snapshot['error'], 'data': snapshot}), 503
            return jsonify({'success': True, 'data': snapshot})
        except Exception as e:
            current_app.logger.error(f"Verse selection error: {e}")
            return jsonify({'success': False, 'error': str(e)}), 500

    return app
