"""
Quart application serving the latest briefing as a page and as JSON.
"""
import os
import logging

from pydantic import ValidationError
from quart import Quart, Response, jsonify, render_template
from quart_cors import cors

from core.errors import StorageError
from core.schemas import BriefingDocument
from storage.base import BriefingStore
from web.formatting import format_date, format_number, format_time

logger = logging.getLogger(__name__)


def create_app(store: BriefingStore) -> Quart:
    """
    Build the app around a store. Every request does a single read of the
    ``latest`` key; nothing is cached between requests.
    """
    app = Quart(__name__,
                template_folder=os.path.join(os.path.dirname(__file__), 'templates'))
    app = cors(app)

    app.add_template_filter(format_number, "format_number")
    app.add_template_filter(format_date, "format_date")
    app.add_template_filter(format_time, "format_time")

    @app.route('/')
    async def index():
        """Briefing page, or the empty state before the first run."""
        try:
            raw = await store.get()
        except StorageError as e:
            logger.error(f"Could not read briefing: {e}")
            return await render_template('empty.html', unavailable=True), 503

        if not raw:
            return await render_template('empty.html', unavailable=False)

        try:
            briefing = BriefingDocument.from_json(raw)
        except ValidationError as e:
            logger.error(f"Stored briefing is not valid: {e}")
            return await render_template('empty.html', unavailable=True), 503

        return await render_template('briefing.html', briefing=briefing)

    @app.route('/api/briefing')
    async def api_briefing():
        """Stored JSON, verbatim."""
        try:
            raw = await store.get()
        except StorageError as e:
            logger.error(f"Could not read briefing: {e}")
            return jsonify({"error": "Briefing store unavailable"}), 503

        if not raw:
            return jsonify({"error": "No briefing data"}), 404

        return Response(raw, mimetype="application/json")

    return app
