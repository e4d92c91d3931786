#!/usr/bin/env python3
"""
QuranMap entry point: loads the dataset and starts the web interface.
"""

import logging
import os

from dotenv import load_dotenv

from quran_map.dataset_loader import load_dataset
from quran_map.errors import DatasetLoadFailed
from quran_map.map_presenter import MapPresenter
from quran_map.selection_controller import SelectionController
from quran_map.verse_text_client import VerseTextClient
from quran_map.web_interface.app import create_app


def build_app(dataset=None):
    """Build the session controller and wrap it in the Flask app."""
    logger = logging.getLogger(__name__)

    try:
        records = load_dataset(dataset)
        fatal = False
    except DatasetLoadFailed as e:
        logger.error(f"Error initializing application: {e}")
        records = []
        fatal = True

    controller = SelectionController(records, client=VerseTextClient(), presenter=MapPresenter())
    if fatal:
        controller.fail_startup()
    else:
        logger.info("QuranMap initialized successfully")

    return create_app(controller)


def main():
    load_dotenv()
    logging.basicConfig(
        level=getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = build_app()

    host = os.getenv('WEB_HOST', '127.0.0.1')
    port = int(os.getenv('WEB_PORT', '7777'))
    debug = os.getenv('WEB_DEBUG', 'false').lower() == 'true'

    logging.getLogger(__name__).info(f"Web interface starting on http://{host}:{port}")
    app.run(host=host, port=port, debug=debug, use_reloader=False)


if __name__ == "__main__":
    main()
