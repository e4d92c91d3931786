"""
Selection Controller - runs a verse selection from fetch to display.

State machine: Idle -> Loading -> Loaded | Error, and back to Idle when the
selection is cleared. Each selection takes a new token; a fetch that
completes after a newer selection (or a clear) has been made is discarded.
"""

import logging
import threading
from typing import Dict, List, Optional

from quran_map.errors import FetchFailed, MalformedResponse, SelectionParseFailed
from quran_map.map_presenter import MapPresenter
from quran_map.models import VerseRecord, VerseText
from quran_map.verse_text_client import VerseTextClient
from quran_map.view_state import ViewState, ViewStateToggler

STARTUP_ERROR_MESSAGE = 'Failed to initialize application. Please refresh the page.'
SELECTION_ERROR_MESSAGE = 'Error loading verse data'


class SelectionController:
    """Owns the session state: current verse, its text and the map."""

    def __init__(self, records: List[VerseRecord], client: VerseTextClient = None,
                 presenter: MapPresenter = None, toggler: ViewStateToggler = None):
        self.logger = logging.getLogger(__name__)
        self.records = list(records)
        self.client = client or VerseTextClient()
        self.presenter = presenter or MapPresenter()
        self.toggler = toggler or ViewStateToggler()

        self.current_index: Optional[int] = None
        self.current_verse: Optional[VerseRecord] = None
        self.verse_text: Optional[VerseText] = None
        self.error_message: Optional[str] = None
        self.fatal_error: Optional[str] = None

        self._token = 0
        # Bumped on every state transition, so snapshots can be ordered
        self._version = 0
        self._lock = threading.Lock()

    @property
    def state(self) -> ViewState:
        return self.toggler.state

    @property
    def token(self) -> int:
        return self._token

    def parse_selection(self, value) -> Optional[int]:
        """Turn a selector value into a record index; None means no selection."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise SelectionParseFailed(SELECTION_ERROR_MESSAGE)
        try:
            index = int(value)
        except (TypeError, ValueError):
            raise SelectionParseFailed(SELECTION_ERROR_MESSAGE)
        if not 0 <= index < len(self.records):
            raise SelectionParseFailed(SELECTION_ERROR_MESSAGE)
        return index

    def select(self, value) -> Dict:
        """Handle a selector change and return the resulting snapshot."""
        if self.fatal_error:
            return self.snapshot()

        try:
            index = self.parse_selection(value)
        except SelectionParseFailed as e:
            self.logger.error(f"Error parsing verse selection {value!r}: {e}")
            with self._lock:
                self._token += 1
                self.current_index = None
                self.current_verse = None
                self._show_error(e.message)
            return self.snapshot()

        if index is None:
            self.clear()
            return self.snapshot()

        token = self.begin_selection(index)
        record = self.records[index]
        try:
            verse_text = self.client.fetch(record.surah_number, record.ayah_number)
        except (FetchFailed, MalformedResponse) as e:
            self.finish_selection(token, error=e.message)
        except Exception as e:
            self.logger.error(f"Unexpected error fetching verse {record.reference}: {e}")
            self.finish_selection(token, error=f"Error loading verse: {e}")
        else:
            self.finish_selection(token, verse_text=verse_text)
        return self.snapshot()

    def begin_selection(self, index: int) -> int:
        """Enter Loading for a record and return the selection token."""
        with self._lock:
            self._token += 1
            self.current_index = index
            self.current_verse = self.records[index]
            self.verse_text = None
            self.error_message = None
            self._apply(ViewState.LOADING)
            self.logger.info(f"Loading verse {self.current_verse.reference} (token {self._token})")
            return self._token

    def finish_selection(self, token: int, verse_text: VerseText = None, error: str = None) -> bool:
        """Apply a fetch result. Returns False if the result was stale."""
        with self._lock:
            if token != self._token or self.fatal_error:
                self.logger.info(f"Discarding stale result for token {token} (current {self._token})")
                return False

            if error is not None:
                self._show_error(error)
                return True

            record = self.current_verse
            self.verse_text = verse_text
            self._apply(ViewState.LOADED)
            site = verse_text.revelation_site
            self.presenter.render(record.topic_point, site.point, record.topic_location, site.name)
            self.logger.info(f"Displayed verse {record.reference} ({verse_text.provenance_tag.value})")
            return True

    def clear(self):
        """Return to the instructions view. Outstanding fetches become stale."""
        with self._lock:
            if self.fatal_error:
                return
            self._token += 1
            self.current_index = None
            self.current_verse = None
            self.verse_text = None
            self.error_message = None
            self._apply(ViewState.IDLE)

    def fail_startup(self, message: str = STARTUP_ERROR_MESSAGE):
        """Enter the permanent error state used when the dataset failed to load."""
        with self._lock:
            self.fatal_error = message
            self._show_error(message)

    def _apply(self, state: ViewState):
        self._version += 1
        self.toggler.apply(state)

    def _show_error(self, message: str):
        self.verse_text = None
        self.error_message = message
        self._apply(ViewState.ERROR)

    def snapshot(self) -> Dict:
        """JSON-ready description of what the page should show."""
        with self._lock:
            record = self.current_verse
            verse_text = self.verse_text
            snapshot = {
                'state': self.state.value,
                'token': self._token,
                'version': self._version,
                'visible': self.toggler.visible_regions(),
                'selection': self.current_index,
                'verse': record.to_dict() if record else None,
                'text': verse_text.to_dict() if verse_text else None,
                'ayah_reference': None,
                'error': self.error_message,
                'fatal': self.fatal_error is not None,
                'map': None,
            }
            if record and verse_text and self.state == ViewState.LOADED:
                snapshot['ayah_reference'] = verse_text.ayah_reference(record.ayah_number)
                snapshot['map'] = self.presenter.snapshot()
            return snapshot
