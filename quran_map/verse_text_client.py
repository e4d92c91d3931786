"""
Fetches verse text from the Al-Quran Cloud API.

Both the Arabic recitation edition and the English translation are requested
in a single call using the editions endpoint.
"""

import logging
import os

import requests

from quran_map.errors import FetchFailed, MalformedResponse
from quran_map.models import ProvenanceTag, VerseText


class VerseTextClient:
    """Client for the /ayah/{reference}/editions/{editions} endpoint."""

    def __init__(self, session: requests.Session = None):
        self.logger = logging.getLogger(__name__)
        self.api_url = os.getenv('QURAN_API_URL', 'https://api.alquran.cloud/v1').rstrip('/')
        self.original_edition = os.getenv('ORIGINAL_EDITION', 'ar.alafasy')
        self.translation_edition = os.getenv('TRANSLATION_EDITION', 'en.sahih')  # Saheeh International
        self.timeout = int(os.getenv('REQUEST_TIMEOUT', '10'))

        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "QuranMap/1.0"})

    def build_url(self, surah_number: int, ayah_number: int) -> str:
        reference = f"{surah_number}:{ayah_number}"
        editions = f"{self.original_edition},{self.translation_edition}"
        return f"{self.api_url}/ayah/{reference}/editions/{editions}"

    def fetch(self, surah_number: int, ayah_number: int) -> VerseText:
        """Fetch the original text, translation and provenance of one verse.

        Raises FetchFailed on transport or HTTP errors and MalformedResponse
        when the body does not carry two text entries.
        """
        url = self.build_url(surah_number, ayah_number)
        self.logger.debug(f"Fetching {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Error fetching ayah data for {surah_number}:{ayah_number}: {e}")
            raise FetchFailed(f"Failed to fetch ayah data: {e}") from e

        if not response.ok:
            self.logger.error(f"Ayah request for {surah_number}:{ayah_number} returned {response.status_code}")
            raise FetchFailed(f"Failed to fetch ayah data: {response.status_code}",
                              status=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponse('Invalid response format from API') from e

        return self.parse_response(payload, surah_number)

    def parse_response(self, payload, surah_number: int) -> VerseText:
        entries = payload.get('data') if isinstance(payload, dict) else None
        if not isinstance(entries, list) or len(entries) < 2:
            raise MalformedResponse('Invalid response format from API')

        # data[0] is the Arabic edition, data[1] the translation
        arabic_data, translation_data = entries[0], entries[1]
        if not isinstance(arabic_data, dict) or not isinstance(translation_data, dict):
            raise MalformedResponse('Invalid response format from API')
        surah = arabic_data.get('surah') or {}
        if not isinstance(surah, dict):
            raise MalformedResponse('Invalid response format from API')
        for entry in (arabic_data, translation_data):
            if entry.get('text') is not None and not isinstance(entry.get('text'), str):
                raise MalformedResponse('Invalid response format from API')

        return VerseText(
            original_text=arabic_data.get('text') or 'Text not available',
            translated_text=translation_data.get('text') or 'Translation not available',
            surah_name=surah.get('englishName') or f"Surah {surah_number}",
            surah_name_native=surah.get('name') or '',
            provenance_tag=self._provenance_tag(surah.get('revelationType')),
        )

    def _provenance_tag(self, revelation_type) -> ProvenanceTag:
        try:
            return ProvenanceTag(revelation_type)
        except ValueError:
            # Missing or unknown revelation type is treated as Meccan
            return ProvenanceTag.MECCAN
