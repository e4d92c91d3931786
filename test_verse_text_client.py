#!/usr/bin/env python3
"""
Tests for the Al-Quran Cloud verse text client.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent))

from quran_map.errors import FetchFailed, MalformedResponse
from quran_map.models import ProvenanceTag
from quran_map.verse_text_client import VerseTextClient

ARABIC_30_2 = "غُلِبَتِ ٱلرُّومُ"
ENGLISH_30_2 = "The Byzantines have been defeated"


def make_payload(revelation_type="Meccan", entries=2):
    surah = {"number": 30, "englishName": "Ar-Rum", "name": "سُورَةُ الرُّومِ",
             "revelationType": revelation_type}
    data = [
        {"text": ARABIC_30_2, "surah": surah},
        {"text": ENGLISH_30_2, "surah": surah},
    ]
    return {"code": 200, "status": "OK", "data": data[:entries]}


def make_client(payload=None, status=200, json_error=None):
    response = Mock()
    response.ok = 200 <= status < 300
    response.status_code = status
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    session = Mock()
    session.headers = {}
    session.get.return_value = response
    return VerseTextClient(session=session), session


def test_fetch_returns_texts_verbatim():
    client, session = make_client(make_payload())

    verse = client.fetch(30, 2)

    assert verse.original_text == ARABIC_30_2
    assert verse.translated_text == ENGLISH_30_2
    assert verse.surah_name == "Ar-Rum"
    assert verse.surah_name_native == "سُورَةُ الرُّومِ"
    assert verse.provenance_tag is ProvenanceTag.MECCAN


def test_fetch_requests_both_editions(monkeypatch):
    monkeypatch.delenv("QURAN_API_URL", raising=False)
    monkeypatch.delenv("ORIGINAL_EDITION", raising=False)
    monkeypatch.delenv("TRANSLATION_EDITION", raising=False)
    client, session = make_client(make_payload())

    client.fetch(30, 2)

    url = session.get.call_args[0][0]
    assert url == "https://api.alquran.cloud/v1/ayah/30:2/editions/ar.alafasy,en.sahih"
    assert session.get.call_args[1]["timeout"] == client.timeout


def test_editions_follow_environment(monkeypatch):
    monkeypatch.setenv("QURAN_API_URL", "http://localhost:9000/v1/")
    monkeypatch.setenv("TRANSLATION_EDITION", "en.pickthall")
    client, _ = make_client(make_payload())

    assert client.build_url(1, 1) == "http://localhost:9000/v1/ayah/1:1/editions/ar.alafasy,en.pickthall"


def test_medinan_tag():
    client, _ = make_client(make_payload("Medinan"))

    verse = client.fetch(2, 125)
    assert verse.provenance_tag is ProvenanceTag.MEDINAN
    assert verse.revelation_site.name == "Madinah"


def test_missing_revelation_type_defaults_to_meccan():
    payload = make_payload()
    for entry in payload["data"]:
        entry["surah"] = {"englishName": "Ar-Rum"}
    client, _ = make_client(payload)

    verse = client.fetch(30, 2)
    assert verse.provenance_tag is ProvenanceTag.MECCAN
    assert verse.surah_name_native == ""


def test_missing_texts_use_placeholders():
    payload = {"data": [{"surah": {}}, {}]}
    client, _ = make_client(payload)

    verse = client.fetch(30, 2)
    assert verse.original_text == "Text not available"
    assert verse.translated_text == "Translation not available"
    assert verse.surah_name == "Surah 30"


@pytest.mark.parametrize("payload", [
    make_payload(entries=1),
    make_payload(entries=0),
    {"code": 404, "status": "Not Found"},
    {"data": "not a list"},
    [],
])
def test_short_or_odd_payloads_are_malformed(payload):
    client, _ = make_client(payload)

    with pytest.raises(MalformedResponse) as excinfo:
        client.fetch(30, 2)
    assert excinfo.value.message == "Invalid response format from API"


def test_invalid_json_is_malformed():
    client, _ = make_client(json_error=ValueError("no json"))

    with pytest.raises(MalformedResponse):
        client.fetch(30, 2)


def test_http_error_is_fetch_failed_with_status():
    client, _ = make_client({"data": []}, status=404)

    with pytest.raises(FetchFailed) as excinfo:
        client.fetch(300, 1)
    assert excinfo.value.status == 404
    assert excinfo.value.message == "Failed to fetch ayah data: 404"


def test_transport_error_is_fetch_failed():
    client, session = make_client(make_payload())
    session.get.side_effect = requests.exceptions.ConnectionError("offline")

    with pytest.raises(FetchFailed) as excinfo:
        client.fetch(30, 2)
    assert excinfo.value.status is None


@pytest.mark.parametrize("payload", [
    {"data": [{"text": "a", "surah": "Ar-Rum"}, {"text": "b"}]},
    {"data": [{"text": "a", "surah": ["x"]}, {"text": "b"}]},
    {"data": [{"text": ["a"], "surah": {}}, {"text": "b"}]},
    {"data": [{"text": "a", "surah": {}}, {"text": 42}]},
])
def test_badly_shaped_entries_are_malformed(payload):
    client, _ = make_client(payload)

    with pytest.raises(MalformedResponse) as excinfo:
        client.fetch(30, 2)
    assert excinfo.value.message == "Invalid response format from API"
