"""
Loads the verse dataset (data/data.csv) used to populate the verse selector.

The format is deliberately simple: a header line naming the fields, then one
record per line with comma-separated values. Quoted fields and embedded
commas are not supported.
"""

import logging
import math
import os
from pathlib import Path
from typing import Dict, List, Union

import requests

from quran_map.errors import DatasetLoadFailed
from quran_map.models import VerseRecord

logger = logging.getLogger(__name__)

DEFAULT_DATASET = 'data/data.csv'


def parse_dataset(text: str) -> List[VerseRecord]:
    """Parse raw dataset text into records, keeping input order."""
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if not lines:
        return []

    headers = [h.strip() for h in lines[0].split(',')]
    records = []
    for line_number, line in enumerate(lines[1:], start=2):
        values = [v.strip() for v in line.split(',')]
        row = dict(zip(headers, values))
        records.append(_record_from_row(row, line_number))
    return records


def _record_from_row(row: Dict[str, str], line_number: int) -> VerseRecord:
    try:
        record = VerseRecord(
            surah_number=int(row['surah_number']),
            ayah_number=int(row['ayah_number']),
            topic_location=row['topic_location'],
            topic_lat=float(row['topic_lat']),
            topic_lon=float(row['topic_lon']),
            description=row.get('description', ''),
        )
    except (KeyError, ValueError) as e:
        raise DatasetLoadFailed(f"Invalid dataset row on line {line_number}: {e}") from e

    if not (math.isfinite(record.topic_lat) and math.isfinite(record.topic_lon)):
        raise DatasetLoadFailed(f"Invalid dataset row on line {line_number}: coordinates must be finite")
    return record


def load_dataset(resource: Union[str, Path, None] = None, timeout: int = None) -> List[VerseRecord]:
    """Load the dataset from a local path or an http(s) URL.

    Any failure to retrieve the resource raises DatasetLoadFailed; there is
    no partial or fallback dataset.
    """
    resource = str(resource or os.getenv('QURAN_MAP_DATASET', DEFAULT_DATASET))
    timeout = timeout or int(os.getenv('REQUEST_TIMEOUT', '10'))

    if resource.startswith(('http://', 'https://')):
        try:
            response = requests.get(resource, timeout=timeout)
            response.raise_for_status()
            text = response.text
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to download dataset from {resource}: {e}")
            raise DatasetLoadFailed('Failed to load data file') from e
    else:
        try:
            with open(resource, 'r', encoding='utf-8') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read dataset {resource}: {e}")
            raise DatasetLoadFailed('Failed to load data file') from e

    records = parse_dataset(text)
    logger.info(f"Loaded {len(records)} verse records from {resource}")
    return records
