"""
Data model for QuranMap: dataset records, fetched verse text and revelation sites.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Tuple


class ProvenanceTag(Enum):
    """Where a surah was revealed, as reported by the text service."""
    MECCAN = "Meccan"
    MEDINAN = "Medinan"


@dataclass(frozen=True)
class RevelationSite:
    name: str
    latitude: float
    longitude: float

    @property
    def point(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


# Historical locations where verses were revealed
REVELATION_SITES: Dict[ProvenanceTag, RevelationSite] = {
    ProvenanceTag.MECCAN: RevelationSite('Mecca', 21.4225, 39.8262),
    ProvenanceTag.MEDINAN: RevelationSite('Madinah', 24.5247, 39.5692),
}


@dataclass(frozen=True)
class VerseRecord:
    """One dataset row linking a verse reference to its topic location."""
    surah_number: int
    ayah_number: int
    topic_location: str
    topic_lat: float
    topic_lon: float
    description: str

    @property
    def reference(self) -> str:
        return f"{self.surah_number}:{self.ayah_number}"

    @property
    def topic_point(self) -> Tuple[float, float]:
        return (self.topic_lat, self.topic_lon)

    @property
    def option_label(self) -> str:
        return f"Surah {self.surah_number}, Ayah {self.ayah_number} - {self.description}"

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['reference'] = self.reference
        data['label'] = self.option_label
        return data


@dataclass
class VerseText:
    """Verse text returned by the text service for a single selection."""
    original_text: str
    translated_text: str
    surah_name: str
    surah_name_native: str
    provenance_tag: ProvenanceTag

    @property
    def revelation_site(self) -> RevelationSite:
        return REVELATION_SITES[self.provenance_tag]

    @property
    def revelation_label(self) -> str:
        return f"Revealed in: {self.revelation_site.name}"

    def ayah_reference(self, ayah_number: int) -> str:
        """Heading shown above the Arabic text, e.g. 'البقرة - الآية 125'."""
        return f"{self.surah_name_native or self.surah_name} - الآية {ayah_number}"

    def to_dict(self) -> Dict:
        return {
            'original_text': self.original_text,
            'translated_text': self.translated_text,
            'surah_name': self.surah_name,
            'surah_name_native': self.surah_name_native,
            'provenance_tag': self.provenance_tag.value,
            'revelation_label': self.revelation_label,
        }
