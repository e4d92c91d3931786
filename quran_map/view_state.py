"""
View State Toggler - which page regions are visible in each display state.
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet, List


class ViewState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


# Page regions, named after their element ids
INSTRUCTIONS = 'instructions'
LOADING = 'loading'
ERROR = 'error'
ARABIC = 'arabic-container'
TRANSLATION = 'translation-container'
TOPIC = 'topic-container'
MAP_CONTROLS = 'map-controls'
MAP = 'map-wrapper'

REGIONS = (INSTRUCTIONS, LOADING, ERROR, ARABIC, TRANSLATION, TOPIC, MAP_CONTROLS, MAP)
RESULT_REGIONS = frozenset({ARABIC, TRANSLATION, TOPIC, MAP_CONTROLS, MAP})

VISIBILITY: Dict[ViewState, FrozenSet[str]] = {
    ViewState.IDLE: frozenset({INSTRUCTIONS}),
    ViewState.LOADING: frozenset({LOADING}),
    ViewState.ERROR: frozenset({ERROR}),
    ViewState.LOADED: frozenset({ARABIC, TRANSLATION, TOPIC, MAP}),
}


class ViewStateToggler:
    """Show/hide toggles for the page regions."""

    def __init__(self, state: ViewState = ViewState.IDLE):
        self.logger = logging.getLogger(__name__)
        self.hidden = set(REGIONS)
        self.state = state
        self.apply(state)

    def show(self, region: str):
        self._check_region(region)
        self.hidden.discard(region)

    def hide(self, region: str):
        self._check_region(region)
        self.hidden.add(region)

    def apply(self, state: ViewState):
        """Switch to the fixed visibility configuration of a state."""
        visible = VISIBILITY[state]
        for region in REGIONS:
            if region in visible:
                self.show(region)
            else:
                self.hide(region)
        self.state = state
        self.logger.debug(f"View state -> {state.value}")

    def is_visible(self, region: str) -> bool:
        self._check_region(region)
        return region not in self.hidden

    def visible_regions(self) -> List[str]:
        return [region for region in REGIONS if region not in self.hidden]

    def _check_region(self, region: str):
        if region not in REGIONS:
            raise ValueError(f"Unknown region: {region}")
