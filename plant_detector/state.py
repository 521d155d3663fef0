"""
Application state store: which screen is showing, the result overlay,
the latest location report and the per-action busy gates.

View state is a tagged union, so "a result without its image" cannot be
represented.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Union

from plant_detector.models import LocationAnalysis, PlantAnalysis, ScanHistoryItem
from plant_detector.services.history import ScanHistory

logger = logging.getLogger(__name__)


class View(str, Enum):
    HOME = "HOME"
    SCAN = "SCAN"
    DASHBOARD = "DASHBOARD"
    MARKET = "MARKET"
    MAP = "MAP"


@dataclass(frozen=True)
class ScreenState:
    view: View

    kind = "screen"


@dataclass(frozen=True)
class ResultState:
    """Full-screen analysis overlay; supersedes ordinary navigation."""
    analysis: PlantAnalysis
    image: str
    underlying: View

    kind = "result"

    def __post_init__(self):
        if not self.image:
            raise ValueError("Result mode needs both an analysis and its image")


ViewState = Union[ScreenState, ResultState]


# ============================================================================#
# Busy gates
# ============================================================================#

class GateBusyError(RuntimeError):
    def __init__(self, action: str):
        super().__init__(f"A {action} request is already in progress")
        self.action = action


class BusyGate:
    """One request slot per action; set before the call, cleared on every path."""

    def __init__(self, action: str):
        self.action = action
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    @contextmanager
    def hold(self) -> Iterator[None]:
        if self._busy:
            logger.warning(f"Rejected concurrent {self.action} request")
            raise GateBusyError(self.action)
        self._busy = True
        try:
            yield
        finally:
            self._busy = False


# ============================================================================#
# Store
# ============================================================================#

class AppStateStore:
    def __init__(self, history: ScanHistory, initial_view: View = View.HOME):
        self.history = history
        self._state: ViewState = ScreenState(initial_view)
        self.location_result: Optional[LocationAnalysis] = None
        self.gates: Dict[str, BusyGate] = {
            "scan": BusyGate("scan"),
            "location": BusyGate("location"),
        }

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def is_result_mode(self) -> bool:
        return isinstance(self._state, ResultState)

    @property
    def result(self) -> Optional[ResultState]:
        return self._state if isinstance(self._state, ResultState) else None

    @property
    def current_view(self) -> View:
        """The screen underneath, even while the result overlay is up."""
        if isinstance(self._state, ResultState):
            return self._state.underlying
        return self._state.view

    @property
    def show_navigation(self) -> bool:
        return not self.is_result_mode

    # ---------------------------------------------------------- transitions

    def navigate(self, view: View) -> bool:
        """Switch screens. Blocked (returns False) while a result is shown."""
        if self.is_result_mode:
            logger.info(f"Navigation to {view.value} blocked: result is showing")
            return False
        self._state = ScreenState(view)
        return True

    def complete_scan(self, analysis: PlantAnalysis, image: str) -> ScanHistoryItem:
        """Enter result mode from any screen and record the scan."""
        self._state = ResultState(analysis=analysis, image=image, underlying=self.current_view)
        return self.history.add_from_analysis(analysis, image)

    def dismiss_result(self):
        self._state = ScreenState(View.SCAN)

    def set_location_result(self, analysis: LocationAnalysis):
        self.location_result = analysis

    def snapshot(self) -> Dict[str, Any]:
        return {
            "mode": self._state.kind,
            "view": self.current_view.value,
            "showNavigation": self.show_navigation,
            "busy": {name: gate.busy for name, gate in self.gates.items()},
        }
