from dataclasses import dataclass, field, replace
from typing import Callable, List, Mapping, Optional

from .args import (
    TABS, TIN_TAB, Dhatu, DhatuPada, GenerationOptions, Pada, Prakriya, Prayoga, Sanadi,
    pada_tab,
)
from .load_dhatus import DhatuCatalog
from .paradigm_builder import create_prakriya
from .settings import DEFAULT_SCRIPT
from .url_state import deserialize
from .vyakarana import Vyakarana


@dataclass(slots=True, frozen=True)
class AppState:
    active_tab: str = TIN_TAB
    active_dhatu: Optional[Dhatu] = None
    active_pada: Optional[Pada] = None
    # The prakriya for the active pada.
    prakriya: Optional[Prakriya] = None
    options: GenerationOptions = field(default_factory=GenerationOptions)
    dhatu_filter: Optional[str] = None
    script: str = DEFAULT_SCRIPT


Listener = Callable[[AppState], None]


class Store:
    """Selection state of one session.

    Every mutator builds the whole next state and hands it to `_commit`, so
    listeners never see a half-invalidated state, and each tracked mutation
    notifies listeners exactly once.
    """

    def __init__(self, catalog: DhatuCatalog, vyakarana: Vyakarana, *, script: str = DEFAULT_SCRIPT):
        self.catalog = catalog
        self.vyakarana = vyakarana
        self.state = AppState(script=script)
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _commit(self, new: AppState, *, tracked: bool = True) -> None:
        if new.active_dhatu is None and new.active_pada is not None:
            new = replace(new, active_pada=None, prakriya=None)
        self.state = new
        if tracked:
            for listener in list(self._listeners):
                listener(new)

    def _set_options(self, **changes) -> None:
        s = self.state
        self._commit(replace(s, options=replace(s.options, **changes)))

    # Mutators

    def set_active_dhatu(self, code: Optional[str]) -> None:
        self._commit(replace(
            self.state,
            active_dhatu=self.catalog.find(code),
            active_pada=None,
            prakriya=None,
        ))

    def set_active_pada(self, pada: Optional[Pada]) -> None:
        if pada is None:
            self.clear_active_pada()
            return
        dhatu = self.state.active_dhatu
        if dhatu is None or pada.dhatu.code != dhatu.code:
            return
        if pada_tab(pada) != self.state.active_tab:
            return
        self._commit(replace(
            self.state,
            active_pada=pada,
            prakriya=create_prakriya(self.vyakarana, pada),
        ))

    def clear_active_pada(self) -> None:
        self._commit(replace(self.state, active_pada=None, prakriya=None))

    def clear_active_dhatu(self) -> None:
        self._commit(replace(
            self.state,
            options=GenerationOptions(),
            active_pada=None,
            prakriya=None,
            active_dhatu=None,
        ))

    def set_active_tab(self, tab: str) -> None:
        # Padas belong to a tab: a krdanta must not stay active on the tin tab.
        if tab not in TABS:
            return
        self._commit(replace(self.state, active_tab=tab, active_pada=None, prakriya=None))

    def set_prayoga(self, prayoga: Optional[Prayoga]) -> None:
        self._set_options(prayoga=prayoga)

    def set_dhatu_pada(self, dhatu_pada: Optional[DhatuPada]) -> None:
        self._set_options(dhatu_pada=dhatu_pada)

    def set_upasarga(self, upasarga: Optional[str]) -> None:
        self._set_options(upasarga=upasarga or None)

    def set_sanadi(self, sanadi: Optional[Sanadi]) -> None:
        self._set_options(sanadi=sanadi)

    def set_dhatu_filter(self, query: Optional[str]) -> None:
        self._commit(replace(self.state, dhatu_filter=query or None), tracked=False)

    def set_script(self, script: str) -> None:
        self._commit(replace(self.state, script=script), tracked=False)

    # Queries

    def filtered_dhatus(self) -> List[Dhatu]:
        return self.catalog.filter(self.state.dhatu_filter)

    def restore(self, params: Mapping[str, str]) -> None:
        """Load state from query parameters, in tab, options, dhatu, pada order."""
        for name, value in deserialize(params, self.catalog):
            if name == "tab":
                self.set_active_tab(value)
            elif name == "prayoga":
                self.set_prayoga(value)
            elif name == "dhatu_pada":
                self.set_dhatu_pada(value)
            elif name == "upasarga":
                self.set_upasarga(value)
            elif name == "sanadi":
                self.set_sanadi(value)
            elif name == "dhatu":
                self.set_active_dhatu(value.code)
            elif name == "active_pada":
                self.set_active_pada(value)
