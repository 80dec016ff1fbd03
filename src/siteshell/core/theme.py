"""Theme resolution, persistence and application.

ThemeController is the single owner of the visitor's theme: it resolves a
requested theme (possibly "system") to a concrete one, writes it onto the
root scope and persists the request in a key-value store.

State machine:
    uninitialized --init()--> resolving --> steady
    steady --set_theme() / system_preference_changed()--> steady
    any --teardown()--> uninitialized
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, TypedDict

from siteshell.core.types import (
    RESOLVED_THEMES,
    THEMES,
    ResolvedTheme,
    SystemPreference,
    Theme,
)

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "theme"
DEFAULT_ATTRIBUTE = "data-theme"
THEME_CLASS_PREFIX = "theme-"


class PersistenceError(Exception):
    """Theme store could not be read or written."""


class RootScopeOwnershipError(RuntimeError):
    """Root scope theme state written by a controller that does not own it."""


class KeyValueStore(Protocol):
    """String key-value persistence (e.g., browser storage, cookies)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """In-process key-value store."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self._data = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


# Runs a callback on the next rendered frame
FrameScheduler = Callable[[Callable[[], None]], None]
ThemeListener = Callable[[Theme, ResolvedTheme], None]


def run_immediately(callback: Callable[[], None]) -> None:
    """Frame scheduler for environments without a render loop."""
    callback()


def is_valid_theme(value: object) -> bool:
    """Check whether a value names a known theme."""
    return isinstance(value, str) and value in THEMES


def resolve_theme(requested: Theme, system_preference: SystemPreference) -> ResolvedTheme:
    """Resolve a requested theme to the concrete theme to apply."""
    if requested == "system":
        return system_preference
    return requested


class RootScope:
    """Document root the resolved theme is written onto.

    Holds the theme attribute, the theme-* class and whether CSS
    transitions are suspended. Only one controller may write it; the first
    writer claims the scope until it releases it.
    """

    def __init__(self) -> None:
        self.attributes: dict[str, str] = {}
        self.classes: set[str] = set()
        self.transitions_suspended = False
        self._owner: object | None = None

    @property
    def owner(self) -> object | None:
        return self._owner

    def write_theme(self, writer: object, attribute: str, theme: ResolvedTheme) -> None:
        """Write the resolved theme as attribute and class."""
        self._claim(writer)
        self.attributes[attribute] = theme
        self.classes = {c for c in self.classes if not c.startswith(THEME_CLASS_PREFIX)}
        self.classes.add(f"{THEME_CLASS_PREFIX}{theme}")

    def suspend_transitions(self, writer: object) -> None:
        self._claim(writer)
        self.transitions_suspended = True

    def resume_transitions(self, writer: object) -> None:
        self._claim(writer)
        self.transitions_suspended = False

    def release(self, writer: object) -> None:
        if self._owner is writer:
            self._owner = None

    def current_theme(self, attribute: str = DEFAULT_ATTRIBUTE) -> ResolvedTheme | None:
        """Read back the theme currently applied, None if unset or unknown."""
        value = self.attributes.get(attribute)
        if value in RESOLVED_THEMES:
            return value  # type: ignore[return-value]
        return None

    def _claim(self, writer: object) -> None:
        if self._owner is None:
            self._owner = writer
        elif self._owner is not writer:
            raise RootScopeOwnershipError("Root scope theme is owned by another controller")


@dataclass
class ThemeConfig:
    """Theme controller configuration."""

    default_theme: Theme = "system"
    attribute: str = DEFAULT_ATTRIBUTE
    storage_key: str = DEFAULT_STORAGE_KEY
    enable_transitions: bool = True
    enable_system: bool = True
    available_themes: tuple[Theme, ...] = field(default_factory=lambda: THEMES)
    disable_storage: bool = False
    forced_theme: ResolvedTheme | None = None


class ThemePhase(Enum):
    UNINITIALIZED = "uninitialized"
    RESOLVING = "resolving"
    STEADY = "steady"


class ThemeStateDict(TypedDict):
    """Dictionary representation of theme state."""

    requested: Theme
    resolved: ResolvedTheme
    system_preference: SystemPreference
    is_initializing: bool


@dataclass(frozen=True)
class ThemeState:
    """Snapshot of the controller state."""

    requested: Theme
    resolved: ResolvedTheme
    system_preference: SystemPreference
    is_initializing: bool

    def to_dict(self) -> ThemeStateDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "requested": self.requested,
            "resolved": self.resolved,
            "system_preference": self.system_preference,
            "is_initializing": self.is_initializing,
        }


class ThemeController:
    """State machine owning the visitor's theme.

    Persistence failures are logged and otherwise ignored: switching themes
    keeps working in memory when the store is broken.
    """

    def __init__(
        self,
        store: KeyValueStore,
        root: RootScope,
        config: ThemeConfig | None = None,
        *,
        system_preference: SystemPreference = "light",
        prefers_reduced_motion: bool = False,
        request_frame: FrameScheduler = run_immediately,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Key-value store for the requested theme
            root: Root scope to apply the resolved theme to
            config: Theme configuration, defaults if None
            system_preference: Current platform color scheme
            prefers_reduced_motion: Current platform reduced-motion setting
            request_frame: Schedules a callback for the next frame
        """
        self._store = store
        self._root = root
        self._config = config or ThemeConfig()
        self._request_frame = request_frame
        self._listeners: list[ThemeListener] = []

        self._phase = ThemePhase.UNINITIALIZED
        self._system_preference: SystemPreference = system_preference
        self._prefers_reduced_motion = prefers_reduced_motion
        self._requested: Theme = self._config.default_theme
        self._resolved: ResolvedTheme = self._resolve(self._requested)

    @property
    def config(self) -> ThemeConfig:
        return self._config

    @property
    def root(self) -> RootScope:
        return self._root

    @property
    def selectable_themes(self) -> list[Theme]:
        """Themes set_theme() accepts, in cycling order."""
        themes = list(self._config.available_themes)
        if not self._config.enable_system and "system" in themes:
            themes.remove("system")
        return themes

    @property
    def phase(self) -> ThemePhase:
        return self._phase

    @property
    def requested(self) -> Theme:
        return self._requested

    @property
    def resolved(self) -> ResolvedTheme:
        return self._resolved

    @property
    def system_preference(self) -> SystemPreference:
        return self._system_preference

    @property
    def prefers_reduced_motion(self) -> bool:
        return self._prefers_reduced_motion

    @property
    def state(self) -> ThemeState:
        return ThemeState(
            requested=self._requested,
            resolved=self._resolved,
            system_preference=self._system_preference,
            is_initializing=self._phase is not ThemePhase.STEADY,
        )

    def on_change(self, listener: ThemeListener) -> Callable[[], None]:
        """Register a listener called with (requested, resolved) on change.

        Returns:
            Function that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def init(self) -> ThemeState:
        """Load the persisted request and apply it.

        Transitions are suspended for one frame while the initial theme is
        applied, unless the visitor prefers reduced motion.
        """
        if self._phase is not ThemePhase.UNINITIALIZED:
            return self.state

        self._phase = ThemePhase.RESOLVING
        stored = self._read_stored()
        self._requested = stored if stored is not None else self._config.default_theme
        self._resolved = self._resolve(self._requested)
        self._apply(suppress_transitions=True)
        self._phase = ThemePhase.STEADY

        logger.debug("Theme initialized: %s -> %s", self._requested, self._resolved)
        self._notify()
        return self.state

    def set_theme(self, requested: object) -> ThemeState:
        """Request a theme.

        Unknown or unavailable themes are ignored.

        Args:
            requested: One of "light", "dark", "high-contrast", "system"

        Returns:
            State after the transition
        """
        if not self._is_selectable(requested):
            logger.debug("Ignoring unavailable theme request: %r", requested)
            return self.state
        self._transition(requested, persist=True)  # type: ignore[arg-type]
        return self.state

    def system_preference_changed(self, preference: object) -> ThemeState:
        """Handle a platform color-scheme change.

        The preference is always recorded. The theme is only re-applied
        when the request is "system" and system themes are enabled.
        """
        if preference not in ("light", "dark"):
            logger.debug("Ignoring invalid system preference: %r", preference)
            return self.state

        self._system_preference = preference  # type: ignore[assignment]
        if self._config.enable_system and self._requested == "system":
            resolved = self._resolve(self._requested)
            if resolved != self._resolved:
                self._resolved = resolved
                self._apply(suppress_transitions=False)
                self._notify()
        return self.state

    def reduced_motion_changed(self, prefers_reduced_motion: bool) -> None:
        """Handle a platform reduced-motion change."""
        self._prefers_reduced_motion = bool(prefers_reduced_motion)
        if self._prefers_reduced_motion and self._root.owner is self:
            # Never leave transitions suspended for a reduced-motion visitor
            self._root.resume_transitions(self)

    def toggle_theme(self) -> ThemeState:
        """Switch between light and dark based on the resolved theme."""
        return self.set_theme("dark" if self._resolved == "light" else "light")

    def cycle_theme(self) -> ThemeState:
        """Advance to the next available theme."""
        themes = self.selectable_themes
        if not themes:
            return self.state
        try:
            index = themes.index(self._requested)
        except ValueError:
            index = -1
        return self.set_theme(themes[(index + 1) % len(themes)])

    def reset_to_system(self) -> ThemeState:
        """Follow the platform color scheme again."""
        if not self._config.enable_system:
            return self.state
        return self.set_theme("system")

    def clear_stored_theme(self) -> ThemeState:
        """Remove the persisted request and fall back to the default theme."""
        if self._config.disable_storage:
            return self.state
        try:
            self._store.remove(self._config.storage_key)
        except (PersistenceError, OSError) as e:
            logger.warning("Failed to remove stored theme: %s", e)
        self._transition(self._config.default_theme, persist=False)
        return self.state

    def teardown(self) -> None:
        """Release the root scope and return to the uninitialized phase."""
        self._listeners.clear()
        if self._root.owner is self:
            # A pending frame callback would no longer own the scope
            self._root.resume_transitions(self)
        self._root.release(self)
        self._phase = ThemePhase.UNINITIALIZED

    def _transition(self, requested: Theme, *, persist: bool) -> None:
        changed = requested != self._requested
        self._requested = requested
        resolved = self._resolve(requested)
        changed = changed or resolved != self._resolved
        self._resolved = resolved

        self._apply(suppress_transitions=not self._config.enable_transitions)
        self._phase = ThemePhase.STEADY
        if persist:
            self._write_stored(requested)
        if changed:
            self._notify()

    def _resolve(self, requested: Theme) -> ResolvedTheme:
        if self._config.forced_theme is not None:
            return self._config.forced_theme
        return resolve_theme(requested, self._system_preference)

    def _apply(self, *, suppress_transitions: bool) -> None:
        suppress = suppress_transitions and not self._prefers_reduced_motion
        if suppress:
            self._root.suspend_transitions(self)

        self._root.write_theme(self, self._config.attribute, self._resolved)

        if suppress:
            self._request_frame(self._resume_transitions)

    def _resume_transitions(self) -> None:
        if self._root.owner is self:
            self._root.resume_transitions(self)

    def _is_selectable(self, value: object) -> bool:
        return is_valid_theme(value) and value in self.selectable_themes

    def _read_stored(self) -> Theme | None:
        if self._config.disable_storage or self._config.forced_theme is not None:
            return None
        try:
            value = self._store.get(self._config.storage_key)
        except (PersistenceError, OSError) as e:
            logger.warning("Failed to read stored theme: %s", e)
            return None
        if value is None:
            return None
        if not self._is_selectable(value):
            logger.debug("Ignoring stored theme value: %r", value)
            return None
        return value  # type: ignore[return-value]

    def _write_stored(self, requested: Theme) -> None:
        if self._config.disable_storage or self._config.forced_theme is not None:
            return
        try:
            self._store.set(self._config.storage_key, requested)
        except (PersistenceError, OSError) as e:
            logger.warning("Failed to store theme: %s", e)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._requested, self._resolved)
