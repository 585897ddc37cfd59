"""
Tenant theme variables.

Branding is applied as a scoped resource: ``ThemeScope.apply()`` writes the
store's variables into a sink and ``release()`` puts back whatever was there
before the store was applied. Scopes sharing a sink can be released in any
order.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping
from weakref import WeakKeyDictionary

from plazoo_core.branding.colors import contrast_css, hex_to_hsl, hsl_css

logger = logging.getLogger(__name__)

PRIMARY = "--store-primary"
PRIMARY_FOREGROUND = "--store-primary-foreground"
SECONDARY = "--store-secondary"
SECONDARY_FOREGROUND = "--store-secondary-foreground"

THEME_VARIABLES = (PRIMARY, PRIMARY_FOREGROUND, SECONDARY, SECONDARY_FOREGROUND)

# sink -> active scopes, oldest first
_active_scopes: "WeakKeyDictionary[ThemeSink, list[ThemeScope]]" = WeakKeyDictionary()


class ThemeSink(ABC):
    """A style property bag (the document root style in a browser)."""

    @abstractmethod
    def set_property(self, name: str, value: str) -> None:
        ...

    @abstractmethod
    def get_property(self, name: str) -> str | None:
        ...

    @abstractmethod
    def remove_property(self, name: str) -> None:
        ...


class StyleBag(ThemeSink):
    """In-process sink backed by a dict."""

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def set_property(self, name: str, value: str) -> None:
        self._values[name] = value

    def get_property(self, name: str) -> str | None:
        return self._values.get(name)

    def remove_property(self, name: str) -> None:
        self._values.pop(name, None)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def to_css(self, selector: str = ":root") -> str:
        """Render the bag as a CSS rule."""
        body = "".join(f"  {name}: {value};\n" for name, value in sorted(self._values.items()))
        return f"{selector} {{\n{body}}}\n"


def _color(store: Any, attr: str) -> str | None:
    if isinstance(store, Mapping):
        return store.get(attr)
    return getattr(store, attr, None)


def branding_variables(store: Any) -> dict[str, str]:
    """
    Compute theme variables for a store.

    Accepts a Store or any mapping with primary_color/secondary_color.
    Missing or malformed colors produce no variables, which leaves the
    neutral stylesheet defaults in place.
    """
    variables: dict[str, str] = {}
    if store is None:
        return variables

    for attr, name, foreground in (
        ("primary_color", PRIMARY, PRIMARY_FOREGROUND),
        ("secondary_color", SECONDARY, SECONDARY_FOREGROUND),
    ):
        hex_color = _color(store, attr)
        if not hex_color:
            continue
        hsl = hex_to_hsl(hex_color)
        if hsl is None:
            logger.warning(
                f"Ignoring malformed {attr}: {hex_color!r}",
                extra={"store_id": str(_color(store, "id"))},
            )
            continue
        variables[name] = hsl_css(hsl)
        variables[foreground] = contrast_css(hex_color)

    return variables


class ThemeScope:
    """
    Apply/revert pair for one store's theme variables.

    Usable as a context manager:

        with ThemeScope(sink, store):
            render()

    Active scopes on a sink form a stack. Releasing a scope that a newer
    one has written over hands its saved values to that newer scope, so
    the sink ends up as it was before the oldest scope applied, whatever
    the release order.
    """

    def __init__(self, sink: ThemeSink, store: Any):
        self.sink = sink
        self.store = store
        self.variables = branding_variables(store)
        self._previous: dict[str, str | None] = {}
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def apply(self) -> "ThemeScope":
        if self._active:
            return self
        for name, value in self.variables.items():
            self._previous[name] = self.sink.get_property(name)
            self.sink.set_property(name, value)
        _active_scopes.setdefault(self.sink, []).append(self)
        self._active = True
        return self

    def release(self) -> None:
        if not self._active:
            return
        stack = _active_scopes.get(self.sink, [])
        newer = stack[stack.index(self) + 1:] if self in stack else []

        for name in self.variables:
            previous = self._previous.get(name)
            owner = next((scope for scope in newer if name in scope.variables), None)
            if owner is not None:
                owner._previous[name] = previous
            elif previous is None:
                self.sink.remove_property(name)
            else:
                self.sink.set_property(name, previous)

        if self in stack:
            stack.remove(self)
        if not stack:
            _active_scopes.pop(self.sink, None)
        self._previous.clear()
        self._active = False

    def __enter__(self) -> "ThemeScope":
        return self.apply()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
