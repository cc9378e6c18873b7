"""Scoped component styles: rule sets, class-name scoping and a shared stylesheet."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from typing import Any, TypeVar

__all__ = ["Style", "Styled", "class_prefix", "styled_class", "stylesheet"]

N = TypeVar("N")

_CLASS_SELECTOR = re.compile(r"\.([a-zA-Z][a-zA-Z0-9\-_]*)")

_SHEET: list[str] = []
_STYLED: set[str] = set()


def _type_name(component: Any) -> str:
    if isinstance(component, str):
        return component
    cls = component if isinstance(component, type) else type(component)
    return f"{cls.__module__}.{cls.__qualname__}"


def class_prefix(component: Any) -> str:
    """Return the upper-case hex prefix that scopes class names of ``component``."""
    digest = hashlib.blake2b(_type_name(component).encode("utf-8"), digest_size=8).digest()
    return format(int.from_bytes(digest, "big"), "X")


def styled_class(component: Any, class_name: str) -> str:
    """Return the scoped form of ``class_name`` for ``component``."""
    return f"_{class_prefix(component)}__{class_name}"


def stylesheet() -> list[str]:
    """Return the rules written to the shared stylesheet so far, in order."""
    return list(_SHEET)


@dataclass
class _Selector:
    selector: str
    declarations: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class _Keyframes:
    name: str
    style: Style


@dataclass
class _Media:
    query: str
    style: Style


def _indented(style: Style) -> str:
    return "".join(f"    {line}\n" for line in str(style).split("\n") if line)


class Style:
    """An ordered collection of selector, keyframes and media rules."""

    def __init__(self) -> None:
        self._rules: list[_Selector | _Keyframes | _Media] = []

    def add(self, selector: Any, property: Any, value: Any) -> None:
        """Set ``property`` to ``value`` under ``selector``, replacing an earlier value."""
        selector, property, value = str(selector), str(property), str(value)
        for rule in self._rules:
            if isinstance(rule, _Selector) and rule.selector == selector:
                for position, (name, _) in enumerate(rule.declarations):
                    if name == property:
                        rule.declarations[position] = (property, value)
                        return
                rule.declarations.append((property, value))
                return
        self._rules.append(_Selector(selector, [(property, value)]))

    def add_keyframes(self, name: Any, style: Style) -> None:
        """Append a ``@keyframes`` rule."""
        self._rules.append(_Keyframes(str(name), style))

    def add_media(self, query: Any, style: Style) -> None:
        """Append a ``@media`` rule."""
        self._rules.append(_Media(str(query), style))

    def _copy(self) -> Style:
        clone = Style()
        clone.append(self)
        return clone

    def append(self, other: Style) -> None:
        """Merge every rule of ``other`` into this style."""
        for rule in other._rules:
            if isinstance(rule, _Selector):
                for name, value in rule.declarations:
                    self.add(rule.selector, name, value)
            elif isinstance(rule, _Keyframes):
                self.add_keyframes(rule.name, rule.style._copy())
            else:
                self.add_media(rule.query, rule.style._copy())

    def rules(self, component: Any) -> list[str]:
        """Compile to CSS rule strings with class selectors scoped to ``component``."""
        replacement = f"._{class_prefix(component)}__\\1"
        compiled = []
        for rule in self._rules:
            if isinstance(rule, _Selector):
                selector = _CLASS_SELECTOR.sub(replacement, rule.selector)
                body = "".join(f"{name}:{value};" for name, value in rule.declarations)
                compiled.append(f"{selector}{{{body}}}")
            elif isinstance(rule, _Keyframes):
                inner = "".join(rule.style.rules(component))
                compiled.append(f"@keyframes {rule.name}{{{inner}}}")
            else:
                inner = "".join(rule.style.rules(component))
                compiled.append(f"@media {rule.query}{{{inner}}}")
        return compiled

    def __str__(self) -> str:
        parts = []
        for rule in self._rules:
            if isinstance(rule, _Selector):
                parts.append(f"{rule.selector} {{\n")
                parts.extend(f"    {name}: {value};\n" for name, value in rule.declarations)
            elif isinstance(rule, _Keyframes):
                parts.append(f"@keyframes {rule.name} {{\n")
                parts.append(_indented(rule.style))
            else:
                parts.append(f"@media {rule.query} {{\n")
                parts.append(_indented(rule.style))
            parts.append("}\n")
        return "".join(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Style):
            return NotImplemented
        return self._rules == other._rules

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Style({self._rules!r})"


class Styled:
    """Base for components whose style is written to the stylesheet on first use."""

    @classmethod
    def style(cls) -> Style:
        """Return the component's style. Components override this; the default is empty."""
        return Style()

    @classmethod
    def styled(cls, node: N) -> N:
        """Write the component's rules once, then return ``node`` unchanged."""
        key = _type_name(cls)
        if key not in _STYLED:
            _SHEET.extend(cls.style().rules(cls))
            _STYLED.add(key)
        return node

    @classmethod
    def class_name(cls, class_name: str) -> str:
        """Return ``class_name`` scoped to this component."""
        return styled_class(cls, class_name)