"""Reactive forms: field access by dotted path, validation and two-way binding."""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass
from itertools import zip_longest
from typing import Any, Callable, Generic, TypeVar

from .dom import Dom
from .noderef import NodeRef
from .nodes import NodeKind
from .signals import Mutable, ReadOnlyMutable, Subscription

T = TypeVar("T")

__all__ = [
    "FormError",
    "dot_get",
    "dot_set",
    "FormHandler",
    "Bind",
    "Register",
    "Model",
    "model_input",
]

_MISSING = object()


class FormError(Exception):
    """Raised when a form value cannot be read, written or converted."""


def _segments(path: str) -> list[str]:
    return path.split(".") if path else []


def _list_index(segment: str) -> int:
    if not segment.isdigit():
        raise FormError(f"{segment!r} is not a list index")
    return int(segment)


def dot_get(data: Any, path: str) -> Any:
    """Return the value at dotted ``path`` in ``data``, or None where nothing is there."""
    current = data
    for segment in _segments(path):
        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list):
            index = _list_index(segment)
            if index >= len(current):
                return None
            current = current[index]
        elif current is None:
            return None
        else:
            raise FormError(f"cannot read {segment!r} from a {type(current).__name__}")
    return current


def _assign(container: Any, segment: str, value: Any) -> None:
    if isinstance(container, dict):
        container[segment] = value
    elif isinstance(container, list):
        index = _list_index(segment)
        if index == len(container):
            container.append(value)
        elif index < len(container):
            container[index] = value
        else:
            raise FormError(f"index {index} out of range for length {len(container)}")
    else:
        raise FormError(f"cannot set {segment!r} on a {type(container).__name__}")


def dot_set(data: Any, path: str, value: Any) -> None:
    """Set the value at dotted ``path`` in ``data``, creating missing objects on the way."""
    segments = _segments(path)
    if not segments:
        raise FormError("path must not be empty")
    *parents, last = segments
    current = data
    for segment in parents:
        if isinstance(current, dict):
            child = current.get(segment)
            if child is None:
                child = current[segment] = {}
        elif isinstance(current, list):
            index = _list_index(segment)
            if index >= len(current):
                raise FormError(f"index {index} out of range for length {len(current)}")
            child = current[index]
            if child is None:
                child = current[index] = {}
        else:
            raise FormError(f"cannot set {segment!r} on a {type(current).__name__}")
        current = child
    _assign(current, last, value)


def _to_data(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_data(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(key): _to_data(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_data(item) for item in value]
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    raise FormError(f"value of type {type(value).__name__} cannot be serialized")


def _from_data(template: Any, data: Any) -> Any:
    """Rebuild a value shaped like ``template`` from plain ``data``."""
    if dataclasses.is_dataclass(template) and not isinstance(template, type):
        if not isinstance(data, dict):
            raise FormError(f"expected an object for {type(template).__name__}")
        kwargs = {}
        for f in dataclasses.fields(template):
            if not f.init:
                continue
            if f.name not in data:
                raise FormError(f"missing field {f.name!r}")
            kwargs[f.name] = _from_data(getattr(template, f.name), data[f.name])
        return type(template)(**kwargs)
    if isinstance(template, dict):
        if not isinstance(data, dict):
            raise FormError("expected an object")
        return data
    if isinstance(template, (list, tuple)):
        if not isinstance(data, list):
            raise FormError("expected a list")
        items = [
            d if t is _MISSING else _from_data(t, d)
            for t, d in zip_longest(template, data, fillvalue=_MISSING)
            if d is not _MISSING
        ]
        return tuple(items) if isinstance(template, tuple) else items
    if isinstance(template, bool):
        if not isinstance(data, bool):
            raise FormError(f"expected a boolean, got {data!r}")
        return data
    if isinstance(template, int):
        if isinstance(data, bool) or not isinstance(data, int):
            raise FormError(f"expected an integer, got {data!r}")
        return data
    if isinstance(template, float):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise FormError(f"expected a number, got {data!r}")
        return float(data)
    if isinstance(template, str):
        if not isinstance(data, str):
            raise FormError(f"expected a string, got {data!r}")
        return data
    return data


class _MappedSignal:
    """A read-only signal whose value is a function of another signal's value."""

    def __init__(self, source: Any, func: Callable[[Any], Any]) -> None:
        self._source = source
        self._func = func

    def get(self) -> Any:
        return self._func(self._source.get())

    def subscribe(self, callback: Callable[[Any], Any]) -> Subscription:
        return self._source.subscribe(lambda value: callback(self._func(value)))


def _errors_of(value: Any) -> dict:
    errors = getattr(value, "errors", None)
    if not callable(errors):
        raise TypeError(f"{type(value).__name__} does not report errors")
    return errors()


class FormHandler(Generic[T]):
    """A reactive form holding a value that fields read and write by dotted path."""

    def __init__(self, value: T) -> None:
        self._node_ref = NodeRef()
        self._value = Mutable(value)

    def handle(self) -> ReadOnlyMutable[T]:
        """Return a read-only view of the form value."""
        return self._value.read_only()

    def update_field(self, name: str, value: Any) -> None:
        """Set the field at dotted path ``name``; the form value is left unchanged on error."""
        current = self._value.get()
        data = _to_data(current)
        dot_set(data, name, _to_data(value))
        self._value.set(_from_data(current, data))

    def get_value_by_field(self, name: str) -> Any:
        """Return the field at dotted path ``name``, or None if it is absent."""
        return dot_get(_to_data(self._value.get()), name)

    def get_value(self) -> T:
        """Return a copy of the form value."""
        return copy.deepcopy(self._value.get())

    def validate(self) -> Any:
        """Run the value's own ``validate`` method."""
        value = self._value.get()
        validate = getattr(value, "validate", None)
        if not callable(validate):
            raise TypeError(f"{type(value).__name__} cannot be validated")
        return validate()

    def error_for(self, name: str) -> _MappedSignal:
        """Signal of the error message for ``name``, or an empty string when there is none."""
        return _MappedSignal(self._value, lambda value: _errors_of(value).get(name, ""))

    def bind(self, name: str) -> Bind:
        """Connect a non-form element or component to the field ``name``."""
        return Bind(name, self)

    def register(self) -> Register:
        """Return a mixin that connects an input or select element to the form."""
        return Register(self)

    def node_ref(self) -> NodeRef:
        """Return the reference to the form's node."""
        return self._node_ref


@dataclass(frozen=True)
class Bind:
    """A binding between one field of a form and something outside it."""

    name: str
    form: FormHandler

    def set_value(self, value: Any) -> None:
        """Set the bound field."""
        self.form.update_field(self.name, value)

    def get_value(self) -> _MappedSignal:
        """Signal of the bound field's value."""
        return _MappedSignal(self.form.handle(), lambda value: dot_get(_to_data(value), self.name))


def _event_value(event: Any) -> Any:
    """Events carry the new value either directly or as a ``value`` attribute."""
    return getattr(event, "value", event)


def _field_name(dom: Dom) -> str:
    name = dom.node.attributes.get("name")
    if name is None:
        raise FormError("form element has no name attribute")
    return name


@dataclass(frozen=True)
class Register:
    """Mixin that writes an element's input into the form field named by its ``name``."""

    form: FormHandler

    def __call__(self, dom: Dom) -> None:
        if dom.node.kind is not NodeKind.ELEMENT:
            raise FormError("only elements can be registered with a form")
        is_select = dom.node.tag == "select"

        def on_event(event: Any) -> None:
            self.form.update_field(_field_name(dom), _event_value(event))

        dom.event("change" if is_select else "input", on_event)
        if is_select:
            return
        name = _field_name(dom)
        value = self.form.get_value_by_field(name)
        if value is None:
            raise FormError(f"form has no value for field {name!r}")
        dom.attribute("value", str(value))


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_like(current: Any, raw: Any) -> Any:
    if not isinstance(raw, str) or current is None or isinstance(current, str):
        return raw
    if isinstance(current, bool):
        if raw not in ("true", "false"):
            raise ValueError(f"invalid boolean {raw!r}")
        return raw == "true"
    return type(current)(raw)


class Model:
    """Two-way binding between a Mutable and an input element's value."""

    def __init__(self, mutable: Mutable) -> None:
        self.mutable = mutable

    def __call__(self, dom: Dom) -> None:
        dom.effect(
            self.mutable.subscribe(lambda value: dom.attribute("value", _format(value)))
        )

        def on_input(event: Any) -> None:
            self.mutable.set(_parse_like(self.mutable.get(), _event_value(event)))

        dom.event("input", on_input)


def model_input(mutable: Mutable) -> Model:
    """Bind an input element to ``mutable``."""
    return Model(mutable)