"""Per-shape accessor lists for reading named values out of parameter bags.

A *parameter bag* is whatever object a caller hands to
:meth:`~httpbutler.routing.RouteResolver.resolve`: a dict, a Pydantic model,
a dataclass, a named tuple, a ``__slots__`` class, or a plain object /
:class:`types.SimpleNamespace`. Every shape exposes an ordered set of named
values; this module turns that set into a tuple of
:class:`AccessorDescriptor` pairs built from :func:`operator.attrgetter` and
:func:`operator.itemgetter`, so each read afterwards costs about as much as
a direct attribute or item access. Plain and ``__slots__`` classes also expose
their public ``property`` members, after the stored attributes.

Introspection happens once per *shape* and is cached in
:class:`AccessorCache`:

* Classes with a static field set (Pydantic models without extras,
  dataclasses, named tuples, ``__slots__`` classes) are keyed by type.
* Dynamic shapes (mappings, plain instances, Pydantic models carrying extra
  fields) are keyed by ``(type, names)`` since two instances of the same
  type can expose different names.
"""

from __future__ import annotations

import dataclasses
import operator
from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel

from httpbutler.output import debug


@dataclass(frozen=True)
class AccessorDescriptor:
    """A named reader for one value of a parameter bag.

    Attributes:
        name: Parameter name as it appears in the URI (a Pydantic field's
            alias when one is declared).
        read: Callable returning the value from a bag of the matching shape.
    """

    name: str
    read: Callable[[Any], Any]


class ParameterAccessors:
    """Immutable, ordered accessor list for one bag shape.

    Iteration yields descriptors in bag-enumeration order. :meth:`find`
    looks a name up case-insensitively; when two names differ only in case,
    the first one declared wins.
    """

    __slots__ = ("_descriptors", "_index")

    def __init__(self, descriptors: tuple[AccessorDescriptor, ...]) -> None:
        self._descriptors = descriptors
        index: dict[str, AccessorDescriptor] = {}
        for descriptor in descriptors:
            index.setdefault(descriptor.name.lower(), descriptor)
        self._index = index

    def find(self, name: str) -> Optional[AccessorDescriptor]:
        return self._index.get(name.lower())

    @property
    def names(self) -> list[str]:
        return [d.name for d in self._descriptors]

    def __iter__(self) -> Iterator[AccessorDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"ParameterAccessors({self.names!r})"


# ---------------------------------------------------------------------------
# Shape detection
# ---------------------------------------------------------------------------


def _is_named_tuple(bag: Any) -> bool:
    return isinstance(bag, tuple) and hasattr(type(bag), "_fields")


def _slot_names(cls: type) -> list[str]:
    """Collect public ``__slots__`` names across the MRO, base classes first."""
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if not slot.startswith("_") and slot not in names:
                names.append(slot)
    return names


def _public_attrs(bag: Any) -> tuple[str, ...]:
    return tuple(name for name in vars(bag) if not name.startswith("_"))


def _property_names(cls: type) -> list[str]:
    """Public ``property`` names across the MRO, base classes first."""
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if isinstance(member, property) and not name.startswith("_") and name not in names:
                names.append(name)
    return names


def shape_key(bag: Any) -> Hashable:
    """Return the cache key identifying *bag*'s shape.

    Args:
        bag: Any supported parameter bag.

    Returns:
        The bag's type for static shapes, or ``(type, names)`` for dynamic
        ones.

    Raises:
        TypeError: If *bag* exposes no enumerable named values (e.g. an
            ``int`` or a bare string).
    """
    cls = type(bag)
    if isinstance(bag, Mapping):
        return (cls, tuple(bag.keys()))
    if isinstance(bag, BaseModel):
        if bag.model_extra:
            return (cls, tuple(bag.model_extra))
        return cls
    if dataclasses.is_dataclass(bag) or _is_named_tuple(bag):
        return cls
    if hasattr(bag, "__dict__"):
        return (cls, _public_attrs(bag))
    if hasattr(cls, "__slots__"):
        return cls
    raise TypeError(
        f"Cannot use {cls.__name__} as a parameter bag: it exposes no named values"
    )


# ---------------------------------------------------------------------------
# Accessor construction
# ---------------------------------------------------------------------------


def _slot_reader(name: str) -> Callable[[Any], Any]:
    # An unset slot reads as None, the same as a missing optional value.
    def read(bag: Any) -> Any:
        return getattr(bag, name, None)

    return read


def _property_descriptors(
    cls: type, existing: list[AccessorDescriptor]
) -> list[AccessorDescriptor]:
    # Computed values come after stored ones; a stored name shadows a property.
    taken = {d.name for d in existing}
    return [
        AccessorDescriptor(name, operator.attrgetter(name))
        for name in _property_names(cls)
        if name not in taken
    ]


def build_accessors(bag: Any) -> ParameterAccessors:
    """Introspect *bag* and build its ordered accessor list.

    Args:
        bag: Any supported parameter bag.

    Returns:
        A :class:`ParameterAccessors` covering every enumerable named value,
        in the bag's natural order (insertion order for mappings, declaration
        order for classes).

    Raises:
        TypeError: If *bag* is not a supported shape.
    """
    descriptors: list[AccessorDescriptor] = []

    if isinstance(bag, Mapping):
        for key in bag.keys():
            descriptors.append(AccessorDescriptor(str(key), operator.itemgetter(key)))

    elif isinstance(bag, BaseModel):
        for field_name, info in type(bag).model_fields.items():
            descriptors.append(
                AccessorDescriptor(info.alias or field_name, operator.attrgetter(field_name))
            )
        for extra in bag.model_extra or {}:
            descriptors.append(AccessorDescriptor(extra, operator.attrgetter(extra)))

    elif dataclasses.is_dataclass(bag):
        for field in dataclasses.fields(bag):
            descriptors.append(AccessorDescriptor(field.name, operator.attrgetter(field.name)))

    elif _is_named_tuple(bag):
        for field_name in type(bag)._fields:
            descriptors.append(AccessorDescriptor(field_name, operator.attrgetter(field_name)))

    elif hasattr(bag, "__dict__"):
        for name in _public_attrs(bag):
            descriptors.append(AccessorDescriptor(name, operator.attrgetter(name)))
        descriptors.extend(_property_descriptors(type(bag), descriptors))

    elif hasattr(type(bag), "__slots__"):
        for name in _slot_names(type(bag)):
            descriptors.append(AccessorDescriptor(name, _slot_reader(name)))
        descriptors.extend(_property_descriptors(type(bag), descriptors))

    else:
        raise TypeError(
            f"Cannot use {type(bag).__name__} as a parameter bag: it exposes no named values"
        )

    return ParameterAccessors(tuple(descriptors))


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


class AccessorCache:
    """Populate-once cache of :class:`ParameterAccessors` keyed by bag shape.

    Entries are never evicted. Two threads seeing a new shape at the same
    time may both build an accessor list; :meth:`dict.setdefault` keeps the
    first one stored and both callers get that same object back.

    Mappings and plain objects are keyed by their names, so a caller that
    passes dicts with ever-changing key sets grows the cache by one entry per
    distinct key set. Build such bags with a fixed set of keys (use ``None``
    for absent values, which are skipped) or give each batch of ad-hoc calls
    its own :class:`RouteResolver`.

    Example::

        cache = AccessorCache()
        accessors = cache.get_or_build({"userId": "A01"})
        accessors.find("userid").read({"userId": "A01"})  # "A01"
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, ParameterAccessors] = {}

    def get_or_build(self, bag: Any) -> ParameterAccessors:
        """Return the accessor list for *bag*'s shape, building it on first use.

        Raises:
            TypeError: If *bag* is not a supported parameter-bag shape.
        """
        key = shape_key(bag)
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries.setdefault(key, build_accessors(bag))
            debug(f"Built accessors for {type(bag).__name__}: {', '.join(entry.names) or '(none)'}")
        return entry

    def __contains__(self, bag: object) -> bool:
        return shape_key(bag) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
