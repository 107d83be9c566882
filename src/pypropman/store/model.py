# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 23:01:44
# @Author : Kariko Lin

"""Namespaced key-value properties with `##macro##` resolution.

    ```python
    store = PropertyStore()
    store.set_property('base', 'val1')
    store.set_property('greeting', 'hello ##base##')
    store.get_property('greeting')  # 'hello val1'
    ```

Every `set_property()` resolves the new value, then re-resolves ALL
stored values ("backward resolution"), so a reference set before its
target gets filled in once the target shows up. That is one sweep over
the whole store per call.

Cautions:
    - circular references are not detected while resolving.
    Use `find_reference_cycles()` to look for them, and `backward_passes`
    to let chains settle (bounded, warns when the bound is hit).
    - a store is meant to be used by one owner at a time.
    There is no locking inside.
"""

import logging
from enum import Enum
from re import Pattern
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping
from warnings import warn

from ..datatype import DataType, to_comparable, to_int
from ..namespace import DEFAULT_NAMESPACE, Namespace
from ..tokens import MappingTokenResolver
from ..tree import PropertyNode
from .consts import DEFAULT_RESOLUTION_POLICY, PropsTag, ResolutionPolicy
from .resolver import MacroResolver

_logger = logging.getLogger(__name__)

PropertyKey = str | Enum


class MissingPropertyError(KeyError):
    """A required property key isn't there."""
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ''


def property_key(key: PropertyKey) -> str:
    """Enum members turn into keys as well.

    `class Keys(str, Enum)` members use their value, others their name.
    """
    if key is None:
        raise ValueError('key may not be None')
    if isinstance(key, Enum):
        return key.value if isinstance(key, str) else key.name
    return key


def _check_namespace(namespace: Namespace) -> None:
    if namespace is None:
        raise ValueError('namespace may not be None')


class PropertyStore(Mapping[Namespace, Mapping[str, str]]):
    """Namespace -> (key -> value) properties, iterated in sorted order.

    As a `Mapping` the store is read only: `store[ns]` is a snapshot of
    one namespace. Write through `set_property()` and friends only,
    as they take care of macro resolution.
    """
    DEFAULT_AVOID_OVERWRITES = False
    DEFAULT_RESOLUTION_POLICY = DEFAULT_RESOLUTION_POLICY

    def __init__(
        self, *,
        avoid_overwrites: bool | None = None,
        resolution_policy: ResolutionPolicy | None = None,
        macro_pattern: str | Pattern[str] | None = None,
        backward_passes: int = 1
    ) -> None:
        """Create an empty store.

        Args:
            avoid_overwrites: if set, `set_property()` leaves existing keys
                alone. Defaults to `DEFAULT_AVOID_OVERWRITES`.
            resolution_policy: defaults to `DEFAULT_RESOLUTION_POLICY`.
            macro_pattern: regex with the referenced key as group 1.
                Defaults to the process wide pattern, `##(.+?)##`.
            backward_passes: max sweeps of backward resolution per change.
                1 is a single sweep; more let chained references settle.
        """
        self.__data: dict[Namespace, dict[str, str]] = {}
        self.avoid_overwrites = (
            self.DEFAULT_AVOID_OVERWRITES if avoid_overwrites is None
            else avoid_overwrites)
        self.__resolver = MacroResolver(
            macro_pattern,
            self.DEFAULT_RESOLUTION_POLICY if resolution_policy is None
            else resolution_policy)
        self.backward_passes = backward_passes

    @classmethod
    def set_default_avoid_overwrites(cls, avoid_overwrites: bool) -> None:
        cls.DEFAULT_AVOID_OVERWRITES = avoid_overwrites

    # construction from other sources
    @classmethod
    def from_mapping(
        cls,
        properties: Mapping[PropertyKey, str],
        namespace: Namespace = DEFAULT_NAMESPACE,
        **options
    ) -> 'PropertyStore':
        ret = cls(**options)
        ret.set_properties(properties, namespace)
        return ret

    @classmethod
    def from_tree(
        cls,
        node: PropertyNode,
        namespace: Namespace = DEFAULT_NAMESPACE,
        **options
    ) -> 'PropertyStore':
        """See `set_properties_from_tree()` for namespace rules."""
        ret = cls(**options)
        ret.set_properties_from_tree(node, namespace)
        return ret

    @classmethod
    def from_stores(
        cls, *stores: 'PropertyStore', **options
    ) -> 'PropertyStore':
        """Inherit all properties of `stores`, in the order given.

        Later stores overwrite earlier ones, unless the NEW store is
        created with `avoid_overwrites=True`.
        """
        ret = cls(**options)
        for i in stores:
            ret.update(i)
        return ret

    # settings
    @property
    def resolution_policy(self) -> ResolutionPolicy:
        return self.__resolver.policy

    @resolution_policy.setter
    def resolution_policy(self, value: ResolutionPolicy) -> None:
        self.__resolver.policy = value

    @property
    def resolves_macros(self) -> bool:
        return self.__resolver.policy is not ResolutionPolicy.NONE

    @property
    def macro_pattern(self) -> Pattern[str]:
        return self.__resolver.pattern

    @macro_pattern.setter
    def macro_pattern(self, value: str | Pattern[str]) -> None:
        self.__resolver.pattern = value

    @property
    def backward_passes(self) -> int:
        return self.__passes

    @backward_passes.setter
    def backward_passes(self, value: int) -> None:
        if value is None or value < 1:
            raise ValueError('backward_passes should be at least 1')
        self.__passes = value

    # Mapping
    def __getitem__(self, namespace: Namespace) -> Mapping[str, str]:
        if namespace not in self.__data:
            raise KeyError(namespace)
        return MappingProxyType(self.get_properties(namespace))

    def __contains__(self, namespace: object) -> bool:
        return namespace in self.__data

    def __iter__(self) -> Iterator[Namespace]:
        return iter(self.namespaces())

    def __len__(self) -> int:
        return len(self.__data)

    def __str__(self) -> str:
        ret = ''
        for ns in self.namespaces():
            label = '' if ns == DEFAULT_NAMESPACE else ns.id
            for k, v in self.get_properties(ns).items():
                ret += f'({label}): {k} - {v}\n'
        return ret

    def __repr__(self) -> str:
        return '<PropertyStore { .namespaces = %d, .policy = %s }>' % (
            len(self), self.resolution_policy)

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Namespace ids to properties, sorted, for dumping."""
        return {ns.id: self.get_properties(ns) for ns in self.namespaces()}

    # writing
    def set_property(
        self,
        key: PropertyKey,
        value: str,
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> None:
        _check_namespace(namespace)
        key = property_key(key)
        if value is None:
            raise ValueError('value may not be None')
        if not isinstance(value, str):
            raise ValueError(
                f'value of "{key}" should be str, got {type(value).__name__}')

        section = self.__data.get(namespace)
        if self.avoid_overwrites and section is not None and key in section:
            return
        section = self.__data.setdefault(namespace, {})
        if not self.resolves_macros:
            section[key] = value
            return
        section[key] = self.__resolver.resolve(
            self.__data, namespace, value).value
        self.__backward_resolve()

    def set_properties(
        self,
        properties: Mapping[PropertyKey, str],
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> None:
        _check_namespace(namespace)
        if properties is None:
            raise ValueError('properties may not be None')
        for k, v in properties.items():
            self.set_property(k, v, namespace)

    def set_properties_from_tree(
        self,
        node: PropertyNode,
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> None:
        """Add the `property` entries of the `properties` child of `node`.

        The namespace of an entry is, from weakest to strongest:
        1. `namespace` given here;
        2. `namespace` attribute of the `properties` block;
        3. `namespace` attribute of the `property` entry itself.
        """
        _check_namespace(namespace)
        if node is None:
            raise ValueError('node may not be None')
        block = node.find(PropsTag.PROPERTIES)
        if block is None:
            return
        block_ns = block.get(PropsTag.NAMESPACE)
        if block_ns is not None:
            namespace = Namespace(block_ns)
        for entry in block.findall(PropsTag.PROPERTY):
            name = entry.get(PropsTag.NAME)
            if name is None:
                raise ValueError(
                    f'Missing property attribute: {PropsTag.NAME}')
            entry_ns = entry.get(PropsTag.NAMESPACE)
            self.set_property(
                name,
                (entry.text or '').strip(),
                namespace if entry_ns is None else Namespace(entry_ns))

    def update(self, other: 'PropertyStore') -> None:
        """Copy over every namespace of `other`, through `set_property()`."""
        if other is None:
            raise ValueError('store may not be None')
        for ns in other.namespaces():
            self.set_properties(other.get_properties(ns), ns)

    def __backward_resolve(self) -> None:
        changed = False
        for _ in range(self.__passes):
            changed = False
            for ns in sorted(self.__data):
                section = self.__data[ns]
                for k in sorted(section):
                    result = self.__resolver.resolve(
                        self.__data, ns, section[k])
                    if result.found_replacement:
                        changed = changed or result.value != section[k]
                        section[k] = result.value
            if not changed:
                return
        if self.__passes > 1:
            warn(f'Values still changed after {self.__passes} passes of '
                 'backward resolution. Check for circular references.')

    # reading
    def namespaces(self) -> list[Namespace]:
        return sorted(self.__data)

    def contains_namespace(self, namespace: Namespace) -> bool:
        _check_namespace(namespace)
        return namespace in self.__data

    def get_properties(
        self, namespace: Namespace = DEFAULT_NAMESPACE
    ) -> dict[str, str]:
        """A sorted copy of one namespace. Empty if it isn't used."""
        _check_namespace(namespace)
        section = self.__data.get(namespace, {})
        return {k: section[k] for k in sorted(section)}

    def contains_property(
        self, key: PropertyKey, namespace: Namespace = DEFAULT_NAMESPACE
    ) -> bool:
        _check_namespace(namespace)
        key = property_key(key)
        return key in self.__data.get(namespace, {})

    def contains_non_empty_property(
        self, key: PropertyKey, namespace: Namespace = DEFAULT_NAMESPACE
    ) -> bool:
        return self.get_string(key, '', namespace).strip() != ''

    def get_property(
        self, key: PropertyKey, namespace: Namespace = DEFAULT_NAMESPACE
    ) -> str | None:
        _check_namespace(namespace)
        key = property_key(key)
        return self.__data.get(namespace, {}).get(key)

    # the typed getters never fail on bad data, they fall back on default.
    def get_string(
        self,
        key: PropertyKey,
        default: str | None = None,
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> str | None:
        value = self.get_property(key, namespace)
        return default if value is None else value

    def get_int(
        self,
        key: PropertyKey,
        default: int = 0,
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> int:
        """Only an optional sign and digits parse, so `' 5 '` or `1_000`
        give `default`."""
        try:
            return to_int(self.get_property(key, namespace))
        except (TypeError, ValueError):
            return default

    def get_float(
        self,
        key: PropertyKey,
        default: float = 0.0,
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> float:
        try:
            return float(self.get_property(key, namespace))
        except (TypeError, ValueError):
            return default

    def get_bool(
        self,
        key: PropertyKey,
        default: bool = False,
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> bool:
        """`1`, `yes`, `true` (by the first letter) are truthy."""
        value = self.get_property(key, namespace)
        if value is None or not value.strip():
            return default
        return value.strip()[0].lower() in ('1', 'y', 't')

    def get_list(
        self,
        key: PropertyKey,
        default: Iterable[str] = (),
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> list[str]:
        value = self.get_property(key, namespace)
        if value is None:
            return list(default)
        return [i.strip() for i in value.split(',') if i.strip()]

    def get_value(
        self,
        key: PropertyKey,
        data_type: DataType,
        namespace: Namespace = DEFAULT_NAMESPACE,
        default=None
    ):
        """Convert a property into `data_type`.

        A missing or ill-formed property gives `default`, or the default
        value of `data_type` if no `default` is passed.
        Types without a conversion raise `NotImplementedError`.
        """
        if data_type is None:
            raise ValueError('data_type may not be None')
        fallback = data_type.default_value if default is None else default
        value = self.get_property(key, namespace)
        if value is None:
            return fallback
        try:
            return to_comparable(value, data_type)
        except ValueError:
            return fallback

    # strict validation
    def validate_property_names(
        self,
        *keys: PropertyKey,
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> None:
        """Raise `MissingPropertyError` on the first key not defined."""
        _check_namespace(namespace)
        for k in keys:
            if not self.contains_property(k, namespace):
                where = ('default namespace' if namespace == DEFAULT_NAMESPACE
                         else f'namespace {namespace}')
                raise MissingPropertyError(
                    f"Missing property key '{property_key(k)}' in {where}")

    def validate_all_property_names(
        self,
        keys: Iterable[PropertyKey] | type[Enum],
        namespace: Namespace = DEFAULT_NAMESPACE
    ) -> None:
        """Like `validate_property_names()`, over an iterable of keys
        or all members of an `Enum` class."""
        if keys is None:
            raise ValueError('keys may not be None')
        if isinstance(keys, str):  # one key, not its characters.
            keys = (keys,)
        self.validate_property_names(*keys, namespace=namespace)

    # diagnostics
    def find_reference_cycles(self) -> list[list[tuple[Namespace, str]]]:
        """Look for circular references among the values still
        containing macros.

        Returns:
            each cycle as a list of `(namespace, key)`, in reference order.
        """
        graph: dict[tuple[Namespace, str], list[tuple[Namespace, str]]] = {}
        for ns in self.namespaces():
            for k, v in self.get_properties(ns).items():
                graph[(ns, k)] = []
                for ref in self.__resolver.references(v):
                    target = self.__resolver.locate(self.__data, ns, ref)
                    if target is not None:
                        graph[(ns, k)].append((target, ref))

        cycles: list[list[tuple[Namespace, str]]] = []
        done: set[tuple[Namespace, str]] = set()
        for start in graph:
            if start in done:
                continue
            # explicit stack of (node, its unvisited edges); `path` mirrors it.
            path = [start]
            on_path = {start}
            stack = [(start, iter(graph[start]))]
            while stack:
                node, edges = stack[-1]
                nxt = next(edges, None)
                if nxt is None:
                    stack.pop()
                    path.pop()
                    on_path.discard(node)
                    done.add(node)
                elif nxt in on_path:
                    cycles.append(path[path.index(nxt):])
                elif nxt not in done:
                    path.append(nxt)
                    on_path.add(nxt)
                    stack.append((nxt, iter(graph.get(nxt, ()))))
        if cycles:
            _logger.debug('%d reference cycle(s) found', len(cycles))
        return cycles

    def token_resolver(
        self, namespace: Namespace = DEFAULT_NAMESPACE, debug: bool = False
    ) -> MappingTokenResolver:
        """Resolve `${key}` tokens against one namespace.
        See `pypropman.tokens`."""
        return MappingTokenResolver(self.get_properties(namespace), debug)

    # tree helpers
    @staticmethod
    def contains_properties_block(node: PropertyNode) -> bool:
        if node is None:
            raise ValueError('node may not be None')
        return node.find(PropsTag.PROPERTIES) is not None

    @staticmethod
    def extract_properties(node: PropertyNode) -> dict[str, str]:
        """Name to value of every entry, ignoring their namespaces."""
        if node is None:
            raise ValueError('node may not be None')
        block = node.find(PropsTag.PROPERTIES)
        if block is None:
            raise ValueError(
                f'node does not contain child: {PropsTag.PROPERTIES}')
        return {
            entry.get(PropsTag.NAME): (entry.text or '').strip()
            for entry in block.findall(PropsTag.PROPERTY)
        }
