# -*- encoding: utf-8 -*-
# @File   : resolver.py
# @Time   : 2024/10/12 22:15:40
# @Author : Kariko Lin

"""Macro (`##name##`) substitution against the data of a property store.

A reference that can't be resolved is kept as it is. Resolution is a
single substitution step: circular references (`a = ##b##`, `b = ##a##`)
are NOT detected here, see `PropertyStore.find_reference_cycles()`.
"""

import logging
from re import Match, Pattern
from re import compile as regex
from typing import Mapping, NamedTuple

from ..namespace import Namespace
from .consts import DEFAULT_MACRO_PATTERN, ResolutionPolicy

_logger = logging.getLogger(__name__)

PropertyData = Mapping[Namespace, Mapping[str, str]]


def compile_macro_pattern(pattern: str | Pattern[str]) -> Pattern[str]:
    if pattern is None:
        raise ValueError('pattern may not be None')
    compiled = regex(pattern) if isinstance(pattern, str) else pattern
    if compiled.groups < 1:
        raise ValueError(
            f'macro pattern "{compiled.pattern}" has no capture group')
    return compiled


# seeds every new store; stores keep their own compiled copy afterwards.
_default_pattern = compile_macro_pattern(DEFAULT_MACRO_PATTERN)


def default_macro_pattern() -> Pattern[str]:
    return _default_pattern


def set_default_macro_pattern(pattern: str | Pattern[str]) -> None:
    """Change the pattern new stores start with.

    Existing stores are not affected.
    """
    global _default_pattern
    _default_pattern = compile_macro_pattern(pattern)


class ResolutionResult(NamedTuple):
    value: str
    # a macro was matched syntactically, resolved or not.
    found_replacement: bool


class MacroResolver:
    def __init__(
        self,
        pattern: str | Pattern[str] | None = None,
        policy: ResolutionPolicy = ResolutionPolicy.ALL_NAMESPACES
    ) -> None:
        self.pattern = default_macro_pattern() if pattern is None else pattern
        self.policy = policy

    @property
    def pattern(self) -> Pattern[str]:
        return self.__pattern

    @pattern.setter
    def pattern(self, value: str | Pattern[str]) -> None:
        self.__pattern = compile_macro_pattern(value)

    @property
    def policy(self) -> ResolutionPolicy:
        return self.__policy

    @policy.setter
    def policy(self, value: ResolutionPolicy) -> None:
        if value is None:
            raise ValueError('resolution policy may not be None')
        self.__policy = ResolutionPolicy(value)

    def references(self, value: str) -> list[str]:
        """Names referenced by `value`, in order of appearance."""
        return [m.group(1) for m in self.__pattern.finditer(value)]

    def locate(
        self, data: PropertyData, namespace: Namespace, key: str
    ) -> Namespace | None:
        """Find the namespace a reference to `key` from `namespace`
        would be resolved in, if any."""
        match self.__policy:
            case ResolutionPolicy.ALL_NAMESPACES:
                # first namespace in id order wins.
                for ns in sorted(data):
                    if key in data[ns]:
                        return ns
            case ResolutionPolicy.WITHIN_NAMESPACE:
                if namespace in data and key in data[namespace]:
                    return namespace
        return None

    def lookup(
        self, data: PropertyData, namespace: Namespace, key: str
    ) -> str | None:
        found = self.locate(data, namespace, key)
        return None if found is None else data[found][key]

    def resolve(
        self, data: PropertyData, namespace: Namespace, value: str
    ) -> ResolutionResult:
        if namespace is None:
            raise ValueError('namespace may not be None')
        if value is None:
            raise ValueError('value may not be None')
        if self.__policy is ResolutionPolicy.NONE:
            return ResolutionResult(value, False)

        hits = 0

        def substitute(m: Match[str]) -> str:
            nonlocal hits
            hits += 1
            replacement = self.lookup(data, namespace, m.group(1))
            if replacement is None:
                return m.group(0)
            _logger.debug('[%s] %s -> %r', namespace, m.group(0), replacement)
            return replacement

        # callable replacement: inserted as is, no `\1` expansion.
        resolved = self.__pattern.sub(substitute, value)
        return ResolutionResult(resolved, hits > 0)
