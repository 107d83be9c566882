# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/10/14 10:31:08
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath
from typing import Generic, TypeVar

from .namespace import DEFAULT_NAMESPACE, Namespace
from .store import PropertyStore, create_property_stores
from .tree import PropertyNode

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = 'utf-8'
    ) -> None:
        self._fn = fspath(filename)
        self._codec = encoding

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn


class TreeFileHandler(FileHandler[PropertyStore]):
    """Files holding a property document tree, see `pypropman.tree`."""
    @abstractmethod
    def _load_root(self) -> PropertyNode:
        raise NotImplementedError

    def read(
        self, namespace: Namespace = DEFAULT_NAMESPACE, **options
    ) -> PropertyStore:
        """Read the `properties` block under the document root."""
        return PropertyStore.from_tree(self._load_root(), namespace, **options)

    def read_sets(self, **options) -> dict[str, PropertyStore]:
        """Read the named `propertySets` of the document."""
        return create_property_stores(self._load_root(), **options)
