# -*- encoding: utf-8 -*-
# @File   : ini.py
# @Time   : 2024/10/14 15:02:13
# @Author : Kariko Lin

"""INI files as property stores: each section is a namespace.

    ```ini
    name = demo        ; pairs before any section -> default namespace

    [db]
    host = localhost
    [db:replica]:[db]  ; inherits keys of [db] it doesn't define
    host = replica.##host##
    ```

Section inheritance is only applied while reading. It is not kept,
so `write()` flattens inherited keys into each section.
"""

import logging
from io import StringIO, TextIOBase
from re import compile as regex
from warnings import warn

import chardet

from ..abstract import FileHandler
from ..namespace import DEFAULT_NAMESPACE, Namespace
from ..store import PropertyStore

_logger = logging.getLogger(__name__)

# `[decl]` or `[decl]:[base]`. ':' inside brackets belongs to namespace ids.
_SECTION = regex(r'^\[([^\]]+)\](?:\s*:\s*\[([^\]]+)\])?')


class IniParser(FileHandler[PropertyStore]):
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        super().__init__(filename, encoding)

    @staticmethod
    def readstream(
        buf: TextIOBase, store: PropertyStore | None = None, **options
    ) -> PropertyStore:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`便是。
        """
        if store is None:
            store = PropertyStore(**options)
        this_ns = DEFAULT_NAMESPACE
        inherits: dict[Namespace, Namespace] = {}
        declared: set[Namespace] = {DEFAULT_NAMESPACE}
        while i := buf.readline():
            i = i.strip()
            if (section := _SECTION.match(i)) is not None:
                this_ns = Namespace(section[1].strip())
                declared.add(this_ns)
                # always update inheritance
                if section[2] is not None:
                    inherits[this_ns] = Namespace(section[2].strip())
            elif '=' in i:
                key, val = i.split('=', 1)
                key = key.strip()
                if key and ';' not in key:
                    val = val.split(';')[0].strip()
                    store.set_property(key, val, this_ns)

        done: set[Namespace] = set()
        for child in inherits:
            IniParser.__inherit(store, inherits, declared, child, done)
        return store

    @staticmethod
    def __inherit(
        store: PropertyStore,
        inherits: dict[Namespace, Namespace],
        declared: set[Namespace],
        child: Namespace,
        done: set[Namespace]
    ) -> None:
        if child in done:
            return
        done.add(child)  # also stops [A]:[B], [B]:[A] loops.
        base = inherits.get(child)
        if base is None:
            return
        if base not in declared:
            warn(f'[{child}] inherits "{base}", but it is not found.')
            return
        IniParser.__inherit(store, inherits, declared, base, done)
        for k, v in store.get_properties(base).items():
            if not store.contains_property(k, child):
                store.set_property(k, v, child)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec is None or codec['encoding'] is None \
                or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode('gbk')
        return StringIO(buf)

    def read(self, **options) -> PropertyStore:
        """读取`IniParser`实例指定的文件。`options`交给`PropertyStore`。"""
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp, **options)
        except UnicodeDecodeError:
            return self.readstream(self._decode_file(self._fn), **options)
        except OSError as e:
            _logger.warning('INI file not readable: %s', e)
            raise

    def __output_section(
        self, store: PropertyStore, ns: Namespace, delimiter: str = '='
    ) -> str:
        lines = [] if ns == DEFAULT_NAMESPACE else [f'[{ns}]']
        for k, v in store.get_properties(ns).items():
            lines.append(f'{k}{delimiter}{v}')
        return '\n'.join(lines)

    def write(
        self, store: PropertyStore, *,
        blank_lines: int = 1,
        delimiter: str = '='
    ) -> None:
        """保存到*一个* INI 文件。默认命名空间写在文件头部。"""
        namespaces = store.namespaces()
        if DEFAULT_NAMESPACE in namespaces:  # header goes first.
            namespaces.remove(DEFAULT_NAMESPACE)
            namespaces.insert(0, DEFAULT_NAMESPACE)
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            for ns in namespaces:
                fp.write(self.__output_section(store, ns, delimiter))
                fp.write('\n' * (blank_lines + 1))

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
