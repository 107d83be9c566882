# -*- encoding: utf-8 -*-
# @File   : tokens.py
# @Time   : 2024/10/14 19:27:36
# @Author : Kariko Lin

"""`${name}` token replacement while reading a text stream.

Unlike `##macro##`s in a store, tokens are replaced on the fly and the
replacement itself is never scanned again.

    ```python
    reader = TokenReplacingReader(fp, store.token_resolver(Namespace('db')))
    rendered = reader.read()
    ```
"""

import logging
from io import StringIO, TextIOBase
from itertools import islice
from typing import Callable, Iterator, Mapping

_logger = logging.getLogger(__name__)

TokenResolver = Callable[[str], str | None]


class MappingTokenResolver:
    """Looks tokens up in a mapping. Unknown tokens are errors."""
    def __init__(self, replacements: Mapping[str, str], debug: bool = False):
        if replacements is None:
            raise ValueError('replacements may not be None')
        self._replacements = replacements
        self.debug = debug

    def __call__(self, name: str) -> str:
        if name is None:
            raise ValueError('token name may not be None')
        if name not in self._replacements:
            raise KeyError(f'Unknown token: {name}')
        if self.debug:
            _logger.info("Replacing token '%s' with '%s'",
                         name, self._replacements[name])
        return self._replacements[name]


class TokenReplacingReader(TextIOBase):
    """Read-only text stream over `source` with `${name}` replaced by
    `resolver(name)`. A resolver returning `None` keeps the token as is."""
    def __init__(self, source: TextIOBase, resolver: TokenResolver) -> None:
        if source is None:
            raise ValueError('source may not be None')
        if resolver is None:
            raise ValueError('resolver may not be None')
        self._source = source
        self._resolver = resolver
        self._chars = self.__replace()

    def __replace(self) -> Iterator[str]:
        pending = ''
        while True:
            ch, pending = pending or self._source.read(1), ''
            if not ch:
                return
            if ch != '$':
                yield ch
                continue
            ch = self._source.read(1)
            if ch != '{':
                yield '$'
                pending = ch
                continue
            name = ''
            while (ch := self._source.read(1)) and ch != '}':
                name += ch
            if not ch:  # EOF before `}`
                yield from '${' + name
                return
            value = self._resolver(name)
            yield from ('${%s}' % name if value is None else value)

    def readable(self) -> bool:
        return True

    def read(self, size: int | None = -1) -> str:
        if size is None or size < 0:
            return ''.join(self._chars)
        return ''.join(islice(self._chars, size))

    def readline(self, size: int | None = -1) -> str:
        ret = ''
        if size == 0:
            return ret
        for ch in self._chars:
            ret += ch
            if ch == '\n' or (size is not None and 0 <= size <= len(ret)):
                break
        return ret

    def close(self) -> None:
        self._source.close()
        super().close()


def replace_tokens(text: str, resolver: TokenResolver) -> str:
    return TokenReplacingReader(StringIO(text), resolver).read()
