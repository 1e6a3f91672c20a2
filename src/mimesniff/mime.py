#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

import threading
from typing import Any, Iterable, Optional

from mimesniff import tables
from mimesniff.registry import Registry, TypeRecord
from mimesniff.util import logger


def category_of(type: Any) -> str:
    """'image/png' -> 'image'"""
    return str(type).split('/', 1)[0]


_default_registry: Optional[Registry] = None
_default_lock = threading.Lock()


def default_registry() -> Registry:
    """进程内共享的类型表，第一次使用时从内置数据加载"""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                registry = Registry()
                tables.load_tables(registry)
                _default_registry = registry
    return _default_registry


class MimeType:
    """按类型字符串表示的 MIME 类型

    与字符串比较时按字符串相等判断，所以 MimeType('text/html') == 'text/html'。
    """
    __slots__ = ('type', 'mediatype', 'subtype', '_registry')

    def __init__(self, type: Any, registry: Optional[Registry] = None) -> None:
        self.type: str = str(type)
        parts = self.type.split('/', 1)
        self.mediatype: str = parts[0]
        self.subtype: str = parts[1] if len(parts) > 1 else ''
        self._registry = registry

    @property
    def registry(self) -> Registry:
        return _resolve(self._registry)

    def is_text(self) -> bool:
        return self.is_descendant_of('text/plain')

    def is_image(self) -> bool:
        return self.mediatype == 'image'

    def is_audio(self) -> bool:
        return self.mediatype == 'audio'

    def is_video(self) -> bool:
        return self.mediatype == 'video'

    def is_descendant_of(self, parent: Any) -> bool:
        return self.registry.is_descendant(self.type, str(parent))

    child_of = is_descendant_of

    def extensions(self) -> list[str]:
        return self.registry.extensions_of(self.type)

    def ancestors(self) -> list['MimeType']:
        return [MimeType(t, self._registry) for t in self.registry.ancestors(self.type)]

    def __str__(self) -> str:
        return self.type

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self.type!r})'

    def __eq__(self, other: object) -> bool:
        return self.type == str(other)

    def __hash__(self) -> int:
        return hash(self.type)


def _resolve(registry: Optional[Registry]) -> Registry:
    return registry if registry is not None else default_registry()


def _wrap(type: Optional[str], registry: Optional[Registry]) -> Optional[MimeType]:
    return MimeType(type, registry) if type is not None else None


def add(type: Any, extensions: Iterable[str] = (), parents: Iterable[Any] = (), *magics: Any, registry: Optional[Registry] = None) -> TypeRecord:
    """注册自定义类型，未指定 registry 时注册到默认类型表"""
    return _resolve(registry).add(type, extensions, parents, *magics)


def by_extension(ext: str, registry: Optional[Registry] = None) -> Optional[MimeType]:
    return _wrap(_resolve(registry).classify_by_extension(ext), registry)


def by_path(name: str, registry: Optional[Registry] = None) -> Optional[MimeType]:
    return _wrap(_resolve(registry).classify_by_path(name), registry)


def by_magic(data: Any, registry: Optional[Registry] = None) -> Optional[MimeType]:
    """按内容的 magic 规则逐个匹配，比按扩展名查找慢得多"""
    found = _resolve(registry).classify_by_content(data)
    if found is None:
        logger.debug('no magic rule matched')
    return _wrap(found, registry)
