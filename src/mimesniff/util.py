#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

import logging
import sys
from typing import Mapping, Optional, TypeVar

_KT = TypeVar('_KT')
_VT = TypeVar('_VT')


class frozendict(dict[_KT, _VT], Mapping[_KT, _VT]):
    _hash_cached = None
    _has_inited = False
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._has_inited = True
    def __setitem__(self, __key: _KT, __value: _VT) -> None:
        if self._has_inited:
            raise NotImplementedError('immutable!')
        return super().__setitem__(__key, __value)
    def __delitem__(self, __key: _KT) -> None:
        if self._has_inited:
            raise NotImplementedError('immutable!')
        return super().__delitem__(__key)
    def setdefault(self, *args, **kwargs):
        if self._has_inited:
            raise NotImplementedError('immutable!')
        return super().setdefault(*args, **kwargs)
    def update(self, *args, **kwargs):
        if self._has_inited:
            raise NotImplementedError('immutable!')
        return super().update(*args, **kwargs)
    def clear(self) -> None:
        if self._has_inited:
            raise NotImplementedError('immutable!')
        return super().clear()
    def popitem(self) -> tuple[_KT, _VT]:
        if self._has_inited:
            raise NotImplementedError('immutable!')
        return super().popitem()
    def pop(self, *args, **kwargs):
        if self._has_inited:
            raise NotImplementedError('immutable!')
        return super().pop(*args, **kwargs)
    def __ior__(self, other):
        raise NotImplementedError('immutable!')
    def __hash__(self) -> int:
        if self._hash_cached is None:
            self._hash_cached = hash(tuple((k, v) for k, v in self.items()))
        return self._hash_cached


logger = logging.Logger('mimesniff', 'INFO')
def __init():
    fmt = logging.Formatter('[%(levelname)s] %(filename)s:%(lineno)d: %(message)s', None, '%')
    if not logger.hasHandlers():
        logger.addHandler(logging.StreamHandler(sys.stdout))
    h = None
    for h in logger.handlers:
        h.setFormatter(fmt)
__init()
del __init

logger_levels = ('DEBUG', 'INFO', 'WARN', 'WARNING', 'ERROR', 'CRITICAL', 'FATAL')

def configure_logging(level: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """设置日志等级，未知的等级名会被忽略"""
    if isinstance(level, str) and level.upper() in logger_levels:
        logger.setLevel(level.upper())
    elif verbose:
        logger.setLevel('DEBUG')
    return logger
