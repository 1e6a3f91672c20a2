#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from typing import Any, Iterable, Optional, Protocol, TypeAlias, runtime_checkable

from mimesniff.errors import MalformedRuleError


@runtime_checkable
class SeekableReader(Protocol):
    def seek(self, __offset: int) -> Any: ...
    def read(self, __size: int) -> Optional[bytes]: ...


@dataclass(frozen=True)
class Fixed:
    """值必须恰好出现在 position 处"""
    position: int

    def __post_init__(self):
        if not isinstance(self.position, int) or self.position < 0:
            raise MalformedRuleError(f'invalid fixed offset: {self.position!r}')

    @property
    def start(self) -> int:
        return self.position

    def window(self, value: bytes) -> int:
        return len(value)


@dataclass(frozen=True)
class Range:
    """值可以出现在 [start, end] 之间的任意位置（包含 end）"""
    start: int
    end: int

    def __post_init__(self):
        if not isinstance(self.start, int) or not isinstance(self.end, int):
            raise MalformedRuleError(f'invalid range offset: {self.start!r}..{self.end!r}')
        if self.start < 0 or self.end < self.start:
            raise MalformedRuleError(f'invalid range offset: {self.start}..{self.end}')

    def window(self, value: bytes) -> int:
        return self.end - self.start + len(value)


Offset: TypeAlias = Fixed | Range


@dataclass(frozen=True)
class MagicRule:
    offset: Offset
    value: bytes
    children: tuple['MagicRule', ...] = field(default=())

    def __post_init__(self):
        if not isinstance(self.offset, (Fixed, Range)):
            raise MalformedRuleError(f'invalid offset: {self.offset!r}')
        if not isinstance(self.value, bytes):
            raise MalformedRuleError(f'rule value must be bytes, got {type(self.value).__name__}')
        if not self.value:
            # 空值在任何位置都能匹配，包括流末尾之后
            raise MalformedRuleError(f'empty rule value at {self.offset!r}')
        if not isinstance(self.children, tuple):
            object.__setattr__(self, 'children', tuple(self.children))

    @property
    def fixed(self) -> bool:
        return isinstance(self.offset, Fixed)


class MatchResult(Enum):
    MISSED = 0
    MATCHED = 1
    # 读取失败，按未匹配处理
    FAULT = 2

    def __bool__(self) -> bool:
        return self is MatchResult.MATCHED


def _offset(entry: Any) -> Offset:
    if isinstance(entry, (Fixed, Range)):
        return entry
    if isinstance(entry, bool):
        raise MalformedRuleError(f'invalid offset: {entry!r}')
    if isinstance(entry, int):
        return Fixed(entry)
    if isinstance(entry, range):
        # range 的 stop 不包含在内
        return Range(entry.start, entry.stop - 1)
    if isinstance(entry, tuple) and len(entry) == 2:
        return Range(*entry)
    raise MalformedRuleError(f'invalid offset: {entry!r}')


def _value(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise MalformedRuleError(f'rule value must be bytes or str, got {type(value).__name__}')


def compile_rule(entry: Any) -> MagicRule:
    """把 (offset, value[, children]) 形式的表项转换成 MagicRule"""
    if isinstance(entry, MagicRule):
        return entry
    if not isinstance(entry, (tuple, list)) or len(entry) not in (2, 3):
        raise MalformedRuleError(f'rule must be (offset, value[, children]), got {entry!r}')
    children: Iterable[Any] = entry[2] if len(entry) == 3 and entry[2] is not None else ()
    return MagicRule(_offset(entry[0]), _value(entry[1]), compile_rules(children))


def compile_rules(entries: Iterable[Any]) -> tuple[MagicRule, ...]:
    return tuple(compile_rule(entry) for entry in entries)


def as_reader(data: Any) -> SeekableReader:
    if callable(getattr(data, 'seek', None)) and callable(getattr(data, 'read', None)):
        return data
    if isinstance(data, str):
        return BytesIO(data.encode('utf-8'))
    if isinstance(data, (bytes, bytearray, memoryview)):
        return BytesIO(bytes(data))
    raise TypeError(f'expected bytes, str or a seekable reader, got {type(data).__name__}')

