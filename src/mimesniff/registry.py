#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
import threading
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from mimesniff.errors import CyclicHierarchyError, MalformedRuleError
from mimesniff.matcher import magic_match
from mimesniff.rules import MagicRule, as_reader, compile_rules
from mimesniff.util import frozendict, logger

VERSION = '0.1.2'


@dataclass(frozen=True)
class TypeRecord:
    type: str
    extensions: tuple[str, ...] = ()
    parents: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'extensions', tuple(self.extensions))
        # parents 是集合语义，去重但保留顺序
        object.__setattr__(self, 'parents', tuple(dict.fromkeys(self.parents)))


def normalize_extension(ext: str) -> str:
    ext = ext.lower()
    if ext.startswith('.'):
        ext = ext[1:]
    return ext


def path_extension(name: str) -> Optional[str]:
    """取文件名最后一个点之后的部分，不访问文件系统"""
    base = name.replace('\\', '/').rsplit('/', 1)[-1]
    if '.' not in base:
        return None
    ext = base.rsplit('.', 1)[1]
    return ext.lower() or None


def descends(records: Mapping[str, TypeRecord], candidate: str, ancestor: str) -> bool:
    """candidate 与 ancestor 相同，或沿任意一条 parent 路径能到达 ancestor"""
    stack = [candidate]
    seen: set[str] = set()
    while stack:
        current = stack.pop()
        if current == ancestor:
            return True
        if current in seen:
            continue
        seen.add(current)
        record = records.get(current)
        if record is not None:
            stack.extend(reversed(record.parents))
    return False


@dataclass(frozen=True)
class _Snapshot:
    records: frozendict[str, TypeRecord] = field(default_factory=frozendict)
    extensions: frozendict[str, str] = field(default_factory=frozendict)
    magic: tuple[tuple[str, tuple[MagicRule, ...]], ...] = ()


class _Draft:
    """写操作在副本上进行，完成后一次性发布"""
    def __init__(self, snapshot: _Snapshot) -> None:
        self.records: dict[str, TypeRecord] = dict(snapshot.records)
        self.extensions: dict[str, str] = dict(snapshot.extensions)
        self.magic: list[tuple[str, tuple[MagicRule, ...]]] = list(snapshot.magic)
        self._reindex = False

    def register(self, record: TypeRecord) -> None:
        for parent in record.parents:
            if descends(self.records, parent, record.type):
                logger.warning('rejected %s: parent %s is already its descendant', record.type, parent)
                raise CyclicHierarchyError(record.type, parent)
        if record.type in self.records:
            # 重新注册的类型排到最后，这样它的扩展名覆盖先前的注册
            del self.records[record.type]
            self._reindex = True
        self.records[record.type] = record
        if not self._reindex:
            self._index(record)

    def register_rules(self, type: str, rules: Sequence[MagicRule]) -> None:
        if rules:
            self.magic.insert(0, (type, tuple(rules)))

    def _index(self, record: TypeRecord) -> None:
        for ext in record.extensions:
            ext = normalize_extension(ext)
            if ext:
                self.extensions[ext] = record.type

    def freeze(self) -> _Snapshot:
        if self._reindex:
            self.extensions = {}
            for record in self.records.values():
                self._index(record)
        return _Snapshot(frozendict(self.records), frozendict(self.extensions), tuple(self.magic))


class Registry:
    """类型表、扩展名索引和 magic 规则的集合

    读操作每次只取一次当前快照；写操作互斥，并在完成后整体替换快照。
    """
    version = VERSION

    def __init__(self, definitions: Optional[Iterable[Sequence[Any]]] = None) -> None:
        self._lock = threading.Lock()
        self._snapshot = _Snapshot()
        if definitions is not None:
            self.update(definitions)

    @contextmanager
    def _write(self) -> Iterator[_Draft]:
        with self._lock:
            draft = _Draft(self._snapshot)
            yield draft
            self._snapshot = draft.freeze()

    # registration

    def register(self, record: TypeRecord) -> None:
        with self._write() as draft:
            draft.register(record)
        logger.debug('registered %s', record.type)

    def register_rules(self, type: str, rules: Iterable[Any]) -> None:
        compiled = compile_rules(rules)
        with self._write() as draft:
            draft.register_rules(str(type), compiled)

    def add(self, type: Any, extensions: Iterable[str] = (), parents: Iterable[Any] = (), *magics: Any) -> TypeRecord:
        """注册一个类型：类型记录、扩展名和 magic 规则在同一次写入中完成"""
        record, rules = _definition(type, extensions, parents, magics)
        with self._write() as draft:
            draft.register(record)
            draft.register_rules(record.type, rules)
        logger.debug('registered %s with %d magic rules', record.type, len(rules))
        return record

    def update(self, definitions: Iterable[Sequence[Any]]) -> int:
        """批量注册 (type, extensions, parents, *magics)，全部成功后才发布"""
        compiled = [_unpack(d) for d in definitions]
        with self._write() as draft:
            for record, rules in compiled:
                draft.register(record)
                draft.register_rules(record.type, rules)
        logger.debug('registered %d types', len(compiled))
        return len(compiled)

    # type registry

    def lookup(self, type: Any) -> Optional[TypeRecord]:
        return self._snapshot.records.get(str(type))

    def types(self) -> list[str]:
        return list(self._snapshot.records)

    def extensions_of(self, type: Any) -> list[str]:
        record = self.lookup(type)
        return list(record.extensions) if record is not None else []

    def parents_of(self, type: Any) -> list[str]:
        record = self.lookup(type)
        return list(record.parents) if record is not None else []

    def __contains__(self, type: object) -> bool:
        return str(type) in self._snapshot.records

    def __len__(self) -> int:
        return len(self._snapshot.records)

    # extension index

    def index_of(self, extension: str) -> Optional[str]:
        return self._snapshot.extensions.get(normalize_extension(extension))

    # magic rule store

    def candidates(self) -> tuple[tuple[str, tuple[MagicRule, ...]], ...]:
        return self._snapshot.magic

    # hierarchy

    def is_descendant(self, candidate: Any, ancestor: Any) -> bool:
        return descends(self._snapshot.records, str(candidate), str(ancestor))

    def ancestors(self, type: Any) -> list[str]:
        records = self._snapshot.records
        start = str(type)
        found: dict[str, None] = {}
        queue = deque([start])
        while queue:
            record = records.get(queue.popleft())
            if record is None:
                continue
            for parent in record.parents:
                if parent != start and parent not in found:
                    found[parent] = None
                    queue.append(parent)
        return list(found)

    # classification

    def classify_by_extension(self, ext: str) -> Optional[str]:
        extensions = self._snapshot.extensions
        found = extensions.get(normalize_extension(ext))
        if found is None:
            # 也接受 photo.PNG 这样的文件名
            found = self._by_path(extensions, ext)
        return found

    def classify_by_path(self, name: str) -> Optional[str]:
        return self._by_path(self._snapshot.extensions, name)

    @staticmethod
    def _by_path(extensions: Mapping[str, str], name: str) -> Optional[str]:
        ext = path_extension(name)
        return extensions.get(ext) if ext is not None else None

    def classify_by_content(self, data: Any) -> Optional[str]:
        reader = as_reader(data)
        for type, rules in self._snapshot.magic:
            if magic_match(reader, rules):
                return type
        return None

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({len(self)} types, {len(self._snapshot.magic)} magic entries)'


def _definition(type: Any, extensions: Iterable[str], parents: Iterable[Any], magics: Iterable[Any]) -> tuple[TypeRecord, tuple[MagicRule, ...]]:
    if isinstance(extensions, str) or isinstance(parents, str):
        raise MalformedRuleError(f'extensions and parents of {type} must be sequences, not strings')
    try:
        rules = compile_rules(magics)
    except MalformedRuleError as e:
        logger.warning('rejected magic rules of %s: %s', type, e)
        raise
    return TypeRecord(str(type), tuple(extensions), tuple(str(p) for p in parents)), rules


def _unpack(definition: Sequence[Any]) -> tuple[TypeRecord, tuple[MagicRule, ...]]:
    """(type[, extensions[, parents[, *magics]]])，缺省的部分为空"""
    if isinstance(definition, str) or not isinstance(definition, Sequence) or not definition:
        raise MalformedRuleError(f'definition must be (type, extensions, parents, *magics), got {definition!r}')
    type, *rest = definition
    extensions = rest[0] if len(rest) > 0 else ()
    parents = rest[1] if len(rest) > 1 else ()
    return _definition(type, extensions, parents, rest[2:])
