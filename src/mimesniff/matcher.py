#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from typing import Sequence

from mimesniff.rules import MagicRule, MatchResult, SeekableReader
from mimesniff.util import logger


def read_at(reader: SeekableReader, offset: int, size: int) -> bytes:
    """从 offset 处读取至多 size 字节，流不够长时返回的内容会更短

    流抛出的任何异常都由 check_rule 当作 FAULT 处理
    """
    reader.seek(offset)
    chunks = []
    remain = size
    while remain > 0:
        chunk = reader.read(remain)
        if not chunk:
            break
        chunks.append(chunk)
        remain -= len(chunk)
    return b''.join(chunks)


def check_rule(reader: SeekableReader, rule: MagicRule) -> MatchResult:
    """只检查规则自身的 offset/value，不看子规则"""
    try:
        data = read_at(reader, rule.offset.start, rule.offset.window(rule.value))
    except Exception as e: # pylint: disable=broad-exception-caught
        logger.debug('magic rule %r at %r failed: %s', rule.value, rule.offset, e)
        return MatchResult.FAULT
    found = data == rule.value if rule.fixed else rule.value in data
    return MatchResult.MATCHED if found else MatchResult.MISSED


def satisfied(reader: SeekableReader, rule: MagicRule) -> MatchResult:
    result = check_rule(reader, rule)
    if result is not MatchResult.MATCHED or not rule.children:
        return result
    return evaluate(reader, rule.children)


def evaluate(reader: SeekableReader, rules: Sequence[MagicRule]) -> MatchResult:
    """同层规则按顺序求值，遇到第一个满足的规则即返回"""
    result = MatchResult.MISSED
    for rule in rules:
        current = satisfied(reader, rule)
        if current is MatchResult.MATCHED:
            return current
        if current is MatchResult.FAULT:
            result = current
    return result


def magic_match(reader: SeekableReader, rules: Sequence[MagicRule]) -> bool:
    return evaluate(reader, rules) is MatchResult.MATCHED
