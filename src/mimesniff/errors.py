#! /usr/bin/env python3
# -*- encoding:utf-8 -*-


class MimeSniffError(Exception):
    """注册类型或规则时出现的错误"""


class CyclicHierarchyError(MimeSniffError, ValueError):
    def __init__(self, type: str, parent: str) -> None:
        super().__init__(f'registering {type!r} with parent {parent!r} would create a cycle')
        self.type = type
        self.parent = parent


class MalformedRuleError(MimeSniffError, ValueError):
    pass
