#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

from mimesniff.errors import CyclicHierarchyError, MalformedRuleError, MimeSniffError
from mimesniff.matcher import magic_match
from mimesniff.mime import MimeType, add, by_extension, by_magic, by_path, category_of, default_registry
from mimesniff.registry import VERSION, Registry, TypeRecord
from mimesniff.rules import Fixed, MagicRule, MatchResult, Range, as_reader, compile_rules
from mimesniff.util import configure_logging, logger

__version__ = VERSION

__all__ = [
    'VERSION',
    'CyclicHierarchyError',
    'Fixed',
    'MagicRule',
    'MalformedRuleError',
    'MatchResult',
    'MimeSniffError',
    'MimeType',
    'Range',
    'Registry',
    'TypeRecord',
    'add',
    'as_reader',
    'by_extension',
    'by_magic',
    'by_path',
    'category_of',
    'compile_rules',
    'configure_logging',
    'default_registry',
    'logger',
    'magic_match',
]
