#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

# 内置类型表。magic 规则后注册的先匹配，所以通用类型写在前面，更具体的写在后面。
# signs: (offset, value) 或 (offset, value, children)，offset 为 int 或 (start, end)

from typing import Any

from mimesniff.registry import Registry
from mimesniff.util import logger

_ZIP = b'PK\x03\x04'
_OLE = b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1'
_EBML = b'\x1aE\xdf\xa3'

mime_types: list[dict[str, Any]] = [
    # text
    {'mime': 'text/plain', 'exts': ['txt', 'text', 'conf', 'def', 'list', 'log', 'in', 'ini']},
    {'mime': 'text/css', 'exts': ['css'], 'parents': ['text/plain']},
    {'mime': 'text/csv', 'exts': ['csv'], 'parents': ['text/plain']},
    {'mime': 'text/tab-separated-values', 'exts': ['tsv'], 'parents': ['text/plain']},
    {'mime': 'text/markdown', 'exts': ['md', 'markdown', 'mkd'], 'parents': ['text/plain']},
    {'mime': 'text/x-c', 'exts': ['c', 'h'], 'parents': ['text/plain']},
    {'mime': 'text/x-c++src', 'exts': ['cpp', 'cxx', 'cc', 'hpp'], 'parents': ['text/x-c']},
    {'mime': 'text/x-java', 'exts': ['java'], 'parents': ['text/plain']},
    {'mime': 'text/x-ass', 'exts': ['ass', 'ssa'], 'parents': ['text/plain'],
     'signs': [(0, b'[Script Info]'), (0, b'\xef\xbb\xbf[Script Info]')]},
    {'mime': 'application/x-subrip', 'exts': ['srt'], 'parents': ['text/plain']},
    {'mime': 'text/vtt', 'exts': ['vtt'], 'parents': ['text/plain'],
     'signs': [(0, b'WEBVTT'), (0, b'\xef\xbb\xbfWEBVTT')]},
    {'mime': 'application/javascript', 'exts': ['js', 'mjs'], 'parents': ['text/plain']},
    {'mime': 'application/json', 'exts': ['json'], 'parents': ['application/javascript']},
    {'mime': 'application/rtf', 'exts': ['rtf'], 'parents': ['text/plain'],
     'signs': [(0, b'{\\rtf')]},
    {'mime': 'application/x-shellscript', 'exts': ['sh'], 'parents': ['text/plain'],
     'signs': [(0, b'#!/bin/sh'), (0, b'#! /bin/sh'), (0, b'#!/bin/bash'), (0, b'#! /bin/bash'),
               (0, b'#!/usr/bin/env sh'), (0, b'#!/usr/bin/env bash')]},
    {'mime': 'text/x-python', 'exts': ['py', 'pyw'], 'parents': ['text/plain'],
     'signs': [(0, b'#!/usr/bin/python'), (0, b'#! /usr/bin/python'), (0, b'#!/usr/bin/env python'),
               (0, b'#! /usr/bin/env python')]},
    {'mime': 'application/xml', 'exts': ['xml', 'xsl', 'xsd'], 'parents': ['text/plain'],
     'signs': [(0, b'<?xml'), (0, b'\xef\xbb\xbf<?xml')]},
    {'mime': 'text/html', 'exts': ['html', 'htm', 'shtml'], 'parents': ['text/plain'],
     'signs': [((0, 256), b'<!DOCTYPE html'), ((0, 256), b'<!doctype html'), ((0, 256), b'<!DOCTYPE HTML'),
               ((0, 256), b'<html'), ((0, 256), b'<HTML')]},
    {'mime': 'application/xhtml+xml', 'exts': ['xhtml', 'xht'], 'parents': ['application/xml'],
     'signs': [(0, b'<?xml', [((0, 256), b'<html xmlns="http://www.w3.org/1999/xhtml"')])]},
    {'mime': 'application/rss+xml', 'exts': ['rss'], 'parents': ['application/xml'],
     'signs': [(0, b'<?xml', [((0, 256), b'<rss')])]},
    {'mime': 'application/atom+xml', 'exts': ['atom'], 'parents': ['application/xml'],
     'signs': [(0, b'<?xml', [((0, 256), b'<feed')])]},
    {'mime': 'image/svg+xml', 'exts': ['svg'], 'parents': ['application/xml'],
     'signs': [((0, 256), b'<svg'), ((0, 256), b'<!DOCTYPE svg')]},

    # images
    {'mime': 'image/png', 'exts': ['png'], 'signs': [(0, b'\x89PNG\r\n\x1a\n')]},
    {'mime': 'image/gif', 'exts': ['gif'], 'signs': [(0, b'GIF87a'), (0, b'GIF89a')]},
    {'mime': 'image/jpeg', 'exts': ['jpg', 'jpeg', 'jpe', 'jfif'], 'signs': [(0, b'\xff\xd8\xff')]},
    {'mime': 'image/bmp', 'exts': ['bmp', 'dib'],
     'signs': [(0, b'BM', [(14, b'\x0c'), (14, b'@'), (14, b'(')])]},
    {'mime': 'image/tiff', 'exts': ['tif', 'tiff'], 'signs': [(0, b'MM\x00*'), (0, b'II*\x00')]},
    {'mime': 'image/x-icon', 'exts': ['ico'], 'signs': [(0, b'\x00\x00\x01\x00')]},
    {'mime': 'image/vnd.adobe.photoshop', 'exts': ['psd'], 'signs': [(0, b'8BPS\x00\x01')]},
    {'mime': 'image/x-portable-graymap', 'exts': ['pgm'], 'signs': [(0, b'P2'), (0, b'P5')]},
    {'mime': 'image/x-rgb', 'exts': ['rgb'], 'signs': [(0, b'\x01\xda\x01\x01\x00\x03')]},
    {'mime': 'image/webp', 'exts': ['webp'], 'signs': [(0, b'RIFF', [(8, b'WEBP')])]},
    {'mime': 'image/jp2', 'exts': ['jp2', 'jpg2'], 'signs': [(0, b'\x00\x00\x00\x0cjP  \r\n\x87\n')]},
    {'mime': 'image/avif', 'exts': ['avif'], 'signs': [(4, b'ftyp', [(8, b'avif'), (8, b'avis')])]},
    {'mime': 'image/heif', 'exts': ['heif', 'heic'],
     'signs': [(4, b'ftyp', [(8, b'heic'), (8, b'heix'), (8, b'mif1'), (8, b'msf1')])]},

    # audio
    {'mime': 'audio/basic', 'exts': ['au', 'snd'], 'signs': [(0, b'.snd')]},
    {'mime': 'audio/midi', 'exts': ['mid', 'midi', 'kar'], 'signs': [(0, b'MThd')]},
    {'mime': 'audio/mpeg', 'exts': ['mp3', 'mpga', 'mp2'],
     'signs': [(0, b'ID3'), (0, b'\xff\xfb'), (0, b'\xff\xf3'), (0, b'\xff\xf2')]},
    {'mime': 'audio/x-aiff', 'exts': ['aif', 'aiff', 'aifc'],
     'signs': [(0, b'FORM', [(8, b'AIFF'), (8, b'AIFC')])]},
    {'mime': 'audio/flac', 'exts': ['flac'], 'signs': [(0, b'fLaC')]},
    {'mime': 'audio/x-wav', 'exts': ['wav'], 'signs': [(0, b'RIFF', [(8, b'WAVE')])]},
    {'mime': 'audio/x-pn-realaudio', 'exts': ['ram', 'rm'], 'signs': [(0, b'.RMF')]},
    {'mime': 'audio/x-realaudio', 'exts': ['ra'], 'signs': [(0, b'.RMF\x00\x00\x00\x12\x00'), (0, b'.ra\xfd\x00')]},
    {'mime': 'audio/mp4', 'exts': ['m4a'], 'signs': [(4, b'ftypM4A')]},
    {'mime': 'audio/amr', 'exts': ['amr'], 'signs': [(0, b'#!AMR')]},

    # containers
    {'mime': 'application/ogg', 'exts': ['ogx'], 'signs': [(0, b'OggS')]},
    {'mime': 'audio/ogg', 'exts': ['oga', 'ogg', 'spx'], 'parents': ['application/ogg'],
     'signs': [(0, b'OggS', [(28, b'\x01vorbis'), (28, b'Speex  '), (28, b'OpusHead')])]},
    {'mime': 'audio/x-flac+ogg', 'parents': ['audio/ogg'],
     'signs': [(0, b'OggS', [(28, b'\x7fFLAC')])]},
    {'mime': 'video/ogg', 'exts': ['ogv'], 'parents': ['application/ogg'],
     'signs': [(0, b'OggS', [(28, b'\x80theora')])]},
    {'mime': 'application/vnd.ms-asf', 'exts': ['asf', 'asx'],
     'signs': [(0, b'0&\xb2u\x8ef\xcf\x11\xa6\xd9\x00\xaa\x00b\xcel')]},
    {'mime': 'audio/x-ms-wma', 'exts': ['wma'], 'parents': ['application/vnd.ms-asf']},
    {'mime': 'video/x-ms-wmv', 'exts': ['wmv'], 'parents': ['application/vnd.ms-asf']},

    # video
    {'mime': 'video/mpeg', 'exts': ['mpeg', 'mpg', 'mpe', 'vob'],
     'signs': [(0, b'\x00\x00\x01\xba'), (0, b'\x00\x00\x01\xb3')]},
    {'mime': 'video/mp2t', 'exts': ['ts', 'm2ts', 'mts'], 'signs': [(0, b'G', [(188, b'G', [(376, b'G')])])]},
    {'mime': 'video/x-matroska', 'exts': ['mkv', 'mk3d', 'mka', 'mks'],
     'signs': [(0, _EBML, [((5, 65), b'matroska')])]},
    {'mime': 'video/webm', 'exts': ['webm'], 'parents': ['video/x-matroska'],
     'signs': [(0, _EBML, [((5, 65), b'webm')])]},
    {'mime': 'video/x-flv', 'exts': ['flv'], 'signs': [(0, b'FLV\x01')]},
    {'mime': 'video/x-msvideo', 'exts': ['avi'], 'signs': [(0, b'RIFF', [(8, b'AVI ')])]},
    {'mime': 'video/quicktime', 'exts': ['mov', 'qt'],
     'signs': [(4, b'ftypqt'), (4, b'moov'), (4, b'mdat'), (4, b'wide'), (4, b'free')]},
    {'mime': 'video/mp4', 'exts': ['mp4', 'mp4v', 'mpg4'],
     'signs': [(4, b'ftyp', [(8, b'isom'), (8, b'iso2'), (8, b'mp41'), (8, b'mp42'), (8, b'avc1'), (8, b'dash')])]},
    {'mime': 'video/x-m4v', 'exts': ['m4v'], 'parents': ['video/mp4'], 'signs': [(4, b'ftypM4V')]},
    {'mime': 'video/3gpp', 'exts': ['3gp', '3gpp'], 'signs': [(4, b'ftyp3gp')]},

    # archives
    {'mime': 'application/zip', 'exts': ['zip'], 'signs': [(0, _ZIP), (0, b'PK\x05\x06'), (0, b'PK\x07\x08')]},
    {'mime': 'application/java-archive', 'exts': ['jar'], 'parents': ['application/zip']},
    {'mime': 'application/vnd.android.package-archive', 'exts': ['apk'], 'parents': ['application/java-archive']},
    {'mime': 'application/epub+zip', 'exts': ['epub'], 'parents': ['application/zip'],
     'signs': [(0, _ZIP, [(30, b'mimetypeapplication/epub+zip')])]},
    {'mime': 'application/vnd.oasis.opendocument.text', 'exts': ['odt'], 'parents': ['application/zip'],
     'signs': [(0, _ZIP, [(30, b'mimetypeapplication/vnd.oasis.opendocument.text')])]},
    {'mime': 'application/vnd.oasis.opendocument.spreadsheet', 'exts': ['ods'], 'parents': ['application/zip'],
     'signs': [(0, _ZIP, [(30, b'mimetypeapplication/vnd.oasis.opendocument.spreadsheet')])]},
    {'mime': 'application/vnd.oasis.opendocument.presentation', 'exts': ['odp'], 'parents': ['application/zip'],
     'signs': [(0, _ZIP, [(30, b'mimetypeapplication/vnd.oasis.opendocument.presentation')])]},
    {'mime': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document', 'exts': ['docx'],
     'parents': ['application/zip'], 'signs': [(0, _ZIP, [((30, 2000), b'word/')])]},
    {'mime': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet', 'exts': ['xlsx'],
     'parents': ['application/zip'], 'signs': [(0, _ZIP, [((30, 2000), b'xl/')])]},
    {'mime': 'application/vnd.openxmlformats-officedocument.presentationml.presentation', 'exts': ['pptx'],
     'parents': ['application/zip'], 'signs': [(0, _ZIP, [((30, 2000), b'ppt/')])]},
    {'mime': 'application/gzip', 'exts': ['gz', 'tgz'], 'signs': [(0, b'\x1f\x8b')]},
    {'mime': 'application/x-bzip2', 'exts': ['bz2', 'tbz2'], 'signs': [(0, b'BZh')]},
    {'mime': 'application/x-xz', 'exts': ['xz', 'txz'], 'signs': [(0, b'\xfd7zXZ\x00')]},
    {'mime': 'application/zstd', 'exts': ['zst'], 'signs': [(0, b'(\xb5/\xfd')]},
    {'mime': 'application/x-lzh-compressed', 'exts': ['lzh', 'lha'], 'signs': [(2, b'-lh')]},
    {'mime': 'application/x-7z-compressed', 'exts': ['7z'], 'signs': [(0, b"7z\xbc\xaf'\x1c")]},
    {'mime': 'application/vnd.rar', 'exts': ['rar'], 'signs': [(0, b'Rar!\x1a\x07')]},
    {'mime': 'application/x-tar', 'exts': ['tar'], 'signs': [(257, b'ustar\x00'), (257, b'ustar  \x00')]},
    {'mime': 'application/x-iso9660-image', 'exts': ['iso'], 'signs': [(32769, b'CD001')]},

    # documents
    {'mime': 'application/pdf', 'exts': ['pdf'], 'signs': [((0, 1024), b'%PDF-')]},
    {'mime': 'application/postscript', 'exts': ['ps', 'eps', 'ai'], 'signs': [(0, b'%!'), (0, b'\x04%!')]},
    {'mime': 'application/x-ole-storage', 'signs': [(0, _OLE)]},
    {'mime': 'application/msword', 'exts': ['doc', 'dot'], 'parents': ['application/x-ole-storage'],
     'signs': [(0, _OLE, [(512, b'\xec\xa5\xc1\x00')]), (0, b'\xdb\xa5-\x00'), (0, b'\rDOC')]},
    {'mime': 'application/vnd.ms-excel', 'exts': ['xls', 'xlt'], 'parents': ['application/x-ole-storage']},
    {'mime': 'application/vnd.ms-powerpoint', 'exts': ['ppt', 'pps'], 'parents': ['application/x-ole-storage']},
    {'mime': 'application/vnd.lotus-1-2-3', 'exts': ['123', 'wk1'], 'signs': [(0, b'\x00\x00\x1a\x00\x05\x10\x04')]},
    {'mime': 'application/mac-binhex40', 'exts': ['hqx'], 'parents': ['text/plain'],
     'signs': [((0, 1024), b'(This file must be converted with BinHex')]},
    {'mime': 'application/x-sqlite3', 'exts': ['sqlite', 'sqlite3', 'db'], 'signs': [(0, b'SQLite format 3\x00')]},

    # fonts
    {'mime': 'font/ttf', 'exts': ['ttf'], 'signs': [(0, b'\x00\x01\x00\x00\x00')]},
    {'mime': 'font/otf', 'exts': ['otf'], 'signs': [(0, b'OTTO')]},
    {'mime': 'font/woff', 'exts': ['woff'], 'signs': [(0, b'wOFF')]},
    {'mime': 'font/woff2', 'exts': ['woff2'], 'signs': [(0, b'wOF2')]},

    # executables
    {'mime': 'application/octet-stream', 'exts': ['bin', 'dat']},
    {'mime': 'application/x-executable', 'parents': ['application/octet-stream'], 'signs': [(0, b'\x7fELF')]},
    {'mime': 'application/x-sharedlib', 'exts': ['so'], 'parents': ['application/x-executable'],
     'signs': [(0, b'\x7fELF', [(16, b'\x03\x00'), (16, b'\x00\x03')])]},
    {'mime': 'application/x-msdownload', 'exts': ['exe', 'dll', 'com', 'cpl'], 'parents': ['application/octet-stream'],
     'signs': [(0, b'MZ')]},
    {'mime': 'application/java-vm', 'exts': ['class'], 'signs': [(0, b'\xca\xfe\xba\xbe')]},
    {'mime': 'application/wasm', 'exts': ['wasm'], 'signs': [(0, b'\x00asm')]},
]


def definitions() -> list[tuple[Any, ...]]:
    """转换成 Registry.update 接受的 (type, extensions, parents, *magics)"""
    return [
        (item['mime'], item.get('exts', []), item.get('parents', []), *item.get('signs', []))
        for item in mime_types
    ]


def load_tables(registry: Registry) -> Registry:
    count = registry.update(definitions())
    logger.debug('loaded %d builtin mime types', count)
    return registry
