import io
import threading

import pytest

from mimesniff.errors import CyclicHierarchyError, MalformedRuleError
from mimesniff.registry import Registry, TypeRecord, path_extension

PNG_HEAD = bytes([0x89, 0x50, 0x4E, 0x47])


def make_registry():
    return Registry([
        ('text/plain', ['txt'], []),
        ('application/xml', ['xml'], ['text/plain'], (0, b'<?xml')),
        ('image/svg+xml', ['svg'], ['application/xml'], ((0, 256), b'<svg')),
        ('image/png', ['png'], [], (0, PNG_HEAD)),
    ])


def test_png_scenario():
    registry = make_registry()
    assert registry.classify_by_content(io.BytesIO(PNG_HEAD + b'\r\n\x1a\n')) == 'image/png'
    assert registry.classify_by_content(PNG_HEAD) == 'image/png'
    assert registry.classify_by_extension('photo.PNG') == 'image/png'


def test_extension_lookup_forms():
    registry = make_registry()
    for ext in ('png', '.png', 'PNG', '.PnG'):
        assert registry.classify_by_extension(ext) == 'image/png'
    assert registry.index_of('.SVG') == 'image/svg+xml'
    assert registry.classify_by_extension('jpg') is None
    assert registry.classify_by_extension('') is None
    assert registry.classify_by_extension('.') is None
    assert registry.index_of('photo.png') is None


def test_classify_by_path():
    registry = make_registry()
    assert registry.classify_by_path('/tmp/some.dir/drawing.Svg') == 'image/svg+xml'
    assert registry.classify_by_path('C:\\Users\\me\\notes.TXT') == 'text/plain'
    assert registry.classify_by_path('README') is None
    assert registry.classify_by_path('archive.') is None
    assert registry.classify_by_path('some.dir/README') is None
    assert path_extension('a.tar.GZ') == 'gz'


def test_later_extension_registration_wins():
    registry = make_registry()
    registry.add('application/x-other-png', ['PNG'])
    assert registry.classify_by_extension('png') == 'application/x-other-png'


def test_reregistration_overwrites_record():
    registry = make_registry()
    registry.add('image/png', ['apng'], ['image/x-raster'])
    record = registry.lookup('image/png')
    assert record == TypeRecord('image/png', ('apng',), ('image/x-raster',))
    assert registry.classify_by_extension('apng') == 'image/png'
    # extensions are derived from the current records only
    assert registry.classify_by_extension('png') is None
    assert registry.parents_of('image/png') == ['image/x-raster']
    # magic rules are kept, not overwritten
    assert len([t for t, _ in registry.candidates() if t == 'image/png']) == 1
    assert registry.classify_by_content(PNG_HEAD) == 'image/png'


def test_reregistration_keeps_newer_extension_owner():
    registry = Registry()
    registry.add('a/a', ['x'])
    registry.add('b/b', ['x'])
    registry.add('a/a', ['x', 'y'])
    assert registry.classify_by_extension('x') == 'a/a'
    assert registry.types() == ['b/b', 'a/a']


def test_magic_rules_accumulate_and_prepend():
    registry = Registry()
    registry.add('application/zip', ['zip'], [], (0, b'PK\x03\x04'))
    registry.add('application/epub+zip', ['epub'], ['application/zip'],
                 (0, b'PK\x03\x04', [(30, b'mimetypeapplication/epub+zip')]))
    assert [t for t, _ in registry.candidates()] == ['application/epub+zip', 'application/zip']

    epub = b'PK\x03\x04' + b'\x00' * 26 + b'mimetypeapplication/epub+zip'
    assert registry.classify_by_content(epub) == 'application/epub+zip'
    assert registry.classify_by_content(b'PK\x03\x04' + b'\x00' * 60) == 'application/zip'

    registry.register_rules('application/x-late', [(0, b'PK')])
    assert registry.classify_by_content(epub) == 'application/x-late'
    # rules without a record do not create one
    assert 'application/x-late' not in registry


def test_type_without_magic_has_no_candidate():
    registry = Registry()
    registry.add('text/plain', ['txt'])
    assert registry.candidates() == ()
    assert registry.classify_by_content(b'hello') is None


def test_content_miss():
    registry = make_registry()
    assert registry.classify_by_content(b'') is None
    assert registry.classify_by_content(b'GIF89a') is None


def test_content_rejects_unknown_input():
    with pytest.raises(TypeError):
        make_registry().classify_by_content(12)


def test_closed_stream_is_a_miss():
    stream = io.BytesIO(PNG_HEAD)
    stream.close()
    assert make_registry().classify_by_content(stream) is None


def test_is_descendant():
    registry = make_registry()
    assert registry.is_descendant('image/svg+xml', 'image/svg+xml')
    assert registry.is_descendant('image/svg+xml', 'application/xml')
    assert registry.is_descendant('image/svg+xml', 'text/plain')
    assert not registry.is_descendant('text/plain', 'image/svg+xml')
    assert not registry.is_descendant('image/png', 'text/plain')
    assert registry.is_descendant('unknown/type', 'unknown/type')
    assert not registry.is_descendant('unknown/type', 'text/plain')


def test_multiple_and_unresolved_parents():
    registry = Registry()
    registry.add('text/plain')
    registry.add('application/x-both', [], ['application/x-missing', 'text/plain'])
    assert registry.is_descendant('application/x-both', 'text/plain')
    assert registry.is_descendant('application/x-both', 'application/x-missing')
    assert not registry.is_descendant('application/x-both', 'image/png')
    assert registry.ancestors('application/x-both') == ['application/x-missing', 'text/plain']


def test_ancestors_breadth_first():
    registry = make_registry()
    assert registry.ancestors('image/svg+xml') == ['application/xml', 'text/plain']
    assert registry.ancestors('text/plain') == []
    assert registry.ancestors('nothing/here') == []


def test_diamond_hierarchy():
    registry = Registry()
    registry.add('a/root')
    registry.add('a/left', [], ['a/root'])
    registry.add('a/right', [], ['a/root'])
    registry.add('a/leaf', [], ['a/left', 'a/right', 'a/left'])
    assert registry.parents_of('a/leaf') == ['a/left', 'a/right']
    assert registry.ancestors('a/leaf') == ['a/left', 'a/right', 'a/root']
    assert registry.is_descendant('a/leaf', 'a/root')


def test_cycles_are_rejected():
    registry = make_registry()
    with pytest.raises(CyclicHierarchyError):
        registry.add('text/plain', ['txt'], ['image/svg+xml'])
    with pytest.raises(CyclicHierarchyError):
        registry.add('a/self', [], ['a/self'])
    # nothing was published
    assert registry.parents_of('text/plain') == []
    assert 'a/self' not in registry


def test_cycle_through_late_parent():
    registry = Registry()
    registry.add('a/first', [], ['a/second'])
    with pytest.raises(CyclicHierarchyError) as info:
        registry.add('a/second', [], ['a/first'])
    assert info.value.type == 'a/second'
    assert info.value.parent == 'a/first'
    assert 'a/second' not in registry


def test_batch_update_is_atomic():
    registry = make_registry()
    before = registry.candidates()
    with pytest.raises(MalformedRuleError):
        registry.update([
            ('image/gif', ['gif'], [], (0, b'GIF87a')),
            ('image/broken', ['brk'], [], (-5, b'x')),
        ])
    assert 'image/gif' not in registry
    assert registry.candidates() is before

    with pytest.raises(CyclicHierarchyError):
        registry.update([
            ('x/one', ['one'], ['x/two']),
            ('x/two', ['two'], ['x/one']),
        ])
    assert registry.classify_by_extension('one') is None


def test_string_sequences_are_rejected():
    with pytest.raises(MalformedRuleError):
        Registry().add('text/plain', 'txt')


def test_lookup_and_accessors():
    registry = make_registry()
    assert registry.lookup('application/xml').extensions == ('xml',)
    assert registry.lookup('nothing/here') is None
    assert registry.extensions_of('nothing/here') == []
    assert len(registry) == 4
    assert registry.types()[0] == 'text/plain'
    assert registry.version
    assert repr(registry) == 'Registry(4 types, 3 magic entries)'


def test_concurrent_readers_see_whole_registrations():
    registry = make_registry()
    errors = []
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            for t, _ in registry.candidates():
                if registry.lookup(t) is None and t.startswith('x/'):
                    errors.append(t)

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    try:
        for i in range(200):
            registry.add(f'x/type{i}', [f'ext{i}'], ['text/plain'], (0, f'MAGIC{i}'.encode()))
    finally:
        stop.set()
        for t in threads:
            t.join()
    assert errors == []
    assert registry.classify_by_extension('ext199') == 'x/type199'
    assert registry.classify_by_content(b'MAGIC7') == 'x/type7'


def test_register_record_and_rules_separately():
    registry = Registry()
    registry.register(TypeRecord('image/gif', ['gif', 'GIF'], ['image/x-raster', 'image/x-raster']))
    registry.register_rules('image/gif', [(0, b'GIF87a'), (0, b'GIF89a')])
    assert registry.lookup('image/gif').parents == ('image/x-raster',)
    assert registry.extensions_of('image/gif') == ['gif', 'GIF']
    assert registry.classify_by_extension('GIF') == 'image/gif'
    assert registry.classify_by_content(b'GIF89a\x00') == 'image/gif'


def test_short_definitions():
    registry = Registry([
        ('text/plain', ['txt']),
        ('application/octet-stream',),
        ['image/gif', ['gif'], [], (0, b'GIF87a')],
    ])
    assert registry.classify_by_extension('txt') == 'text/plain'
    assert registry.parents_of('text/plain') == []
    assert 'application/octet-stream' in registry
    assert registry.classify_by_content(b'GIF87a') == 'image/gif'
    for bad in ((), 'text/plain', None):
        with pytest.raises(MalformedRuleError):
            Registry([bad])
