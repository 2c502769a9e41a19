import pytest

from gffstruct.core import Chunk
from gffstruct.fields import StructField, StringField, ArrayField
from gffstruct.meta import Meta
from gffstruct.properties import Dependency
from gffstruct.streams import Stream
from gffstruct.exceptions import TruncatedException, MalformedPayloadException


def test_chunk():
    """Check that building a Chunk from fields and unpacking behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I')
        b = StringField(0x10)
        c = StructField('I')

    dummy = Dummy(b'\xad\x0b\x00\x00' + b'A' * 0x10 + b'\xef\xbe\xad\xde')

    assert dummy.a.value == 0xbad
    assert dummy.a.offset == 0x00
    assert dummy.a.father == dummy

    assert dummy.b.value == b'A' * 0x10
    assert dummy.b.offset == 0x04

    assert dummy.c.value == 0xdeadbeef
    assert dummy.c.offset == 0x14

    assert dummy.size == 0x18


def test_meta():
    class Dummy(Chunk):
        field = StructField('i')

    class Dummy2(Chunk):
        field2 = StructField('i')

    d = Dummy()
    d2 = Dummy2()

    assert isinstance(d._meta, Meta)
    assert d._meta.fields == ['field']
    assert isinstance(d.field, StructField)
    assert d2._meta.fields == ['field2']


def test_fields_are_per_instance():
    class Dummy(Chunk):
        field = StructField('B')

    first = Dummy(b'\x01')
    second = Dummy(b'\x02')

    assert first.field is not second.field
    assert first.field.value == 1
    assert second.field.value == 2


def test_inheritance():
    '''subclasses inherit fields'''
    class Father(Chunk):
        field_a = StringField(0x10)
        field_b = StructField("I")

    class Son(Father):
        field_c = StringField(0x08)

    son = Son(b'A' * 16 + b'\x01\x02\x03\x04' + b'ABCDEFGH')

    assert [_ for _, __ in son.get_fields()] == [
        'field_a', 'field_b', 'field_c',
    ]
    assert son.field_b.value == 0x04030201
    assert son.field_c.value == b'ABCDEFGH'


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'))

    example = Example(b'\x05\x00\x00\x00kebab')

    assert example.data.value == b'kebab'
    assert example.size == 9


def test_sub_chunk():
    class Point(Chunk):
        x = StructField('H')
        y = StructField('H')

    class Segment(Chunk):
        start = Point()
        end   = Point()

    segment = Segment(b'\x01\x00\x02\x00\x03\x00\x04\x00')

    assert (segment.start.x.value, segment.start.y.value) == (1, 2)
    assert (segment.end.x.value, segment.end.y.value) == (3, 4)
    assert segment.end.offset == 4


def test_array_of_chunks_w_dependency():
    class Entry(Chunk):
        length = StructField('B')
        text   = StringField(Dependency('.length'))

    class Table(Chunk):
        count   = StructField('B')
        entries = ArrayField(Entry(), n=Dependency('.count'))

    table = Table(b'\x02\x03abc\x01z')

    assert len(table.entries) == 2
    assert [_.text.value for _ in table.entries] == [b'abc', b'z']


def test_failure_chain():
    """The exception keeps its type and records the path to the failing field."""
    class Inner(Chunk):
        length = StructField('I')
        data   = StringField(Dependency('.length'))

    class Outer(Chunk):
        magic = StringField(4)
        inner = Inner()

    with pytest.raises(TruncatedException) as excinfo:
        Outer(b'MAGI' + b'\x10\x00\x00\x00' + b'short')

    assert excinfo.value.chain == ['data', 'inner']


def test_validate():
    class Checked(Chunk):
        number = StructField('I')

        def validate(self):
            if self.number.value != 4:
                raise MalformedPayloadException('value must be 4')

    assert Checked(b'\x04\x00\x00\x00').number.value == 4

    with pytest.raises(MalformedPayloadException):
        Checked(b'\x05\x00\x00\x00')


def test_validate_field_before_the_rest():
    '''a field validator runs before the following fields are read'''
    class Magic(Chunk):
        magic  = StringField(4)
        length = StructField('I')

        def validate_magic(self):
            if self.magic.value != b'GOOD':
                raise MalformedPayloadException('bad magic')

    with pytest.raises(MalformedPayloadException):
        Magic(b'EVIL\x01')

    with pytest.raises(TruncatedException):
        Magic(b'GOOD\x01')


def test_field_redefinition():
    class Father(Chunk):
        a = StructField('B')

    with pytest.raises(AttributeError):
        class Son(Father):
            a = StructField('H')


def test_unpack_from_stream_position():
    class Dummy(Chunk):
        a = StructField('H')

    stream = Stream(b'\x00\x00\x34\x12')
    stream.seek(2)

    dummy = Dummy()
    dummy.unpack(stream)

    assert dummy.a.value == 0x1234
    assert dummy.offset == 2
    assert dummy.a.offset == 2
