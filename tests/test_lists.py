import pytest

from gffstruct.aurora import GFFFile
from gffstruct.aurora.lists import decode_list_indices, GFFList
from gffstruct.exceptions import (
    ListIndicesBrokenException,
    ListIndexOutOfRange,
    StructIndexOutOfRange,
)


def test_decode_list_indices():
    lists, translation, empty = decode_list_indices([2, 10, 11, 1, 12, 0])

    assert lists == [(10, 11), (12,)]
    assert translation == [0, None, None, 1, None, None]
    assert [_ for _, index in enumerate(translation) if index is not None] == [0, 3]
    assert empty == {5}


def test_decode_list_indices_empty_area():
    lists, translation, empty = decode_list_indices([])

    assert lists == []
    assert translation == []
    assert empty == frozenset()


def test_decode_list_indices_broken():
    with pytest.raises(ListIndicesBrokenException):
        decode_list_indices([5, 1])

    with pytest.raises(ListIndicesBrokenException):
        decode_list_indices([1, 7, 3, 8, 9])


def test_list_field(builder):
    top = builder.add_struct()
    children = [builder.add_struct(struct_id=_) for _ in range(3)]
    for child in children:
        builder.add_field(child, 'Value', 4, child * 10)
    builder.add_list(top, 'Items', children)
    builder.add_list(top, 'Reversed', children[::-1])
    builder.add_list(top, 'Nothing', [])

    gff = GFFFile(builder.build(), expected_tag=b'UTC ')

    assert gff.list_count == 2

    items = gff.top_level.get_list('Items')

    assert isinstance(items, GFFList)
    assert len(items) == 3
    assert items.indices == (1, 2, 3)
    assert [_.id for _ in items] == [0, 1, 2]
    assert [_.get_uint('Value') for _ in items] == [10, 20, 30]
    assert items[-1].index == 3
    assert [_.index for _ in items[1:]] == [2, 3]

    reversed_items = gff.top_level.get_list('Reversed')

    # the structs are shared, not copied
    assert reversed_items[0] is items[2]

    assert len(gff.top_level.get_list('Nothing')) == 0


def test_list_offset_not_a_list(builder):
    top = builder.add_struct()
    child = builder.add_struct()
    builder.add_list(top, 'Items', [child, child])
    # points into the middle of the run
    builder.add_field(top, 'Broken', 15, 4)
    builder.add_field(top, 'Unaligned', 15, 2)
    builder.add_field(top, 'Beyond', 15, 400)

    gff = GFFFile(builder.build(), expected_tag='UTC')

    assert len(gff.top_level.get_list('Items')) == 2

    for label in ('Broken', 'Unaligned', 'Beyond'):
        with pytest.raises(ListIndexOutOfRange):
            gff.top_level.get_list(label)


def test_list_references_missing_struct(builder):
    top = builder.add_struct()
    builder.add_list(top, 'Items', [0, 42])

    gff = GFFFile(builder.build(), expected_tag='UTC')
    items = gff.top_level.get_list('Items')

    assert items[0] is gff.top_level

    with pytest.raises(StructIndexOutOfRange):
        items[1]


def test_broken_list_indices_abort_load(builder):
    top = builder.add_struct()
    builder.add_field(top, 'Value', 4, 1)
    builder.list_words = [3, 0]

    with pytest.raises(ListIndicesBrokenException):
        GFFFile(builder.build(), expected_tag='UTC')
