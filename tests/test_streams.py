import io

import pytest

from gffstruct.exceptions import TruncatedException
from gffstruct.streams import Stream


def test_bytes_stream():
    stream = Stream(b'\x01\x02\x03\x04\x05')

    assert stream.read(1) == b'\x01'
    assert stream.read_exact(2) == b'\x02\x03'
    assert stream.read_all() == b'\x04\x05'
    assert stream.tell() == 5
    assert stream.position() == 5
    assert stream.eos()


def test_file_stream(tmp_path):
    path = tmp_path / 'data.bin'
    path.write_bytes(b'\x01\x02\x03\x04\x05')

    for source in (str(path), path):
        with Stream(source) as stream:
            assert stream.read_exact(2) == b'\x01\x02'
            assert stream.size() == 5
            assert stream.tell() == 2


def test_fileobj_stream():
    obj = io.BytesIO(b'abcdef')

    stream = Stream(obj)
    stream.seek(3)

    assert stream.read_exact(3) == b'def'


def test_not_a_stream():
    with pytest.raises(ValueError):
        Stream(42)


def test_read_exact_truncated():
    stream = Stream(b'\x01\x02')

    with pytest.raises(TruncatedException):
        stream.read_exact(4)


def test_seek_wrong_offset():
    stream = Stream(b'\x01\x02')

    with pytest.raises(ValueError):
        stream.seek(-1)

    with pytest.raises(ValueError):
        stream.seek('1')


def test_preserve_position():
    stream = Stream(b'0123456789')
    stream.seek(2)

    with stream.preserve_position():
        stream.seek(7)
        assert stream.read_exact(2) == b'78'

    assert stream.tell() == 2


def test_preserve_position_on_error():
    stream = Stream(b'0123456789')
    stream.seek(4)

    with pytest.raises(TruncatedException):
        with stream.preserve_position():
            stream.seek(8)
            stream.read_exact(5)

    assert stream.tell() == 4


def test_size_keeps_position():
    stream = Stream(b'0123456789')
    stream.seek(3)

    assert stream.size() == 10
    assert stream.tell() == 3
    assert not stream.eos()
