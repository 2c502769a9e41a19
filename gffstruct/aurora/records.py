'''
# GFF records

Fixed-size records of the format (header and field table entries)
and the payloads of the extended fields stored in the field data area.

A field record carries its value inline in a 32-bit data word unless the
type is "extended": in that case the word is a byte offset into the field
data area, read with a scoped seek that puts the cursor back afterwards.
'''
from bitstring import Bits

from .. import fields
from ..core import Chunk
from ..properties import Dependency
from ..streams import Stream
from ..exceptions import (
    InvalidTagException,
    UnsupportedVersionException,
    TruncatedException,
    TruncatedBlobException,
    MalformedStrRefException,
)
from .enum import GFFType, GFFVersion


HEADER_SIZE       = 56
FIELD_ENTRY_SIZE  = 12
LABEL_SIZE        = 16

TEXT_ENCODING = 'latin-1'


def normalize_tag(tag):
    '''Turn the tag given by the caller into the 4 raw bytes found in the file.

    It accepts bytes, str (padded with spaces, like b'UTC ') and the
    big-endian integer form; None means "any tag".'''
    if tag is None:
        return None

    if isinstance(tag, int):
        return tag.to_bytes(4, 'big')

    if isinstance(tag, str):
        tag = tag.encode('ascii')

    if not isinstance(tag, bytes) or len(tag) > 4:
        raise ValueError(f'{tag!r} is not a valid GFF tag')

    return tag.ljust(4, b' ')


class GFFHeader(Chunk):
    '''The preamble of the file: identification plus six (offset, count)
    couples locating the tables. The counts of the field data, field indices
    and list indices areas are in bytes.'''
    tag                  = fields.StringField(4)
    version              = fields.StringField(4)
    struct_offset        = fields.StructField('I')
    struct_count         = fields.StructField('I')
    field_offset         = fields.StructField('I')
    field_count          = fields.StructField('I')
    label_offset         = fields.StructField('I')
    label_count          = fields.StructField('I')
    field_data_offset    = fields.StructField('I')
    field_data_count     = fields.StructField('I')
    field_indices_offset = fields.StructField('I')
    field_indices_count  = fields.StructField('I')
    list_indices_offset  = fields.StructField('I')
    list_indices_count   = fields.StructField('I')

    def __init__(self, filepath=None, expected_tag=None, **kwargs):
        self.expected_tag = normalize_tag(expected_tag)
        super().__init__(filepath, **kwargs)

    def read(self, stream):
        stream.seek(0)
        self.unpack(stream)

        return self

    def validate_tag(self):
        if self.expected_tag is not None and self.tag.value != self.expected_tag:
            raise InvalidTagException(
                f'tag {self.tag.value!r} doesn\'t match the expected {self.expected_tag!r}')

    def validate_version(self):
        try:
            GFFVersion(self.version.value)
        except ValueError:
            raise UnsupportedVersionException(f'unsupported file version {self.version.value!r}')

    @property
    def gff_version(self) -> GFFVersion:
        return GFFVersion(self.version.value)


class FieldEntry(Chunk):
    gff_type    = fields.StructField('I')
    label_index = fields.StructField('I')
    data        = fields.StructField('I')


class ExoStringData(Chunk):
    length = fields.StructField('I')
    text   = fields.StringField(Dependency('.length'))


class ResRefData(Chunk):
    length = fields.StructField('B')
    text   = fields.StringField(Dependency('.length'))


class VoidData(Chunk):
    length = fields.StructField('I')
    data   = fields.StringField(Dependency('.length'))


class LocStringBlock(Chunk):
    '''The size is only used to bound the read handed to the decoder.'''
    length = fields.StructField('I')
    body   = fields.StringField(Dependency('.length'))


class VectorData(Chunk):
    x = fields.StructField('f')
    y = fields.StructField('f')
    z = fields.StructField('f')

    def as_tuple(self):
        return (self.x.value, self.y.value, self.z.value)


class OrientationData(VectorData):
    '''A quaternion: the vector part followed by w.'''
    w = fields.StructField('f')

    def as_tuple(self):
        return super().as_tuple() + (self.w.value,)


class StrRefData(Chunk):
    length     = fields.StructField('I')
    string_ref = fields.StructField('I')

    def validate(self):
        if self.length.value != 4:
            raise MalformedStrRefException(f'strref with size {self.length.value} instead of 4')


def _data_bits(data: int) -> Bits:
    return Bits(uint=data, length=32)


def _read_payload(field, payload):
    '''Unpack the payload of an extended field without moving the cursor.'''
    gff = field.gff
    stream = gff.stream

    with gff.lock, stream.preserve_position():
        stream.seek(gff.header.field_data_offset.value + field.data)
        payload.unpack(stream)

    return payload


def _read_char(field):
    return _data_bits(field.data)[24:].int


def _read_byte(field):
    return _data_bits(field.data)[24:].uint


def _read_uint16(field):
    return _data_bits(field.data)[16:].uint


def _read_sint16(field):
    return _data_bits(field.data)[16:].int


def _read_uint32(field):
    return _data_bits(field.data).uint


def _read_sint32(field):
    return _data_bits(field.data).int


def _read_float(field):
    return _data_bits(field.data).float


def _read_uint64(field):
    return _read_payload(field, fields.StructField('Q')).value


def _read_sint64(field):
    return _read_payload(field, fields.StructField('q')).value


def _read_double(field):
    return _read_payload(field, fields.StructField('d')).value


def _read_exostring(field):
    return _read_payload(field, ExoStringData()).text.value.decode(TEXT_ENCODING)


def _read_resref(field):
    return _read_payload(field, ResRefData()).text.value.decode(TEXT_ENCODING)


def _read_locstring(field):
    block = _read_payload(field, LocStringBlock())

    return field.gff.locstring_decoder.decode(Stream(block.body.value))


def _read_void(field):
    try:
        return _read_payload(field, VoidData()).data.value
    except TruncatedException as e:
        raise TruncatedBlobException(f'blob of field \'{field.label}\' is truncated: {e}', chain=e.chain)


def _read_index(field):
    return field.data


def _read_orientation(field):
    return _read_payload(field, OrientationData()).as_tuple()


def _read_vector(field):
    return _read_payload(field, VectorData()).as_tuple()


def _read_strref(field):
    return _read_payload(field, StrRefData()).string_ref.value


DECODERS = {
    GFFType.BYTE:        _read_byte,
    GFFType.CHAR:        _read_char,
    GFFType.UINT16:      _read_uint16,
    GFFType.SINT16:      _read_sint16,
    GFFType.UINT32:      _read_uint32,
    GFFType.SINT32:      _read_sint32,
    GFFType.UINT64:      _read_uint64,
    GFFType.SINT64:      _read_sint64,
    GFFType.FLOAT:       _read_float,
    GFFType.DOUBLE:      _read_double,
    GFFType.EXOSTRING:   _read_exostring,
    GFFType.RESREF:      _read_resref,
    GFFType.LOCSTRING:   _read_locstring,
    GFFType.VOID:        _read_void,
    GFFType.STRUCT:      _read_index,
    GFFType.LIST:        _read_index,
    GFFType.ORIENTATION: _read_orientation,
    GFFType.VECTOR:      _read_vector,
    GFFType.STRREF:      _read_strref,
}


class GFFField(object):
    '''A single typed datum of a struct.

    The decoder is picked once from the type; the value is decoded the first
    time it's asked and kept afterwards. For struct and list fields the value
    is the raw index/byte offset, the owning file does the dereferencing.'''

    def __init__(self, gff_type: GFFType, label: str, data: int, gff=None):
        self.type = gff_type
        self.label = label
        self.data = data
        self.gff = gff
        self._decoder = DECODERS[gff_type]
        self._decoded = False
        self._value = None

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.label!r}, {self.type.name}, 0x{self.data:08x})>'

    @property
    def category(self):
        return self.type.category

    @property
    def extended(self) -> bool:
        return self.type.is_extended

    @property
    def value(self):
        if not self._decoded:
            self._value = self._decoder(self)
            self._decoded = True

        return self._value
