'''
# GFF format

Generic File Format of BioWare's Aurora engine: the container used for
templates, dialogues, saved state, basically every piece of structured
content. A file is a forest of structs (labelled typed fields), lists of
struct references and out-of-line data

  .-----------------------.
  | header                |  tag, version, six (offset, count) couples
  | struct table          |  12 bytes each: id, field index/offset, field count
  | field table           |  12 bytes each: type, label index, data
  | label table           |  16 bytes each, ASCII
  | field data            |  payloads of the extended fields
  | field indices         |  u32 field indices of the multi-field structs
  | list indices          |  run-length encoded struct indices
  '-----------------------'

The header, the struct table and the list indices are read at load time, the
fields of a struct are decoded the first time the struct is accessed.

The read cursor is shared by every struct of a file: all the operations
moving it hold the lock of the file.
'''
import logging
import threading
from typing import Dict, List, Optional

from .. import fields
from ..streams import Stream
from ..exceptions import (
    UnpackException,
    FieldIndexOutOfRange,
    FieldIndicesOutOfRange,
    LabelIndexOutOfRange,
    ListIndexOutOfRange,
    StructIndexOutOfRange,
    UnknownFieldTypeException,
    TypeMismatchException,
    NoSuchFieldException,
)
from .enum import FieldCategory, GFFType, GFFVersion
from .records import (
    GFFField,
    GFFHeader,
    FieldEntry,
    FIELD_ENTRY_SIZE,
    LABEL_SIZE,
    TEXT_ENCODING,
)
from .lists import GFFList, decode_list_indices
from .locstring import LocString, LocStringDecoder
from .resources import ResourceType, ResourceLocator


_UINT64_MASK = (1 << 64) - 1


def _types_of(*categories):
    return frozenset(_ for _ in GFFType if _.category in categories)


INTEGER_TYPES = _types_of(FieldCategory.CHAR, FieldCategory.UINT, FieldCategory.SINT, FieldCategory.STRREF)
CHAR_TYPES    = frozenset({GFFType.CHAR, GFFType.BYTE})
DOUBLE_TYPES  = _types_of(FieldCategory.DOUBLE)
STRING_TYPES  = _types_of(FieldCategory.STRING)
VECTOR_TYPES  = _types_of(FieldCategory.VECTOR, FieldCategory.ORIENTATION)


class GFFStruct(object):
    '''A named-field record.

    The struct starts Unloaded knowing only its identity triplet; the first
    accessor call reads its fields and it stays Loaded afterwards. Other
    structs are only referenced by index into the struct array of the file.

    The value getters return "default" when the label is absent and raise
    TypeMismatchException when the field can't be converted; get_struct()
    and get_list() raise NoSuchFieldException instead of having a default.
    '''

    def __init__(self, gff, index: int, struct_id: int, data_or_index: int, field_count: int):
        self.logger = logging.getLogger(__name__)
        self._gff = gff
        self.index = index
        self.id = struct_id
        self.field_count = field_count
        self._data_or_index = data_or_index
        self._fields: Optional[Dict[str, GFFField]] = None

    def __repr__(self):
        state = 'loaded' if self.is_loaded else 'unloaded'
        return f'<{self.__class__.__name__}(index={self.index}, id=0x{self.id:x}, {self.field_count} fields, {state})>'

    def __len__(self):
        return len(self._get_fields())

    def __iter__(self):
        return iter(list(self._get_fields()))

    def __contains__(self, label):
        return label in self._get_fields()

    @property
    def is_loaded(self) -> bool:
        return self._fields is not None

    def load(self):
        '''Read the fields from the stream; it does nothing once loaded.'''
        if self._fields is not None:
            return self

        with self._gff.lock:
            if self._fields is not None:
                return self

            self.logger.debug('loading struct %d (%d fields)', self.index, self.field_count)

            result = {}
            try:
                for field in self._gff.read_struct_fields(self._data_or_index, self.field_count):
                    if field.label in result:
                        self.logger.warning('struct %d has the label \'%s\' more than once', self.index, field.label)
                    result[field.label] = field
            except UnpackException as e:
                e.chain.append(f'struct[{self.index}]')
                raise

            self._fields = result

        return self

    def _get_fields(self) -> Dict[str, GFFField]:
        return self.load()._fields

    def _find(self, label: str, accepted, what: str) -> Optional[GFFField]:
        field = self._get_fields().get(label)
        if field is None:
            return None

        if field.type not in accepted:
            raise TypeMismatchException(
                f'field \'{label}\' of struct {self.index} is {field.type.name}, not a {what}')

        return field

    def _find_navigation(self, label: str, gff_type: GFFType) -> GFFField:
        field = self._get_fields().get(label)
        if field is None:
            raise NoSuchFieldException(f'struct {self.index} has no field \'{label}\'')

        if field.type != gff_type:
            raise TypeMismatchException(
                f'field \'{label}\' of struct {self.index} is {field.type.name}, not a {gff_type.name}')

        return field

    def has_field(self, label: str) -> bool:
        return label in self

    def get_field_names(self) -> List[str]:
        return list(self._get_fields())

    def get_type(self, label: str) -> GFFType:
        field = self._get_fields().get(label)
        if field is None:
            raise NoSuchFieldException(f'struct {self.index} has no field \'{label}\'')

        return field.type

    def get_char(self, label: str, default=None):
        field = self._find(label, CHAR_TYPES, 'char')
        if field is None:
            return default

        return chr(field.value & 0xff)

    def get_uint(self, label: str, default=None):
        field = self._find(label, INTEGER_TYPES, 'unsigned integer')
        if field is None:
            return default

        return field.value & _UINT64_MASK

    def get_sint(self, label: str, default=None):
        field = self._find(label, INTEGER_TYPES, 'signed integer')
        if field is None:
            return default

        value = field.value & _UINT64_MASK
        if value & (1 << 63):
            value -= 1 << 64

        return value

    def get_bool(self, label: str, default=None):
        value = self.get_uint(label)
        if value is None:
            return default

        return value != 0

    def get_double(self, label: str, default=None):
        field = self._find(label, DOUBLE_TYPES, 'floating point')
        if field is None:
            return default

        return float(field.value)

    def get_string(self, label: str, default=None):
        '''Numbers and vectors are formatted as text rather than refused.'''
        field = self._find(label, STRING_TYPES | INTEGER_TYPES | DOUBLE_TYPES | VECTOR_TYPES, 'string')
        if field is None:
            return default

        value = field.value
        if field.type in STRING_TYPES:
            return value
        if field.type in INTEGER_TYPES:
            return str(value)
        if field.type in DOUBLE_TYPES:
            return f'{value:f}'

        return '/'.join(f'{_:f}' for _ in value)

    def get_loc_string(self, label: str, default=None) -> LocString:
        field = self._find(label, {GFFType.LOCSTRING}, 'localized string')
        if field is None:
            return default

        return field.value

    def get_data(self, label: str, default=None) -> bytes:
        field = self._find(label, {GFFType.VOID}, 'binary blob')
        if field is None:
            return default

        return field.value

    def get_vector(self, label: str, default=None):
        field = self._find(label, {GFFType.VECTOR}, 'vector')
        if field is None:
            return default

        return field.value

    def get_orientation(self, label: str, default=None):
        field = self._find(label, {GFFType.ORIENTATION}, 'orientation')
        if field is None:
            return default

        return field.value

    def get_struct(self, label: str) -> 'GFFStruct':
        field = self._find_navigation(label, GFFType.STRUCT)

        return self._gff.get_struct(field.value)

    def get_list(self, label: str) -> GFFList:
        field = self._find_navigation(label, GFFType.LIST)

        return self._gff.get_list(field.value)


class GFFFile(object):
    '''A GFF file loaded from a path, raw bytes, a binary file object or a Stream.

    The stream is owned by the instance: if the loading fails it's closed and
    the exception propagates, no partially loaded instance is left around.
    '''

    def __init__(self, filepath, expected_tag=None, locstring_decoder=None):
        self.logger = logging.getLogger(__name__)
        self.lock = threading.RLock()
        self.locstring_decoder = locstring_decoder if locstring_decoder is not None else LocStringDecoder()
        self._structs: List[GFFStruct] = []
        self._lists = []
        self._list_translation = []
        self._empty_lists = frozenset()
        self._labels: Dict[int, str] = {}

        self.stream = filepath if isinstance(filepath, Stream) else Stream(filepath)

        try:
            self._load(expected_tag)
        except Exception:
            self.close()
            raise

    @classmethod
    def from_resource(cls, locator: ResourceLocator, name: str, kind: ResourceType,
                      expected_tag=None, **kwargs):
        '''Open the resource through the locator; the tag defaults to the one of its kind.'''
        stream = locator.open(name, kind)

        return cls(stream, expected_tag=kind.tag if expected_tag is None else expected_tag, **kwargs)

    def __repr__(self):
        header = getattr(self, 'header', None)
        tag = header.tag.value if header is not None else None
        return f'<{self.__class__.__name__}({tag!r}, {len(self._structs)} structs, {len(self._lists)} lists)>'

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _load(self, expected_tag):
        with self.lock:
            self.header = GFFHeader(expected_tag=expected_tag).read(self.stream)
            self.logger.debug('header: %r', self.header)

            self._read_structs()
            self._read_lists()

    def _read_structs(self):
        count = self.header.struct_count.value
        if count == 0:
            raise StructIndexOutOfRange('the file has no top-level struct')

        self.stream.seek(self.header.struct_offset.value)

        table = fields.StructArrayField('III', n=count)
        table.unpack(self.stream)

        self._structs = [GFFStruct(self, index, *entry) for index, entry in enumerate(table.value)]

    def _read_lists(self):
        self.stream.seek(self.header.list_indices_offset.value)

        raw = fields.StructArrayField('I', n=self.header.list_indices_count.value // 4)
        raw.unpack(self.stream)

        lists, self._list_translation, self._empty_lists = decode_list_indices(raw.value)
        self._lists = lists

    def _read_label(self, index: int) -> str:
        if index >= self.header.label_count.value:
            raise LabelIndexOutOfRange(f'label index {index} of {self.header.label_count.value}')

        if index not in self._labels:
            self.stream.seek(self.header.label_offset.value + index * LABEL_SIZE)

            field = fields.StringField(LABEL_SIZE)
            field.unpack(self.stream)

            self._labels[index] = field.value.split(b'\x00', 1)[0].rstrip(b' ').decode(TEXT_ENCODING)

        return self._labels[index]

    def read_field(self, index: int) -> GFFField:
        '''Read the record at the given index of the field table.'''
        if index >= self.header.field_count.value:
            raise FieldIndexOutOfRange(f'field index {index} of {self.header.field_count.value}')

        with self.lock:
            self.stream.seek(self.header.field_offset.value + index * FIELD_ENTRY_SIZE)

            entry = FieldEntry()
            entry.unpack(self.stream)

            try:
                gff_type = GFFType(entry.gff_type.value)
            except ValueError:
                raise UnknownFieldTypeException(f'unknown field type {entry.gff_type.value} for field {index}')

            label = self._read_label(entry.label_index.value)

        return GFFField(gff_type, label, entry.data.value, gff=self)

    def read_field_indices(self, offset: int, count: int) -> List[int]:
        '''Read "count" field indices starting at the byte offset into the field indices table.'''
        if offset + count * 4 > self.header.field_indices_count.value:
            raise FieldIndicesOutOfRange(
                f'{count} field indices at offset {offset} of {self.header.field_indices_count.value} bytes')

        with self.lock:
            self.stream.seek(self.header.field_indices_offset.value + offset)

            indices = fields.StructArrayField('I', n=count)
            indices.unpack(self.stream)

        return indices.value

    def read_struct_fields(self, data_or_index: int, count: int) -> List[GFFField]:
        if count == 0:
            return []

        if count == 1:
            indices = [data_or_index]
        else:
            indices = self.read_field_indices(data_or_index, count)

        return [self.read_field(_) for _ in indices]

    @property
    def tag(self) -> bytes:
        return self.header.tag.value

    @property
    def version(self) -> GFFVersion:
        return self.header.gff_version

    @property
    def struct_count(self) -> int:
        return len(self._structs)

    @property
    def list_count(self) -> int:
        return len(self._lists)

    @property
    def top_level(self) -> GFFStruct:
        return self.get_struct(0)

    def get_struct(self, index: int) -> GFFStruct:
        if not 0 <= index < len(self._structs):
            raise StructIndexOutOfRange(f'struct index {index} of {len(self._structs)}')

        return self._structs[index]

    def get_list(self, offset: int) -> GFFList:
        '''The list starting at the given byte offset into the list indices area.'''
        position, remainder = divmod(offset, 4)

        if remainder == 0 and position in self._empty_lists:
            return GFFList(self, ())

        if remainder or position >= len(self._list_translation) or self._list_translation[position] is None:
            raise ListIndexOutOfRange(f'no list at offset {offset} of the list indices')

        return GFFList(self, self._lists[self._list_translation[position]])

    def close(self):
        with self.lock:
            self.stream.close()
            self._structs = []
            self._lists = []
            self._list_translation = []
            self._empty_lists = frozenset()
