"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a stream without sub-components.
"""
import logging
import struct

from .meta import FieldBase
from .properties import PropertyDescriptor
from .exceptions import UnpackException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers and floats from bytes, always little-endian like every GFF word.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        encoder = hex if isinstance(self.value, int) else repr
        return '<%s(%s)>' % (self.__class__.__name__, encoder(self.value))

    def get_format(self):
        return '<' + self.format

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _unpack(self, raw: bytes):
        try:
            return struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            self.logger.error(e)
            raise UnpackException(str(e))

    def unpack(self, stream):
        self.value = self._unpack(stream.read_exact(self.size))


class StructArrayField(StructField):
    """
    A run of "n" elements with the same struct format unpacked in one read:
    the value is a list of scalars, or of tuples when the format has more
    than one item.
    """

    n = PropertyDescriptor('n', int)

    def __init__(self, format, n=0, **kw):
        self.n = n
        super().__init__(format, default=None, **kw)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        return []

    def _get_size(self):
        return struct.calcsize(self.get_format()) * self.n

    def unpack(self, stream):
        raw = stream.read_exact(self.size)
        elements = [_ if len(_) > 1 else _[0] for _ in struct.iter_unpack(self.get_format(), raw)]
        self.value = elements


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def value_from_default(self):
        return self.default if self.default is not None else b''

    def _get_size(self):
        return len(self.value)

    def unpack(self, stream):
        length = self.length
        self.logger.debug('reading %d bytes for \'%s\'' % (length, self.name))
        self.value = stream.read_exact(length)


class ArrayField(Field):
    '''Unpack an array of elements.

    The number of elements is indicated via the parameter named "n",
    an int or a Dependency.

    This class behaves like a read-only list in python.
    '''

    n = PropertyDescriptor('n', int)

    def __init__(self, field_cls, n=0, **kw):
        self.field_cls = field_cls
        self.n = n

        kw.setdefault('default', [])
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default)

    def _get_size(self):
        return sum(element.size for element in self.value)

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        n = self.n
        self.logger.debug('unpacking %d elements for \'%s\'' % (n, self.name))

        self.value = []
        for idx in range(n):
            element = self.instance_element()
            try:
                element.unpack(stream)
            except UnpackException as e:
                e.chain.append(f'{self.name}[{idx}]')
                raise
            self.value.append(element)
