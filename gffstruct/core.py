"""
Core module for the abstraction of a binary record
"""
from typing import List, Tuple

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import UnpackException


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a record: an ordered
    sequence of fields unpacked one after the other from a stream.

    A Chunk can contain sub-chunks.
    """

    def __init__(self, filepath=None, **kwargs):
        super().__init__(**kwargs)

        if filepath is not None:
            stream = filepath if isinstance(filepath, Stream) else Stream(filepath)
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
            self.unpack(stream)

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self._meta.fields]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def init(self):
        for _, field in self.get_fields():
            field.init()

    @property
    def value(self):
        return self

    @value.setter
    def value(self, value):
        pass

    def _get_size(self):
        '''the size is derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    def unpack(self, stream):
        '''Take the binary data and build the representation given by
        the class this method is implemented.

        The fields are read one after the other starting from the actual
        position of the stream, recording the offset of each one. A method
        named validate_<field name> is called as soon as that field is read,
        validate() once the whole chunk is.
        '''
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s' % (self.__class__.__name__, field_name))

            offset = stream.tell()

            try:
                field.unpack(stream)
            except UnpackException as e:
                e.chain.append(field_name)
                raise
            field.offset = offset

            validator = getattr(self, f'validate_{field_name}', None)
            if validator is not None:
                validator()

        if hasattr(self, 'validate'):
            self.validate()
