import io
import os
import logging
from contextlib import contextmanager

from .exceptions import TruncatedException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: absolute seek(), exact reads and
    a scoped save/restore of the cursor.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_fileobj)

        init_method()

    def __getattr__(self, name):
        if name == 'obj':
            raise AttributeError(name)
        return getattr(self.obj, name)

    def __del__(self):
        obj = self.__dict__.get('obj')
        if obj is not None and hasattr(obj, 'close'):
            obj.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._type.__name__)

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_fileobj(self):
        for attr in ('read', 'seek', 'tell'):
            if not hasattr(self.obj, attr):
                raise ValueError('\'%s\' is not a seekable readable object' % self._type.__name__)

    def seek(self, offset):
        if not isinstance(offset, int) or offset < 0:
            raise ValueError('\'%s\' is the wrong kind of offset to use' % (offset,))

        self.obj.seek(offset)

    def tell(self):
        return self.obj.tell()

    position = tell

    def read(self, size=-1):
        return self.obj.read(size)

    def read_exact(self, size):
        '''Read exactly "size" bytes or raise TruncatedException.'''
        offset = self.obj.tell()
        data = self.obj.read(size)

        if len(data) != size:
            raise TruncatedException(
                'wanted %d bytes at offset 0x%x, got %d' % (size, offset, len(data)))

        return data

    def read_all(self):
        return self.obj.read()

    def size(self):
        with self.preserve_position():
            return self.obj.seek(0, io.SEEK_END)

    def eos(self):
        return self.tell() >= self.size()

    @contextmanager
    def preserve_position(self):
        '''Save the cursor on entry and restore it on every exit path.'''
        old_seek = self.obj.tell()
        try:
            yield self
        finally:
            self.obj.seek(old_seek)

    def close(self):
        self.obj.close()
