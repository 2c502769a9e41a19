class GFFException(Exception):
    '''Base class to extend in order to throw exception in gffstruct.

    Besides the message it takes the chain of the layers (field names,
    struct indices) that caused the exception, innermost first.
    '''

    def __init__(self, msg='', chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(msg)


class UnpackException(GFFException):
    pass


class TruncatedException(UnpackException):
    '''The stream ended before the requested amount of data.'''
    pass


class HeaderException(UnpackException):
    pass


class InvalidTagException(HeaderException):
    pass


class UnsupportedVersionException(HeaderException):
    pass


class IndexOutOfRangeException(UnpackException):
    '''An index points beyond the declared extent of its table.'''
    pass


class LabelIndexOutOfRange(IndexOutOfRangeException):
    pass


class FieldIndexOutOfRange(IndexOutOfRangeException):
    pass


class FieldIndicesOutOfRange(IndexOutOfRangeException):
    pass


class StructIndexOutOfRange(IndexOutOfRangeException):
    pass


class ListIndexOutOfRange(IndexOutOfRangeException):
    pass


class MalformedPayloadException(UnpackException):
    pass


class TruncatedBlobException(MalformedPayloadException):
    pass


class MalformedStrRefException(MalformedPayloadException):
    pass


class ListIndicesBrokenException(UnpackException):
    pass


class UnknownFieldTypeException(UnpackException):
    pass


class AccessorException(GFFException):
    '''Raised by the getters: always recoverable by the caller.'''
    pass


class TypeMismatchException(AccessorException):
    pass


class NoSuchFieldException(AccessorException):
    pass


class ResourceNotFoundException(GFFException):
    pass
