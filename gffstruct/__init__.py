"""
# gffstruct: binary records for humans, and the Aurora GFF format built on them.

We can define a binary record as a sequence of fields, each one with a
direct representation (integers, floats, raw bytes) or made of sub-records.
A record is described declaratively by subclassing Chunk

    class ExoString(Chunk):
        length = fields.StructField('I')
        text   = fields.StringField(Dependency('.length'))

and the only operation defined on it is

 1. unpack(): read the binary data from a stream and build the high-level
    representation. The stream is read from its actual position and each
    field knows how many bytes it needs, possibly depending on the value
    of a sibling (see Dependency).

On top of that gffstruct.aurora decodes GFF files lazily: the records
locating a struct are read at load time, its fields only when accessed.
"""
