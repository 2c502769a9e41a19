'''
This module contains the constant values used throughout the GFF format.

Note: use Enum for value that cannot ORed together, Flag for the others.
'''
from enum import Enum, IntEnum


class GFFVersion(Enum):
    V3_2 = b'V3.2'
    V3_3 = b'V3.3'  # The Witcher, different language table


class FieldCategory(Enum):
    '''Logical category of a field type, the unit the getters work with.'''
    CHAR        = 'char'
    UINT        = 'uint'
    SINT        = 'sint'
    DOUBLE      = 'double'
    STRING      = 'string'
    LOCSTRING   = 'locstring'
    DATA        = 'data'
    STRUCT      = 'struct'
    LIST        = 'list'
    ORIENTATION = 'orientation'
    VECTOR      = 'vector'
    STRREF      = 'strref'


class GFFType(IntEnum):
    BYTE        = 0
    CHAR        = 1
    UINT16      = 2
    SINT16      = 3
    UINT32      = 4
    SINT32      = 5
    UINT64      = 6
    SINT64      = 7
    FLOAT       = 8
    DOUBLE      = 9
    EXOSTRING   = 10
    RESREF      = 11
    LOCSTRING   = 12
    VOID        = 13
    STRUCT      = 14
    LIST        = 15
    ORIENTATION = 16
    VECTOR      = 17
    STRREF      = 18

    @property
    def category(self) -> FieldCategory:
        return _CATEGORIES[self]

    @property
    def is_extended(self) -> bool:
        '''The value doesn't fit the inline data word and lives in the field data area.'''
        return self in EXTENDED_TYPES


_CATEGORIES = {
    GFFType.BYTE:        FieldCategory.UINT,
    GFFType.CHAR:        FieldCategory.CHAR,
    GFFType.UINT16:      FieldCategory.UINT,
    GFFType.SINT16:      FieldCategory.SINT,
    GFFType.UINT32:      FieldCategory.UINT,
    GFFType.SINT32:      FieldCategory.SINT,
    GFFType.UINT64:      FieldCategory.UINT,
    GFFType.SINT64:      FieldCategory.SINT,
    GFFType.FLOAT:       FieldCategory.DOUBLE,
    GFFType.DOUBLE:      FieldCategory.DOUBLE,
    GFFType.EXOSTRING:   FieldCategory.STRING,
    GFFType.RESREF:      FieldCategory.STRING,
    GFFType.LOCSTRING:   FieldCategory.LOCSTRING,
    GFFType.VOID:        FieldCategory.DATA,
    GFFType.STRUCT:      FieldCategory.STRUCT,
    GFFType.LIST:        FieldCategory.LIST,
    GFFType.ORIENTATION: FieldCategory.ORIENTATION,
    GFFType.VECTOR:      FieldCategory.VECTOR,
    GFFType.STRREF:      FieldCategory.STRREF,
}

EXTENDED_TYPES = frozenset({
    GFFType.UINT64,
    GFFType.SINT64,
    GFFType.DOUBLE,
    GFFType.EXOSTRING,
    GFFType.RESREF,
    GFFType.LOCSTRING,
    GFFType.VOID,
    GFFType.ORIENTATION,
    GFFType.VECTOR,
    GFFType.STRREF,
})


class Language(IntEnum):
    ENGLISH             = 0
    FRENCH              = 1
    GERMAN              = 2
    ITALIAN             = 3
    SPANISH             = 4
    POLISH              = 5
    KOREAN              = 128
    CHINESE_TRADITIONAL = 129
    CHINESE_SIMPLIFIED  = 130
    JAPANESE            = 131


class Gender(IntEnum):
    MALE   = 0
    FEMALE = 1
