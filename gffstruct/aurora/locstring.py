'''
# Localized strings

A localized string is a reference into the talk table (the "strref") plus
any number of embedded substrings, one per language/gender couple

  .-------------------------------.
  | string reference   (u32)      |
  | substring count    (u32)      |
  | substring 1: id    (u32)      |  id = language * 2 + gender
  |              length(u32)      |
  |              text  (length)   |
  | ...                           |
  '-------------------------------'
'''
import logging
from typing import Dict, List

from ..core import Chunk
from .. import fields
from ..properties import Dependency
from .enum import Language, Gender


logger = logging.getLogger(__name__)


class LocSubString(Chunk):
    string_id = fields.StructField('I')
    length    = fields.StructField('I')
    text      = fields.StringField(Dependency('.length'))


class LocStringData(Chunk):
    string_ref = fields.StructField('I')
    count      = fields.StructField('I')
    substrings = fields.ArrayField(LocSubString(), n=Dependency('.count'))


class LocString(object):
    NO_STRREF = 0xFFFFFFFF

    def __init__(self, string_ref=NO_STRREF, strings: Dict[int, str] = None):
        self.string_ref = string_ref
        self._strings = dict(strings or {})

    def __repr__(self):
        return f'<{self.__class__.__name__}(strref=0x{self.string_ref:x}, {self._strings!r})>'

    def __str__(self):
        return next(iter(self._strings.values()), '')

    def __eq__(self, other):
        if not isinstance(other, LocString):
            return NotImplemented
        return self.string_ref == other.string_ref and self._strings == other._strings

    @staticmethod
    def get_string_id(language, gender=Gender.MALE) -> int:
        return int(language) * 2 + int(gender)

    @property
    def has_string_ref(self) -> bool:
        return self.string_ref != self.NO_STRREF

    def has_string(self, language=Language.ENGLISH, gender=Gender.MALE) -> bool:
        return self.get_string_id(language, gender) in self._strings

    def get_string(self, language=Language.ENGLISH, gender=Gender.MALE) -> str:
        return self._strings.get(self.get_string_id(language, gender), '')

    def languages(self) -> List[int]:
        '''The languages having at least one substring, as Language when known.'''
        result = []
        for string_id in self._strings:
            language = string_id // 2
            try:
                language = Language(language)
            except ValueError:
                pass
            if language not in result:
                result.append(language)

        return result


class LocStringDecoder(object):
    '''Decode the body of a localized string from a stream holding exactly it.'''

    def __init__(self, encoding='latin-1'):
        self.encoding = encoding

    def decode(self, stream) -> LocString:
        data = LocStringData()
        data.unpack(stream)

        strings = {}
        for substring in data.substrings.value:
            strings[substring.string_id.value] = substring.text.value.decode(self.encoding).rstrip('\x00')

        logger.debug('decoded localized string with strref 0x%x and %d substrings',
                     data.string_ref.value, len(strings))

        return LocString(data.string_ref.value, strings)
