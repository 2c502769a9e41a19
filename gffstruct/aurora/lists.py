'''
# List indices

The list indices area is a flat sequence of u32 words holding run-length
encoded lists of struct indices

  [n0, s, s, ..., n1, s, ..., ]

A list field stores the byte offset of the run-length word of its list, so
besides the lists themselves we keep a table translating the word position
(byte offset / 4) into the index of the decoded list.

Runs of length zero are the empty list fields: they get no entry in the
lists nor in the translation table, only their position is remembered.
'''
import logging
from typing import FrozenSet, List, NamedTuple, Optional, Sequence, Tuple

from ..exceptions import ListIndicesBrokenException


logger = logging.getLogger(__name__)


class ListIndices(NamedTuple):
    lists: List[Tuple[int, ...]]
    translation: List[Optional[int]]
    empty: FrozenSet[int]


def decode_list_indices(raw: Sequence[int]) -> ListIndices:
    '''Scan the raw words left to right; the translation table has one entry
    per word, None where no (non-empty) list starts.'''
    lists: List[Tuple[int, ...]] = []
    translation: List[Optional[int]] = [None] * len(raw)
    empty = set()

    position = 0
    while position < len(raw):
        n = raw[position]
        end = position + 1 + n
        if end > len(raw):
            raise ListIndicesBrokenException(
                f'list at word {position} wants {n} entries but only {len(raw) - position - 1} are left')

        if n:
            translation[position] = len(lists)
            lists.append(tuple(raw[position + 1:end]))
        else:
            empty.add(position)

        position = end

    logger.debug('decoded %d lists (%d empty) from %d words', len(lists), len(empty), len(raw))

    return ListIndices(lists, translation, frozenset(empty))


class GFFList(object):
    '''Read-only sequence of references to structs of a GFF file.

    Only the indices are kept, every access goes through the struct array of
    the file that validates the index.'''

    def __init__(self, gff, indices: Sequence[int]):
        self._gff = gff
        self._indices = tuple(indices)

    def __repr__(self):
        return f'<{self.__class__.__name__}({list(self._indices)!r})>'

    def __len__(self):
        return len(self._indices)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return [self._gff.get_struct(_) for _ in self._indices[item]]

        return self._gff.get_struct(self._indices[item])

    def __iter__(self):
        for index in self._indices:
            yield self._gff.get_struct(index)

    @property
    def indices(self) -> Tuple[int, ...]:
        return self._indices
