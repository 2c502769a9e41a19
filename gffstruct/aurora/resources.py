'''
# Resource location

Turn a resource name plus its kind into a stream. Only the GFF-backed kinds
are listed; the tag is the 4 bytes the file starts with.
'''
import logging
import os
from enum import Enum
from pathlib import Path

from ..streams import Stream
from ..exceptions import ResourceNotFoundException


logger = logging.getLogger(__name__)


class ResourceType(Enum):
    IFO = 'ifo'  # module info
    ARE = 'are'  # area static data
    GIT = 'git'  # area instances
    GIC = 'gic'  # area instance comments
    UTC = 'utc'  # creature template
    UTD = 'utd'  # door template
    UTE = 'ute'  # encounter template
    UTI = 'uti'  # item template
    UTM = 'utm'  # store template
    UTP = 'utp'  # placeable template
    UTS = 'uts'  # sound template
    UTT = 'utt'  # trigger template
    UTW = 'utw'  # waypoint template
    DLG = 'dlg'  # dialogue
    JRL = 'jrl'  # journal
    FAC = 'fac'  # factions
    ITP = 'itp'  # palette
    BIC = 'bic'  # player character
    GUI = 'gui'  # GUI layout
    PTM = 'ptm'  # plot manager
    PTT = 'ptt'  # plot wizard

    @property
    def extension(self) -> str:
        return self.value

    @property
    def tag(self) -> bytes:
        return self.value.upper().encode('ascii').ljust(4, b' ')


class ResourceLocator(object):
    '''Interface: give me a seekable readable stream for the resource.'''

    def open(self, name: str, kind: ResourceType) -> Stream:
        raise NotImplementedError(f'{self.__class__.__name__}.open() not implemented')


class DirectoryLocator(ResourceLocator):
    '''Look for "<name>.<extension>" in the given directories, in order,
    ignoring the case like the engine does.'''

    def __init__(self, *paths):
        self.paths = [Path(_) for _ in paths]

    def __repr__(self):
        return f'<{self.__class__.__name__}({[str(_) for _ in self.paths]!r})>'

    def find(self, name: str, kind: ResourceType) -> Path:
        filename = f'{name}.{kind.extension}'.lower()

        for path in self.paths:
            if not path.is_dir():
                logger.debug('skipping \'%s\', not a directory', path)
                continue

            for entry in sorted(os.listdir(path)):
                if entry.lower() == filename and (path / entry).is_file():
                    return path / entry

        raise ResourceNotFoundException(f'resource \'{name}\' of type {kind.name} not found')

    def open(self, name: str, kind: ResourceType) -> Stream:
        path = self.find(name, kind)
        logger.debug('resource \'%s\' (%s) found at \'%s\'', name, kind.name, path)

        return Stream(path)
