#!/usr/bin/env python3
import sys
import os
import logging

from gffstruct.aurora import GFFFile
from gffstruct.aurora.enum import GFFType
from gffstruct.exceptions import GFFException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print('usage: %s <gff file> [tag]' % progname)
    sys.exit(1)


def format_value(strct, label, gff_type):
    if gff_type == GFFType.LOCSTRING:
        locstring = strct.get_loc_string(label)
        return f'strref=0x{locstring.string_ref:x} {str(locstring)!r}'
    if gff_type == GFFType.VOID:
        return strct.get_data(label).hex()
    if gff_type in (GFFType.EXOSTRING, GFFType.RESREF):
        return repr(strct.get_string(label))

    return strct.get_string(label)


def dump_struct(strct, indent=0):
    pad = ' ' * indent
    for label in strct:
        gff_type = strct.get_type(label)

        if gff_type == GFFType.STRUCT:
            child = strct.get_struct(label)
            print(f'{pad}{label:<16} struct[{child.index}] id=0x{child.id:x}')
            dump_struct(child, indent + 2)
        elif gff_type == GFFType.LIST:
            elements = strct.get_list(label)
            print(f'{pad}{label:<16} list of {len(elements)}')
            for idx, element in enumerate(elements):
                print(f'{pad}  [{idx}] struct[{element.index}] id=0x{element.id:x}')
                dump_struct(element, indent + 4)
        else:
            print(f'{pad}{label:<16} {gff_type.name:<11} {format_value(strct, label, gff_type)}')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]
    tag = sys.argv[2] if len(sys.argv) > 2 else None

    try:
        gff = GFFFile(path, expected_tag=tag)
    except GFFException as e:
        logger.error(f'failed to load \'{path}\': {e} (at {" <- ".join(e.chain)})')
        sys.exit(2)

    with gff:
        print(f'{gff.tag.decode("latin-1")} {gff.version.value.decode()}: {gff.struct_count} structs, {gff.list_count} lists')
        dump_struct(gff.top_level)
