"""
Size resolution for the parts without an explicit size.

The relation between parts is only positional: a part without a size ends
where the following part (in declaration order) starts. The last part needs
something external, i.e. the size of the image when unpacking and the size
of its own file when packing.
"""
import logging
import os
from typing import List, Optional

from .enum import Mode
from .exceptions import StreamException
from .layout import Part


logger = logging.getLogger(__name__)


def get_file_size(path) -> Optional[int]:
    '''Returns None if the file doesn't exist.'''
    try:
        return os.stat(path).st_size
    except FileNotFoundError:
        return None
    except OSError as e:
        raise StreamException(f'cannot stat \'{path}\': {e}') from e


def total_size(parts: List[Part], mode: Mode, firmware_path=None) -> int:
    '''When unpacking is the size of the image, when packing is the
    end of the farthest part with an explicit size.'''
    if mode == Mode.UNPACK:
        size = get_file_size(firmware_path)
        if size is None:
            raise StreamException(f'firmware \'{firmware_path}\' not found')
        return size

    return max((_.end for _ in parts if _.size_is_explicit), default=0)


def resolve_part(parts: List[Part], index: int, mode: Mode, total: int, directory='.') -> Optional[int]:
    '''Infer the size for the part at the given index; None means it's not possible.'''
    part = parts[index]

    if index < len(parts) - 1:
        following = parts[index + 1]
        size = following.offset - part.offset
        if size < 0:
            logger.warning(
                f'part \'{part.name}\' at 0x{part.offset:x} comes after the following part '
                f'\'{following.name}\' at 0x{following.offset:x}')
        logger.debug('size of \'%s\' from the following part: 0x%x' % (part.name, size))
        return size

    if mode == Mode.UNPACK and total > 0:
        logger.debug('size of \'%s\' from the image size 0x%x' % (part.name, total))
        return total - part.offset

    if mode == Mode.PACK:
        size = get_file_size(os.path.join(directory, part.filename))
        if size is None:
            logger.warning(f'Could not determine size for last part \'{part.name}\'')
        else:
            logger.debug('size of \'%s\' from its file: 0x%x' % (part.name, size))
        return size

    return None


def resolve_sizes(parts: List[Part], mode: Mode, firmware_path=None, directory='.') -> List[Part]:
    '''Returns a new list of parts where all the sizes are resolved.

    The parts passed as argument are left untouched.'''
    total = total_size(parts, mode, firmware_path=firmware_path)

    resolved = []
    for index, part in enumerate(parts):
        if part.size_is_explicit:
            resolved.append(part.resolved())
            continue

        size = resolve_part(parts, index, mode, total, directory=directory)

        resolved.append(part.resolved(size=size if size is not None else 0))

    return resolved
