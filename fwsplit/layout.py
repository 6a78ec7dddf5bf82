"""
Parsing of the layout description: each line becomes a Part, in the same
order of the file.
"""
import logging
import re
from typing import List

from .enum import PartPhase
from .exceptions import ParseException, ConfigException


logger = logging.getLogger(__name__)

DEFAULT_PADDING_BYTE = 0xff
MAX_NUMBER = 1 << 64

_HEX_RE = re.compile(r'0[xX]\+?([0-9a-fA-F]+)')
_COMMENT_RE = re.compile(r'(^|\s)#.*$')
_DEC_RE = re.compile(r'\+?([0-9]+)')


class Part(object):
    '''A named byte range inside the firmware image.

    The size can be explicit (taken as it is from the layout) or resolved
    later looking at the neighbours of the part.'''

    def __init__(self, name, offset, size=0, padding_byte=DEFAULT_PADDING_BYTE,
                 size_is_explicit=False, padding_is_explicit=False, phase=PartPhase.PARSED):
        self.name = name
        self.offset = offset
        self.size = size
        self.padding_byte = padding_byte
        self.size_is_explicit = size_is_explicit
        self.padding_is_explicit = padding_is_explicit
        self.phase = phase

    def __repr__(self):
        return '<%s(%s, offset=0x%x, size=0x%x%s, padding=0x%02x)>' % (
            self.__class__.__name__,
            self.name,
            self.offset,
            self.size,
            '' if self.size_is_explicit else ' auto',
            self.padding_byte,
        )

    def __eq__(self, other):
        if not isinstance(other, Part):
            return NotImplemented

        return self.as_tuple() == other.as_tuple()

    def as_tuple(self):
        return (
            self.name,
            self.offset,
            self.size,
            self.padding_byte,
            self.size_is_explicit,
            self.padding_is_explicit,
        )

    @property
    def filename(self) -> str:
        return f'{self.name}.bin'

    @property
    def end(self) -> int:
        return self.offset + self.size

    def resolved(self, size=None) -> "Part":
        '''Return a copy of this part in the RESOLVED phase, with the size
        eventually replaced.'''
        return Part(
            self.name,
            self.offset,
            size=self.size if size is None else size,
            padding_byte=self.padding_byte,
            size_is_explicit=self.size_is_explicit,
            padding_is_explicit=self.padding_is_explicit,
            phase=PartPhase.RESOLVED,
        )


def parse_number(text: str) -> int:
    '''Convert a numeric field: hexadecimal with the 0x prefix, decimal otherwise.

    An empty field is zero.'''
    text = text.strip()
    if not text:
        return 0

    match = _HEX_RE.fullmatch(text)
    if match:
        value = int(match.group(1), 16)
    else:
        match = _DEC_RE.fullmatch(text)
        if not match:
            raise ParseException(f'Failed to parse number: \'{text}\'')
        value = int(match.group(1), 10)

    if value >= MAX_NUMBER:
        raise ParseException(f'Failed to parse number: \'{text}\' is too large')

    return value


def _strip_comment(line: str) -> str:
    '''A comment starts with '#' at the beginning of the line or after a blank.'''
    return _COMMENT_RE.sub('', line.strip()).strip()


def parse_line(line: str):
    '''Returns the Part described by the line or None if the line
    doesn't describe anything.'''
    line = _strip_comment(line)
    if not line:
        return None

    fields = line.split(',')
    if len(fields) < 2:
        logger.debug('skipping line \'%s\'' % line)
        return None

    name = fields[0].strip()
    if not name:
        logger.warning(f'part at line \'{line}\' has no name, its file will be \'.bin\'')

    offset = parse_number(fields[1])

    size, size_is_explicit = 0, False
    if len(fields) > 2 and fields[2].strip():
        size, size_is_explicit = parse_number(fields[2]), True

    padding_byte, padding_is_explicit = DEFAULT_PADDING_BYTE, False
    if len(fields) > 3:
        padding_byte, padding_is_explicit = parse_number(fields[3]) & 0xff, True

    return Part(
        name,
        offset,
        size=size,
        padding_byte=padding_byte,
        size_is_explicit=size_is_explicit,
        padding_is_explicit=padding_is_explicit,
    )


def parse_layout(text: str) -> List[Part]:
    parts = []

    for lineno, line in enumerate(text.splitlines(), start=1):
        try:
            part = parse_line(line)
        except ParseException as e:
            raise ParseException(f'line {lineno}: {e.message}') from e

        if part is None:
            continue

        logger.debug('line %d: %r' % (lineno, part))
        parts.append(part)

    return parts


def read_config(path) -> List[Part]:
    '''Read and parse the layout file at the given path.'''
    logger.debug('reading layout from \'%s\'' % path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigException(f'Failed to read config file: {e}') from e

    return parse_layout(content)
