"""
Core module: stream the bytes between the firmware image and the part files.
"""
import hashlib
import logging
import os
from typing import List

from .enum import Mode, PartPhase
from .exceptions import StreamException
from .layout import Part
from .resolver import resolve_sizes
from .streams import Stream


FILL_BYTE = 0xff


class PartReport(object):
    '''What happened to a single part: the bytes moved from/to its file,
    how many of them were padding and the SHA256 of the whole region.'''

    def __init__(self, name, transferred=0, padded=0, padding_byte=FILL_BYTE, digest=None, skipped=False):
        self.name = name
        self.transferred = transferred
        self.padded = padded
        self.padding_byte = padding_byte
        self.digest = digest
        self.skipped = skipped

    def __repr__(self):
        return '<%s(%s, transferred=%d, padded=%d, digest=%s%s)>' % (
            self.__class__.__name__,
            self.name,
            self.transferred,
            self.padded,
            self.digest,
            ', skipped' if self.skipped else '',
        )

    @property
    def size(self):
        return self.transferred + self.padded


class Firmware(object):
    """
    A firmware image together with its layout.

    The parts passed here must be already resolved (see resolve_sizes() or
    use from_layout()); the part files are searched/created in the given
    directory.
    """

    def __init__(self, path, parts: List[Part], directory='.'):
        self.logger = logging.getLogger(__name__)
        self.path = os.fspath(path)
        self.parts = parts
        self.directory = directory

        for part in self.parts:
            if part.phase != PartPhase.RESOLVED:
                raise ValueError(f'part \'{part.name}\' has not been resolved')

    @classmethod
    def from_layout(cls, path, parts: List[Part], mode: Mode, directory='.'):
        resolved = resolve_sizes(parts, mode, firmware_path=path, directory=directory)

        return cls(path, resolved, directory=directory)

    def __repr__(self):
        return '<%s(%s, %s)>' % (self.__class__.__name__, self.path, self.parts)

    def part_path(self, part: Part) -> str:
        return os.path.join(self.directory, part.filename)

    @property
    def max_size(self) -> int:
        '''The size of the packed image, i.e. the end of the farthest part.'''
        return max(max((_.end for _ in self.parts), default=0), 0)

    def unpack(self) -> List[PartReport]:
        '''Extract each part into its own file.

        If the image ends before a part does, only the available bytes are extracted.'''
        reports = []

        with Stream(self.path, 'rb') as firmware:
            for part in self.parts:
                self.logger.debug('unpacking %r' % part)
                digest = hashlib.sha256()

                with Stream(self.part_path(part), 'wb') as output:
                    firmware.seek(part.offset)
                    copied = firmware.copy_to(output, size=max(part.size, 0), digest=digest)

                if copied < part.size:
                    self.logger.debug('image ended before \'%s\', missing %d bytes' % (part.name, part.size - copied))

                report = PartReport(
                    part.name,
                    transferred=copied,
                    padding_byte=part.padding_byte,
                    digest=digest.hexdigest(),
                )
                self.logger.debug('unpacked %r' % report)
                reports.append(report)

        return reports

    def pack(self) -> List[PartReport]:
        '''Build the image from the part files.

        The whole image is initialized with FILL_BYTE, so the regions of the
        missing parts remain with that value; the parts with a file shorter
        than their size are completed with their own padding byte.'''
        reports = []
        max_size = self.max_size

        with Stream(self.path, 'w+b') as firmware:
            self.logger.debug('initializing \'%s\' with 0x%x bytes' % (self.path, max_size))
            firmware.truncate(max_size)
            firmware.seek(0)
            firmware.fill(FILL_BYTE, max_size)

            for part in self.parts:
                reports.append(self.pack_part(firmware, part))

        return reports

    def pack_part(self, firmware: Stream, part: Part) -> PartReport:
        path = self.part_path(part)
        size = max(part.size, 0)

        try:
            source = open(path, 'rb')
        except FileNotFoundError:
            self.logger.warning(f'{part.filename} not found, skipping')
            return PartReport(part.name, padding_byte=part.padding_byte, skipped=True)
        except OSError as e:
            raise StreamException(f'cannot open \'{path}\': {e}', part=part.name) from e

        self.logger.debug('packing %r' % part)
        digest = hashlib.sha256()

        with Stream(source) as source:
            firmware.seek(part.offset)
            written = source.copy_to(firmware, size=size, digest=digest)

        padded = firmware.fill(part.padding_byte, size - written, digest=digest)

        report = PartReport(
            part.name,
            transferred=written,
            padded=padded,
            padding_byte=part.padding_byte,
            digest=digest.hexdigest(),
        )
        self.logger.debug('packed %r' % report)

        return report
