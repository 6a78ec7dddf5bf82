'''
Command line interface

    $ firmware_tool.py unpack firmware.img layout.cfg
    $ firmware_tool.py pack firmware.img layout.cfg

the part files are read/written in the current directory; set the DEBUG
environment variable to see what is happening under the hood.
'''
import logging
import os
import sys

from .core import Firmware
from .enum import Mode
from .exceptions import FirmwareException
from .layout import read_config


logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''Usage: {progname} [unpack|pack] <firmware_file> <config_file>
Config file format:
name, offset [, size] [, padding_byte]
Example:
header, 0x0, 0x40
kernel, 0x40, , 0x00     # size will be auto-calculated
rootfs, 0x200040         # size from input file or next offset''')


def dump_layout(parts):
    print('Firmware parts:')
    for part in parts:
        print(f'''{part.name}: offset=0x{part.offset:x}, size=0x{part.size:x}{"" if part.size_is_explicit else " (auto)"}, padding=0x{part.padding_byte:02X}{"" if part.padding_is_explicit else " (default)"}''')


def dump_unpacked(reports):
    for report in reports:
        print(f'Extracted {report.name}: {report.transferred} bytes, SHA256: {report.digest}')


def dump_packed(reports):
    for report in reports:
        if report.skipped:
            continue

        padding = f' (padded {report.padded} bytes with 0x{report.padding_byte:02X})' if report.padded else ''
        print(f'Wrote {report.name}: {report.transferred} bytes{padding}, SHA256: {report.digest}')


def setup_logging():
    logging.basicConfig(
        stream=sys.stdout,
        format='%(levelname)s: %(message)s',
        level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO,
    )


def run(command, firmware_path, config_path, progname='firmware_tool.py'):
    parts = read_config(config_path)

    firmware = Firmware.from_layout(firmware_path, parts, Mode.from_argument(command))

    dump_layout(firmware.parts)

    if command == 'unpack':
        dump_unpacked(firmware.unpack())
    elif command == 'pack':
        dump_packed(firmware.pack())
    else:
        usage(progname)


def main(argv=None) -> int:
    argv = sys.argv if argv is None else argv
    progname = os.path.basename(argv[0]) if argv else 'firmware_tool.py'

    if len(argv) != 4:
        usage(progname)
        return 0

    setup_logging()

    command, firmware_path, config_path = argv[1:]

    try:
        run(command, firmware_path, config_path, progname=progname)
    except FirmwareException as e:
        logger.error(e)
        return 1

    return 0
