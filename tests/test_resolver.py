import logging

import pytest

from fwsplit.enum import Mode, PartPhase
from fwsplit.exceptions import StreamException
from fwsplit.layout import Part, parse_layout
from fwsplit.resolver import resolve_sizes, total_size


def test_resolve_unpack_from_offsets_and_image(tmp_path):
    image = tmp_path / 'firmware.img'
    image.write_bytes(b'\x00' * 0x200)

    parts = parse_layout('A, 0x0\nB, 0x40\nC, 0x100\n')

    resolved = resolve_sizes(parts, Mode.UNPACK, firmware_path=str(image))

    assert [_.size for _ in resolved] == [0x40, 0xc0, 0x100]
    assert all(_.phase == PartPhase.RESOLVED for _ in resolved)
    assert not any(_.size_is_explicit for _ in resolved)


def test_resolve_leaves_input_untouched(tmp_path):
    image = tmp_path / 'firmware.img'
    image.write_bytes(b'\x00' * 0x200)

    parts = parse_layout('A, 0x0\nB, 0x40\n')

    resolve_sizes(parts, Mode.UNPACK, firmware_path=str(image))

    assert [_.size for _ in parts] == [0, 0]
    assert all(_.phase == PartPhase.PARSED for _ in parts)


def test_resolve_explicit_size_is_never_recomputed(tmp_path):
    image = tmp_path / 'firmware.img'
    image.write_bytes(b'\x00' * 0x200)

    parts = parse_layout('A, 0x0, 0x10\nB, 0x40, 0x1000\n')

    resolved = resolve_sizes(parts, Mode.UNPACK, firmware_path=str(image))

    assert [_.size for _ in resolved] == [0x10, 0x1000]


def test_resolve_unpack_empty_image(tmp_path):
    image = tmp_path / 'firmware.img'
    image.write_bytes(b'')

    resolved = resolve_sizes(parse_layout('A, 0x0\n'), Mode.UNPACK, firmware_path=str(image))

    assert resolved[0].size == 0


def test_resolve_unpack_missing_image(tmp_path):
    with pytest.raises(StreamException):
        resolve_sizes(parse_layout('A, 0x0\n'), Mode.UNPACK, firmware_path=str(tmp_path / 'nope.img'))


def test_resolve_pack_last_from_file(tmp_path):
    (tmp_path / 'C.bin').write_bytes(b'\x01' * 0x33)

    parts = parse_layout('A, 0x0\nB, 0x40, 0x10\nC, 0x100\n')

    resolved = resolve_sizes(parts, Mode.PACK, directory=str(tmp_path))

    assert [_.size for _ in resolved] == [0x40, 0x10, 0x33]


def test_resolve_pack_last_missing_file(tmp_path, caplog):
    parts = parse_layout('A, 0x0\nB, 0x40\n')

    with caplog.at_level(logging.WARNING):
        resolved = resolve_sizes(parts, Mode.PACK, directory=str(tmp_path))

    assert [_.size for _ in resolved] == [0x40, 0]
    assert "Could not determine size for last part 'B'" in caplog.text


def test_resolve_out_of_order_is_kept(tmp_path, caplog):
    '''A layout not sorted by offset is not corrected.'''
    image = tmp_path / 'firmware.img'
    image.write_bytes(b'\x00' * 0x200)

    parts = parse_layout('B, 0x40\nA, 0x0\n')

    with caplog.at_level(logging.WARNING):
        resolved = resolve_sizes(parts, Mode.UNPACK, firmware_path=str(image))

    assert [_.name for _ in resolved] == ['B', 'A']
    assert resolved[0].size == -0x40
    assert resolved[1].size == 0x200
    assert 'comes after the following part' in caplog.text


def test_total_size_pack():
    parts = [
        Part('A', 0x0, size=0x40, size_is_explicit=True),
        Part('B', 0x1000),
        Part('C', 0x100, size=0x20, size_is_explicit=True),
    ]

    assert total_size(parts, Mode.PACK) == 0x120
    assert total_size(parts[1:2], Mode.PACK) == 0
    assert total_size([], Mode.PACK) == 0
