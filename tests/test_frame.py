"""Tests for frame and descriptor models."""

import pytest

from services.frame import DeviceDescriptor, EncodedFrame, PixelFrame
from utils.exceptions import EncodingError, InvalidPacketError


def test_blank_frame_has_display_size():
    frame = PixelFrame.blank()

    assert frame.width == 24
    assert frame.height == 7
    assert all(value == 0 for _, _, value in frame.pixels())


def test_pixel_frame_is_immutable_copy():
    rows = [[0, 1], [2, 3]]
    frame = PixelFrame(rows)
    rows[0][0] = 3

    assert frame.rows == ((0, 1), (2, 3))
    with pytest.raises(AttributeError):
        frame.rows = ()


def test_pixel_frame_dict_round_trip():
    body = {"glasses_frame": [[0, 1, 2, 3], [3, 2, 1, 0]]}

    frame = PixelFrame.from_dict(body)

    assert frame.to_dict() == body
    assert frame == PixelFrame(body["glasses_frame"])


def test_pixel_frame_from_dict_requires_key():
    with pytest.raises(EncodingError, match="glasses_frame"):
        PixelFrame.from_dict({"frame": []})


def test_pixel_frame_rejects_non_rows():
    with pytest.raises(EncodingError):
        PixelFrame([1, 2, 3])


def test_pixel_frame_from_text():
    text = """
    0123
    3 2 1 0

    1x11
    """

    frame = PixelFrame.from_text(text)

    assert frame.rows == ((0, 1, 2, 3), (3, 2, 1, 0), (1, "x", 1, 1))


def test_pixels_row_major():
    frame = PixelFrame([[1, 2], [3, 0]])

    assert list(frame.pixels()) == [(0, 0, 1), (0, 1, 2), (1, 0, 3), (1, 1, 0)]


def test_encoded_frame_dict_round_trip():
    encoded = EncodedFrame([bytes([0xFA, 0x03]), bytes([0x55, 0xA9])])

    body = encoded.to_dict()

    assert body == {"glasses_frame": [[0xFA, 0x03], [0x55, 0xA9]]}
    assert EncodedFrame.from_dict(body) == encoded
    assert encoded.hex() == ["fa03", "55a9"]
    assert len(encoded) == 2


@pytest.mark.parametrize("packets", [
    [[256]],
    [[-1]],
    [[]],
    [list(range(21))],
    [7],
    ["fa03"],
])
def test_encoded_frame_rejects_bad_packets(packets):
    with pytest.raises(InvalidPacketError):
        EncodedFrame.from_dict({"glasses_frame": packets})


def test_encoded_frame_from_dict_requires_key():
    with pytest.raises(InvalidPacketError):
        EncodedFrame.from_dict({})


def test_device_descriptor_wire_names():
    device = DeviceDescriptor(address="AA:BB:CC:DD:EE:FF", name="CHEMION")

    assert device.to_dict() == {"device_address": "AA:BB:CC:DD:EE:FF", "device_name": "CHEMION"}
    assert str(device) == "CHEMION (AA:BB:CC:DD:EE:FF)"
