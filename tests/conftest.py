import io
import random
import struct
import zlib

import pytest
from PIL import Image

from goldfile.config import refresh_config


@pytest.fixture(autouse=True)
def clear_goldfile_env(monkeypatch, tmp_path):
    for key in [
        "GOLDFILE_GOLDEN_DIR",
        "GOLDFILE_TOLERANCE",
        "GOLDFILE_UPDATE_GOLDENS",
        "GOLDFILE_WRITE_FAILURES",
        "GOLDFILE_FAILURES_DIR",
    ]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    refresh_config()
    yield
    refresh_config()


def _png_bytes(color=(255, 0, 0, 255), size=(4, 4), pixels=()):
    img = Image.new("RGBA", size, color)
    for xy, value in pixels:
        img.putpixel(xy, value)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def test_image_bytes():
    return _png_bytes()


@pytest.fixture
def make_png():
    return _png_bytes


@pytest.fixture
def golden_dir(tmp_path):
    path = tmp_path / "goldens"
    path.mkdir()
    return path

def _chunk(cid, data):
    crc = zlib.crc32(cid + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + cid + data + struct.pack(">I", crc)


def _broken_chunk_png():
    noise = random.Random(7).randbytes(16 * 16 * 4)
    buffer = io.BytesIO()
    Image.frombytes("RGBA", (16, 16), noise).save(buffer, format="PNG")
    good = buffer.getvalue()

    chunks = []
    pos = 8
    while pos < len(good):
        (length,) = struct.unpack(">I", good[pos:pos + 4])
        chunks.append((good[pos + 4:pos + 8], good[pos + 8:pos + 8 + length]))
        pos += 12 + length
    ihdr = next(data for cid, data in chunks if cid == b"IHDR")
    idat = b"".join(data for cid, data in chunks if cid == b"IDAT")
    half = len(idat) // 2

    # the second IDAT chunk carries a non-ASCII chunk type
    return (
        good[:8]
        + _chunk(b"IHDR", ihdr)
        + _chunk(b"IDAT", idat[:half])
        + _chunk(b"\xa8\x01\xa3\x06", idat[half:])
        + _chunk(b"IEND", b"")
    )


@pytest.fixture
def broken_png():
    return _broken_chunk_png()
