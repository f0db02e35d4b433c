from __future__ import annotations

import base64

import numpy as np
import pytest

from liquidglass.maps.encoding import (
    DATA_URL_PREFIX,
    decode_png,
    encode_png,
    save_png,
    to_data_url,
)
from liquidglass.maps.specular import compute_specular_field


def test_png_encoding_preserves_pixels() -> None:
    field = compute_specular_field(120, 80, 30, 10)
    payload = encode_png(field)

    assert payload.startswith(b"\x89PNG")
    assert np.array_equal(decode_png(payload), field)


def test_data_url_wraps_png_payload() -> None:
    field = compute_specular_field(40, 40, 20, 10)
    url = to_data_url(field)

    assert url.startswith(DATA_URL_PREFIX)
    assert base64.b64decode(url[len(DATA_URL_PREFIX) :]) == encode_png(field)


def test_save_png_creates_parent_directories(tmp_path) -> None:
    field = compute_specular_field(40, 30, 12, 6)
    path = save_png(field, tmp_path / "maps" / "specular.png")

    assert path.exists()
    assert decode_png(path.read_bytes()).shape == (30, 40, 4)


def test_encoding_rejects_malformed_buffers() -> None:
    with pytest.raises(ValueError, match="RGBA"):
        encode_png(np.zeros((10, 10, 3), dtype=np.uint8))
    with pytest.raises(ValueError, match="uint8"):
        encode_png(np.zeros((10, 10, 4), dtype=np.float32))
    with pytest.raises(ValueError, match="empty"):
        encode_png(np.zeros((0, 10, 4), dtype=np.uint8))
