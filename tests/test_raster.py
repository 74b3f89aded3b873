import io

import fitz
import numpy as np
import pytest
from PIL import Image

from pagediff.errors import DecodeFailure, InvalidInput
from pagediff.utils import is_pdf, load_image, page_count, rasterize_page


def _png_bytes(mode, size, color):
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_load_image_converts_to_rgba(tmp_path):
    path = tmp_path / "gray.png"
    path.write_bytes(_png_bytes("L", (30, 20), 128))
    image = load_image(path)
    assert image.size == (30, 20)
    assert image.pixels[0, 0].tolist() == [128, 128, 128, 255]


def test_load_image_from_bytes_keeps_alpha():
    image = load_image(_png_bytes("RGBA", (4, 4), (1, 2, 3, 0)))
    assert image.pixels[3, 3].tolist() == [1, 2, 3, 0]


def test_load_image_failures():
    with pytest.raises(DecodeFailure):
        load_image(b"not an image")
    with pytest.raises(DecodeFailure):
        load_image("/nonexistent/path.png")


def test_rasterize_page_scale(tmp_path):
    pdf = tmp_path / "doc.pdf"
    doc = fitz.open()
    page = doc.new_page(width=100, height=50)
    page.draw_rect(fitz.Rect(0, 0, 50, 50), color=(1, 0, 0), fill=(1, 0, 0))
    doc.new_page(width=100, height=50)
    doc.save(str(pdf))
    doc.close()

    assert page_count(pdf) == 2
    image = rasterize_page(pdf, 0, scale=2.0)
    assert image.size == (200, 100)
    assert image.pixels[50, 50].tolist() == [255, 0, 0, 255]
    assert image.pixels[50, 150].tolist() == [255, 255, 255, 255]
    assert np.all(image.pixels[:, :, 3] == 255)


def test_rasterize_page_out_of_range(tmp_path):
    pdf = tmp_path / "doc.pdf"
    doc = fitz.open()
    doc.new_page()
    doc.save(str(pdf))
    doc.close()
    with pytest.raises(InvalidInput):
        rasterize_page(pdf, 3)
    with pytest.raises(InvalidInput):
        rasterize_page(pdf, 0, scale=0)


def test_is_pdf():
    assert is_pdf("a/B.PDF")
    assert not is_pdf("page.png")
