# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

import base64
import io
import unittest

from PIL import Image

from paymeqr.qr.codec import QrConfig, qr_bytes, qr_data_uri

# Try to import zxingcpp for QR decoding verification
try:
    import zxingcpp

    HAS_ZXING = True
except ImportError:
    HAS_ZXING = False

UPI_LINK = "upi://pay?pa=x%40upi&cu=INR&pn=Jane&am=10.50"


def decode_qr_text(png_data: bytes) -> list[str]:
    """Decode QR code(s) from PNG bytes, returning the text payloads."""
    if not HAS_ZXING:
        return []
    with Image.open(io.BytesIO(png_data)) as img:
        return [result.text for result in zxingcpp.read_barcodes(img)]


class TestQrCodec(unittest.TestCase):
    def test_png_signature(self) -> None:
        png = qr_bytes(UPI_LINK, kind="png")
        self.assertTrue(png.startswith(b"\x89PNG\r\n\x1a\n"))

    def test_png_is_valid_image(self) -> None:
        png = qr_bytes(UPI_LINK)
        with Image.open(io.BytesIO(png)) as img:
            self.assertEqual(img.format, "PNG")
            self.assertGreater(img.width, 0)
            self.assertEqual(img.width, img.height)

    def test_scale_changes_size(self) -> None:
        small = qr_bytes(UPI_LINK, config=QrConfig(scale=2))
        large = qr_bytes(UPI_LINK, config=QrConfig(scale=8))
        with Image.open(io.BytesIO(small)) as a, Image.open(io.BytesIO(large)) as b:
            self.assertEqual(b.width, a.width * 4)

    def test_svg_output(self) -> None:
        svg = qr_bytes(UPI_LINK, kind="svg")
        self.assertTrue(svg.startswith(b"<?xml") or svg.startswith(b"<svg"))
        self.assertIn(b"</svg>", svg)

    def test_data_uri_wraps_png(self) -> None:
        uri = qr_data_uri(UPI_LINK)
        prefix = "data:image/png;base64,"
        self.assertTrue(uri.startswith(prefix))
        self.assertEqual(base64.b64decode(uri[len(prefix) :]), qr_bytes(UPI_LINK))

    def test_rounded_modules_render_png(self) -> None:
        config = QrConfig(module_shape="rounded", dark="#123456", light=(250, 250, 250))
        png = qr_bytes(UPI_LINK, config=config)
        with Image.open(io.BytesIO(png)) as img:
            self.assertEqual(img.mode, "RGBA")
            self.assertEqual(img.getpixel((0, 0)), (250, 250, 250, 255))

    def test_rejects_unknown_kind_and_shape(self) -> None:
        with self.assertRaisesRegex(ValueError, "unsupported image kind"):
            qr_bytes(UPI_LINK, kind="gif")
        with self.assertRaisesRegex(ValueError, "unsupported module_shape"):
            qr_bytes(UPI_LINK, config=QrConfig(module_shape="star"))
        with self.assertRaisesRegex(ValueError, "only supported for PNG"):
            qr_bytes(UPI_LINK, kind="svg", config=QrConfig(module_shape="rounded"))

    @unittest.skipUnless(HAS_ZXING, "zxingcpp not available")
    def test_upi_link_is_decodable(self) -> None:
        for shape in ("square", "rounded"):
            with self.subTest(shape=shape):
                png = qr_bytes(UPI_LINK, config=QrConfig(module_shape=shape))
                self.assertEqual(decode_qr_text(png), [UPI_LINK])


if __name__ == "__main__":
    unittest.main()
