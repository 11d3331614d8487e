import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from PIL import Image

from paymeqr import (
    AppConfig,
    PayMeQR,
    QrImage,
    UnsupportedEnvironmentError,
    ValidationError,
    build_image_producer,
)
from paymeqr.core.models import Environment
from paymeqr.qr.codec import QrConfig
from paymeqr.qr.locator import BrowserEncoderState
from tests.test_support import (
    TEST_DATA_URL,
    FakeBrowserRuntime,
    FakeQrCodeGlobal,
    make_browser_producer,
    make_server_producer,
)


class TestPayMeQR(unittest.IsolatedAsyncioTestCase):
    async def test_server_flow(self) -> None:
        qr = PayMeQR("you@upi", producer=make_server_producer())
        qr.set_payee_name("Jane Doe").set_amount(99).set_note("Support me")
        self.assertEqual(
            qr.uri,
            "upi://pay?pa=you%40upi&cu=INR&pn=Jane+Doe&am=99.00&tn=Support+me",
        )
        data_url = await qr.create_qr_code()
        self.assertTrue(data_url.startswith("data:image/png;base64,"))
        buffer = await qr.get_qr_code_buffer()
        self.assertTrue(buffer.startswith(b"\x89PNG"))

    async def test_browser_flow(self) -> None:
        producer, runtime, _state = make_browser_producer()
        runtime.globals["QRCode"] = FakeQrCodeGlobal()
        qr = PayMeQR("you@upi", producer=producer)
        image = await qr.create_qr_code()
        self.assertIsInstance(image, QrImage)
        self.assertEqual(image.src, TEST_DATA_URL)
        with self.assertRaises(UnsupportedEnvironmentError):
            await qr.get_qr_code_buffer()

    async def test_invalid_upi_id(self) -> None:
        with self.assertRaisesRegex(ValidationError, "Invalid or missing UPI ID"):
            PayMeQR("not-an-id")

    async def test_save_qr_code_writes_png(self) -> None:
        qr = PayMeQR("you@upi", producer=make_server_producer())
        with tempfile.TemporaryDirectory() as tmpdir:
            target = await qr.save_qr_code(Path(tmpdir) / "pay.png")
            with Image.open(io.BytesIO(target.read_bytes())) as img:
                self.assertEqual(img.format, "PNG")

    async def test_save_qr_code_rejects_other_suffix(self) -> None:
        qr = PayMeQR("you@upi", producer=make_server_producer())
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaisesRegex(ValueError, "saved as PNG"):
                await qr.save_qr_code(Path(tmpdir) / "pay.svg")

    async def test_producer_is_built_lazily_from_config(self) -> None:
        config = AppConfig(qr_config=QrConfig(scale=2))
        qr = PayMeQR("you@upi", config=config)
        with mock.patch("paymeqr.producer.build_image_producer") as build:
            build.return_value = make_server_producer()
            await qr.create_qr_code()
            await qr.create_qr_code()
        build.assert_called_once_with(config)


class TestBuildImageProducer(unittest.TestCase):
    def test_server_producer_uses_config(self) -> None:
        config = AppConfig(qr_config=QrConfig(scale=7))
        producer = build_image_producer(config, environment=Environment.SERVER)
        self.assertIs(producer.environment, Environment.SERVER)
        self.assertEqual(producer.locator.get_server_encoder().config.scale, 7)

    def test_browser_producer_uses_given_runtime(self) -> None:
        runtime = FakeBrowserRuntime()
        state = BrowserEncoderState()
        producer = build_image_producer(
            AppConfig(), environment=Environment.BROWSER, browser=runtime, state=state
        )
        self.assertIs(producer.environment, Environment.BROWSER)
        self.assertIs(producer.locator.state, state)

    def test_browser_producer_defaults_to_pyodide_runtime(self) -> None:
        with mock.patch("paymeqr.producer.PyodideRuntime", autospec=True) as runtime_cls:
            producer = build_image_producer(AppConfig(), environment=Environment.BROWSER)
        runtime_cls.assert_called_once_with()
        self.assertIs(producer.environment, Environment.BROWSER)

    def test_detects_environment_when_not_given(self) -> None:
        with mock.patch(
            "paymeqr.producer.detect_environment", return_value=Environment.UNSUPPORTED
        ):
            producer = build_image_producer(AppConfig())
        self.assertIs(producer.environment, Environment.UNSUPPORTED)


if __name__ == "__main__":
    unittest.main()
