import unittest
from urllib.parse import parse_qsl, urlsplit

from paymeqr.core.models import PaymentParameters
from paymeqr.payment.params import PaymentRequest
from paymeqr.payment.uri import encode_upi_uri, query_pairs


class TestUpiUri(unittest.TestCase):
    def test_required_fields_only(self) -> None:
        params = PaymentParameters(payee_id="x@upi", currency_code="INR")
        self.assertEqual(encode_upi_uri(params), "upi://pay?pa=x%40upi&cu=INR")

    def test_fixed_field_order_regardless_of_setter_order(self) -> None:
        first = PaymentRequest("x@upi").set_note("thanks").set_amount(1).set_payee_name("Jane")
        second = PaymentRequest("x@upi").set_payee_name("Jane").set_amount(1).set_note("thanks")
        expected = "upi://pay?pa=x%40upi&cu=INR&pn=Jane&am=1.00&tn=thanks"
        self.assertEqual(first.uri, expected)
        self.assertEqual(second.uri, expected)

    def test_values_are_form_encoded(self) -> None:
        params = PaymentParameters(
            payee_id="shop.01@okaxis",
            payee_name="Café & Co",
            note="Invoice #12 / *paid*",
        )
        uri = encode_upi_uri(params)
        self.assertEqual(
            uri,
            "upi://pay?pa=shop.01%40okaxis&cu=INR&pn=Caf%C3%A9+%26+Co"
            "&tn=Invoice+%2312+%2F+*paid*",
        )
        parts = urlsplit(uri)
        self.assertEqual(parts.scheme, "upi")
        self.assertEqual(parts.netloc, "pay")
        self.assertEqual(dict(parse_qsl(parts.query))["pn"], "Café & Co")

    def test_tilde_is_percent_encoded(self) -> None:
        self.assertEqual(
            PaymentRequest("x@upi").set_note("a~b").uri,
            "upi://pay?pa=x%40upi&cu=INR&tn=a%7Eb",
        )

    def test_unpaired_surrogates_become_replacement_character(self) -> None:
        request = PaymentRequest("x@upi").set_payee_name("Jo\udc80hn").set_note("\ud83dx")
        self.assertEqual(
            request.uri,
            "upi://pay?pa=x%40upi&cu=INR&pn=Jo%EF%BF%BDhn&tn=%EF%BF%BDx",
        )

    def test_surrogate_pairs_encode_as_one_code_point(self) -> None:
        params = PaymentParameters(payee_id="x@upi", note="hi 😀")
        self.assertEqual(
            encode_upi_uri(params),
            "upi://pay?pa=x%40upi&cu=INR&tn=hi+%F0%9F%98%80",
        )

    def test_empty_and_unset_fields_are_skipped(self) -> None:
        params = PaymentParameters(payee_id="x@upi", payee_name=None, amount="2.00", note="")
        self.assertEqual(query_pairs(params), [("pa", "x@upi"), ("cu", "INR"), ("am", "2.00")])

    def test_encoding_is_deterministic(self) -> None:
        params = PaymentParameters(payee_id="x@upi", payee_name="Jane", amount="3.50", note="n")
        self.assertEqual(encode_upi_uri(params), encode_upi_uri(params))
        self.assertEqual(
            encode_upi_uri(params),
            encode_upi_uri(PaymentParameters(**params.to_dict())),
        )


if __name__ == "__main__":
    unittest.main()
