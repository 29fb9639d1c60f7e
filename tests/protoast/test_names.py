from __future__ import annotations

import pytest

from protoast import Name


class TestSplitWords:
    @pytest.mark.parametrize(
        ("name", "words"),
        [
            ("order_id", ["order", "id"]),
            ("OrderId", ["Order", "Id"]),
            ("orderId", ["order", "Id"]),
            ("HTTPServer", ["HTTP", "Server"]),
            ("user2fa", ["user2", "fa"]),
            ("shop.ext", ["shop", "ext"]),
            ("STATUS_PAID", ["STATUS", "PAID"]),
            ("_note", ["note"]),
            ("", []),
        ],
    )
    def test_split(self, name: str, words: list[str]):
        assert Name(name).split_words() == words


class TestCasing:
    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("upper_camel_case", "HttpRequestId"),
            ("lower_camel_case", "httpRequestId"),
            ("lower_snake_case", "http_request_id"),
            ("upper_snake_case", "Http_Request_Id"),
            ("screaming_snake_case", "HTTP_REQUEST_ID"),
            ("lower_dot_notation", "http.request.id"),
        ],
    )
    def test_from_snake(self, method: str, expected: str):
        result = getattr(Name("http_request_id"), method)()
        assert result == expected
        assert isinstance(result, Name)

    def test_acronym(self):
        assert Name("HTTPServer").lower_snake_case() == "http_server"
        assert Name("HTTPServer").upper_camel_case() == "HTTPServer"

    def test_adjacent_single_letter_words_merge(self):
        # Consecutive capitals read back as one acronym, so one-letter words do not survive a round trip.
        assert Name("a_a").upper_camel_case() == "AA"
        assert Name("AA").lower_snake_case() == "aa"
        assert Name("a_b_value").upper_camel_case().lower_snake_case() == "ab_value"

    def test_empty(self):
        assert Name("").lower_camel_case() == ""
        assert Name("").upper_camel_case() == ""

    def test_is_str(self):
        name = Name("Order")
        assert name == "Order"
        assert hash(name) == hash("Order")
        assert {"Order": 1}[name] == 1
