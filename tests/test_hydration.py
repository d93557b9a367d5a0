"""Tests for sprout.server.hydration — the per-request context marker."""

import pytest

from sprout.server.hydration import (
    decode_context,
    encode_context,
    hydration_marker,
    inject_context,
)


class TestEncodeContext:
    def test_empty_object(self) -> None:
        assert encode_context({}) == "123,125"

    def test_utf8_bytes(self) -> None:
        # "é" is two bytes in UTF-8
        assert encode_context("é") == "34,195,169,34"
        assert decode_context(encode_context({"name": "é"})) == {"name": "é"}

    def test_only_digits_and_commas(self) -> None:
        value = encode_context({"q": '"<script>"'})
        assert set(value) <= set("0123456789,")

    def test_decode_empty(self) -> None:
        assert decode_context("") is None

    def test_unserializable(self) -> None:
        with pytest.raises(TypeError):
            encode_context({"x": object()})


class TestInjectContext:
    def test_marker_before_body_close(self) -> None:
        doc = inject_context("<html><body><p>x</p></body></html>", {}, "/")

        assert doc.endswith("></script></body></html>")
        assert doc.index('id="__SPROUT__"') > doc.index("<p>x</p>")

    def test_uses_last_body_close(self) -> None:
        doc = "<body><pre>&lt;/body&gt; </body></pre></body>"
        out = inject_context(doc, {}, "/")

        assert out.rfind("__SPROUT__") > out.index("</pre>")

    def test_no_body_appends(self) -> None:
        assert inject_context("<p>x</p>", {}, "/").startswith("<p>x</p><script")

    def test_route_escaped(self) -> None:
        marker = hydration_marker({}, '/a"b')
        assert 'data-sprout-route="/a&quot;b"' in marker
