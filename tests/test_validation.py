import base64

import pytest

from truthbubble.core.validation import extract_image, extract_text
from truthbubble.errors import ValidationError

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 32
WEBP = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 16
MAX = 1024


def b64(blob):
    return base64.b64encode(blob).decode()


class TestExtractText:
    def test_trims(self):
        assert extract_text({"text": "  hello world  "}).text == "hello world"

    @pytest.mark.parametrize("payload", [None, {}, {"text": ""}, {"text": "   "}, {"text": None}])
    def test_missing_text(self, payload):
        with pytest.raises(ValidationError) as exc:
            extract_text(payload)
        assert exc.value.status == 400

    @pytest.mark.parametrize("value", [["a"], {"a": 1}, True])
    def test_non_text_values_rejected(self, value):
        with pytest.raises(ValidationError):
            extract_text({"text": value})

    def test_numbers_are_stringified(self):
        assert extract_text({"text": 12345}).text == "12345"

    def test_min_length(self):
        with pytest.raises(ValidationError) as exc:
            extract_text({"text": "  too short  "}, min_length=10)
        assert "10" in exc.value.detail
        assert extract_text({"text": "exactly10!"}, min_length=10).text == "exactly10!"


class TestExtractImage:
    def test_plain_base64(self):
        img = extract_image({"image_base64": b64(PNG)}, MAX)
        assert img.mime_type == "image/png"
        assert img.data_b64 == b64(PNG)

    def test_data_url_prefix_is_stripped(self):
        img = extract_image({"image_base64": "data:image/jpeg;base64," + b64(JPEG)}, MAX)
        assert img.data_b64 == b64(JPEG)
        assert img.data_url == "data:image/jpeg;base64," + b64(JPEG)

    def test_mime_comes_from_bytes_not_prefix(self):
        img = extract_image({"image_base64": "data:image/jpeg;base64," + b64(PNG)}, MAX)
        assert img.mime_type == "image/png"

    def test_whitespace_and_newlines_removed(self):
        encoded = b64(WEBP)
        wrapped = encoded[:10] + "\n" + encoded[10:] + "  "
        img = extract_image({"image_base64": wrapped}, MAX)
        assert img.mime_type == "image/webp"
        assert img.data_b64 == encoded

    @pytest.mark.parametrize("payload", [None, {}, {"image_base64": ""}, {"image_base64": 42}])
    def test_missing_image(self, payload):
        with pytest.raises(ValidationError):
            extract_image(payload, MAX)

    def test_invalid_base64(self):
        with pytest.raises(ValidationError):
            extract_image({"image_base64": "not*base64!"}, MAX)

    def test_unknown_image_type(self):
        with pytest.raises(ValidationError) as exc:
            extract_image({"image_base64": b64(b"%PDF-1.7 not an image")}, MAX)
        assert exc.value.message == "Unsupported image encoding"

    def test_too_large(self):
        with pytest.raises(ValidationError) as exc:
            extract_image({"image_base64": b64(PNG + b"\x00" * 2048)}, MAX)
        assert exc.value.message == "Image too large"
