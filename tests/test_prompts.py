from truthbubble.core.prompts import (
    NO_FABRICATION,
    build_image_messages,
    build_label_messages,
    build_traffic_messages,
)
from truthbubble.models import ImageSubject


class TestPrompts:
    def test_traffic_messages(self, search_results):
        system, user = build_traffic_messages("the claim", "", search_results)
        assert system["role"] == "system"
        assert "strict JSON" in system["content"]
        content = user["content"]
        assert "POST_TEXT:\nthe claim" in content
        assert "SEARCH_SUMMARY:\nN/A" in content
        assert search_results[0].url in content
        assert "verdict, confidence, rationale, sources" in content
        assert NO_FABRICATION in content

    def test_label_messages(self, search_results):
        system, user = build_label_messages("the claim", search_results)
        assert '"label":"GREEN|YELLOW|RED"' in system["content"]
        assert NO_FABRICATION in system["content"]
        assert "1. r title 0\nhttps://example.org/r/0\nr snippet 0" in user["content"]

    def test_label_messages_without_results(self):
        _, user = build_label_messages("the claim", [])
        assert "No web results." in user["content"]

    def test_image_messages(self):
        image = ImageSubject(data_b64="AAAA", mime_type="image/png")
        system, user = build_image_messages(image)
        assert "TRUE|MISLEADING|FALSE|UNVERIFIABLE" in system["content"]
        assert NO_FABRICATION in system["content"]
        text_part, image_part = user["content"]
        assert text_part["type"] == "text"
        assert image_part == {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}}
