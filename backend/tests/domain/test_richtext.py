from datetime import datetime, timezone

import pytest

from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.domain.richtext import (
    RichText,
    RichTextFormat,
    RichTextMetadata,
    validate_html,
    validate_structured_json,
)

OLD = datetime(2020, 1, 1, tzinfo=timezone.utc)


def test_allowed_html_is_valid():
    text = RichText.create('<p>Hello <strong>world</strong> <a href="https://x.io">x</a></p>')
    assert text.validate() == []


def test_script_and_style_tags_are_rejected():
    errors = validate_html("<p>ok</p><script>alert(1)</script><style>p{}</style>")
    assert "script, style tags are not allowed" in errors


def test_tags_outside_allow_list_are_reported():
    errors = validate_html("<table><tr><td>1</td></tr></table>")
    assert errors == ["Invalid HTML tags found: table, tr, td"]


def test_structured_json_requires_type_and_body():
    assert validate_structured_json('{"type": "doc", "content": [{"text": "hi"}]}') == []
    assert validate_structured_json('{"type": "doc", "children": [1]}') == []
    assert validate_structured_json('{"type": "doc"}') == [
        "Structured JSON must have content or children field"
    ]
    assert validate_structured_json('{"content": [1]}') == ["Structured JSON must have a type field"]
    assert validate_structured_json("[1, 2]") == ["Structured JSON content must be an object"]
    assert validate_structured_json("{not json") == ["Invalid JSON format"]


def test_json_format_is_checked_through_validate():
    text = RichText.create('{"type": "doc"}', RichTextFormat.JSON)
    assert text.validate() == ["Structured JSON must have content or children field"]


def test_markdown_and_plain_only_need_data():
    assert RichText.create("# Title", RichTextFormat.MARKDOWN).validate() == []
    assert RichText.create("<anything>", RichTextFormat.PLAIN).validate() == []


def test_unknown_format_and_empty_data_are_rejected():
    text = RichText.from_value({"format": "rtf", "data": ""}, "unused")
    errors = text.validate()
    assert "format must be one of: html, markdown, json, plain" in errors
    assert "data must be a non-empty string" in errors


def test_from_value_accepts_bare_strings_and_defaults():
    assert RichText.from_value(None, "<p>default</p>").data == "<p>default</p>"
    text = RichText.from_value("<p>given</p>", "<p>default</p>")
    assert text.format is RichTextFormat.HTML
    assert text.data == "<p>given</p>"


def test_rewritten_refreshes_last_modified_and_keeps_created():
    text = RichText(
        format=RichTextFormat.HTML,
        data="<p>before</p>",
        metadata=RichTextMetadata(version="2.0", created_at=OLD, last_modified_at=OLD),
    )

    updated = text.rewritten({"data": "<p>after</p>"})

    assert updated.data == "<p>after</p>"
    assert updated.format is RichTextFormat.HTML
    assert updated.metadata.created_at == OLD
    assert updated.metadata.version == "2.0"
    assert updated.metadata.last_modified_at > OLD
    # the original is untouched
    assert text.data == "<p>before</p>"
    assert text.metadata.last_modified_at == OLD


def test_wire_shape_round_trips():
    text = RichText(
        format=RichTextFormat.MARKDOWN,
        data="*hi*",
        metadata=RichTextMetadata(created_at=OLD, last_modified_at=OLD),
    )
    wire = text.to_dict()

    assert wire["metadata"]["createdAt"] == "2020-01-01T00:00:00+00:00"
    assert RichText.from_dict(wire).to_dict() == wire


def test_legacy_metadata_keys_are_read():
    meta = RichTextMetadata.from_dict({"created": "2021-05-01T10:00:00Z", "lastModified": "2021-05-02T10:00:00Z"})
    assert meta.created_at == datetime(2021, 5, 1, 10, tzinfo=timezone.utc)
    assert meta.last_modified_at == datetime(2021, 5, 2, 10, tzinfo=timezone.utc)


def test_unparseable_metadata_timestamp_is_reported():
    text = RichText.from_value({"data": "<p>x</p>", "metadata": {"createdAt": "yesterday-ish"}}, "")
    assert "metadata.createdAt must be an ISO-8601 timestamp" in text.validate()


@pytest.mark.parametrize("metadata", ["junk", 7, ["createdAt"]])
def test_non_object_metadata_is_rejected(metadata):
    with pytest.raises(ValidationFailed) as exc:
        RichText.from_value({"data": "<p>x</p>", "metadata": metadata}, "")
    assert exc.value.errors == ["metadata must be an object"]
