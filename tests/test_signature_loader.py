"""Testy modułu wczytującego sygnatury formatów."""

from __future__ import annotations

import json

import pytest

from media_blob.core.models import MediaType
from media_blob.detection.signatures import (
    SignatureMatcher,
    load_default_signatures,
    load_signatures,
)


def test_default_signatures_start_with_archive_then_images_then_video() -> None:
    signatures = load_default_signatures()
    identifiers = [signature.identifier for signature in signatures]

    assert identifiers[0] == "zip"
    assert identifiers.index("png") < identifiers.index("mp4")
    assert identifiers.index("jpeg") < identifiers.index("mp4")
    # More specific ftyp brands must be checked before the generic MPEG-4 rule.
    assert identifiers.index("quicktime") < identifiers.index("mp4")
    assert identifiers.index("m4a") < identifiers.index("mp4")


def test_default_signatures_are_cached() -> None:
    assert load_default_signatures() is load_default_signatures()


def test_load_signatures_from_custom_file(tmp_path) -> None:
    config = [
        {
            "id": "custom",
            "name": "Custom",
            "mime": "image/png",
            "extension": "png",
            "category": "image",
            "matchers": [
                {"type": "equals", "pattern": "414243", "encoding": "hex", "offset": 2}
            ],
        }
    ]
    path = tmp_path / "signatures.json"
    path.write_text(json.dumps(config), encoding="utf-8")

    signatures = load_signatures(path)

    assert len(signatures) == 1
    signature = signatures[0]
    assert signature.identifier == "custom"
    assert signature.media_type is MediaType.PNG
    assert isinstance(signature.matchers[0], SignatureMatcher)
    assert signature.matches(b"xxABC")
    assert not signature.matches(b"ABC")


def test_unknown_category_is_rejected(tmp_path) -> None:
    config = [{"id": "x", "mime": "a/b", "category": "weird", "matchers": [{"type": "equals", "pattern": "A"}]}]
    path = tmp_path / "signatures.json"
    path.write_text(json.dumps(config), encoding="utf-8")

    with pytest.raises(ValueError):
        load_signatures(path)


def test_other_category_maps_to_other_type() -> None:
    gif = next(signature for signature in load_default_signatures() if signature.identifier == "gif")
    assert gif.media_type is MediaType.OTHER


def test_matcher_contains_and_equals() -> None:
    contains = SignatureMatcher(type="contains", pattern=b"ftyp")
    anchored = SignatureMatcher(type="contains", pattern=b"ftyp", offset=4)
    equals = SignatureMatcher(type="equals", pattern=b"\xff\xd8")

    assert contains.matches(b"....ftyp")
    assert anchored.matches(b"\x00\x00\x00\x18ftyp")
    assert not anchored.matches(b"ftyp")
    assert equals.matches(b"\xff\xd8\xff")
    assert not equals.matches(b"\xff")


def test_matcher_unknown_type_raises() -> None:
    with pytest.raises(ValueError):
        SignatureMatcher(type="regex", pattern=b"x").matches(b"x")
