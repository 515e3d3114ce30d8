"""
ScatterBrain Backend - Identifier Unit Tests
============================================

What we test:
    ✅ Generated ids are random version-4 UUIDs and never nil
    ✅ Parsing accepts canonical text and rejects garbage with ValidationError
    ✅ Hex-only, braced and urn-prefixed spellings are rejected
"""

import uuid

import pytest

from scatterbrain.exceptions import ValidationError
from scatterbrain.identifiers import format_thought_id, new_thought_id, parse_thought_id


class TestNewThoughtId:

    def test_version_four_and_not_nil(self):
        thought_id = new_thought_id()
        assert thought_id.version == 4
        assert thought_id != uuid.UUID(int=0)

    def test_unique_across_calls(self):
        ids = {new_thought_id() for _ in range(1000)}
        assert len(ids) == 1000


class TestParseThoughtId:

    def test_parses_canonical_text(self):
        original = new_thought_id()
        assert parse_thought_id(format_thought_id(original)) == original

    def test_format_is_lowercase_hyphenated(self):
        text = format_thought_id(uuid.UUID("6F1E2C9A-3B7D-4E0F-9A1B-2C3D4E5F6A7B"))
        assert text == "6f1e2c9a-3b7d-4e0f-9a1b-2c3d4e5f6a7b"

    @pytest.mark.parametrize("bad", ["", "not-a-uuid", "1234", "6f1e2c9a-3b7d-4e0f-9a1b"])
    def test_rejects_malformed_text(self, bad):
        with pytest.raises(ValidationError) as exc_info:
            parse_thought_id(bad)
        assert exc_info.value.field == "id"

    def test_accepts_uppercase_canonical_text(self):
        original = new_thought_id()
        assert parse_thought_id(format_thought_id(original).upper()) == original

    @pytest.mark.parametrize(
        "spelling",
        [
            lambda u: u.hex,
            lambda u: "{" + str(u) + "}",
            lambda u: "urn:uuid:" + str(u),
            lambda u: " " + str(u),
        ],
        ids=["hex_only", "braced", "urn_prefix", "leading_space"],
    )
    def test_rejects_non_canonical_spellings(self, spelling):
        with pytest.raises(ValidationError) as exc_info:
            parse_thought_id(spelling(new_thought_id()))
        assert exc_info.value.field == "id"

    def test_rejects_non_string(self):
        with pytest.raises(ValidationError):
            parse_thought_id(None)
