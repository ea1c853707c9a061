"""Tests for the protocol codec."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ofcourse.codec import decode, encode_output, encode_versions
from ofcourse.exceptions import DecodeError, EncodeError
from ofcourse.models import CheckInput, InInput, InOutOutput, NameVal, OutInput


class TestDecode:
    """Tests for decoding input envelopes."""

    def test_check_input_null_version(self) -> None:
        """A null version decodes as unknown, not empty."""
        result = decode(CheckInput, b'{"source":{},"version":null}')

        assert result.source == {}
        assert result.version is None

    def test_check_input_empty_version(self) -> None:
        """An empty version object decodes as a known, empty version."""
        result = decode(CheckInput, b'{"source":{},"version":{}}')

        assert result.version == {}
        assert result.version is not None

    def test_in_input_all_fields(self) -> None:
        """All fields of an in envelope are decoded."""
        result = decode(
            InInput,
            b'{"source":{"uri":"s3://b","log_level":"debug","depth":3},'
            b'"params":{"skip":true},"version":{"ref":"abc"}}',
        )

        assert result.source == {"uri": "s3://b", "log_level": "debug", "depth": 3}
        assert result.params == {"skip": True}
        assert result.version == {"ref": "abc"}

    def test_missing_fields_default(self) -> None:
        """Missing fields take their empty defaults."""
        result = decode(InInput, b"{}")

        assert result.source == {}
        assert result.params == {}
        assert result.version is None

    def test_null_source_and_params(self) -> None:
        """Null source and params read as empty mappings."""
        result = decode(OutInput, b'{"source":null,"params":null}')

        assert result.source == {}
        assert result.params == {}

    def test_extra_fields_ignored(self) -> None:
        """Unknown fields are ignored, including version on out."""
        result = decode(OutInput, b'{"source":{},"params":{},"version":{"a":"b"},"extra":1}')

        assert result.source == {}
        assert not hasattr(result, "version")

    def test_accepts_text(self) -> None:
        """Input may be given as str as well as bytes."""
        result = decode(CheckInput, '{"source":{"a":"b"}}')

        assert result.source == {"a": "b"}

    @pytest.mark.parametrize(
        "data",
        [
            b"",
            b"not json",
            b'{"source":',
            b"[]",
            b'"source"',
            b"null",
        ],
    )
    def test_malformed_input(self, data: bytes) -> None:
        """Anything but a JSON object raises DecodeError."""
        with pytest.raises(DecodeError):
            decode(CheckInput, data)

    def test_non_string_version_value(self) -> None:
        """Version values must be strings."""
        with pytest.raises(DecodeError) as exc_info:
            decode(CheckInput, b'{"source":{},"version":{"count":1}}')

        assert "version.count" in str(exc_info.value)

    def test_source_must_be_object(self) -> None:
        """A source that is not an object is rejected."""
        with pytest.raises(DecodeError):
            decode(CheckInput, b'{"source":[1,2]}')

    def test_error_message_is_one_line(self) -> None:
        """Decode errors produce a single-line message."""
        with pytest.raises(DecodeError) as exc_info:
            decode(InInput, b'{"source":1,"params":2,"version":{"a":3}}')

        assert "\n" not in str(exc_info.value)

    def test_envelope_is_frozen(self) -> None:
        """A decoded envelope cannot be reassigned."""
        result = decode(CheckInput, b'{"source":{}}')

        with pytest.raises(ValidationError):
            result.version = {}


class TestEncodeVersions:
    """Tests for encoding check output."""

    def test_single_version(self) -> None:
        assert encode_versions([{"count": "1"}]) == b'[{"count":"1"}]'

    def test_preserves_order(self) -> None:
        """Versions are written in the order the resource returned them."""
        versions = [{"ref": "a"}, {"ref": "b"}, {"ref": "c"}]

        assert encode_versions(versions) == b'[{"ref":"a"},{"ref":"b"},{"ref":"c"}]'

    def test_empty_list(self) -> None:
        assert encode_versions([]) == b"[]"

    def test_none_is_empty_array(self) -> None:
        """None never encodes as null."""
        assert encode_versions(None) == b"[]"

    def test_known_empty_version(self) -> None:
        assert encode_versions([{}]) == b"[{}]"

    def test_non_string_value(self) -> None:
        with pytest.raises(EncodeError):
            encode_versions([{"count": 1}])

    def test_not_a_list_of_mappings(self) -> None:
        with pytest.raises(EncodeError):
            encode_versions(["count"])


class TestEncodeOutput:
    """Tests for encoding in/out output."""

    def test_version_and_metadata(self) -> None:
        output = encode_output({"c": "d"}, [NameVal(name="e", value="f")])

        assert output == b'{"version":{"c":"d"},"metadata":[{"name":"e","value":"f"}]}'

    def test_known_empty(self) -> None:
        """Empty version and metadata encode as {} and [], never null."""
        assert encode_output({}, []) == b'{"version":{},"metadata":[]}'

    def test_unknown_version(self) -> None:
        """An unknown version encodes as null."""
        assert encode_output(None, []) == b'{"version":null,"metadata":[]}'

    def test_none_metadata(self) -> None:
        """Metadata of None still encodes as an array."""
        assert encode_output({"a": "b"}, None) == b'{"version":{"a":"b"},"metadata":[]}'

    def test_metadata_order_and_duplicates(self) -> None:
        """Metadata keeps its order and allows repeated names."""
        metadata = [
            NameVal(name="z", value="1"),
            NameVal(name="a", value="2"),
            NameVal(name="z", value="3"),
        ]

        output = encode_output({}, metadata)

        assert output == (
            b'{"version":{},"metadata":['
            b'{"name":"z","value":"1"},{"name":"a","value":"2"},{"name":"z","value":"3"}]}'
        )

    def test_metadata_from_dicts(self) -> None:
        """Plain dicts with name and value are accepted as metadata."""
        output = encode_output({}, [{"name": "e", "value": "f"}])

        assert output == b'{"version":{},"metadata":[{"name":"e","value":"f"}]}'

    def test_invalid_version(self) -> None:
        with pytest.raises(EncodeError):
            encode_output({"count": 7}, [])

    def test_invalid_metadata(self) -> None:
        with pytest.raises(EncodeError):
            encode_output({}, [("e", "f")])

    def test_round_trip(self) -> None:
        """Encoded output decodes back to the same version and metadata."""
        version = {"ref": "abc", "path": "a/b"}
        metadata = [NameVal(name="ref", value="abc"), NameVal(name="ref", value="")]

        decoded = InOutOutput.model_validate_json(encode_output(version, metadata))

        assert decoded.version == version
        assert decoded.metadata == metadata
