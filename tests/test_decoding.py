import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import BaseModel, ValidationError

from ontology.coding.decoder import JSONLDDecoder
from ontology.coding.encoder import JSONLDEncoder
from ontology.coding.errors import DataCorruptedError, DecodingError, TypeMismatchError
from ontology.types.temporal import TemporalValue

EXPECTED = datetime(2024, 1, 1, tzinfo=timezone.utc)


class Meeting(BaseModel):
    title: str
    at: TemporalValue


def test_decodes_bare_string():
    temporal = JSONLDDecoder().decode(TemporalValue, '"2024-01-01T00:00:00.000Z"')
    assert temporal.value == EXPECTED


def test_decodes_value_attribute_object():
    temporal = JSONLDDecoder().decode(TemporalValue, '{"value": "2024-01-01T00:00:00.000Z"}')
    assert temporal.value == EXPECTED
    assert temporal == TemporalValue.from_jsonld("2024-01-01T00:00:00.000Z")


def test_linked_data_keys_are_ignored_on_input():
    node = {"@context": "https://example.org", "@type": "Other", "value": "2024-01-01T01:00:00.000+01:00"}
    temporal = TemporalValue.from_jsonld(node)
    assert temporal.value == EXPECTED
    assert temporal.time_zone == timezone(timedelta(hours=1))


def test_invalid_bare_string_is_data_corrupted():
    with pytest.raises(DataCorruptedError) as excinfo:
        TemporalValue.from_jsonld("not-a-date", ("events", 2))
    assert excinfo.value.debug_description == "Invalid date format"
    assert excinfo.value.coding_path == ("events", 2)


def test_invalid_date_inside_object_falls_back_to_bare_string():
    # The object shape fails on its date, so the whole object is retried as a
    # string, which is what the caller ends up seeing.
    with pytest.raises(TypeMismatchError) as excinfo:
        TemporalValue.from_jsonld({"value": "garbage"})
    assert "found a dictionary" in excinfo.value.debug_description


@pytest.mark.parametrize("node", [{"value": 5}, {"date": "2024-01-01T00:00:00.000Z"}, 1704067200, None, []])
def test_structural_mismatch_reports_type_mismatch(node):
    with pytest.raises(TypeMismatchError):
        TemporalValue.from_jsonld(node)


def test_invalid_json_is_data_corrupted():
    with pytest.raises(DataCorruptedError):
        JSONLDDecoder().decode(TemporalValue, "{not json")


def test_decoding_errors_are_value_errors():
    with pytest.raises(ValueError):
        TemporalValue.from_jsonld("2024-01-01")
    assert issubclass(DecodingError, ValueError)


def test_root_round_trip_preserves_instant():
    original = TemporalValue(value=datetime(2024, 3, 15, 10, 30, 0, 123000))
    text = JSONLDEncoder(time_zone_override="+05:30").encode(original)
    decoded = JSONLDDecoder().decode(TemporalValue, text)
    assert decoded.value == original.value
    assert decoded.time_zone == timezone(timedelta(hours=5, minutes=30))


def test_model_field_accepts_either_shape():
    from_string = Meeting.model_validate({"title": "sync", "at": "2024-01-01T00:00:00.000Z"})
    from_object = Meeting.model_validate(
        {"title": "sync", "at": {"@type": "TemporalValue", "value": "2024-01-01T00:00:00.000Z"}}
    )
    assert from_string.at == from_object.at
    assert from_string.at.value == EXPECTED


def test_model_field_rejects_invalid_date():
    with pytest.raises(ValidationError):
        Meeting.model_validate({"title": "sync", "at": "tomorrow"})


def test_decoder_wraps_model_validation_errors():
    decoder = JSONLDDecoder()
    meeting = decoder.decode(Meeting, '{"title": "sync", "at": "2024-01-01T00:00:00.000Z"}')
    assert meeting.at.value == EXPECTED
    with pytest.raises(DataCorruptedError):
        decoder.decode(Meeting, '{"title": "sync", "at": "tomorrow"}')


def test_decoder_rejects_unsupported_types():
    with pytest.raises(TypeError):
        JSONLDDecoder().decode(int, "1")


@pytest.mark.parametrize("at", [{"value": 0}, {"value": None}, {"date": "2024-01-01T00:00:00.000Z"}, 0])
def test_model_field_uses_the_same_decoding_rules(at):
    with pytest.raises(ValidationError):
        Meeting.model_validate({"title": "sync", "at": at})


def test_model_json_round_trip_keeps_the_value_zone():
    meeting = Meeting.model_validate({"title": "sync", "at": "2024-03-15T10:30:00.123+05:30"})
    text = meeting.model_dump_json()
    assert json.loads(text) == {"title": "sync", "at": "2024-03-15T10:30:00.123+05:30"}
    restored = Meeting.model_validate_json(text)
    assert restored == meeting
    assert restored.at.time_zone == timezone(timedelta(hours=5, minutes=30))


def test_model_dump_renders_bare_strings_and_honours_context_override():
    meeting = Meeting(title="sync", at=TemporalValue.from_string("2024-01-01T00:00:00.000Z"))
    assert meeting.model_dump() == {"title": "sync", "at": "2024-01-01T00:00:00.000Z"}
    dumped = meeting.model_dump(mode="json", context={"time_zone_override": "+02:00"})
    assert dumped["at"] == "2024-01-01T02:00:00.000+02:00"


def test_decoder_reports_the_field_path_of_nested_errors():
    with pytest.raises(DataCorruptedError) as excinfo:
        JSONLDDecoder().decode(Meeting, '{"title": "sync", "at": {"value": "garbage"}}')
    assert excinfo.value.coding_path == ("at",)
