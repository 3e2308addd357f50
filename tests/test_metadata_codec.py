"""Test module for the metadata codec"""
import json
import pytest
from cdmistore.dataobject import DataObject
from cdmistore.metadata_codec import metadata_from_json, metadata_to_json
from cdmistore.filedataobjectstore_exceptions import MetadataFormatError


@pytest.fixture(name="data_object")
def init_data_object():
    """Populated data object as written by a store."""
    data_object = DataObject(
        value="hello",
        mimetype="text/plain",
        object_id="a1b2c3d4",
        metadata={"colour": "blue"},
    )
    data_object.capabilities_uri = "/cdmi_capabilities/dataobject"
    data_object.size = "5"
    data_object.ctime = "2026-10-19T10:00:00"
    data_object.atime = "never"
    data_object.set_metadata("mimetype", "text/plain")
    return data_object


def test_metadata_to_json_document_shape(data_object):
    """Check the structural fields and metadata of the document."""
    document = json.loads(metadata_to_json(data_object))
    assert document["objectID"] == "a1b2c3d4"
    assert document["capabilitiesURI"] == "/cdmi_capabilities/dataobject"
    assert document["mimetype"] == "text/plain"
    assert document["metadata"]["cdmi_size"] == "5"
    assert document["metadata"]["cdmi_atime"] == "never"
    assert document["metadata"]["colour"] == "blue"


def test_metadata_to_json_excludes_value(data_object):
    """Check that the value is not written into the metadata document."""
    document = json.loads(metadata_to_json(data_object))
    assert "value" not in document
    assert "hello" not in document.values()


def test_metadata_from_json_rebuilds_object(data_object):
    """Check that parsing a document restores everything but the value."""
    parsed = metadata_from_json(metadata_to_json(data_object))
    assert parsed.object_id == data_object.object_id
    assert parsed.capabilities_uri == data_object.capabilities_uri
    assert parsed.mimetype == data_object.mimetype
    assert parsed.metadata == data_object.metadata
    assert parsed.value is None


def test_metadata_from_json_preserves_metadata_order(data_object):
    """Check that metadata keys keep their order."""
    parsed = metadata_from_json(metadata_to_json(data_object))
    assert list(parsed.metadata) == list(data_object.metadata)


def test_metadata_from_json_bytes(data_object):
    """Check that a utf-8 encoded document is accepted."""
    parsed = metadata_from_json(metadata_to_json(data_object).encode("utf-8"))
    assert parsed.object_id == "a1b2c3d4"


def test_metadata_from_json_invalid_json():
    """Check that an invalid JSON document raises MetadataFormatError."""
    with pytest.raises(MetadataFormatError):
        metadata_from_json("{not json")


def test_metadata_from_json_not_an_object():
    """Check that a JSON array raises MetadataFormatError."""
    with pytest.raises(MetadataFormatError):
        metadata_from_json("[1, 2]")


@pytest.mark.parametrize("missing", ["objectID", "metadata"])
def test_metadata_from_json_missing_field(data_object, missing):
    """Check that a document without a structural field raises MetadataFormatError."""
    document = json.loads(metadata_to_json(data_object))
    del document[missing]
    with pytest.raises(MetadataFormatError):
        metadata_from_json(json.dumps(document))


def test_metadata_from_json_metadata_not_an_object(data_object):
    """Check that a non-object 'metadata' field raises MetadataFormatError."""
    document = json.loads(metadata_to_json(data_object))
    document["metadata"] = "cdmi_size=5"
    with pytest.raises(MetadataFormatError):
        metadata_from_json(json.dumps(document))


def test_metadata_format_error_is_value_error():
    """Check that MetadataFormatError can be handled as a ValueError."""
    with pytest.raises(ValueError):
        metadata_from_json("")
