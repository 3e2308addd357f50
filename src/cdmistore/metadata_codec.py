"""Serialize data object metadata to and from the JSON sidecar document"""
import json
import logging
from cdmistore.dataobject import DataObject
from cdmistore.filedataobjectstore_exceptions import MetadataFormatError

# Structural fields of the metadata document
OBJECT_ID_FIELD = "objectID"
CAPABILITIES_URI_FIELD = "capabilitiesURI"
MIMETYPE_FIELD = "mimetype"
METADATA_FIELD = "metadata"
REQUIRED_FIELDS = (OBJECT_ID_FIELD, METADATA_FIELD)


def metadata_to_json(data_object):
    """Build the JSON metadata document for a data object. The object's value is
    not part of the document.

    :param DataObject data_object: Object to serialize.

    :return: JSON document.
    :rtype: str
    """
    document = {
        OBJECT_ID_FIELD: data_object.object_id,
        CAPABILITIES_URI_FIELD: data_object.capabilities_uri,
        MIMETYPE_FIELD: data_object.mimetype,
        METADATA_FIELD: dict(data_object.metadata),
    }
    return json.dumps(document, indent=2)


def metadata_from_json(document):
    """Rebuild a data object (without its value) from a JSON metadata document.

    :param document: JSON document as str or bytes.

    :raises MetadataFormatError: If the document is not valid JSON, is not a JSON
        object or is missing a required structural field.

    :return: Data object carrying the stored ID, capabilities URI, mimetype and
        metadata.
    :rtype: DataObject
    """
    if isinstance(document, (bytes, bytearray)):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as err:
            exception_string = f"metadata_codec - metadata_from_json: not utf-8: {err}"
            logging.error(exception_string)
            raise MetadataFormatError(exception_string, err) from err
    try:
        parsed = json.loads(document)
    except (TypeError, json.JSONDecodeError) as err:
        exception_string = f"metadata_codec - metadata_from_json: invalid JSON: {err}"
        logging.error(exception_string)
        raise MetadataFormatError(exception_string, err) from err

    if not isinstance(parsed, dict):
        exception_string = (
            "metadata_codec - metadata_from_json: expected a JSON object, got:"
            + f" {type(parsed).__name__}"
        )
        logging.error(exception_string)
        raise MetadataFormatError(exception_string)
    for field in REQUIRED_FIELDS:
        if field not in parsed:
            exception_string = (
                f"metadata_codec - metadata_from_json: missing required field: {field}"
            )
            logging.error(exception_string)
            raise MetadataFormatError(exception_string)
    if not isinstance(parsed[METADATA_FIELD], dict):
        exception_string = (
            f"metadata_codec - metadata_from_json: '{METADATA_FIELD}' must be a JSON object"
        )
        logging.error(exception_string)
        raise MetadataFormatError(exception_string)

    data_object = DataObject(
        mimetype=parsed.get(MIMETYPE_FIELD),
        object_id=parsed[OBJECT_ID_FIELD],
        metadata=parsed[METADATA_FIELD],
    )
    data_object.capabilities_uri = parsed.get(CAPABILITIES_URI_FIELD)
    return data_object
