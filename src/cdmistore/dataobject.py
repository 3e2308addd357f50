"""In-memory representation of a CDMI data object"""

# Metadata keys maintained by the store, every other key is caller-supplied
SIZE_KEY = "cdmi_size"
CTIME_KEY = "cdmi_ctime"
ATIME_KEY = "cdmi_atime"
FILE_NAME_KEY = "fileName"
METADATA_FILE_NAME_KEY = "metadataFileName"
MIMETYPE_KEY = "mimetype"
SYSTEM_METADATA_KEYS = (
    SIZE_KEY,
    CTIME_KEY,
    ATIME_KEY,
    FILE_NAME_KEY,
    METADATA_FILE_NAME_KEY,
    MIMETYPE_KEY,
)


def _metadata_property(key, doc):
    def getter(self):
        return self.metadata.get(key)

    def setter(self, value):
        self.metadata[key] = value

    return property(getter, setter, doc=doc)


class DataObject:
    """A named unit of stored content with its CDMI metadata.

    A data object is built by the caller with `value` (and optionally `mimetype`,
    `object_id` or metadata entries) and handed to a store, which fills in the
    derived metadata. Stores also rebuild data objects from disk on lookup.

    :param str value: Content payload.
    :param str mimetype: Content type, None until a store assigns one.
    :param str object_id: Identifier, generated by the store when None.
    :param dict metadata: Caller-supplied metadata entries (str -> str).
    """

    def __init__(self, value=None, mimetype=None, object_id=None, metadata=None):
        self.value = value
        self.mimetype = mimetype
        self.capabilities_uri = None
        self.metadata = dict(metadata) if metadata else {}
        self._object_id = None
        if object_id is not None:
            self.object_id = object_id

    @property
    def object_id(self):
        """Opaque identifier of the object, assigned once."""
        return self._object_id

    @object_id.setter
    def object_id(self, object_id):
        if self._object_id is not None and object_id != self._object_id:
            raise ValueError(
                f"DataObject - object_id is immutable, already assigned: {self._object_id}"
            )
        self._object_id = object_id

    size = _metadata_property(SIZE_KEY, "Payload length ('cdmi_size').")
    ctime = _metadata_property(CTIME_KEY, "Creation timestamp ('cdmi_ctime').")
    atime = _metadata_property(ATIME_KEY, "Last access timestamp ('cdmi_atime').")
    file_name = _metadata_property(
        FILE_NAME_KEY, "Absolute path of the content file ('fileName')."
    )
    metadata_file_name = _metadata_property(
        METADATA_FILE_NAME_KEY,
        "Absolute path of the metadata file ('metadataFileName').",
    )

    def set_metadata(self, key, value):
        """Set a single metadata entry."""
        self.metadata[key] = value

    def get_metadata(self, key, default=None):
        return self.metadata.get(key, default)

    @property
    def user_metadata(self):
        """Metadata entries supplied by the caller (not maintained by the store)."""
        return {
            key: value
            for key, value in self.metadata.items()
            if key not in SYSTEM_METADATA_KEYS
        }

    def __repr__(self):
        return (
            f"DataObject(object_id={self.object_id!r}, mimetype={self.mimetype!r}, "
            + f"capabilities_uri={self.capabilities_uri!r}, metadata={self.metadata!r})"
        )
