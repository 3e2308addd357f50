"""Core module for FileDataObjectStore"""

import atexit
import os
import logging
from datetime import datetime
from tempfile import NamedTemporaryFile
import yaml
from cdmistore import dataobjectstore_config as config
from cdmistore.dataobject import MIMETYPE_KEY, DataObject
from cdmistore.dataobjectstore import DataObjectStore
from cdmistore.metadata_codec import metadata_from_json, metadata_to_json
from cdmistore.objectid import get_object_id
from cdmistore.path_resolver import resolve_object_path
from cdmistore.filedataobjectstore_exceptions import (
    ConflictError,
    ObjectReadError,
    ObjectWriteError,
    UnsupportedOperation,
)


class FileDataObjectStore(DataObjectStore):
    """FileDataObjectStore stores CDMI data objects on the local filesystem. Every
    object is backed by two files inside its container directory:

    - the content file, named after the object: `<store_path>/<container>/<name>`
    - the metadata file, a JSON document: `<store_path>/<container>/.<name>`

    Containers are plain directories below `store_path` and must be created by the
    caller before objects can be stored in them.

    FileDataObjectStore initializes using a given properties dictionary containing the
    required keys (see Args). The store keeps no state between calls besides the
    filesystem itself.

    :param dict properties: A Python dictionary with the following keys (and values):
        - store_path (str): Base directory of the store, must exist.
        - store_object_id_length (int): Length of generated object IDs.
        - store_default_mimetype (str): Mimetype of CDMI objects created without one.
    :param callable object_id_generator: Optional callable that takes a length and
        returns a new object ID. Defaults to `cdmistore.objectid.get_object_id`.
    """

    # Property (store configuration) requirements
    property_required_keys = [
        "store_path",
        "store_object_id_length",
        "store_default_mimetype",
    ]
    # Permissions settings for writing files
    fmode = 0o664
    # Operations backed by this store, every other DataObjectStore operation
    # raises `UnsupportedOperation`
    implemented_operations = (
        "create_by_path",
        "create_non_cdmi_by_path",
        "find_by_path",
    )

    def __init__(self, properties=None, object_id_generator=None):
        if properties:
            checked_properties = self._validate_properties(properties)
            (
                prop_store_path,
                prop_object_id_length,
                prop_default_mimetype,
            ) = [
                checked_properties[property_name]
                for property_name in self.property_required_keys
            ]
            if not os.path.isdir(prop_store_path):
                exception_string = (
                    "FileDataObjectStore - store_path must be an existing directory."
                    + f" store_path: {prop_store_path}"
                )
                logging.critical(exception_string)
                raise FileNotFoundError(exception_string)

            self.root = os.path.abspath(prop_store_path)
            self.object_id_length = prop_object_id_length
            self.default_mimetype = prop_default_mimetype
            self.object_id_generator = object_id_generator or get_object_id
            logging.debug(
                "FileDataObjectStore - Initialization success. Store root: %s", self.root
            )
        else:
            # Cannot instantiate FileDataObjectStore without config
            exception_string = (
                "FileDataObjectStore - properties must be supplied."
                + f" Properties: {properties}"
            )
            logging.debug(exception_string)
            raise ValueError(exception_string)

    # Configuration and Related Methods

    @staticmethod
    def load_properties(store_yaml_path):
        """Load store properties from a YAML file. Keys missing from the file fall back
        to the defaults in `cdmistore.dataobjectstore_config`.

        :param str store_yaml_path: Path to the YAML properties file.

        :return: Properties with the following keys (and values):
            - ``store_path`` (str): Base directory of the store.
            - ``store_object_id_length`` (int): Length of generated object IDs.
            - ``store_default_mimetype`` (str): Default mimetype of CDMI objects.
        :rtype: dict
        """
        if not os.path.exists(store_yaml_path):
            exception_string = (
                "FileDataObjectStore - load_properties: properties file not found:"
                + f" {store_yaml_path}"
            )
            logging.critical(exception_string)
            raise FileNotFoundError(exception_string)

        with open(store_yaml_path, "r", encoding="utf-8") as store_yaml_file:
            yaml_data = yaml.safe_load(store_yaml_file) or {}
        if not isinstance(yaml_data, dict):
            exception_string = (
                "FileDataObjectStore - load_properties: expected a mapping in:"
                + f" {store_yaml_path}"
            )
            logging.critical(exception_string)
            raise ValueError(exception_string)

        defaults = {
            "store_path": config.STORE_PATH,
            "store_object_id_length": config.OBJECT_ID_LENGTH,
            "store_default_mimetype": config.DEFAULT_MIMETYPE,
        }
        store_yaml_dict = {}
        for key in FileDataObjectStore.property_required_keys:
            store_yaml_dict[key] = yaml_data.get(key, defaults[key])
        logging.debug(
            "FileDataObjectStore - load_properties: Loaded properties from: %s",
            store_yaml_path,
        )
        return store_yaml_dict

    def _validate_properties(self, properties):
        """Validate a properties dictionary by checking if it contains all the
        required keys and usable values.

        :param dict properties: Dictionary containing store properties.

        :raises KeyError: If key is missing from the required keys.
        :raises ValueError: If value is missing or invalid for a required key.

        :return: The given properties object (that has been validated).
        :rtype: dict
        """
        if not isinstance(properties, dict):
            exception_string = (
                "FileDataObjectStore - _validate_properties: Invalid argument -"
                + " expected a dictionary."
            )
            logging.debug(exception_string)
            raise ValueError(exception_string)
        for key in self.property_required_keys:
            if key not in properties:
                exception_string = (
                    "FileDataObjectStore - _validate_properties: Missing required"
                    + f" key: {key}."
                )
                logging.debug(exception_string)
                raise KeyError(exception_string)
            if properties.get(key) is None:
                exception_string = (
                    "FileDataObjectStore - _validate_properties: Value for key:"
                    + f" {key} is none."
                )
                logging.debug(exception_string)
                raise ValueError(exception_string)
        id_length = properties["store_object_id_length"]
        if not isinstance(id_length, int) or isinstance(id_length, bool) or id_length < 1:
            exception_string = (
                "FileDataObjectStore - _validate_properties: store_object_id_length"
                + f" must be an integer > 0, got: {id_length}."
            )
            logging.debug(exception_string)
            raise ValueError(exception_string)
        return properties

    # Public API / DataObjectStore Interface Methods

    def supported_operations(self):
        """Return the names of the data object operations this store implements.

        :rtype: tuple
        """
        return self.implemented_operations

    def create_by_path(self, path, data_object):
        logging.debug(
            "FileDataObjectStore - create_by_path: Request to create object at: %s",
            path,
        )
        return self._create_data_object(path, data_object, "create_by_path")

    def create_non_cdmi_by_path(self, path, content_type, data_object):
        logging.debug(
            "FileDataObjectStore - create_non_cdmi_by_path: Request to create object"
            + " at: %s with content type: %s",
            path,
            content_type,
        )
        return self._create_data_object(
            path,
            data_object,
            "create_non_cdmi_by_path",
            force_mimetype=True,
            content_type=content_type,
        )

    def create_by_id(self, object_id, data_object):
        self._unsupported("create_by_id")

    def delete_by_path(self, path):
        self._unsupported("delete_by_path")

    def find_by_path(self, path):
        logging.debug("FileDataObjectStore - find_by_path: Request to find: %s", path)
        object_path = resolve_object_path(path)
        try:
            _, object_file, metadata_file = self._get_file_paths(object_path)
        except (OSError, ValueError) as err:
            exception_string = (
                f"FileDataObjectStore - find_by_path: Cannot get Object @{path}"
                + f" error: {err}"
            )
            logging.error(exception_string)
            raise ObjectReadError(exception_string, path, err) from err

        if not os.path.exists(metadata_file):
            logging.debug(
                "FileDataObjectStore - find_by_path: No metadata file found at: %s",
                metadata_file,
            )
            return None
        if not os.path.exists(object_file):
            exception_string = f"Object File <{object_file}> doesn't exist"
            logging.error("FileDataObjectStore - find_by_path: %s", exception_string)
            raise ConflictError(exception_string)

        try:
            with open(metadata_file, "rb") as metadata_stream:
                data_object = metadata_from_json(metadata_stream.read())
            with open(object_file, "r", encoding="utf-8", newline="") as object_stream:
                data_object.value = object_stream.read()
        except (OSError, ValueError) as err:
            exception_string = (
                f"FileDataObjectStore - find_by_path: Cannot read Object @{path}"
                + f" error: {err}"
            )
            logging.error(exception_string)
            raise ObjectReadError(exception_string, path, err) from err

        # Access time is only updated on the returned object
        data_object.atime = self._timestamp()
        logging.info("FileDataObjectStore - find_by_path: Retrieved object: %s", path)
        return data_object

    def find_by_object_id(self, object_id):
        self._unsupported("find_by_object_id")

    # FileDataObjectStore Core Methods

    def _create_data_object(
        self, path, data_object, method, force_mimetype=False, content_type=None
    ):
        """Check preconditions, populate the derived metadata of `data_object` and
        write its content and metadata files.

        :param str path: Logical path of the data object.
        :param DataObject data_object: Object to create.
        :param str method: Name of the calling operation, used in log messages.
        :param bool force_mimetype: Store `content_type` as given (non-CDMI create)
            instead of keeping the object's mimetype or the store default.
        :param str content_type: Mimetype stored when `force_mimetype` is set.

        :return: The populated data object.
        :rtype: DataObject
        """
        self._check_data_object(data_object, method)
        object_path = resolve_object_path(path)
        try:
            container_directory, object_file, metadata_file = self._get_file_paths(
                object_path
            )
        except (OSError, ValueError) as err:
            exception_string = (
                f"FileDataObjectStore - {method}: Cannot write Object @{path}"
                + f" error: {err}"
            )
            logging.error(exception_string)
            raise ObjectWriteError(exception_string, path, err) from err

        if not os.path.isdir(container_directory):
            exception_string = f"Container <{container_directory}> doesn't exist"
            logging.error("FileDataObjectStore - %s: %s", method, exception_string)
            raise ConflictError(exception_string)
        if os.path.exists(object_file):
            exception_string = f"Object File <{object_file}> exists"
            logging.error("FileDataObjectStore - %s: %s", method, exception_string)
            raise ConflictError(exception_string)

        if data_object.object_id is None:
            data_object.object_id = self.object_id_generator(self.object_id_length)
        data_object.capabilities_uri = config.CAPABILITIES_URI
        if data_object.value is None:
            data_object.value = ""
        data_object.size = str(len(str(data_object.value)))
        data_object.ctime = self._timestamp()
        data_object.atime = config.NEVER_ACCESSED
        data_object.file_name = object_file
        data_object.metadata_file_name = metadata_file
        if force_mimetype:
            data_object.mimetype = content_type
        elif data_object.mimetype is None:
            data_object.mimetype = self.default_mimetype
        data_object.set_metadata(MIMETYPE_KEY, data_object.mimetype)

        try:
            self._put_data_object(data_object, object_path, container_directory)
        except (OSError, ValueError) as err:
            exception_string = (
                f"FileDataObjectStore - {method}: Cannot write Object @{path}"
                + f" error: {err}"
            )
            logging.error(exception_string)
            raise ObjectWriteError(exception_string, path, err) from err

        logging.info(
            "FileDataObjectStore - %s: Created object: %s with object ID: %s",
            method,
            path,
            data_object.object_id,
        )
        return data_object

    def _put_data_object(self, data_object, object_path, container_directory):
        """Write the content and metadata files of a data object. Both files are
        first written to temporary files in the container directory and then moved
        into place, content first. A metadata file is therefore never published
        without its content file; if publishing the metadata fails, the content file
        is removed again.

        :param DataObject data_object: Populated data object.
        :param ObjectPath object_path: Resolved location of the object.
        :param str container_directory: Absolute path of the container directory.
        """
        object_file = data_object.file_name
        metadata_file = data_object.metadata_file_name
        tmp_prefix = object_path.metadata_file_name + "."
        content_tmp = None
        metadata_tmp = None
        content_cleanup = None
        metadata_cleanup = None
        try:
            content_tmp, content_cleanup = self._mktmpfile(
                container_directory, tmp_prefix
            )
            with content_tmp as tmp_file:
                tmp_file.write(self._cast_to_bytes(str(data_object.value)))
            metadata_tmp, metadata_cleanup = self._mktmpfile(
                container_directory, tmp_prefix
            )
            with metadata_tmp as tmp_file:
                tmp_file.write(self._cast_to_bytes(metadata_to_json(data_object)))

            os.replace(content_tmp.name, object_file)
            logging.debug(
                "FileDataObjectStore - _put_data_object: Content file written: %s",
                object_file,
            )
            try:
                os.replace(metadata_tmp.name, metadata_file)
            except OSError:
                logging.error(
                    "FileDataObjectStore - _put_data_object: Unable to publish metadata"
                    + " file: %s, removing content file: %s",
                    metadata_file,
                    object_file,
                )
                os.remove(object_file)
                raise
            logging.debug(
                "FileDataObjectStore - _put_data_object: Metadata file written: %s",
                metadata_file,
            )
        finally:
            for tmp, cleanup in (
                (content_tmp, content_cleanup),
                (metadata_tmp, metadata_cleanup),
            ):
                if tmp is not None and os.path.exists(tmp.name):
                    os.remove(tmp.name)
                if cleanup is not None:
                    atexit.unregister(cleanup)

    def _mktmpfile(self, path, prefix):
        """Create a temporary file in the given directory ready to be written.

        :param str path: Directory to create the file in.
        :param str prefix: Prefix of the temporary file name.

        :return: file object - object with a file-like interface, and the exit
            callback deleting it. The caller unregisters the callback with
            `atexit.unregister` once the file has been moved or removed.
        :rtype: tuple
        """
        tmp = NamedTemporaryFile(dir=path, prefix=prefix, suffix=".tmp", delete=False)

        # Delete tmp file if python interpreter crashes or thread is interrupted
        def delete_tmp_file():
            if os.path.exists(tmp.name):
                os.remove(tmp.name)

        atexit.register(delete_tmp_file)

        # Ensure tmp file is created with desired permissions
        if self.fmode is not None:
            oldmask = os.umask(0)
            try:
                os.chmod(tmp.name, self.fmode)
            except OSError:
                tmp.close()
                delete_tmp_file()
                atexit.unregister(delete_tmp_file)
                raise
            finally:
                os.umask(oldmask)
        return tmp, delete_tmp_file

    # FileDataObjectStore Utility & Supporting Methods

    def _get_file_paths(self, object_path):
        """Build the absolute paths backing a data object.

        :param ObjectPath object_path: Resolved location of the object.

        :return: Container directory, content file and metadata file paths.
        :rtype: tuple
        """
        container_directory = os.path.abspath(
            os.path.join(self.root, object_path.container_path.lstrip("/"))
        )
        object_file = os.path.abspath(
            os.path.join(self.root, object_path.object_path.lstrip("/"))
        )
        metadata_file = os.path.join(
            container_directory, object_path.metadata_file_name
        )
        logging.debug(
            "FileDataObjectStore - _get_file_paths: Container: %s, Object: %s,"
            + " Metadata: %s",
            container_directory,
            object_file,
            metadata_file,
        )
        return container_directory, object_file, metadata_file

    @staticmethod
    def _unsupported(operation):
        exception_string = f"FileDataObjectStore.{operation}()"
        logging.error(
            "FileDataObjectStore - %s: Operation is not supported.", operation
        )
        raise UnsupportedOperation(exception_string)

    @staticmethod
    def _timestamp():
        """Return the current local time formatted as ISO-8601 (seconds precision)."""
        return datetime.now().strftime(config.TIMESTAMP_FORMAT)

    @staticmethod
    def _check_data_object(data_object, method):
        """Check that the given argument is a `DataObject`."""
        if not isinstance(data_object, DataObject):
            exception_string = (
                f"FileDataObjectStore - {method}: data_object must be a DataObject,"
                + f" got: {type(data_object)}."
            )
            logging.error(exception_string)
            raise TypeError(exception_string)

    @staticmethod
    def _cast_to_bytes(text):
        """Convert text to a sequence of bytes using utf-8 encoding.

        :param str text: String to convert.
        :return: Bytes with utf-8 encoding.
        :rtype: bytes
        """
        if not isinstance(text, bytes):
            text = bytes(text, "utf8")
        return text
