"""DataObjectStore Interface"""
from abc import ABC, abstractmethod
import importlib.metadata
import importlib.util


class DataObjectStore(ABC):
    """DataObjectStore is the data access layer for CDMI data objects. A data object
    is addressed by a logical path ('<container path>/<object name>') and carries a
    value plus CDMI metadata (object ID, timestamps, mimetype, size).

    Operations that a store deliberately does not provide raise `UnsupportedOperation`
    rather than being left out, so that callers can report capabilities accurately."""

    @staticmethod
    def version():
        """Return the version number"""
        __version__ = importlib.metadata.version("cdmistore")
        return __version__

    @abstractmethod
    def create_by_path(self, path, data_object):
        """Create a data object at the given logical path. The container of the object
        must already exist and no object may exist at the path yet.

        Before persisting, `create_by_path` fills in the derived metadata of the given
        `data_object`: an object ID (if absent), the capabilities URI, 'cdmi_size',
        'cdmi_ctime', 'cdmi_atime' (set to 'never'), the absolute 'fileName' and
        'metadataFileName', and the mimetype (defaulted if absent).

        :param str path: Logical path of the data object.
        :param DataObject data_object: Object holding the value to store.

        :return: DataObject - The given object, fully populated.
        """
        raise NotImplementedError()

    @abstractmethod
    def create_non_cdmi_by_path(self, path, content_type, data_object):
        """Create a data object from a non-CDMI request. Behaves like `create_by_path`
        except that the mimetype is always the supplied `content_type`, overriding any
        mimetype already set on `data_object`.

        :param str path: Logical path of the data object.
        :param str content_type: Content type of the request.
        :param DataObject data_object: Object holding the value to store.

        :return: DataObject - The given object, fully populated.
        """
        raise NotImplementedError()

    @abstractmethod
    def create_by_id(self, object_id, data_object):
        """Create a data object addressed by its object ID.

        :param str object_id: Object ID.
        :param DataObject data_object: Object holding the value to store.

        :return: DataObject
        """
        raise NotImplementedError()

    @abstractmethod
    def delete_by_path(self, path):
        """Delete the data object at the given logical path.

        :param str path: Logical path of the data object.
        """
        raise NotImplementedError()

    @abstractmethod
    def find_by_path(self, path):
        """Retrieve the data object at the given logical path. The returned object's
        'cdmi_atime' is set to the time of the lookup.

        :param str path: Logical path of the data object.

        :return: DataObject - The stored object, or None if no object exists at `path`.
        """
        raise NotImplementedError()

    @abstractmethod
    def find_by_object_id(self, object_id):
        """Retrieve a data object by its object ID.

        :param str object_id: Object ID.

        :return: DataObject
        """
        raise NotImplementedError()


class DataObjectStoreFactory:
    """A factory class for creating `DataObjectStore`-like objects.

    This factory class provides a method to retrieve a `DataObjectStore` object based on
    a given module (e.g., "cdmistore.filedataobjectstore") and class name
    (e.g., "FileDataObjectStore").
    """

    @staticmethod
    def get_dataobjectstore(module_name, class_name, properties=None):
        """Get a `DataObjectStore`-like object based on the specified `module_name` and
        `class_name`.

        :param str module_name: Name of the package (e.g., "cdmistore.filedataobjectstore").
        :param str class_name: Name of the class in the given module
            (e.g., "FileDataObjectStore").
        :param dict properties: Desired store properties. Example Properties Dictionary:
            {
                "store_path": "/var/cdmistore",
                "store_object_id_length": 8,
                "store_default_mimetype": "text/plain"
            }

        :return: DataObjectStore - A store based on the given `module_name` and `class_name`.

        :raises ModuleNotFoundError: If the module is not found.
        :raises AttributeError: If the class does not exist within the module.
        """
        # Validate module
        if importlib.util.find_spec(module_name) is None:
            raise ModuleNotFoundError(f"No module found for '{module_name}'")

        imported_module = importlib.import_module(module_name)

        # If class is not part of module, raise error
        if hasattr(imported_module, class_name):
            store_class = getattr(imported_module, class_name)
            return store_class(properties=properties)
        raise AttributeError(
            f"Class name '{class_name}' is not an attribute of module '{module_name}'"
        )
