"""Split logical data object paths into a container path and an object name"""
import logging
from collections import namedtuple
from cdmistore.filedataobjectstore_exceptions import MalformedRequest


class ObjectPath(
    namedtuple("ObjectPath", ["object_name", "container_path", "metadata_file_name"])
):
    """Location of a data object relative to the store's base directory.

    Args:
        object_name (str): Final segment of the logical path.
        container_path (str): Preceding segments joined with a trailing '/', or an
            empty string when the object lives at the root.
        metadata_file_name (str): Name of the sidecar metadata file ('.' + object_name).
    """

    @property
    def object_path(self):
        """Logical path of the content file relative to the base directory."""
        return self.container_path + self.object_name

    @property
    def metadata_path(self):
        """Logical path of the metadata file relative to the base directory."""
        return self.container_path + self.metadata_file_name


def resolve_object_path(path):
    """Resolve a logical path of the form '<container-segments>/<object-name>'.

    Trailing separators are ignored. Segments are not validated, so '..' or empty
    segments pass through untouched.

    :param str path: Logical path of the data object.

    :raises MalformedRequest: If the path does not contain a single segment.

    :return: The resolved object location.
    :rtype: ObjectPath
    """
    if not isinstance(path, str):
        exception_string = (
            f"path_resolver - resolve_object_path: path must be a string, got: {type(path)}"
        )
        logging.error(exception_string)
        raise MalformedRequest(exception_string)

    tokens = path.split("/")
    # Drop trailing empty segments so 'docs/readme.txt/' names 'readme.txt'
    while tokens and tokens[-1] == "":
        tokens.pop()
    if not tokens:
        exception_string = f"No object name in path <{path}>"
        logging.error("path_resolver - resolve_object_path: %s", exception_string)
        raise MalformedRequest(exception_string)

    object_name = tokens[-1]
    container_path = "".join(token + "/" for token in tokens[:-1])
    return ObjectPath(object_name, container_path, "." + object_name)
