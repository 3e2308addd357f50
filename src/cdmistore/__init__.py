"""cdmistore is the data object store of a CDMI (Cloud Data Management Interface)
server. It keeps data objects on a local filesystem, addressed by the logical path
of the object inside its container.

Some properties:

- Containers are directories below the store's base directory
- Each data object is backed by two files in its container directory: the content
    file (named after the object) and a hidden JSON metadata file ('.' + object name)
- The metadata document carries the object ID, capabilities URI, mimetype and the
    CDMI system metadata (cdmi_size, cdmi_ctime, cdmi_atime) plus any caller-supplied
    metadata
- Objects are written once, an existing object is never overwritten
"""

from cdmistore.dataobject import DataObject
from cdmistore.dataobjectstore import DataObjectStore, DataObjectStoreFactory

__all__ = ("DataObject", "DataObjectStore", "DataObjectStoreFactory")
__version__ = "1.0.0"
