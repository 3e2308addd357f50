"""Default configuration variables for the CDMI data object store"""

############### Store Path ###############
# Default base directory for `FileDataObjectStore` if no path is provided
STORE_PATH = "/var/cdmistore/"

############### Object IDs ###############
# Number of characters of a generated object ID
OBJECT_ID_LENGTH = 8

############### Data Object Defaults ###############
# MIME type recorded for CDMI objects created without one
DEFAULT_MIMETYPE = "text/plain"
# Capability class of every data object
CAPABILITIES_URI = "/cdmi_capabilities/dataobject"
# Value of 'cdmi_atime' until the object is read for the first time
NEVER_ACCESSED = "never"
# ISO-8601 without timezone or fraction (ex. 2026-10-19T10:00:00)
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
