"""Default object ID generator"""
import uuid


def get_object_id(length=8):
    """Return a random lowercase hex identifier of exactly `length` characters.

    :param int length: Number of characters, must be > 0.

    :return: Object ID.
    :rtype: str
    """
    if not isinstance(length, int) or isinstance(length, bool) or length < 1:
        raise ValueError(f"objectid - get_object_id: length must be an int > 0: {length}")
    object_id = ""
    while len(object_id) < length:
        object_id += uuid.uuid4().hex
    return object_id[:length]
