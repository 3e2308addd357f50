"""Pytest overall configuration file for fixtures"""

import os
import pytest
from cdmistore.filedataobjectstore import FileDataObjectStore


@pytest.fixture(name="props")
def init_props(tmp_path):
    """Properties to initialize a FileDataObjectStore."""
    directory = tmp_path / "cdmi" / "store"
    directory.mkdir(parents=True)
    # Note, objects generated via tests are placed in a temporary folder
    # with the 'directory' parameter above appended
    properties = {
        "store_path": directory.as_posix(),
        "store_object_id_length": 8,
        "store_default_mimetype": "text/plain",
    }
    return properties


@pytest.fixture(name="store")
def init_store(props):
    """Create FileDataObjectStore instance for all tests."""
    store = FileDataObjectStore(props)
    return store


@pytest.fixture(name="container")
def init_container(store):
    """Create the 'docs' container directory and return its absolute path."""
    container = store.root + "/docs"
    # Containers are created by the container layer, not by the store
    os.mkdir(container)
    return container
