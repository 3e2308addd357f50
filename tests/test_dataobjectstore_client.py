"""Test module for the command line client (Public API calls only)"""
import json
import os
import pytest
from cdmistore import dataobjectstoreclient


def _printed_metadata(output):
    """Extract the metadata JSON document printed by the client."""
    document = output.split("Data Object Metadata:\n", 1)[1]
    document = document.split("\nValue:\n", 1)[0]
    return json.loads(document)


def test_create_object(props, container, capsys):
    """Test creating a CDMI data object through the client."""
    store_path = props["store_path"]
    dataobjectstoreclient.main(
        [store_path, "-create=docs/readme.txt", "-value=hello", "-mimetype=text/x-rst"]
    )

    assert os.path.exists(container + "/readme.txt")
    assert os.path.exists(container + "/.readme.txt")
    document = _printed_metadata(capsys.readouterr().out)
    assert document["mimetype"] == "text/x-rst"
    assert document["metadata"]["cdmi_size"] == "5"


def test_create_object_from_file(props, container, tmp_path, capsys):
    """Test creating a data object with its value read from a file."""
    value_file = tmp_path / "value.txt"
    value_file.write_text("from a file\n", encoding="utf-8")
    dataobjectstoreclient.main(
        [props["store_path"], "-create=docs/notes.txt", f"-file={value_file}"]
    )

    with open(container + "/notes.txt", "r", encoding="utf-8") as content_file:
        assert content_file.read() == "from a file\n"
    document = _printed_metadata(capsys.readouterr().out)
    assert document["mimetype"] == "text/plain"


def test_create_object_value_required(props, container):
    """Test that creating without '-value' or '-file' raises ValueError."""
    with pytest.raises(ValueError):
        dataobjectstoreclient.main([props["store_path"], "-create=docs/readme.txt"])
    assert os.listdir(container) == []


def test_create_noncdmi_object(props, container, capsys):
    """Test creating a non-CDMI data object through the client."""
    dataobjectstoreclient.main(
        [
            props["store_path"],
            "-create_noncdmi=docs/page.html",
            "-value=<p>hi</p>",
            "-content_type=text/html",
        ]
    )

    document = _printed_metadata(capsys.readouterr().out)
    assert document["mimetype"] == "text/html"
    assert document["metadata"]["mimetype"] == "text/html"


def test_create_noncdmi_object_content_type_required(props, container):
    """Test that a non-CDMI create without '-content_type' raises ValueError."""
    with pytest.raises(ValueError):
        dataobjectstoreclient.main(
            [props["store_path"], "-create_noncdmi=docs/page.html", "-value=x"]
        )


def test_find_object(props, container, capsys):
    """Test finding a data object through the client."""
    store_path = props["store_path"]
    dataobjectstoreclient.main([store_path, "-create=docs/readme.txt", "-value=hello"])
    capsys.readouterr()

    dataobjectstoreclient.main([store_path, "-find=docs/readme.txt"])

    output = capsys.readouterr().out
    document = _printed_metadata(output)
    assert document["metadata"]["cdmi_atime"] != "never"
    assert output.rstrip("\n").endswith("hello")


def test_find_object_not_found(props, container, capsys):
    """Test that finding a missing data object prints a message."""
    dataobjectstoreclient.main([props["store_path"], "-find=docs/missing.txt"])
    assert "No data object found at: docs/missing.txt" in capsys.readouterr().out


def test_config_file(props, container, tmp_path, capsys):
    """Test that store properties are read from the '-config' YAML file."""
    config_yaml = tmp_path / "cdmistore.yaml"
    config_yaml.write_text(
        "store_object_id_length: 12\nstore_default_mimetype: text/markdown\n",
        encoding="utf-8",
    )
    dataobjectstoreclient.main(
        [
            props["store_path"],
            f"-config={config_yaml}",
            "-create=docs/readme.md",
            "-value=# hello",
        ]
    )

    document = _printed_metadata(capsys.readouterr().out)
    assert len(document["objectID"]) == 12
    assert document["mimetype"] == "text/markdown"


def test_store_path_missing(tmp_path):
    """Test that a missing store path raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        dataobjectstoreclient.main([(tmp_path / "missing").as_posix(), "-find=a"])
