"""CDMI Data Object Store Command Line App"""
import logging
import os
from argparse import ArgumentParser
from pathlib import Path
from cdmistore import DataObject, DataObjectStoreFactory
from cdmistore import dataobjectstore_config as config
from cdmistore.filedataobjectstore import FileDataObjectStore
from cdmistore.metadata_codec import metadata_to_json


class DataObjectStoreParser:
    """Class to set up parsing arguments via argparse."""

    def __init__(self):
        """Initialize the argparse 'parser'."""

        program_name = "CDMI Data Object Store Command Line Client"
        description = (
            "Command line tool to create and find data objects in a filesystem"
            + " backed CDMI data object store."
        )

        self.parser = ArgumentParser(
            prog=program_name,
            description=description,
        )

        # Add positional argument
        self.parser.add_argument("store_path", help="Base directory of the store")

        # Add optional arguments
        self.parser.add_argument(
            "-config",
            dest="config_path",
            help="Path to a YAML file with the store properties",
        )
        self.parser.add_argument(
            "-loglevel",
            dest="logging_level",
            help="Set logging level for the client",
        )
        self.parser.add_argument(
            "-logfile",
            dest="logging_file",
            help="Write client logs to this file instead of stderr",
        )

        # Individual API call related optional arguments
        self.parser.add_argument(
            "-create",
            dest="create_path",
            help="Logical path of a CDMI data object to create",
        )
        self.parser.add_argument(
            "-create_noncdmi",
            dest="create_noncdmi_path",
            help="Logical path of a non-CDMI data object to create",
        )
        self.parser.add_argument(
            "-find",
            dest="find_path",
            help="Logical path of a data object to find",
        )
        self.parser.add_argument(
            "-value",
            dest="object_value",
            help="Value of the data object to create",
        )
        self.parser.add_argument(
            "-file",
            dest="object_file",
            help="Path of a text file holding the value of the data object to create",
        )
        self.parser.add_argument(
            "-mimetype",
            dest="object_mimetype",
            help="Mimetype of the CDMI data object to create",
        )
        self.parser.add_argument(
            "-content_type",
            dest="object_content_type",
            help="Content type of the non-CDMI data object to create",
        )

    def get_parser_args(self, args=None):
        """Get command line arguments

        :param list args: Arguments to parse, defaults to `sys.argv`.
        """
        return self.parser.parse_args(args)


def load_store_properties(store_path, config_path=None):
    """Build the store properties for `store_path`, reading the remaining properties
    from the YAML file at `config_path` when given."""
    if config_path is None:
        props = {
            "store_object_id_length": config.OBJECT_ID_LENGTH,
            "store_default_mimetype": config.DEFAULT_MIMETYPE,
        }
    else:
        props = FileDataObjectStore.load_properties(config_path)
    props["store_path"] = store_path
    return props


def read_value(args):
    """Return the value of the object to create from '-value' or '-file'."""
    value = getattr(args, "object_value")
    file_path = getattr(args, "object_file")
    if value is not None and file_path is not None:
        raise ValueError("'-value' and '-file' cannot be used together")
    if file_path is not None:
        with open(file_path, "r", encoding="utf-8", newline="") as value_file:
            return value_file.read()
    if value is None:
        raise ValueError("'-value' or '-file' option is required")
    return value


def main(argv=None):
    """Entry point of the data object store client."""

    parser = DataObjectStoreParser()
    args = parser.get_parser_args(argv)

    store_path = getattr(args, "store_path")
    if not os.path.isdir(store_path):
        raise FileNotFoundError(f"Store path is not a directory: {store_path}.")

    # Check for logging level
    logging_level_arg = getattr(args, "logging_level")
    if logging_level_arg is None:
        logging_level = "INFO"
    else:
        logging_level = logging_level_arg.upper()
    logging_file = getattr(args, "logging_file")
    if logging_file is not None:
        Path(logging_file).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=logging_file,
        level=logging_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    props = load_store_properties(store_path, getattr(args, "config_path"))
    store = DataObjectStoreFactory.get_dataobjectstore(
        "cdmistore.filedataobjectstore", "FileDataObjectStore", props
    )
    logging.info("DataObjectStoreClient - Store initialized at: %s", store_path)

    create_path = getattr(args, "create_path")
    create_noncdmi_path = getattr(args, "create_noncdmi_path")
    find_path = getattr(args, "find_path")

    if create_path is not None:
        data_object = DataObject(
            value=read_value(args), mimetype=getattr(args, "object_mimetype")
        )
        data_object = store.create_by_path(create_path, data_object)
        print(f"Data Object Metadata:\n{metadata_to_json(data_object)}")

    elif create_noncdmi_path is not None:
        content_type = getattr(args, "object_content_type")
        if content_type is None:
            raise ValueError("'-content_type' option is required")
        data_object = DataObject(value=read_value(args))
        data_object = store.create_non_cdmi_by_path(
            create_noncdmi_path, content_type, data_object
        )
        print(f"Data Object Metadata:\n{metadata_to_json(data_object)}")

    elif find_path is not None:
        data_object = store.find_by_path(find_path)
        if data_object is None:
            print(f"No data object found at: {find_path}")
        else:
            print(f"Data Object Metadata:\n{metadata_to_json(data_object)}")
            print(f"Value:\n{data_object.value}")


if __name__ == "__main__":
    main()
