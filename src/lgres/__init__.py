"""Reader for Looking Glass RES resource archives."""

from lgres.config import ReaderConfig
from lgres.errors import (
    BadSignatureError,
    ResError,
    ResIOError,
    ResourceNotFoundError,
    ResUnicodeError,
    UnsupportedResourceError,
)
from lgres.models.constants import ResourceFlags, ResourceType
from lgres.models.records import DirectoryEntry, Resource
from lgres.parser.res_reader import ResReader

__all__ = [
    "BadSignatureError",
    "DirectoryEntry",
    "ReaderConfig",
    "ResError",
    "ResIOError",
    "ResReader",
    "ResUnicodeError",
    "Resource",
    "ResourceFlags",
    "ResourceNotFoundError",
    "ResourceType",
    "UnsupportedResourceError",
]

__version__ = "0.1.0"
