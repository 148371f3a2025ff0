"""RES format constants: signature, record sizes, resource flags and types.

Type codes come from the Looking Glass resource system headers. Codes 10-14
describe BABL2 linker output; 48-63 are left to each application.
"""

from enum import IntEnum, IntFlag


SIGNATURE = b"LG Res File v2\r\n"

# Record sizes in bytes
FILE_HEADER_SIZE = 128
DIRECTORY_HEADER_SIZE = 6
DIRECTORY_ENTRY_SIZE = 10

SIGNATURE_SIZE = 16
COMMENT_SIZE = 96
RESERVED_SIZE = 12

# ID 0 marks a deleted directory slot
DELETED_ID = 0


class ResourceFlags(IntFlag):
    """Per-resource flag byte stored in each directory entry."""
    LZW = 0x01
    COMPOUND = 0x02
    RESERVED = 0x04
    LOAD_ON_OPEN = 0x08
    CD_SPOOF = 0x10     # no effect on reading

    @classmethod
    def from_byte(cls, value: int) -> "ResourceFlags":
        """Keep the known bits of a raw flag byte and drop the rest."""
        known = 0
        for member in cls:
            known |= member.value
        return cls(value & known)


class ResourceType(IntEnum):
    """Resource type code stored in the last byte of a directory entry."""
    UNKNOWN = 0
    STRING = 1
    IMAGE = 2
    FONT = 3
    ANIMATION_SCRIPT = 4
    PALETTE = 5
    SHADING_TABLE = 6
    VOC = 7             # Creative .voc sound
    SHAPE = 8
    PICTURE = 9
    BABL2_EXTERN = 10
    BABL2_RELOC = 11
    BABL2_CODE = 12
    BABL2_HEADER = 13
    BABL2_RESERVED = 14
    OBJECT_3D = 15
    STENCIL = 16
    MOVIE = 17          # LG .mov
    RECTANGLE = 18      # bounding rectangles for images

    APP_DEFINED_0 = 48
    APP_DEFINED_1 = 49
    APP_DEFINED_2 = 50
    APP_DEFINED_3 = 51
    APP_DEFINED_4 = 52
    APP_DEFINED_5 = 53
    APP_DEFINED_6 = 54
    APP_DEFINED_7 = 55
    APP_DEFINED_8 = 56
    APP_DEFINED_9 = 57
    APP_DEFINED_10 = 58
    APP_DEFINED_11 = 59
    APP_DEFINED_12 = 60
    APP_DEFINED_13 = 61
    APP_DEFINED_14 = 62
    APP_DEFINED_15 = 63

    @classmethod
    def from_code(cls, code: int) -> "ResourceType":
        """Map a raw type byte to a member, falling back to UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


# Short lowercase names, used for extracted file names
RESOURCE_TYPE_NAMES: dict[int, str] = {
    member.value: member.name.lower() for member in ResourceType
}
