from enum import Enum, auto


class Mode(Enum):
    '''Which direction the bytes flow between the image and the part files'''
    UNPACK = auto()
    PACK   = auto()

    @classmethod
    def from_argument(cls, value: str) -> "Mode":
        '''Everything that is not literally "unpack" resolves as packing.'''
        return cls.UNPACK if value == 'unpack' else cls.PACK


class PartPhase(Enum):
    '''Enum to state the actual phase of a part'''
    PARSED   = 0
    RESOLVED = auto()
