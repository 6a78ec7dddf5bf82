class FirmwareException(Exception):
    '''Base class to extend in order to throw exception in fwsplit.

    It takes the message and, optionally, the name of the part that
    caused the exception.
    '''

    def __init__(self, message, part=None):
        self.message = message
        self.part = part
        super().__init__(message)

    def __str__(self):
        if self.part is None:
            return self.message

        return f'{self.message} (part \'{self.part}\')'


class ParseException(FirmwareException):
    '''A field of the layout is not a valid number (or name).'''
    pass


class ConfigException(FirmwareException):
    '''The layout file itself cannot be read.'''
    pass


class StreamException(FirmwareException):
    '''This is raised when an I/O operation on the image or on a part file fails:
    it's not recovered, the whole operation is aborted.'''
    pass
