class PPMBlurError(Exception):
    """Base class for every failure raised by ppmblur."""


class ImageIOError(PPMBlurError):
    """Open/read/write failure. The OSError is chained as __cause__."""


class ConfigError(PPMBlurError, ValueError):
    """An environment setting has an unusable value."""


class PPMFormatError(PPMBlurError, ValueError):
    """The file content is not a valid P3 image."""


class UnsupportedFormatError(PPMFormatError):
    pass


class TruncatedHeaderError(PPMFormatError):
    pass


class UnexpectedEndOfDataError(PPMFormatError):
    pass


class MalformedIntegerError(PPMFormatError):
    pass


class InvalidDimensionsError(PPMFormatError):
    pass


class InvalidMaxValueError(PPMFormatError):
    pass


class ImageTooLargeError(PPMFormatError):
    pass


class PixelOutOfRangeError(PPMFormatError):
    pass
