# hd44780/errors.py


class LcdError(Exception):
    """Base class for every error raised by the driver."""


class InvalidConfigError(LcdError, ValueError):
    """Bus width, geometry or pin map cannot describe a display."""


class HandleTableFullError(LcdError):
    """Every slot of the handle registry is in use."""


class TransportOpenError(LcdError):
    """The I2C bus or a GPIO line could not be opened."""
