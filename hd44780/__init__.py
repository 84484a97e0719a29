"""Driver for HD44780U character LCDs over GPIO or an I2C port expander."""

from .config import LcdConfig
from .errors import HandleTableFullError, InvalidConfigError, LcdError, TransportOpenError
from .lcd import CharLCD, get_lcd, lcd_init, lcd_new
from .registry import HandleRegistry
from .transport import I2CTransport, ParallelTransport, Transport

__version__ = "0.1.0"

__all__ = [
    "CharLCD",
    "HandleRegistry",
    "HandleTableFullError",
    "I2CTransport",
    "InvalidConfigError",
    "LcdConfig",
    "LcdError",
    "ParallelTransport",
    "Transport",
    "TransportOpenError",
    "get_lcd",
    "lcd_init",
    "lcd_new",
]
