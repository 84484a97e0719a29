# hd44780/demo.py
# Hardware smoke test for a PCF8574 backpack display.
# Run with: hd44780-demo   (or python -m hd44780.demo)

import time
import traceback

from . import config as cfg
from .config import LcdConfig
from .errors import LcdError, TransportOpenError
from .lcd import lcd_init
from .log import configure, get_logger

_log = get_logger("Demo")

# 5x8 bell glyph
BELL = [0x04, 0x0E, 0x0E, 0x0E, 0x1F, 0x00, 0x04, 0x00]


def run_demo(lcd, pause=1.0, sleep=time.sleep):
    """Exercise text, wrapping, a custom glyph and the backlight."""
    lcd.clear()
    lcd.position(0, 0)
    lcd.puts("Hello")
    if lcd.rows > 1:
        lcd.position(0, 1)
        lcd.printf("%dx%d LCD", lcd.cols, lcd.rows)
    sleep(pause)

    _log("Defining custom glyph 0...")
    lcd.char_def(0, BELL)
    lcd.position(lcd.cols - 1, 0)
    lcd.putchar(0)
    sleep(pause)

    _log("Turning backlight off...")
    lcd.backlight(False)
    sleep(pause)
    _log("Turning backlight on...")
    lcd.backlight(True)

    lcd.cursor_on(True)
    lcd.blink_on(True)
    sleep(pause)
    lcd.blink_on(False)
    lcd.cursor_on(False)

    lcd.clear()


def main(config=None, **lcd_kwargs):
    configure("INFO")
    config = config or LcdConfig.pcf8574(cfg.LCD_ADDRESS, cfg.I2C_PORT)
    _log(f"Initializing LCD at address 0x{config.i2c_addr:02X} on I2C bus {config.i2c_port}...")

    lcd = None
    try:
        lcd = lcd_init(config, **lcd_kwargs)
        _log("LCD Initialized.")
        run_demo(lcd)
        _log("LCD test finished.", level="INFO")
        return 0
    except TransportOpenError as e:
        _log(f"{e}. Check bus number and enable I2C.", level="ERROR")
    except LcdError as e:
        _log(f"LCD error: {e}", level="ERROR")
    except OSError as e:
        _log(f"An OS error occurred: {e}", level="ERROR")
        _log(traceback.format_exc(), level="DEBUG")
    finally:
        if lcd:
            lcd.close()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
