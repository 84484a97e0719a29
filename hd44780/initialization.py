# hd44780/initialization.py
# Reset-to-operating-mode sequence.
#
# The controller powers up in 8-bit mode and may be left mid-instruction or
# mid-nibble by an earlier run. Three 8-bit FUNCTION SETs force it back into
# a known 8-bit state whatever it was doing. On a 4-bit bus only the high
# nibble of each is sent, then the high nibble of a plain FUNCTION SET flips
# the interface to 4 bits; from then on every byte goes as two nibbles.

from . import commands as cmds
from . import config as cfg
from .log import get_logger

_log = get_logger("Init")


def reinit(lcd):
    """Bring ``lcd``'s controller to a blank screen, cursor at (0, 0)."""
    bus = lcd.bus
    delay = lcd.delay
    width = lcd.transport.bus_width
    _log(f"Initializing handle {lcd.handle} ({lcd.cols}x{lcd.rows}, {width}-bit)", level="DEBUG")

    func = cmds.function_set(eight_bit=True)
    if width == 4:
        for _ in range(3):
            bus.command_nibble(func >> 4)
            delay.ms(cfg.INIT_DELAY_MS)
        func = cmds.function_set(eight_bit=False)
        bus.command_nibble(func >> 4)
        delay.ms(cfg.INIT_DELAY_MS)
    else:
        for _ in range(3):
            bus.command(func)
            delay.ms(cfg.INIT_DELAY_MS)

    if lcd.rows > 1:
        func |= cmds.LCD_FUNC_N
        bus.command(func)
        delay.ms(cfg.INIT_DELAY_MS)

    lcd.display_on(True)
    lcd.cursor_on(False)
    lcd.blink_on(False)
    lcd.clear()

    bus.command(cmds.entry_mode(increment=True, shift=False))
    bus.command(cmds.cursor_shift(display=False, right=True))
    _log(f"Handle {lcd.handle} initialized.", level="DEBUG")
