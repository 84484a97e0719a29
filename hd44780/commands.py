# hd44780/commands.py
# HD44780U instruction set. Commands go out with RS=0, DDRAM/CGRAM data
# with RS=1.

from . import config as cfg

# --- Commands ---
LCD_CLEAR = 0x01
LCD_HOME = 0x02
LCD_ENTRY = 0x04
LCD_CTRL = 0x08
LCD_CDSHIFT = 0x10
LCD_FUNC = 0x20
LCD_CGRAM = 0x40
LCD_DGRAM = 0x80

# --- Flags for entry mode ---
LCD_ENTRY_SH = 0x01   # shift display
LCD_ENTRY_ID = 0x02   # increment address

# --- Flags for display on/off control ---
LCD_BLINK_CTRL = 0x01
LCD_CURSOR_CTRL = 0x02
LCD_DISPLAY_CTRL = 0x04

# --- Flags for function set ---
LCD_FUNC_F = 0x04     # 5x10 font
LCD_FUNC_N = 0x08     # two lines
LCD_FUNC_DL = 0x10    # 8-bit interface

# --- Flags for cursor/display shift ---
LCD_CDSHIFT_RL = 0x04
LCD_CDSHIFT_SC = 0x08


def entry_mode(increment=True, shift=False):
    cmd = LCD_ENTRY
    if increment:
        cmd |= LCD_ENTRY_ID
    if shift:
        cmd |= LCD_ENTRY_SH
    return cmd


def display_control(display=True, cursor=False, blink=False):
    cmd = LCD_CTRL
    if display:
        cmd |= LCD_DISPLAY_CTRL
    if cursor:
        cmd |= LCD_CURSOR_CTRL
    if blink:
        cmd |= LCD_BLINK_CTRL
    return cmd


def cursor_shift(display=False, right=True):
    """Move the cursor (or shift the whole display) one cell."""
    cmd = LCD_CDSHIFT
    if display:
        cmd |= LCD_CDSHIFT_SC
    if right:
        cmd |= LCD_CDSHIFT_RL
    return cmd


def function_set(eight_bit=True, two_line=False, font_5x10=False):
    cmd = LCD_FUNC
    if eight_bit:
        cmd |= LCD_FUNC_DL
    if two_line:
        cmd |= LCD_FUNC_N
    if font_5x10:
        cmd |= LCD_FUNC_F
    return cmd


def set_cgram_address(index):
    """First row of user glyph ``index`` (only the low three bits count)."""
    return LCD_CGRAM | ((index & 7) << 3)


def set_ddram_address(address):
    return LCD_DGRAM | (address & 0x7F)


def row_address(x, y):
    return set_ddram_address(cfg.ROW_OFFSETS[y] + x)


class CommandBus:
    """Issues commands and data bytes over any transport."""

    def __init__(self, transport, delay):
        self.transport = transport
        self.delay = delay

    def command(self, cmd):
        self.transport.write_byte(0, cmd & 0xFF)
        self.delay.ms(cfg.COMMAND_DELAY_MS)

    def command_nibble(self, nibble):
        # Only valid before the interface width is settled
        self.transport.write_nibble(0, nibble & 0x0F)

    def data(self, value):
        self.transport.write_byte(1, value & 0xFF)
