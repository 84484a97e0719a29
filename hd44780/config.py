# hd44780/config.py
# Board defaults and the per-display configuration.

from .errors import InvalidConfigError

# --- I2C Backpack Defaults ---
# Bus number (check /dev/ for i2c-N devices)
I2C_PORT = 3
# Address of the PCF8574 backpack ('sudo i2cdetect -y <port>' to find it)
LCD_ADDRESS = 0x27

# --- Display Geometry ---
LCD_COLS = 16
LCD_ROWS = 2
MAX_ROWS = 4
MAX_COLS = 20

# --- PCF8574 Pin Map (bit indices inside the expander byte) ---
PIN_RS = 0
PIN_E = 2
PIN_BACKLIGHT = 3
PINS_DATA = (4, 5, 6, 7)  # D4-D7

# --- Timing (the controller is write-only, so these stay conservative) ---
STROBE_DELAY_US = 50     # each side of the E falling edge
COMMAND_DELAY_MS = 2     # after every command byte
HOME_DELAY_MS = 5        # after clear/home
INIT_DELAY_MS = 35       # after each function set during init
POWER_ON_DELAY_MS = 35   # after attaching a new display

# --- Driver Limits ---
MAX_LCDS = 8
PRINTF_BUFFER_SIZE = 1024
PRINTF_MAX_CHARS = PRINTF_BUFFER_SIZE - 2  # 1023-byte write, NUL included

# DDRAM base address of each row
ROW_OFFSETS = (0x00, 0x40, 0x14, 0x54)


class LcdConfig:
    """Wiring and geometry of one display.

    ``i2c_addr`` of 0 selects direct GPIO wiring; ``rs``, ``strb``, ``data``
    are then GPIO line numbers. Otherwise they are bit indices inside the
    port-expander byte, as is ``backlight``.
    """

    def __init__(self, rows=LCD_ROWS, cols=LCD_COLS, i2c_addr=0, bits=4,
                 rs=PIN_RS, strb=PIN_E, data=PINS_DATA,
                 backlight=PIN_BACKLIGHT, backlight_state=True,
                 i2c_port=I2C_PORT, gpio_chip=None):
        self.rows = rows
        self.cols = cols
        self.i2c_addr = i2c_addr
        self.bits = bits
        self.rs = rs
        self.strb = strb
        self.data = tuple(data)
        self.backlight = backlight
        self.backlight_state = bool(backlight_state)
        self.i2c_port = i2c_port
        self.gpio_chip = gpio_chip

    @classmethod
    def pcf8574(cls, address=LCD_ADDRESS, port=I2C_PORT, cols=LCD_COLS, rows=LCD_ROWS,
                backlight_state=True):
        """Common blue-board backpack: RS=P0, E=P2, BL=P3, D4-D7=P4-P7."""
        return cls(rows=rows, cols=cols, i2c_addr=address, bits=4,
                   rs=PIN_RS, strb=PIN_E, data=PINS_DATA,
                   backlight=PIN_BACKLIGHT, backlight_state=backlight_state,
                   i2c_port=port)

    @property
    def is_i2c(self):
        return bool(self.i2c_addr)

    def validate(self):
        """Raise InvalidConfigError if this config cannot drive a display."""
        if self.bits not in (4, 8):
            raise InvalidConfigError(f"Bus width must be 4 or 8, got {self.bits}")
        if not 0 <= self.rows <= MAX_ROWS:
            raise InvalidConfigError(f"Rows must be between 0 and {MAX_ROWS}, got {self.rows}")
        if not 0 <= self.cols <= MAX_COLS:
            raise InvalidConfigError(f"Cols must be between 0 and {MAX_COLS}, got {self.cols}")

        needed = 4 if self.is_i2c else self.bits
        if len(self.data) < needed:
            raise InvalidConfigError(
                f"{needed} data lines required, got {len(self.data)}")

        if self.is_i2c:
            # All control and data lines share one expander byte
            bits = [self.rs, self.strb, self.backlight] + list(self.data[:4])
            for bit in bits:
                if not 0 <= bit <= 7:
                    raise InvalidConfigError(f"Expander bit index {bit} out of range (0-7)")
            if len(set(bits)) != len(bits):
                raise InvalidConfigError("Expander bit indices must be distinct")
        return self

    def __repr__(self):
        mode = f"i2c=0x{self.i2c_addr:02X}" if self.is_i2c else f"gpio/{self.bits}bit"
        return f"LcdConfig({self.cols}x{self.rows}, {mode})"
