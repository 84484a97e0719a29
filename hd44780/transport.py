# hd44780/transport.py
# Puts a nibble or byte on the controller's DB lines together with RS and
# latches it with a falling E edge, either over GPIO lines or through an
# I2C port expander.

from periphery import GPIO
from smbus2 import SMBus

from . import config as cfg
from .errors import TransportOpenError
from .log import get_logger
from .timing import Delay

_log = get_logger("Transport")


class Transport:
    """Common interface of the two wirings."""

    bus_width = 4

    def __init__(self, delay=None):
        self.delay = delay or Delay()

    def write_nibble(self, rs, nibble):
        raise NotImplementedError("Subclasses must implement write_nibble()")

    def write_byte(self, rs, byte):
        """Send a full byte. On a 4-bit bus this is two nibbles, high first."""
        self.write_nibble(rs, (byte >> 4) & 0x0F)
        self.write_nibble(rs, byte & 0x0F)

    def set_backlight(self, state):
        pass

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class ParallelTransport(Transport):
    """HD44780 wired straight to GPIO lines (RW tied to ground)."""

    def __init__(self, rs, e, data_lines, bits=4, chip=None, delay=None, gpio_factory=GPIO):
        super().__init__(delay)
        if bits not in (4, 8):
            raise ValueError(f"Bus width must be 4 or 8, got {bits}")
        self.bus_width = bits
        self._gpio_factory = gpio_factory
        self._chip = chip
        self._lines = []

        try:
            self.rs = self._open_line(rs)
            self.e = self._open_line(e)
            self.data = [self._open_line(line) for line in list(data_lines)[:bits]]
        except Exception:
            self.close()
            raise
        _log(f"GPIO transport ready: rs={rs} e={e} data={list(data_lines)[:bits]}", level="DEBUG")

    def _open_line(self, line):
        # "low" = output, initially driven low
        try:
            if self._chip is None:
                gpio = self._gpio_factory(line, "low")
            else:
                gpio = self._gpio_factory(self._chip, line, "low")
        except (OSError, ValueError) as e:
            raise TransportOpenError(f"Failed to open GPIO {line}: {e}") from e
        self._lines.append(gpio)
        return gpio

    def _strobe(self):
        # Data is latched on the falling edge
        self.e.write(True)
        self.delay.us(cfg.STROBE_DELAY_US)
        self.e.write(False)
        self.delay.us(cfg.STROBE_DELAY_US)

    def _put_bits(self, rs, value, count):
        self.rs.write(bool(rs))
        for i in range(count):
            self.data[i].write(bool((value >> i) & 1))
        self._strobe()

    def write_nibble(self, rs, nibble):
        self._put_bits(rs, nibble & 0x0F, 4)

    def write_byte(self, rs, byte):
        if self.bus_width == 8:
            self._put_bits(rs, byte & 0xFF, 8)
        else:
            super().write_byte(rs, byte)

    def close(self):
        while self._lines:
            gpio = self._lines.pop()
            try:
                gpio.close()
            except OSError as e:
                _log(f"Error closing GPIO line: {e}", level="WARNING")


class I2CTransport(Transport):
    """HD44780 behind a PCF8574-style expander.

    RS, E, the backlight transistor and D4-D7 all live in the one latched
    byte, so every write rebuilds the whole byte. Only 4-bit operation fits.
    """

    def __init__(self, address, rs, e, data_lines, backlight_bit, backlight_on=True,
                 port=cfg.I2C_PORT, delay=None, bus_factory=SMBus):
        super().__init__(delay)
        self.address = address
        self.port = port
        self.rs_bit = rs
        self.e_bit = e
        self.data_bits = list(data_lines)[:4]
        self.backlight_bit = backlight_bit
        self.backlight_on = bool(backlight_on)

        try:
            self.bus = bus_factory(port)
        except OSError as e:
            raise TransportOpenError(
                f"Failed to open I2C bus {port} for 0x{address:02X}: {e}") from e
        _log(f"I2C bus {port} opened for expander 0x{address:02X}.")

        self._write(self._backlight_mask())

    def _backlight_mask(self):
        return (1 << self.backlight_bit) if self.backlight_on else 0

    def pack(self, rs, nibble, strobe):
        """Expander byte carrying ``nibble`` with the given RS and E levels."""
        output = 0
        for i, bit in enumerate(self.data_bits):
            output |= ((nibble >> i) & 1) << bit
        if rs:
            output |= 1 << self.rs_bit
        if strobe:
            output |= 1 << self.e_bit
        return output | self._backlight_mask()

    def _write(self, value):
        try:
            self.bus.write_byte(self.address, value & 0xFF)
        except OSError as e:
            _log(f"I2C Error writing 0x{value:02X} to 0x{self.address:02X}: {e}", level="ERROR")

    def write_nibble(self, rs, nibble):
        self._write(self.pack(rs, nibble, True))
        self.delay.us(cfg.STROBE_DELAY_US)
        self._write(self.pack(rs, nibble, False))
        self.delay.us(cfg.STROBE_DELAY_US)

    def set_backlight(self, state):
        """Refresh the latched backlight line without an E pulse."""
        self.backlight_on = bool(state)
        self._write(self._backlight_mask())

    def close(self):
        if self.bus:
            self.bus.close()
            self.bus = None
            _log(f"I2C bus {self.port} closed.")
