# hd44780/lcd.py
# A very small terminal on top of an HD44780: cursor tracking with line
# wrapping (no scrolling), strings, custom glyphs and display flags.

import weakref

from periphery import GPIO
from smbus2 import SMBus

from . import commands as cmds
from . import config as cfg
from . import initialization
from .log import get_logger
from .registry import registry as default_registry
from .timing import Delay
from .transport import I2CTransport, ParallelTransport

_log = get_logger("CharLCD")


def _teardown(transport, registry, handle):
    # Runs once, from close() or when the display is garbage-collected
    try:
        transport.close()
    finally:
        if registry is not None and handle is not None:
            registry.release(handle)


class CharLCD:
    """One physical display, bound to a transport and a registry slot."""

    def __init__(self, transport, rows=cfg.LCD_ROWS, cols=cfg.LCD_COLS,
                 handle=None, registry=None, delay=None, backlight=None):
        self.transport = transport
        self.delay = delay or transport.delay
        self.bus = cmds.CommandBus(transport, self.delay)
        self.rows = rows
        self.cols = cols
        self.handle = handle
        self._finalizer = weakref.finalize(self, _teardown, transport, registry, handle)

        self.cx = 0
        self.cy = 0
        # Last display/cursor/blink flags committed to the controller. A
        # reattached controller is assumed to be showing text.
        self._control = cmds.LCD_DISPLAY_CTRL
        if backlight is None:
            backlight = getattr(transport, "backlight_on", True)
        self._backlight = bool(backlight)

    # --- State ---
    @property
    def bits(self):
        return self.transport.bus_width

    @property
    def cursor(self):
        return (self.cx, self.cy)

    @property
    def display_control(self):
        return self._control

    @property
    def backlight_state(self):
        return self._backlight

    @property
    def closed(self):
        return not self._finalizer.alive

    # --- Controller setup ---
    def reinit(self):
        """Run the power-up initialization sequence."""
        initialization.reinit(self)

    def send_command(self, command):
        """Send any raw command byte. Cursor and flags are not tracked."""
        self.bus.command(command)

    # --- Cursor ---
    def home(self):
        self.bus.command(cmds.LCD_HOME)
        self.cx = self.cy = 0
        self.delay.ms(cfg.HOME_DELAY_MS)

    def clear(self):
        self.bus.command(cmds.LCD_CLEAR)
        self.bus.command(cmds.LCD_HOME)
        self.cx = self.cy = 0
        self.delay.ms(cfg.HOME_DELAY_MS)

    def position(self, x, y):
        """Move the cursor to column ``x`` of row ``y``. Invalid cells are ignored."""
        if x < 0 or x >= self.cols or y < 0 or y >= self.rows:
            _log(f"Ignoring position ({x}, {y}) on {self.cols}x{self.rows} display", level="DEBUG")
            return
        self.bus.command(cmds.row_address(x, y))
        self.cx = x
        self.cy = y

    # --- Display flags ---
    def _set_control(self, flag, state):
        if state:
            self._control |= flag
        else:
            self._control &= ~flag
        self.bus.command(cmds.LCD_CTRL | self._control)

    def display_on(self, state):
        self._set_control(cmds.LCD_DISPLAY_CTRL, state)

    def cursor_on(self, state):
        self._set_control(cmds.LCD_CURSOR_CTRL, state)

    def blink_on(self, state):
        self._set_control(cmds.LCD_BLINK_CTRL, state)

    def backlight(self, state):
        """Switch the backlight. Wired-in backlights on GPIO displays ignore this."""
        self._backlight = bool(state)
        self.transport.set_backlight(self._backlight)

    # --- Output ---
    def putchar(self, char):
        """Write one character code and advance the cursor.

        The controller auto-increments linearly through DDRAM, which does not
        follow the row layout, so the address is set explicitly on every wrap.
        """
        if isinstance(char, str):
            if len(char) != 1:
                raise ValueError(f"putchar takes a single character, got {char!r}")
            char = char.encode("latin-1", errors="replace")[0]
        self.bus.data(char)

        self.cx += 1
        if self.cx >= self.cols:
            self.cx = 0
            self.cy += 1
            if self.cy >= self.rows:
                self.cy = 0
            self.bus.command(cmds.row_address(self.cx, self.cy))

    def puts(self, text):
        """Write a string (or bytes) from the cursor. No newline handling."""
        if isinstance(text, str):
            text = text.encode("latin-1", errors="replace")
        for code in text:
            self.putchar(code)

    def printf(self, fmt, *args):
        """printf-style write. Returns True if the output was truncated."""
        text = (fmt % args).encode("latin-1", errors="replace")
        limit = cfg.PRINTF_MAX_CHARS
        truncated = len(text) > limit
        if truncated:
            _log(f"printf output truncated from {len(text)} to {limit} characters", level="WARNING")
            text = text[:limit]
        self.puts(text)
        return truncated

    def char_def(self, index, pattern):
        """Define custom glyph ``index`` (0-7) from eight 5-bit row patterns.

        This leaves the address pointer in CGRAM; call position() before
        writing text again.
        """
        pattern = list(pattern)
        if len(pattern) != 8:
            raise ValueError("Custom character pattern must be 8 bytes.")
        self.bus.command(cmds.set_cgram_address(index))
        for row in pattern:
            self.bus.data(row)

    # --- Lifetime ---
    def close(self):
        """Release the transport and return the handle to the registry.

        Dropping the last reference to the display does the same.
        """
        if not self._finalizer.alive:
            return
        self._finalizer()
        _log(f"Handle {self.handle} closed.")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return (f"CharLCD(handle={self.handle}, {self.cols}x{self.rows}, "
                f"{self.bits}-bit, cursor={self.cursor})")


def _open_transport(config, delay, gpio_factory, bus_factory):
    if config.is_i2c:
        return I2CTransport(config.i2c_addr, config.rs, config.strb, config.data,
                            config.backlight, config.backlight_state,
                            port=config.i2c_port, delay=delay, bus_factory=bus_factory)
    return ParallelTransport(config.rs, config.strb, config.data, bits=config.bits,
                             chip=config.gpio_chip, delay=delay, gpio_factory=gpio_factory)


def lcd_new(config, delay=None, gpio_factory=GPIO, bus_factory=SMBus, registry=None):
    """Attach to a display without sending it any commands.

    Use this directly when the controller was initialized by an earlier
    process; otherwise use lcd_init() or call reinit() on the result.
    """
    registry = default_registry if registry is None else registry
    delay = delay or Delay()
    config.validate()

    handle = registry.acquire(config)
    try:
        transport = _open_transport(config, delay, gpio_factory, bus_factory)
    except Exception:
        registry.release(handle)
        raise

    lcd = CharLCD(transport, rows=config.rows, cols=config.cols,
                  handle=handle, registry=registry, delay=delay,
                  backlight=config.backlight_state)
    registry.bind(handle, lcd)
    _log(f"Handle {handle} attached: {config!r}")

    # Controller power-on time
    delay.ms(cfg.POWER_ON_DELAY_MS)
    return lcd


def lcd_init(config, delay=None, gpio_factory=GPIO, bus_factory=SMBus, registry=None):
    """Attach to a display and run the initialization sequence on it."""
    lcd = lcd_new(config, delay=delay, gpio_factory=gpio_factory,
                  bus_factory=bus_factory, registry=registry)
    try:
        lcd.reinit()
    except Exception:
        lcd.close()
        raise
    return lcd


def get_lcd(handle, registry=None):
    """Look up a live display by its integer handle."""
    registry = default_registry if registry is None else registry
    return registry.get(handle)
