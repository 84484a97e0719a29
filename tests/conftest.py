"""Hardware fakes shared by the test modules."""

import pytest

from hd44780.config import LcdConfig
from hd44780.lcd import CharLCD, lcd_new
from hd44780.registry import HandleRegistry
from hd44780.timing import Delay
from hd44780.transport import Transport


class FakeClock:
    """Time only moves when the driver sleeps."""

    def __init__(self):
        self.now = 0.0

    def sleep(self, seconds):
        self.now += seconds


class FakeGPIO:
    def __init__(self, factory, line, direction):
        self.factory = factory
        self.line = line
        self.direction = direction
        self.value = direction == "high"
        self.closed = False

    def write(self, value):
        assert isinstance(value, bool)
        self.value = value
        self.factory.events.append((self.factory.clock.now, self.line, value))

    def close(self):
        self.closed = True


class FakeGPIOFactory:
    """Stands in for periphery.GPIO; accepts (line, dir) or (chip, line, dir)."""

    def __init__(self, clock, fail_line=None):
        self.clock = clock
        self.fail_line = fail_line
        self.lines = {}
        self.opened = []
        self.events = []

    def __call__(self, *args):
        line, direction = args[-2], args[-1]
        self.opened.append(args)
        if line == self.fail_line:
            raise OSError(13, "Permission denied")
        gpio = FakeGPIO(self, line, direction)
        self.lines[line] = gpio
        return gpio


class FakeSMBus:
    def __init__(self, port, clock, fail_writes=False):
        self.port = port
        self.clock = clock
        self.fail_writes = fail_writes
        self.writes = []
        self.closed = False

    def write_byte(self, addr, value):
        if self.fail_writes:
            raise OSError(121, "Remote I/O error")
        self.writes.append((self.clock.now, addr, value))

    def close(self):
        self.closed = True


class FakeSMBusFactory:
    def __init__(self, clock, fail_open=False, fail_writes=False):
        self.clock = clock
        self.fail_open = fail_open
        self.fail_writes = fail_writes
        self.buses = []

    def __call__(self, port):
        if self.fail_open:
            raise FileNotFoundError(2, f"No such file or directory: '/dev/i2c-{port}'")
        bus = FakeSMBus(port, self.clock, self.fail_writes)
        self.buses.append(bus)
        return bus

    @property
    def bus(self):
        return self.buses[-1]


class RecordingTransport(Transport):
    """Records (kind, rs, value, time) for every write."""

    def __init__(self, clock, bus_width=4):
        super().__init__(Delay(clock.sleep))
        self.clock = clock
        self.bus_width = bus_width
        self.events = []
        self.backlight_on = True
        self.closed = False

    def write_nibble(self, rs, nibble):
        self.events.append(("nibble", rs, nibble, self.clock.now))

    def write_byte(self, rs, byte):
        self.events.append(("byte", rs, byte, self.clock.now))

    def set_backlight(self, state):
        self.backlight_on = state
        self.events.append(("backlight", None, state, self.clock.now))

    def close(self):
        self.closed = True

    def commands(self):
        return [value for kind, rs, value, _ in self.events if kind == "byte" and rs == 0]

    def data(self):
        return [value for kind, rs, value, _ in self.events if kind == "byte" and rs == 1]

    def reset(self):
        self.events = []


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def delay(clock):
    return Delay(clock.sleep)


@pytest.fixture
def registry():
    return HandleRegistry()


@pytest.fixture
def make_lcd(clock):
    """Build a CharLCD over a RecordingTransport."""

    def _make(rows=2, cols=16, bus_width=4):
        transport = RecordingTransport(clock, bus_width)
        return CharLCD(transport, rows=rows, cols=cols, handle=0)

    return _make


@pytest.fixture
def smbus_factory(clock):
    return FakeSMBusFactory(clock)


@pytest.fixture
def gpio_factory(clock):
    return FakeGPIOFactory(clock)


@pytest.fixture
def i2c_config():
    # 16x2 backpack at 0x27: D4-D7 on P4-P7, RS=P0, E=P2, BL=P3
    return LcdConfig(rows=2, cols=16, i2c_addr=0x27, bits=4, rs=0, strb=2,
                     data=[4, 5, 6, 7], backlight=3, backlight_state=1)


@pytest.fixture
def i2c_lcd(i2c_config, delay, smbus_factory, registry):
    lcd = lcd_new(i2c_config, delay=delay, bus_factory=smbus_factory, registry=registry)
    yield lcd
    lcd.close()
