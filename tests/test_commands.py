import pytest

from hd44780 import commands as cmds


def test_entry_mode():
    assert cmds.entry_mode() == 0x06
    assert cmds.entry_mode(increment=False, shift=True) == 0x05


def test_display_control():
    assert cmds.display_control() == 0x0C
    assert cmds.display_control(True, True, True) == 0x0F
    assert cmds.display_control(False, False, False) == 0x08


def test_cursor_shift():
    assert cmds.cursor_shift() == 0x14
    assert cmds.cursor_shift(display=True, right=False) == 0x18


def test_function_set():
    assert cmds.function_set() == 0x30
    assert cmds.function_set(eight_bit=False) == 0x20
    assert cmds.function_set(eight_bit=False, two_line=True) == 0x28
    assert cmds.function_set(two_line=True, font_5x10=True) == 0x3C


@pytest.mark.parametrize("index, expected", [(0, 0x40), (3, 0x58), (7, 0x78), (11, 0x58)])
def test_set_cgram_address(index, expected):
    assert cmds.set_cgram_address(index) == expected


def test_row_address_follows_row_offsets():
    assert cmds.row_address(0, 0) == 0x80
    assert cmds.row_address(0, 1) == 0xC0
    assert cmds.row_address(0, 2) == 0x94
    assert cmds.row_address(19, 3) == 0xE7


def test_command_bus_delays(make_lcd, clock):
    lcd = make_lcd()
    lcd.bus.command(0x01)
    assert lcd.transport.events == [("byte", 0, 0x01, 0.0)]
    assert clock.now == pytest.approx(0.002)

    lcd.bus.data(0x41)
    assert lcd.transport.events[-1] == ("byte", 1, 0x41, pytest.approx(0.002))
    assert clock.now == pytest.approx(0.002)

    lcd.bus.command_nibble(0x13)
    assert lcd.transport.events[-1][:3] == ("nibble", 0, 0x3)
