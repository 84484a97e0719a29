# hd44780/timing.py

import time


class Delay:
    """Blocking waits on the calling thread."""

    def __init__(self, sleep=time.sleep):
        self._sleep = sleep

    def us(self, microseconds):
        self._sleep(microseconds / 1_000_000)

    def ms(self, milliseconds):
        self._sleep(milliseconds / 1000)
