"""Periodic triggers for the simulation and spawn ticks.

Two implementations share the ``Ticker`` interface: ``PygameTicker`` rides on
``pygame.time.set_timer`` for the live game, and the tickers handed out by
``ManualClock`` fire only when the clock is advanced, which keeps tests and
agent environments deterministic.
"""

from abc import ABC, abstractmethod

import pygame


class Ticker(ABC):
    """Calls a handler every ``period_ms`` until stopped."""

    @abstractmethod
    def start(self, handler, period_ms):
        """Arm the ticker. Re-arming replaces the handler and period."""

    @abstractmethod
    def stop(self):
        """Disarm the ticker. No tick is delivered after this returns."""

    @property
    @abstractmethod
    def running(self):
        ...


class ManualClock:
    """Fake clock advanced explicitly by the caller."""

    def __init__(self, start_ms=0):
        self.now = start_ms
        self._tickers = []

    def ticker(self):
        ticker = ManualTicker(self)
        self._tickers.append(ticker)
        return ticker

    def advance(self, ms):
        """Move time forward by ``ms``, firing every tick that falls due.

        Ticks fire in time order; tickers due at the same instant fire in the
        order they were created. A handler may stop or start any ticker.
        """
        target = self.now + ms
        while True:
            due = [t for t in self._tickers if t.running and t.next_due <= target]
            if not due:
                break
            ticker = min(due, key=lambda t: (t.next_due, self._tickers.index(t)))
            self.now = ticker.next_due
            ticker.next_due += ticker.period_ms
            ticker.handler()
        self.now = target


class ManualTicker(Ticker):

    def __init__(self, clock):
        self.clock = clock
        self.handler = None
        self.period_ms = None
        self.next_due = None

    def start(self, handler, period_ms):
        if period_ms <= 0:
            raise ValueError(f"Period must be positive, got {period_ms}")
        self.handler = handler
        self.period_ms = period_ms
        self.next_due = self.clock.now + period_ms

    def stop(self):
        self.handler = None
        self.next_due = None

    @property
    def running(self):
        return self.handler is not None


class PygameTicker(Ticker):
    """Ticker backed by a pygame timer event.

    The main loop must pass every event to ``dispatch``. Events already queued
    when the ticker stops are dropped, so a stopped ticker never fires.
    """

    def __init__(self):
        self.event_type = pygame.event.custom_type()
        self.handler = None

    def start(self, handler, period_ms):
        self.handler = handler
        pygame.time.set_timer(self.event_type, int(period_ms))

    def stop(self):
        self.handler = None
        pygame.time.set_timer(self.event_type, 0)

    @property
    def running(self):
        return self.handler is not None

    def dispatch(self, event):
        """Run the handler if ``event`` belongs to this ticker. Returns True if consumed."""
        if event.type != self.event_type:
            return False
        if self.handler is not None:
            self.handler()
        return True
