"""
Playback controller: owns the buffer, the recorded StepSequence and the
run state, and applies a speed-dependent number of Steps per pulse.

States: IDLE (nothing recorded) -> RUNNING <-> PAUSED -> FINISHED.
Commands that make no sense in the current state are ignored.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from . import settings
from .buffer import Mark, ValueBuffer, make_rng
from .drivers import build_sequence, get_driver
from .steps import Counters, apply_step

logger = logging.getLogger(__name__)


class Mode(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    FINISHED = "finished"


class Command(Enum):
    START       = "start"
    PAUSE       = "pause"
    RESET       = "reset"
    SPEED_UP    = "speed_up"
    SPEED_DOWN  = "speed_down"
    GROW_SIZE   = "grow_size"
    SHRINK_SIZE = "shrink_size"
    SKIP        = "skip"


def steps_per_tick(speed_level: int) -> int:
    return int(round(settings.SPEED_BASE ** ((speed_level - 1) / settings.SPEED_SCALE)))


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the presentation layer every frame."""
    values:          tuple
    marks:           tuple
    comparisons:     int
    mutations:       int
    cursor:          int
    sequence_length: int
    mode:            Mode
    speed_level:     int
    element_count:   int
    algorithm:       str


class PlaybackController:

    def __init__(self, algorithm=settings.DEFAULT_ALGORITHM, element_count=settings.DEFAULT_SIZE,
                 speed_level=settings.DEFAULT_SPEED, rng=None):
        get_driver(algorithm)
        self.rng           = rng if rng is not None else make_rng()
        self.algorithm     = algorithm
        self.element_count = element_count
        self.speed_level   = settings.clamp_speed(speed_level)
        self.buffer        = ValueBuffer()
        self.counters      = Counters()
        self.sequence      = None
        self.cursor        = 0
        self.mode          = Mode.IDLE
        self._elapsed      = 0.0
        self.reset()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def configure(self, algorithm, element_count):
        """Select an algorithm and size; always lands in IDLE on a fresh shuffle."""
        get_driver(algorithm)
        if element_count < 1:
            raise ValueError(f"element_count must be positive, got {element_count}")
        self.algorithm     = algorithm
        self.element_count = element_count
        self.reset()

    def _clear_run(self):
        self.mode     = Mode.IDLE
        self.sequence = None
        self.cursor   = 0
        self._elapsed = 0.0
        self.counters.reset()

    def reset(self):
        self._clear_run()
        self.buffer.reset(self.element_count, self.rng)

    def load(self, values):
        """Replace the buffer with a given permutation of 1..n (returns to IDLE)."""
        if not values or sorted(values) != list(range(1, len(values) + 1)):
            raise ValueError(f"Expected a permutation of 1..n, got {list(values)!r}")
        self._clear_run()
        self.buffer        = ValueBuffer(values)
        self.element_count = len(self.buffer)

    # ------------------------------------------------------------------
    # Run state
    # ------------------------------------------------------------------
    def start(self):
        if self.mode is not Mode.IDLE:
            logger.debug("start ignored in %s", self.mode.name)
            return
        self.sequence = build_sequence(self.algorithm, self.buffer.values)
        self.cursor   = 0
        self.mode     = Mode.RUNNING
        logger.info("Running %s on %d values (%d steps)",
                    self.algorithm, self.element_count, len(self.sequence))

    def toggle_run(self):
        if self.mode is Mode.RUNNING:   self.mode = Mode.PAUSED
        elif self.mode is Mode.PAUSED:  self.mode = Mode.RUNNING
        else: logger.debug("toggle_run ignored in %s", self.mode.name)

    def change_speed(self, delta):
        self.speed_level = settings.clamp_speed(self.speed_level + delta)

    def change_size(self, delta):
        """Move `delta` positions through SIZE_CHOICES. Ignored while running."""
        if self.mode is Mode.RUNNING:
            logger.debug("change_size ignored while running")
            return
        choices = settings.SIZE_CHOICES
        count   = self.element_count
        if count in choices:
            pos = max(0, min(len(choices) - 1, choices.index(count) + delta))
            self.element_count = choices[pos]
        elif delta > 0:
            # off-list sizes step to the neighbouring choice in that direction
            self.element_count = min((c for c in choices if c > count), default=count)
        elif delta < 0:
            self.element_count = max((c for c in choices if c < count), default=count)
        self.reset()

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    def _advance(self, budget):
        steps = self.sequence.steps
        stop  = min(len(steps), self.cursor + budget)
        while self.cursor < stop:
            apply_step(self.buffer, steps[self.cursor], self.counters)
            self.cursor += 1
        if self.cursor >= len(steps):
            self.buffer.settle_all()
            self.mode = Mode.FINISHED
            logger.info("%s finished: %d comparisons, %d mutations",
                        self.algorithm, self.counters.comparisons, self.counters.mutations)

    def tick(self, delta_time=None):
        """
        Advance playback by one pulse, or by however many TICK_INTERVAL pulses
        fit into `delta_time` seconds (at most MAX_PULSES_PER_TICK).
        """
        if self.mode is not Mode.RUNNING or not self.sequence:
            return
        pulses = 1
        if delta_time is not None:
            self._elapsed += delta_time
            pulses = int(self._elapsed // settings.TICK_INTERVAL)
            self._elapsed -= pulses * settings.TICK_INTERVAL
            if pulses > settings.MAX_PULSES_PER_TICK:
                pulses = settings.MAX_PULSES_PER_TICK
                self._elapsed = 0.0
            if pulses == 0:
                return
        self._advance(pulses * steps_per_tick(self.speed_level))

    def skip_to_end(self):
        """Apply every remaining Step at once."""
        if self.mode is Mode.IDLE:
            self.start()
        if self.mode in (Mode.RUNNING, Mode.PAUSED):
            self._advance(len(self.sequence) - self.cursor)

    # ------------------------------------------------------------------
    # Presentation interface
    # ------------------------------------------------------------------
    def command(self, cmd: Command):
        if   cmd is Command.START:       self.start()
        elif cmd is Command.PAUSE:       self.toggle_run()
        elif cmd is Command.RESET:       self.reset()
        elif cmd is Command.SPEED_UP:    self.change_speed(+1)
        elif cmd is Command.SPEED_DOWN:  self.change_speed(-1)
        elif cmd is Command.GROW_SIZE:   self.change_size(+1)
        elif cmd is Command.SHRINK_SIZE: self.change_size(-1)
        elif cmd is Command.SKIP:        self.skip_to_end()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            values=tuple(self.buffer.values),
            marks=tuple(Mark(m) for m in self.buffer.marks),
            comparisons=self.counters.comparisons,
            mutations=self.counters.mutations,
            cursor=self.cursor,
            sequence_length=len(self.sequence) if self.sequence else 0,
            mode=self.mode,
            speed_level=self.speed_level,
            element_count=self.element_count,
            algorithm=self.algorithm,
        )
