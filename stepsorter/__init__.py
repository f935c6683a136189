from .buffer import Mark, ValueBuffer, make_rng
from .drivers import DRIVERS, build_sequence, get_driver
from .errors import InvalidStepError, StepSorterError, UnknownAlgorithmError
from .playback import Command, Mode, PlaybackController, Snapshot, steps_per_tick
from .steps import Counters, Step, StepKind, StepRecorder, StepSequence, apply_step

__version__ = "1.0.0"
