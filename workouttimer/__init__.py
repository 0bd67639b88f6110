"""WorkoutTimer — a two-phase Workout/Rest interval timer."""

__version__ = "0.1.0"
