class TimerEngineError(Exception):
    """Base exception for the pomodoro timer engine."""


class InvalidConfiguration(TimerEngineError):
    """Raised when timer durations or cadence are out of range."""


class DegenerateConfiguration(TimerEngineError):
    """Raised when consecutive zero-length phases would cycle without end."""


class TickSourceError(TimerEngineError):
    """Raised when the periodic tick source cannot be scheduled."""


class EngineClosed(TimerEngineError):
    """Raised when a command is issued to an engine that was closed."""
