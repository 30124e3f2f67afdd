"""pomocat — a Pomodoro work/break timer with cat break notifications."""

__version__ = "0.3.0"
