"""Well-known event type constants.

Defined centrally so publishers and subscribers reference the same strings.
"""

# --- Session lifecycle events ---------------------------------------------

WORK_STARTED = "pomodoro.work.started"
BREAK_STARTED = "pomodoro.break.started"
BREAK_DELAYED = "pomodoro.break.delayed"
BREAK_ENDED = "pomodoro.break.ended"
POMODORO_STOPPED = "pomodoro.stopped"

# --- User-facing reports ----------------------------------------------------

REPORT = "pomodoro.report"

# --- Display events -----------------------------------------------------------

DISPLAY_ERROR = "display.error"
