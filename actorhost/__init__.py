"""Host-side runtime for virtual actors: method dispatch, reminders, timers, codecs and tracked state."""

__version__ = "1.0.0"