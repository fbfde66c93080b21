"""Just Pomodoro: a menu-bar Pomodoro timer."""

__version__ = "1.0.0"
