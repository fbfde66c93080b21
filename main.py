#!/usr/bin/env python3
"""Just Pomodoro entry point.

Run with:
    python main.py
    python -m justpomodoro
"""

from justpomodoro.__main__ import main


if __name__ == "__main__":
    main()
