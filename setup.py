"""Packaging for Just Pomodoro.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup

APP = ["main.py"]
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "Just Pomodoro",
        "CFBundleDisplayName": "Just Pomodoro",
        "CFBundleIdentifier": "com.justpomodoro.app",
        "CFBundleVersion": "1.0.0",
        "CFBundleShortVersionString": "1.0.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
        "LSUIElement": True,  # menu-bar only, no Dock icon
    },
}

bundle_args = {}
if "py2app" in sys.argv:
    bundle_args = {
        "app": APP,
        "data_files": [],
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="JustPomodoro",
    version="1.0.0",
    packages=[
        "justpomodoro",
        "justpomodoro.audio",
        "justpomodoro.database",
        "justpomodoro.timer",
        "justpomodoro.ui",
    ],
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.4",
        "SQLAlchemy>=2.0",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["justpomodoro = justpomodoro.__main__:main"],
    },
    **bundle_args,
)
