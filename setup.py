"""Setup for WorkoutTimer.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

from setuptools import setup

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "WorkoutTimer",
        "CFBundleDisplayName": "WorkoutTimer",
        "CFBundleIdentifier": "com.workouttimer.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

setup(
    app=APP,
    data_files=DATA_FILES,
    options={"py2app": OPTIONS},
    name="WorkoutTimer",
    version="0.1.0",
    python_requires=">=3.10",
    packages=[
        "workouttimer",
        "workouttimer.timer",
        "workouttimer.ui",
        "workouttimer.audio",
    ],
    install_requires=[
        "PyQt6>=6.5",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["workouttimer = workouttimer.__main__:main"],
    },
)
