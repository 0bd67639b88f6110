#!/usr/bin/env python3
"""WorkoutTimer — entry point.

Run with:
    python main.py
    python -m workouttimer
"""

from workouttimer.__main__ import main


if __name__ == "__main__":
    main()
