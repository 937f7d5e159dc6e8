"""Module entrypoint.

Allows:
    python -m log_level_stats
"""

from __future__ import annotations

from log_level_stats.cli import main

if __name__ == "__main__":
    main()
