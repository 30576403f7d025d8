"""
Entry point for the Browserino preferences pane.

Opens the preferences window against the platform preference store
(user defaults on macOS, a JSON file elsewhere).

Run with: python -m browserino
Or: browserino (if installed as package)
"""

import sys


def main() -> int:
    """Open the preferences window and run the Qt event loop."""
    from .app import run_app
    return run_app()


if __name__ == "__main__":
    sys.exit(main())
