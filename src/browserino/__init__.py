"""
Browserino Preferences

The preferences pane of the Browserino browser picker: default-browser
status, copy-URL options, and settings export/import as a JSON document.
"""

__version__ = "0.1.0"
__app_name__ = "Browserino"
