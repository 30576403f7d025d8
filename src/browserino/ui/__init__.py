"""UI components: preferences window and its tabs."""

from .general_tab import GeneralTab
from .preferences import PreferencesWindow

__all__ = ["GeneralTab", "PreferencesWindow"]
