"""
Default browser detection on macOS.

Reads the LaunchServices handler table to find which app opens https
links, and compares its bundle identifier with Browserino's own.
Changing the default is left to the OS.
"""

import logging
import plistlib
import subprocess
from pathlib import Path
from typing import Callable, Optional, Protocol

from ..config.settings import is_macos


logger = logging.getLogger(__name__)


LAUNCH_SERVICES_PLIST = (
    Path.home()
    / "Library"
    / "Preferences"
    / "com.apple.LaunchServices"
    / "com.apple.launchservices.secure.plist"
)

# Opens System Settings at the "Default web browser" picker
DEFAULT_BROWSER_SETTINGS_URL = "x-apple.systempreferences:com.apple.Desktop-Settings.extension"

DEFAULT_SCHEME = "https"


class HandlerRegistry(Protocol):
    """OS registry of URL scheme handlers."""

    def handler_for_scheme(self, scheme: str) -> Optional[str]:
        """Bundle identifier of the app registered for a scheme, if any."""
        ...

    def request_default(
        self,
        bundle_id: str,
        scheme: str,
        on_complete: Callable[[], None],
    ) -> None:
        """Ask the OS to make bundle_id the handler for scheme."""
        ...


def find_applications(bundle_id: str) -> list[Path]:
    """
    Locate installed app bundles for a bundle identifier via Spotlight.

    The match is case-insensitive, like LaunchServices itself.

    Returns:
        App bundle paths, empty if none were found or mdfind is unavailable
    """
    if "'" in bundle_id:
        return []
    query = f"kMDItemCFBundleIdentifier == '{bundle_id}'c"
    try:
        result = subprocess.run(
            ["mdfind", query],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("mdfind unavailable: %s", e)
        return []

    if result.returncode != 0:
        return []
    return [Path(line) for line in result.stdout.splitlines() if line.strip()]


def read_bundle_identifier(app_path: Path) -> Optional[str]:
    """Read CFBundleIdentifier from an app bundle's Info.plist."""
    info_plist = app_path / "Contents" / "Info.plist"
    try:
        with open(info_plist, "rb") as f:
            info = plistlib.load(f)
    except (OSError, plistlib.InvalidFileException):
        return None

    bundle_id = info.get("CFBundleIdentifier") if isinstance(info, dict) else None
    return str(bundle_id) if bundle_id else None


class LaunchServicesRegistry:
    """
    HandlerRegistry backed by the per-user LaunchServices plist.

    The plist records bundle identifiers lowercased, so the recorded value
    is resolved to the handler app's own CFBundleIdentifier when the app
    can be found.
    """

    def __init__(
        self,
        plist_path: Path = LAUNCH_SERVICES_PLIST,
        locate_apps: Callable[[str], list[Path]] = find_applications,
    ):
        self._plist_path = plist_path
        self._locate_apps = locate_apps

    def _handlers(self) -> list[dict]:
        try:
            with open(self._plist_path, "rb") as f:
                data = plistlib.load(f)
        except FileNotFoundError:
            return []
        except (OSError, plistlib.InvalidFileException) as e:
            logger.warning("Could not read %s: %s", self._plist_path, e)
            return []

        handlers = data.get("LSHandlers", []) if isinstance(data, dict) else []
        return [h for h in handlers if isinstance(h, dict)]

    def handler_for_scheme(self, scheme: str) -> Optional[str]:
        scheme = scheme.rstrip(":").lower()
        for handler in self._handlers():
            if str(handler.get("LSHandlerURLScheme", "")).lower() != scheme:
                continue
            bundle_id = handler.get("LSHandlerRoleAll")
            if bundle_id:
                return self._resolve(str(bundle_id))
        return None

    def _resolve(self, recorded: str) -> str:
        for app_path in self._locate_apps(recorded):
            bundle_id = read_bundle_identifier(app_path)
            if bundle_id and bundle_id.casefold() == recorded.casefold():
                return bundle_id
        return recorded

    def request_default(
        self,
        bundle_id: str,
        scheme: str,
        on_complete: Callable[[], None],
    ) -> None:
        logger.info("Requesting %s as default handler for %s", bundle_id, scheme)
        try:
            subprocess.run(["open", DEFAULT_BROWSER_SETTINGS_URL], check=True)
        except (OSError, subprocess.CalledProcessError) as e:
            logger.error("Failed to open default browser settings: %s", e)
        on_complete()


def is_default_browser(
    registry: HandlerRegistry,
    bundle_id: str,
    scheme: str = DEFAULT_SCHEME,
) -> Optional[bool]:
    """
    Check whether bundle_id is the registered handler for a scheme.

    Args:
        registry: Handler registry to query
        bundle_id: Bundle identifier of this app
        scheme: URL scheme to check

    Returns:
        True/False, or None when no handler is registered
    """
    handler = registry.handler_for_scheme(scheme)
    if handler is None:
        return None
    # Bundle identifiers are case-insensitive to LaunchServices
    return handler.casefold() == bundle_id.casefold()


def default_registry() -> Optional[HandlerRegistry]:
    """Get the OS handler registry, or None where there is none to query."""
    if is_macos():
        return LaunchServicesRegistry()
    return None
