"""Target implementations. Importing this package registers every target."""

from plugin_bridge.targets.cursor import CursorTarget
from plugin_bridge.targets.droid import DroidTarget
from plugin_bridge.targets.pi import PiTarget

__all__ = ["CursorTarget", "DroidTarget", "PiTarget"]
