"""sway-workspaces - keep numbered sway workspaces on their declared outputs.

This package provides:
- Persistent output-to-workspace mapping (``map``)
- Focus and move commands that correct sway's default placement
- Bulk reassignment of existing workspaces to their outputs
- A monitor daemon recording the previously focused workspace
"""

__version__ = "0.4.0"
__license__ = "MIT"

__all__ = ["__version__", "__license__"]
