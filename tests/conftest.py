"""Pytest configuration for sway-workspaces tests."""

import sys
from pathlib import Path

# Add the repository root so sway_workspaces imports without installation
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))
