"""
Centralized constants for evalo.

Role names, key names and file locations shared by the palette, the host
application and the CLI.
"""

import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

EVALO_CONFIG_DIR = Path(
    os.environ.get("EVALO_CONFIG_DIR", str(Path.home() / ".config" / "evalo"))
)

# =============================================================================
# ROLES
# =============================================================================

ADMIN_ROLE = "admin"  # Sees every role-restricted command
KNOWN_ROLES = ("student", "teacher", ADMIN_ROLE)

# =============================================================================
# PALETTE KEYS (Textual key names)
# =============================================================================

KEY_NEXT = "down"
KEY_PREV = "up"
KEY_CONFIRM = "enter"
KEY_CLOSE = "escape"

DEFAULT_OPEN_KEY = "ctrl+k"
