"""Version utilities for the Calendar Planner application."""

import os
import re


def get_version_from_changelog():
    """Extract the latest version from CHANGELOG.md

    Returns:
        str: The latest version string (e.g., "0.3.0") or "unknown" if not found
    """
    # Project root is the parent of src/
    project_root = os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    )
    changelog_path = os.path.join(project_root, "CHANGELOG.md")

    try:
        with open(changelog_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError:
        return "unknown"

    # Release headers look like ## [0.3.0]
    match = re.search(r"## \[(\d+\.\d+\.\d+)\]", content)
    return match.group(1) if match else "unknown"


# Application version - dynamically fetched from changelog
__version__ = get_version_from_changelog()
