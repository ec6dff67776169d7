"""
CoasterForge Core Metadata
--------------------------
Project identity shared by the API root endpoint and the OpenAPI schema.
"""

__project__ = "CoasterForge"
__version__ = "1.0.0"

CORE_METADATA = {
    "project": __project__,
    "version": __version__,
    "description": (
        "Dice-roll roller-coaster concept generator with per-user storage, "
        "public sharing and AI-written descriptions, theming and layouts."
    ),
}


def get_metadata() -> dict:
    """Return current project metadata as a dict."""
    return dict(CORE_METADATA)
