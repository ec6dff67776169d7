"""
CoasterForge Backend entry point.

Run with:
    uvicorn backend.main:app --reload
"""

from core.config import Settings
from backend.app import create_app

settings = Settings.from_env()
app = create_app(settings)


# For running directly: python -m backend.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
