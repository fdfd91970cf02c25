"""Entry point. Run with: uvicorn src.main:app"""

from src.api.app import create_app

app = create_app()
