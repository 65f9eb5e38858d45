"""
Filadex: 3D-printing filament inventory API.

Run with: uvicorn main:app --host 0.0.0.0 --port 8000
"""

from core.app import create_app

app = create_app()


if __name__ == "__main__":
    import uvicorn
    from core.config import settings

    uvicorn.run("main:app", host=settings.host, port=settings.port)
