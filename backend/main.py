"""
ASGI entry point: uvicorn main:app (run from backend/).
Configuration comes from env / backend/.env; see bizdesk.core.config.
"""
from bizdesk.app import create_app
from bizdesk.core.config import get_settings

app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.host, port=settings.port)
