from urllib.parse import urlparse

import uvicorn

from app.core.config import settings


if __name__ == '__main__':
    parsed_url = urlparse(settings.LOCAL_URL)
    host = parsed_url.hostname or "127.0.0.1"
    port = parsed_url.port or 8000

    print(f"Server running at: {settings.LOCAL_URL}")
    uvicorn.run("app.main:app", host=host, port=port, reload=settings.APP_ENV == "local")
