# -*- coding: utf-8 -*-
"""
Entry point for the catalog service.

    uvicorn main:app --host 0.0.0.0 --port 8000

or simply `python main.py`, which reads HOST/PORT from the environment.
"""

import uvicorn

from catalog.app import create_app

# Fails here (ConfigurationError) when DB_HOST/DB_NAME or DATABASE_URL are missing
app = create_app()


if __name__ == "__main__":
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)
