# -*- coding: utf-8 -*-
"""
Product catalog service (FastAPI + SQLAlchemy).
"""

__version__ = "1.0.0"
