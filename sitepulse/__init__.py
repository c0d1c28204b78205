# sitepulse/__init__.py

"""
SitePulse: web analytics ingestion API with client-credential bearer tokens.
"""

__version__ = "1.0.0"
