# sitepulse/adapters/configuration/__init__.py
