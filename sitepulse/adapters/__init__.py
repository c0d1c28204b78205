# sitepulse/adapters/__init__.py
