# sitepulse/adapters/inbound/__init__.py
