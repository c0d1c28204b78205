# sitepulse/adapters/inbound/api/__init__.py
