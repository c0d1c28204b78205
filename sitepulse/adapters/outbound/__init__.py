# sitepulse/adapters/outbound/__init__.py
