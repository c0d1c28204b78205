# sitepulse/shared/__init__.py
