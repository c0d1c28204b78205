# sitepulse/application/ports/__init__.py
