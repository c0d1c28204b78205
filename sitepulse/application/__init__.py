# sitepulse/application/__init__.py
