# sitepulse/application/dtos/__init__.py
