# sitepulse/domain/models/__init__.py

from sitepulse.domain.models.client_domain_model import Client
from sitepulse.domain.models.token_domain_model import IssuedToken

__all__ = ["Client", "IssuedToken"]
