"""
Infrastructure Services (Infrastructure Layer)

Adapters concretos de domain.services.IdentityProvider:
  - FirebaseIdentityProvider: Firebase Auth (producción)
  - JwtIdentityProvider: JWT HS256 local (desarrollo / tests)

Sin lógica: solo re-exporta.
"""

from .firebase_identity import FirebaseIdentityProvider
from .jwt_identity import JwtIdentityProvider

__all__ = ["FirebaseIdentityProvider", "JwtIdentityProvider"]
