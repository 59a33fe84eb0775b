from fastapi import HTTPException, Security
from fastapi.security.api_key import APIKeyHeader
from starlette.status import HTTP_401_UNAUTHORIZED

from app.core.config import get_settings

api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


def get_api_key(api_key: str | None = Security(api_key_header)) -> str:
    """
    Vérifie que la clé API envoyée dans l'en-tête est correcte.
    Le fournisseur d'identité est externe ; ici on ne contrôle que la clé.
    """
    settings = get_settings()
    if api_key and api_key == settings.API_KEY:
        return api_key
    raise HTTPException(
        status_code=HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )
