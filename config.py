# config.py
"""
Fichier de configuration centralisée pour l'annuaire des utilisateurs.
Toutes les valeurs viennent des variables d'environnement (voir .env).
"""
import os

from pydantic import BaseModel

from exceptions import ConfigurationError

DEFAULT_DB_NAME = "user_directory"
DEFAULT_PORT = 4000
DEFAULT_API_URL = "http://localhost:4000"


class Settings(BaseModel):
    mongo_uri: str
    mongo_db_name: str = DEFAULT_DB_NAME
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT


def load_settings(environ=None) -> Settings:
    """
    Construit les paramètres du serveur à partir de l'environnement.
    Lève une ConfigurationError si MONGO_URI n'est pas défini.
    """
    env = os.environ if environ is None else environ

    mongo_uri = (env.get("MONGO_URI") or "").strip()
    if not mongo_uri:
        raise ConfigurationError("MONGO_URI est requis")

    port = env.get("PORT")
    try:
        port = int(port) if port else DEFAULT_PORT
    except ValueError as e:
        raise ConfigurationError(f"PORT invalide : {port}") from e

    return Settings(
        mongo_uri=mongo_uri,
        mongo_db_name=env.get("MONGO_DB_NAME") or DEFAULT_DB_NAME,
        host=env.get("HOST") or "0.0.0.0",
        port=port,
    )


def get_api_base_url(environ=None) -> str:
    """URL de base de l'API utilisée par le client (USER_API_URL)."""
    env = os.environ if environ is None else environ
    return (env.get("USER_API_URL") or DEFAULT_API_URL).rstrip("/")
