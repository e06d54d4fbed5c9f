# Base de données: connexion MongoDB pour l'annuaire des utilisateurs.
# Le client est créé une seule fois au démarrage (main.py) puis transmis
# à l'application, il n'y a pas de client global au niveau du module.

from pymongo import MongoClient
from pymongo.database import Database

from config import Settings

USERS_COLLECTION = "users"


def create_mongo_client(settings: Settings) -> MongoClient:
    """Crée le client MongoDB à partir de la configuration."""
    return MongoClient(settings.mongo_uri, tz_aware=True)


def get_mongo_db(client: MongoClient, settings: Settings) -> Database:
    """
    Retourne la base de données MongoDB.
    Utilise la base indiquée dans l'URI, sinon MONGO_DB_NAME.
    """
    return client.get_default_database(default=settings.mongo_db_name)


def check_connection(client: MongoClient) -> None:
    """Vérifie que le serveur MongoDB répond (lève une PyMongoError sinon)."""
    client.admin.command("ping")
