# main.py: Point d'entrée pour le serveur uvicorn.
# Charge la configuration, ouvre la connexion MongoDB une seule fois
# et la transmet à l'application créée par l'app factory.

import logging
import sys

from dotenv import load_dotenv

# Charger les variables d'environnement au tout début
load_dotenv()

import uvicorn
from pymongo.errors import PyMongoError

from app_factory import create_app  # qui se trouve dans app_factory.py
from config import load_settings
from database import check_connection, create_mongo_client, get_mongo_db
from exceptions import ConfigurationError

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def build_app():
    """Construit l'application ; toute erreur de démarrage est fatale."""
    settings = load_settings()
    client = create_mongo_client(settings)
    check_connection(client)
    app = create_app(get_mongo_db(client, settings))
    return app, settings


def main():
    try:
        app, settings = build_app()
    except (ConfigurationError, PyMongoError) as e:
        logging.error(f"Échec du démarrage du serveur : {e}")
        sys.exit(1)

    logging.info(f"Serveur à l'écoute sur http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
