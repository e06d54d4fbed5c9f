# Imports from standard library or third-party packages
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database

# Imports from this project
from database import USERS_COLLECTION
from routers import users
from user_service import UserService
from user_store import UserStore
import schemas

logger = logging.getLogger(__name__)


def create_app(database: Database, user_store: UserStore = None):
    """
    Crée et configure l'instance de l'application FastAPI.
    La base MongoDB est fournie par l'appelant (main.py ou les tests).
    """
    store = user_store or UserStore(database[USERS_COLLECTION])

    app = FastAPI(
        title="User Directory API",
        description="API de gestion de l'annuaire des utilisateurs",
        version="1.0.0"
    )
    app.state.user_service = UserService(store)

    # Événements de démarrage
    @app.on_event("startup")
    def on_startup():
        store.ensure_indexes()
        logger.info("Index de la collection des utilisateurs vérifiés")

    # Configuration CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Doit être restreint en production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Un corps JSON invalide est une erreur 400 comme les champs manquants
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": "Corps de requête invalide"})

    # Inclusion des routeurs
    app.include_router(users.router, prefix="/api/users", tags=["Users"])

    @app.get("/health", tags=["Health"], response_model=schemas.Health)
    def health():
        return {"status": "ok"}

    return app
