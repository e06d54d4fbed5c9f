"""
Service de la ressource User : traduit les verbes HTTP en appels à
l'adaptateur de persistance et les erreurs métier en codes HTTP.
"""
import logging
from datetime import timezone
from typing import Dict, List

from fastapi import HTTPException, status

import schemas
from exceptions import ConflictError, NotFoundError, ValidationError
from user_store import UserStore

logger = logging.getLogger(__name__)


def _as_utc(value):
    # Les dates relues depuis MongoDB peuvent être naïves (UTC implicite)
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Helper pour convertir un document MongoDB en schéma User
def user_helper(user_data: Dict) -> schemas.User:
    return schemas.User(
        id=str(user_data["_id"]),
        name=user_data["name"],
        email=user_data["email"],
        role=user_data.get("role") or "user",
        created_at=_as_utc(user_data["createdAt"]),
        updated_at=_as_utc(user_data["updatedAt"]),
    )


def _not_found(error: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error) or "Utilisateur non trouvé")


class UserService:
    """Opérations CRUD exposées par l'API. Aucun état entre deux appels."""

    def __init__(self, store: UserStore):
        self.store = store

    def list_users(self) -> List[schemas.User]:
        return [user_helper(user) for user in self.store.list_all()]

    def get_user(self, user_id: str) -> schemas.User:
        db_user = self.store.get_by_id(user_id)
        if not db_user:
            raise HTTPException(status_code=404, detail="Utilisateur non trouvé")
        return user_helper(db_user)

    def create_user(self, payload: schemas.UserPayload) -> schemas.User:
        try:
            new_user = self.store.create(payload.dict())
        except ConflictError as e:
            logger.info(f"Création refusée (conflit) : {e}")
            raise HTTPException(status_code=400, detail=str(e)) from e
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=f"Impossible de créer l'utilisateur : {e}") from e
        return user_helper(new_user)

    def update_user(self, user_id: str, payload: schemas.UserPayload) -> schemas.User:
        try:
            updated_user = self.store.update_by_id(user_id, payload.dict())
        except NotFoundError as e:
            raise _not_found(e) from e
        except ValidationError as e:
            # ConflictError est aussi une ValidationError (email en double)
            raise HTTPException(status_code=400, detail=f"Impossible de mettre à jour l'utilisateur : {e}") from e
        return user_helper(updated_user)

    def delete_user(self, user_id: str) -> None:
        try:
            self.store.delete_by_id(user_id)
        except NotFoundError as e:
            raise _not_found(e) from e
