"""
Adaptateur de persistance : enveloppe la collection MongoDB des utilisateurs.

Chaque opération correspond à un seul appel atomique sur un document. Les
horodatages (createdAt / updatedAt) sont posés ici, au moment de l'appel.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_object_id(user_id) -> Optional[ObjectId]:
    # Un identifiant mal formé est traité comme "non trouvé"
    if isinstance(user_id, ObjectId):
        return user_id
    if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
        return None
    return ObjectId(user_id)


def normalize_user_fields(payload: Dict) -> Dict[str, str]:
    """
    Nettoie les champs modifiables d'un utilisateur.
    name est trimé, email trimé et mis en minuscules, role vaut "user" s'il est vide.
    Lève une ValidationError si name ou email est absent ou vide.
    """
    name = (payload.get("name") or "").strip()
    email = (payload.get("email") or "").strip().lower()
    role = (payload.get("role") or "").strip() or DEFAULT_ROLE

    missing = [field for field, value in (("name", name), ("email", email)) if not value]
    if missing:
        raise ValidationError(f"Champs obligatoires manquants : {', '.join(missing)}")

    return {"name": name, "email": email, "role": role}


class UserStore:
    """Accès à la collection "users"."""

    def __init__(self, collection: Collection, clock: Callable[[], datetime] = utc_now):
        self.collection = collection
        self.clock = clock

    def ensure_indexes(self) -> None:
        """Crée l'index unique sur l'email (une seule fiche par email)."""
        self.collection.create_index([("email", ASCENDING)], unique=True, name="email_unique")
        self.collection.create_index([("createdAt", DESCENDING)], name="created_at_desc")

    def list_all(self) -> List[Dict]:
        """Tous les utilisateurs, les plus récemment créés en premier."""
        cursor = self.collection.find().sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
        return list(cursor)

    def get_by_id(self, user_id) -> Optional[Dict]:
        object_id = _to_object_id(user_id)
        if object_id is None:
            return None
        return self.collection.find_one({"_id": object_id})

    def create(self, payload: Dict) -> Dict:
        user_data = normalize_user_fields(payload)
        now = self.clock()
        user_data["createdAt"] = now
        user_data["updatedAt"] = now

        try:
            result = self.collection.insert_one(user_data)
        except DuplicateKeyError as e:
            logger.warning(f"Création refusée, email déjà utilisé : {user_data['email']}")
            raise ConflictError("Email déjà utilisé") from e

        new_user = self.collection.find_one({"_id": result.inserted_id})
        logger.info(f"Utilisateur créé : {result.inserted_id} <{new_user['email']}>")
        return new_user

    def update_by_id(self, user_id, payload: Dict) -> Dict:
        """
        Remplace name, email et role (un role omis revient à "user") et
        rafraîchit updatedAt. Ne crée jamais de fiche.
        """
        object_id = _to_object_id(user_id)
        if object_id is None:
            raise NotFoundError("Utilisateur non trouvé")

        try:
            update_data = normalize_user_fields(payload)
        except ValidationError:
            if self.collection.find_one({"_id": object_id}, {"_id": 1}) is None:
                raise NotFoundError("Utilisateur non trouvé")
            raise

        update_data["updatedAt"] = self.clock()

        try:
            updated_user = self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            logger.warning(f"Mise à jour refusée pour {object_id}, email déjà utilisé : {update_data['email']}")
            raise ConflictError("Email déjà utilisé") from e

        if updated_user is None:
            raise NotFoundError("Utilisateur non trouvé")

        logger.info(f"Utilisateur mis à jour : {object_id}")
        return updated_user

    def delete_by_id(self, user_id) -> None:
        object_id = _to_object_id(user_id)
        if object_id is None:
            raise NotFoundError("Utilisateur non trouvé")

        result = self.collection.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise NotFoundError("Utilisateur non trouvé")

        logger.info(f"Utilisateur supprimé : {object_id}")
