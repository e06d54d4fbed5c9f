from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

# Schéma de base pour l'utilisateur
class UserBase(BaseModel):
    name: str
    email: str
    role: str = "user"

# Corps des requêtes POST / PUT.
# Tous les champs sont optionnels ici : la présence de name et email est
# vérifiée par le service pour renvoyer un 400 (et non un 422).
class UserPayload(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

# Schéma pour la lecture d'un utilisateur (réponse API)
class User(UserBase):
    id: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        populate_by_name = True

class Message(BaseModel):
    detail: str

class Health(BaseModel):
    status: str = "ok"
