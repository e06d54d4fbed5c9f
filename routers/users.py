from fastapi import APIRouter, Depends, Response
from typing import List

from dependencies import get_user_service
from user_service import UserService
import schemas

router = APIRouter()

@router.get("", summary="Lister tous les utilisateurs", response_model=List[schemas.User])
def list_users(service: UserService = Depends(get_user_service)):
    return service.list_users()

@router.get("/{user_id}", summary="Obtenir un utilisateur par son ID", response_model=schemas.User,
            responses={404: {"model": schemas.Message}})
def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)

@router.post("", summary="Créer un nouvel utilisateur", response_model=schemas.User, status_code=201,
             responses={400: {"model": schemas.Message}})
def create_user(user: schemas.UserPayload, service: UserService = Depends(get_user_service)):
    return service.create_user(user)

@router.put("/{user_id}", summary="Mettre à jour un utilisateur", response_model=schemas.User,
            responses={400: {"model": schemas.Message}, 404: {"model": schemas.Message}})
def update_user(user_id: str, user: schemas.UserPayload, service: UserService = Depends(get_user_service)):
    return service.update_user(user_id, user)

@router.delete("/{user_id}", summary="Supprimer un utilisateur", status_code=204,
               responses={404: {"model": schemas.Message}})
def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    service.delete_user(user_id)
    return Response(status_code=204)
