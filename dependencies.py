from fastapi import Request

from user_service import UserService

# --- DÉPENDANCES FASTAPI ---

def get_user_service(request: Request) -> UserService:
    """Retourne le service créé au démarrage par create_app (app.state)."""
    return request.app.state.user_service
