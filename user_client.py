"""
Contrôleur client du formulaire et de la liste des utilisateurs.

Garde l'état d'interface (liste, formulaire, utilisateur en cours d'édition,
message de statut, indicateur de chargement) et appelle l'API REST. La liste
est toujours rechargée entièrement après une modification, jamais corrigée
localement.
"""
import logging

import requests

from config import get_api_base_url

logger = logging.getLogger(__name__)

STATUS_LOAD_FAILED = "Impossible de charger les utilisateurs. Vérifiez la connexion à l'API."
STATUS_REQUIRED = "Le nom et l'email sont obligatoires."
STATUS_CREATED = "Utilisateur créé."
STATUS_UPDATED = "Utilisateur mis à jour."
STATUS_SAVE_FAILED = "Une erreur est survenue lors de l'enregistrement de l'utilisateur."
STATUS_REMOVED = "Utilisateur supprimé."
STATUS_DELETE_FAILED = "Impossible de supprimer l'utilisateur."


def empty_form():
    return {"name": "", "email": "", "role": "user"}


class UserDirectoryController:
    """État du formulaire et de la liste, synchronisé avec l'API."""

    def __init__(self, api_base_url=None, session=None):
        self.api_base_url = (api_base_url or get_api_base_url()).rstrip("/")
        self.session = session or requests.Session()

        self.users = []
        self.form_state = empty_form()
        self.editing_user_id = None
        self.status = ""
        self.loading = False

    def _users_url(self, user_id=None):
        url = f"{self.api_base_url}/api/users"
        return url if user_id is None else f"{url}/{user_id}"

    def _set_status(self, message, refreshed):
        # Un échec du rechargement qui suit l'opération reste visible
        self.status = message if refreshed else f"{message} {STATUS_LOAD_FAILED}"

    def handle_change(self, field, value):
        if field not in self.form_state:
            raise KeyError(f"Champ de formulaire inconnu : {field}")
        self.form_state[field] = value

    def reset_form(self):
        self.form_state = empty_form()
        self.editing_user_id = None

    def refresh(self):
        """
        Recharge la liste complète. En cas d'échec la liste précédente est
        conservée. Retourne True si la liste a été rechargée.
        """
        self.loading = True
        self.status = ""
        try:
            response = self.session.get(self._users_url())
            if response.status_code != 200:
                raise requests.HTTPError(f"Statut inattendu : {response.status_code}")
            self.users = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Échec du chargement des utilisateurs : {e}")
            self.status = STATUS_LOAD_FAILED
            return False
        finally:
            self.loading = False
        return True

    def submit(self):
        """Crée ou met à jour l'utilisateur du formulaire selon editing_user_id."""
        self.status = ""
        payload = {
            "name": self.form_state["name"].strip(),
            "email": self.form_state["email"].strip(),
            "role": self.form_state["role"].strip() or "user",
        }

        if not payload["name"] or not payload["email"]:
            self.status = STATUS_REQUIRED
            return

        editing_user_id = self.editing_user_id
        try:
            if editing_user_id:
                response = self.session.put(self._users_url(editing_user_id), json=payload)
            else:
                response = self.session.post(self._users_url(), json=payload)
            if not 200 <= response.status_code < 300:
                raise requests.HTTPError(f"Statut inattendu : {response.status_code}")
        except requests.RequestException as e:
            logger.warning(f"Échec de l'enregistrement de l'utilisateur : {e}")
            self.status = STATUS_SAVE_FAILED
            return

        refreshed = self.refresh()
        self.reset_form()
        self._set_status(STATUS_UPDATED if editing_user_id else STATUS_CREATED, refreshed)

    def begin_edit(self, user):
        # Aucun verrou côté serveur : la dernière écriture l'emporte
        self.editing_user_id = user["id"]
        self.form_state = {
            "name": user.get("name", ""),
            "email": user.get("email", ""),
            "role": user.get("role", "user"),
        }

    def remove(self, user_id):
        """Supprime l'utilisateur puis recharge la liste, quel que soit le résultat."""
        self.status = ""
        try:
            response = self.session.delete(self._users_url(user_id))
            deleted = response.status_code == 204
        except requests.RequestException as e:
            logger.warning(f"Échec de la suppression de {user_id} : {e}")
            deleted = False

        refreshed = self.refresh()
        self._set_status(STATUS_REMOVED if deleted else STATUS_DELETE_FAILED, refreshed)
