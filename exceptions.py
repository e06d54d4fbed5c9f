"""Exceptions métier de l'annuaire des utilisateurs."""


class UserDirectoryError(Exception):
    """Exception de base pour l'annuaire."""
    pass


class ValidationError(UserDirectoryError):
    """Champ obligatoire manquant ou vide."""
    pass


class ConflictError(ValidationError):
    """Clé unique déjà utilisée (email)."""
    pass


class NotFoundError(UserDirectoryError):
    """Aucun enregistrement ne correspond à l'identifiant."""
    pass


class ConfigurationError(UserDirectoryError):
    """Configuration du processus incomplète (ex: MONGO_URI absent)."""
    pass
