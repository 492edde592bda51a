"""Request and response models that span more than one entity."""

from .catalog import BookAuthorUpdate, BookAuthorUpdateResult

__all__ = ["BookAuthorUpdate", "BookAuthorUpdateResult"]
