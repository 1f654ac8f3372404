from launchpad.models.base import Base
from launchpad.models.document import StoredDocument

__all__ = ["Base", "StoredDocument"]
