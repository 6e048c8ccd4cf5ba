from .document import Document

# This ensures all models are registered with SQLAlchemy
__all__ = [
    'Document',
]
