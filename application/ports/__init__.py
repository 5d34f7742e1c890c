"""
Collaborator Interfaces (Ports) for the training engine.

This package defines abstract interfaces that decouple the progression and
analytics logic from infrastructure (document store, course content).
Implementations are provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import DocumentStore, CourseCatalog

    class ProgressionService:
        def __init__(self, store: DocumentStore, catalog: CourseCatalog):
            self.store = store
            self.catalog = catalog
"""

# Document persistence
from application.ports.document_store import (
    DocumentStore,
    apply_field_updates,
    escape_segment,
    field_path,
    get_field,
    remove_field,
)

# Exercise library
from application.ports.exercise_library import ExerciseLibrary, ExerciseLibraryEntry

# Course templates
from application.ports.course_catalog import CourseCatalog, CourseInfo, SlotContent

__all__ = [
    # Document store
    "DocumentStore",
    "apply_field_updates",
    "escape_segment",
    "field_path",
    "get_field",
    "remove_field",
    # Exercise library
    "ExerciseLibrary",
    "ExerciseLibraryEntry",
    # Course catalog
    "CourseCatalog",
    "CourseInfo",
    "SlotContent",
]
