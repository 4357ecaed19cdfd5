"""deepclone: generic deep-clone engine with aliasing preservation and cycle safety

This package copies arbitrary in-memory value graphs so that the copy is fully
independent of the source.

Responsibilities:
    - Shape dispatch over scalars, references, sequences, arrays, mappings,
      sets, records and polymorphic containers
    - Aliasing preservation: two paths to one source object lead to one clone
    - Cycle safety: self-referential graphs clone to the same cycle topology
    - Extension points: self-cloning types and externally registered cloners

Interactions:
    - Client code through CloneManager, deep_clone and clone_as
    - Extension cloners through the CloneSession handle
    - Diagnostics sinks through the CloneObserver protocol
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - A CloneSession belongs to one top-level call and is not locked
        - The extension registry and CloneStats are lock-protected

    Error Handling:
        - Structured error hierarchy rooted at CloneError
        - Any failure aborts the whole clone; no partial result is returned
"""

from deepclone.core.containers import Ref, Variant
from deepclone.core.errors import (
    CloneDepthError,
    CloneError,
    ExtensionError,
    RegistrationError,
    SessionError,
    TypeMismatchError,
    UnclonableKindError,
)
from deepclone.core.manager import CloneManager, clone_as, deep_clone
from deepclone.core.records import field_is_writable, uncloned_field
from deepclone.core.session import CloneSession, SessionStatus
from deepclone.core.shapes import Shape, UnclonableKind, classify
from deepclone.interfaces.protocols import CloneObserver, ExtensionCloner, SelfCloning
from deepclone.plugins.stdlib import register_stdlib_cloners
from deepclone.runtime.stats import CloneStats

__version__ = "0.1.0"

__all__ = [
    # Engine
    "CloneManager",
    "CloneSession",
    "SessionStatus",
    "deep_clone",
    "clone_as",
    # Containers
    "Ref",
    "Variant",
    # Shapes and records
    "Shape",
    "UnclonableKind",
    "classify",
    "field_is_writable",
    "uncloned_field",
    # Extension points
    "SelfCloning",
    "ExtensionCloner",
    "CloneObserver",
    "register_stdlib_cloners",
    # Diagnostics
    "CloneStats",
    # Errors
    "CloneError",
    "UnclonableKindError",
    "TypeMismatchError",
    "RegistrationError",
    "SessionError",
    "CloneDepthError",
    "ExtensionError",
]
