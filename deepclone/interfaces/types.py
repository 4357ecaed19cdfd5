# deepclone/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import TYPE_CHECKING, Any, Callable, Tuple

if TYPE_CHECKING:
    from deepclone.core.session import CloneSession

TypeTag = str
Lookup = Tuple[bool, Any]

# Callback Types
CloneFunction = Callable[[Any, "CloneSession"], Any]
