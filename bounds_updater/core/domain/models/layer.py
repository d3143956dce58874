# -*- coding: utf-8 -*-
"""
Layer: a published layer backed by a feature type.

No pyproj dependency.
"""

from dataclasses import dataclass

from .qualified_name import QualifiedName


@dataclass
class Layer:
    """Catalog entity: a publishable layer.

    One feature type may back several layers; layer groups reference layers
    by ``id``.

    Attributes:
        id:       Opaque catalog identifier.
        name:     Layer name.
        resource: Qualified name of the backing feature type.
    """

    id: str
    name: str
    resource: QualifiedName

    def __str__(self) -> str:
        return f"Layer({self.id!r} → {self.resource})"
