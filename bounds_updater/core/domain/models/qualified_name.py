# -*- coding: utf-8 -*-
"""
QualifiedName: namespace-qualified identifier of a feature type.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class QualifiedName:
    """Value object: ``namespace:local_part``, unique within a catalog.

    Used as the key of the per-transaction dirty region map, so it must stay
    hashable and immutable.
    """

    namespace: str
    local_part: str

    @classmethod
    def parse(cls, raw) -> 'QualifiedName':
        """Build a QualifiedName from ``"ns:local"``, ``"{uri}local"`` or an instance.

        A bare ``"local"`` yields an empty namespace.
        """
        if isinstance(raw, QualifiedName):
            return raw
        text = str(raw).strip()
        if not text:
            raise ValueError("Cannot parse an empty qualified name.")
        if text.startswith('{') and '}' in text:
            namespace, local_part = text[1:].split('}', 1)
            return cls(namespace, local_part)
        if ':' in text:
            namespace, local_part = text.rsplit(':', 1)
            return cls(namespace, local_part)
        return cls('', text)

    def __str__(self) -> str:
        if not self.namespace:
            return self.local_part
        return f"{self.namespace}:{self.local_part}"
