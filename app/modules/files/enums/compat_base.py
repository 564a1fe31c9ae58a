# -*- coding: utf-8 -*-
"""
backend/app/modules/files/enums/compat_base.py

TokenEnum: StrEnum cuyos miembros se resuelven desde texto de cliente o
de BD sin importar mayúsculas ni espacios, por valor o por nombre
(los aliases cuentan como nombre).

Autor: RadioHub
Fecha: 2026-09-05
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, List, Optional, TypeVar

E = TypeVar("E", bound="TokenEnum")


class TokenEnum(StrEnum):
    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls: type[E], raw: Any) -> E:
        """
        Resuelve `raw` a un miembro.

        Raises:
            ValueError: token vacío, de otro tipo o desconocido.
        """
        if isinstance(raw, cls):
            return raw
        token = raw.strip().casefold() if isinstance(raw, str) else None
        if token:
            for name, member in cls.__members__.items():
                if token in (name.casefold(), member.value.casefold()):
                    return member
        raise ValueError(f"{raw!r} no es un {cls.__name__} válido")

    @classmethod
    def parse_or(cls: type[E], raw: Any, default: Optional[E] = None) -> Optional[E]:
        try:
            return cls.parse(raw)
        except ValueError:
            return default


__all__ = ["TokenEnum"]
# Fin del archivo backend/app/modules/files/enums/compat_base.py
