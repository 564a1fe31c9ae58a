# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/base_models.py

Modelos base Pydantic v2 de RadioHub.

- `UTF8SafeModel`: from_attributes + populate_by_name + strip de strings.
- `CamelModel`: igual, pero serializa con alias camelCase (contrato JSON de
  la API de analítica: `downloadCount`, `hasMore`, ...). Acepta tanto el
  nombre Python como el alias al validar.

Autor: RadioHub
Fecha: 2026-09-11
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UTF8SafeModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class CamelModel(UTF8SafeModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
    )


__all__ = ["UTF8SafeModel", "CamelModel", "Field"]

# Fin del archivo backend/app/shared/utils/base_models.py
