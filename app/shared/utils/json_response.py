# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/json_response.py

Respuestas JSON de RadioHub con `charset=utf-8` explícito.

Los dashboards muestran nombres de archivo, proyectos y personas con
acentos (`Piloto ñ.mp3`, `Lucía`); algunos proxies asumen latin-1 si el
Content-Type no declara charset.

- UTF8JSONResponse: default_response_class de la app.
- json_response_utf8: para handlers de excepciones.

Autor: RadioHub
Fecha: 2026-09-13
"""

from typing import Any, Mapping, Optional

from fastapi.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


def json_response_utf8(
    content: Any,
    status_code: int = 200,
    headers: Optional[Mapping[str, str]] = None,
) -> UTF8JSONResponse:
    return UTF8JSONResponse(content=content, status_code=status_code, headers=dict(headers) if headers else None)


__all__ = ["UTF8JSONResponse", "json_response_utf8"]

# Fin del archivo backend/app/shared/utils/json_response.py
