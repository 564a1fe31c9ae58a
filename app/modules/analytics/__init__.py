# -*- coding: utf-8 -*-
"""
backend/app/modules/analytics/__init__.py

Analítica de descargas de RadioHub.

Pipelines de sólo lectura que agregan la bitácora download_logs por archivo,
usuario, proyecto/episodio/guion, día, hora y tipo de entidad, dentro de una
ventana de tiempo. Incluye caché de respuestas y modo degradado cuando el
almacén no está disponible.

Autor: RadioHub
Fecha: 2026-09-08
"""

# Prefijo de llaves del caché de respuestas; las escrituras lo invalidan completo
ANALYTICS_CACHE_PREFIX = "analytics:"
