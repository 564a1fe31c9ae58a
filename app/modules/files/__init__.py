# -*- coding: utf-8 -*-
"""
backend/app/modules/files/__init__.py

Módulo de archivos de RadioHub.

Responsabilidades (alto nivel):
- Catálogo de archivos (File) y bitácora de descargas (DownloadLog).
- Registro de descargas: servidas por el backend o reportadas por el cliente.

Autor: RadioHub
Fecha: 2026-09-05
"""
