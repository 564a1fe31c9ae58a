# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Inicializador del paquete principal 'app' del backend RadioHub.

Funciones:
- Asegura un event loop compatible con asyncpg/aiosqlite en Windows.

Autor: RadioHub
Fecha: 2026-09-02
"""
import sys
import asyncio

if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Fin del archivo backend/app/__init__.py
