# -*- coding: utf-8 -*-
"""
backend/app/modules/projects/__init__.py

Catálogo de producciones de RadioHub (proyectos, episodios, guiones).

Autor: RadioHub
Fecha: 2026-09-05
"""
