# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/__init__.py

Identidad de usuarios para RadioHub.

La autenticación vive fuera de este backend; el módulo sólo expone el
modelo AppUser y la resolución del "actor" de una descarga (usuario
identificado o visitante anónimo).
"""
