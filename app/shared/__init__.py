# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura compartida de RadioHub: configuración, almacén, caché de
respuestas, scheduler y utilidades.

No importa submódulos al cargarse: `from app.shared.config import ...`
no debe arrastrar SQLAlchemy ni APScheduler.
"""
