# irondistribuidora/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    # O nome completo do path da aplicação
    name = 'irondistribuidora.core'
    label = 'core'
    verbose_name = 'Regras de Negócio (Core)'

    # Camada sem modelos: as tabelas ficam em infrastructure, catalog e vendas.
    default_auto_field = 'django.db.models.BigAutoField'
