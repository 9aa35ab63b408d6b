from django.apps import AppConfig

class VendasConfig(AppConfig):
    # Caminho Python completo do app dentro do projeto 'irondistribuidora'
    name = 'irondistribuidora.vendas'
    label = 'vendas'

    # Nome amigável exibido no admin
    verbose_name = 'Vendas e Pedidos'

    default_auto_field = 'django.db.models.BigAutoField'
