"""
Módulo de inicialização dos repositórios.
Deve ser importado somente depois que o Django estiver configurado.
"""
from django.conf import settings

from .repositories import (
    ProdutoRepositoryDjango as ProdutoRepository,
    PedidoRepositoryDjango as PedidoRepository,
    UsuarioRepositoryDjango as UsuarioRepository,
)
from .gateways import WhatsAppLinkGateway

# Instâncias globais dos repositórios
produto_repo = ProdutoRepository()
pedido_repo = PedidoRepository()
usuario_repo = UsuarioRepository()
whatsapp_gateway = WhatsAppLinkGateway(
    numero=settings.WHATSAPP_NUMERO,
    site=settings.WHATSAPP_SITE,
)
