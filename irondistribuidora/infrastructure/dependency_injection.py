# irondistribuidora/infrastructure/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar os Use Cases com suas dependências de Repositórios/Gateways
concretos da camada de Infraestrutura.
"""
from django.conf import settings

from irondistribuidora.core.use_cases import (
    ConsultarCatalogoUseCase,
    DetalharProdutoUseCase,
    CriarPedidoUseCase,
    CriarPedidoAdminUseCase,
    ListarPedidosDoUsuarioUseCase,
    DetalharPedidoDoUsuarioUseCase,
    CancelarPedidoUseCase,
    GerenciarPedidosAdminUseCase,
)
from .instances import produto_repo, pedido_repo, usuario_repo, whatsapp_gateway


# ====================================================================
# Use Cases de Catálogo
# ====================================================================

def get_consultar_catalogo_use_case() -> ConsultarCatalogoUseCase:
    return ConsultarCatalogoUseCase(produto_repo, itens_por_pagina=settings.ITENS_POR_PAGINA)

def get_detalhar_produto_use_case() -> DetalharProdutoUseCase:
    return DetalharProdutoUseCase(produto_repo)


# ====================================================================
# Use Cases de Vendas
# ====================================================================

def get_criar_pedido_use_case() -> CriarPedidoUseCase:
    return CriarPedidoUseCase(produto_repo, pedido_repo)

def get_criar_pedido_admin_use_case() -> CriarPedidoAdminUseCase:
    return CriarPedidoAdminUseCase(produto_repo, pedido_repo, usuario_repo)

def get_listar_pedidos_do_usuario_use_case() -> ListarPedidosDoUsuarioUseCase:
    return ListarPedidosDoUsuarioUseCase(pedido_repo)

def get_detalhar_pedido_do_usuario_use_case() -> DetalharPedidoDoUsuarioUseCase:
    return DetalharPedidoDoUsuarioUseCase(pedido_repo)

def get_cancelar_pedido_use_case() -> CancelarPedidoUseCase:
    return CancelarPedidoUseCase(pedido_repo)

def get_gerenciar_pedidos_admin_use_case() -> GerenciarPedidosAdminUseCase:
    return GerenciarPedidosAdminUseCase(pedido_repo)


# ====================================================================
# Gateways
# ====================================================================

def get_whatsapp_gateway():
    return whatsapp_gateway

def get_produto_repository():
    return produto_repo
