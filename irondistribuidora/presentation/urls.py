"""
Rotas da API REST da loja: catálogo, pedidos do cliente e painel administrativo.
"""
from django.urls import path

from . import views, views_admin

urlpatterns = [
    # ====================================================================
    # 1. CATÁLOGO
    # ====================================================================
    path('api/produtos/', views.CatalogoAPIView.as_view(), name='api_catalogo'),
    path('api/produtos/opcoes/', views.OpcoesCatalogoAPIView.as_view(), name='api_catalogo_opcoes'),
    path('api/produtos/<uuid:pk>/', views.DetalheProdutoAPIView.as_view(), name='api_detalhe_produto'),

    # ====================================================================
    # 2. PEDIDOS DO CLIENTE
    # ====================================================================
    path('api/pedidos/', views.PedidosAPIView.as_view(), name='api_pedidos'),
    path('api/pedidos/<uuid:pk>/', views.DetalhePedidoAPIView.as_view(), name='api_detalhe_pedido'),
    path('api/pedidos/<uuid:pk>/cancelar/', views.CancelarPedidoAPIView.as_view(), name='api_cancelar_pedido'),

    # ====================================================================
    # 3. PAINEL ADMINISTRATIVO
    # ====================================================================
    path('api/admin/pedidos/', views_admin.AdminPedidosAPIView.as_view(), name='api_admin_pedidos'),
    path('api/admin/pedidos/<uuid:pk>/', views_admin.AdminPedidoDetalheAPIView.as_view(),
         name='api_admin_detalhe_pedido'),
    path('api/admin/pedidos/<uuid:pk>/pagamento/', views_admin.AdminPedidoPagamentoAPIView.as_view(),
         name='api_admin_pagamento_pedido'),
]
