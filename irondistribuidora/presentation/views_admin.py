"""
Views do painel administrativo (API).

Todas exigem usuário staff. A criação de pedidos aqui não passa pela checagem
de estoque: serve para registrar vendas feitas fora do site.
"""
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from irondistribuidora.core.exceptions import BaseErroCore
from irondistribuidora.infrastructure import dependency_injection as di

from .serializers import (
    CriarPedidoAdminSerializer,
    AtualizarStatusSerializer,
    AtualizarPagamentoSerializer,
    ListagemPedidosAdminSerializer,
    PedidoSerializer,
)
from .views import resposta_erro, resposta_resultado_pedido


class AdminPedidosAPIView(APIView):
    """
    GET: listagem paginada de todos os pedidos (?status=&search=&page=&limit=).
    POST: registra um pedido em nome de um cliente.
    """
    permission_classes = [IsAdminUser]

    @extend_schema(parameters=[ListagemPedidosAdminSerializer], responses=PedidoSerializer(many=True))
    def get(self, request):
        consulta = ListagemPedidosAdminSerializer(data=request.query_params)
        if not consulta.is_valid():
            return Response(consulta.errors, status=status.HTTP_400_BAD_REQUEST)
        dados = consulta.validated_data

        try:
            pagina = di.get_gerenciar_pedidos_admin_use_case().listar_todos(
                status=dados['status'],
                busca=dados['search'],
                pagina=dados['page'],
                limite=dados['limit'],
            )
        except BaseErroCore as e:
            return resposta_erro(e)

        return Response({
            'orders': PedidoSerializer(pagina.pedidos, many=True).data,
            'pagination': {
                'page': pagina.pagina,
                'limit': pagina.limite,
                'total': pagina.total,
                'totalPages': pagina.total_paginas,
                'hasNext': pagina.tem_proxima,
                'hasPrev': pagina.tem_anterior,
            },
        })

    @extend_schema(request=CriarPedidoAdminSerializer)
    def post(self, request):
        serializer = CriarPedidoAdminSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'success': False, 'error': 'Dados inválidos', 'fields': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        dados = serializer.validated_data

        resultado = di.get_criar_pedido_admin_use_case().executar(
            usuario_id=str(dados['userId']),
            itens=serializer.to_itens(),
            status=dados['status'],
            forma_pagamento=dados['paymentMethod'],
            observacoes=dados.get('notes'),
            data_criacao=dados.get('createdAt'),
            novo_endereco=serializer.to_endereco(),
        )
        return resposta_resultado_pedido(resultado)


class AdminPedidoDetalheAPIView(APIView):
    """GET: detalhe de qualquer pedido. PATCH: altera o status."""
    permission_classes = [IsAdminUser]

    @extend_schema(responses=PedidoSerializer)
    def get(self, request, pk):
        try:
            pedido = di.get_gerenciar_pedidos_admin_use_case().detalhar_pedido(str(pk))
        except BaseErroCore as e:
            return resposta_erro(e)
        return Response(PedidoSerializer(pedido).data)

    @extend_schema(request=AtualizarStatusSerializer, responses=PedidoSerializer)
    def patch(self, request, pk):
        serializer = AtualizarStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            pedido = di.get_gerenciar_pedidos_admin_use_case().atualizar_status(
                str(pk), serializer.validated_data['status']
            )
        except BaseErroCore as e:
            return resposta_erro(e)
        return Response(PedidoSerializer(pedido).data)


class AdminPedidoPagamentoAPIView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(request=AtualizarPagamentoSerializer, responses=PedidoSerializer)
    def patch(self, request, pk):
        serializer = AtualizarPagamentoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            pedido = di.get_gerenciar_pedidos_admin_use_case().atualizar_forma_pagamento(
                str(pk), serializer.validated_data['paymentMethod']
            )
        except BaseErroCore as e:
            return resposta_erro(e)
        return Response(PedidoSerializer(pedido).data)
