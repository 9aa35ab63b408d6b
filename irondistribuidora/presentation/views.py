import logging

from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import status
from rest_framework.permissions import AllowAny, BasePermission, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from irondistribuidora.core.catalogo import ORDENACOES, intervalo_paginas
from irondistribuidora.core.entities import MARCAS, CATEGORIAS, CATEGORIA_DESCRICOES
from irondistribuidora.core.exceptions import (
    BaseErroCore,
    DadosInvalidosError,
    ItemNaoEncontradoError,
    AcessoNegadoError,
    PersistenciaError,
    StatusInvalidoError,
    FormaPagamentoInvalidaError,
    CancelamentoNaoPermitidoError,
)
from irondistribuidora.infrastructure import dependency_injection as di

from .serializers import (
    ConsultaCatalogoSerializer,
    CriarPedidoSerializer,
    ProdutoSerializer,
    PedidoSerializer,
)

logger = logging.getLogger(__name__)


# ====================================================================
# VIEWS: Orquestram a requisição, a execução dos casos de uso e a resposta.
# ====================================================================

def resposta_erro(erro: BaseErroCore) -> Response:
    """Traduz as exceções do Core para códigos HTTP."""
    if isinstance(erro, ItemNaoEncontradoError):
        codigo = status.HTTP_404_NOT_FOUND
    elif isinstance(erro, AcessoNegadoError):
        codigo = status.HTTP_403_FORBIDDEN
    elif isinstance(erro, (DadosInvalidosError, StatusInvalidoError, FormaPagamentoInvalidaError,
                           CancelamentoNaoPermitidoError)):
        codigo = status.HTTP_400_BAD_REQUEST
    elif isinstance(erro, PersistenciaError):
        logger.error("Erro de persistência: %s", erro)
        codigo = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        codigo = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(erro)}, status=codigo)


def resposta_resultado_pedido(resultado, mensagem_whatsapp=None, link_whatsapp=None) -> Response:
    dados = resultado.to_dict()
    if resultado.sucesso:
        if link_whatsapp:
            dados['whatsappMessage'] = mensagem_whatsapp
            dados['whatsappUrl'] = link_whatsapp
        return Response(dados, status=status.HTTP_201_CREATED)
    if resultado.erro_interno:
        return Response(dados, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(dados, status=status.HTTP_400_BAD_REQUEST)


class IsUsuarioAprovado(BasePermission):
    """Apenas usuários autenticados e aprovados pela distribuidora podem comprar."""
    message = "Usuário não aprovado"

    def has_permission(self, request, view):
        usuario = request.user
        return bool(usuario and usuario.is_authenticated and (usuario.aprovado or usuario.is_staff))


# ====================================================================
# 1. CATÁLOGO
# ====================================================================

class CatalogoAPIView(APIView):
    """
    Catálogo de peças: filtro, ordenação e paginação.
    A lista completa é carregada e processada pelo pipeline do Core.
    """
    permission_classes = [AllowAny]

    @extend_schema(
        parameters=[
            OpenApiParameter('search', str),
            OpenApiParameter('brand', str, many=True),
            OpenApiParameter('category', str, many=True),
            OpenApiParameter('inStock', bool),
            OpenApiParameter('sort', str, enum=ORDENACOES),
            OpenApiParameter('page', int),
            OpenApiParameter('limit', int),
        ],
        responses=ProdutoSerializer(many=True),
    )
    def get(self, request):
        consulta = ConsultaCatalogoSerializer.from_query_params(request.query_params)
        if not consulta.is_valid():
            return Response(consulta.errors, status=status.HTTP_400_BAD_REQUEST)

        pagina = di.get_consultar_catalogo_use_case().executar(
            filtros=consulta.to_filtros(),
            ordenacao=consulta.validated_data['sort'],
            pagina=consulta.validated_data['page'],
            itens_por_pagina=consulta.validated_data['limit'],
        )

        return Response({
            'products': ProdutoSerializer(pagina.produtos_paginados, many=True).data,
            'pagination': {
                'page': pagina.pagina,
                'limit': pagina.itens_por_pagina,
                'total': pagina.total_produtos,
                'totalPages': pagina.total_paginas,
                'hasNext': pagina.tem_proxima,
                'hasPrev': pagina.tem_anterior,
                'pages': intervalo_paginas(pagina.pagina, pagina.total_paginas),
            },
        })


class DetalheProdutoAPIView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(responses=ProdutoSerializer)
    def get(self, request, pk):
        try:
            produto = di.get_detalhar_produto_use_case().executar(str(pk))
        except BaseErroCore as e:
            return resposta_erro(e)
        return Response(ProdutoSerializer(produto).data)


class OpcoesCatalogoAPIView(APIView):
    """Listas de marcas, categorias e ordenações para os filtros do catálogo."""
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            'brands': [{'key': marca, 'label': marca} for marca in MARCAS],
            'categories': [
                {'key': chave, 'label': rotulo, 'description': CATEGORIA_DESCRICOES.get(chave, '')}
                for chave, rotulo in CATEGORIAS.items()
            ],
            'sortOptions': list(ORDENACOES),
        })


# ====================================================================
# 2. PEDIDOS DO CLIENTE
# ====================================================================

class PedidosAPIView(APIView):
    """
    GET: pedidos do usuário logado.
    POST: finalização do carrinho (pedido + link do WhatsApp).
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsUsuarioAprovado()]
        return [IsAuthenticated()]

    @extend_schema(responses=PedidoSerializer(many=True))
    def get(self, request):
        pedidos = di.get_listar_pedidos_do_usuario_use_case().executar(str(request.user.id))
        return Response({'orders': PedidoSerializer(pedidos, many=True).data})

    @extend_schema(request=CriarPedidoSerializer)
    def post(self, request):
        serializer = CriarPedidoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'success': False, 'error': 'Dados inválidos', 'fields': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        resultado = di.get_criar_pedido_use_case().executar(
            usuario_id=str(request.user.id),
            itens=serializer.to_itens(),
            cliente=serializer.to_cliente(),
            observacoes=serializer.validated_data.get('notes'),
            forma_pagamento=serializer.validated_data.get('paymentMethod'),
        )
        if not resultado.sucesso:
            return resposta_resultado_pedido(resultado)

        pedido = resultado.pedido
        produtos = {
            produto.id: produto
            for produto in di.get_produto_repository().buscar_por_ids([item.produto_id for item in pedido.itens])
        }
        gateway = di.get_whatsapp_gateway()
        mensagem = gateway.montar_mensagem_pedido(pedido, produtos)
        return resposta_resultado_pedido(resultado, mensagem, gateway.gerar_link(mensagem))


class DetalhePedidoAPIView(APIView):
    """Detalhe de um pedido do próprio usuário."""
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=PedidoSerializer)
    def get(self, request, pk):
        try:
            pedido = di.get_detalhar_pedido_do_usuario_use_case().executar(str(request.user.id), str(pk))
        except BaseErroCore as e:
            return resposta_erro(e)
        return Response(PedidoSerializer(pedido).data)


class CancelarPedidoAPIView(APIView):
    """Cancela um pedido do próprio usuário enquanto ele estiver pendente."""
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses=PedidoSerializer)
    def post(self, request, pk):
        try:
            pedido = di.get_cancelar_pedido_use_case().executar(str(request.user.id), str(pk))
        except BaseErroCore as e:
            return resposta_erro(e)
        return Response(PedidoSerializer(pedido).data)
